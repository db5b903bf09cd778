import os
from dataclasses import dataclass
from typing import Optional
from dotenv import load_dotenv

load_dotenv()

@dataclass
class Settings:
    # Application settings
    app_name: str = os.getenv("APP_NAME", "Library Manager")
    app_version: str = os.getenv("APP_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "False").lower() in ("true", "1", "yes")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # Flat file storage
    data_dir: str = os.getenv("LIBRARY_DATA_DIR", ".")
    books_file: str = os.getenv("LIBRARY_BOOKS_FILE", "books.txt")
    members_file: str = os.getenv("LIBRARY_MEMBERS_FILE", "members.txt")
    loans_file: str = os.getenv("LIBRARY_LOANS_FILE", "loans.txt")
    # None means the platform default text encoding
    file_encoding: Optional[str] = os.getenv("LIBRARY_FILE_ENCODING") or None

    # Presentation
    enable_change_notices: bool = os.getenv("ENABLE_CHANGE_NOTICES", "True").lower() in ("true", "1", "yes")

    @property
    def books_path(self) -> str:
        return os.path.join(self.data_dir, self.books_file)

    @property
    def members_path(self) -> str:
        return os.path.join(self.data_dir, self.members_file)

    @property
    def loans_path(self) -> str:
        return os.path.join(self.data_dir, self.loans_file)


settings = Settings()
