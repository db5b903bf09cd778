import pytest

from library import LibraryService
from repositories import BookRepository, LoanRepository, MemberRepository
from ui_helpers import OUTPUT_MODE_ENV


@pytest.fixture(autouse=True)
def plain_output(monkeypatch):
    # set_output_mode writes to os.environ; keep each test on the default mode
    monkeypatch.setenv(OUTPUT_MODE_ENV, "plain")


@pytest.fixture
def data_dir(tmp_path):
    # Each test gets its own directory for the three record files
    path = tmp_path / "data"
    path.mkdir()
    return path


@pytest.fixture
def book_repo(data_dir):
    return BookRepository(str(data_dir / "books.txt"))


@pytest.fixture
def member_repo(data_dir):
    return MemberRepository(str(data_dir / "members.txt"))


@pytest.fixture
def loan_repo(data_dir):
    return LoanRepository(str(data_dir / "loans.txt"))


@pytest.fixture
def service(book_repo, member_repo, loan_repo):
    return LibraryService(book_repo, member_repo, loan_repo)
