import logging
import os
from typing import List, Optional

from config import Settings, settings as default_settings
from models import Author, Book, Loan, Member
from notifications import Observer
from repositories import BookRepository, LoanRepository, MemberRepository
from storage import StorageResult

logger = logging.getLogger(__name__)


class LibraryService:
    """Registers, removes and lists books, members and loans.

    Inputs are stored exactly as given: no validation and no check that a
    loan's member or book exists.
    """

    def __init__(
        self,
        book_repository: BookRepository,
        member_repository: MemberRepository,
        loan_repository: LoanRepository,
    ) -> None:
        self.book_repository = book_repository
        self.member_repository = member_repository
        self.loan_repository = loan_repository

    # ------------------------- Members ------------------------- #
    def register_member(self, number: str, name: str, address: str) -> StorageResult:
        return self.member_repository.save(Member(number=number, name=name, address=address))

    def remove_member(self, number: str) -> StorageResult:
        return self.member_repository.delete(number)

    def list_members(self) -> List[Member]:
        return self.member_repository.list_all()

    def find_member(self, number: str) -> Optional[Member]:
        return self.member_repository.find(number)

    # ------------------------- Books ------------------------- #
    def register_book(
        self,
        code: str,
        title: str,
        author_name: str,
        location: str,
        signature: str,
        available: bool,
    ) -> StorageResult:
        book = (
            Book.builder()
            .code(code)
            .title(title)
            .author(Author(author_name))
            .location(location)
            .signature(signature)
            .available(available)
            .build()
        )
        return self.book_repository.save(book)

    def remove_book(self, code: str) -> StorageResult:
        return self.book_repository.delete(code)

    def list_books(self) -> List[Book]:
        return self.book_repository.list_all()

    def find_book(self, code: str) -> Optional[Book]:
        return self.book_repository.find(code)

    # ------------------------- Loans ------------------------- #
    def register_loan(self, member_number: str, book_code: str, date: str) -> StorageResult:
        return self.loan_repository.save(Loan(member_number=member_number, book_code=book_code, loan_date=date))

    def remove_loan(self, book_code: str) -> StorageResult:
        """Drop every loan of ``book_code``, whichever member holds it."""
        return self.loan_repository.delete(book_code)

    def list_loans(self) -> List[Loan]:
        return self.loan_repository.list_all()

    # ------------------------- Notification ------------------------- #
    def subscribe(self, observer: Observer) -> Observer:
        """Subscribe ``observer`` to changes in all three repositories."""
        for repository in (self.book_repository, self.member_repository, self.loan_repository):
            repository.subscribe(observer)
        return observer


def build_service(settings: Optional[Settings] = None) -> LibraryService:
    """Create the data directory, one repository per entity and the service."""
    settings = settings or default_settings
    if settings.data_dir:
        os.makedirs(settings.data_dir, exist_ok=True)
    logger.debug(f"Using data directory {os.path.abspath(settings.data_dir)}")
    return LibraryService(
        BookRepository(settings.books_path, encoding=settings.file_encoding),
        MemberRepository(settings.members_path, encoding=settings.file_encoding),
        LoanRepository(settings.loans_path, encoding=settings.file_encoding),
    )
