"""Flat file repositories for books, members and loans.

Each repository owns exactly one record file and one change notifier.
Repositories are plain objects: the application builds one per entity at
start-up and hands them to whoever needs them.
"""

from __future__ import annotations

import logging
from typing import Callable, Generic, List, Optional, TypeVar

from models import Book, Loan, Member
from notifications import ChangeNotifier, Observer
from records import BookCodec, LoanCodec, MemberCodec, RecordCodec
from storage import StorageResult, read_lines, write_file

logger = logging.getLogger(__name__)

T = TypeVar("T")


class FlatFileRepository(Generic[T]):
    """Save/list/delete for one entity type backed by a single text file."""

    def __init__(
        self,
        file_name: str,
        codec: RecordCodec[T],
        identifier: Callable[[T], str],
        encoding: Optional[str] = None,
    ) -> None:
        self.file_name = file_name
        self.codec = codec
        self.encoding = encoding
        self._identifier = identifier
        self._notifier = ChangeNotifier()

    # ------------------------- Core operations ------------------------- #
    def save(self, record: T) -> StorageResult:
        """Append one record to the file and notify observers."""
        result = write_file(self.file_name, self.codec.encode(record) + "\n", append=True, encoding=self.encoding)
        if not result.ok:
            return result
        logger.info(f"Saved record {self._identifier(record)!r} to {self.file_name}")
        self._notifier.notify()
        return result

    def list_all(self) -> List[T]:
        """All decodable records in file order. Malformed lines are skipped."""
        return self.codec.decode_all(read_lines(self.file_name, encoding=self.encoding).lines)

    def find(self, identifier: str) -> Optional[T]:
        for record in self.list_all():
            if self._identifier(record) == identifier:
                return record
        return None

    def delete(self, identifier: str) -> StorageResult:
        """Rewrite the file without any record matching ``identifier``.

        The file is rewritten and observers are notified even when nothing
        matched. If the file cannot be read, nothing is rewritten.
        """
        current = read_lines(self.file_name, encoding=self.encoding)
        if not current.ok:
            return current
        records = self.codec.decode_all(current.lines)
        kept = [record for record in records if self._identifier(record) != identifier]
        content = "".join(self.codec.encode(record) + "\n" for record in kept)
        result = write_file(self.file_name, content, append=False, encoding=self.encoding)
        if not result.ok:
            return result
        logger.info(f"Deleted {len(records) - len(kept)} record(s) matching {identifier!r} from {self.file_name}")
        self._notifier.notify()
        return result

    # ------------------------- Change notification ------------------------- #
    def subscribe(self, observer: Observer) -> Observer:
        return self._notifier.subscribe(observer)

    def unsubscribe(self, observer: Observer) -> bool:
        return self._notifier.unsubscribe(observer)


class BookRepository(FlatFileRepository[Book]):
    """Books, identified by code."""

    def __init__(self, file_name: str = "books.txt", encoding: Optional[str] = None) -> None:
        super().__init__(file_name, BookCodec(), lambda book: book.code, encoding=encoding)


class MemberRepository(FlatFileRepository[Member]):
    """Members, identified by member number."""

    def __init__(self, file_name: str = "members.txt", encoding: Optional[str] = None) -> None:
        super().__init__(file_name, MemberCodec(), lambda member: member.number, encoding=encoding)


class LoanRepository(FlatFileRepository[Loan]):
    """Loans. Deletion matches on the book code only."""

    def __init__(self, file_name: str = "loans.txt", encoding: Optional[str] = None) -> None:
        super().__init__(file_name, LoanCodec(), lambda loan: loan.book_code, encoding=encoding)
