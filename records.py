"""Semicolon-delimited line codecs for the record files.

Formats (one record per line, no header):

    books.txt    code;title;author;location;signature;true|false
    members.txt  number;name;address
    loans.txt    member_number;book_code;loan_date

Field values are written as-is. A value containing ``;`` or a newline
produces a line that no longer has the right number of fields, and that
record is dropped on the next read.
"""

from __future__ import annotations

from typing import Generic, Iterable, List, Optional, TypeVar

from models import Author, Book, Loan, Member

DELIMITER = ";"

T = TypeVar("T")


class RecordCodec(Generic[T]):
    """Encodes one entity type to a fixed-arity line and back."""

    arity: int = 0

    def encode(self, record: T) -> str:
        return DELIMITER.join(self.fields(record))

    def decode(self, line: str) -> Optional[T]:
        """Return the record for ``line``, or None if the field count is wrong."""
        parts = line.split(DELIMITER)
        if len(parts) != self.arity:
            return None
        return self.build(parts)

    def decode_all(self, lines: Iterable[str]) -> List[T]:
        records = []
        for line in lines:
            record = self.decode(line)
            if record is not None:
                records.append(record)
        return records

    def fields(self, record: T) -> List[str]:
        raise NotImplementedError

    def build(self, parts: List[str]) -> T:
        raise NotImplementedError


def format_bool(value: bool) -> str:
    return "true" if value else "false"


def parse_bool(text: str) -> bool:
    # Anything other than "true" (any case) reads as False
    return text.lower() == "true"


class BookCodec(RecordCodec[Book]):
    arity = 6

    def fields(self, record: Book) -> List[str]:
        return [
            record.code,
            record.title,
            record.author.name,
            record.location,
            record.signature,
            format_bool(record.available),
        ]

    def build(self, parts: List[str]) -> Book:
        code, title, author_name, location, signature, available = parts
        return (
            Book.builder()
            .code(code)
            .title(title)
            .author(Author(author_name))
            .location(location)
            .signature(signature)
            .available(parse_bool(available))
            .build()
        )


class MemberCodec(RecordCodec[Member]):
    arity = 3

    def fields(self, record: Member) -> List[str]:
        return [record.number, record.name, record.address]

    def build(self, parts: List[str]) -> Member:
        number, name, address = parts
        return Member(number=number, name=name, address=address)


class LoanCodec(RecordCodec[Loan]):
    arity = 3

    def fields(self, record: Loan) -> List[str]:
        return [record.member_number, record.book_code, record.loan_date]

    def build(self, parts: List[str]) -> Loan:
        member_number, book_code, loan_date = parts
        return Loan(member_number=member_number, book_code=book_code, loan_date=loan_date)
