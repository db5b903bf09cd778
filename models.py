from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Author:
    """Author of a book. Stored by value inside each Book."""

    name: str


@dataclass(frozen=True)
class Book:
    """Represents a single book item in the library."""

    code: str
    title: str
    author: Author
    location: str
    signature: str
    available: bool

    @staticmethod
    def builder() -> "BookBuilder":
        return BookBuilder()

    def to_dict(self) -> dict:
        return {
            "code": self.code,
            "title": self.title,
            "author": self.author.name,
            "location": self.location,
            "signature": self.signature,
            "available": self.available,
        }


class BookBuilder:
    """Collects Book fields step by step; ``build()`` freezes them.

    Nothing is validated. Fields never set keep their empty defaults.
    """

    def __init__(self) -> None:
        self._code = ""
        self._title = ""
        self._author = Author("")
        self._location = ""
        self._signature = ""
        self._available = False

    def code(self, code: str) -> "BookBuilder":
        self._code = code
        return self

    def title(self, title: str) -> "BookBuilder":
        self._title = title
        return self

    def author(self, author: Author) -> "BookBuilder":
        self._author = author
        return self

    def location(self, location: str) -> "BookBuilder":
        self._location = location
        return self

    def signature(self, signature: str) -> "BookBuilder":
        self._signature = signature
        return self

    def available(self, available: bool) -> "BookBuilder":
        self._available = available
        return self

    def build(self) -> Book:
        return Book(
            code=self._code,
            title=self._title,
            author=self._author,
            location=self._location,
            signature=self._signature,
            available=self._available,
        )


@dataclass(frozen=True)
class Member:
    """A registered library member."""

    number: str
    name: str
    address: str

    def to_dict(self) -> dict:
        return {"number": self.number, "name": self.name, "address": self.address}


@dataclass(frozen=True)
class Loan:
    """A book lent to a member. Neither side is checked to exist."""

    member_number: str
    book_code: str
    loan_date: str  # free text, usually YYYY-MM-DD

    def to_dict(self) -> dict:
        return {"member_number": self.member_number, "book_code": self.book_code, "loan_date": self.loan_date}

