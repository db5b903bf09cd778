import os
import json
from typing import List, Any, Sequence, Tuple
from rich.console import Console
from rich.table import Table

# Environment variable to control CLI output mode
# Allowed values: 'plain' (default), 'json', 'rich'
OUTPUT_MODE_ENV = "LIB_CLI_OUTPUT"

_console = Console()

# (header, attribute getter, plain column width)
Column = Tuple[str, Any, int]

MEMBER_COLUMNS: List[Column] = [
    ("Number", lambda m: m.number, 10),
    ("Name", lambda m: m.name, 20),
    ("Address", lambda m: m.address, 30),
]

BOOK_COLUMNS: List[Column] = [
    ("Code", lambda b: b.code, 10),
    ("Title", lambda b: b.title, 30),
    ("Author", lambda b: b.author.name, 20),
    ("Location", lambda b: b.location, 20),
    ("Signature", lambda b: b.signature, 15),
    ("Available", lambda b: "Yes" if b.available else "No", 10),
]

LOAN_COLUMNS: List[Column] = [
    ("Member Number", lambda l: l.member_number, 15),
    ("Book Code", lambda l: l.book_code, 15),
    ("Loan Date", lambda l: l.loan_date, 20),
]


def set_output_mode(mode: str) -> None:
    mode = (mode or "").lower().strip()
    if mode in {"plain", "json", "rich"}:
        os.environ[OUTPUT_MODE_ENV] = mode
    # Unknown values are ignored; the current mode stays


def get_output_mode() -> str:
    return os.environ.get(OUTPUT_MODE_ENV, "plain").lower()


def _plain_row(columns: Sequence[Column], values: Sequence[str]) -> str:
    return " ".join(f"{value:<{width}}" for (_, _, width), value in zip(columns, values)).rstrip()


def print_records(title: str, records: List[Any], columns: Sequence[Column], empty_message: str) -> None:
    """Print records in the current output mode.
    - plain: title, header and fixed-width columns, or ``empty_message``
    - json: JSON array of each record's ``to_dict()``
    - rich: Rich table
    """
    mode = get_output_mode()

    if mode == "json":
        print(json.dumps([r.to_dict() for r in records], ensure_ascii=False))
        return

    if not records:
        print(empty_message)
        return

    if mode == "rich":
        table = Table(title=title, show_lines=True, header_style="bold cyan")
        for header, _, _ in columns:
            table.add_column(header, style="white")
        for r in records:
            table.add_row(*(str(getter(r)) for _, getter, _ in columns))
        _console.print(table)
    else:
        header = _plain_row(columns, [h for h, _, _ in columns])
        print(title)
        print(header)
        print("-" * len(header))
        for r in records:
            print(_plain_row(columns, [str(getter(r)) for _, getter, _ in columns]))


def print_members(members: List[Any]) -> None:
    print_records("Members", members, MEMBER_COLUMNS, "No members registered.")


def print_books(books: List[Any]) -> None:
    print_records("Books", books, BOOK_COLUMNS, "No books in library.")


def print_loans(loans: List[Any]) -> None:
    print_records("Loans", loans, LOAN_COLUMNS, "No loans registered.")
