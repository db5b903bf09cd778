import json
import logging
import sys
from dataclasses import replace
from typing import List, Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.markup import escape
from rich import box
import typer

from config import settings
from library import LibraryService, build_service
from storage import StorageResult
from ui_helpers import get_output_mode, set_output_mode, print_members, print_books, print_loans


def resolve_log_level(name: str, debug: bool = False) -> int:
    """Map a level name to a logging level; unknown names fall back to INFO."""
    if debug:
        return logging.DEBUG
    level = getattr(logging, (name or "").upper(), None)
    return level if isinstance(level, int) else logging.INFO


logging.basicConfig(
    level=resolve_log_level(settings.log_level, settings.debug),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

APP_NAME = settings.app_name

console = Console()


def _announce_change() -> None:
    # JSON output stays machine readable
    if get_output_mode() == "json":
        return
    console.print("[dim]Data updated in the repositories.[/]")


def create_service(data_dir: Optional[str] = None) -> LibraryService:
    """Build the service for this process, optionally on another data directory."""
    cfg = replace(settings, data_dir=data_dir) if data_dir else settings
    logger.debug(f"Starting {cfg.app_name} {cfg.app_version} on {cfg.data_dir}")
    service = build_service(cfg)
    if cfg.enable_change_notices:
        service.subscribe(_announce_change)
    return service


def _report(result: StorageResult, message: str) -> None:
    if get_output_mode() == "json":
        print(json.dumps({"ok": result.ok, "message": message if result.ok else None, "error": result.error}, ensure_ascii=False))
    elif result.ok:
        print(message)
    else:
        print(f"Warning: the change could not be saved ({result.error})")


# --- Typer CLI app ---
app = typer.Typer(help="Library manager for books, members and loans")


@app.callback()
def _global_options(
    ctx: typer.Context,
    output: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output format: plain | json | rich (default: plain)",
    ),
    data_dir: Optional[str] = typer.Option(
        None,
        "--data-dir",
        help="Directory holding books.txt, members.txt and loans.txt",
    ),
):
    """Global CLI options (output mode, data directory)."""
    if output:
        set_output_mode(output)
    ctx.obj = create_service(data_dir)


@app.command("add-member")
def cli_add_member(ctx: typer.Context, number: str, name: str, address: str):
    """Register a library member."""
    _report(ctx.obj.register_member(number, name, address), "Member registered successfully.")


@app.command("add-book")
def cli_add_book(
    ctx: typer.Context,
    code: str,
    title: str,
    author: str,
    location: str,
    signature: str,
    available: bool = typer.Option(True, "--available/--unavailable", help="Whether the book can be lent"),
):
    """Register a book."""
    result = ctx.obj.register_book(code, title, author, location, signature, available)
    _report(result, "Book registered successfully.")


@app.command("add-loan")
def cli_add_loan(ctx: typer.Context, member_number: str, book_code: str, date: str):
    """Register a loan (date as free text, e.g. YYYY-MM-DD)."""
    _report(ctx.obj.register_loan(member_number, book_code, date), "Loan registered successfully.")


@app.command("remove-member")
def cli_remove_member(ctx: typer.Context, number: str):
    """Remove every member with the given number."""
    _report(ctx.obj.remove_member(number), "Member removed successfully.")


@app.command("remove-book")
def cli_remove_book(ctx: typer.Context, code: str):
    """Remove every book with the given code."""
    _report(ctx.obj.remove_book(code), "Book removed successfully.")


@app.command("remove-loan")
def cli_remove_loan(ctx: typer.Context, book_code: str):
    """Remove every loan of the given book."""
    _report(ctx.obj.remove_loan(book_code), "Loan removed successfully.")


@app.command("members")
def cli_members(ctx: typer.Context):
    """List all members."""
    print_members(ctx.obj.list_members())


@app.command("books")
def cli_books(ctx: typer.Context):
    """List all books."""
    print_books(ctx.obj.list_books())


@app.command("loans")
def cli_loans(ctx: typer.Context):
    """List all loans."""
    print_loans(ctx.obj.list_loans())


@app.command("menu")
def cli_menu(ctx: typer.Context):
    """Open the interactive menu."""
    run_menu(ctx.obj)


# --- Interactive forms ---
def _ask(label: str) -> Optional[str]:
    """Prompt for one value. None means the user cancelled (Ctrl+C / end of input)."""
    try:
        return Prompt.ask(label, default="", show_default=False)
    except (KeyboardInterrupt, EOFError):
        return None


def _ask_all(labels: List[str]) -> Optional[List[str]]:
    values = []
    for label in labels:
        value = _ask(label)
        if value is None:
            return None
        values.append(value)
    return values


def _confirm(label: str, default: bool) -> Optional[bool]:
    try:
        return Confirm.ask(label, default=default)
    except (KeyboardInterrupt, EOFError):
        return None


def _cancelled() -> None:
    console.print("\n[blue]Operation cancelled.[/]")


def _report_form(result: StorageResult, message: str) -> None:
    if result.ok:
        console.print(Panel.fit(f"[green]{message}[/]", border_style="green"))
    else:
        console.print(f"[bold yellow]The change could not be saved:[/] {escape(result.error or '')}")


def register_member(service: LibraryService) -> None:
    values = _ask_all(["Member number (ID)", "Member name", "Member address"])
    if values is None:
        _cancelled()
        return
    _report_form(service.register_member(*values), "Member registered successfully")


def register_book(service: LibraryService) -> None:
    values = _ask_all(["Book code", "Book title", "Author name", "Book location", "Book signature"])
    if values is None:
        _cancelled()
        return
    available = _confirm("Is the book available?", default=True)
    if available is None:
        _cancelled()
        return
    code, title, author, location, signature = values
    _report_form(
        service.register_book(code, title, author, location, signature, available),
        "Book registered successfully",
    )


def register_loan(service: LibraryService) -> None:
    values = _ask_all(["Member number (ID)", "Book code", "Loan date (YYYY-MM-DD)"])
    if values is None:
        _cancelled()
        return
    _report_form(service.register_loan(*values), "Loan registered successfully")


def remove_member(service: LibraryService) -> None:
    number = _ask("Number of the member to remove")
    if number is None:
        _cancelled()
        return
    member = service.find_member(number)
    if member is None:
        console.print(f"[yellow]No member with number [bold]{escape(number)}[/] was found.[/]")
        return
    console.print(Panel(
        f"[bold]Number:[/] {escape(member.number)}\n"
        f"[bold]Name:[/] {escape(member.name)}\n"
        f"[bold]Address:[/] {escape(member.address)}",
        title="Member to remove",
        border_style="yellow",
    ))
    if _confirm("Remove this member?", default=False):
        _report_form(service.remove_member(number), "Member removed successfully")
    else:
        _cancelled()


def remove_book(service: LibraryService) -> None:
    code = _ask("Code of the book to remove")
    if code is None:
        _cancelled()
        return
    book = service.find_book(code)
    if book is None:
        console.print(f"[yellow]No book with code [bold]{escape(code)}[/] was found.[/]")
        return
    console.print(Panel(
        f"[bold]Title:[/] {escape(book.title)}\n"
        f"[bold]Author:[/] {escape(book.author.name)}\n"
        f"[bold]Code:[/] {escape(book.code)}",
        title="Book to remove",
        border_style="yellow",
    ))
    if _confirm("Remove this book?", default=False):
        _report_form(service.remove_book(code), "Book removed successfully")
    else:
        _cancelled()


def remove_loan(service: LibraryService) -> None:
    code = _ask("Code of the returned book")
    if code is None:
        _cancelled()
        return
    _report_form(service.remove_loan(code), "Loan removed successfully")


def run_menu(service: LibraryService) -> None:
    """Simple interactive menu over the library service."""
    actions = {
        "1": lambda: register_member(service),
        "2": lambda: register_book(service),
        "3": lambda: register_loan(service),
        "4": lambda: remove_member(service),
        "5": lambda: remove_book(service),
        "6": lambda: remove_loan(service),
        "7": lambda: print_members(service.list_members()),
        "8": lambda: print_books(service.list_books()),
        "9": lambda: print_loans(service.list_loans()),
    }

    def render_menu() -> None:
        menu_items = [
            ("1", "Register member"),
            ("2", "Register book"),
            ("3", "Register loan"),
            ("4", "Remove member"),
            ("5", "Remove book"),
            ("6", "Remove loan"),
            ("7", "View members"),
            ("8", "View books"),
            ("9", "View loans"),
            ("0", "Exit"),
        ]

        table = Table.grid(padding=(0, 2))
        table.add_column(justify="right", style="bold cyan", width=4)
        table.add_column(justify="left", style="white")
        for key, label in menu_items:
            table.add_row(f"[reverse]{key}[/]", label)

        console.print(Panel(
            table,
            title=APP_NAME,
            border_style="cyan",
            box=box.HEAVY,
            padding=(1, 2),
        ))

    while True:
        render_menu()
        try:
            choice = Prompt.ask("Choose an option", choices=["1", "2", "3", "4", "5", "6", "7", "8", "9", "0"], default="0")
        except (KeyboardInterrupt, EOFError):
            choice = "0"

        if choice == "0":
            console.print("[green]Goodbye![/]")
            break
        actions[choice]()
        print()  # blank line between operations


def run() -> None:
    """Commands when arguments are given, otherwise the interactive menu."""
    if len(sys.argv) > 1:
        app()
    else:
        run_menu(create_service())


if __name__ == "__main__":
    run()
