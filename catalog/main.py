import subprocess
import sys
import webbrowser
from typing import Dict, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm

from catalog.client import ApiError, BookClient
from catalog.config import configure_logging, settings
from catalog.database import initialize_database
from catalog.ui_helpers import print_book_result, print_list_result, set_output_mode
from catalog.validators import normalize_book_input, validate_book_input

console = Console()

app = typer.Typer(help="Library catalog CLI")


def get_client() -> BookClient:
    """Client for the configured API; replaced in tests."""
    return BookClient()


def _print_field_errors(errors: Dict[str, str]) -> None:
    for field, message in errors.items():
        console.print(f"[red]{field}: {escape(message)}[/]")


def _fail(message: str, error: Optional[ApiError] = None) -> None:
    console.print(f"[bold red]{escape(message)}[/]")
    if error is not None:
        if error.errors:
            _print_field_errors(error.errors)
        else:
            console.print(f"[dim]{escape(str(error))}[/]")
    raise typer.Exit(code=1)


def _checked_fields(title: str, author: str, description: Optional[str]):
    """Run the same field rules as the server before sending anything."""
    errors = validate_book_input(title, author, description)
    if errors:
        _print_field_errors(errors)
        raise typer.Exit(code=1)
    return normalize_book_input(title, author, description)


@app.callback()
def _global_options(
    output: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output format: plain | json | rich (default: plain)",
    ),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Logging level, e.g. DEBUG"),
):
    """Global CLI options (output mode, logging)."""
    if output:
        set_output_mode(output)
    configure_logging(log_level or "WARNING")


@app.command("list")
def cli_list():
    """List all books."""
    with get_client() as client:
        try:
            books = client.get_all_books()
        except ApiError as e:
            _fail("Failed to load books. Please make sure the backend is running.", e)
    print_list_result(books)


@app.command("show")
def cli_show(book_id: int = typer.Argument(..., help="Book ID")):
    """Show one book."""
    with get_client() as client:
        try:
            book = client.get_book(book_id)
        except ApiError as e:
            _fail(f"Failed to load book {book_id}.", e)
    print_book_result(book)


@app.command("add")
def cli_add(
    title: str = typer.Option(..., "--title", "-t", prompt=True, help="Book title"),
    author: str = typer.Option(..., "--author", "-a", prompt=True, help="Author name"),
    description: Optional[str] = typer.Option(None, "--description", "-d", help="Optional description"),
):
    """Add a new book."""
    fields = _checked_fields(title, author, description)
    with get_client() as client:
        try:
            book = client.create_book(*fields)
        except ApiError as e:
            _fail("Failed to create book. Please try again.", e)
    print(f"Book added successfully! (ID: {book['id']})")


@app.command("edit")
def cli_edit(
    book_id: int = typer.Argument(..., help="Book ID"),
    title: Optional[str] = typer.Option(None, "--title", "-t", help="New title (default: keep current)"),
    author: Optional[str] = typer.Option(None, "--author", "-a", help="New author (default: keep current)"),
    description: Optional[str] = typer.Option(
        None, "--description", "-d", help="New description; pass an empty string to clear it"
    ),
):
    """Edit a book; unspecified fields keep their current values."""
    with get_client() as client:
        try:
            current = client.get_book(book_id)
        except ApiError as e:
            _fail(f"Failed to load book {book_id}.", e)

        fields = _checked_fields(
            current["title"] if title is None else title,
            current["author"] if author is None else author,
            current.get("description") if description is None else description,
        )
        try:
            client.update_book(book_id, *fields)
        except ApiError as e:
            _fail("Failed to update book. Please try again.", e)
    print("Book updated successfully!")


@app.command("delete")
def cli_delete(
    book_id: int = typer.Argument(..., help="Book ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt"),
):
    """Delete a book after confirmation."""
    with get_client() as client:
        try:
            book = client.get_book(book_id)
        except ApiError as e:
            _fail(f"Failed to load book {book_id}.", e)

        question = f'Are you sure you want to delete "{escape(book["title"])}" by {escape(book["author"])}?'
        if not yes and not Confirm.ask(question, console=console):
            print("Cancelled.")
            return

        try:
            result = client.delete_book(book_id)
        except ApiError as e:
            _fail("Failed to delete book. Please try again.", e)
    print(result["message"])


@app.command("init-db")
def cli_init_db(
    db_file: Optional[str] = typer.Option(None, "--db-file", help="SQLite file (default: LIBRARY_DB_FILE)"),
    seed: bool = typer.Option(True, "--seed/--no-seed", help="Insert example books into an empty table"),
):
    """Create the books table and seed example data if empty."""
    target = db_file or settings.database_file
    seeded = initialize_database(target, seed=seed)
    print(f"Database ready at {target} ({seeded} example books added).")


@app.command("serve")
def cli_serve(
    host: str = typer.Option(settings.api_host, "--host", help="Bind address"),
    port: int = typer.Option(settings.api_port, "--port", help="Port"),
    open_browser: bool = typer.Option(True, "--open/--no-open", help="Open the web UI in a browser"),
):
    """Start the API and web UI with uvicorn."""
    url = f"http://{host}:{port}"
    print(f"Starting web UI on {url}")
    if open_browser:
        webbrowser.open(url)
    subprocess.run(
        [sys.executable, "-m", "uvicorn", "catalog.api:app", "--host", host, "--port", str(port)],
        check=False,
    )


if __name__ == "__main__":
    app()
