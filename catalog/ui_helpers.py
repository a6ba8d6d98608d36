import json
import os
from datetime import datetime
from typing import Any, Dict, List

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

# Environment variable to control CLI output mode
# Allowed values: 'plain' (default), 'json', 'rich'
OUTPUT_MODE_ENV = "CATALOG_CLI_OUTPUT"

_console = Console()


def set_output_mode(mode: str) -> None:
    mode = (mode or "").lower().strip()
    if mode in {"plain", "json", "rich"}:
        os.environ[OUTPUT_MODE_ENV] = mode


def get_output_mode() -> str:
    return os.environ.get(OUTPUT_MODE_ENV, "plain").lower()


def _date(value: Any) -> str:
    if not value:
        return ""
    return datetime.fromisoformat(value).strftime("%Y-%m-%d")


def print_list_result(books: List[Dict[str, Any]]) -> None:
    """Print the book list in the current output mode.
    - plain: '#ID Title by Author' lines, or 'No books in the library.'
    - json: the API payload as a JSON array
    - rich: Rich table
    """
    mode = get_output_mode()

    if mode == "json":
        print(json.dumps(books, ensure_ascii=False))
        return

    if not books:
        print("No books in the library.")
        return

    if mode == "rich":
        table = Table(title=f"Total Books: {len(books)}", show_lines=True, header_style="bold cyan")
        table.add_column("ID", style="magenta", no_wrap=True)
        table.add_column("Title", style="white")
        table.add_column("Author", style="white")
        table.add_column("Added", style="dim")
        table.add_column("Updated", style="dim")
        for b in books:
            table.add_row(str(b["id"]), escape(b["title"]), escape(b["author"]), _date(b.get("createdAt")), _date(b.get("updatedAt")))
        _console.print(table)
    else:
        for b in books:
            print(f"#{b['id']} {b['title']} by {b['author']}")
        print(f"Total Books: {len(books)}")


def print_book_result(book: Dict[str, Any]) -> None:
    """Print a single book in the current output mode."""
    mode = get_output_mode()

    if mode == "json":
        print(json.dumps(book, ensure_ascii=False))
    elif mode == "rich":
        lines = [f"[bold]Author:[/] {escape(book['author'])}"]
        if book.get("description"):
            lines.append(escape(book["description"]))
        lines.append(f"[dim]Added: {_date(book.get('createdAt'))}[/]")
        if book.get("updatedAt"):
            lines.append(f"[dim]Updated: {_date(book['updatedAt'])}[/]")
        _console.print(Panel.fit("\n".join(lines), title=f"#{book['id']} {escape(book['title'])}", border_style="blue"))
    else:
        print(f"ID: {book['id']}")
        print(f"Title: {book['title']}")
        print(f"Author: {book['author']}")
        if book.get("description"):
            print(f"Description: {book['description']}")
        print(f"Added: {book.get('createdAt')}")
        if book.get("updatedAt"):
            print(f"Updated: {book['updatedAt']}")
