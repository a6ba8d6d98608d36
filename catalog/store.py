import sqlite3
from contextlib import contextmanager
from typing import Iterator, List, Optional

from catalog.book import Book
from catalog.database import get_db_connection, utcnow
from catalog.exceptions import BookNotFoundError, StorageUnavailableError

_COLUMNS = "id, title, author, description, created_at, updated_at"


class BookStore:
    """SQLite-backed table of Book records keyed by id.

    A connection is opened per operation; SQLite's transaction isolation is
    the only serialization point between concurrent requests.
    """

    def __init__(self, db_file: str) -> None:
        self.db_file = db_file

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        try:
            conn = get_db_connection(self.db_file)
        except sqlite3.Error as e:
            raise StorageUnavailableError(f"Could not open database {self.db_file}: {e}") from e
        try:
            with conn:
                yield conn
        except sqlite3.Error as e:
            raise StorageUnavailableError(str(e)) from e
        finally:
            conn.close()

    @staticmethod
    def _fetch(conn: sqlite3.Connection, book_id: int) -> Optional[Book]:
        row = conn.execute(f"SELECT {_COLUMNS} FROM books WHERE id = ?", (book_id,)).fetchone()
        return Book.from_dict(dict(row)) if row else None

    def list(self) -> List[Book]:
        """All books in insertion order."""
        with self._connect() as conn:
            rows = conn.execute(f"SELECT {_COLUMNS} FROM books ORDER BY id").fetchall()
            return [Book.from_dict(dict(row)) for row in rows]

    def count(self) -> int:
        with self._connect() as conn:
            return conn.execute("SELECT COUNT(*) FROM books").fetchone()[0]

    def get(self, book_id: int) -> Optional[Book]:
        """The book with this id, or None."""
        with self._connect() as conn:
            return self._fetch(conn, book_id)

    def insert(self, title: str, author: str, description: Optional[str] = None) -> Book:
        created_at = utcnow()
        with self._connect() as conn:
            cursor = conn.execute(
                "INSERT INTO books (title, author, description, created_at) VALUES (?, ?, ?, ?)",
                (title, author, description, created_at.isoformat()),
            )
            return Book(cursor.lastrowid, title, author, description, created_at=created_at)

    def replace(self, book_id: int, title: str, author: str, description: Optional[str] = None) -> Book:
        """Overwrite the text fields of an existing book and stamp updated_at."""
        with self._connect() as conn:
            existing = self._fetch(conn, book_id)
            if existing is None:
                raise BookNotFoundError(book_id)
            updated_at = max(utcnow(), existing.created_at)
            conn.execute(
                "UPDATE books SET title = ?, author = ?, description = ?, updated_at = ? WHERE id = ?",
                (title, author, description, updated_at.isoformat(), book_id),
            )
            return Book(book_id, title, author, description,
                        created_at=existing.created_at, updated_at=updated_at)

    def remove(self, book_id: int) -> Book:
        """Hard-delete a book and return it as it was before deletion."""
        with self._connect() as conn:
            existing = self._fetch(conn, book_id)
            if existing is None:
                raise BookNotFoundError(book_id)
            conn.execute("DELETE FROM books WHERE id = ?", (book_id,))
            return existing
