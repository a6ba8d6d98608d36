import logging
import sqlite3
from datetime import datetime, timezone
from typing import List, Tuple

logger = logging.getLogger(__name__)

# Fixed demo records, inserted only into an empty table.
SEED_BOOKS: List[Tuple[str, str, str]] = [
    ("The Great Gatsby", "F. Scott Fitzgerald", "A classic American novel set in the Jazz Age"),
    ("To Kill a Mockingbird", "Harper Lee", "A novel about racial injustice in the American South"),
    ("1984", "George Orwell", "A dystopian social science fiction novel"),
]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def get_db_connection(db_file: str) -> sqlite3.Connection:
    """Establishes a connection to the SQLite database."""
    conn = sqlite3.connect(db_file)
    conn.row_factory = sqlite3.Row
    return conn


def create_tables(db_file: str) -> None:
    """Creates the books table if it doesn't exist."""
    conn = get_db_connection(db_file)
    try:
        conn.execute("""
            CREATE TABLE IF NOT EXISTS books (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                title TEXT NOT NULL,
                author TEXT NOT NULL,
                description TEXT,
                created_at TEXT NOT NULL,
                updated_at TEXT
            )
        """)
        conn.execute("CREATE INDEX IF NOT EXISTS idx_books_title ON books(title)")
        conn.commit()
    finally:
        conn.close()


def seed_books(db_file: str) -> int:
    """Inserts the demo records when the books table is empty.

    Returns the number of rows inserted, so a second call on the same
    database is a no-op returning 0.
    """
    conn = get_db_connection(db_file)
    try:
        with conn:
            book_count = conn.execute("SELECT COUNT(*) FROM books").fetchone()[0]
            if book_count > 0:
                return 0
            created_at = utcnow().isoformat()
            conn.executemany(
                "INSERT INTO books (title, author, description, created_at) VALUES (?, ?, ?, ?)",
                [(title, author, description, created_at) for title, author, description in SEED_BOOKS],
            )
        logger.info("Seeded %d example books into %s", len(SEED_BOOKS), db_file)
        return len(SEED_BOOKS)
    finally:
        conn.close()


def initialize_database(db_file: str, seed: bool = True) -> int:
    """Initializes the database, creating tables and seeding demo data if needed."""
    create_tables(db_file)
    return seed_books(db_file) if seed else 0
