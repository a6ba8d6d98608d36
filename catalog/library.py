import logging
from typing import List, Optional

from catalog.book import Book
from catalog.exceptions import BookNotFoundError, BookValidationError, StorageUnavailableError
from catalog.store import BookStore
from catalog.validators import validate_book_input

logger = logging.getLogger(__name__)


class Library:
    """The five catalog operations over a BookStore.

    Holds no state between calls besides the store handle. Writes are
    validated before the store is touched, so an update with bad fields on a
    missing id reports the validation failure.
    """

    def __init__(self, store: BookStore, log: Optional[logging.Logger] = None) -> None:
        self.store = store
        self.log = log or logger

    # ------------------------- Reads ------------------------- #
    def list_books(self) -> List[Book]:
        self.log.info("Fetching all books from database")
        try:
            books = self.store.list()
        except StorageUnavailableError:
            self.log.exception("Error occurred while fetching books")
            raise
        self.log.info("Successfully retrieved %d books", len(books))
        return books

    def get_book(self, book_id: int) -> Book:
        self.log.info("Fetching book with ID: %s", book_id)
        try:
            book = self.store.get(book_id)
        except StorageUnavailableError:
            self.log.exception("Error occurred while fetching book with ID: %s", book_id)
            raise
        if book is None:
            self.log.warning("Book with ID %s not found", book_id)
            raise BookNotFoundError(book_id)
        self.log.info("Successfully retrieved book: %s", book.title)
        return book

    # ------------------------- Writes ------------------------- #
    def _validated(self, title: Optional[str], author: Optional[str], description: Optional[str]):
        errors = validate_book_input(title, author, description)
        if errors:
            raise BookValidationError(errors)
        return title, author, description

    def create_book(self, title: Optional[str], author: Optional[str], description: Optional[str] = None) -> Book:
        try:
            fields = self._validated(title, author, description)
        except BookValidationError as e:
            self.log.warning("Invalid input for create request: %s", e)
            raise
        self.log.info("Creating new book: %s", fields[0])
        try:
            book = self.store.insert(*fields)
        except StorageUnavailableError:
            self.log.exception("Error occurred while creating book")
            raise
        self.log.info("Successfully created book with ID: %s", book.id)
        return book

    def update_book(self, book_id: int, title: Optional[str], author: Optional[str],
                    description: Optional[str] = None) -> Book:
        try:
            fields = self._validated(title, author, description)
        except BookValidationError as e:
            self.log.warning("Invalid input for update request (ID: %s): %s", book_id, e)
            raise
        self.log.info("Updating book with ID: %s", book_id)
        try:
            book = self.store.replace(book_id, *fields)
        except BookNotFoundError:
            self.log.warning("Book with ID %s not found for update", book_id)
            raise
        except StorageUnavailableError:
            self.log.exception("Error occurred while updating book with ID: %s", book_id)
            raise
        self.log.info("Successfully updated book with ID: %s", book_id)
        return book

    def delete_book(self, book_id: int) -> Book:
        """Remove a book; returns the deleted record for confirmation messages."""
        self.log.info("Deleting book with ID: %s", book_id)
        try:
            book = self.store.remove(book_id)
        except BookNotFoundError:
            self.log.warning("Book with ID %s not found for deletion", book_id)
            raise
        except StorageUnavailableError:
            self.log.exception("Error occurred while deleting book with ID: %s", book_id)
            raise
        self.log.info("Successfully deleted book with ID: %s", book_id)
        return book

    def close(self) -> None:
        """Connections are opened per operation, so there is nothing to release."""
        return None
