from typing import Dict


class LibraryError(Exception):
    """Base exception for catalog errors."""


class BookValidationError(LibraryError, ValueError):
    """Create/update payload broke one or more field rules."""

    def __init__(self, errors: Dict[str, str]) -> None:
        self.errors = dict(errors)
        super().__init__("; ".join(f"{field}: {message}" for field, message in self.errors.items()))


class BookNotFoundError(LibraryError, LookupError):
    """Requested book id does not exist in the catalog."""

    def __init__(self, book_id: int) -> None:
        self.book_id = book_id
        super().__init__(f"Book with ID {book_id} not found")


class StorageUnavailableError(LibraryError):
    """The underlying database could not be read or written."""
