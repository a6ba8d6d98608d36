import logging
from unittest.mock import MagicMock

import pytest

from catalog.exceptions import BookNotFoundError, BookValidationError, StorageUnavailableError


def test_create_then_get(lib):
    book = lib.create_book("1984", "G. Orwell")

    fetched = lib.get_book(book.id)
    assert fetched.id == book.id
    assert (fetched.title, fetched.author, fetched.description) == ("1984", "G. Orwell", None)
    assert fetched.created_at is not None
    assert fetched.updated_at is None


def test_create_stores_fields_as_submitted(lib):
    book = lib.create_book("  Dune  ", "Frank Herbert ", "  spice  ")

    fetched = lib.get_book(book.id)
    assert (fetched.title, fetched.author, fetched.description) == ("  Dune  ", "Frank Herbert ", "  spice  ")
    assert fetched == book


def test_update_stores_fields_as_submitted(lib):
    book = lib.create_book("Dune", "Frank Herbert")

    lib.update_book(book.id, " Dune Messiah ", "Frank Herbert", "")

    fetched = lib.get_book(book.id)
    assert (fetched.title, fetched.author, fetched.description) == (" Dune Messiah ", "Frank Herbert", "")


def test_create_rejects_invalid_input(lib, store):
    with pytest.raises(BookValidationError) as exc_info:
        lib.create_book("", "a" * 101, "d" * 1001)

    assert set(exc_info.value.errors) == {"title", "author", "description"}
    assert store.count() == 0


def test_missing_id_is_not_found_everywhere(lib):
    with pytest.raises(BookNotFoundError):
        lib.get_book(999)
    with pytest.raises(BookNotFoundError):
        lib.update_book(999, "Title", "Author")
    with pytest.raises(BookNotFoundError):
        lib.delete_book(999)


def test_update_keeps_id_and_created_at(lib):
    book = lib.create_book("Old Title", "Old Author", "Old")

    updated = lib.update_book(book.id, "New Title", "New Author")

    assert updated.id == book.id
    assert updated.created_at == book.created_at
    assert updated.updated_at >= updated.created_at
    assert updated.description is None
    assert lib.get_book(book.id) == updated


def test_update_validates_before_checking_existence(lib):
    with pytest.raises(BookValidationError) as exc_info:
        lib.update_book(999, "", "Author")
    assert exc_info.value.errors == {"title": "Title is required"}


def test_delete_then_get_is_not_found(lib, store):
    lib.create_book("Keep", "Author")
    book = lib.create_book("Remove", "Author")
    before = store.count()

    deleted = lib.delete_book(book.id)

    assert deleted.title == "Remove"
    assert store.count() == before - 1
    with pytest.raises(BookNotFoundError):
        lib.get_book(book.id)


def test_list_books(lib):
    assert lib.list_books() == []
    lib.create_book("A", "Author")
    lib.create_book("B", "Author")
    assert [b.title for b in lib.list_books()] == ["A", "B"]


def test_storage_errors_propagate_and_are_logged(lib, monkeypatch, caplog):
    monkeypatch.setattr(lib.store, "list", MagicMock(side_effect=StorageUnavailableError("disk I/O error")))

    with caplog.at_level(logging.ERROR, logger="catalog.library"):
        with pytest.raises(StorageUnavailableError):
            lib.list_books()

    assert "Error occurred while fetching books" in caplog.text


def test_uses_injected_logger(store):
    from catalog.library import Library

    log = MagicMock(spec=logging.Logger)
    Library(store, log=log).create_book("Title", "Author")

    log.info.assert_any_call("Successfully created book with ID: %s", 1)
