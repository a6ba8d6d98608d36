import httpx
import pytest

from catalog.client import ApiError, BookClient


@pytest.fixture
def book_client(client):
    return BookClient(http=client)


def test_crud_roundtrip(book_client):
    created = book_client.create_book("Dune", "Frank Herbert", "Arrakis")
    assert created["description"] == "Arrakis"

    assert book_client.get_book(created["id"]) == created
    assert created in book_client.get_all_books()

    updated = book_client.update_book(created["id"], "Dune Messiah", "Frank Herbert")
    assert updated["title"] == "Dune Messiah"
    assert "description" not in updated

    result = book_client.delete_book(created["id"])
    assert result["id"] == created["id"]


def test_not_found_raises_api_error(book_client):
    with pytest.raises(ApiError) as exc_info:
        book_client.get_book(999999)
    assert exc_info.value.status_code == 404
    assert str(exc_info.value) == "Book with ID 999999 not found"


def test_validation_error_carries_field_messages(book_client):
    with pytest.raises(ApiError) as exc_info:
        book_client.create_book("", "Author")
    assert exc_info.value.status_code == 400
    assert exc_info.value.errors == {"title": "Title is required"}


def test_unreachable_server():
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    http = httpx.Client(base_url="http://catalog.invalid", transport=httpx.MockTransport(refuse))
    with BookClient(http=http) as book_client:
        with pytest.raises(ApiError) as exc_info:
            book_client.get_all_books()
    assert exc_info.value.status_code is None
    http.close()
