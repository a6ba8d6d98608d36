import logging
from typing import Any, Dict, List, Optional

import httpx

from catalog.config import settings

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """A catalog API call failed; status_code is None when the server was unreachable."""

    def __init__(self, message: str, status_code: Optional[int] = None,
                 errors: Optional[Dict[str, str]] = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.errors = errors or {}


class BookClient:
    """Synchronous client for the /books API.

    Pass an existing httpx.Client (for example FastAPI's TestClient) to reuse
    its transport; otherwise one is created for base_url.
    """

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None,
                 http: Optional[httpx.Client] = None) -> None:
        self._owns_client = http is None
        self._client = http or httpx.Client(
            base_url=base_url or settings.api_base_url,
            timeout=httpx.Timeout(timeout or settings.api_timeout, connect=5.0),
            headers={"Content-Type": "application/json"},
        )

    def _request(self, method: str, path: str, **kwargs) -> Any:
        try:
            response = self._client.request(method, f"/books{path}", **kwargs)
        except httpx.RequestError as e:
            logger.error("Error calling %s /books%s: %s", method, path, e)
            raise ApiError(f"Could not reach the catalog API: {e}") from e

        try:
            data = response.json()
        except ValueError:
            data = None

        if response.is_error:
            if response.status_code == 400 and isinstance(data, dict):
                raise ApiError("Validation failed", response.status_code, errors=data)
            message = data.get("message") if isinstance(data, dict) else None
            raise ApiError(message or f"Request failed with status {response.status_code}", response.status_code)
        return data

    @staticmethod
    def _payload(title: str, author: str, description: Optional[str]) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"title": title, "author": author}
        if description:
            payload["description"] = description
        return payload

    def get_all_books(self) -> List[Dict[str, Any]]:
        return self._request("GET", "")

    def get_book(self, book_id: int) -> Dict[str, Any]:
        return self._request("GET", f"/{book_id}")

    def create_book(self, title: str, author: str, description: Optional[str] = None) -> Dict[str, Any]:
        return self._request("POST", "", json=self._payload(title, author, description))

    def update_book(self, book_id: int, title: str, author: str,
                    description: Optional[str] = None) -> Dict[str, Any]:
        return self._request("PUT", f"/{book_id}", json=self._payload(title, author, description))

    def delete_book(self, book_id: int) -> Dict[str, Any]:
        return self._request("DELETE", f"/{book_id}")

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "BookClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
