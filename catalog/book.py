from __future__ import annotations

from datetime import datetime


def _parse_timestamp(value: datetime | str | None) -> datetime | None:
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(value)


class Book:
    """Represents a single book record in the catalog."""

    def __init__(self, id: int, title: str, author: str, description: str | None = None,
                 created_at: datetime | str | None = None, updated_at: datetime | str | None = None) -> None:
        self.id = id
        self.title = title
        self.author = author
        self.description = description
        self.created_at = _parse_timestamp(created_at)
        self.updated_at = _parse_timestamp(updated_at)

    def __str__(self) -> str:  # pragma: no cover - string formatting trivial
        return f"#{self.id} {self.title} by {self.author}"

    def __repr__(self) -> str:  # pragma: no cover
        return f"Book(id={self.id!r}, title={self.title!r}, author={self.author!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Book):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "author": self.author,
            "description": self.description,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    @staticmethod
    def from_dict(data: dict) -> "Book":
        return Book(
            id=data["id"],
            title=data["title"],
            author=data["author"],
            description=data.get("description"),
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
        )
