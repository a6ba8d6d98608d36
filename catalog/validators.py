from typing import Dict, Optional, Tuple

TITLE_MAX_LENGTH = 200
AUTHOR_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 1000


def _is_blank(text: Optional[str]) -> bool:
    return text is None or not text.strip()


def validate_book_input(
    title: Optional[str],
    author: Optional[str],
    description: Optional[str] = None,
) -> Dict[str, str]:
    """Check create/update fields and return every violation as field -> message.

    An empty mapping means the input is valid. Checks are not short-circuited,
    so a payload with several bad fields reports all of them.
    """
    errors: Dict[str, str] = {}

    if _is_blank(title):
        errors["title"] = "Title is required"
    elif len(title) > TITLE_MAX_LENGTH:
        errors["title"] = f"Title cannot exceed {TITLE_MAX_LENGTH} characters"

    if _is_blank(author):
        errors["author"] = "Author is required"
    elif len(author) > AUTHOR_MAX_LENGTH:
        errors["author"] = f"Author cannot exceed {AUTHOR_MAX_LENGTH} characters"

    if description is not None and len(description) > DESCRIPTION_MAX_LENGTH:
        errors["description"] = f"Description cannot exceed {DESCRIPTION_MAX_LENGTH} characters"

    return errors


def normalize_book_input(
    title: str,
    author: str,
    description: Optional[str] = None,
) -> Tuple[str, str, Optional[str]]:
    """Trim text fields; an empty description becomes None."""
    description = description.strip() if description is not None else None
    return title.strip(), author.strip(), description or None
