"""
Formatting of request validation failures for client error responses.
"""

from typing import Any, Dict, Sequence

_VALUE_ERROR_PREFIX = "Value error, "


def _field_path(loc: Sequence[Any]) -> str:
    # Drop the request part ("body", "query", ...) FastAPI prepends
    return ".".join(str(part) for part in loc[1:]) or str(loc[0])


def _message(error: Dict[str, Any]) -> str:
    if error.get("type") == "missing":
        return "must not be null"
    msg = error.get("msg", "")
    if msg.startswith(_VALUE_ERROR_PREFIX):
        return msg[len(_VALUE_ERROR_PREFIX):]
    return msg


def format_validation_errors(errors: Sequence[Dict[str, Any]]) -> str:
    """
    Render validation errors as "<field> - <message>" items.

    Items are sorted and joined by ", ", e.g.
    "book.bookId - must not be null, book.bookName - must not be blank".
    """
    return ", ".join(sorted(f"{_field_path(e['loc'])} - {_message(e)}" for e in errors))
