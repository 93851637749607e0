"""
Pydantic models for library catalog events.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Range of the signed 32-bit integer key written to Kafka
KEY_MIN = -(2**31)
KEY_MAX = 2**31 - 1


class LibraryEventType(str, Enum):
    NEW = "NEW"
    UPDATE = "UPDATE"


class Book(BaseModel):
    """A catalog entry carried by a library event."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    book_id: int = Field(..., alias="bookId", description="Catalog id of the book")
    book_name: str = Field(..., alias="bookName", description="Title of the book")
    book_author: Optional[str] = Field(None, alias="bookAuthor", description="Author of the book")

    @field_validator("book_id", mode="before")
    @classmethod
    def validate_book_id(cls, v):
        """bookId must be present."""
        if v is None:
            raise ValueError("must not be null")
        return v

    @field_validator("book_name", mode="before")
    @classmethod
    def validate_book_name(cls, v):
        """bookName must contain at least one non-whitespace character."""
        if v is None or (isinstance(v, str) and not v.strip()):
            raise ValueError("must not be blank")
        return v


class LibraryEvent(BaseModel):
    """A change to the library catalog, keyed by libraryEventId."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    library_event_id: Optional[int] = Field(
        None,
        alias="libraryEventId",
        ge=KEY_MIN,
        le=KEY_MAX,
        description="Event id, used as the 4-byte partition key",
    )
    library_event_type: LibraryEventType = Field(
        LibraryEventType.NEW, alias="libraryEventType", description="Kind of catalog change"
    )
    book: Book = Field(..., description="Book the event refers to")
