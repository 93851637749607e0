"""
Unit tests for library event models.
"""

import pytest
from pydantic import ValidationError

from library_events.domain.models import KEY_MAX, KEY_MIN, Book, LibraryEvent, LibraryEventType


@pytest.mark.unit
class TestLibraryEvent:
    """Test LibraryEvent and Book validation."""

    def test_parse_camel_case(self):
        event = LibraryEvent.model_validate(
            {
                "libraryEventId": 123,
                "libraryEventType": "UPDATE",
                "book": {"bookId": 456, "bookName": "Kafka Fundamentals", "bookAuthor": "Dilip"},
            }
        )

        assert event.library_event_id == 123
        assert event.library_event_type is LibraryEventType.UPDATE
        assert event.book.book_id == 456
        assert event.book.book_name == "Kafka Fundamentals"

    def test_defaults(self):
        event = LibraryEvent(book=Book(book_id=1, book_name="Streams"))

        assert event.library_event_id is None
        assert event.library_event_type is LibraryEventType.NEW
        assert event.book.book_author is None

    def test_book_required(self):
        with pytest.raises(ValidationError):
            LibraryEvent.model_validate({"libraryEventId": 1})

    def test_invalid_book(self):
        with pytest.raises(ValidationError) as exc_info:
            Book.model_validate({"bookId": None, "bookName": ""})

        messages = {e["loc"][0]: e["msg"] for e in exc_info.value.errors()}
        assert "must not be null" in messages["bookId"]
        assert "must not be blank" in messages["bookName"]

    def test_whitespace_book_name_is_blank(self):
        with pytest.raises(ValidationError):
            Book(book_id=1, book_name="   ")

    def test_immutable(self):
        event = LibraryEvent(book=Book(book_id=1, book_name="Streams"))

        with pytest.raises(ValidationError):
            event.library_event_id = 5

    @pytest.mark.parametrize("event_id", [KEY_MIN, KEY_MAX])
    def test_id_within_key_range(self, event_id):
        event = LibraryEvent(library_event_id=event_id, book=Book(book_id=1, book_name="Streams"))

        assert event.library_event_id == event_id

    @pytest.mark.parametrize("event_id", [KEY_MIN - 1, KEY_MAX + 1])
    def test_id_outside_key_range_rejected(self, event_id):
        """Ids that do not fit the 32-bit record key never reach the publisher."""
        with pytest.raises(ValidationError) as exc_info:
            LibraryEvent.model_validate({"libraryEventId": event_id, "book": {"bookId": 1, "bookName": "Streams"}})

        assert exc_info.value.errors()[0]["loc"] == ("libraryEventId",)
