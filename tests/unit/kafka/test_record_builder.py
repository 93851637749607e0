"""
Unit tests for outbound record construction.
"""

import pytest

from library_events.kafka.record_builder import EVENT_SOURCE_HEADER, build_headers, build_record


@pytest.mark.unit
class TestBuildRecord:
    """Test build_record function."""

    def test_minimal_record(self):
        """Without headers the record has an empty header list."""
        record = build_record("library-events", 123, '{"libraryEventId":123}')

        assert record.topic == "library-events"
        assert record.key == 123
        assert record.value == '{"libraryEventId":123}'
        assert record.headers == []

    def test_null_key(self):
        """Keys are optional."""
        record = build_record("library-events", None, "{}")

        assert record.key is None

    def test_header_order_and_duplicates_preserved(self):
        """Headers are kept in order and never deduplicated."""
        headers = [("b", b"1"), ("a", b"2"), ("b", b"3")]

        record = build_record("library-events", 1, "{}", headers)

        assert record.headers == headers

    def test_headers_copied(self):
        """Later changes to the caller's list do not leak into the record."""
        headers = [("a", b"1")]
        record = build_record("library-events", 1, "{}", headers)

        headers.append(("b", b"2"))

        assert record.headers == [("a", b"1")]


@pytest.mark.unit
class TestBuildHeaders:
    """Test build_headers function."""

    def test_default_event_source(self):
        assert build_headers() == [(EVENT_SOURCE_HEADER, b"scanner")]
        assert EVENT_SOURCE_HEADER == "event-source"

    def test_custom_event_source(self):
        assert build_headers("inventory") == [("event-source", b"inventory")]
