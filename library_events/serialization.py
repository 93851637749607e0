"""
JSON encoding of library events for the Kafka payload.
"""

import logging

import orjson
from pydantic_core import PydanticSerializationError

from library_events.common.exceptions import SerializationError
from library_events.domain.models import LibraryEvent

logger = logging.getLogger(__name__)


class EventSerializer:
    """Encodes library events to their canonical camelCase JSON string."""

    def serialize(self, event: LibraryEvent) -> str:
        """
        Serialize a library event.

        Args:
            event: Event to encode

        Returns:
            JSON string of the whole event

        Raises:
            SerializationError: If the event cannot be encoded
        """
        try:
            payload = event.model_dump(mode="json", by_alias=True)
            return orjson.dumps(payload).decode("utf-8")
        except (TypeError, ValueError, PydanticSerializationError) as e:
            logger.error(f"Failed to serialize library event {event!r}: {e}")
            raise SerializationError(f"Unable to serialize library event: {e}") from e
