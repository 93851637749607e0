"""
Kafka publisher for library events.
"""

import logging
from concurrent.futures import Future
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import List, Optional, Tuple

from library_events.common.exceptions import PublishTimeoutError, SendError
from library_events.common.interface import IBrokerClient
from library_events.domain.models import LibraryEvent
from library_events.serialization import EventSerializer

from .completion import CompletionHandler
from .config import KafkaConfig
from .models import SendResult
from .record_builder import build_headers, build_record

logger = logging.getLogger(__name__)


class LibraryEventsPublisher:
    """Publishes library events to the configured topic.

    Three strategies share one submit primitive:

    - publish_async: returns the pending future; the completion is logged
      from the producer's delivery thread.
    - publish_sync: blocks for the delivery report up to a timeout and
      raises on failure. Failures on this path are raised, not logged by
      the completion handler.
    - publish_with_headers: publish_async plus the event-source header.
    """

    def __init__(
        self,
        broker: IBrokerClient,
        config: Optional[KafkaConfig] = None,
        serializer: Optional[EventSerializer] = None,
        completion_handler: Optional[CompletionHandler] = None,
    ):
        """
        Initialize the publisher.

        Args:
            broker: Client used to submit records
            config: Kafka configuration; its topic is fixed for this publisher
            serializer: Event encoder, defaults to EventSerializer
            completion_handler: Outcome logger, defaults to CompletionHandler
        """
        self.config = config or KafkaConfig()
        self.topic = self.config.topic
        self._broker = broker
        self._serializer = serializer or EventSerializer()
        self._completion = completion_handler or CompletionHandler()
        self._headers: List[Tuple[str, bytes]] = build_headers(self.config.event_source)
        logger.info(f"LibraryEventsPublisher initialized for topic '{self.topic}'")

    def publish_async(self, event: LibraryEvent) -> "Future[SendResult]":
        """
        Publish without waiting for the broker.

        Raises:
            SerializationError: Before any broker call, if the event cannot be encoded
        """
        return self._submit(event, with_headers=False)

    def publish_with_headers(self, event: LibraryEvent) -> "Future[SendResult]":
        """
        Publish without waiting, tagging the record with the event-source header.

        Raises:
            SerializationError: Before any broker call, if the event cannot be encoded
        """
        return self._submit(event, with_headers=True)

    def publish_sync(self, event: LibraryEvent, timeout: Optional[float] = None) -> SendResult:
        """
        Publish and block until the broker acknowledges the record.

        Args:
            event: Event to publish
            timeout: Seconds to wait, defaults to config.send_timeout

        Returns:
            SendResult with the delivery metadata

        Raises:
            SerializationError: If the event cannot be encoded
            PublishTimeoutError: If no delivery report arrives within timeout
            SendError: If the broker reports a failure
        """
        timeout = self.config.send_timeout if timeout is None else timeout
        return self._submit(event, with_headers=False, timeout=timeout)

    def _submit(self, event: LibraryEvent, with_headers: bool, timeout: Optional[float] = None):
        key = event.library_event_id
        value = self._serializer.serialize(event)

        if with_headers:
            record = build_record(self.topic, key, value, self._headers)
            future = self._broker.send_record(record)
        else:
            future = self._broker.send(self.topic, key, value)

        if timeout is None:
            future.add_done_callback(self._completion.callback_for(key, value))
            return future

        try:
            result = future.result(timeout=timeout)
        except FutureTimeoutError as e:
            logger.warning(f"No delivery report for key {key} within {timeout}s")
            raise PublishTimeoutError(key, timeout) from e
        except Exception as e:
            raise SendError(key, e) from e

        self._completion.on_success(key, value, result)
        return result
