from concurrent.futures import Future
from typing import TYPE_CHECKING, Optional, Protocol

if TYPE_CHECKING:
    from library_events.kafka.models import OutboundRecord, SendResult


class IBrokerClient(Protocol):
    def send(self, topic: str, key: Optional[int], value: str) -> "Future[SendResult]":
        """Submits a key/value pair to a topic and returns a pending delivery outcome."""
        ...

    def send_record(self, record: "OutboundRecord") -> "Future[SendResult]":
        """Submits a fully built record and returns a pending delivery outcome."""
        ...
