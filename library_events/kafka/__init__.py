"""
Kafka module for publishing library events.
"""

from .completion import CompletionHandler
from .config import KafkaConfig
from .models import OutboundRecord, SendResult
from .producer import KafkaProducer
from .publisher import LibraryEventsPublisher
from .record_builder import EVENT_SOURCE_HEADER, build_headers, build_record
from .topics import TopicManager

__all__ = [
    "CompletionHandler",
    "EVENT_SOURCE_HEADER",
    "KafkaConfig",
    "KafkaProducer",
    "LibraryEventsPublisher",
    "OutboundRecord",
    "SendResult",
    "TopicManager",
    "build_headers",
    "build_record",
]
