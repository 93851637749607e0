"""
Construction of outbound Kafka records.
"""

from typing import Iterable, List, Optional, Tuple

from .models import OutboundRecord

EVENT_SOURCE_HEADER = "event-source"


def build_headers(event_source: str = "scanner") -> List[Tuple[str, bytes]]:
    """Provenance headers attached by the enriched publish path."""
    return [(EVENT_SOURCE_HEADER, event_source.encode("utf-8"))]


def build_record(
    topic: str,
    key: Optional[int],
    value: str,
    headers: Optional[Iterable[Tuple[str, bytes]]] = None,
) -> OutboundRecord:
    """
    Build an outbound record.

    No partition is set; the producer's partitioner places the record by key.

    Args:
        topic: Destination topic
        key: Partition key (library event id), may be None
        value: Serialized payload
        headers: Ordered (name, value) pairs, kept as given

    Returns:
        OutboundRecord
    """
    return OutboundRecord(topic=topic, key=key, value=value, headers=list(headers or []))
