"""
Data models for Kafka publishing.
"""

from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class OutboundRecord(BaseModel):
    """A record ready to be handed to the producer. Built per publish call."""

    model_config = ConfigDict(frozen=True)

    topic: str = Field(
        ...,
        description="Kafka topic name"
    )
    key: Optional[int] = Field(
        None,
        description="Partition key, the library event id"
    )
    value: str = Field(
        ...,
        description="Serialized library event"
    )
    headers: List[Tuple[str, bytes]] = Field(
        default_factory=list,
        description="Ordered record headers, duplicates allowed"
    )


class SendResult(BaseModel):
    """Delivery metadata for a record acknowledged by the broker."""

    model_config = ConfigDict(frozen=True)

    topic: str
    partition: int
    offset: int
    timestamp: Optional[int] = None
    key: Optional[int] = None
    value: Optional[str] = None
