"""
Kafka configuration settings.
"""

from typing import Any, Dict
from pydantic import Field
from pydantic_settings import BaseSettings


class KafkaConfig(BaseSettings):
    """Configuration for the library events producer and its topic."""

    # Connection settings
    bootstrap_servers: str = Field(
        default="localhost:9092",
        description="Kafka broker addresses"
    )

    # Destination topic, fixed for the lifetime of the process
    topic: str = Field(
        default="library-events",
        description="Topic library events are published to"
    )

    producer_config: Dict[str, Any] = Field(
        default_factory=lambda: {
            "bootstrap.servers": "localhost:9092",
            "enable.idempotence": True,
            "acks": "all",  # Wait for all in-sync replicas
            "retries": 10,  # Retries belong to the client, not the publisher
            "retry.backoff.ms": 100,
            "linger.ms": 5,
            "request.timeout.ms": 30000,
            "delivery.timeout.ms": 120000,
        },
        description="Kafka producer configuration"
    )

    # Blocking publish settings
    send_timeout: float = Field(
        default=3.0,
        gt=0,
        description="Seconds a blocking publish waits for the delivery report"
    )

    poll_interval: float = Field(
        default=0.1,
        gt=0,
        description="Seconds the delivery poll loop waits per iteration"
    )

    flush_timeout: float = Field(
        default=10.0,
        description="Timeout for producer flush operations in seconds"
    )

    # Provenance header attached by the enriched publish path
    event_source: str = Field(
        default="scanner",
        description="Value of the event-source header"
    )

    # Topic management
    auto_create_topics: bool = Field(
        default=True,
        description="Create the library events topic on startup if it doesn't exist"
    )

    topic_config: Dict[str, Any] = Field(
        default_factory=lambda: {
            "num_partitions": 3,
            "replication_factor": 1,
        },
        description="Partition and replica counts for the auto-created topic"
    )

    model_config = {
        "case_sensitive": False,
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "KAFKA_",
        "extra": "ignore",
        "frozen": True,
    }

    def get_producer_config(self) -> Dict[str, Any]:
        """
        Get producer configuration with bootstrap servers override.

        Returns:
            Complete producer configuration dict
        """
        config = self.producer_config.copy()
        config["bootstrap.servers"] = self.bootstrap_servers
        return config
