"""
Topic management utilities for Kafka.
"""

import logging
from typing import Optional, Set

from confluent_kafka.admin import AdminClient, NewTopic

from .config import KafkaConfig

logger = logging.getLogger(__name__)


class TopicManager:
    """Creates the library events topic when it is missing."""

    def __init__(self, config: Optional[KafkaConfig] = None):
        """
        Initialize topic manager.

        Args:
            config: Kafka configuration, uses default if None
        """
        self.config = config or KafkaConfig()
        self._admin_client: Optional[AdminClient] = None
        self._topic_cache: Set[str] = set()

    def _get_admin_client(self) -> AdminClient:
        if self._admin_client is None:
            admin_config = {
                "bootstrap.servers": self.config.bootstrap_servers,
                "socket.timeout.ms": 10000,
                "request.timeout.ms": 10000,
            }
            self._admin_client = AdminClient(admin_config)
            logger.info(f"Created Kafka AdminClient for {self.config.bootstrap_servers}")
        return self._admin_client

    def topic_exists(self, topic_name: str) -> bool:
        """
        Check if a topic exists.

        Args:
            topic_name: Name of the topic to check

        Returns:
            True if topic exists, False otherwise
        """
        if topic_name in self._topic_cache:
            return True

        try:
            metadata = self._get_admin_client().list_topics(timeout=5)
        except Exception as e:
            logger.error(f"Error checking if topic '{topic_name}' exists: {e}")
            return False

        if topic_name in metadata.topics:
            self._topic_cache.add(topic_name)
            return True
        return False

    def create_topic(
        self,
        topic_name: str,
        num_partitions: Optional[int] = None,
        replication_factor: Optional[int] = None,
    ) -> bool:
        """
        Create a topic using the configured partition and replica counts.

        Returns:
            True if topic was created or already exists, False on error
        """
        if self.topic_exists(topic_name):
            logger.debug(f"Topic '{topic_name}' already exists")
            return True

        num_partitions = num_partitions or self.config.topic_config.get("num_partitions", 1)
        replication_factor = replication_factor or self.config.topic_config.get("replication_factor", 1)

        try:
            new_topic = NewTopic(
                topic=topic_name,
                num_partitions=num_partitions,
                replication_factor=replication_factor,
            )
            futures = self._get_admin_client().create_topics([new_topic], operation_timeout=30)
        except Exception as e:
            logger.error(f"Error creating topic '{topic_name}': {e}")
            return False

        for topic, future in futures.items():
            try:
                future.result()
                logger.info(f"Successfully created topic '{topic}' with {num_partitions} partition(s)")
            except Exception as e:
                if "already exists" not in str(e).lower():
                    logger.error(f"Failed to create topic '{topic}': {e}")
                    return False
                logger.debug(f"Topic '{topic}' already exists")
        self._topic_cache.add(topic_name)
        return True

    def ensure_topic_exists(self, topic_name: str) -> bool:
        """
        Ensure a topic exists, creating it if auto creation is enabled.

        Returns:
            True if topic exists or was created, False on error
        """
        if not self.config.auto_create_topics:
            exists = self.topic_exists(topic_name)
            if not exists:
                logger.warning(f"Topic '{topic_name}' does not exist and auto_create_topics is disabled")
            return exists

        return self.create_topic(topic_name)
