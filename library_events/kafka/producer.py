"""
Kafka producer returning futures for delivery outcomes.
"""

import logging
import threading
import time
from concurrent.futures import Future, InvalidStateError
from typing import Any, Dict, Optional

from confluent_kafka import KafkaError, KafkaException, Message, Producer
from confluent_kafka.serialization import IntegerSerializer, MessageField, SerializationContext, StringSerializer

from .config import KafkaConfig
from .models import OutboundRecord, SendResult
from .record_builder import build_record

logger = logging.getLogger(__name__)


class KafkaProducer:
    """Non-blocking Kafka producer.

    Every send returns a concurrent.futures.Future completed from the
    librdkafka delivery report. A background thread polls the producer so
    delivery reports fire without any caller blocking.
    """

    def __init__(self, config: Optional[KafkaConfig] = None):
        """
        Initialize Kafka producer.

        Args:
            config: Kafka configuration, uses default if None
        """
        self.config = config or KafkaConfig()
        self._producer: Optional[Producer] = None
        self._key_serializer = IntegerSerializer()
        self._value_serializer = StringSerializer("utf_8")
        self._poll_thread: Optional[threading.Thread] = None
        self._stop = threading.Event()
        self._lock = threading.Lock()
        self._start_lock = threading.RLock()
        self._error_count = 0
        self._success_count = 0

    @property
    def is_running(self) -> bool:
        return self._poll_thread is not None and self._poll_thread.is_alive()

    def connect(self) -> None:
        """Connect to Kafka broker."""
        with self._start_lock:
            if self._producer is not None:
                logger.warning("Producer already connected")
                return

            try:
                self._producer = Producer(self.config.get_producer_config())
                logger.info(f"Connected to Kafka brokers: {self.config.bootstrap_servers}")
            except Exception as e:
                logger.error(f"Failed to connect to Kafka: {e}")
                raise

    def start(self) -> None:
        """Connect if needed and start the delivery poll thread."""
        with self._start_lock:
            if self._producer is None:
                self.connect()
            if self.is_running:
                return

            self._stop.clear()
            self._poll_thread = threading.Thread(target=self._poll_loop, name="kafka-delivery-poll", daemon=True)
            self._poll_thread.start()
            logger.info("Started producer poll loop")

    def _poll_loop(self) -> None:
        while not self._stop.is_set():
            producer = self._producer
            if producer is None:
                break
            try:
                producer.poll(self.config.poll_interval)
            except Exception as e:
                # Exceptions raised by delivery callbacks surface here
                logger.error(f"Error serving delivery reports: {e}", exc_info=True)
        logger.info("Producer poll loop ended")

    def send(self, topic: str, key: Optional[int], value: str) -> "Future[SendResult]":
        """
        Send a key/value pair to a topic without headers.

        Args:
            topic: Kafka topic name
            key: Message key for partitioning
            value: Serialized message value

        Returns:
            Future completed with SendResult, or with the delivery error
        """
        return self.send_record(build_record(topic, key, value))

    def send_record(self, record: OutboundRecord) -> "Future[SendResult]":
        """
        Send a record, returning immediately.

        Synchronous produce() failures are set on the returned future rather
        than raised, so every outcome is observed through the future.

        Args:
            record: Record to send

        Returns:
            Future completed with SendResult, or with the delivery error
        """
        if not self.is_running:
            self.start()

        future: "Future[SendResult]" = Future()

        def delivery_callback(err: Optional[KafkaError], msg: Message) -> None:
            """Callback for delivery reports."""
            try:
                if err is not None:
                    with self._lock:
                        self._error_count += 1
                    logger.debug(f"Message delivery failed: {err}")
                    future.set_exception(KafkaException(err))
                else:
                    with self._lock:
                        self._success_count += 1
                    logger.debug(f"Message delivered to {msg.topic()} [{msg.partition()}] @ {msg.offset()}")
                    future.set_result(self._to_send_result(record, msg))
            except InvalidStateError:
                # Cancelled by the caller
                logger.debug(f"Dropped delivery report for cancelled send of key {record.key}")

        try:
            ctx = SerializationContext(record.topic, MessageField.KEY)
            key = self._key_serializer(record.key, ctx)
            value = self._value_serializer(record.value, SerializationContext(record.topic, MessageField.VALUE))
            self._produce(record, key, value, delivery_callback)
        except (KafkaException, BufferError, ValueError, TypeError) as e:
            logger.error(f"Failed to produce message to '{record.topic}': {e}")
            with self._lock:
                self._error_count += 1
            future.set_exception(e)

        return future

    def _produce(self, record: OutboundRecord, key: Optional[bytes], value: bytes, callback) -> None:
        deadline = time.monotonic() + self.config.send_timeout
        while True:
            try:
                self._producer.produce(
                    topic=record.topic,
                    key=key,
                    value=value,
                    headers=record.headers or None,
                    on_delivery=callback,
                )
                return
            except BufferError:
                # Local queue is full; serve delivery reports to drain it
                if time.monotonic() >= deadline:
                    raise
                self._producer.poll(self.config.poll_interval)

    @staticmethod
    def _to_send_result(record: OutboundRecord, msg: Message) -> SendResult:
        _, timestamp = msg.timestamp()
        return SendResult(
            topic=msg.topic(),
            partition=msg.partition(),
            offset=msg.offset(),
            timestamp=timestamp,
            key=record.key,
            value=record.value,
        )

    def get_metrics(self) -> Dict[str, Any]:
        """
        Get producer metrics.

        Returns:
            Dictionary containing producer metrics
        """
        with self._lock:
            sent, failed = self._success_count, self._error_count
        return {
            "messages_sent": sent,
            "messages_failed": failed,
            "success_rate": sent / (sent + failed) if (sent + failed) > 0 else 0,
        }

    def close(self) -> None:
        """Stop polling, flush queued messages and drop the producer."""
        self._stop.set()
        if self._poll_thread is not None:
            self._poll_thread.join(timeout=self.config.flush_timeout)
            self._poll_thread = None

        if self._producer is not None:
            remaining = self._producer.flush(timeout=self.config.flush_timeout)
            if remaining > 0:
                logger.warning(f"Closed producer with {remaining} messages still in queue")
            self._producer = None

        logger.info(f"Kafka producer closed. Sent: {self._success_count}, Failed: {self._error_count}")

    def __enter__(self):
        """Context manager entry."""
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
