"""
Shared pytest fixtures and configuration for all tests.
"""

import logging

import pytest

from library_events.kafka.config import KafkaConfig
from library_events.kafka.publisher import LibraryEventsPublisher
from tests.utils.factories import LibraryEventFactory
from tests.utils.mocks import MockBrokerClient, RecordingCompletionHandler


# ============= Configuration Fixtures =============


@pytest.fixture
def kafka_config():
    """Test Kafka configuration."""
    return KafkaConfig(
        bootstrap_servers="test-kafka:9092",
        topic="library-events",
        send_timeout=1.0,
        poll_interval=0.01,
        flush_timeout=1.0,
    )


@pytest.fixture
def mock_env_vars(monkeypatch):
    """Kafka settings supplied through the environment."""
    monkeypatch.setenv("KAFKA_BOOTSTRAP_SERVERS", "env-kafka:29092")
    monkeypatch.setenv("KAFKA_TOPIC", "library-events-env")
    monkeypatch.setenv("KAFKA_SEND_TIMEOUT", "5")
    monkeypatch.setenv("KAFKA_EVENT_SOURCE", "env-scanner")


# ============= Event Fixtures =============


@pytest.fixture
def library_event():
    """Library event from the catalog scanner."""
    return LibraryEventFactory.create_event(library_event_id=123)


# ============= Publisher Fixtures =============


@pytest.fixture
def broker():
    """Broker double that acknowledges every send on partition 2."""
    return MockBrokerClient(mode="success", partition=2, offset=10)


@pytest.fixture
def completion_handler():
    """Completion handler that records invocations."""
    return RecordingCompletionHandler()


@pytest.fixture
def make_publisher(kafka_config, completion_handler):
    """Build a publisher around a given broker double."""

    def _make(broker: MockBrokerClient) -> LibraryEventsPublisher:
        return LibraryEventsPublisher(broker, kafka_config, completion_handler=completion_handler)

    return _make


@pytest.fixture
def publisher(make_publisher, broker):
    """Publisher wired to the default broker double."""
    return make_publisher(broker)


@pytest.fixture
def completion_logs(caplog):
    """Capture records emitted by the completion handler."""
    caplog.set_level(logging.INFO, logger="library_events.kafka.completion")

    def _records(level: int):
        return [r for r in caplog.records if r.name == "library_events.kafka.completion" and r.levelno == level]

    return _records


# ============= Pytest Configuration =============


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: mark test as unit test (no external dependencies)")
    config.addinivalue_line("markers", "integration: mark test as integration test (requires services)")
    config.addinivalue_line("markers", "slow: mark test as slow running")
