"""Pytest fixtures for shared-tracking tests."""

from __future__ import annotations

from typing import Any

import pytest
from growthnav.tracking.config import CustomerConfig, EventConfig, EventLogEntry
from growthnav.tracking.exceptions import EventLogError
from growthnav.tracking.senders import FacebookLogSender, GA4LogSender, PlatformSender, SendResult
from growthnav.tracking.storage import InMemoryConfigStore


class RecordingEventLog:
    """Event log that keeps entries in memory."""

    def __init__(self):
        self.entries: list[EventLogEntry] = []

    def write(self, entry: EventLogEntry) -> None:
        self.entries.append(entry)


class FailingEventLog:
    """Event log whose writes always fail."""

    def __init__(self):
        self.attempts = 0

    def write(self, entry: EventLogEntry) -> None:
        self.attempts += 1
        raise EventLogError("database unavailable")


class RecordingSender(FacebookLogSender):
    """Facebook-shaped sender that records payloads instead of logging."""

    def __init__(self):
        self.sent: list[dict[str, Any]] = []

    def send(self, payload: dict[str, Any]) -> SendResult:
        self.sent.append(payload)
        return SendResult(success=True, message="recorded")


class ExplodingSender(GA4LogSender):
    """GA4-shaped sender whose send always raises."""

    def send(self, payload: dict[str, Any]) -> SendResult:
        raise RuntimeError("connection reset")


@pytest.fixture
def purchase_config() -> CustomerConfig:
    """Config with a purchase event mapped to all three platforms and a lead event."""
    return CustomerConfig(
        customer_id="test_customer",
        container_id="test_customer",
        events=(
            EventConfig(
                event_name="purchase",
                platform_mappings={
                    "facebook": {"value": "ecommerce.total", "currency": "ecommerce.currency"},
                    "ga4": {"value": "ecommerce.total", "currency": "ecommerce.currency"},
                    "googleAds": {"conversion_value": "ecommerce.total"},
                },
            ),
            EventConfig(
                event_name="lead",
                platform_mappings={
                    "facebook": {"email_path": "user.email", "phone_path": "user.phone"},
                },
            ),
        ),
    )


@pytest.fixture
def config_store(purchase_config: CustomerConfig) -> InMemoryConfigStore:
    """In-memory store holding purchase_config."""
    store = InMemoryConfigStore()
    store.save(purchase_config)
    return store


@pytest.fixture
def event_log() -> RecordingEventLog:
    return RecordingEventLog()


@pytest.fixture
def failing_event_log() -> FailingEventLog:
    return FailingEventLog()


@pytest.fixture
def recording_sender() -> RecordingSender:
    return RecordingSender()


@pytest.fixture
def exploding_sender() -> PlatformSender:
    return ExplodingSender()
