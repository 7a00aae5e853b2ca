"""Custom exceptions for the tracking engine."""

from __future__ import annotations


class TrackingError(Exception):
    """Base exception for tracking errors."""

    pass


class ConfigNotFoundError(TrackingError):
    """Raised when no tracking config exists for a customer."""

    def __init__(self, customer_id: str):
        self.customer_id = customer_id
        super().__init__(f"No config found for customer: {customer_id}")


class EventNotConfiguredError(TrackingError):
    """Raised when a customer's config has no entry for the event."""

    def __init__(self, customer_id: str, event_name: str):
        self.customer_id = customer_id
        self.event_name = event_name
        super().__init__(f"No config found for event: {event_name}")


class PlatformSendError(TrackingError):
    """Raised when a platform sender fails to deliver a payload."""

    def __init__(self, platform: str, message: str):
        self.platform = platform
        super().__init__(f"{platform}: {message}")


class EventLogError(TrackingError):
    """Raised when an event log entry cannot be persisted."""

    pass
