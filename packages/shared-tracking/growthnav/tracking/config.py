"""Tracking configuration models.

A ``CustomerConfig`` is the compiled artifact produced from a customer's GTM
container export. It maps event names to per-platform field mappings and is
read (never modified) by the Universal Engine on every event.

Serialized form uses the camelCase keys shared with the REST backend:

    {
        "customerId": "customer-001",
        "containerId": "customer-001",
        "version": "1.0.0",
        "events": [
            {
                "eventName": "purchase",
                "platformMappings": {
                    "facebook": {"value_path": "ecommerce.total", "currency_path": "USD"}
                }
            }
        ]
    }
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any

CONFIG_VERSION = "1.0.0"

# Currency used when a purchase has a value but no currency
DEFAULT_CURRENCY = "USD"


class Platform(str, Enum):
    """Ad platforms an event can be fanned out to."""

    FACEBOOK = "facebook"
    GA4 = "ga4"
    GOOGLE_ADS = "googleAds"


@dataclass(frozen=True)
class EventConfig:
    """Mapping of one event onto the platforms it should be sent to.

    Attributes:
        event_name: Event name matched exactly against incoming events.
        platform_mappings: Sparse mapping of platform key to
            ``{output_field: dataLayer path or literal}``. A platform key is
            only present when there was enough data to justify emitting it.
    """

    event_name: str
    platform_mappings: dict[str, dict[str, str]] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the camelCase wire format."""
        return {
            "eventName": self.event_name,
            "platformMappings": {
                platform: dict(mapping)
                for platform, mapping in self.platform_mappings.items()
            },
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> EventConfig:
        """Create EventConfig from a wire-format dictionary.

        Raises:
            ValueError: If eventName is missing or platformMappings is malformed.
        """
        if not isinstance(data, dict) or "eventName" not in data:
            raise ValueError("Missing required field: eventName")

        raw_mappings = data.get("platformMappings") or {}
        if not isinstance(raw_mappings, dict):
            raise ValueError(f"Invalid platformMappings for event: {data['eventName']}")

        mappings: dict[str, dict[str, str]] = {}
        for platform, mapping in raw_mappings.items():
            # Absent platforms may be serialized as null
            if mapping is None:
                continue
            if not isinstance(mapping, dict):
                raise ValueError(f"Invalid mapping for platform: {platform}")
            mappings[platform] = dict(mapping)

        return cls(event_name=data["eventName"], platform_mappings=mappings)


@dataclass(frozen=True)
class CustomerConfig:
    """Compiled tracking configuration for one customer.

    Created once by the config generator and replaced wholesale on
    re-compilation; there are no partial updates.
    """

    customer_id: str
    container_id: str
    events: tuple[EventConfig, ...] = ()
    version: str = CONFIG_VERSION

    def get_event(self, event_name: str) -> EventConfig | None:
        """Return the event config whose name equals ``event_name`` exactly."""
        for event in self.events:
            if event.event_name == event_name:
                return event
        return None

    @property
    def event_names(self) -> list[str]:
        """Names of all configured events, in config order."""
        return [event.event_name for event in self.events]

    def to_dict(self) -> dict[str, Any]:
        """Convert to the camelCase wire format."""
        return {
            "customerId": self.customer_id,
            "containerId": self.container_id,
            "events": [event.to_dict() for event in self.events],
            "version": self.version,
        }

    def to_json(self, indent: int | None = 2) -> str:
        """Serialize to JSON."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CustomerConfig:
        """Create CustomerConfig from a wire-format dictionary.

        Raises:
            ValueError: If required fields are missing or malformed.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Config must be an object, got {type(data).__name__}")
        if "customerId" not in data:
            raise ValueError("Missing required field: customerId")

        events = data.get("events") or []
        if not isinstance(events, list):
            raise ValueError("Invalid events: expected a list")

        return cls(
            customer_id=data["customerId"],
            container_id=data.get("containerId", data["customerId"]),
            events=tuple(EventConfig.from_dict(event) for event in events),
            version=data.get("version", CONFIG_VERSION),
        )

    @classmethod
    def from_json(cls, raw: str | bytes) -> CustomerConfig:
        """Parse a CustomerConfig from JSON.

        Raises:
            ValueError: If the JSON is invalid or does not describe a config.
        """
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid config JSON: {e}") from e
        return cls.from_dict(data)


@dataclass(frozen=True)
class EventData:
    """A live event: its name plus the dataLayer snapshot captured with it."""

    event_name: str
    data_layer: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> EventData:
        """Create EventData from a request body (camelCase or snake_case)."""
        event_name = data.get("eventName") or data.get("event_name")
        if not event_name:
            raise ValueError("Missing required field: eventName")
        data_layer = data.get("dataLayer", data.get("data_layer")) or {}
        return cls(event_name=event_name, data_layer=data_layer)


@dataclass
class EventLogEntry:
    """Append-only record of one processed event (observability only)."""

    customer_id: str
    event_name: str
    platforms_sent: list[str] = field(default_factory=list)
    sent_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def to_dict(self) -> dict[str, Any]:
        """Convert to a row for the event_logs table."""
        return {
            "customer_id": self.customer_id,
            "event_name": self.event_name,
            "platforms_sent": json.dumps(self.platforms_sent),
            "sent_at": self.sent_at.isoformat(),
        }
