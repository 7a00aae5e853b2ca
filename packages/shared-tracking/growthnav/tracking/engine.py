"""Universal Engine - process live events for any customer from compiled config.

One code path serves every customer. Per event:

1. Load the customer's CustomerConfig (no caching, read on every call)
2. Resolve the EventConfig for the event name (exact match)
3. Fan out: resolve each platform's field paths against the dataLayer and
   hand the payload to that platform's sender
4. Write one event log entry

Platform branches are independent. A failing branch is recorded in its own
result and never blocks the others. Event log failures are reported to the
operator log and never reach the caller.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from growthnav.tracking.config import CustomerConfig, EventData, EventLogEntry
from growthnav.tracking.datalayer import get_from_datalayer
from growthnav.tracking.exceptions import ConfigNotFoundError, EventNotConfiguredError
from growthnav.tracking.senders import PlatformSender, default_senders
from growthnav.tracking.storage import ConfigStore, EventLogWriter

logger = logging.getLogger(__name__)

# Returns False to skip an event (e.g., a duplicate the caller has already sent)
IdempotencyHook = Callable[[str, EventData], bool]


@dataclass
class PlatformResult:
    """Result of one platform branch."""

    platform: str
    success: bool
    message: str
    payload: dict[str, Any] = field(default_factory=dict)
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Result record: an echo of the payload plus success/message.

        The engine's own keys are applied last; payload fields with the same
        names never override them.
        """
        result: dict[str, Any] = {**self.payload}
        result.pop("error", None)
        result["success"] = self.success
        result["message"] = self.message
        if self.error is not None:
            result["error"] = self.error
        return result


def resolve_fields(data_layer: Any, mapping: dict[str, str]) -> dict[str, Any]:
    """Resolve ``{field: path}`` against a dataLayer, dropping unresolved fields."""
    fields: dict[str, Any] = {}
    for field_name, path in mapping.items():
        value = get_from_datalayer(data_layer, path)
        if value is not None:
            fields[field_name] = value
    return fields


class UniversalEngine:
    """Runtime interpreter for compiled tracking configs.

    Example:
        engine = UniversalEngine(
            config_store=BigQueryConfigStore(project_id="my-project"),
            event_log=BigQueryEventLog(project_id="my-project"),
        )
        results = engine.process_event(
            "customer-001",
            EventData(event_name="purchase", data_layer={"ecommerce": {"total": 150}}),
        )
        # {"facebook": {"success": True, "message": "...", "event_name": ..., "value_path": 150}, ...}
    """

    def __init__(
        self,
        config_store: ConfigStore,
        event_log: EventLogWriter | None = None,
        senders: dict[str, PlatformSender] | None = None,
        idempotency_hook: IdempotencyHook | None = None,
    ):
        """Initialize the engine.

        Args:
            config_store: Source of compiled configs keyed by customer ID.
            event_log: Optional append-only event log.
            senders: Platform key -> sender. Defaults to log senders.
            idempotency_hook: Optional callback deciding whether an event
                should be sent. The engine defines no dedup key of its own.
        """
        self.config_store = config_store
        self.event_log = event_log
        self.senders = senders if senders is not None else default_senders()
        self.idempotency_hook = idempotency_hook

    def load_config(self, customer_id: str) -> CustomerConfig | None:
        """Load and parse a customer's config.

        Store errors and unparsable configs are logged and treated as absent.
        """
        try:
            raw = self.config_store.get(customer_id)
            if not raw:
                return None
            return CustomerConfig.from_json(raw)
        except Exception:
            logger.exception(f"Failed to load config for {customer_id}")
            return None

    def process_event(
        self,
        customer_id: str,
        event_data: EventData,
    ) -> dict[str, dict[str, Any]]:
        """Process one incoming event.

        Args:
            customer_id: Customer identifier.
            event_data: Event name and dataLayer snapshot.

        Returns:
            Platform key -> result record. Individual records may have
            ``success: False``.

        Raises:
            ConfigNotFoundError: If the customer has no config.
            EventNotConfiguredError: If the event name is not configured.
        """
        config = self.load_config(customer_id)
        if config is None:
            raise ConfigNotFoundError(customer_id)

        event_config = config.get_event(event_data.event_name)
        if event_config is None:
            raise EventNotConfiguredError(customer_id, event_data.event_name)

        if self.idempotency_hook is not None and not self.idempotency_hook(customer_id, event_data):
            logger.info(f"Skipping {event_data.event_name} for {customer_id}: rejected by idempotency hook")
            return {}

        results: dict[str, PlatformResult] = {}
        for platform, mapping in event_config.platform_mappings.items():
            results[platform] = self._dispatch(platform, event_data, mapping)

        self._log_event(customer_id, event_data.event_name, results)

        return {platform: result.to_dict() for platform, result in results.items()}

    def _dispatch(
        self,
        platform: str,
        event_data: EventData,
        mapping: dict[str, str],
    ) -> PlatformResult:
        """Build and send one platform's payload, capturing any failure."""
        sender = self.senders.get(platform)
        if sender is None:
            logger.warning(f"No sender registered for platform: {platform}")
            return PlatformResult(
                platform=platform,
                success=False,
                message=f"No sender registered for platform: {platform}",
                error="unsupported_platform",
            )

        payload: dict[str, Any] = {}
        try:
            fields = resolve_fields(event_data.data_layer, mapping)
            payload = sender.build_payload(event_data.event_name, fields)
            sent = sender.send(payload)
        except Exception as e:
            logger.exception(f"Send failed for {platform} ({event_data.event_name})")
            return PlatformResult(
                platform=platform,
                success=False,
                message=f"{platform} send failed",
                payload=payload,
                error=str(e),
            )

        return PlatformResult(
            platform=platform,
            success=sent.success,
            message=sent.message,
            payload=payload,
            error=sent.error,
        )

    def _log_event(
        self,
        customer_id: str,
        event_name: str,
        results: dict[str, PlatformResult],
    ) -> None:
        """Write the event log entry; failures never propagate."""
        if self.event_log is None:
            return

        entry = EventLogEntry(
            customer_id=customer_id,
            event_name=event_name,
            platforms_sent=[p for p, result in results.items() if result.success],
        )
        try:
            self.event_log.write(entry)
        except Exception:
            logger.exception(f"Failed to log event {event_name} for {customer_id}")
