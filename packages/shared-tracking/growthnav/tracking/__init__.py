"""
GrowthNav Tracking - Universal conversion tracking engine.

Provides:
- Compiled per-customer tracking config (CustomerConfig, EventConfig)
- Safe dot-path reads over live dataLayer snapshots
- The Universal Engine: config-driven fan-out to ad platforms
- Platform senders (Meta Conversions API, GA4 Measurement Protocol, Google Ads)
- Config and event log storage

Usage:
    from growthnav.tracking import (
        EventData,
        InMemoryConfigStore,
        UniversalEngine,
    )

    store = InMemoryConfigStore()
    store.save(config)

    engine = UniversalEngine(config_store=store)
    results = engine.process_event(
        "customer-001",
        EventData(event_name="purchase", data_layer=data_layer),
    )
"""

from growthnav.tracking.config import (
    CONFIG_VERSION,
    DEFAULT_CURRENCY,
    CustomerConfig,
    EventConfig,
    EventData,
    EventLogEntry,
    Platform,
)
from growthnav.tracking.datalayer import (
    get_first_valid_path,
    get_from_datalayer,
    path_exists,
)
from growthnav.tracking.engine import PlatformResult, UniversalEngine, resolve_fields
from growthnav.tracking.exceptions import (
    ConfigNotFoundError,
    EventLogError,
    EventNotConfiguredError,
    PlatformSendError,
    TrackingError,
)
from growthnav.tracking.senders import (
    FacebookLogSender,
    GA4LogSender,
    GA4MeasurementSender,
    GoogleAdsLogSender,
    MetaConversionsSender,
    PlatformSender,
    SendResult,
    default_senders,
)
from growthnav.tracking.settings import TrackingSettings
from growthnav.tracking.storage import (
    BigQueryConfigStore,
    BigQueryEventLog,
    InMemoryConfigStore,
)

__all__ = [
    # Config
    "CONFIG_VERSION",
    "DEFAULT_CURRENCY",
    "CustomerConfig",
    "EventConfig",
    "EventData",
    "EventLogEntry",
    "Platform",
    "TrackingSettings",
    # DataLayer
    "get_from_datalayer",
    "get_first_valid_path",
    "path_exists",
    # Engine
    "UniversalEngine",
    "PlatformResult",
    "resolve_fields",
    # Senders
    "PlatformSender",
    "SendResult",
    "FacebookLogSender",
    "GA4LogSender",
    "GoogleAdsLogSender",
    "MetaConversionsSender",
    "GA4MeasurementSender",
    "default_senders",
    # Storage
    "InMemoryConfigStore",
    "BigQueryConfigStore",
    "BigQueryEventLog",
    # Exceptions
    "TrackingError",
    "ConfigNotFoundError",
    "EventNotConfiguredError",
    "PlatformSendError",
    "EventLogError",
]
