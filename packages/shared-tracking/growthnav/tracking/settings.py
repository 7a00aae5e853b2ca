"""Runtime settings for the tracking engine and its platform senders."""

from __future__ import annotations

import os

from pydantic import BaseModel, Field


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in {"1", "true", "yes", "on"}


class TrackingSettings(BaseModel):
    """Configuration for config storage and platform senders.

    Platform credentials are optional. When a platform's credentials are
    missing, its sender falls back to logging the resolved payload.
    """

    project_id: str | None = None
    dataset: str = "growthnav_registry"

    # Meta Conversions API
    meta_access_token: str | None = Field(default=None, repr=False)
    meta_pixel_id: str | None = None
    meta_api_version: str = "v18.0"

    # GA4 Measurement Protocol
    ga4_measurement_id: str | None = None
    ga4_api_secret: str | None = Field(default=None, repr=False)
    ga4_debug: bool = False

    send_timeout: float = 10.0

    @property
    def meta_enabled(self) -> bool:
        """True when Meta Conversions API credentials are configured."""
        return bool(self.meta_access_token and self.meta_pixel_id)

    @property
    def ga4_enabled(self) -> bool:
        """True when GA4 Measurement Protocol credentials are configured."""
        return bool(self.ga4_measurement_id and self.ga4_api_secret)

    @classmethod
    def from_env(cls) -> TrackingSettings:
        """Load settings from environment variables."""
        return cls(
            project_id=os.getenv("GCP_PROJECT_ID") or os.getenv("GROWTNAV_PROJECT_ID"),
            dataset=os.getenv("GROWTNAV_TRACKING_DATASET", "growthnav_registry"),
            meta_access_token=os.getenv("META_ACCESS_TOKEN"),
            meta_pixel_id=os.getenv("META_PIXEL_ID"),
            meta_api_version=os.getenv("META_API_VERSION", "v18.0"),
            ga4_measurement_id=os.getenv("GA4_MEASUREMENT_ID"),
            ga4_api_secret=os.getenv("GA4_API_SECRET"),
            ga4_debug=_env_flag("GA4_DEBUG"),
            send_timeout=float(os.getenv("GROWTNAV_SEND_TIMEOUT", "10")),
        )
