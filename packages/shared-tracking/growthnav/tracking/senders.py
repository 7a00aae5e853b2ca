"""Platform senders - deliver resolved payloads to ad platforms.

Each sender owns one platform key and two steps:
- build_payload(): shape resolved fields into the platform's payload
- send(): deliver the payload and report a SendResult

Log senders reproduce the reference behavior (emit the payload as a
structured log line and succeed). HTTP senders call the Meta Conversions API
and GA4 Measurement Protocol with httpx.
"""

from __future__ import annotations

import hashlib
import json
import logging
import time
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

import httpx

from growthnav.tracking.config import DEFAULT_CURRENCY, Platform
from growthnav.tracking.exceptions import PlatformSendError
from growthnav.tracking.settings import TrackingSettings

logger = logging.getLogger(__name__)

META_GRAPH_URL = "https://graph.facebook.com"
GA4_ENDPOINT = "https://www.google-analytics.com/mp/collect"
GA4_DEBUG_ENDPOINT = "https://www.google-analytics.com/mp/collect/debug"


@dataclass
class SendResult:
    """Outcome of delivering one payload."""

    success: bool
    message: str
    error: str | None = None


class PlatformSender(ABC):
    """Abstract base class for platform senders.

    Subclasses must set the class attribute:
    - platform: The platform key this sender handles (e.g. "facebook")
    """

    platform: str

    def __init_subclass__(cls, **kwargs: Any) -> None:
        """Validate that concrete subclasses define platform."""
        super().__init_subclass__(**kwargs)
        if ABC in cls.__bases__:
            return
        if not getattr(cls, "platform", None):
            raise TypeError(f"{cls.__name__} must define a 'platform' class attribute")

    @abstractmethod
    def build_payload(self, event_name: str, fields: dict[str, Any]) -> dict[str, Any]:
        """Shape resolved dataLayer fields into this platform's payload."""
        pass  # pragma: no cover

    @abstractmethod
    def send(self, payload: dict[str, Any]) -> SendResult:
        """Deliver the payload.

        Raises:
            PlatformSendError: If delivery fails in a way the sender can't report.
        """
        pass  # pragma: no cover


# =============================================================================
# Log senders (reference behavior)
# =============================================================================


class LogSender(PlatformSender, ABC):
    """Sender that logs the payload instead of calling the platform."""

    label: str = ""

    def send(self, payload: dict[str, Any]) -> SendResult:
        logger.info(
            json.dumps(
                {"platform": self.platform, "payload": payload},
                default=str,
                sort_keys=True,
            )
        )
        return SendResult(success=True, message=f"{self.label} sent")


class FacebookLogSender(LogSender):
    """Facebook CAPI payload: flat fields plus event_name and event_time."""

    platform = Platform.FACEBOOK.value
    label = "Facebook CAPI event"

    def build_payload(self, event_name: str, fields: dict[str, Any]) -> dict[str, Any]:
        return {
            "event_name": event_name,
            "event_time": int(time.time()),
            **fields,
        }


class GA4LogSender(LogSender):
    """GA4 payload: fields go under params."""

    platform = Platform.GA4.value
    label = "GA4 event"

    def build_payload(self, event_name: str, fields: dict[str, Any]) -> dict[str, Any]:
        return {"event_name": event_name, "params": dict(fields)}


class GoogleAdsLogSender(LogSender):
    """Google Ads payload: fields go under payload.

    Conversion upload needs OAuth-managed credentials, which live outside
    this package, so Google Ads is always log-only here.
    """

    platform = Platform.GOOGLE_ADS.value
    label = "Google Ads conversion"

    def build_payload(self, event_name: str, fields: dict[str, Any]) -> dict[str, Any]:
        return {"event_name": event_name, "payload": dict(fields)}


# =============================================================================
# HTTP senders
# =============================================================================


def hash_user_data(value: Any) -> str:
    """SHA-256 hash a user identifier the way Meta expects (trimmed, lower-cased)."""
    return hashlib.sha256(str(value).strip().lower().encode("utf-8")).hexdigest()


class MetaConversionsSender(FacebookLogSender):
    """Send events to the Meta Conversions API.

    Mapped fields are routed into the CAPI event shape:
    - value / currency -> custom_data (currency defaults to USD when a
      value is present)
    - email / phone -> user_data.em / user_data.ph (SHA-256 hashed)
    - everything else -> custom_data

    Example:
        sender = MetaConversionsSender(access_token="...", pixel_id="123")
        payload = sender.build_payload("purchase", {"value_path": 150.0})
        result = sender.send(payload)
    """

    # Generated config field name -> CAPI key
    FIELD_ALIASES = {
        "value_path": "value",
        "currency_path": "currency",
        "email_path": "email",
        "phone_path": "phone",
        "item_id_path": "content_ids",
    }

    def __init__(
        self,
        access_token: str,
        pixel_id: str,
        api_version: str = "v18.0",
        timeout: float = 10.0,
        client: httpx.Client | None = None,
    ):
        self.access_token = access_token
        self.pixel_id = pixel_id
        self.api_version = api_version
        self._timeout = timeout
        self._client = client

    @property
    def client(self) -> httpx.Client:
        """Lazy-initialize the HTTP client."""
        if self._client is None:
            self._client = httpx.Client(base_url=META_GRAPH_URL, timeout=self._timeout)
        return self._client

    @property
    def endpoint(self) -> str:
        return f"/{self.api_version}/{self.pixel_id}/events"

    def build_payload(self, event_name: str, fields: dict[str, Any]) -> dict[str, Any]:
        user_data: dict[str, Any] = {}
        custom_data: dict[str, Any] = {}

        for field_name, value in fields.items():
            key = self.FIELD_ALIASES.get(field_name, field_name)
            if key == "email":
                if value:
                    user_data["em"] = [hash_user_data(value)]
            elif key == "phone":
                if value:
                    user_data["ph"] = [hash_user_data(value)]
            elif key == "content_ids":
                custom_data[key] = [value]
            else:
                custom_data[key] = value

        if "value" in custom_data:
            custom_data.setdefault("currency", DEFAULT_CURRENCY)

        return {
            "event_name": event_name,
            "event_time": int(time.time()),
            "action_source": "website",
            "user_data": user_data,
            "custom_data": custom_data,
        }

    def send(self, payload: dict[str, Any]) -> SendResult:
        try:
            response = self.client.post(
                self.endpoint,
                json={"data": [payload], "access_token": self.access_token},
            )
        except httpx.HTTPError as e:
            raise PlatformSendError(self.platform, f"Network error: {e}") from e

        if response.is_success:
            body = response.json()
            received = body.get("events_received", 0)
            logger.info(f"Meta CAPI accepted {received} event(s) for pixel {self.pixel_id}")
            return SendResult(success=True, message="Facebook CAPI event sent")

        logger.warning(f"Meta CAPI rejected event: {response.status_code} {response.text}")
        return SendResult(
            success=False,
            message="Facebook CAPI request failed",
            error=f"HTTP {response.status_code}: {response.text}",
        )


class GA4MeasurementSender(GA4LogSender):
    """Send events through the GA4 Measurement Protocol.

    The Measurement Protocol requires a client_id; if the mapped fields carry
    one it is used, otherwise a random one is generated per event.

    Generated field names are renamed to GA4 parameter names. Email and phone
    are never sent, since GA4 does not accept personal data in event params.
    """

    # Generated config field name -> GA4 param
    FIELD_ALIASES = {
        "value_path": "value",
        "currency_path": "currency",
        "item_id_path": "item_id",
        "item_name_path": "item_name",
    }

    PII_FIELDS = frozenset({"email_path", "phone_path", "email", "phone"})

    def __init__(
        self,
        measurement_id: str,
        api_secret: str,
        debug: bool = False,
        timeout: float = 10.0,
        client: httpx.Client | None = None,
    ):
        self.measurement_id = measurement_id
        self.api_secret = api_secret
        self.debug = debug
        self._timeout = timeout
        self._client = client

    @property
    def client(self) -> httpx.Client:
        """Lazy-initialize the HTTP client."""
        if self._client is None:
            self._client = httpx.Client(timeout=self._timeout)
        return self._client

    @property
    def endpoint(self) -> str:
        return GA4_DEBUG_ENDPOINT if self.debug else GA4_ENDPOINT

    def build_payload(self, event_name: str, fields: dict[str, Any]) -> dict[str, Any]:
        params: dict[str, Any] = {}
        for field_name, value in fields.items():
            if field_name in self.PII_FIELDS:
                logger.debug(f"Dropping {field_name} from GA4 {event_name} params")
                continue
            params[self.FIELD_ALIASES.get(field_name, field_name)] = value

        if "value" in params:
            params.setdefault("currency", DEFAULT_CURRENCY)

        return {"event_name": event_name, "params": params}

    def send(self, payload: dict[str, Any]) -> SendResult:
        params = dict(payload.get("params", {}))
        client_id = str(params.pop("client_id", None) or uuid.uuid4())
        body = {
            "client_id": client_id,
            "events": [{"name": payload["event_name"], "params": params}],
        }

        try:
            response = self.client.post(
                self.endpoint,
                params={"measurement_id": self.measurement_id, "api_secret": self.api_secret},
                json=body,
            )
        except httpx.HTTPError as e:
            raise PlatformSendError(self.platform, f"Network error: {e}") from e

        if response.is_success:
            return SendResult(success=True, message="GA4 event sent")

        logger.warning(f"GA4 Measurement Protocol rejected event: {response.status_code}")
        return SendResult(
            success=False,
            message="GA4 request failed",
            error=f"HTTP {response.status_code}: {response.text}",
        )


def default_senders(settings: TrackingSettings | None = None) -> dict[str, PlatformSender]:
    """Build one sender per known platform.

    HTTP senders are used where credentials are configured; every other
    platform gets its log sender.
    """
    settings = settings or TrackingSettings()
    senders: dict[str, PlatformSender] = {
        Platform.FACEBOOK.value: FacebookLogSender(),
        Platform.GA4.value: GA4LogSender(),
        Platform.GOOGLE_ADS.value: GoogleAdsLogSender(),
    }

    if settings.meta_enabled:
        senders[Platform.FACEBOOK.value] = MetaConversionsSender(
            access_token=settings.meta_access_token,
            pixel_id=settings.meta_pixel_id,
            api_version=settings.meta_api_version,
            timeout=settings.send_timeout,
        )
    if settings.ga4_enabled:
        senders[Platform.GA4.value] = GA4MeasurementSender(
            measurement_id=settings.ga4_measurement_id,
            api_secret=settings.ga4_api_secret,
            debug=settings.ga4_debug,
            timeout=settings.send_timeout,
        )

    return senders
