"""Config generator.

Builds a customer's tracking config from extracted macro definitions by
detecting common e-commerce patterns:
- purchase (order value, currency)
- lead (email, phone)
- view_item (product ID, product name)

The output is a small mapping document, not code.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping, Sequence
from pathlib import Path

from growthnav.tracking import (
    CONFIG_VERSION,
    DEFAULT_CURRENCY,
    CustomerConfig,
    EventConfig,
    Platform,
)

logger = logging.getLogger(__name__)

# Candidate macro names per signal, in priority order (compared case-insensitively)
VALUE_CANDIDATES = ("purchase value", "order total", "revenue")
CURRENCY_CANDIDATES = ("currency code", "currencycode")
EMAIL_CANDIDATES = ("email address", "email", "emailaddress")
PHONE_CANDIDATES = ("phone number", "phone", "phonenumber")
PRODUCT_ID_CANDIDATES = ("product id", "productid", "item_id")
PRODUCT_NAME_CANDIDATES = ("product name", "productname", "item_name")

FACEBOOK = Platform.FACEBOOK.value
GA4 = Platform.GA4.value
GOOGLE_ADS = Platform.GOOGLE_ADS.value


def find_datalayer_path(
    macro_definitions: Mapping[str, str],
    candidates: Sequence[str],
) -> str | None:
    """Find the dataLayer path of the first candidate name that has a macro.

    Candidates are tried in order; for each, macro names are scanned in
    insertion order and compared case-insensitively.

    Args:
        macro_definitions: Macro name -> dataLayer path.
        candidates: Possible macro names, highest priority first.

    Returns:
        The dataLayer path, or None if no candidate matches.
    """
    for candidate in candidates:
        wanted = candidate.lower()
        for macro_name, path in macro_definitions.items():
            if macro_name.lower() == wanted:
                return path
    return None


def detect_event_patterns(macro_definitions: Mapping[str, str]) -> list[EventConfig]:
    """Detect purchase, lead and view_item patterns.

    Each pattern fires on its own signal; which platforms it maps is decided
    per platform.
    """
    patterns: list[EventConfig] = []

    value_path = find_datalayer_path(macro_definitions, VALUE_CANDIDATES)
    currency_path = find_datalayer_path(macro_definitions, CURRENCY_CANDIDATES)
    email_path = find_datalayer_path(macro_definitions, EMAIL_CANDIDATES)
    phone_path = find_datalayer_path(macro_definitions, PHONE_CANDIDATES)
    product_id_path = find_datalayer_path(macro_definitions, PRODUCT_ID_CANDIDATES)
    product_name_path = find_datalayer_path(macro_definitions, PRODUCT_NAME_CANDIDATES)

    if value_path:
        currency = currency_path or DEFAULT_CURRENCY
        patterns.append(
            EventConfig(
                event_name="purchase",
                platform_mappings={
                    FACEBOOK: {"value_path": value_path, "currency_path": currency},
                    GA4: {"value_path": value_path, "currency_path": currency},
                    GOOGLE_ADS: {"conversion_value": value_path},
                },
            )
        )

    if email_path or phone_path:
        # Missing identifiers stay as empty strings so senders see the key
        contact = {"email_path": email_path or "", "phone_path": phone_path or ""}
        patterns.append(
            EventConfig(
                event_name="lead",
                platform_mappings={FACEBOOK: dict(contact), GA4: dict(contact)},
            )
        )

    if product_id_path or product_name_path:
        mappings: dict[str, dict[str, str]] = {}
        if product_id_path:
            mappings[FACEBOOK] = {"item_id_path": product_id_path}
            ga4 = {"item_id_path": product_id_path}
            if product_name_path:
                ga4["item_name_path"] = product_name_path
            mappings[GA4] = ga4
        patterns.append(EventConfig(event_name="view_item", platform_mappings=mappings))

    return patterns


def extract_container_id(customer_id: str) -> str:
    """Container ID for a customer.

    Returns the customer ID until configs are correlated with the GTM API.
    """
    return customer_id


def generate_config(customer_id: str, macro_definitions: Mapping[str, str]) -> CustomerConfig:
    """Generate a customer's tracking config from macro definitions.

    Args:
        customer_id: Customer identifier (e.g., "customer-001").
        macro_definitions: Macro name -> dataLayer path, in export order.

    Returns:
        A complete CustomerConfig; it replaces any previous config.
    """
    events = detect_event_patterns(macro_definitions)
    logger.info(
        f"Generated config for {customer_id}: "
        f"{len(events)} event(s) from {len(macro_definitions)} macro definition(s)"
    )
    return CustomerConfig(
        customer_id=customer_id,
        container_id=extract_container_id(customer_id),
        events=tuple(events),
        version=CONFIG_VERSION,
    )


def write_config_to_file(config: CustomerConfig, output_path: str | Path) -> Path:
    """Write a config as pretty-printed JSON.

    Returns:
        The path written.
    """
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(config.to_dict(), indent=2), encoding="utf-8")
    logger.info(f"Config written to: {path}")
    return path
