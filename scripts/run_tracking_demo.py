#!/usr/bin/env python3
"""Run a GTM export through the full tracking pipeline locally.

This script:
1. Compiles a GTM container export (or a built-in sample) into a config
2. Stores the config in an in-memory store
3. Processes purchase, lead and unknown events through the Universal Engine

No credentials are needed; every platform uses its log sender.

Usage:
    python scripts/run_tracking_demo.py [GTM-XXXX_workspace.json]
"""

import json
import logging
import sys
from pathlib import Path

from growthnav.gtm import compile_container
from growthnav.tracking import (
    EventData,
    InMemoryConfigStore,
    TrackingError,
    UniversalEngine,
)

CUSTOMER_ID = "demo_customer"

SAMPLE_EXPORT = {
    "containerVersion": {
        "container": {"publicId": "GTM-DEMO"},
        "tag": [
            {
                "name": "FB - Purchase",
                "type": "html",
                "parameter": [
                    {"key": "html", "value": "fbq('track','Purchase',{value:{{Purchase Value}},currency:'{{Currency Code}}'})"},
                ],
            },
            {
                "name": "FB - Lead",
                "type": "html",
                "parameter": [{"key": "html", "value": "fbq('track','Lead',{em:'{{Email}}'})"}],
            },
        ],
        "variable": [
            {"name": "Purchase Value", "parameter": [{"key": "dataLayerVariable", "value": "ecommerce.total"}]},
            {"name": "Currency Code", "parameter": [{"key": "dataLayerVariable", "value": "ecommerce.currency"}]},
            {"name": "Email", "parameter": [{"key": "dataLayerVariable", "value": "user.email"}]},
        ],
    }
}

SAMPLE_EVENTS = [
    EventData(
        event_name="purchase",
        data_layer={
            "event": "purchase",
            "ecommerce": {
                "total": 150.0,
                "currency": "EUR",
                "items": [{"item_id": "product-123", "item_name": "Test Product"}],
            },
            "user": {"email": "buyer@example.com"},
        },
    ),
    EventData(event_name="lead", data_layer={"user": {"email": "lead@example.com"}}),
    EventData(event_name="refund", data_layer={}),
]


class PrintEventLog:
    """Event log that prints entries."""

    def write(self, entry):
        print(f"  [event log] {json.dumps(entry.to_dict())}")


def compile_export(source):
    """Compile the export and show what was detected."""
    print("=" * 60)
    print("Compiling GTM export")
    print("=" * 60)

    result = compile_container(source, customer_id=CUSTOMER_ID)
    summary = result.summary()

    print(f"\nExport format:          {summary['export_format']}")
    print(f"Referenced variables:   {summary['referenced_variables']}")
    print(f"Macro definitions:      {summary['macro_definitions']}")
    print(f"Events detected:        {', '.join(summary['events']) or '(none)'}")

    print("\nVariable coverage:")
    print(result.coverage_frame().to_string(index=False))

    return result.config


def process_events(config):
    """Process the sample events against the compiled config."""
    print("\n" + "=" * 60)
    print("Processing events")
    print("=" * 60)

    store = InMemoryConfigStore()
    store.save(config)
    engine = UniversalEngine(config_store=store, event_log=PrintEventLog())

    for event in SAMPLE_EVENTS:
        print(f"\n{event.event_name}:")
        try:
            results = engine.process_event(CUSTOMER_ID, event)
        except TrackingError as e:
            print(f"  error: {e}")
            continue

        for platform, result in results.items():
            status = "ok" if result["success"] else "FAILED"
            print(f"  {platform:12} {status:7} {result['message']}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    print("GrowthNav Tracking - End-to-End Demo")
    print("=" * 60)

    source = Path(sys.argv[1]) if len(sys.argv) > 1 else SAMPLE_EXPORT

    # Step 1: Compile
    config = compile_export(source)

    # Step 2: Process events
    process_events(config)
