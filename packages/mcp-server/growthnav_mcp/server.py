"""
GrowthNav MCP Server - Main entry point.

MCP server exposing the GrowthNav tracking pipeline:
- GTM export compilation and analysis
- Tracking config lookup
- Live event processing through the Universal Engine
"""

from __future__ import annotations

import json
import logging
from typing import Any

from fastmcp import FastMCP

logger = logging.getLogger(__name__)

# Initialize server
mcp = FastMCP("GrowthNav Tracking")


def _settings():
    from growthnav.tracking import TrackingSettings

    settings = TrackingSettings.from_env()
    if not settings.project_id:
        raise ValueError("GCP_PROJECT_ID or GROWTNAV_PROJECT_ID environment variable required")
    return settings


def _config_store():
    from growthnav.tracking import BigQueryConfigStore

    settings = _settings()
    return BigQueryConfigStore(project_id=settings.project_id, dataset=settings.dataset)


# =============================================================================
# GTM Tools
# =============================================================================


@mcp.tool()
def compile_gtm_export(
    customer_id: str,
    export_json: str,
    save: bool = False,
) -> dict:
    """
    Compile a GTM container export into a customer tracking config.

    Args:
        customer_id: Customer identifier (e.g., "acme")
        export_json: GTM container export as JSON text
        save: Store the config as the customer's active config (replaces any previous one)

    Returns:
        The generated config plus a compile summary
    """
    from growthnav.gtm import compile_container

    result = compile_container(export_json, customer_id=customer_id)

    if save:
        _config_store().save(result.config)

    return {
        "config": result.config.to_dict(),
        "summary": result.summary(),
        "saved": save,
    }


@mcp.tool()
def analyze_gtm_export(export_json: str) -> dict:
    """
    Analyze the GA4 and Google Ads setup of a GTM container export.

    Args:
        export_json: GTM container export as JSON text

    Returns:
        Tag statistics, measurement IDs, Google Ads conversions, and recommendations
    """
    from growthnav.gtm import analyze_container

    return analyze_container(export_json).to_dict()


# =============================================================================
# Tracking Tools
# =============================================================================


@mcp.tool()
def get_tracking_config(customer_id: str) -> dict | None:
    """
    Get a customer's active tracking config.

    Args:
        customer_id: Customer identifier

    Returns:
        The config, or None if the customer has none
    """
    raw = _config_store().get(customer_id)
    if raw is None:
        return None
    return json.loads(raw)


@mcp.tool()
def process_tracking_event(
    customer_id: str,
    event_name: str,
    data_layer: dict[str, Any],
) -> dict:
    """
    Process a live event through the Universal Engine.

    Args:
        customer_id: Customer identifier
        event_name: Event name (e.g., "purchase", "lead", "view_item")
        data_layer: dataLayer snapshot captured with the event

    Returns:
        Per-platform results, or an error if the customer or event isn't configured
    """
    from growthnav.tracking import (
        BigQueryConfigStore,
        BigQueryEventLog,
        EventData,
        TrackingError,
        UniversalEngine,
        default_senders,
    )

    settings = _settings()
    engine = UniversalEngine(
        config_store=BigQueryConfigStore(project_id=settings.project_id, dataset=settings.dataset),
        event_log=BigQueryEventLog(project_id=settings.project_id, dataset=settings.dataset),
        senders=default_senders(settings),
    )

    try:
        results = engine.process_event(
            customer_id,
            EventData(event_name=event_name, data_layer=data_layer),
        )
    except TrackingError as e:
        return {"success": False, "error": str(e)}

    return {"success": True, "results": results}


def main() -> None:
    """Run the MCP server."""
    mcp.run()


if __name__ == "__main__":
    main()
