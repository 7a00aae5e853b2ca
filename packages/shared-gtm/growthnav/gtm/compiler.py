"""Container compiler - GTM export in, CustomerConfig out.

Ties the pipeline together:
    export -> ContainerExport -> macro definitions (+ heuristic paths for
    referenced variables without one) -> CustomerConfig

Also provides a lightweight container analysis (GA4 / Google Ads tags,
measurement IDs, cleanup recommendations) used during onboarding.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

import pandas as pd

from growthnav.gtm.extractor import extract_all_variables, extract_macro_definitions
from growthnav.gtm.generator import generate_config
from growthnav.gtm.path_mapper import variable_to_datalayer_path
from growthnav.gtm.schema import ContainerExport, load_container_export
from growthnav.tracking import CustomerConfig

logger = logging.getLogger(__name__)

ExportSource = ContainerExport | dict[str, Any] | str | bytes | Path

# GTM tag type IDs
GA4_CONFIG_TAG = "gaawc"
GA4_EVENT_TAG = "gaawe"
GOOGLE_ADS_CONVERSION_TAG = "awct"
CONVERSION_LINKER_TAG = "gcl"
CUSTOM_HTML_TAG = "html"


class PathSource(str, Enum):
    """How a referenced variable's dataLayer path was determined."""

    MACRO = "macro"  # Bound by a dataLayerVariable macro
    HEURISTIC = "heuristic"  # Guessed from the variable's name
    UNMAPPED = "unmapped"  # Needs manual mapping


@dataclass
class VariablePath:
    """Resolved dataLayer path for one variable."""

    path: str | None
    source: PathSource


@dataclass
class CompileResult:
    """Output of compiling one container export."""

    config: CustomerConfig
    export_format: str
    referenced_variables: set[str] = field(default_factory=set)
    macro_definitions: dict[str, str] = field(default_factory=dict)
    variable_paths: dict[str, VariablePath] = field(default_factory=dict)

    @property
    def unmapped_variables(self) -> list[str]:
        """Referenced variables that still need a manual mapping."""
        return sorted(
            name for name, vp in self.variable_paths.items() if vp.source == PathSource.UNMAPPED
        )

    def coverage_frame(self) -> pd.DataFrame:
        """Variable coverage as a DataFrame (variable, datalayer_path, source)."""
        rows = [
            {"variable": name, "datalayer_path": vp.path, "source": vp.source.value}
            for name, vp in self.variable_paths.items()
        ]
        df = pd.DataFrame(rows, columns=["variable", "datalayer_path", "source"])
        return df.sort_values("variable").reset_index(drop=True)

    def summary(self) -> dict[str, Any]:
        """JSON-friendly summary of the compile."""
        return {
            "customer_id": self.config.customer_id,
            "export_format": self.export_format,
            "referenced_variables": len(self.referenced_variables),
            "macro_definitions": len(self.macro_definitions),
            "events": self.config.event_names,
            "unmapped_variables": self.unmapped_variables,
        }


def resolve_variable_paths(
    variables: set[str],
    macro_definitions: dict[str, str],
) -> dict[str, VariablePath]:
    """Resolve referenced variables, preferring macro bindings over heuristics."""
    resolved: dict[str, VariablePath] = {}
    for name in sorted(variables):
        if name in macro_definitions:
            resolved[name] = VariablePath(macro_definitions[name], PathSource.MACRO)
            continue
        path = variable_to_datalayer_path(name)
        source = PathSource.HEURISTIC if path is not None else PathSource.UNMAPPED
        resolved[name] = VariablePath(path, source)
    return resolved


def compile_container(source: ExportSource, customer_id: str) -> CompileResult:
    """Compile a GTM container export into a customer tracking config.

    Args:
        source: Export as a dict, JSON text, Path, or ContainerExport.
        customer_id: Customer the config is for.

    Returns:
        CompileResult with the config and variable coverage details.

    Raises:
        FileNotFoundError: If ``source`` is a path that doesn't exist.
    """
    export = load_container_export(source)

    variables = extract_all_variables(export.tags)
    macro_definitions = extract_macro_definitions(export.macros)

    logger.info(f"Extracted {len(variables)} unique variables from tags")
    logger.info(f"Extracted {len(macro_definitions)} macro definitions with dataLayer paths")

    return CompileResult(
        config=generate_config(customer_id, macro_definitions),
        export_format=export.format.value,
        referenced_variables=variables,
        macro_definitions=macro_definitions,
        variable_paths=resolve_variable_paths(variables, macro_definitions),
    )


# =============================================================================
# Container analysis
# =============================================================================


@dataclass
class ContainerAnalysis:
    """Summary of the tracking setup found in a container."""

    stats: dict[str, int]
    measurement_ids: list[str]
    ads_conversions: list[dict[str, Any]]
    recommendations: list[str]

    def to_dict(self) -> dict[str, Any]:
        return {
            "stats": self.stats,
            "measurement_ids": self.measurement_ids,
            "ads_conversions": self.ads_conversions,
            "recommendations": self.recommendations,
        }


def _param(tag: dict[str, Any], key: str) -> Any:
    for param in tag.get("parameter") or []:
        if isinstance(param, dict) and param.get("key") == key:
            return param.get("value")
    return None


def _recommendations(tags: list[dict[str, Any]]) -> list[str]:
    recs = []
    if any(tag.get("paused") for tag in tags):
        recs.append("Remove or resume paused tags to clean up the container.")
    if any(tag.get("type") == CUSTOM_HTML_TAG for tag in tags):
        recs.append(
            "Custom HTML tags detected. Consider migrating these to server-side "
            "logic for better security and performance."
        )
    if not any(tag.get("type") == CONVERSION_LINKER_TAG for tag in tags):
        recs.append(
            "CRITICAL: No Conversion Linker tag found. GCLID preservation will fail without it."
        )
    return recs


def analyze_container(source: ExportSource) -> ContainerAnalysis:
    """Analyze the GA4 and Google Ads tags in a container export.

    Raises:
        FileNotFoundError: If ``source`` is a path that doesn't exist.
    """
    export = load_container_export(source)
    tags = export.tags

    ga4_configs = [t for t in tags if t.get("type") == GA4_CONFIG_TAG]
    ga4_events = [t for t in tags if t.get("type") == GA4_EVENT_TAG]
    google_ads = [t for t in tags if t.get("type") == GOOGLE_ADS_CONVERSION_TAG]

    measurement_ids: list[str] = []
    for tag in ga4_configs + ga4_events:
        measurement_id = _param(tag, "measurementId") or _param(tag, "measurementIdOverride")
        if measurement_id and measurement_id not in measurement_ids:
            measurement_ids.append(measurement_id)

    ads_conversions = [
        {
            "name": tag.get("name"),
            "conversion_id": _param(tag, "conversionId"),
            "conversion_label": _param(tag, "conversionLabel"),
        }
        for tag in google_ads
    ]

    return ContainerAnalysis(
        stats={
            "total_tags": len(tags),
            "ga4_configs": len(ga4_configs),
            "ga4_events": len(ga4_events),
            "google_ads": len(google_ads),
            "variables": len(export.macros),
            "triggers": len(export.triggers),
        },
        measurement_ids=measurement_ids,
        ads_conversions=ads_conversions,
        recommendations=_recommendations(tags),
    )
