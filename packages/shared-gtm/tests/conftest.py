"""Pytest fixtures for shared-gtm tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest


def _dl_macro(name: str, path: str) -> dict[str, Any]:
    return {
        "name": name,
        "type": "v",
        "parameter": [
            {"type": "INTEGER", "key": "dataLayerVersion", "value": "2"},
            {"type": "BOOLEAN", "key": "setDefaultValue", "value": "false"},
            {"type": "TEMPLATE", "key": "dataLayerVariable", "value": path},
        ],
    }


@pytest.fixture
def dl_macro():
    """Factory for dataLayer variable macro records."""
    return _dl_macro


@pytest.fixture
def v1_export() -> dict[str, Any]:
    """Bare GTM v1 export using the "macro" array."""
    return {
        "container": {"accountId": "1", "containerId": "2", "name": "Shop"},
        "tag": [
            {
                "name": "Lead Pixel",
                "type": "html",
                "paused": True,
                "parameter": [
                    {"key": "html", "value": "<img src='/px?e={{Email}}&p={{ Phone Number }}'>"},
                ],
            },
            {
                "name": "Conversion Linker",
                "type": "gcl",
                "parameter": [],
            },
        ],
        "macro": [
            _dl_macro("Email", "user.email"),
            _dl_macro("Phone Number", "user.phone"),
            {"name": "Constant", "type": "c", "parameter": [{"key": "value", "value": "x"}]},
        ],
    }


@pytest.fixture
def export_file(tmp_path: Path, sample_gtm_export) -> Path:
    """The sample export written to disk."""
    path = tmp_path / "GTM-ABC123_workspace.json"
    path.write_text(json.dumps(sample_gtm_export), encoding="utf-8")
    return path
