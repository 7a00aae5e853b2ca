"""Shared pytest fixtures for GrowthNav packages."""

import pytest
from unittest.mock import MagicMock, patch


@pytest.fixture
def mock_bigquery_client():
    """Mock google.cloud.bigquery.Client for testing."""
    with patch("google.cloud.bigquery.Client") as mock:
        client = MagicMock()
        mock.return_value = client
        yield client


@pytest.fixture
def sample_gtm_export():
    """Sample GTM container export (v2 shape, wrapped)."""
    return {
        "exportFormatVersion": 2,
        "containerVersion": {
            "container": {"containerId": "12345678", "publicId": "GTM-ABC123"},
            "tag": [
                {
                    "name": "FB - Purchase",
                    "type": "html",
                    "parameter": [
                        {
                            "type": "TEMPLATE",
                            "key": "html",
                            "value": "<script>fbq('track','Purchase',{value:{{Purchase Value}},currency:'{{Currency Code}}'});</script>",
                        }
                    ],
                },
                {
                    "name": "GA4 - Purchase",
                    "type": "gaawe",
                    "parameter": [
                        {"type": "TEMPLATE", "key": "eventName", "value": "purchase"},
                        {"type": "TEMPLATE", "key": "measurementIdOverride", "value": "G-TEST123"},
                        {
                            "type": "LIST",
                            "key": "eventParameters",
                            "list": [
                                {
                                    "type": "MAP",
                                    "map": [
                                        {"type": "TEMPLATE", "key": "name", "value": "value"},
                                        {"type": "TEMPLATE", "key": "value", "value": "{{Purchase Value}}"},
                                    ],
                                },
                                {
                                    "type": "MAP",
                                    "map": [
                                        {"type": "TEMPLATE", "key": "name", "value": "page"},
                                        {"type": "TEMPLATE", "key": "value", "value": "{{Page Path}}"},
                                    ],
                                },
                            ],
                        },
                    ],
                },
                {
                    "name": "Ads - Conversion",
                    "type": "awct",
                    "parameter": [
                        {"type": "TEMPLATE", "key": "conversionId", "value": "AW-111"},
                        {"type": "TEMPLATE", "key": "conversionLabel", "value": "abcDEF"},
                        {"type": "TEMPLATE", "key": "conversionValue", "value": "{{ecommerceTotal}}"},
                    ],
                },
            ],
            "variable": [
                {
                    "name": "Purchase Value",
                    "type": "v",
                    "parameter": [
                        {"type": "INTEGER", "key": "dataLayerVersion", "value": "2"},
                        {"type": "TEMPLATE", "key": "name", "value": "ecommerce.total"},
                        {"type": "TEMPLATE", "key": "dataLayerVariable", "value": "ecommerce.total"},
                    ],
                },
                {
                    "name": "Currency Code",
                    "type": "v",
                    "parameter": [
                        {"type": "TEMPLATE", "key": "dataLayerVariable", "value": "ecommerce.currency"},
                    ],
                },
                {
                    "name": "Email",
                    "type": "v",
                    "parameter": [
                        {"type": "TEMPLATE", "key": "dataLayerVariable", "value": "user.email"},
                    ],
                },
                {
                    "name": "Page Path",
                    "type": "u",
                    "parameter": [{"type": "TEMPLATE", "key": "component", "value": "PATH"}],
                },
            ],
            "trigger": [{"name": "All Pages", "type": "PAGEVIEW"}],
        },
    }


@pytest.fixture
def sample_data_layer():
    """Sample dataLayer snapshot for a purchase."""
    return {
        "event": "purchase",
        "ecommerce": {
            "total": 150.0,
            "currency": "EUR",
            "items": [{"item_id": "product-123", "item_name": "Test Product"}],
        },
        "user": {
            "email": "buyer@example.com",
            "phone": "+1234567890",
        },
    }
