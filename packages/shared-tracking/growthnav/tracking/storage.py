"""Tracking config and event log storage.

Configs are stored as JSON documents keyed by customer ID (the
``config:<customerId>`` key/value contract). Event logs are append-only rows
written once per processed event.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Protocol

from growthnav.tracking.config import CustomerConfig, EventLogEntry
from growthnav.tracking.exceptions import EventLogError

if TYPE_CHECKING:
    from google.cloud import bigquery

logger = logging.getLogger(__name__)

CREATE_CONFIGS_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS `{table_id}` (
    customer_id STRING NOT NULL,
    config_json STRING NOT NULL,
    version STRING,
    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP()
)
"""

CREATE_EVENT_LOGS_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS `{table_id}` (
    customer_id STRING NOT NULL,
    event_name STRING NOT NULL,
    platforms_sent STRING,
    sent_at TIMESTAMP NOT NULL
)
"""


def config_key(customer_id: str) -> str:
    """Key under which a customer's config is stored."""
    return f"config:{customer_id}"


class ConfigStore(Protocol):
    """Read access to compiled configs."""

    def get(self, customer_id: str) -> str | None:
        """Return the raw config JSON for a customer, or None."""
        ...


class EventLogWriter(Protocol):
    """Append-only event log."""

    def write(self, entry: EventLogEntry) -> None:
        """Persist one entry.

        Raises:
            EventLogError: If the entry could not be written.
        """
        ...


class InMemoryConfigStore:
    """Config store backed by a dict of ``config:<customerId>`` -> JSON.

    Example:
        >>> store = InMemoryConfigStore()
        >>> store.save(config)
        >>> store.get("customer-001")
    """

    def __init__(self, values: dict[str, str] | None = None):
        self.values: dict[str, str] = dict(values or {})

    def get(self, customer_id: str) -> str | None:
        return self.values.get(config_key(customer_id))

    def save(self, config: CustomerConfig) -> None:
        self.values[config_key(config.customer_id)] = config.to_json(indent=None)


class BigQueryConfigStore:
    """Config store in BigQuery.

    One row per customer in ``{project}.{dataset}.tracking_configs``; saving
    replaces the whole document.

    Example:
        >>> store = BigQueryConfigStore(project_id="my-project")
        >>> store.save(config)
        >>> raw = store.get("customer-001")
    """

    def __init__(
        self,
        project_id: str,
        dataset: str = "growthnav_registry",
        client: bigquery.Client | None = None,
    ):
        """Initialize config storage.

        Args:
            project_id: GCP project ID containing the registry dataset.
            dataset: Dataset holding the tracking tables.
            client: Optional BigQuery client. Will be created if not provided.
        """
        self.project_id = project_id
        self.dataset = dataset
        self._client = client

    @property
    def client(self) -> bigquery.Client:
        """Lazy-initialize BigQuery client."""
        if self._client is None:
            from google.cloud import bigquery

            self._client = bigquery.Client(project=self.project_id)
        return self._client

    @property
    def table_id(self) -> str:
        """Full table ID for the configs table."""
        return f"{self.project_id}.{self.dataset}.tracking_configs"

    def ensure_table_exists(self) -> None:
        """Create the configs table if it doesn't exist."""
        self.client.query(CREATE_CONFIGS_TABLE_SQL.format(table_id=self.table_id)).result()
        logger.info(f"Ensured tracking configs table exists: {self.table_id}")

    def get(self, customer_id: str) -> str | None:
        """Get the raw config JSON for a customer.

        Args:
            customer_id: The customer whose config to load.

        Returns:
            The config JSON, or None if no config exists.
        """
        from google.cloud import bigquery

        sql = f"""
        SELECT config_json
        FROM `{self.table_id}`
        WHERE customer_id = @customer_id
        LIMIT 1
        """
        job_config = bigquery.QueryJobConfig(
            query_parameters=[
                bigquery.ScalarQueryParameter("customer_id", "STRING", customer_id),
            ]
        )

        rows = list(self.client.query(sql, job_config=job_config).result())
        if not rows:
            return None
        return rows[0]["config_json"]

    def save(self, config: CustomerConfig) -> None:
        """Save a config, replacing any previous version for the customer.

        Args:
            config: The compiled config to store.
        """
        from google.cloud import bigquery

        sql = f"""
        MERGE `{self.table_id}` AS target
        USING (SELECT @customer_id AS customer_id) AS source
        ON target.customer_id = source.customer_id
        WHEN MATCHED THEN
            UPDATE SET
                config_json = @config_json,
                version = @version,
                updated_at = @updated_at
        WHEN NOT MATCHED THEN
            INSERT (customer_id, config_json, version, updated_at)
            VALUES (@customer_id, @config_json, @version, @updated_at)
        """
        job_config = bigquery.QueryJobConfig(
            query_parameters=[
                bigquery.ScalarQueryParameter("customer_id", "STRING", config.customer_id),
                bigquery.ScalarQueryParameter("config_json", "STRING", config.to_json(indent=None)),
                bigquery.ScalarQueryParameter("version", "STRING", config.version),
                bigquery.ScalarQueryParameter("updated_at", "TIMESTAMP", datetime.now(UTC).isoformat()),
            ]
        )

        self.client.query(sql, job_config=job_config).result()
        logger.info(f"Saved tracking config for customer: {config.customer_id}")


class BigQueryEventLog:
    """Append-only event log in ``{project}.{dataset}.event_logs``."""

    def __init__(
        self,
        project_id: str,
        dataset: str = "growthnav_registry",
        client: bigquery.Client | None = None,
    ):
        self.project_id = project_id
        self.dataset = dataset
        self._client = client

    @property
    def client(self) -> bigquery.Client:
        """Lazy-initialize BigQuery client."""
        if self._client is None:
            from google.cloud import bigquery

            self._client = bigquery.Client(project=self.project_id)
        return self._client

    @property
    def table_id(self) -> str:
        """Full table ID for the event logs table."""
        return f"{self.project_id}.{self.dataset}.event_logs"

    def ensure_table_exists(self) -> None:
        """Create the event logs table if it doesn't exist."""
        self.client.query(CREATE_EVENT_LOGS_TABLE_SQL.format(table_id=self.table_id)).result()
        logger.info(f"Ensured event logs table exists: {self.table_id}")

    def write(self, entry: EventLogEntry) -> None:
        """Insert one event log row.

        Raises:
            EventLogError: If BigQuery reports insert errors.
        """
        errors = self.client.insert_rows_json(self.table_id, [entry.to_dict()])
        if errors:
            raise EventLogError(f"Failed to insert event log row: {errors}")
