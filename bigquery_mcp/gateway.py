"""
Warehouse gateway: the only code that talks to BigQuery.

The rest of the server depends on the WarehouseGateway protocol, so tests can
swap in a fake and the router never sees a google-cloud type.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Iterator, List, Optional, Protocol, Tuple

from google.api_core.exceptions import GoogleAPIError
from google.auth.exceptions import GoogleAuthError
from google.cloud import bigquery

from .config import ServerConfig
from .errors import GatewayError
from .resources import ObjectKind, WarehouseObjectRef

logger = logging.getLogger(__name__)

# Errors that mean "the warehouse said no", reported back rather than crashing.
WAREHOUSE_ERRORS = (GoogleAPIError, GoogleAuthError)


class WarehouseGateway(Protocol):
    def list_objects(self) -> List[Tuple[WarehouseObjectRef, ObjectKind]]:
        ...

    def get_object_schema(self, ref: WarehouseObjectRef) -> List[Dict[str, Any]]:
        ...

    def run_query(self, sql: str, location: str, max_bytes_billed: str) -> List[Dict[str, Any]]:
        ...


def records_from_dataframe(df) -> List[Dict[str, Any]]:
    """Convert a result DataFrame to JSON-safe records (NaN -> null, timestamps -> ISO)."""
    if df is None or df.empty:
        return []
    # DATE and TIME columns keep their own ISO form instead of becoming datetimes
    calendar_columns = [c for c, dtype in df.dtypes.items() if str(dtype) in ("dbdate", "dbtime")]
    if calendar_columns:
        df = df.copy()
        for column in calendar_columns:
            df[column] = df[column].astype(str).where(df[column].notna(), None)
    return json.loads(
        df.to_json(orient="records", date_format="iso", date_unit="us", default_handler=str)
    )


class BigQueryGateway:
    """WarehouseGateway backed by google-cloud-bigquery."""

    def __init__(self, config: ServerConfig, client: Optional[bigquery.Client] = None):
        self.project_id = config.project_id
        self.client = client or bigquery.Client(
            project=config.project_id, location=config.location
        )

    def _iter_objects(self) -> Iterator[Tuple[WarehouseObjectRef, ObjectKind]]:
        datasets = list(self.client.list_datasets())
        logger.info("Found %d datasets", len(datasets))
        for dataset in datasets:
            tables = list(self.client.list_tables(dataset.dataset_id))
            logger.debug("Dataset %s has %d tables and views", dataset.dataset_id, len(tables))
            for table in tables:
                kind = ObjectKind.VIEW if table.table_type == "VIEW" else ObjectKind.TABLE
                yield WarehouseObjectRef(self.project_id, dataset.dataset_id, table.table_id), kind

    def list_objects(self) -> List[Tuple[WarehouseObjectRef, ObjectKind]]:
        try:
            return list(self._iter_objects())
        except WAREHOUSE_ERRORS as e:
            raise GatewayError(str(e)) from e

    def get_object_schema(self, ref: WarehouseObjectRef) -> List[Dict[str, Any]]:
        try:
            table = self.client.get_table(ref.qualified_name)
        except WAREHOUSE_ERRORS as e:
            raise GatewayError(str(e)) from e
        return [field.to_api_repr() for field in table.schema]

    def run_query(self, sql: str, location: str, max_bytes_billed: str) -> List[Dict[str, Any]]:
        try:
            job_config = bigquery.QueryJobConfig(maximum_bytes_billed=int(max_bytes_billed))
        except (TypeError, ValueError) as e:
            raise GatewayError(f"maximumBytesBilled must be an integer string: {max_bytes_billed!r}") from e

        logger.debug("Running query in %s (max bytes billed %s): %s", location, max_bytes_billed, sql)
        try:
            query_job = self.client.query(sql, job_config=job_config, location=location)
            df = query_job.to_dataframe()
        except WAREHOUSE_ERRORS as e:
            raise GatewayError(str(e)) from e
        return records_from_dataframe(df)
