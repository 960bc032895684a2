"""
Pytest configuration and shared fixtures.
"""
import pytest

from bigquery_mcp.config import ServerConfig
from bigquery_mcp.errors import GatewayError
from bigquery_mcp.resources import ObjectKind, WarehouseObjectRef
from bigquery_mcp.router import RequestRouter


class FakeGateway:
    """In-memory WarehouseGateway that records every call."""

    def __init__(self, rows=None, schema=None, objects=None, error=None):
        self.rows = rows if rows is not None else [{"x": 1}]
        self.schema = schema if schema is not None else [
            {"name": "id", "type": "INTEGER", "mode": "REQUIRED"},
            {"name": "name", "type": "STRING", "mode": "NULLABLE"},
        ]
        self.objects = objects if objects is not None else []
        self.error = error
        self.queries = []
        self.schema_requests = []
        self.list_calls = 0

    def list_objects(self):
        self.list_calls += 1
        if self.error:
            raise GatewayError(self.error)
        return list(self.objects)

    def get_object_schema(self, ref):
        self.schema_requests.append(ref)
        if self.error:
            raise GatewayError(self.error)
        return self.schema

    def run_query(self, sql, location, max_bytes_billed):
        self.queries.append((sql, location, max_bytes_billed))
        if self.error:
            raise GatewayError(self.error)
        return self.rows


@pytest.fixture
def config():
    """Fixed server configuration."""
    return ServerConfig(project_id="proj", location="asia-northeast1")


@pytest.fixture
def gateway():
    return FakeGateway(
        objects=[
            (WarehouseObjectRef("proj", "sales", "orders"), ObjectKind.TABLE),
            (WarehouseObjectRef("proj", "sales", "orders_v"), ObjectKind.VIEW),
        ]
    )


@pytest.fixture
def failing_gateway():
    return FakeGateway(error="Syntax error: Unexpected identifier at [1:8]")


@pytest.fixture
def router(config, gateway):
    return RequestRouter(config, gateway)


def request(method, params=None, request_id=1):
    """Build a JSON-RPC request message."""
    message = {"jsonrpc": "2.0", "id": request_id, "method": method}
    if params is not None:
        message["params"] = params
    return message


# Markers
def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "mcp: marks tests related to MCP protocol handling")
    config.addinivalue_line("markers", "bigquery: marks tests of the BigQuery gateway")
