# BigQuery MCP server
"""
A read-only BigQuery proxy for the Model Context Protocol.
"""

__version__ = "0.1.0"

from .resources import WarehouseObjectRef, decode_resource_uri, encode_resource_uri
from .router import RequestRouter
from .sql import classify_query, qualify_information_schema
from .tools.executor import QueryToolExecutor

__all__ = [
    "__version__",
    "RequestRouter",
    "QueryToolExecutor",
    "WarehouseObjectRef",
    "classify_query",
    "decode_resource_uri",
    "encode_resource_uri",
    "qualify_information_schema",
]
