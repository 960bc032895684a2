"""
Tool execution for the BigQuery MCP server.

This is the only path from a client-supplied SQL string to the warehouse.
Every query goes through the same ordered pipeline:

    classify (read-only check) -> qualify INFORMATION_SCHEMA -> run

Malformed calls and policy violations raise ProtocolError. Warehouse
failures do not: they come back as a ToolResult with is_error=True so the
calling agent can read the message and retry with a corrected query.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ..config import ServerConfig
from ..errors import GatewayError, MissingArgument, ReadOnlyViolation, UnknownTool
from ..gateway import WarehouseGateway
from ..sql.rewrite import mentions_information_schema, qualify_information_schema
from ..sql.safety import classify_query

logger = logging.getLogger(__name__)

QUERY_TOOL_NAME = "query"

QUERY_TOOL = {
    "name": QUERY_TOOL_NAME,
    "description": "Run a read-only BigQuery SQL query",
    "inputSchema": {
        "type": "object",
        "properties": {
            "sql": {"type": "string", "description": "Read-only SQL query"},
            "maximumBytesBilled": {
                "type": "string",
                "description": "Maximum bytes billed (default: 1GB)",
            },
        },
        "required": ["sql"],
    },
}


@dataclass(frozen=True)
class ToolResult:
    """Tool output. is_error marks a warehouse failure, not a protocol failure."""

    text: str
    is_error: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "content": [{"type": "text", "text": self.text}],
            "isError": self.is_error,
        }


class QueryToolExecutor:
    def __init__(self, gateway: WarehouseGateway, config: ServerConfig):
        self.gateway = gateway
        self.config = config

    def list_tools(self) -> List[Dict[str, Any]]:
        return [QUERY_TOOL]

    def call_tool(self, name: str, arguments: Optional[Dict[str, Any]]) -> ToolResult:
        if name != QUERY_TOOL_NAME:
            raise UnknownTool(f"Unknown tool: {name}")

        if not isinstance(arguments, dict):
            arguments = {}
        sql = arguments.get("sql")
        if not isinstance(sql, str):
            raise MissingArgument("The 'sql' argument is required and must be a string")

        max_bytes_billed = arguments.get("maximumBytesBilled") or self.config.default_max_bytes_billed
        return self.run_query(sql, str(max_bytes_billed))

    def prepare_sql(self, sql: str) -> str:
        """Apply the read-only check and INFORMATION_SCHEMA rewrite, in that order."""
        # 1. Read-only check (raises before anything else sees the text)
        classification = classify_query(sql)
        if not classification.allowed:
            logger.warning("Rejected query: %s", classification.reason)
            raise ReadOnlyViolation(classification.reason)

        # 2. Qualify INFORMATION_SCHEMA.TABLES with the configured project
        if mentions_information_schema(sql):
            sql = qualify_information_schema(sql, self.config.project_id)
        return sql

    def run_query(self, sql: str, max_bytes_billed: str) -> ToolResult:
        sql = self.prepare_sql(sql)

        # 3. Execute the (possibly rewritten) text
        try:
            rows = self.gateway.run_query(sql, self.config.location, max_bytes_billed)
        except GatewayError as e:
            logger.warning("Query execution failed: %s", e)
            return ToolResult(text=f"Error executing query: {e}", is_error=True)

        return ToolResult(text=json.dumps(rows, indent=2, default=str))
