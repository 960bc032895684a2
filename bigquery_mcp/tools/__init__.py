"""
Tools module for the BigQuery MCP server (MCP tool boundary).
"""

from .executor import QUERY_TOOL, QUERY_TOOL_NAME, QueryToolExecutor, ToolResult

__all__ = [
    "QUERY_TOOL",
    "QUERY_TOOL_NAME",
    "QueryToolExecutor",
    "ToolResult",
]
