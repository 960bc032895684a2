"""
Error taxonomy for the BigQuery MCP server.

ProtocolError subclasses abort a request and are returned to the client as
JSON-RPC errors. GatewayError wraps anything the warehouse raises; whether it
becomes a protocol error or tool output is decided by the router.
"""

from __future__ import annotations

from typing import Any, Dict

from mcp.types import INTERNAL_ERROR, INVALID_PARAMS, INVALID_REQUEST, METHOD_NOT_FOUND


class ConfigError(ValueError):
    """Startup configuration is missing or invalid."""


class GatewayError(RuntimeError):
    """The warehouse (or its transport/auth layer) failed."""


class ProtocolError(Exception):
    """A request that must fail at the protocol level."""

    code = INVALID_PARAMS

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "data": {"kind": type(self).__name__},
        }


class InvalidRequest(ProtocolError):
    code = INVALID_REQUEST


class UnknownMethod(ProtocolError):
    code = METHOD_NOT_FOUND


class InternalError(ProtocolError):
    code = INTERNAL_ERROR


class InvalidResource(ProtocolError):
    """Resource URI could not be decoded."""


class UnknownTool(ProtocolError):
    pass


class MissingArgument(ProtocolError):
    pass


class ReadOnlyViolation(ProtocolError):
    """SQL text contains a forbidden (mutating) keyword."""


class AmbiguousIntrospection(ProtocolError):
    """INFORMATION_SCHEMA.TABLES referenced without a dataset qualifier."""
