"""
Request router: maps MCP methods to handlers.

There is no state across requests. Each request is decoded into a
RequestEnvelope, dispatched by method name, and answered with a
ResponseEnvelope that echoes the request id.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Dict, Optional

from mcp.types import LATEST_PROTOCOL_VERSION

from . import __version__
from .config import ServerConfig
from .errors import (
    GatewayError,
    InternalError,
    InvalidResource,
    ProtocolError,
    UnknownMethod,
)
from .gateway import WarehouseGateway
from .protocol import RequestEnvelope, ResponseEnvelope
from .resources import SCHEMA_MIME_TYPE, decode_resource_uri, describe_resource
from .tools.executor import QueryToolExecutor

logger = logging.getLogger(__name__)

SERVER_NAME = "mcp-server/bigquery"

# Returned by resources/list while enumeration is disabled. Some clients poll
# resources/list continuously and expect exactly this.
LIST_RESOURCES_ACK = {"success": True}

Handler = Callable[[Dict[str, Any]], Dict[str, Any]]


class RequestRouter:
    def __init__(self, config: ServerConfig, gateway: WarehouseGateway):
        self.config = config
        self.gateway = gateway
        self.tools = QueryToolExecutor(gateway, config)
        self.handlers: Dict[str, Handler] = {
            "initialize": self.initialize,
            "ping": self.ping,
            "resources/list": self.list_resources,
            "resources/read": self.read_resource,
            "tools/list": self.list_tools,
            "tools/call": self.call_tool,
        }

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------
    def handle_message(self, message: Any) -> Optional[Dict[str, Any]]:
        """Handle one decoded JSON message. Returns None for notifications."""
        try:
            request = RequestEnvelope.from_dict(message)
        except ProtocolError as e:
            request_id = message.get("id") if isinstance(message, dict) else None
            return ResponseEnvelope(request_id, error=e).to_dict()

        response = self.dispatch(request)
        if request.is_notification:
            return None
        return response.to_dict()

    def dispatch(self, request: RequestEnvelope) -> ResponseEnvelope:
        logger.debug("Dispatching %s (id=%r)", request.method, request.id)
        handler = self.handlers.get(request.method)
        try:
            if handler is None:
                if request.is_notification:
                    return ResponseEnvelope(request.id, result={})
                raise UnknownMethod(f"Unknown method: {request.method}")
            return ResponseEnvelope(request.id, result=handler(request.params))
        except ProtocolError as e:
            logger.info("%s failed: %s", request.method, e.message)
            return ResponseEnvelope(request.id, error=e)
        except GatewayError as e:
            logger.warning("%s failed in the warehouse: %s", request.method, e)
            return ResponseEnvelope(request.id, error=InternalError(str(e)))
        except Exception as e:
            logger.exception("Unexpected error handling %s", request.method)
            return ResponseEnvelope(request.id, error=InternalError(f"Internal error: {e}"))

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------
    def initialize(self, params: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "protocolVersion": params.get("protocolVersion") or LATEST_PROTOCOL_VERSION,
            "capabilities": {"resources": {}, "tools": {}},
            "serverInfo": {"name": SERVER_NAME, "version": __version__},
        }

    def ping(self, params: Dict[str, Any]) -> Dict[str, Any]:
        return {}

    def list_resources(self, params: Dict[str, Any]) -> Dict[str, Any]:
        if not self.config.enumerate_resources:
            return dict(LIST_RESOURCES_ACK)

        resources = [
            describe_resource(ref, kind).to_dict()
            for ref, kind in self.gateway.list_objects()
        ]
        logger.info("Found %d resources", len(resources))
        return {"resources": resources}

    def read_resource(self, params: Dict[str, Any]) -> Dict[str, Any]:
        uri = params.get("uri")
        ref = decode_resource_uri(uri)
        if ref.project_id != self.config.project_id:
            raise InvalidResource(
                f"Resource {uri} is outside project {self.config.project_id}"
            )

        fields = self.gateway.get_object_schema(ref)
        return {
            "contents": [
                {
                    "uri": uri,
                    "mimeType": SCHEMA_MIME_TYPE,
                    "text": json.dumps(fields, indent=2),
                }
            ]
        }

    def list_tools(self, params: Dict[str, Any]) -> Dict[str, Any]:
        return {"tools": self.tools.list_tools()}

    def call_tool(self, params: Dict[str, Any]) -> Dict[str, Any]:
        result = self.tools.call_tool(params.get("name"), params.get("arguments"))
        return result.to_dict()
