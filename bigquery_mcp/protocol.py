"""JSON-RPC 2.0 request/response envelopes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union

from .errors import InvalidRequest, ProtocolError

JSONRPC_VERSION = "2.0"

RequestId = Union[str, int, None]


@dataclass(frozen=True)
class RequestEnvelope:
    id: RequestId
    method: str
    params: Dict[str, Any] = field(default_factory=dict)
    is_notification: bool = False

    @classmethod
    def from_dict(cls, message: Any) -> "RequestEnvelope":
        if not isinstance(message, dict):
            raise InvalidRequest("Request must be a JSON object")
        method = message.get("method")
        if not isinstance(method, str) or not method:
            raise InvalidRequest("Request is missing a method name")
        params = message.get("params")
        if params is None:
            params = {}
        if not isinstance(params, dict):
            raise InvalidRequest("Request params must be an object")
        return cls(
            id=message.get("id"),
            method=method,
            params=params,
            is_notification="id" not in message,
        )


@dataclass(frozen=True)
class ResponseEnvelope:
    id: RequestId
    result: Optional[Dict[str, Any]] = None
    error: Optional[ProtocolError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"jsonrpc": JSONRPC_VERSION, "id": self.id}
        if self.error is not None:
            body["error"] = self.error.to_dict()
        else:
            body["result"] = self.result if self.result is not None else {}
        return body
