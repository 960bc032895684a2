"""
Addressing of BigQuery tables and views as MCP resources.

    bigquery://{project}/{dataset}/{table}/schema
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict
from urllib.parse import urlsplit

from .errors import InvalidResource

URI_SCHEME = "bigquery"
SCHEMA_PATH = "schema"
SCHEMA_MIME_TYPE = "application/json"


class ObjectKind(str, Enum):
    TABLE = "table"
    VIEW = "view"


@dataclass(frozen=True)
class WarehouseObjectRef:
    project_id: str
    dataset_id: str
    table_id: str

    @property
    def qualified_name(self) -> str:
        return f"{self.project_id}.{self.dataset_id}.{self.table_id}"


@dataclass(frozen=True)
class ResourceDescriptor:
    uri: str
    name: str
    mime_type: str = SCHEMA_MIME_TYPE

    def to_dict(self) -> Dict[str, Any]:
        return {"uri": self.uri, "mimeType": self.mime_type, "name": self.name}


def encode_resource_uri(ref: WarehouseObjectRef) -> str:
    return f"{URI_SCHEME}://{ref.project_id}/{ref.dataset_id}/{ref.table_id}/{SCHEMA_PATH}"


def decode_resource_uri(uri: str) -> WarehouseObjectRef:
    """
    Parse a resource URI back into a WarehouseObjectRef.

    Segments are read from the end of the path: the last must be ``schema``,
    the two before it are the table and dataset ids.

    Raises:
        InvalidResource: wrong scheme, wrong trailing segment, or too few segments.
    """
    if not isinstance(uri, str) or not uri:
        raise InvalidResource("Invalid resource URI: expected a non-empty string")

    parts = urlsplit(uri)
    if parts.scheme != URI_SCHEME:
        raise InvalidResource(f"Invalid resource URI: {uri}")

    segments = parts.path.split("/")
    if len(segments) < 4 or segments[-1] != SCHEMA_PATH:
        raise InvalidResource(f"Invalid resource URI: {uri}")

    dataset_id, table_id = segments[-3], segments[-2]
    if not (parts.netloc and dataset_id and table_id):
        raise InvalidResource(f"Invalid resource URI: {uri}")

    return WarehouseObjectRef(parts.netloc, dataset_id, table_id)


def describe_resource(ref: WarehouseObjectRef, kind: ObjectKind) -> ResourceDescriptor:
    return ResourceDescriptor(
        uri=encode_resource_uri(ref),
        name=f'"{ref.dataset_id}.{ref.table_id}" {kind.value} schema',
    )
