from __future__ import annotations

import re

from ..errors import AmbiguousIntrospection

INFORMATION_SCHEMA = "INFORMATION_SCHEMA"

# FROM INFORMATION_SCHEMA.TABLES  or  FROM dataset.INFORMATION_SCHEMA.TABLES
TABLES_INTROSPECTION_RE = re.compile(
    r"FROM\s+(?:(\w+)\.)?INFORMATION_SCHEMA\.TABLES", re.IGNORECASE
)

AMBIGUOUS_MESSAGE = (
    "A dataset must be specified when querying INFORMATION_SCHEMA "
    "(e.g. dataset.INFORMATION_SCHEMA.TABLES)"
)


def mentions_information_schema(sql: str) -> bool:
    return INFORMATION_SCHEMA in (sql or "").upper()


def qualify_information_schema(sql: str, project_id: str) -> str:
    """
    Fully qualify `dataset.INFORMATION_SCHEMA.TABLES` references with the
    server's project, using BigQuery backtick quoting.

    Only the TABLES view is rewritten; other introspection views pass through.

    Raises:
        AmbiguousIntrospection: a reference has no dataset qualifier.
    """
    def _qualify(match: "re.Match[str]") -> str:
        dataset = match.group(1)
        if not dataset:
            raise AmbiguousIntrospection(AMBIGUOUS_MESSAGE)
        return f"FROM `{project_id}.{dataset}.INFORMATION_SCHEMA.TABLES`"

    return TABLES_INTROSPECTION_RE.sub(_qualify, sql)
