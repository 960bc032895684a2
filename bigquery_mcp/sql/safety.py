from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

# Whole-word, case-insensitive. This is a lexical filter: a keyword inside a
# string literal or comment is still rejected, and that is part of the contract.
FORBIDDEN_KEYWORDS = (
    "INSERT", "UPDATE", "DELETE", "CREATE", "DROP", "ALTER", "MERGE",
    "TRUNCATE", "GRANT", "REVOKE", "EXECUTE", "BEGIN", "COMMIT", "ROLLBACK",
)

FORBIDDEN_PATTERN = re.compile(
    r"\b(" + "|".join(FORBIDDEN_KEYWORDS) + r")\b", re.IGNORECASE
)

READ_ONLY_MESSAGE = "Only read-only queries are allowed."


@dataclass(frozen=True)
class QueryClassification:
    allowed: bool
    reason: Optional[str] = None
    keyword: Optional[str] = None

    @classmethod
    def allow(cls) -> "QueryClassification":
        return cls(allowed=True)

    @classmethod
    def reject(cls, keyword: str) -> "QueryClassification":
        return cls(
            allowed=False,
            reason=f"{READ_ONLY_MESSAGE} Forbidden keyword: {keyword}",
            keyword=keyword,
        )


def classify_query(sql: str) -> QueryClassification:
    """Decide whether `sql` is read-only, by keyword scan only."""
    match = FORBIDDEN_PATTERN.search(sql or "")
    if match:
        return QueryClassification.reject(match.group(1).upper())
    return QueryClassification.allow()
