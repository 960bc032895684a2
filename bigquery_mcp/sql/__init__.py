"""SQL guard: lexical read-only check and INFORMATION_SCHEMA qualification."""
from .safety import FORBIDDEN_KEYWORDS, QueryClassification, classify_query
from .rewrite import mentions_information_schema, qualify_information_schema

__all__ = [
    "FORBIDDEN_KEYWORDS",
    "QueryClassification",
    "classify_query",
    "mentions_information_schema",
    "qualify_information_schema",
]
