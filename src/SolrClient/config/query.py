"""Query domain configuration: defaults applied by the query executer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from SolrClient.config.common import expect_int, expect_optional_str, get_section
from SolrClient.core.options import DEFAULT_ROWS, MAX_ROWS


@dataclass(frozen=True, slots=True)
class QueryConfig:
    """Executer defaults.

    Attributes:
        default_rows: `rows` sent when a request does not set one.
        unique_key: Schema unique key, used by random ordering when the
            document type does not mark one.
    """

    default_rows: int
    unique_key: str | None


def load_query(raw: Mapping[str, Any]) -> QueryConfig:
    """Load the optional `query` section."""
    section = get_section(raw, "query", required=False)
    return QueryConfig(
        default_rows=expect_int(section.get("default_rows", DEFAULT_ROWS), "query.default_rows"),
        unique_key=expect_optional_str(section.get("unique_key", "id"), "query.unique_key"),
    )


def check_query(config: QueryConfig) -> None:
    """Validate query defaults."""
    if config.default_rows < 0 or config.default_rows > MAX_ROWS:
        raise ValueError(f"query.default_rows must be between 0 and {MAX_ROWS}")
    if config.unique_key is not None and not config.unique_key.strip():
        raise ValueError("query.unique_key must not be empty")
