"""Solr query expressions.

Each query type renders itself into the Lucene/Solr syntax that is sent as the
`q` (or `fq` / `facet.query`) parameter.

Rules
- `SolrQuery` is passed through unmodified.
- Field values are escaped; values containing whitespace are quoted.
- Range bounds that are `None` render as `*`.
- Compound queries are always parenthesized.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Protocol, Sequence


_RE_SPECIAL = re.compile(r'([+\-!(){}\[\]^"~*?:\\/]|&&|\|\|)')
_RE_WHITESPACE = re.compile(r"\s")


class QueryExpression(Protocol):
    """Anything that renders into a Solr query string."""

    def render(self) -> str:
        """Return the Solr query string."""
        raise NotImplementedError


def escape_value(value: Any) -> str:
    """Escape a raw value for use on the right-hand side of `field:value`.

    Args:
        value: Raw value. Booleans render as `true`/`false`, datetimes in
            Solr's UTC `Z` format, anything else with `str()`.

    Returns:
        Escaped value, quoted when it contains whitespace.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        text = value.strftime("%Y-%m-%dT%H:%M:%SZ")
    else:
        text = str(value)
    if _RE_WHITESPACE.search(text):
        return '"' + text.replace("\\", "\\\\").replace('"', '\\"') + '"'
    return _RE_SPECIAL.sub(r"\\\1", text)


def _bound(value: Any) -> str:
    if value is None:
        return "*"
    return escape_value(value)


@dataclass(frozen=True, slots=True)
class SolrQuery:
    """Opaque query expression, sent unmodified."""

    query: str = ""

    def render(self) -> str:
        return self.query

    def __str__(self) -> str:
        return self.render()


@dataclass(frozen=True, slots=True)
class SolrQueryByField:
    """Single `field:value` predicate."""

    field: str
    value: Any

    def render(self) -> str:
        return f"{self.field}:{escape_value(self.value)}"

    def __str__(self) -> str:
        return self.render()


@dataclass(frozen=True, slots=True)
class SolrQueryByRange:
    """Range predicate, `field:[start TO end]` or `field:{start TO end}`."""

    field: str
    start: Any = None
    end: Any = None
    inclusive: bool = True

    def render(self) -> str:
        left, right = ("[", "]") if self.inclusive else ("{", "}")
        return f"{self.field}:{left}{_bound(self.start)} TO {_bound(self.end)}{right}"

    def __str__(self) -> str:
        return self.render()


@dataclass(frozen=True, slots=True)
class SolrQueryInList:
    """Disjunction matching any of the given values on one field.

    Renders `(field:v1 OR field:v2 ...)`. This is how specific documents are
    referenced by their unique key.
    """

    field: str
    values: Sequence[Any]

    def render(self) -> str:
        return "(" + " OR ".join(SolrQueryByField(self.field, v).render() for v in self.values) + ")"

    def __str__(self) -> str:
        return self.render()


@dataclass(frozen=True, slots=True)
class SolrMultipleCriteriaQuery:
    """Several queries joined with AND or OR."""

    queries: Sequence[QueryExpression]
    operator: str = "AND"

    def __post_init__(self) -> None:
        op = self.operator.upper()
        if op not in ("AND", "OR"):
            raise ValueError(f"Unsupported operator: {self.operator}")
        object.__setattr__(self, "operator", op)

    def render(self) -> str:
        parts = [q.render() for q in self.queries]
        parts = [p for p in parts if p]
        if not parts:
            return ""
        return "(" + f" {self.operator} ".join(parts) + ")"

    def __str__(self) -> str:
        return self.render()


def as_query(query: QueryExpression | str) -> QueryExpression:
    """Wrap a plain string into `SolrQuery`; pass query objects through."""
    if isinstance(query, str):
        return SolrQuery(query)
    return query
