from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional, Sequence, Union

from SolrClient.core.query import QueryExpression, as_query

DEFAULT_ROWS = 100_000_000
# Largest 32-bit signed int; Solr rejects larger `rows` values.
MAX_ROWS = 2_147_483_647


class Order(Enum):
    """Sort direction."""

    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True, slots=True)
class SortOrder:
    """One `sort` entry: field plus direction.

    Attributes:
        field: Solr field name.
        order: Sort direction, ascending by default.
    """

    field: str
    order: Order = Order.ASC

    def render(self) -> str:
        return f"{self.field} {self.order.value}"

    @classmethod
    def parse(cls, text: str) -> SortOrder:
        """Parse `"field"` or `"field asc|desc"` into a `SortOrder`.

        Raises:
            ValueError: If the text is empty or the direction is unknown.
        """
        parts = text.split()
        if not parts or len(parts) > 2:
            raise ValueError(f"Invalid sort order: {text!r}")
        if len(parts) == 1:
            return cls(parts[0])
        try:
            order = Order(parts[1].lower())
        except ValueError as e:
            raise ValueError(f"Invalid sort direction in {text!r}: expected asc or desc") from e
        return cls(parts[0], order)


@dataclass(frozen=True, slots=True)
class RandomOrder:
    """Sentinel type for random result ordering. Use the `RANDOM` instance."""


RANDOM = RandomOrder()


@dataclass(frozen=True, slots=True)
class FacetFieldQuery:
    """Facet over the terms of one field.

    The optional settings are sent as per-field overrides
    (`f.<field>.facet.<name>`), so several field facets can carry different
    limits in one request.
    """

    field: str
    prefix: Optional[str] = None
    limit: Optional[int] = None
    min_count: Optional[int] = None
    sort: Optional[str] = None
    missing: Optional[bool] = None

    def parameters(self) -> Iterator[tuple[str, str]]:
        yield "facet.field", self.field
        overrides = (
            ("prefix", self.prefix),
            ("limit", self.limit),
            ("mincount", self.min_count),
            ("sort", self.sort),
            ("missing", self.missing),
        )
        for name, value in overrides:
            if value is None:
                continue
            if isinstance(value, bool):
                value = "true" if value else "false"
            yield f"f.{self.field}.facet.{name}", str(value)


@dataclass(frozen=True, slots=True)
class FacetQuery:
    """Facet counting the documents that match an arbitrary query."""

    query: QueryExpression

    def __post_init__(self) -> None:
        object.__setattr__(self, "query", as_query(self.query))

    def parameters(self) -> Iterator[tuple[str, str]]:
        yield "facet.query", self.query.render()


FacetSpec = Union[FacetFieldQuery, FacetQuery]


@dataclass(frozen=True, slots=True)
class HighlightingParameters:
    """Highlighting request.

    Attributes:
        fields: Fields to highlight (`hl.fl`).
        before_term: Markup inserted before each match (`hl.simple.pre`).
        after_term: Markup inserted after each match (`hl.simple.post`).
        snippets: Maximum snippets per field (`hl.snippets`).
        fragsize: Snippet size in characters (`hl.fragsize`).
    """

    fields: Sequence[str] = ()
    before_term: Optional[str] = None
    after_term: Optional[str] = None
    snippets: Optional[int] = None
    fragsize: Optional[int] = None


@dataclass(frozen=True, slots=True)
class QueryOptions:
    """Optional request settings. Each one left as `None` adds no parameter.

    Attributes:
        start: Offset of the first returned document.
        rows: Maximum number of documents; the executer default applies when None.
        order_by: Sort orders in priority order, or `RANDOM`.
        fields: Fields to return (`fl`).
        facet_queries: Field and query facets.
        highlight: Highlighting settings.
        filter_queries: Filter queries (`fq`), cached separately by Solr.
    """

    start: Optional[int] = None
    rows: Optional[int] = None
    order_by: Union[Sequence[SortOrder], RandomOrder, None] = None
    fields: Optional[Sequence[str]] = None
    facet_queries: Optional[Sequence[FacetSpec]] = None
    highlight: Optional[HighlightingParameters] = None
    filter_queries: Optional[Sequence[QueryExpression]] = None

    @property
    def is_random(self) -> bool:
        return isinstance(self.order_by, RandomOrder)
