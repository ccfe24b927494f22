from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional


@dataclass(frozen=True, slots=True)
class ResponseHeader:
    """The `responseHeader` section of a Solr response.

    Attributes:
        status: Solr status code, 0 on success.
        qtime: Server-side query time in milliseconds.
        params: Echoed request parameters, when the server sends them.
    """

    status: int = 0
    qtime: int = 0
    params: Mapping[str, Any] = field(default_factory=dict)


class SolrQueryResults(list):
    """Ordered documents of one response, plus the response metadata.

    Attributes:
        num_found: Total number of matching documents on the server.
        start: Offset of the first document in this page.
        max_score: Highest score, when scores were requested.
        header: Parsed response header.
        facet_queries: Count per `facet.query` text.
        facet_fields: `(term, count)` pairs per faceted field, in server order.
        highlights: Snippets per document unique key, then per field.
    """

    def __init__(
        self,
        documents: Iterable[Any] = (),
        *,
        num_found: int = 0,
        start: int = 0,
        max_score: Optional[float] = None,
        header: Optional[ResponseHeader] = None,
        facet_queries: Optional[dict[str, int]] = None,
        facet_fields: Optional[dict[str, list[tuple[str, int]]]] = None,
        highlights: Optional[dict[str, dict[str, list[str]]]] = None,
    ) -> None:
        super().__init__(documents)
        self.num_found = num_found
        self.start = start
        self.max_score = max_score
        self.header = header or ResponseHeader()
        self.facet_queries = facet_queries or {}
        self.facet_fields = facet_fields or {}
        self.highlights = highlights or {}

    def __repr__(self) -> str:
        return f"SolrQueryResults(num_found={self.num_found}, documents={list.__repr__(self)})"
