"""Base classes for output writers.

Provides abstraction for writing query results to console or files.
"""

from __future__ import annotations

import dataclasses
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Mapping, Sequence

from SolrClient.core.results import SolrQueryResults


def document_fields(doc: Any) -> dict[str, Any]:
    """Return a document's fields as a plain dict (dataclass or mapping)."""
    if dataclasses.is_dataclass(doc) and not isinstance(doc, type):
        return dataclasses.asdict(doc)
    if isinstance(doc, Mapping):
        return dict(doc)
    return {"value": doc}


class OutputWriter(ABC):
    """Abstract base class for command output writers."""

    @abstractmethod
    def write_query_result(self, results: SolrQueryResults, query: str) -> None:
        """Write results from a single query.

        Args:
            results: Parsed results.
            query: Rendered query string that produced them.
        """

    @abstractmethod
    def finalize(self, action: str) -> None:
        """Finalize output (e.g., write accumulated results to file).

        Args:
            action: The CLI command name (e.g., 'query').
        """


@dataclass(slots=True)
class MultiOutputWriter(OutputWriter):
    """Delegate output to multiple writers."""

    writers: Sequence[OutputWriter]

    def write_query_result(self, results: SolrQueryResults, query: str) -> None:
        for writer in self.writers:
            writer.write_query_result(results, query)

    def finalize(self, action: str) -> None:
        for writer in self.writers:
            writer.finalize(action)
