"""Result parser abstraction used by the query executer."""

from __future__ import annotations

from typing import Protocol

from SolrClient.core.results import SolrQueryResults


class ResultParser(Protocol):
    """Converts a raw Solr response body into a result set."""

    def parse(self, text: str) -> SolrQueryResults:
        """Parse response text.

        Raises:
            SolrParseError: On malformed input.
        """
        raise NotImplementedError
