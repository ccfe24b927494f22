"""Connection abstraction used by the query executer."""

from __future__ import annotations

from typing import Mapping, Protocol, Sequence, Union

ParamValue = Union[str, Sequence[str]]


class Connection(Protocol):
    """Performs HTTP GETs against a Solr core."""

    def get(self, path: str, params: Mapping[str, ParamValue]) -> str:
        """Issue a GET and return the raw response text.

        Args:
            path: Request handler path relative to the core URL (e.g. `/select`).
            params: Query parameters; sequence values are sent as repeated pairs.

        Raises:
            SolrConnectionError: On network or HTTP failure.
        """
        raise NotImplementedError
