"""Project-specific exceptions for SolrClient."""

from __future__ import annotations


class SolrClientError(Exception):
    """Base exception for the project."""


class SolrConnectionError(SolrClientError):
    """Raised when the HTTP call to the Solr server fails.

    Attributes:
        status_code: HTTP status of the failed response, if one was received.
        body: Raw response text, if one was received.
    """

    def __init__(self, message: str, *, status_code: int | None = None, body: str | None = None) -> None:
        """Build exception payload for transport and HTTP failures."""
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class SolrParseError(SolrClientError):
    """Raised when a Solr response body cannot be decoded."""


class MissingUniqueKeyError(ValueError, SolrClientError):
    """Raised when random ordering is requested without a unique key field."""

    def __init__(self) -> None:
        """Build exception payload for a missing unique key."""
        super().__init__(
            "Random ordering requires a unique key field; "
            "set query.unique_key or mark one on the document type."
        )
