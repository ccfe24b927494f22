"""HTTP connection to a Solr core.

Issues GET requests with `requests` and returns the raw XML body. Decoding is
handled by the result parser.
"""

from __future__ import annotations

from typing import Mapping, Optional

import requests

from SolrClient.connection.base import ParamValue
from SolrClient.errors import SolrConnectionError
from SolrClient.utils.log import log, summarize_params

DEFAULT_TIMEOUT = 30.0
RESPONSE_FORMAT = "xml"

HEADERS = {
    "User-Agent": "solr-client/0.1",
    "Accept": "application/xml,text/xml;q=0.9,*/*;q=0.8",
}


class HttpSolrConnection:
    """Low-level HTTP client for one Solr core.

    Responsible only for making network requests and returning the raw
    response text. The request is sent once; there is no retry.
    """

    def __init__(self, server_url: str, *, timeout: Optional[float] = None) -> None:
        """Initialize the connection with a reusable HTTP session.

        Args:
            server_url: Core base URL, e.g. `http://localhost:8983/solr/products`.
            timeout: Request timeout in seconds.
        """
        self.server_url = server_url.rstrip("/")
        self.timeout = timeout or DEFAULT_TIMEOUT
        self._session = requests.Session()

    def close(self) -> None:
        """Close the underlying HTTP session and release pooled connections.
        """
        self._session.close()

    def __enter__(self) -> HttpSolrConnection:
        """Enter context manager."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit context manager and close session."""
        self.close()

    def get(self, path: str, params: Mapping[str, ParamValue]) -> str:
        """Issue a GET against `<server_url><path>`.

        Args:
            path: Handler path, e.g. `/select`.
            params: Query parameters. List values become repeated pairs.
                `wt=xml` is added unless the caller set `wt`.

        Returns:
            Response body text.

        Raises:
            SolrConnectionError: On connection failure, timeout, or non-2xx status.
        """
        url = self.server_url + "/" + path.lstrip("/")
        request_params: dict[str, ParamValue] = dict(params)
        request_params.setdefault("wt", RESPONSE_FORMAT)

        log.debug("Solr GET %s params=%s", url, summarize_params(request_params))
        try:
            resp = self._session.get(url, params=request_params, headers=HEADERS, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise SolrConnectionError(f"Solr request failed: {url}: {e}") from e

        if not resp.ok:
            log.debug("Solr error response: status=%s body=%s", resp.status_code, resp.text[:500])
            raise SolrConnectionError(
                f"Solr returned HTTP {resp.status_code} for {url}",
                status_code=resp.status_code,
                body=resp.text,
            )

        log.debug("Solr response ok: status=%s bytes=%s", resp.status_code, len(resp.text))
        return resp.text
