"""Query executer.

Translates a query plus `QueryOptions` into Solr request parameters, calls the
connection, and hands the response body to the result parser.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Optional

from SolrClient.connection.base import Connection, ParamValue
from SolrClient.core.mapping import field_value
from SolrClient.core.options import DEFAULT_ROWS, MAX_ROWS, QueryOptions
from SolrClient.core.query import QueryExpression, SolrQueryInList, as_query
from SolrClient.core.results import SolrQueryResults
from SolrClient.errors import MissingUniqueKeyError
from SolrClient.parsers.base import ResultParser
from SolrClient.services.randomizer import ListRandomizer, ShuffleListRandomizer
from SolrClient.utils.log import log, summarize_params

SELECT_HANDLER = "/select"


def _add(params: dict[str, ParamValue], key: str, value: str) -> None:
    """Add a parameter, turning repeated keys into a list of values."""
    existing = params.get(key)
    if existing is None:
        params[key] = value
    elif isinstance(existing, str):
        params[key] = [existing, value]
    else:
        existing.append(value)


@dataclass(slots=True)
class SolrQueryExecuter:
    """Run queries against one Solr request handler.

    Attributes:
        connection: Performs the HTTP GET.
        parser: Decodes response bodies.
        randomizer: Shuffles identifiers for random ordering.
        unique_key: Unique key field name; required only for random ordering.
        default_rows: `rows` sent when the options do not set one.
        handler: Request handler path.
    """

    connection: Connection
    parser: ResultParser
    randomizer: ListRandomizer = field(default_factory=ShuffleListRandomizer)
    unique_key: Optional[str] = None
    default_rows: int = DEFAULT_ROWS
    handler: str = SELECT_HANDLER

    def execute(
        self,
        query: QueryExpression | str,
        options: Optional[QueryOptions] = None,
    ) -> SolrQueryResults:
        """Execute a query.

        Connection and parser errors propagate unchanged.

        Args:
            query: Query expression, or a raw query string.
            options: Optional request settings.

        Returns:
            Parsed results.
        """
        options = options or QueryOptions()
        if options.is_random:
            return self._execute_random(as_query(query), options)
        params = self.build_parameters(query, options)
        return self._fetch(params)

    def build_parameters(
        self,
        query: QueryExpression | str,
        options: Optional[QueryOptions] = None,
    ) -> dict[str, ParamValue]:
        """Build the request parameters for `query` and `options`.

        Keys given once map to a string; keys given several times
        (`facet.field`, `facet.query`, `fq`) map to a list in insertion order.
        The random ordering sentinel adds no `sort`.

        Args:
            query: Query expression, or a raw query string.
            options: Optional request settings.

        Returns:
            Parameter mapping for the connection.
        """
        options = options or QueryOptions()
        params: dict[str, ParamValue] = {
            "q": as_query(query).render(),
            "rows": str(options.rows if options.rows is not None else self.default_rows),
        }

        if options.start is not None:
            params["start"] = str(options.start)

        if options.order_by and not options.is_random:
            params["sort"] = ",".join(order.render() for order in options.order_by)

        if options.fields:
            params["fl"] = ",".join(options.fields)

        for fq in options.filter_queries or ():
            _add(params, "fq", as_query(fq).render())

        if options.facet_queries:
            params["facet"] = "true"
            for facet in options.facet_queries:
                for key, value in facet.parameters():
                    _add(params, key, value)

        hl = options.highlight
        if hl is not None:
            params["hl"] = "true"
            if hl.fields:
                params["hl.fl"] = ",".join(hl.fields)
            if hl.before_term is not None:
                params["hl.simple.pre"] = hl.before_term
            if hl.after_term is not None:
                params["hl.simple.post"] = hl.after_term
            if hl.snippets is not None:
                params["hl.snippets"] = str(hl.snippets)
            if hl.fragsize is not None:
                params["hl.fragsize"] = str(hl.fragsize)

        return params

    def _fetch(self, params: dict[str, ParamValue]) -> SolrQueryResults:
        log.debug("Solr query: handler=%s params=%s", self.handler, summarize_params(params))
        text = self.connection.get(self.handler, params)
        results = self.parser.parse(text)
        log.debug("Solr query parsed %d documents (numFound=%s)", len(results), results.num_found)
        return results

    def _execute_random(self, query: QueryExpression, options: QueryOptions) -> SolrQueryResults:
        """Random ordering in two round trips.

        Solr has no random sort, so all matching identifiers are fetched first,
        shuffled here, and the first `rows` of them are fetched in full.
        """
        if not self.unique_key:
            raise MissingUniqueKeyError()

        id_params: dict[str, ParamValue] = {
            "q": query.render(),
            "rows": str(MAX_ROWS),
            "fl": self.unique_key,
        }
        for fq in options.filter_queries or ():
            _add(id_params, "fq", as_query(fq).render())

        candidates = list(self._fetch(id_params))
        self.randomizer.randomize(candidates)

        rows = options.rows if options.rows is not None else self.default_rows
        ids = [field_value(doc, self.unique_key) for doc in candidates[:rows]]
        ids = [i for i in ids if i is not None]
        log.debug("Random order: %d candidates, fetching %d", len(candidates), len(ids))
        if not ids:
            return SolrQueryResults()

        fields = options.fields
        if fields and self.unique_key not in fields:
            # Reordering below reads the unique key from each document.
            fields = [*fields, self.unique_key]
        narrowed = dataclasses.replace(
            options,
            fields=fields,
            order_by=None,
            start=None,
            rows=len(ids),
            filter_queries=None,
        )
        results = self._fetch(self.build_parameters(SolrQueryInList(self.unique_key, ids), narrowed))

        position = {str(i): idx for idx, i in enumerate(ids)}
        results.sort(key=lambda doc: position.get(str(field_value(doc, self.unique_key)), len(position)))
        return results
