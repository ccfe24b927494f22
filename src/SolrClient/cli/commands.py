"""Command implementations for SolrClient CLI.

Encapsulates the query command's logic, separated from CLI parameter handling
and output formatting.
"""

from __future__ import annotations

from dataclasses import dataclass

from SolrClient.core.options import QueryOptions
from SolrClient.core.query import QueryExpression
from SolrClient.renderers import OutputWriter
from SolrClient.services.executer import SolrQueryExecuter
from SolrClient.utils.log import log


@dataclass(slots=True)
class QueryCommand:
    """Run one query and hand the results to the output writer."""

    executer: SolrQueryExecuter
    output_writer: OutputWriter
    query: QueryExpression
    options: QueryOptions

    def execute(self) -> None:
        rendered = self.query.render()
        log.debug("Running query q=%s options=%s", rendered, self.options)
        results = self.executer.execute(self.query, self.options)
        log.info("Fetched %d of %d documents", len(results), results.num_found)
        self.output_writer.write_query_result(results, rendered)
