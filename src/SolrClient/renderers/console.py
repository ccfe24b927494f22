"""Console text output renderers.

Renders `SolrQueryResults` into human-friendly text and writes it through the
package logger.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from SolrClient.core.results import SolrQueryResults
from SolrClient.renderers.base import OutputWriter, document_fields
from SolrClient.utils.log import log


def _fmt_value(value: Any) -> str:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, (list, tuple)):
        return ", ".join(_fmt_value(v) for v in value)
    if value is None:
        return "-"
    return str(value)


def render_text(results: SolrQueryResults) -> str:
    """Render results into a human-readable text block.

    Args:
        results: Parsed results.

    Returns:
        A formatted string ready to be printed.
    """
    lines = [f"Found {results.num_found} documents (showing {len(results)} from {results.start})"]
    for idx, doc in enumerate(results, start=1):
        lines.append(f"{idx}.")
        for name, value in document_fields(doc).items():
            lines.append(f"   {name}: {_fmt_value(value)}")
    lines.append("")

    if results.facet_queries or results.facet_fields:
        lines.append("Facets:")
        for query, count in results.facet_queries.items():
            lines.append(f"   {query}: {count}")
        for field_name, terms in results.facet_fields.items():
            lines.append(f"   {field_name}: " + ", ".join(f"{term} ({count})" for term, count in terms))
        lines.append("")

    if results.highlights:
        lines.append("Highlights:")
        for key, fields in results.highlights.items():
            for field_name, snippets in fields.items():
                lines.append(f"   [{key}] {field_name}: " + " ... ".join(snippets))
        lines.append("")
    return "\n".join(lines).rstrip() + "\n"


class ConsoleOutputWriter(OutputWriter):
    """Write results to console via logging."""

    def write_query_result(self, results: SolrQueryResults, query: str) -> None:
        log.info("q=%s", query)
        for line in render_text(results).splitlines():
            log.info(line)

    def finalize(self, action: str) -> None:
        """No-op for console output."""
