"""JSON output renderers.

Renders `SolrQueryResults` into JSON-serializable objects and provides
JsonFileWriter for command output.
"""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Any

from SolrClient.core.results import SolrQueryResults
from SolrClient.renderers.base import OutputWriter, document_fields
from SolrClient.utils.log import log


def _jsonable(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    if isinstance(value, dict):
        return {str(k): _jsonable(v) for k, v in value.items()}
    return value


def render_json(results: SolrQueryResults) -> dict[str, Any]:
    """Render results into a JSON-serializable dict.

    Args:
        results: Parsed results.

    Returns:
        Paging metadata, documents, facets and highlights.
    """
    return {
        "num_found": results.num_found,
        "start": results.start,
        "max_score": results.max_score,
        "documents": [_jsonable(document_fields(doc)) for doc in results],
        "facets": {
            "queries": dict(results.facet_queries),
            "fields": {name: [[term, count] for term, count in terms] for name, terms in results.facet_fields.items()},
        },
        "highlighting": _jsonable(results.highlights),
    }


class JsonFileWriter(OutputWriter):
    """Accumulate results and write to JSON file on finalize."""

    def __init__(self, base_dir: str) -> None:
        """Initialize JSON writer.

        Args:
            base_dir: Base output directory.
        """
        self.output_dir = Path(base_dir) / "json"
        self.all_results: list[dict] = []

    def write_query_result(self, results: SolrQueryResults, query: str) -> None:
        """Accumulate query result for later writing."""
        self.all_results.append({"query": query, "results": render_json(results)})

    def finalize(self, action: str) -> None:
        """Write accumulated results to a timestamped JSON file.

        Args:
            action: The CLI command name (used in filename).
        """
        payload = json.dumps(self.all_results, ensure_ascii=False, indent=2)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        output_path = self.output_dir / f"{action}_{timestamp}.json"
        output_path.write_text(payload, encoding="utf-8")
        log.info("JSON saved to %s", output_path)
