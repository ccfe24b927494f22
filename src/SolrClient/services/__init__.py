"""Query service layer for SolrClient.

Provides the query executer and a factory wiring it to the configured
connection, parser and randomizer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from SolrClient.core.mapping import unique_key_of
from SolrClient.services.executer import SolrQueryExecuter
from SolrClient.services.randomizer import ListRandomizer, ShuffleListRandomizer

if TYPE_CHECKING:
    from SolrClient.config import AppConfig


def create_query_executer(config: AppConfig, doc_type: Optional[type] = None) -> SolrQueryExecuter:
    """Create a query executer from configuration.

    The unique key marked on `doc_type` wins over `query.unique_key`.

    Args:
        config: Application configuration.
        doc_type: Optional dataclass documents are built into.

    Returns:
        Configured SolrQueryExecuter instance.
    """
    from SolrClient.connection.http import HttpSolrConnection
    from SolrClient.parsers.solr_xml import XmlResultParser

    return SolrQueryExecuter(
        connection=HttpSolrConnection(config.server.url, timeout=config.server.timeout),
        parser=XmlResultParser(doc_type),
        randomizer=ShuffleListRandomizer(),
        unique_key=unique_key_of(doc_type) or config.query.unique_key,
        default_rows=config.query.default_rows,
        handler=config.server.select_path,
    )


__all__ = [
    "ListRandomizer",
    "ShuffleListRandomizer",
    "SolrQueryExecuter",
    "create_query_executer",
]
