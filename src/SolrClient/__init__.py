"""SolrClient: typed Solr queries in, typed result sets out."""

from __future__ import annotations

from SolrClient.connection.http import HttpSolrConnection
from SolrClient.core.mapping import solr_field
from SolrClient.core.options import (
    RANDOM,
    FacetFieldQuery,
    FacetQuery,
    HighlightingParameters,
    Order,
    QueryOptions,
    SortOrder,
)
from SolrClient.core.query import (
    SolrMultipleCriteriaQuery,
    SolrQuery,
    SolrQueryByField,
    SolrQueryByRange,
    SolrQueryInList,
)
from SolrClient.core.results import SolrQueryResults
from SolrClient.errors import MissingUniqueKeyError, SolrClientError, SolrConnectionError, SolrParseError
from SolrClient.parsers.solr_xml import XmlResultParser
from SolrClient.services import SolrQueryExecuter, create_query_executer

__all__ = [
    "RANDOM",
    "FacetFieldQuery",
    "FacetQuery",
    "HighlightingParameters",
    "HttpSolrConnection",
    "MissingUniqueKeyError",
    "Order",
    "QueryOptions",
    "SolrClientError",
    "SolrConnectionError",
    "SolrMultipleCriteriaQuery",
    "SolrParseError",
    "SolrQuery",
    "SolrQueryByField",
    "SolrQueryByRange",
    "SolrQueryExecuter",
    "SolrQueryInList",
    "SolrQueryResults",
    "SortOrder",
    "XmlResultParser",
    "create_query_executer",
    "solr_field",
]
