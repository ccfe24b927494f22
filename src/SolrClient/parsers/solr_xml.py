"""Solr XML response parser.

Parses the `wt=xml` response format into `SolrQueryResults`:

    <response>
      <lst name="responseHeader">...</lst>
      <result name="response" numFound="2" start="0" maxScore="1.0">
        <doc><int name="id">1</int><str name="name">...</str></doc>
      </result>
      <lst name="facet_counts">
        <lst name="facet_queries"><int name="price:[0 TO 10]">3</int></lst>
        <lst name="facet_fields"><lst name="cat"><int name="book">2</int></lst></lst>
      </lst>
      <lst name="highlighting">
        <lst name="1"><arr name="name"><str>...</str></arr></lst>
      </lst>
    </response>
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from datetime import datetime
from typing import Any, Optional

from dateutil import parser as dt_parser

from SolrClient.core.mapping import build_document
from SolrClient.core.results import ResponseHeader, SolrQueryResults
from SolrClient.errors import SolrParseError


def _parse_dt(text: str) -> datetime:
    """Parse a Solr date value (ISO 8601, UTC `Z` suffix)."""
    return dt_parser.isoparse(text)


def _parse_bool(text: str) -> bool:
    return text.strip().lower() == "true"


_SCALARS = {
    "str": str,
    "int": int,
    "long": int,
    "short": int,
    "float": float,
    "double": float,
    "bool": _parse_bool,
    "date": _parse_dt,
}


def _value(elem: ET.Element) -> Any:
    """Convert one typed XML element into a Python value.

    Raises:
        SolrParseError: If the element type is unknown or its text is invalid.
    """
    tag = elem.tag
    if tag == "null":
        return None
    if tag == "arr":
        return [_value(child) for child in elem]
    if tag in ("lst", "doc"):
        return _named_values(elem)
    convert = _SCALARS.get(tag)
    if convert is None:
        raise SolrParseError(f"Unsupported value element: <{tag}>")
    text = elem.text or ""
    try:
        return convert(text) if tag == "str" else convert(text.strip())
    except (TypeError, ValueError, OverflowError) as e:
        raise SolrParseError(f"Invalid <{tag}> value: {text!r}") from e


def _named_values(elem: ET.Element) -> dict[str, Any]:
    return {child.get("name", ""): _value(child) for child in elem}


def _find_named(parent: ET.Element, tag: str, name: str) -> Optional[ET.Element]:
    for child in parent.findall(tag):
        if child.get("name") == name:
            return child
    return None


class XmlResultParser:
    """Parse Solr XML responses into typed documents.

    Args:
        doc_type: Dataclass to build documents into; plain dicts when None.
    """

    def __init__(self, doc_type: Optional[type] = None) -> None:
        self.doc_type = doc_type

    def parse(self, text: str) -> SolrQueryResults:
        """Parse one response body.

        Args:
            text: Raw XML returned by the server.

        Returns:
            Documents with paging, facet and highlighting metadata.

        Raises:
            SolrParseError: If the XML is malformed or has no result element.
        """
        if not text or not text.strip():
            raise SolrParseError("Empty Solr response")
        try:
            root = ET.fromstring(text)
        except ET.ParseError as e:
            raise SolrParseError(f"Malformed Solr XML response: {e}") from e

        if root.tag != "response":
            raise SolrParseError(f"Unexpected root element: <{root.tag}>")

        result = _find_named(root, "result", "response")
        if result is None:
            raise SolrParseError("Solr response has no <result name=\"response\"> element")

        try:
            num_found = int(result.get("numFound", "0"))
            start = int(result.get("start", "0"))
            max_score_raw = result.get("maxScore")
            max_score = float(max_score_raw) if max_score_raw is not None else None
        except ValueError as e:
            raise SolrParseError(f"Invalid result attributes: {result.attrib}") from e

        documents = [self._document(doc) for doc in result.findall("doc")]
        facet_queries, facet_fields = self._facets(root)

        return SolrQueryResults(
            documents,
            num_found=num_found,
            start=start,
            max_score=max_score,
            header=self._header(root),
            facet_queries=facet_queries,
            facet_fields=facet_fields,
            highlights=self._highlights(root),
        )

    def _document(self, elem: ET.Element) -> Any:
        values = _named_values(elem)
        if self.doc_type is None:
            return values
        try:
            return build_document(self.doc_type, values)
        except TypeError as e:
            raise SolrParseError(f"Cannot build {self.doc_type.__name__} from {sorted(values)}: {e}") from e

    @staticmethod
    def _header(root: ET.Element) -> ResponseHeader:
        elem = _find_named(root, "lst", "responseHeader")
        if elem is None:
            return ResponseHeader()
        values = _named_values(elem)
        params = values.get("params")
        return ResponseHeader(
            status=int(values.get("status") or 0),
            qtime=int(values.get("QTime") or 0),
            params=params if isinstance(params, dict) else {},
        )

    @staticmethod
    def _facets(root: ET.Element) -> tuple[dict[str, int], dict[str, list[tuple[str, int]]]]:
        counts = _find_named(root, "lst", "facet_counts")
        if counts is None:
            return {}, {}

        facet_queries: dict[str, int] = {}
        queries = _find_named(counts, "lst", "facet_queries")
        if queries is not None:
            for child in queries:
                facet_queries[child.get("name", "")] = int(_value(child) or 0)

        facet_fields: dict[str, list[tuple[str, int]]] = {}
        fields = _find_named(counts, "lst", "facet_fields")
        if fields is not None:
            for field_elem in fields:
                # Order matters: Solr sorts terms by count or index.
                facet_fields[field_elem.get("name", "")] = [
                    (term.get("name", ""), int(_value(term) or 0)) for term in field_elem
                ]
        return facet_queries, facet_fields

    @staticmethod
    def _highlights(root: ET.Element) -> dict[str, dict[str, list[str]]]:
        elem = _find_named(root, "lst", "highlighting")
        if elem is None:
            return {}
        out: dict[str, dict[str, list[str]]] = {}
        for doc in elem:
            snippets: dict[str, list[str]] = {}
            for field_elem in doc:
                value = _value(field_elem)
                snippets[field_elem.get("name", "")] = value if isinstance(value, list) else [value]
            out[doc.get("name", "")] = snippets
        return out
