"""Mapping between Solr documents and Python dataclasses.

A document type is a plain dataclass. Fields may carry Solr metadata through
`solr_field()`; without it the attribute name is used as the Solr field name.

Example:

    @dataclass
    class Product:
        id: int = solr_field(unique_key=True)
        name: str = solr_field("name_t", default="")
        categories: list[str] = solr_field("cat", default_factory=list)
"""

from __future__ import annotations

import dataclasses
from typing import Any, Mapping

_SOLR_NAME = "solr_name"
_SOLR_UNIQUE_KEY = "solr_unique_key"


def solr_field(
    name: str | None = None,
    *,
    unique_key: bool = False,
    default: Any = dataclasses.MISSING,
    default_factory: Any = dataclasses.MISSING,
) -> Any:
    """Declare a dataclass field mapped to a Solr field.

    Args:
        name: Solr field name; defaults to the attribute name.
        unique_key: Whether this is the schema's unique key field.
        default: Field default, as for `dataclasses.field`.
        default_factory: Field default factory, as for `dataclasses.field`.

    Returns:
        A `dataclasses.Field` carrying the Solr metadata.
    """
    metadata = {_SOLR_NAME: name, _SOLR_UNIQUE_KEY: unique_key}
    if default_factory is not dataclasses.MISSING:
        return dataclasses.field(default_factory=default_factory, metadata=metadata)
    if default is not dataclasses.MISSING:
        return dataclasses.field(default=default, metadata=metadata)
    return dataclasses.field(metadata=metadata)


def _solr_name(f: dataclasses.Field) -> str:
    return f.metadata.get(_SOLR_NAME) or f.name


def field_map(doc_type: type) -> dict[str, str]:
    """Return a Solr field name -> attribute name mapping for `doc_type`.

    Raises:
        TypeError: If `doc_type` is not a dataclass.
    """
    if not dataclasses.is_dataclass(doc_type):
        raise TypeError(f"Document type must be a dataclass: {doc_type!r}")
    return {_solr_name(f): f.name for f in dataclasses.fields(doc_type) if f.init}


def unique_key_of(doc_type: type | None) -> str | None:
    """Return the Solr name of the unique key field of `doc_type`, if any."""
    if doc_type is None or not dataclasses.is_dataclass(doc_type):
        return None
    for f in dataclasses.fields(doc_type):
        if f.metadata.get(_SOLR_UNIQUE_KEY):
            return _solr_name(f)
    return None


def build_document(doc_type: type, values: Mapping[str, Any]) -> Any:
    """Instantiate `doc_type` from Solr field values.

    Unknown Solr fields are ignored. Mapped fields missing from `values` keep
    their dataclass default, or get `None` when they have none (e.g. when
    `fl` restricted the returned fields).
    """
    names = field_map(doc_type)
    kwargs: dict[str, Any] = {}
    for solr_name, attr in names.items():
        if solr_name in values:
            kwargs[attr] = values[solr_name]
    for f in dataclasses.fields(doc_type):
        if not f.init or f.name in kwargs:
            continue
        if f.default is dataclasses.MISSING and f.default_factory is dataclasses.MISSING:
            kwargs[f.name] = None
    return doc_type(**kwargs)


def field_value(doc: Any, solr_name: str) -> Any:
    """Read a Solr field from a mapped dataclass document or a plain mapping."""
    if isinstance(doc, Mapping):
        return doc.get(solr_name)
    attr = field_map(type(doc)).get(solr_name, solr_name)
    return getattr(doc, attr, None)
