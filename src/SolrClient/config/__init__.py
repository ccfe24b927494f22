from __future__ import annotations

"""Public configuration API for SolrClient."""

from SolrClient.config.app import (
    AppConfig,
    load_config,
    load_config_with_defaults,
    parse_config_dict,
    with_server_url,
)
from SolrClient.config.output import OutputConfig
from SolrClient.config.query import QueryConfig
from SolrClient.config.runtime import RuntimeConfig
from SolrClient.config.server import ServerConfig

__all__ = [
    "RuntimeConfig",
    "ServerConfig",
    "QueryConfig",
    "OutputConfig",
    "AppConfig",
    "load_config",
    "load_config_with_defaults",
    "parse_config_dict",
    "with_server_url",
]
