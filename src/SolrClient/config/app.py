from __future__ import annotations

"""Application config orchestration and YAML loading entrypoints."""

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Mapping

import yaml

from SolrClient.config.output import OutputConfig, check_output, load_output
from SolrClient.config.query import QueryConfig, check_query, load_query
from SolrClient.config.runtime import RuntimeConfig, check_runtime, load_runtime
from SolrClient.config.server import ServerConfig, check_server, load_server

DEFAULT_CONFIG_PATH = Path("config/default.yml")


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application root configuration."""

    runtime: RuntimeConfig
    server: ServerConfig
    query: QueryConfig
    output: OutputConfig


def parse_config_dict(raw: Mapping[str, Any]) -> AppConfig:
    """Parse normalized mapping into AppConfig."""
    runtime = load_runtime(raw)
    server = load_server(raw)
    query = load_query(raw)
    output = load_output(raw)

    check_runtime(runtime)
    check_server(server)
    check_query(query)
    check_output(output)

    return AppConfig(runtime=runtime, server=server, query=query, output=output)


def load_config(path: Path) -> AppConfig:
    """Load YAML config file without default merge."""
    return parse_config_dict(parse_yaml(path.read_text(encoding="utf-8")))


def load_config_with_defaults(
    config_path: Path,
    default_path: Path = DEFAULT_CONFIG_PATH,
    *,
    defaults_text: str | None = None,
) -> AppConfig:
    """Load config by merging an override file over the defaults.

    Args:
        config_path: Override YAML file.
        default_path: Defaults YAML file.
        defaults_text: Defaults YAML content; replaces reading `default_path`.

    Returns:
        Parsed and validated configuration.
    """
    if defaults_text is None:
        if config_path == default_path:
            return load_config(config_path)
        defaults_text = default_path.read_text(encoding="utf-8")
    base = parse_yaml(defaults_text)
    override = parse_yaml(config_path.read_text(encoding="utf-8"))
    return parse_config_dict(merge_config_dicts(base, override))


def with_server_url(config: AppConfig, url: str) -> AppConfig:
    """Return a copy of `config` pointing at another Solr core URL."""
    server = replace(config.server, url=url.strip())
    check_server(server)
    return replace(config, server=server)


def parse_yaml(text: str) -> dict[str, Any]:
    """Parse raw YAML text into a mapping."""
    data = yaml.safe_load(text) or {}
    if not isinstance(data, Mapping):
        raise ValueError("Config root must be a mapping/object")
    return dict(data)


def merge_config_dicts(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Deep-merge two config mappings."""
    merged: dict[str, Any] = dict(base)
    for key, value in override.items():
        if key in merged and isinstance(merged[key], Mapping) and isinstance(value, Mapping):
            merged[key] = merge_config_dicts(merged[key], value)
        else:
            merged[key] = value
    return merged
