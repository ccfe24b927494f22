"""Server domain configuration: where and how to reach Solr."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping
from urllib.parse import urlparse

from SolrClient.config.common import (
    expect_float,
    expect_str,
    get_required_value,
    get_section,
)


@dataclass(frozen=True, slots=True)
class ServerConfig:
    """Connection settings for one Solr core."""

    url: str
    select_path: str
    timeout: float


def load_server(raw: Mapping[str, Any]) -> ServerConfig:
    """Load the `server` section.

    Raises:
        TypeError: If config types are invalid.
        ValueError: If required keys are missing.
    """
    section = get_section(raw, "server", required=True)
    return ServerConfig(
        url=expect_str(get_required_value(section, "url", "server.url"), "server.url").strip(),
        select_path=expect_str(section.get("select_path", "/select"), "server.select_path").strip(),
        timeout=expect_float(section.get("timeout", 30.0), "server.timeout"),
    )


def check_server(config: ServerConfig) -> None:
    """Validate server constraints."""
    parsed = urlparse(config.url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError(f"server.url must be an http(s) URL: {config.url!r}")
    if not config.select_path.startswith("/"):
        raise ValueError("server.select_path must start with '/'")
    if config.timeout <= 0:
        raise ValueError("server.timeout must be positive")
