"""CLI package for SolrClient command orchestration."""

from __future__ import annotations

__all__ = ["CommandRunner", "cli", "main"]

from SolrClient.cli.runner import CommandRunner
from SolrClient.cli.ui import cli


def main() -> None:
    """Run SolrClient CLI.

    Entry point referenced by console script in pyproject.toml.
    """
    cli()
