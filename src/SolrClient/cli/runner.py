"""Command runner for coordinating CLI execution.

Manages component lifecycle, logging configuration and error handling for
command execution.
"""

from __future__ import annotations

import click

from SolrClient.cli.commands import QueryCommand
from SolrClient.config import AppConfig
from SolrClient.core.options import QueryOptions
from SolrClient.core.query import QueryExpression
from SolrClient.renderers import create_output_writer
from SolrClient.services import create_query_executer
from SolrClient.utils.log import configure_logging, log


class CommandRunner:
    """Orchestrates command execution with proper resource management."""

    def __init__(self, config: AppConfig) -> None:
        self.config = config

    def run_query(self, action: str, query: QueryExpression, options: QueryOptions) -> None:
        """Execute the query command.

        Args:
            action: The CLI command name (e.g., 'query').
            query: Query to run.
            options: Request options built from CLI flags.

        Raises:
            click.Abort: When the query fails.
        """
        configure_logging(
            level=self.config.runtime.level,
            action=action,
            log_to_file=self.config.runtime.to_file,
            log_dir=self.config.runtime.dir,
        )
        log.debug("Solr core: %s", self.config.server.url)
        executer = create_query_executer(self.config)
        try:
            output_writer = create_output_writer(self.config)
            command = QueryCommand(
                executer=executer,
                output_writer=output_writer,
                query=query,
                options=options,
            )
            command.execute()
            output_writer.finalize(action)
        except Exception as e:  # noqa: BLE001 - cli boundary
            log.error("Query failed: %s", e)
            raise click.Abort from e
        finally:
            close_func = getattr(executer.connection, "close", None)
            if callable(close_func):
                close_func()
