"""Click CLI interface definitions.

Defines the command-line interface structure and routes commands
to their respective runners.
"""

from __future__ import annotations

import os
from pathlib import Path

import click
from dotenv import load_dotenv

from SolrClient.cli.runner import CommandRunner
from SolrClient.config import load_config, with_server_url
from SolrClient.core.options import (
    RANDOM,
    FacetFieldQuery,
    FacetQuery,
    HighlightingParameters,
    QueryOptions,
    SortOrder,
)
from SolrClient.core.query import SolrQuery


def _parse_sort(values: tuple[str, ...]):
    if not values:
        return None
    if any(v.strip().lower() == "random" for v in values):
        if len(values) > 1:
            raise click.BadParameter("'random' cannot be combined with other sort orders", param_hint="--sort")
        return RANDOM
    try:
        return [SortOrder.parse(v) for v in values]
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--sort") from e


@click.group(help="SolrClient: query a Solr core and print the results.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=Path("config/default.yml"),
    show_default=True,
    help="Path to YAML config file.",
)
@click.option("--url", envvar="SOLR_URL", default=None, help="Solr core URL; overrides server.url.")
@click.pass_context
def cli(ctx: click.Context, config_path: Path, url: str | None) -> None:
    """CLI entry group.

    Loads environment variables from .env file before processing config.
    """
    load_dotenv()
    # click resolves envvar defaults before load_dotenv runs.
    if url is None:
        url = os.environ.get("SOLR_URL")

    cfg = load_config(config_path)
    if url:
        cfg = with_server_url(cfg, url)
    ctx.obj = cfg


@cli.command("query")
@click.argument("query", default="*:*")
@click.option("--rows", type=int, default=None, help="Maximum number of documents.")
@click.option("--start", type=int, default=None, help="Offset of the first document.")
@click.option("--sort", "sort", multiple=True, help="'field [asc|desc]', repeatable, or 'random'.")
@click.option("--field", "fields", multiple=True, help="Field to return, repeatable.")
@click.option("--fq", "filter_queries", multiple=True, help="Filter query, repeatable.")
@click.option("--facet-field", "facet_fields", multiple=True, help="Field to facet on, repeatable.")
@click.option("--facet-query", "facet_queries", multiple=True, help="Query to facet on, repeatable.")
@click.option("--facet-limit", type=int, default=None, help="Term limit for every --facet-field.")
@click.option("--hl-field", "hl_fields", multiple=True, help="Field to highlight, repeatable.")
@click.option("--hl-pre", default=None, help="Markup before highlighted terms.")
@click.option("--hl-post", default=None, help="Markup after highlighted terms.")
@click.pass_context
def query_cmd(
    ctx: click.Context,
    query: str,
    rows: int | None,
    start: int | None,
    sort: tuple[str, ...],
    fields: tuple[str, ...],
    filter_queries: tuple[str, ...],
    facet_fields: tuple[str, ...],
    facet_queries: tuple[str, ...],
    facet_limit: int | None,
    hl_fields: tuple[str, ...],
    hl_pre: str | None,
    hl_post: str | None,
) -> None:
    """Run QUERY against the configured Solr core."""
    facets = [FacetFieldQuery(f, limit=facet_limit) for f in facet_fields]
    facets += [FacetQuery(SolrQuery(q)) for q in facet_queries]

    highlight = None
    if hl_fields:
        highlight = HighlightingParameters(fields=hl_fields, before_term=hl_pre, after_term=hl_post)

    options = QueryOptions(
        start=start,
        rows=rows,
        order_by=_parse_sort(sort),
        fields=list(fields) or None,
        facet_queries=facets or None,
        highlight=highlight,
        filter_queries=[SolrQuery(q) for q in filter_queries] or None,
    )
    runner = CommandRunner(ctx.obj)
    runner.run_query(action=ctx.command.name, query=SolrQuery(query), options=options)
