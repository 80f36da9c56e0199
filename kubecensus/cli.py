"""
kubecensus CLI entrypoint.

Usage:
    kubecensus
    kubecensus --context prod --json
    python -m kubecensus --catalog extensions.yaml
"""

from __future__ import annotations

import asyncio
import logging
import os

import click
from rich.console import Console

from kubecensus import __version__
from kubecensus.catalog import default_catalog, load_catalog
from kubecensus.constants.defaults import LOG_LEVEL_ENV_VAR
from kubecensus.controllers.census import CensusController
from kubecensus.errors import CatalogError
from kubecensus.logging_config import setup_logging
from kubecensus.models.settings import ConfigError, load_settings
from kubecensus.utils.report_renderer import ReportRenderer

logger = logging.getLogger(__name__)


@click.command()
@click.version_option(version=__version__, prog_name="kubecensus")
@click.option("--context", default=None, help="kubectl context to query.")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Path to a YAML settings file.",
)
@click.option(
    "--catalog",
    "catalog_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="YAML catalog replacing the built-in extensions.",
)
@click.option(
    "--resolve-tags/--no-resolve-tags",
    default=None,
    help="Look up human tags for digest-pinned images.",
)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.option("--no-color", is_flag=True, help="Disable coloured output.")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
def cli(
    context: str | None,
    config_path: str | None,
    catalog_path: str | None,
    resolve_tags: bool | None,
    as_json: bool,
    no_color: bool,
    verbose: bool,
    debug: bool,
) -> None:
    """Report which cluster extensions are installed and their versions.

    Exits 0 even when some extensions could not be detected; failures are
    shown in the report and summarized on stderr.
    """
    if debug:
        level = "DEBUG"
    elif verbose:
        level = "INFO"
    else:
        level = os.environ.get(LOG_LEVEL_ENV_VAR, "WARNING")
    setup_logging(level=level, quiet_third_party=not debug)

    try:
        settings = load_settings(
            config_path,
            context=context,
            catalog_path=catalog_path,
            resolve_tags=resolve_tags,
        )
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    try:
        if settings.catalog_path:
            extensions = load_catalog(settings.catalog_path)
        else:
            extensions = default_catalog()
    except CatalogError as exc:
        raise click.ClickException(str(exc)) from exc

    report = asyncio.run(CensusController(settings).run(extensions))
    if report.error is not None:
        logger.warning("failed to detect some extensions: %s", report.error)

    renderer = ReportRenderer(report.extensions)
    if as_json:
        click.echo(renderer.to_json())
        return

    console = Console(no_color=no_color, highlight=False)
    for line in renderer.rich_lines():
        console.print(line, soft_wrap=True)


def main() -> None:
    cli()
