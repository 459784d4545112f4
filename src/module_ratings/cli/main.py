"""Click CLI group: rate and coverage commands."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from module_ratings.checks import CheckContext, CodeCoverageCheck
from module_ratings.config import get_settings, validate_settings_for_env
from module_ratings.errors import ConfigError
from module_ratings.fetch import HttpxRequestClient
from module_ratings.logging import bind_context, clear_context, configure_logging
from module_ratings.suite import Suite, default_checks

logger = logging.getLogger("module_ratings")


@click.group()
@click.option("--log-level", type=str, default=None, help="Override LOG_LEVEL.")
def cli(log_level: str | None) -> None:
    """Rate a module by running checks against its repository."""
    settings = get_settings()
    configure_logging(settings, log_level)
    try:
        validate_settings_for_env(settings)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc


@cli.command()
@click.argument("slug")
@click.option(
    "--dir",
    "directory",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Local checkout used by the file checks.",
)
@click.option("--json", "json_output", is_flag=True, help="Append JSON output to the report.")
@click.option(
    "--min-score",
    type=click.FloatRange(0, 100),
    default=None,
    help="Exit with status 1 when the score percent is below this value.",
)
def rate(slug: str, directory: Path | None, json_output: bool, min_score: float | None) -> None:
    """Run every check against SLUG (owner/repo) and print the rating."""
    from module_ratings.cli.report import print_report

    bind_context(slug=slug)
    try:
        suite = Suite(default_checks(), slug=slug, directory=directory, logger=logger)
        result = suite.run()
    finally:
        clear_context()

    print_report(suite.get_repository_slug(), result, json_output=json_output)
    if min_score is not None and result.percent < min_score:
        click.echo(f"score {result.percent:g}% is below --min-score {min_score:g}%", err=True)
        sys.exit(1)


@cli.command()
@click.argument("slug")
def coverage(slug: str) -> None:
    """Print the coverage percentage reported for SLUG."""
    settings = get_settings()
    bind_context(slug=slug)
    try:
        with HttpxRequestClient(
            timeout_s=settings.http_timeout_seconds,
            user_agent=settings.http_user_agent,
        ) as client:
            context = CheckContext(client=client, slug=slug.strip(), logger=logger)
            value = CodeCoverageCheck().get_coverage(context)
    finally:
        clear_context()
    click.echo(f"{value:g}")


def main() -> None:
    cli()
