"""Rating report: prints a color-coded line per check and the final score."""

from __future__ import annotations

import json

import click

from module_ratings.checks import CheckResult
from module_ratings.suite import SuiteResult


def _green(text: str) -> str:
    return click.style(text, fg="green")


def _red(text: str) -> str:
    return click.style(text, fg="red")


def _bold(text: str) -> str:
    return click.style(text, bold=True)


def format_result(result: CheckResult) -> str:
    icon = _green("✓") if result.passed else _red("✗")
    points = f"+{result.points}" if result.passed else " 0"
    return f"  {icon} [{points}] {result.description}: {result.message}"


def print_report(slug: str | None, suite_result: SuiteResult, *, json_output: bool = False) -> None:
    click.echo(_bold(f"Rating for {slug or '<no slug>'}"))
    for result in suite_result.results:
        click.echo(format_result(result))

    click.echo()
    summary = (
        f"Score: {suite_result.score}/{suite_result.max_score} ({suite_result.percent:g}%)"
    )
    if suite_result.score == suite_result.max_score:
        click.echo(_green(summary))
    else:
        click.echo(summary)

    if json_output:
        click.echo("\n" + json.dumps(suite_result.as_dict(), indent=2))
