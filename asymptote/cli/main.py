"""Asymptote command-line interface.

Reads a snippet from a file or stdin, runs the analysis, and renders the
estimate with its rationale trail (or the JSON wire shape with ``--json``).
"""

from __future__ import annotations

import asyncio
import json

import click

from asymptote import __version__
from asymptote.analysis.orchestrator import AnalysisOrchestrator
from asymptote.analysis.types import AnalysisResult
from asymptote.config import AnalyzerConfig
from asymptote.profiles import AUTO, DEFAULT_LANGUAGE, supported_languages
from asymptote.types.errors import ConfigurationError
from asymptote.utils.logger import configure_logging, logger

LANGUAGE_CHOICES = [AUTO, *supported_languages()]


def _render(result: AnalysisResult, language: str) -> str:
    lines = [
        f"Language:        {language}",
        f"Time complexity: {result.time.big_o}",
        f"Confidence:      {round(result.time.confidence * 100)}%",
        f"Loops:           {result.loop_count} (max depth {result.max_depth})",
    ]
    if result.tags:
        lines.append(f"Tags:            {', '.join(result.tags)}")
    if result.why:
        lines.append("Why:")
        lines.extend(f"  - {reason}" for reason in result.why)
    return "\n".join(lines)


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, message="Asymptote v%(version)s")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Asymptote - Big-O estimation for code snippets."""
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@cli.command()
@click.argument("source", type=click.File("r", encoding="utf-8"), default="-")
@click.option(
    "--lang",
    "-l",
    "language",
    type=click.Choice(LANGUAGE_CHOICES, case_sensitive=False),
    default=AUTO,
    show_default=True,
    help=f"Source language ({AUTO} means {DEFAULT_LANGUAGE}).",
)
@click.option(
    "--structural/--heuristic",
    default=True,
    show_default=True,
    help="Try a tree-sitter parse first, or use text heuristics only.",
)
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON.")
def analyse(source, language: str, structural: bool, as_json: bool) -> None:
    """Estimate the time complexity of SOURCE (a file, or - for stdin)."""
    try:
        config = AnalyzerConfig.from_env()
    except ConfigurationError as e:
        raise click.ClickException(e.get_formatted_message()) from e

    configure_logging(config.log_level)
    code = source.read()
    orchestrator = AnalysisOrchestrator(config=config)

    if structural:
        result = asyncio.run(orchestrator.analyse_structural(code, language))
    else:
        result = orchestrator.analyse(code, language)
    logger.debug(f"Analysis finished: {result.time.big_o}")

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
    else:
        click.echo(_render(result, language))


@cli.command()
def languages() -> None:
    """List supported language tags."""
    for name in supported_languages():
        marker = f"  (default for {AUTO})" if name == DEFAULT_LANGUAGE else ""
        click.echo(f"{name}{marker}")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
