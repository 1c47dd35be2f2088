"""Command-line interface for ruledot.

This module provides the CLI commands for rendering rule ASTs
as Graphviz DOT documents.
"""

import sys
from pathlib import Path
from typing import NoReturn

import click

from ruledot import __version__
from ruledot.core.config import get_settings
from ruledot.core.logging import LoggingContext, configure_logging, get_logger
from ruledot.core.rules import Marshaler, RuleError, load_rule_file


@click.group()
@click.version_option(version=__version__, prog_name="ruledot")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]),
    default=None,
    help="Set log level (overrides RULEDOT_LOG_LEVEL)",
)
def cli(log_level: str | None) -> None:
    """ruledot - render parsed rule expressions as DOT graphs."""
    settings = get_settings()
    if log_level is not None:
        settings = settings.model_copy(update={"log_level": log_level})
    configure_logging(settings)


@cli.command()
@click.argument("ast_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, writable=True),
    default=None,
    help="Write the DOT document to a file instead of stdout",
)
def render(ast_file: str, output: str | None) -> None:
    """Render the JSON rule AST in AST_FILE as a DOT graph.

    The output can be piped to Graphviz, e.g.:

        ruledot render rule.json | dot -Tpng -o rule.png
    """
    settings = get_settings()
    logger = get_logger(__name__)

    with LoggingContext(ast_file=ast_file):
        try:
            rule = load_rule_file(ast_file)
        except (RuleError, OSError) as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(1)

        if output is None:
            try:
                Marshaler(sys.stdout).marshal_rule(rule)
            except RuleError as e:
                click.echo(f"Error: {e}", err=True)
                sys.exit(1)
            return

        try:
            f = open(output, "w", encoding=settings.output_encoding)
        except OSError as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(1)

        try:
            with f:
                Marshaler(f).marshal_rule(rule)
        except (RuleError, OSError) as e:
            # a partially written document is unusable
            Path(output).unlink(missing_ok=True)
            click.echo(f"Error: {e}", err=True)
            sys.exit(1)
        logger.info("Wrote DOT document", output=output)


def main() -> NoReturn:
    """Main entry point for the CLI.

    This function is called when the `ruledot` command is run
    or when using `python -m ruledot`.
    """
    cli()


if __name__ == "__main__":
    main()
