#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Command line interface for markdown_walker.

Usage::

    markdown-walker [--log-level LEVEL] [--log-file PATH] [--trace] COMMAND INPUT

Commands
--------
stats
    Table of node counts by kind
outline
    Indented heading outline
links
    Table of links, images and wiki links
text
    Plain text of the document
front-matter
    YAML front matter as JSON

INPUT is a file path, or ``-`` to read standard input.
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Callable

from markdown_walker import __version__
from markdown_walker.constants import (
    DEFAULT_LOG_LEVEL,
    ENV_LOG_LEVEL,
    EXIT_ERROR,
    EXIT_FILE_ERROR,
    EXIT_PARSING_ERROR,
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERROR,
    EXIT_WALK_ERROR,
)
from markdown_walker.exceptions import FileError, MarkdownWalkerError, ParsingError, ValidationError, WalkError
from markdown_walker.logging_utils import configure_logging

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser.

    Returns
    -------
    argparse.ArgumentParser
        Parser with one subcommand per report

    """
    default_level = os.environ.get(ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL).upper()
    if default_level not in LOG_LEVELS:
        default_level = DEFAULT_LOG_LEVEL

    parser = argparse.ArgumentParser(
        prog="markdown-walker",
        description="Walk a Markdown document and report on its structure.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default=default_level,
        help=f"Logging level (default: {default_level}, from ${ENV_LOG_LEVEL} when set)",
    )
    parser.add_argument("--log-file", help="Also write log output to this file")
    parser.add_argument("--trace", action="store_true", help="Log with timestamps and logger names")

    subparsers = parser.add_subparsers(dest="command", required=True, metavar="COMMAND")
    commands = {
        "stats": "Show node counts by kind",
        "outline": "Show the heading outline",
        "links": "List links, images and wiki links",
        "text": "Print the plain text",
        "front-matter": "Print the YAML front matter as JSON",
    }
    for name, help_text in commands.items():
        sub = subparsers.add_parser(name, help=help_text, description=help_text)
        sub.add_argument("input", metavar="INPUT", help="Markdown file, or '-' for standard input")

    return parser


def read_input(source: str) -> str:
    """Read Markdown text from a path, or from standard input for ``-``.

    Raises
    ------
    FileError
        If the file cannot be read or decoded

    """
    if source == "-":
        return sys.stdin.read()

    path = Path(source)
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise FileError(f"File not found: {source}", file_path=source, original_error=e) from e
    except (OSError, UnicodeDecodeError) as e:
        raise FileError(f"Could not read {source}: {e}", file_path=source, original_error=e) from e


def get_exit_code_for_exception(exception: Exception) -> int:
    """Map an exception to an appropriate CLI exit code.

    Parameters
    ----------
    exception : Exception
        The exception to map to an exit code

    Returns
    -------
    int
        The appropriate exit code for the exception type

    """
    if isinstance(exception, ValidationError):
        return EXIT_VALIDATION_ERROR
    if isinstance(exception, FileError):
        return EXIT_FILE_ERROR
    if isinstance(exception, ParsingError):
        return EXIT_PARSING_ERROR
    if isinstance(exception, WalkError):
        return EXIT_WALK_ERROR
    return EXIT_ERROR


def _console(stderr: bool = False) -> Any:
    from rich.console import Console

    return Console(stderr=stderr)


def run_stats(markdown: str) -> None:
    """Print a table of node counts by kind."""
    from rich.table import Table

    from markdown_walker.walkers import NodeCounter

    counter = NodeCounter.from_markdown(markdown)

    table = Table(title=f"Node kinds ({counter.total} nodes)")
    table.add_column("Kind", style="cyan", no_wrap=True)
    table.add_column("Count", style="magenta", justify="right")
    for kind, count in sorted(counter.counts.items(), key=lambda item: (-item[1], item[0].value)):
        table.add_row(kind.value, str(count))

    _console().print(table)


def run_outline(markdown: str) -> None:
    """Print the heading outline, indented by level."""
    from rich.text import Text

    from markdown_walker.walkers import HeadingOutline

    outline = HeadingOutline.from_markdown(markdown)
    console = _console()
    if not outline.entries:
        console.print("[dim]No headings[/dim]")
        return
    for entry in outline.entries:
        console.print(Text("  " * (entry.level - 1) + entry.text.strip()))


def run_links(markdown: str) -> None:
    """Print a table of links, images and wiki links."""
    from rich.table import Table

    from markdown_walker.walkers import LinkCollector

    collector = LinkCollector.from_markdown(markdown)

    table = Table(title=f"Links ({len(collector.links)})")
    table.add_column("Kind", style="cyan", no_wrap=True)
    table.add_column("URL", style="yellow")
    table.add_column("Title", style="white")
    for link in collector.links:
        table.add_row(link.kind.value, link.url, link.title)

    _console().print(table)


def run_text(markdown: str) -> None:
    """Print the plain text of the document."""
    from markdown_walker.walkers import PlainTextCollector

    print(PlainTextCollector.from_markdown(markdown).text)


def run_front_matter(markdown: str) -> None:
    """Print the front matter as JSON."""
    from markdown_walker.walkers import FrontMatterReader

    reader = FrontMatterReader.read(markdown)
    _console().print_json(json.dumps(reader.data, default=str))


COMMANDS: dict[str, Callable[[str], None]] = {
    "stats": run_stats,
    "outline": run_outline,
    "links": run_links,
    "text": run_text,
    "front-matter": run_front_matter,
}


def main(args: list[str] | None = None) -> int:
    """Execute the command line interface.

    Parameters
    ----------
    args : list of str, optional
        Command line arguments; ``sys.argv[1:]`` when None

    Returns
    -------
    int
        Exit code

    """
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    configure_logging(parsed_args.log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)

    try:
        markdown = read_input(parsed_args.input)
        COMMANDS[parsed_args.command](markdown)
    except MarkdownWalkerError as e:
        from rich.markup import escape

        logger.debug("Command %s failed", parsed_args.command, exc_info=True)
        _console(stderr=True).print(f"[red]Error:[/red] {escape(e.message)}", highlight=False)
        return get_exit_code_for_exception(e)

    return EXIT_SUCCESS
