#!/usr/bin/env python3
"""
CLI interface for Book Printer - Assemble a LaTeX book from manuscript files.

This module provides the command-line interface using Click framework. The
LaTeX document goes to the chosen output (stdout by default); diagnostics
always go to stderr.
"""

import logging
import sys
from typing import Optional, Tuple
import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from . import __version__
from .assembler import BookAssembler
from .config import Config, get_config, set_config
from .paper import PaperSizeResolver, paper_option
from .processors.base import ConversionError
from .processors.pandoc_runner import PandocConverter

console = Console(stderr=True)


def setup_logging(verbose: bool) -> None:
    """Route log records to the stderr console."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True
    )


def show_dependencies(config: Config) -> None:
    """Print Pandoc and paper size diagnostics."""
    runner = PandocConverter(config.get_pandoc_config())
    pandoc_info = runner.get_pandoc_info()

    table = Table(title="book-to-latex dependencies")
    table.add_column("Check", style="cyan")
    table.add_column("Status", style="blue")

    if pandoc_info.get('pandoc_available'):
        table.add_row("Pandoc", f"[green]✅[/green] {pandoc_info.get('pandoc_version', 'Unknown')}")
    else:
        table.add_row("Pandoc", f"[red]❌[/red] {pandoc_info.get('error', 'Not working')}")

    table.add_row("Input format", str(runner.input_format))
    table.add_row("Lua filter", str(runner.filter_path))

    paper_size = PaperSizeResolver.from_config(config.get_paper_config()).resolve()
    table.add_row("Paper", paper_option(paper_size))

    console.print(table)


@click.command(help="Assemble a LaTeX book from manuscript files")
@click.version_option(version=__version__, prog_name="book-to-latex")
@click.argument("files", nargs=-1, type=click.Path(dir_okay=False))
@click.option("-c", "--config", "config_file",
              type=click.Path(exists=True, readable=True, dir_okay=False),
              help="Path to custom configuration file")
@click.option("-o", "--output", "output", type=click.File('w', encoding='utf-8'),
              default='-', show_default=True,
              help="Write the document here instead of stdout")
@click.option("--check-deps", is_flag=True,
              help="Check system dependencies and exit")
@click.option("-v", "--verbose", is_flag=True,
              help="Enable verbose output")
def main(files: Tuple[str, ...], config_file: Optional[str], output, check_deps: bool, verbose: bool):
    """Main CLI entry point."""
    setup_logging(verbose)

    config = get_config()
    if config_file:
        config.load_user_config(config_file)
        set_config(config)

    if check_deps:
        show_dependencies(config)
        return

    paper_size = PaperSizeResolver.from_config(config.get_paper_config()).resolve()
    assembler = BookAssembler(
        PandocConverter(config.get_pandoc_config()),
        paper_size,
        config.get_conversion_options()
    )

    try:
        assembler.assemble(files, output)
    except (ConversionError, OSError) as e:
        console.print(f"[red]{escape(str(e))}[/red]", highlight=False)
        if verbose:
            console.print_exception()
        sys.exit(1)


if __name__ == "__main__":
    main()
