#!/usr/bin/env python
"""Command line interface for artboard."""

import logging

import typer
from rich.console import Console
from rich.logging import RichHandler

from artboard.cli.commands import canonicalize, resolve, store, uniquify
from artboard.config import ArtboardConfig

app = typer.Typer(help="Resolve dropped content into art document backgrounds")
console = Console()

# Add commands
app.add_typer(canonicalize.app, name="canonicalize")
app.add_typer(uniquify.app, name="uniquify")
app.add_typer(resolve.app, name="resolve")
app.add_typer(store.app, name="store")


@app.callback()
def callback(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable verbose logs and detailed output"
    ),
):
    """Resolve dropped content into art document backgrounds."""
    logging.basicConfig(
        level=logging.DEBUG
        if verbose or ArtboardConfig.from_env().debug
        else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
        force=True,
    )


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
