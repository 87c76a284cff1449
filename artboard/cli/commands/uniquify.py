"""Uniquify command: make a name collision-free against existing names."""

from typing import List

import typer
from rich.console import Console

from artboard.naming import uniqued

app = typer.Typer(help="Make a name unique against existing names")
console = Console()


@app.callback(invoke_without_command=True)
def main(
    name: str = typer.Argument(..., help="Candidate name"),
    existing: List[str] = typer.Option(
        [], "--existing", "-e", help="An existing name (repeatable)"
    ),
):
    """Print the candidate, incremented until it collides with nothing."""
    console.print(uniqued(name, existing), markup=False, soft_wrap=True)
