"""Store command: spill a file's bytes into local storage."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from artboard.config import ArtboardConfig
from artboard.storage import application_support_url, store_in_filesystem
from artboard.urls import storable_reference

app = typer.Typer(help="Copy image bytes into local storage")
console = Console()


@app.callback(invoke_without_command=True)
def main(
    file: Path = typer.Argument(..., help="File whose bytes should be stored"),
    name: Optional[str] = typer.Option(None, "--name", help="Stored file name"),
):
    """Store a file under the local-storage root and print its location."""
    config = ArtboardConfig.from_env()
    try:
        data = file.read_bytes()
    except OSError as e:
        console.print(f"[bold red]Error:[/bold red] {str(e)}")
        raise typer.Exit(1)

    url = store_in_filesystem(
        data, name or file.name, storage_root=lambda: application_support_url(config)
    )
    if url is None:
        console.print("[bold red]Error:[/bold red] could not write to local storage")
        raise typer.Exit(1)
    console.print(url, markup=False, soft_wrap=True)
    console.print(f"Persist as: {storable_reference(url)}", markup=False, soft_wrap=True)
