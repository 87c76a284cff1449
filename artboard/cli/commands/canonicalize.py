"""Canonicalize command: show the URL that would actually be fetched."""

from typing import Optional

import typer
from rich.console import Console

from artboard.config import ArtboardConfig
from artboard.urls import image_url

app = typer.Typer(help="Show the URL that would actually be fetched")
console = Console()


@app.callback(invoke_without_command=True)
def main(
    url: str = typer.Argument(..., help="URL to canonicalize"),
    root: Optional[str] = typer.Option(
        None, "--root", help="Local-storage root to re-root file URLs under"
    ),
):
    """Canonicalize a background URL."""
    config = ArtboardConfig.from_env()
    storage_root = (lambda: root) if root else None
    result = image_url(url, storage_root=storage_root, alias_key=config.alias_query_key)
    console.print(result, markup=False, soft_wrap=True)
