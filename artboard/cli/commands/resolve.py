"""Resolve command: run dropped items through the content pipeline."""

from typing import Any, List, Optional

import typer
from rich.console import Console
from rich.table import Table

from artboard.config import ArtboardConfig
from artboard.content import ContentResolutionPipeline, ContentType, SerialQueue, provider_for
from artboard.document import ArtDocument, BackgroundStatus

app = typer.Typer(help="Resolve dropped items into a background or element")
console = Console()

_TYPES = {
    "image": ContentType.IMAGE,
    "text": ContentType.PLAIN_TEXT,
    "url": ContentType.URL,
    "data": ContentType.DATA,
}


def _describe(value: Any) -> str:
    if isinstance(value, bytes):
        return f"<{len(value)} bytes>"
    return str(value)


@app.callback(invoke_without_command=True)
def main(
    items: List[str] = typer.Argument(
        ..., help="Dropped items in priority order: URLs, paths or text"
    ),
    content_type: Optional[str] = typer.Option(
        None, "--type", "-t", help="Only load this type: image, text, url or data"
    ),
    timeout: float = typer.Option(10.0, "--timeout", help="Seconds to wait for results"),
):
    """Resolve items the way a drop onto a document would."""
    config = ArtboardConfig.from_env()
    queue = SerialQueue()
    with ContentResolutionPipeline(queue, config=config) as pipeline:
        providers = [provider_for(item, config=config) for item in items]

        if content_type:
            ct = _TYPES.get(content_type.lower())
            if ct is None:
                console.print(f"[bold red]Error:[/bold red] unknown type {content_type}")
                raise typer.Exit(1)
            results: List[Any] = []
            if not pipeline.load_first_bridged_object(providers, ct, results.append):
                console.print(f"[yellow]No item can provide {ct.value}[/yellow]")
                raise typer.Exit(1)
            if not queue.run_until(lambda: bool(results), timeout):
                console.print("[yellow]Nothing arrived before the timeout[/yellow]")
                raise typer.Exit(1)
            console.print(_describe(results[0]), markup=False, soft_wrap=True)
            return

        doc = ArtDocument(pipeline)
        if not doc.drop(providers):
            console.print("[yellow]Nothing in the drop can be used[/yellow]")
            raise typer.Exit(1)

        def _settled() -> bool:
            return (
                doc.pending_drops == 0
                and doc.background_status is not BackgroundStatus.FETCHING
            )

        if not queue.run_until(_settled, timeout):
            console.print("[yellow]Nothing arrived before the timeout[/yellow]")
            raise typer.Exit(1)
        if doc.background.is_blank and not doc.elements:
            console.print("[yellow]Nothing in the drop can be used[/yellow]")
            raise typer.Exit(1)

    console.print(f"Background: {doc.background!r}", markup=False, soft_wrap=True)
    console.print(f"Status: {doc.background_status.value}")
    if doc.background_image is not None:
        console.print(f"Image: {_describe(doc.background_image)}")
    if doc.elements:
        table = Table("ID", "Label", "Text")
        for element in doc.elements:
            table.add_row(str(element.id), element.label, element.text)
        console.print(table)
    if doc.background_status is BackgroundStatus.FAILED:
        raise typer.Exit(1)
