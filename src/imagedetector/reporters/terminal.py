"""Rich terminal reporter."""

from __future__ import annotations

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from imagedetector.models import ScanResult


def render_terminal(result: ScanResult, console: Console) -> None:
    """Render scan results to terminal using Rich."""
    console.print()

    s = result.stats
    summary_text = (
        f"[bold]Images: {result.total}[/]  "
        f"| Files scanned: {s.files_detected}  "
        f"[dim]Excluded: {s.files_excluded}  Skipped: {s.files_skipped}[/]"
    )
    console.print(Panel(
        summary_text,
        title=f"[bold]Image Detection — {result.root}[/]",
        subtitle=f"{', '.join(result.detectors_used)} | {result.timestamp:%Y-%m-%d %H:%M UTC}",
    ))

    if not result.images:
        console.print("\n[green]No images found.[/green]")
        return

    table = Table(show_header=True, header_style="bold", expand=True)
    table.add_column("#", width=4, justify="right")
    table.add_column("Image", ratio=3)

    for i, image in enumerate(result.images, start=1):
        table.add_row(str(i), image)

    console.print(table)


def render_text(result: ScanResult) -> str:
    """Plain listing, one image per line."""
    return "\n".join(result.images)
