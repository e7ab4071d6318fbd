"""CLI entry point using Typer."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from imagedetector import __version__
from imagedetector.config import OutputFormat, Settings, load_config
from imagedetector.errors import ImageDetectorError
from imagedetector.models import ScanResult

app = typer.Typer(
    name="image-detector",
    help="Scan files for container image references.",
    no_args_is_help=True,
)
console = Console()
err_console = Console(stderr=True)

logger = logging.getLogger("imagedetector")


def version_callback(value: bool) -> None:
    if value:
        console.print(f"image-detector {__version__}")
        raise typer.Exit()


def setup_logging(verbose: bool) -> None:
    handler = RichHandler(console=err_console, show_path=False, log_time_format="[%X]")
    logger.handlers[:] = [handler]
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option("--version", "-V", callback=version_callback, is_eager=True),
    ] = None,
) -> None:
    """image-detector — find container image references in a directory tree.

    It supports various file types and can be extended with more detectors.
    """


@app.command()
def scan(
    check_directory: Annotated[
        str | None,
        typer.Option("--check-directory", "-d", help="Directory to check for files"),
    ] = None,
    exclude: Annotated[
        list[str] | None,
        typer.Option(
            "--exclude", "-e",
            help="File pattern to exclude from detection (repeatable or comma-separated)",
        ),
    ] = None,
    detector: Annotated[
        list[str] | None,
        typer.Option("--detector", help="Detector to consult before the generic fallback"),
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable verbose output")] = False,
    format: Annotated[
        OutputFormat | None, typer.Option("--format", "-f", help="Output format")
    ] = None,
    output: Annotated[
        str | None, typer.Option("--output", "-o", help="Output file path")
    ] = None,
    config: Annotated[
        Path | None, typer.Option("--config", "-c", help="Path to configuration file")
    ] = None,
) -> None:
    """Scan a directory tree for container image references."""
    try:
        cfg = load_config(config)
    except ImageDetectorError as e:
        _fail(e)

    if check_directory is not None:
        cfg.check_directory = check_directory
    if exclude:
        cfg.exclude = _split_patterns(exclude)
    if detector:
        cfg.detectors = detector
    cfg.verbose = verbose or cfg.verbose
    if format is not None:
        cfg.format = format
    if output is not None:
        cfg.output = output

    setup_logging(cfg.verbose)
    logger.info("Starting image detector...")

    from imagedetector.scanner import Scanner

    try:
        scan_config = cfg.to_scan_config()
        scanner = Scanner()
        images = scanner.scan(scan_config)
    except ImageDetectorError as e:
        _fail(e)

    result = ScanResult(
        root=scan_config.root_path,
        images=images,
        detectors_used=[d.name for d in scan_config.detectors],
        stats=scanner.stats,
    )
    _output_report(result, cfg)


def _split_patterns(values: list[str]) -> list[str]:
    patterns: list[str] = []
    for value in values:
        patterns.extend(p.strip() for p in value.split(",") if p.strip())
    return patterns


def _fail(error: ImageDetectorError) -> None:
    logger.debug("Aborting on %s error", error.kind.value)
    err_console.print(f"[red]Error:[/red] {escape(str(error))}", highlight=False)
    raise typer.Exit(1)


def _output_report(result: ScanResult, cfg: Settings) -> None:
    if cfg.format == OutputFormat.GITHUB:
        from imagedetector.reporters.github import publish_images

        publish_images(result)
        return

    if cfg.format == OutputFormat.TEXT and not cfg.output:
        from imagedetector.reporters.terminal import render_terminal

        render_terminal(result, console)
        return

    if cfg.format == OutputFormat.TEXT:
        from imagedetector.reporters.terminal import render_text

        text = render_text(result)
    else:
        from imagedetector.reporters.json_report import render_json

        text = render_json(result)

    if cfg.output:
        Path(cfg.output).write_text(text + "\n")
        logger.info("Report saved to %s", cfg.output)
    else:
        typer.echo(text)


@app.command()
def detectors() -> None:
    """Show registered detectors in dispatch order."""
    from imagedetector.detectors import DETECTOR_CLASSES, FALLBACK_DETECTOR

    console.print(f"[bold]image-detector[/bold] v{__version__}\n")
    console.print("[bold]Detectors:[/bold]")

    for name in DETECTOR_CLASSES:
        suffix = " [dim](fallback)[/dim]" if name == FALLBACK_DETECTOR else ""
        console.print(f"  • {name}{suffix}")


@app.command(name="config")
def config_show(
    config: Annotated[
        Path | None, typer.Option("--config", "-c", help="Path to configuration file")
    ] = None,
) -> None:
    """Show current configuration."""
    try:
        cfg = load_config(config)
    except ImageDetectorError as e:
        _fail(e)
    console.print_json(json.dumps(cfg.model_dump(mode="json"), default=str))
