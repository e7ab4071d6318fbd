"""GitHub Actions step output sink."""

from __future__ import annotations

import logging
import os
import sys
import uuid
from pathlib import Path
from typing import TextIO

from imagedetector.models import ScanResult
from imagedetector.reporters.json_report import render_json

OUTPUT_NAME = "images"

logger = logging.getLogger(__name__)


def set_output(name: str, value: str, stream: TextIO | None = None) -> None:
    """Publish a step output.

    Appends to the file named by ``$GITHUB_OUTPUT``; multi-line values use a
    heredoc delimiter. Without the variable the legacy ``set-output``
    workflow command is written to ``stream`` (stdout by default).
    """
    output_file = os.environ.get("GITHUB_OUTPUT")
    if not output_file:
        logger.warning(
            "GITHUB_OUTPUT is not set; falling back to the deprecated set-output command"
        )
        out = stream or sys.stdout
        out.write(f"::set-output name={name}::{_escape(value)}\n")
        return

    if "\n" in value:
        delimiter = f"ghadelimiter_{uuid.uuid4()}"
        entry = f"{name}<<{delimiter}\n{value}\n{delimiter}\n"
    else:
        entry = f"{name}={value}\n"

    with Path(output_file).open("a", encoding="utf-8") as fh:
        fh.write(entry)


def publish_images(result: ScanResult, stream: TextIO | None = None) -> None:
    set_output(OUTPUT_NAME, render_json(result), stream=stream)


def _escape(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")
