"""JSON report exporter."""

from __future__ import annotations

import json

from imagedetector.models import ScanResult


def render_json(result: ScanResult, pretty: bool = False) -> str:
    """Render the discovered images as a JSON array of strings."""
    return json.dumps(result.images, indent=2 if pretty else None, ensure_ascii=False)
