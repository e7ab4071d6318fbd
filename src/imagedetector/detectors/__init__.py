"""Detector registry — ordered, generic fallback last."""

from __future__ import annotations

from typing import TYPE_CHECKING

from imagedetector.detectors.generic import GenericDetector

if TYPE_CHECKING:
    from imagedetector.detectors.base import Detector

DETECTOR_CLASSES: dict[str, type] = {
    "generic": GenericDetector,
}

FALLBACK_DETECTOR = "generic"


def list_detectors() -> list[str]:
    return list(DETECTOR_CLASSES)


def get_detector(name: str) -> Detector:
    cls = DETECTOR_CLASSES[name]
    return cls()
