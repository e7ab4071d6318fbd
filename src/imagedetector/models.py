"""Data models for scan statistics and reports."""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, Field


class ScanStats(BaseModel):
    """Per-scan counters, filled in by the Scanner."""

    files_visited: int = 0
    files_excluded: int = 0
    files_skipped: int = Field(default=0, description="No detector supported the file")
    files_detected: int = 0
    by_detector: dict[str, int] = Field(default_factory=dict)

    def record_detection(self, detector: str) -> None:
        self.files_detected += 1
        self.by_detector[detector] = self.by_detector.get(detector, 0) + 1


class ScanResult(BaseModel):
    """Complete result of one image-detector run."""

    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
    root: str = ""
    images: list[str] = Field(default_factory=list)
    detectors_used: list[str] = Field(default_factory=list)
    stats: ScanStats = Field(default_factory=ScanStats)

    @property
    def total(self) -> int:
        return len(self.images)
