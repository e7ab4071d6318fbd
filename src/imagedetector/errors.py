"""Error kinds raised by the scanning pipeline."""

from __future__ import annotations

from enum import StrEnum


class ErrorKind(StrEnum):
    CONFIG = "config"
    TRAVERSAL = "traversal"
    PATTERN = "pattern"
    DETECTION = "detection"
    READ = "read"


class ImageDetectorError(Exception):
    """Base error. ``kind`` lets callers branch without isinstance chains."""

    kind: ErrorKind

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ConfigError(ImageDetectorError):
    kind = ErrorKind.CONFIG

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


class TraversalError(ImageDetectorError):
    """Filesystem entry could not be accessed during the walk."""

    kind = ErrorKind.TRAVERSAL

    def __init__(self, path: str, cause: BaseException) -> None:
        super().__init__(f"error accessing path {path!r}: {cause}")
        self.path = path
        self.cause = cause


class PatternError(ImageDetectorError):
    kind = ErrorKind.PATTERN

    def __init__(self, pattern: str, reason: str, path: str | None = None) -> None:
        if path is None:
            message = f"invalid exclude pattern {pattern!r}: {reason}"
        else:
            message = (
                f"error matching exclude pattern {pattern!r} "
                f"against path {path!r}: {reason}"
            )
        super().__init__(message)
        self.pattern = pattern
        self.reason = reason
        self.path = path


class ReadError(ImageDetectorError):
    """Content stream could not be fully consumed by a detector."""

    kind = ErrorKind.READ

    def __init__(self, cause: BaseException) -> None:
        super().__init__(f"failed to read content: {cause}")
        self.cause = cause


class DetectionError(ImageDetectorError):
    kind = ErrorKind.DETECTION

    def __init__(self, path: str, detector: str, cause: BaseException) -> None:
        super().__init__(
            f"error detecting images in file {path!r} with detector {detector!r}: {cause}"
        )
        self.path = path
        self.detector = detector
        self.cause = cause
