"""Catch-all detector matching image coordinates anywhere in text."""

from __future__ import annotations

from typing import BinaryIO

import re2

from imagedetector.errors import ReadError

_COMPONENT = r"[a-z0-9]+(?:[.-][a-z0-9]+)*"

# [registry[:port]/namespace/...]repository/image:tag
# RE2 keeps the search linear in the input length; the nested repetition
# backtracks quadratically under the stdlib engine on long tokens.
IMAGE_PATTERN = re2.compile(
    rf"(?:{_COMPONENT}/)*"
    rf"{_COMPONENT}"
    r"(?::[a-z0-9.-]+)?"
    r"/[a-z0-9-]+"
    r"(?:/[a-z0-9-]+)?"
    r":[a-z0-9.-]+"
)


class GenericDetector:
    name = "generic"

    def is_supported(self, path: str) -> bool:
        return True  # Fallback for every file

    def detect(self, content: BinaryIO) -> list[str]:
        try:
            data = content.read()
        except OSError as e:
            raise ReadError(e) from e

        text = data.decode("utf-8", errors="replace") if isinstance(data, bytes) else data
        return [m.group(0) for m in IMAGE_PATTERN.finditer(text)]
