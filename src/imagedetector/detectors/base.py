"""Detector protocol."""

from __future__ import annotations

from typing import BinaryIO, Protocol, runtime_checkable


@runtime_checkable
class Detector(Protocol):
    name: str

    def is_supported(self, path: str) -> bool:
        """Decide from the path alone whether this detector handles the file.

        Must not open or stat the file.
        """
        ...

    def detect(self, content: BinaryIO) -> list[str]:
        """Return every image reference found in ``content``, in order.

        Raises ReadError when the stream cannot be fully consumed.
        """
        ...
