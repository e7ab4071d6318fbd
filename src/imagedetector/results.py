"""Deduplicating accumulator of discovered image references."""

from __future__ import annotations

from collections.abc import Iterable


class ResultSet:
    """Set of image references, unique by exact string equality.

    Once finalized the set is read-only.
    """

    def __init__(self) -> None:
        self._images: set[str] = set()
        self._finalized = False

    def add(self, image: str) -> bool:
        """Insert ``image``; return True if it was not already present."""
        self._check_open()
        if image in self._images:
            return False
        self._images.add(image)
        return True

    def update(self, images: Iterable[str]) -> int:
        """Insert every image; return how many were new."""
        return sum(1 for image in images if self.add(image))

    def finalize(self) -> list[str]:
        """Freeze the set and return its contents sorted lexicographically."""
        self._finalized = True
        return sorted(self._images)

    @property
    def finalized(self) -> bool:
        return self._finalized

    def _check_open(self) -> None:
        if self._finalized:
            raise RuntimeError("ResultSet is finalized")

    def __contains__(self, image: object) -> bool:
        return image in self._images

    def __len__(self) -> int:
        return len(self._images)

    def __iter__(self):
        return iter(self._images)
