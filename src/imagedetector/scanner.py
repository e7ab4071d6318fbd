"""Directory scanner — walks a tree and dispatches files to detectors."""

from __future__ import annotations

import logging
import stat
from collections.abc import Iterator
from pathlib import Path

from imagedetector.config import ScanConfig
from imagedetector.detectors.base import Detector
from imagedetector.errors import ConfigError, DetectionError, TraversalError
from imagedetector.matcher import PatternMatcher
from imagedetector.models import ScanStats
from imagedetector.results import ResultSet

logger = logging.getLogger(__name__)


class Scanner:
    """Finds image references in every file reachable from a root directory.

    Files are handled one at a time. For each regular file the exclusion
    patterns are checked first, then the first detector whose
    ``is_supported`` accepts the path is run on the file content. Any
    traversal, pattern or detection error aborts the whole scan.
    """

    def __init__(
        self,
        matcher: PatternMatcher | None = None,
        log: logging.Logger | None = None,
    ) -> None:
        self.matcher = matcher or PatternMatcher()
        self.log = log or logger
        self.stats = ScanStats()

    def scan(self, config: ScanConfig) -> list[str]:
        """Return the unique image references found under ``config.root_path``, sorted."""
        root = Path(config.root_path)
        if not root.is_dir():
            raise ConfigError(
                f"check directory {config.root_path!r} does not exist or is not a directory",
                path=config.root_path,
            )

        self.stats = ScanStats()
        results = ResultSet()

        self.log.info("Scanning directory %s", config.root_path)
        self.log.debug("Excluding patterns: %s", list(config.exclude_patterns))
        self.log.debug("Available detectors: %d", len(config.detectors))

        for path in self._walk(root):
            self._process(path, config, results)

        images = results.finalize()
        self.log.info(
            "Image detection completed: %d image(s) in %d file(s), %d excluded",
            len(images),
            self.stats.files_detected,
            self.stats.files_excluded,
        )
        return images

    def _walk(self, directory: Path) -> Iterator[Path]:
        try:
            entries = sorted(directory.iterdir())
        except OSError as e:
            raise TraversalError(str(directory), e) from e

        for entry in entries:
            try:
                st = entry.lstat()
                if stat.S_ISLNK(st.st_mode):
                    st = entry.stat()  # Fails for broken links
            except OSError as e:
                raise TraversalError(str(entry), e) from e

            if stat.S_ISDIR(st.st_mode):
                if entry.is_symlink():
                    self.log.debug("Not following directory symlink %s", entry)
                    continue
                yield from self._walk(entry)
            elif stat.S_ISREG(st.st_mode):
                yield entry
            else:
                self.log.debug("Skipping non-regular file %s", entry)

    def _process(self, path: Path, config: ScanConfig, results: ResultSet) -> None:
        name = str(path)
        self.stats.files_visited += 1
        self.log.debug("Visiting file %s", name)

        pattern = self.matcher.first_match(config.exclude_patterns, name)
        if pattern is not None:
            self.stats.files_excluded += 1
            self.log.debug("Excluded %s (pattern %s)", name, pattern)
            return

        detector = self._select(config.detectors, name)
        if detector is None:
            self.stats.files_skipped += 1
            self.log.debug("No detector supports %s", name)
            return

        self.log.debug("Detector %s matched %s", detector.name, name)
        try:
            fh = path.open("rb")
        except OSError as e:
            raise TraversalError(name, e) from e

        with fh:
            try:
                images = detector.detect(fh)
            except Exception as e:
                raise DetectionError(name, detector.name, e) from e

        self.stats.record_detection(detector.name)
        added = results.update(images)
        if images:
            self.log.debug("Found %d image(s) in %s, %d new", len(images), name, added)

    @staticmethod
    def _select(detectors: tuple[Detector, ...], path: str) -> Detector | None:
        for detector in detectors:
            if detector.is_supported(path):
                return detector
        return None
