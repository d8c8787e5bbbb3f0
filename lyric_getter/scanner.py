from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from pathlib import Path
from typing import FrozenSet, Tuple

from .config import RunConfig
from .models import CandidateFile
from .report import Report

logger = logging.getLogger(__name__)

DirKey = Tuple[int, int]


class LibraryScanner:
    """Walks the library once, yielding files whose extension is accepted.

    Entries are visited depth-first in name order. Traversal problems are
    handed to the report and never stop the walk.
    """

    def __init__(self, config: RunConfig, report: Report) -> None:
        self.root = config.root
        self.max_depth = config.max_depth
        self.follow_symlinks = config.follow_symlinks
        self.report = report
        self._exts = frozenset(ext.lower() for ext in config.extensions)
        self._consumed = False

    def iter_candidates(self) -> Iterator[CandidateFile]:
        if self._consumed:
            raise RuntimeError("LibraryScanner is single-pass; create a new scanner to rescan")
        self._consumed = True
        return self._walk_root()

    def __iter__(self) -> Iterator[CandidateFile]:
        return self.iter_candidates()

    def _walk_root(self) -> Iterator[CandidateFile]:
        try:
            root_key = _dir_key(self.root.stat())
        except OSError as exc:
            self._traversal_error(self.root, exc)
            return
        yield from self._walk(self.root, 0, frozenset({root_key}))

    def _walk(self, directory: Path, depth: int, ancestors: FrozenSet[DirKey]) -> Iterator[CandidateFile]:
        try:
            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda entry: entry.name)
        except OSError as exc:
            self._traversal_error(directory, exc)
            return
        for entry in entries:
            path = Path(entry.path)
            try:
                if entry.is_symlink():
                    if not self.follow_symlinks:
                        logger.debug("Not following symbolic link %s", path)
                        continue
                    if not path.exists():
                        self.report.traversal_error(path, "broken symbolic link")
                        logger.warning("Traversal error on '%s': broken symbolic link", path)
                        continue
                if entry.is_dir():
                    child_depth = depth + 1
                    if self.max_depth is not None and child_depth > self.max_depth:
                        logger.info("Skipped due to depth limit: %s", path)
                        self.report.depth_skipped(path)
                        continue
                    key = _dir_key(entry.stat())
                    if key in ancestors:
                        self.report.traversal_error(path, "symbolic link cycle detected")
                        logger.warning("Traversal error on '%s': symbolic link cycle detected", path)
                        continue
                    yield from self._walk(path, child_depth, ancestors | {key})
                elif entry.is_file() and self._should_include(path):
                    yield CandidateFile(path=path, depth=depth)
            except OSError as exc:
                self._traversal_error(path, exc)

    def _should_include(self, path: Path) -> bool:
        return path.suffix.lower().lstrip(".") in self._exts

    def _traversal_error(self, path: Path, exc: OSError) -> None:
        message = exc.strerror or str(exc)
        logger.warning("Traversal error on '%s': %s", path, message)
        self.report.traversal_error(path, message)


def _dir_key(stat: os.stat_result) -> DirKey:
    return (stat.st_dev, stat.st_ino)
