from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Dict, List

from .models import OutputError, printable

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ErrorEntry:
    path: str
    message: str


@dataclass(slots=True)
class RunSummary:
    files_visited: int = 0
    matched: int = 0
    written: int = 0
    skipped_no_artist: int = 0
    skipped_no_lyrics: int = 0
    read_errors: int = 0
    traversal_errors: int = 0
    depth_skipped_dirs: int = 0
    errors: List[ErrorEntry] = field(default_factory=list)
    depth_skipped_paths: List[str] = field(default_factory=list)

    def to_record(self) -> Dict[str, object]:
        return asdict(self)


class Report:
    """Sole owner of the run counters; every stage notifies it of outcomes."""

    def __init__(self) -> None:
        self._summary = RunSummary()

    def file_visited(self, path: Path) -> None:
        self._summary.files_visited += 1

    def matched(self, path: Path) -> None:
        self._summary.matched += 1

    def written(self, path: Path) -> None:
        self._summary.written += 1

    def skipped_no_artist(self, path: Path) -> None:
        self._summary.skipped_no_artist += 1

    def skipped_no_lyrics(self, path: Path) -> None:
        self._summary.skipped_no_lyrics += 1

    def read_error(self, path: Path, message: str) -> None:
        self._summary.read_errors += 1
        self._summary.errors.append(ErrorEntry(path=str(path), message=message))

    def traversal_error(self, path: Path, message: str) -> None:
        self._summary.traversal_errors += 1
        self._summary.errors.append(ErrorEntry(path=str(path), message=message))

    def depth_skipped(self, path: Path) -> None:
        self._summary.depth_skipped_dirs += 1
        self._summary.depth_skipped_paths.append(str(path))

    def summary(self) -> RunSummary:
        current = self._summary
        return RunSummary(
            files_visited=current.files_visited,
            matched=current.matched,
            written=current.written,
            skipped_no_artist=current.skipped_no_artist,
            skipped_no_lyrics=current.skipped_no_lyrics,
            read_errors=current.read_errors,
            traversal_errors=current.traversal_errors,
            depth_skipped_dirs=current.depth_skipped_dirs,
            errors=list(current.errors),
            depth_skipped_paths=list(current.depth_skipped_paths),
        )

    def render(self, quiet: bool = False) -> List[str]:
        summary = self._summary
        lines: List[str] = []
        if not quiet:
            lines.append(
                f"Scanned {summary.files_visited} files: matched {summary.matched}, "
                f"written {summary.written}"
            )
            lines.append(
                f"Skipped: {summary.skipped_no_artist} without matching artist, "
                f"{summary.skipped_no_lyrics} without lyrics"
            )
            if summary.depth_skipped_dirs:
                lines.append(
                    f"Depth limit prevented descending into {summary.depth_skipped_dirs} directories"
                )
            if summary.read_errors or summary.traversal_errors:
                lines.append(
                    f"Errors: {summary.traversal_errors} traversal, {summary.read_errors} tag read"
                )
        for entry in summary.errors:
            lines.append(f" - {printable(entry.path)}: {printable(entry.message)}")
        return lines

    def emit(self, quiet: bool = False) -> None:
        for line in self.render(quiet=quiet):
            print(line)

    def write_json(self, path: Path) -> None:
        """Overwrite ``path`` with the current summary."""
        payload = json.dumps(self.summary().to_record(), indent=2)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(payload + "\n", encoding="utf-8")
        except (OSError, UnicodeError) as exc:
            raise OutputError(path, f"failed to write summary: {exc}") from exc
        logger.info("Wrote run summary to %s", path)
