from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional, Tuple

UNKNOWN_TITLE = "Unknown Title"


@dataclass(frozen=True, slots=True)
class CandidateFile:
    path: Path
    depth: int


@dataclass(frozen=True, slots=True)
class LyricEntry:
    language: str
    text: str


@dataclass(frozen=True, slots=True)
class RawMetadata:
    """Tag fields as stored in the file; absent frames are ``None``."""

    artist: Optional[str] = None
    band: Optional[str] = None
    title: Optional[str] = None
    lyrics: Tuple[LyricEntry, ...] = field(default_factory=tuple)

    @property
    def effective_artist(self) -> Optional[str]:
        for candidate in (self.artist, self.band):
            if candidate is None:
                continue
            cleaned = candidate.strip()
            if cleaned:
                return cleaned
        return None


@dataclass(frozen=True, slots=True)
class Record:
    title: str
    artist: str
    lyrics: str
    source_path: Path

    def to_record(self) -> Dict[str, str]:
        return {
            "title": self.title,
            "artist": self.artist,
            "lyrics": self.lyrics,
            "source_path": str(self.source_path),
        }


class LyricGetterError(Exception):
    """Base class for errors raised by this package."""


class ConfigError(LyricGetterError):
    """Raised when the run configuration cannot be built."""


class MetadataReadError(LyricGetterError):
    """Raised when a file's tag cannot be read; the run keeps going."""

    def __init__(self, path: Path, cause: str) -> None:
        super().__init__(f"{path}: {cause}")
        self.path = path
        self.cause = cause


class OutputError(LyricGetterError):
    """Raised when an output file cannot be opened or written. Fatal."""

    def __init__(self, path: Path, cause: str) -> None:
        super().__init__(f"{path}: {cause}")
        self.path = path
        self.cause = cause


def printable(text: Path | str) -> str:
    """Text safe for a strict UTF-8 stdout; undecodable file name bytes become U+FFFD."""
    return str(text).encode("utf-8", "surrogateescape").decode("utf-8", "replace")
