from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Protocol

from mutagen import MutagenError
from mutagen.id3 import COMM, ID3, ID3NoHeaderError, TXXX, USLT

from .models import LyricEntry, MetadataReadError, RawMetadata

logger = logging.getLogger(__name__)

LYRICS_DESCRIPTION = "lyrics"


class MetadataReader(Protocol):
    def read(self, path: Path) -> RawMetadata: ...


class Id3TagReader:
    """Reads artist, title and lyric frames from an ID3v2 tag."""

    def read(self, path: Path) -> RawMetadata:
        try:
            tags = ID3(path)
        except ID3NoHeaderError as exc:
            raise MetadataReadError(path, f"no ID3 tag found ({exc})") from exc
        except (MutagenError, OSError) as exc:
            raise MetadataReadError(path, str(exc) or type(exc).__name__) from exc
        lyrics = self._lyric_entries(tags)
        logger.debug("Read %d lyric frames from %s", len(lyrics), path)
        return RawMetadata(
            artist=self._id3_text(tags, "TPE1"),
            band=self._id3_text(tags, "TPE2"),
            title=self._id3_text(tags, "TIT2"),
            lyrics=tuple(lyrics),
        )

    def _id3_text(self, tags: ID3, frame_id: str) -> Optional[str]:
        frames = tags.getall(frame_id)
        if not frames:
            return None
        return "/".join(str(value) for value in frames[0].text)

    def _lyric_entries(self, tags: ID3) -> List[LyricEntry]:
        # tags.values() keeps the order frames were stored in the file
        entries: List[LyricEntry] = []
        for frame in tags.values():
            if isinstance(frame, USLT):
                entries.append(LyricEntry(language=frame.lang or "", text=frame.text))
            elif isinstance(frame, TXXX) and _is_lyrics(frame.desc):
                entries.append(LyricEntry(language="", text="\n".join(frame.text)))
            elif isinstance(frame, COMM) and _is_lyrics(frame.desc):
                entries.append(LyricEntry(language=frame.lang or "", text="\n".join(frame.text)))
        return entries


def _is_lyrics(description: Optional[str]) -> bool:
    return (description or "").strip().lower() == LYRICS_DESCRIPTION
