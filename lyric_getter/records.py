from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable, Optional

from .config import OutputFormat
from .models import UNKNOWN_TITLE, LyricEntry, RawMetadata, Record

LYRIC_SEPARATOR = "\n\n"


class RecordBuilder:
    def __init__(self, output_format: OutputFormat) -> None:
        self.output_format = output_format

    def build(self, meta: RawMetadata, artist: str, source_path: Path) -> Optional[Record]:
        """Return ``None`` when the file carries no usable lyric text."""
        lyrics = aggregate_lyrics(meta.lyrics)
        if not lyrics:
            return None
        return Record(
            title=resolve_title(meta.title),
            artist=artist,
            lyrics=lyrics,
            source_path=source_path,
        )

    def render(self, record: Record) -> str:
        if self.output_format is OutputFormat.JSON:
            return render_json_line(record)
        return render_text_block(record)


def resolve_title(title: Optional[str]) -> str:
    if title is None:
        return UNKNOWN_TITLE
    return title.strip() or UNKNOWN_TITLE


def aggregate_lyrics(entries: Iterable[LyricEntry]) -> str:
    # blank entries are left out so separators never double up
    blocks = [entry.text.strip() for entry in entries]
    return LYRIC_SEPARATOR.join(block for block in blocks if block).strip()


def render_text_block(record: Record) -> str:
    """Header, artist line and lyrics; the writer adds the blank terminator line.

    Downstream tools split on the ``=== title ===`` header, keep it stable.
    """
    return f"=== {record.title} ===\nArtist: {record.artist}\n{record.lyrics}\n"


def render_json_line(record: Record) -> str:
    return json.dumps(record.to_record(), ensure_ascii=False)
