from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional, Sequence

from mutagen.id3 import ID3, TIT2, TPE1, TPE2, USLT, Frame


def write_track(
    path: Path,
    artist: Optional[str] = None,
    band: Optional[str] = None,
    title: Optional[str] = None,
    lyrics: Sequence[str] = (),
    extra_frames: Iterable[Frame] = (),
) -> Path:
    """Write placeholder audio bytes with an ID3v2.4 tag in front of them.

    mutagen orders frames of the same kind by encoded size when saving, so
    tests that check lyric order use entries of equal length.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"\x00" * 16)
    tags = ID3()
    if artist is not None:
        tags.add(TPE1(encoding=3, text=artist))
    if band is not None:
        tags.add(TPE2(encoding=3, text=band))
    if title is not None:
        tags.add(TIT2(encoding=3, text=title))
    for index, text in enumerate(lyrics):
        tags.add(USLT(encoding=3, lang="eng", desc=f"segment{index}", text=text))
    for frame in extra_frames:
        tags.add(frame)
    tags.save(path)
    return path
