from __future__ import annotations

from typing import Optional

from .models import RawMetadata


class ArtistMatcher:
    """Case-insensitive substring match on the effective artist.

    This is a substring test, not a token match: "Studio" matches the
    filter "udio". Only ``str.lower`` is applied, no full Unicode case
    folding.
    """

    def __init__(self, artist_filter: str) -> None:
        self.needle = artist_filter.strip().lower()

    def match(self, meta: RawMetadata) -> Optional[str]:
        artist = meta.effective_artist
        if artist is None:
            return None
        if self.needle not in artist.lower():
            return None
        return artist
