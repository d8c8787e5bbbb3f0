import json
import unittest
from pathlib import Path

from lyric_getter.config import OutputFormat
from lyric_getter.models import LyricEntry, RawMetadata, Record
from lyric_getter.records import RecordBuilder, aggregate_lyrics, render_text_block


def _entries(*texts: str) -> tuple:
    return tuple(LyricEntry(language="eng", text=text) for text in texts)


class TestRecordBuilder(unittest.TestCase):
    def setUp(self) -> None:
        self.builder = RecordBuilder(OutputFormat.TEXT)
        self.source = Path("/music/song.mp3")

    def test_multiple_entries_are_separated_by_one_blank_line(self) -> None:
        self.assertEqual(aggregate_lyrics(_entries("Verse one", "Verse two")), "Verse one\n\nVerse two")

    def test_aggregate_trims_and_skips_blank_entries(self) -> None:
        lyrics = aggregate_lyrics(_entries("\n  Verse one\n", "   ", "", "Verse two\n\n"))
        self.assertEqual(lyrics, "Verse one\n\nVerse two")

    def test_title_falls_back_when_missing_or_blank(self) -> None:
        for title in (None, "", "   "):
            record = self.builder.build(RawMetadata(title=title, lyrics=_entries("Words")), "Udio", self.source)
            self.assertIsNotNone(record)
            self.assertEqual(record.title, "Unknown Title")

    def test_title_is_trimmed(self) -> None:
        record = self.builder.build(RawMetadata(title="  Anthem ", lyrics=_entries("Words")), "Udio", self.source)
        self.assertEqual(record.title, "Anthem")

    def test_no_lyrics_yields_none(self) -> None:
        self.assertIsNone(self.builder.build(RawMetadata(title="Silent"), "Udio", self.source))
        self.assertIsNone(self.builder.build(RawMetadata(lyrics=_entries(" ", "\n")), "Udio", self.source))

    def test_record_keeps_matched_artist_and_source(self) -> None:
        record = self.builder.build(RawMetadata(lyrics=_entries("Words")), "Udio Labs", self.source)
        self.assertEqual(record.artist, "Udio Labs")
        self.assertEqual(record.source_path, self.source)

    def test_text_block_layout(self) -> None:
        record = Record(title="Echoes", artist="Studio Band", lyrics="Line one\nLine two", source_path=self.source)
        self.assertEqual(
            render_text_block(record),
            "=== Echoes ===\nArtist: Studio Band\nLine one\nLine two\n",
        )
        self.assertNotIn(str(self.source), self.builder.render(record))

    def test_json_line_is_single_line_object(self) -> None:
        builder = RecordBuilder(OutputFormat.JSON)
        record = Record(title="Sunrise", artist="Audio Ensemble", lyrics="Golden\nlight", source_path=self.source)

        line = builder.render(record)

        self.assertNotIn("\n", line)
        self.assertEqual(
            json.loads(line),
            {
                "title": "Sunrise",
                "artist": "Audio Ensemble",
                "lyrics": "Golden\nlight",
                "source_path": str(self.source),
            },
        )


if __name__ == "__main__":
    unittest.main()
