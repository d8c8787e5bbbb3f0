import unittest

from lyric_getter.matching import ArtistMatcher
from lyric_getter.models import RawMetadata


class TestArtistMatcher(unittest.TestCase):
    def setUp(self) -> None:
        self.matcher = ArtistMatcher("udio")

    def test_match_is_case_insensitive(self) -> None:
        self.assertEqual(self.matcher.match(RawMetadata(artist="Udio Labs")), "Udio Labs")

    def test_substring_inside_word_matches(self) -> None:
        # substring match, not a token match: "Studio" contains "udio"
        self.assertEqual(self.matcher.match(RawMetadata(artist="Studio")), "Studio")

    def test_filter_is_lowercased(self) -> None:
        self.assertEqual(ArtistMatcher("  UDIO ").match(RawMetadata(artist="my udio band")), "my udio band")

    def test_non_matching_artist_is_rejected(self) -> None:
        self.assertIsNone(self.matcher.match(RawMetadata(artist="Composer", band="Audio Crew")))

    def test_empty_primary_falls_back_to_band(self) -> None:
        self.assertEqual(self.matcher.match(RawMetadata(artist="", band="Udio")), "Udio")

    def test_whitespace_primary_falls_back_to_band(self) -> None:
        self.assertEqual(self.matcher.match(RawMetadata(artist="   ", band=" Udio Crew ")), "Udio Crew")

    def test_both_fields_empty_never_match(self) -> None:
        self.assertIsNone(self.matcher.match(RawMetadata(artist="", band="")))
        self.assertIsNone(self.matcher.match(RawMetadata()))
        self.assertIsNone(ArtistMatcher("").match(RawMetadata()))

    def test_empty_filter_matches_any_artist(self) -> None:
        self.assertEqual(ArtistMatcher("").match(RawMetadata(artist="Anyone")), "Anyone")

    def test_primary_wins_over_band(self) -> None:
        self.assertIsNone(self.matcher.match(RawMetadata(artist="Composer", band="Udio")))


if __name__ == "__main__":
    unittest.main()
