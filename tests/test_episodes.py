"""Tests for episode ordering."""

import pytest

from drivewatch.server.episodes import Episode, episode_number, sort_episodes, stream_url_for


def _eps(*names):
    return [Episode(id=f"id{i}", name=n, stream_url=stream_url_for(f"id{i}")) for i, n in enumerate(names)]


def _names(episodes):
    return [e.name for e in episodes]


class TestEpisode:
    def test_from_drive_file(self):
        ep = Episode.from_drive_file({"id": "abc", "name": "S01E01.mkv", "mimeType": "video/x-matroska"})
        assert ep.id == "abc"
        assert ep.name == "S01E01.mkv"
        assert ep.stream_url == "https://drive.google.com/file/d/abc/preview"

    def test_to_dict_hides_stream_url(self):
        assert _eps("a")[0].to_dict() == {"id": "id0", "name": "a"}


class TestEpisodeNumber:
    @pytest.mark.parametrize("name,expected", [
        ("10.mp4", 10),
        ("Episode 007 - Title.mkv", 7),
        ("S02E05.mp4", 2),
        ("no digits.avi", 0),
        ("", 0),
    ])
    def test_first_digit_run(self, name, expected):
        assert episode_number(name) == expected


class TestSortEpisodes:
    def test_numeric_not_lexical(self):
        assert _names(sort_episodes(_eps("10.mp4", "2.mp4", "1.mp4"))) == ["1.mp4", "2.mp4", "10.mp4"]

    def test_padding_ignored(self):
        names = _names(sort_episodes(_eps("Ep 10.mp4", "Ep 02.mp4", "Ep 1.mp4")))
        assert names == ["Ep 1.mp4", "Ep 02.mp4", "Ep 10.mp4"]

    def test_number_beats_remaining_text(self):
        names = _names(sort_episodes(_eps("3 - Aardvark.mp4", "2 - Zebra.mp4")))
        assert names == ["2 - Zebra.mp4", "3 - Aardvark.mp4"]

    def test_no_number_sorts_as_zero(self):
        names = _names(sort_episodes(_eps("1 x", "Trailer")))
        assert names == ["Trailer", "1 x"]

    def test_extension_digit_counts(self):
        # "mp4" gives Trailer.mp4 the number 4
        names = _names(sort_episodes(_eps("5.mp4", "Trailer.mp4", "3.mp4")))
        assert names == ["3.mp4", "Trailer.mp4", "5.mp4"]

    def test_tie_break_case_insensitive(self):
        names = _names(sort_episodes(_eps("5 b.mp4", "5 A.mp4", "5 c.mp4")))
        assert names == ["5 A.mp4", "5 b.mp4", "5 c.mp4"]

    def test_tie_break_numeric_aware(self):
        # Same first number; later digit runs compare by value
        names = _names(sort_episodes(_eps("S1 part 10.mp4", "S1 part 2.mp4")))
        assert names == ["S1 part 2.mp4", "S1 part 10.mp4"]

    def test_tie_break_ignores_accents(self):
        names = _names(sort_episodes(_eps("1 éb.mp4", "1 ea.mp4")))
        assert names == ["1 ea.mp4", "1 éb.mp4"]

    def test_equal_names_keep_fetch_order(self):
        episodes = _eps("Pilot.mp4", "pilot.mp4", "PILOT.mp4")
        assert [e.id for e in sort_episodes(episodes)] == ["id0", "id1", "id2"]

    def test_does_not_mutate_input(self):
        episodes = _eps("2", "1")
        sort_episodes(episodes)
        assert _names(episodes) == ["2", "1"]
