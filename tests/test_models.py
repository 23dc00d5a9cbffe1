import dataclasses

import pytest

from chord_search import Chord, Key, Match, ProgressionSuggestion, Quality, Song


class TestChord:
    def test_str(self):
        assert str(Chord("G", Quality.DOMINANT7)) == "G7"
        assert str(Chord("D", bass="F#")) == "D/F#"

    def test_default_quality_is_major(self):
        assert Chord("C").quality is Quality.MAJOR

    @pytest.mark.parametrize(("root", "bass"), [("Bb", None), ("H", None), ("C", "Db")])
    def test_non_canonical_notes_rejected(self, root, bass):
        with pytest.raises(ValueError, match="canonical note"):
            Chord(root, bass=bass)

    def test_frozen(self):
        chord = Chord("C")
        with pytest.raises(dataclasses.FrozenInstanceError):
            chord.root = "D"

    def test_hashable_and_equal(self):
        assert {Chord("A", Quality.MINOR), Chord("A", Quality.MINOR)} == {Chord("A", Quality.MINOR)}

    def test_to_pychord(self):
        assert Chord("B", Quality.HALF_DIMINISHED7).to_pychord() == "Bm7-5"
        assert Chord("C", Quality.MAJOR, "E").to_pychord() == "C/E"


class TestKey:
    def test_str(self):
        assert str(Key("F#", minor=True)) == "F#m"
        assert str(Key("C")) == "C"


class TestMatch:
    def test_length(self):
        match = Match("partial", 2, 4, ("F", "G", "C"), ("F", "G", "C"), 0, 2, 0.75)
        assert match.length == 3


class TestSong:
    def test_from_mapping_sections(self):
        song = Song.from_dict(
            {
                "songId": "x1",
                "title": "T",
                "sections": {"verse": {"progression": ["C", "G"], "complexity": "simple"}},
            }
        )
        assert song.song_id == "x1"
        assert song.sections[0].name == "verse"
        assert song.sections[0].progression == ("C", "G")
        assert song.sections[0].complexity == "simple"

    def test_from_list_sections(self):
        song = Song.from_dict({"id": 7, "sections": [{"name": "chorus", "progression": ["Am"]}]})
        assert song.song_id == "7"
        assert song.section("chorus").progression == ("Am",)

    def test_missing_section(self):
        assert Song.from_dict({"id": "a"}).section("bridge") is None

    def test_corpus_song_metadata(self, songs_by_id):
        song = songs_by_id["s4"]
        assert song.genre == "Jazz"
        assert song.key == "G"
        assert len(song.sections[0].progression) == 7


class TestProgressionSuggestion:
    def test_next_chord(self):
        assert ProgressionSuggestion(("C", "G", "Am"), 2).next_chord == "Am"
