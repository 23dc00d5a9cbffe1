import pytest

from chord_search.pitch_class import (
    canonical_note,
    enharmonic_spellings,
    note_to_pc,
    pc_to_note,
    semitones_between,
    transpose_note,
)


class TestNoteToPc:
    @pytest.mark.parametrize(
        ("note", "pc"),
        [
            ("C", 0),
            ("C#", 1),
            ("Db", 1),
            ("bb", 10),
            ("BB", 10),
            ("EB", 3),
            ("B#", 0),
            ("Cb", 11),
            ("F♯", 6),
            ("E♭", 3),
        ],
    )
    def test_values(self, note, pc):
        assert note_to_pc(note) == pc

    @pytest.mark.parametrize("note", ["", "H", "C##", "Xb"])
    def test_unknown(self, note):
        with pytest.raises(ValueError, match="Unknown note"):
            note_to_pc(note)


class TestArithmetic:
    def test_pc_to_note_wraps(self):
        assert pc_to_note(13) == "C#"
        assert pc_to_note(-2) == "A#"

    def test_canonical(self):
        assert canonical_note("Gb") == "F#"

    @pytest.mark.parametrize(("note", "shift", "expected"), [("C", 2, "D"), ("C", -1, "B"), ("E", 26, "F#")])
    def test_transpose_note(self, note, shift, expected):
        assert transpose_note(note, shift) == expected

    def test_semitones_between(self):
        assert semitones_between("C", "G") == 7
        assert semitones_between("G", "C") == 5
        assert semitones_between("Eb", "D#") == 0

    def test_enharmonic_spellings(self):
        assert enharmonic_spellings("C#") == ["C#", "Db"]
        assert enharmonic_spellings("E") == ["E", "Fb"]
