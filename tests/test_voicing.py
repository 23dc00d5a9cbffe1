import numpy as np
import pytest

from chord_search import Chord, ParseError, Quality, chord_frequencies, chord_midi_notes, chord_tones


class TestChordTones:
    @pytest.mark.parametrize(
        ("symbol", "tones"),
        [
            ("C", ("C", "E", "G")),
            ("Am", ("A", "C", "E")),
            ("Am7", ("A", "C", "E", "G")),
            ("G7", ("G", "B", "D", "F")),
            ("Bb", ("A#", "D", "F")),
            ("Bdim", ("B", "D", "F")),
            ("Dsus4", ("D", "G", "A")),
            ("Fmaj7", ("F", "A", "C", "E")),
        ],
    )
    def test_tones(self, symbol, tones):
        assert chord_tones(symbol) == tones

    def test_chord_value(self):
        assert chord_tones(Chord("E", Quality.MINOR)) == ("E", "G", "B")

    def test_slash_bass_outside_chord_goes_first(self):
        assert chord_tones("Am/G") == ("G", "A", "C", "E")

    def test_slash_bass_inside_chord(self):
        assert set(chord_tones("D/F#")) == {"D", "F#", "A"}

    def test_invalid(self):
        with pytest.raises(ParseError):
            chord_tones("nope")


class TestMidiNotes:
    def test_root_position(self):
        assert chord_midi_notes("C") == (60, 64, 67)

    def test_octave(self):
        assert chord_midi_notes("C", octave=3) == (48, 52, 55)

    def test_slash_bass_an_octave_below(self):
        assert chord_midi_notes("C/E") == (52, 60, 64, 67)

    def test_ascending(self):
        notes = chord_midi_notes("Am7/G")
        assert list(notes) == sorted(notes)


class TestFrequencies:
    def test_a_major(self):
        freqs = chord_frequencies("A")
        assert isinstance(freqs, np.ndarray)
        np.testing.assert_allclose(freqs, [440.0, 554.365, 659.255], rtol=1e-5)

    def test_middle_c(self):
        assert chord_frequencies("C")[0] == pytest.approx(261.6256, rel=1e-6)
