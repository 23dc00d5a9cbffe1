import pytest

from chord_search import (
    COMMON_PROGRESSIONS,
    Chord,
    InvalidDegreeError,
    Key,
    Quality,
    chord_to_number,
    find_common_patterns,
    number_to_chord,
    parse_chord,
    parse_degree,
    progression_to_numbers,
    semitones_between,
    transpose_chord,
)

DIATONIC_IN_C = ["C", "Dm", "Em", "F", "G", "Am", "Bdim"]


class TestChordToNumber:
    @pytest.mark.parametrize(
        ("chord", "expected"),
        [
            ("C", "1"),
            ("Dm", "2m"),
            ("Em", "3m"),
            ("F", "4"),
            ("G", "5"),
            ("Am", "6m"),
            ("B°", "7°"),
            ("Bdim", "7°"),
            ("G7", "57"),
            ("Cmaj7", "1maj7"),
            ("Am7", "6m7"),
            ("Csus4", "1sus4"),
            ("C+", "1+"),
            ("Cadd9", "1add9"),
            ("G9", "59"),
            ("Cmaj9", "1maj9"),
            ("D", "2"),
            ("E", "3"),
            ("Fm", "4m"),
            ("Bm7b5", "7ø7"),
        ],
    )
    def test_in_c(self, chord, expected):
        assert chord_to_number(chord, "C") == expected

    @pytest.mark.parametrize(
        ("chord", "expected"),
        [("C#", "#1"), ("Db", "#1"), ("Eb", "b3"), ("F#", "#4"), ("F#°", "#4°"), ("Ab", "b6"), ("Bb", "b7")],
    )
    def test_chromatic_roots(self, chord, expected):
        assert chord_to_number(chord, "C") == expected

    def test_other_key(self):
        assert progression_to_numbers(["G", "D", "Em", "C"], "G") == ["1", "5", "6m", "4"]

    def test_key_object(self):
        assert chord_to_number("E", Key("A")) == "5"

    def test_minor_key_uses_major_frame_of_root(self):
        assert chord_to_number("Am", "Am") == "1m"
        assert chord_to_number("C", "Am") == "b3"

    def test_slash_bass_is_dropped(self):
        assert chord_to_number("C/E", "C") == "1"

    @pytest.mark.parametrize("chord", [None, "", "not a chord"])
    def test_invalid_chord_reads_as_c(self, chord):
        assert chord_to_number(chord, "C") == "1"

    def test_invalid_key_reads_as_c(self):
        assert chord_to_number("G", "nonsense") == "5"


class TestNumberToChord:
    @pytest.mark.parametrize(
        ("number", "key", "expected"),
        [
            ("57", "C", "G7"),
            ("1", "G", "G"),
            ("6m", "F", "Dm"),
            ("7°", "C", "Bdim"),
            ("#4", "C", "F#"),
            ("b7", "C", "A#"),
            ("b3", "A", "C"),
            ("2m7", "Bb", "Cm7"),
        ],
    )
    def test_examples(self, number, key, expected):
        assert str(number_to_chord(number, key)) == expected

    @pytest.mark.parametrize("number", ["", "8", "0", "x", "5xyz", "#", None])
    def test_invalid_numbers_fall_back_to_key_root(self, number):
        assert number_to_chord(number, "G") == Chord("G")


class TestParseDegree:
    def test_plain(self):
        assert parse_degree("6m") == (0, 6, Quality.MINOR)

    def test_accidentals(self):
        assert parse_degree("b7") == (-1, 7, Quality.MAJOR)
        assert parse_degree("#4°") == (1, 4, Quality.DIMINISHED)

    def test_suffix_digits(self):
        assert parse_degree("57") == (0, 5, Quality.DOMINANT7)

    @pytest.mark.parametrize(
        ("number", "reason"),
        [("", "empty"), ("8", "outside 1-7"), ("0", "outside 1-7"), ("b", "missing scale degree"), ("4zz", "unknown")],
    )
    def test_invalid(self, number, reason):
        with pytest.raises(InvalidDegreeError, match=reason):
            parse_degree(number)

    def test_error_carries_number(self):
        with pytest.raises(InvalidDegreeError) as excinfo:
            parse_degree("9")
        assert excinfo.value.number == "9"


class TestRoundTrip:
    """Diatonic chords survive a trip through Nashville numbers in any key."""

    @pytest.mark.parametrize("key", ["C", "G", "Eb", "F#", "A", "Db"])
    @pytest.mark.parametrize("symbol", [*DIATONIC_IN_C, "G7", "Cmaj7", "Dm7", "Fsus2"])
    def test_round_trip(self, key, symbol):
        chord = transpose_chord(symbol, semitones_between("C", key))
        assert number_to_chord(chord_to_number(chord, key), key) == chord

    @pytest.mark.parametrize("symbol", ["C#", "Eb", "F#m", "Ab7", "Bb"])
    def test_chromatic_round_trip(self, symbol):
        chord = parse_chord(symbol)
        assert number_to_chord(chord_to_number(chord, "C"), "C") == chord


class TestCommonPatterns:
    def test_pop_progression(self):
        numbers = progression_to_numbers(["C", "G", "Am", "F"], "C")
        assert find_common_patterns(numbers) == ["I-V-vi-IV"]

    def test_multiple_patterns(self):
        assert find_common_patterns(["2m", "5", "1", "4", "5"]) == ["ii-V-I", "I-IV-V"]

    def test_no_pattern(self):
        assert find_common_patterns(["1", "2m"]) == []

    def test_patterns_use_valid_numbers(self):
        for pattern in COMMON_PROGRESSIONS.values():
            for number in pattern:
                parse_degree(number)
