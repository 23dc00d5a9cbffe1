import pytest

from chord_search import Section, determine_complexity, parse_sections_text, sections_to_text, validate_sections
from chord_search.sections import EXAMPLE_SECTIONS_TEXT, extract_chords, preprocess


class TestPreprocess:
    def test_normalizes_line_endings(self):
        assert preprocess("a\r\nb\rc\n") == ["a", "b", "c", ""]


class TestExtractChords:
    def test_keeps_chord_shaped_tokens(self):
        assert extract_chords("C Am (x2) F/A hello G") == ["C", "Am", "F/A", "G"]

    def test_complete_parenthetical_is_ignored_for_shape(self):
        assert extract_chords("C(add9) G") == ["C(add9)", "G"]

    def test_unterminated_parenthetical_dropped(self):
        assert extract_chords("(repeat C G") == ["C", "G"]


class TestParseSectionsText:
    def test_sections(self):
        sections = parse_sections_text("Verse: C Am F G\nchorus: F C G Am")
        assert [s.name for s in sections] == ["verse", "chorus"]
        assert sections[0].progression == ("C", "Am", "F", "G")
        assert sections[1].complexity == "simple"

    def test_continuation_lines(self):
        sections = parse_sections_text("verse: C G\n  Am F\n\nchorus: F C")
        assert sections[0].progression == ("C", "G", "Am", "F")

    def test_comments_and_blank_lines(self):
        text = "# my song\n\nverse: C G\n# bridge later\nchorus: F C"
        assert [s.name for s in parse_sections_text(text)] == ["verse", "chorus"]

    def test_header_without_chords_is_ignored(self):
        sections = parse_sections_text("verse: C G\nnotes: play softly\nAm F")
        assert [s.name for s in sections] == ["verse"]
        assert sections[0].progression == ("C", "G", "Am", "F")

    def test_repeated_name_replaces(self):
        sections = parse_sections_text("verse: C G\nchorus: F\nverse: D A")
        assert [(s.name, s.progression) for s in sections] == [("verse", ("D", "A")), ("chorus", ("F",))]

    def test_chords_before_any_section_are_dropped(self):
        assert parse_sections_text("C G Am\nverse: F") == (Section("verse", ("F",), "simple"),)

    @pytest.mark.parametrize("text", [None, "", "\n\n", "# only a comment"])
    def test_empty(self, text):
        assert parse_sections_text(text) == ()

    def test_example_text(self):
        sections = parse_sections_text(EXAMPLE_SECTIONS_TEXT)
        assert [s.name for s in sections] == ["verse", "chorus", "bridge", "verse2", "outro"]
        assert validate_sections(sections) == []


class TestDetermineComplexity:
    @pytest.mark.parametrize(
        ("progression", "expected"),
        [
            ([], "simple"),
            (["C", "Am", "F", "G"], "simple"),
            (["C", "Am", "F", "G7"], "simple"),
            (["C", "Am", "F7", "G7"], "intermediate"),
            (["Cmaj7", "Am7", "Dm7", "G7"], "intermediate"),
            (["Csus4", "C/E", "F", "G"], "intermediate"),
            (["Cmaj9", "F#dim", "Bb13", "Eaug"], "complex"),
        ],
    )
    def test_levels(self, progression, expected):
        assert determine_complexity(progression) == expected


class TestValidateSections:
    def test_valid(self):
        assert validate_sections([Section("verse", ("C", "G"))]) == []

    def test_no_sections(self):
        assert validate_sections([]) == ["At least one section is required"]

    def test_empty_section(self):
        assert validate_sections([Section("intro", ())]) == ['Section "intro" has no chords']

    def test_too_many_chords(self):
        errors = validate_sections([Section("jam", ("C",) * 17)])
        assert len(errors) == 1
        assert "too many chords (17)" in errors[0]

    def test_sixteen_chords_allowed(self):
        assert validate_sections([Section("jam", ("C",) * 16)]) == []


class TestSectionsToText:
    def test_round_trip(self):
        text = "verse: C Am F G\nchorus: F C G"
        assert sections_to_text(parse_sections_text(text)) == text

    def test_skips_empty_sections(self):
        assert sections_to_text([Section("intro", ()), Section("verse", ("C",))]) == "verse: C"
