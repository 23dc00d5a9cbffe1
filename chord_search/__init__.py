"""Chord progression search and music-theory helpers.

This library parses lead-sheet chord symbols, translates them to and from
the Nashville number system, estimates keys, and finds where a chord
progression occurs in a corpus of songs (optionally in any key). It also
ranks songs by harmonic similarity for "related songs" discovery.

Examples
--------
>>> from chord_search import parse_chord, transpose_chord, chord_to_number

>>> # Parse and normalize a chord symbol
>>> str(parse_chord("Bbmin7"))
'A#m7'

>>> # Transpose, keeping slash basses
>>> str(transpose_chord("C/E", 2))
'D/F#'

>>> # Key-relative notation
>>> chord_to_number("G7", "C")
'57'

>>> # Search a corpus
>>> from chord_search import Song, search_progression
>>> corpus = [Song.from_dict({"id": "s1", "sections": {"verse": {"progression": ["C", "Am", "F", "G"]}}})]
>>> [(r.section.name, r.confidence) for r in search_progression(["C", "Am"], corpus)]
[('verse', 1.0)]
"""

from chord_search.corpus import CorpusFilter, available_filters, count_filtered, iter_sections, search_by_filters
from chord_search.errors import ChordSearchError, EmptyInputError, InvalidDegreeError, ParseError
from chord_search.key_detection import analyze_key, detect_key
from chord_search.matcher import (
    SearchOptions,
    find_matches,
    match_confidence,
    progression_suggestions,
    search_by_chords,
    search_progression,
)
from chord_search.models import (
    Chord,
    ChordHit,
    DatabaseReport,
    Key,
    KeyCandidate,
    Match,
    ProgressionAnalysis,
    ProgressionSuggestion,
    ProgressionVariation,
    RelatedSong,
    ScoredMatch,
    Section,
    SectionPair,
    Song,
    Substitution,
)
from chord_search.nashville import (
    COMMON_PROGRESSIONS,
    chord_to_number,
    find_common_patterns,
    number_to_chord,
    parse_degree,
    progression_to_numbers,
)
from chord_search.parser import (
    enharmonic_equivalents,
    normalize_chord,
    normalize_progression,
    parse_chord,
    parse_key,
    parse_or_default,
    parse_progression,
    parse_progression_input,
    suggest_chords,
)
from chord_search.pitch_class import semitones_between
from chord_search.quality import Quality
from chord_search.sections import determine_complexity, parse_sections_text, sections_to_text, validate_sections
from chord_search.similarity import (
    RelatedSongsOptions,
    build_similarity_matrix,
    find_related_songs,
    group_by_similarity,
    progression_similarity,
    similarity_explanation,
)
from chord_search.substitutions import analyze_progression, chord_substitutions, progression_variations
from chord_search.transpose import transpose_chord, transpose_progression
from chord_search.validation import (
    is_valid_chord,
    is_valid_timestamp,
    validate_database,
    validate_section,
    validate_song,
)
from chord_search.voicing import chord_frequencies, chord_midi_notes, chord_tones

__all__ = [
    "COMMON_PROGRESSIONS",
    "Chord",
    "ChordHit",
    "ChordSearchError",
    "CorpusFilter",
    "DatabaseReport",
    "EmptyInputError",
    "InvalidDegreeError",
    "Key",
    "KeyCandidate",
    "Match",
    "ParseError",
    "ProgressionAnalysis",
    "ProgressionSuggestion",
    "ProgressionVariation",
    "Quality",
    "RelatedSong",
    "RelatedSongsOptions",
    "ScoredMatch",
    "SearchOptions",
    "Section",
    "SectionPair",
    "Song",
    "Substitution",
    "analyze_key",
    "analyze_progression",
    "available_filters",
    "build_similarity_matrix",
    "chord_frequencies",
    "chord_midi_notes",
    "chord_substitutions",
    "chord_to_number",
    "chord_tones",
    "count_filtered",
    "detect_key",
    "determine_complexity",
    "enharmonic_equivalents",
    "find_common_patterns",
    "find_matches",
    "find_related_songs",
    "group_by_similarity",
    "is_valid_chord",
    "is_valid_timestamp",
    "iter_sections",
    "match_confidence",
    "normalize_chord",
    "normalize_progression",
    "number_to_chord",
    "parse_chord",
    "parse_degree",
    "parse_key",
    "parse_or_default",
    "parse_progression",
    "parse_progression_input",
    "parse_sections_text",
    "progression_similarity",
    "progression_suggestions",
    "progression_to_numbers",
    "progression_variations",
    "search_by_chords",
    "search_by_filters",
    "search_progression",
    "sections_to_text",
    "semitones_between",
    "similarity_explanation",
    "suggest_chords",
    "transpose_chord",
    "transpose_progression",
    "validate_database",
    "validate_section",
    "validate_sections",
    "validate_song",
]
