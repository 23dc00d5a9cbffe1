"""Chord substitutions, progression variations and progression analysis.

Rules are written in Nashville numbers, so each one applies in every key.
Chords are translated to numbers on the way in and realized back in the key
on the way out.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING

from chord_search.errors import EmptyInputError
from chord_search.models import Chord, ProgressionAnalysis, ProgressionVariation, Substitution
from chord_search.nashville import chord_to_number, find_common_patterns, number_to_chord, parse_degree
from chord_search.parser import parse_chord, parse_progression
from chord_search.pitch_class import semitones_between, transpose_note
from chord_search.quality import Quality
from chord_search.voicing import chord_tones

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from chord_search.models import Key

logger = logging.getLogger(__name__)

# Functional substitutes per Nashville number, strongest first
SUBSTITUTION_RULES: dict[str, tuple[str, ...]] = {
    # Triads
    "1": ("6m", "3m"),
    "2m": ("4", "7°"),
    "3m": ("1", "6m"),
    "4": ("2m", "6m", "1"),
    "5": ("7°", "3m"),
    "6m": ("4", "1"),
    "7°": ("5", "3m"),
    # Sevenths
    "1maj7": ("6m7", "3m7"),
    "17": ("1",),
    "2m7": ("4maj7",),
    "4maj7": ("2m7", "6m7"),
    "57": ("b27", "7ø7"),
    "6m7": ("1maj7", "4maj7"),
    # Borrowed from the parallel minor
    "b7": ("4", "1"),
    "b3": ("6m", "4"),
}

# Chords that get a secondary dominant (V/ii, V/iii, V/IV, V/V, V/vi)
SECONDARY_TARGETS = frozenset({"2m", "3m", "4", "5", "6m"})

# Chords approached from a diminished triad a semitone below
APPROACH_TARGETS = frozenset({"1", "2m", "5"})

# Targets that jazz reharmonization precedes with their secondary dominant
JAZZ_TARGETS = frozenset({"2m", "6m"})

# Chords swapped for their parallel-minor counterpart
BORROWED_CHORDS: dict[str, str] = {"4": "4m", "6m": "b6", "3m": "b3"}

SUBSTITUTION_DESCRIPTIONS: dict[str, str] = {
    "diatonic": "Diatonic substitute within the key",
    "extended": "Extended chord adding color",
    "secondary": "Secondary dominant creating forward motion",
    "chromatic": "Chromatic approach with smooth voice leading",
    "diminished": "Diminished chord adding tension",
}

TRIAD_QUALITIES = frozenset({Quality.MAJOR, Quality.MINOR, Quality.DIMINISHED, Quality.AUGMENTED})
DIMINISHED_QUALITIES = frozenset({Quality.DIMINISHED, Quality.DIMINISHED7, Quality.HALF_DIMINISHED7})

# Triad to seventh; major chords on degree 5 become dominant sevenths instead
SEVENTH_EXTENSIONS: dict[Quality, Quality] = {
    Quality.MAJOR: Quality.MAJOR7,
    Quality.MINOR: Quality.MINOR7,
    Quality.DIMINISHED: Quality.HALF_DIMINISHED7,
}

# Bass moves of at most a whole step count as stepwise
STEPWISE_LIMIT = 2

RHYTHMIC_MAX_LENGTH = 8

# Progression scoring
BASE_SCORE = 50
DOMINANT_BONUS = 15
VOICE_LEADING_BONUS = 10
LENGTH_BONUS = 10
VARIETY_BONUS = 15
GOOD_LENGTH = (4, 8)
VARIETY_TARGET = 4
STRONG_MOVES = frozenset({("5", "1"), ("57", "1"), ("2m", "5"), ("2m", "57"), ("2m7", "57"), ("6m", "4")})


def _as_chord(chord: Chord | str) -> Chord:
    return chord if isinstance(chord, Chord) else parse_chord(chord)


def _secondary_dominant(target: Chord) -> Chord:
    """The dominant seventh a fifth above ``target``."""
    return Chord(root=transpose_note(target.root, 7), quality=Quality.DOMINANT7)


def _approach_chord(target: Chord) -> Chord:
    """The diminished triad a semitone below ``target``."""
    return Chord(root=transpose_note(target.root, -1), quality=Quality.DIMINISHED)


def _substitution_kind(number: str) -> str:
    offset, _, quality = parse_degree(number)
    if offset:
        return "chromatic"
    if quality in DIMINISHED_QUALITIES:
        return "diminished"
    if quality not in TRIAD_QUALITIES:
        return "extended"
    return "diatonic"


def chord_substitutions(
    chord: Chord | str,
    key: Key | str = "C",
    next_chord: Chord | str | None = None,
) -> list[Substitution]:
    """Suggest chords that can replace ``chord`` in a key.

    Suggestions come from three sources, in this order: functional
    substitution rules, a diminished approach chord into ``next_chord`` (when
    it is a 1, 2m or 5), and the secondary dominant of ``chord``. Duplicates
    keep their first source and the chord itself is never suggested.

    Parameters
    ----------
    chord : Chord | str
        The chord to replace.
    key : Key | str
        Key of the progression; unparseable keys are read as C.
    next_chord : Chord | str | None
        The chord that follows, if known.

    Returns
    -------
    list[Substitution]
        Suggested substitutes.

    Raises
    ------
    ParseError
        If ``chord`` or ``next_chord`` is a string that does not parse.

    Examples
    --------
    >>> [s.chord for s in chord_substitutions("G", "C", next_chord="C")]
    ['Bdim', 'Em', 'D7']
    """
    chord = _as_chord(chord)
    number = chord_to_number(chord, key)

    candidates: dict[str, str] = {}
    for substitute in SUBSTITUTION_RULES.get(number, ()):
        candidates.setdefault(substitute, _substitution_kind(substitute))

    if next_chord is not None:
        target = _as_chord(next_chord)
        if chord_to_number(target, key) in APPROACH_TARGETS:
            candidates.setdefault(chord_to_number(_approach_chord(target), key), "chromatic")

    if number in SECONDARY_TARGETS:
        candidates.setdefault(chord_to_number(_secondary_dominant(chord), key), "secondary")

    substitutions: list[Substitution] = []
    for substitute, kind in candidates.items():
        realized = number_to_chord(substitute, key)
        if realized == chord:
            continue
        substitutions.append(
            Substitution(
                chord=realized.symbol,
                number=substitute,
                kind=kind,
                description=SUBSTITUTION_DESCRIPTIONS[kind],
            )
        )
    return substitutions


def _with_extensions(chords: Sequence[Chord], key: Key | str) -> list[Chord]:
    extended: list[Chord] = []
    for chord in chords:
        if chord.quality is Quality.MAJOR and chord_to_number(chord, key) == "5":
            extended.append(replace(chord, quality=Quality.DOMINANT7))
        elif chord.quality in SEVENTH_EXTENSIONS:
            extended.append(replace(chord, quality=SEVENTH_EXTENSIONS[chord.quality]))
        else:
            extended.append(chord)
    return extended


def _step(a: str, b: str) -> int:
    """Smallest distance in semitones between two notes, either direction."""
    up = semitones_between(a, b)
    return min(up, 12 - up)


def _third(chord: Chord) -> str | None:
    tones = chord_tones(Chord(root=chord.root, quality=chord.quality))
    if len(tones) > 1 and semitones_between(chord.root, tones[1]) in (3, 4):
        return tones[1]
    return None


def _with_inversions(chords: Sequence[Chord], key: Key | str) -> list[Chord]:
    """Put the third in the bass where it steps into the next root and the root does not."""
    inverted = list(chords)
    for index, (chord, following) in enumerate(zip(chords, chords[1:])):
        if chord.bass:
            continue
        third = _third(chord)
        if third is None:
            continue
        if 0 < _step(third, following.root) <= STEPWISE_LIMIT < _step(chord.root, following.root):
            inverted[index] = replace(chord, bass=third)
    return inverted


def _with_substitutions(chords: Sequence[Chord], key: Key | str) -> list[Chord]:
    substituted: list[Chord] = []
    for chord in chords:
        rules = SUBSTITUTION_RULES.get(chord_to_number(chord, key))
        substituted.append(number_to_chord(rules[0], key) if rules else chord)
    return substituted


def _with_modal_interchange(chords: Sequence[Chord], key: Key | str) -> list[Chord]:
    borrowed: list[Chord] = []
    for chord in chords:
        number = BORROWED_CHORDS.get(chord_to_number(chord, key))
        borrowed.append(number_to_chord(number, key) if number else chord)
    return borrowed


def _with_jazz_harmony(chords: Sequence[Chord], key: Key | str) -> list[Chord]:
    """Replace the chord before a 2m or 6m with that chord's secondary dominant."""
    reharmonized = list(chords)
    for index, following in enumerate(chords[1:]):
        if chord_to_number(following, key) in JAZZ_TARGETS:
            reharmonized[index] = _secondary_dominant(following)
    return reharmonized


def _with_repeats(chords: Sequence[Chord], key: Key | str) -> list[Chord]:
    repeated: list[Chord] = []
    for index, chord in enumerate(chords):
        repeated.append(chord)
        if index % 2 == 0 and len(repeated) < RHYTHMIC_MAX_LENGTH:
            repeated.append(chord)
    return repeated


def progression_variations(
    progression: Sequence[str],
    key: Key | str = "C",
    max_variations: int = 5,
    include_modal_interchange: bool = True,
    include_jazz_harmony: bool = False,
) -> list[ProgressionVariation]:
    """Rewrite a progression in several idiomatic ways.

    Variations are produced in a fixed order: seventh-chord extensions,
    bass inversions, functional substitutions, modal interchange (borrowed
    chords), jazz secondary dominants and rhythmic repetition. A rewrite
    that leaves the progression unchanged is skipped.

    Parameters
    ----------
    progression : Sequence[str]
        Chord symbols; they are parsed strictly.
    key : Key | str
        Key of the progression.
    max_variations : int
        Maximum number of variations returned.
    include_modal_interchange : bool
        Include the borrowed-chord variation.
    include_jazz_harmony : bool
        Include the secondary-dominant variation.

    Returns
    -------
    list[ProgressionVariation]
        Variations, at most ``max_variations``. An empty progression gives
        an empty list.

    Raises
    ------
    ParseError
        If a symbol does not parse.

    Examples
    --------
    >>> [v.kind for v in progression_variations(["C", "G", "Am", "F"], "C")]
    ['extensions', 'substitutions', 'modal', 'rhythmic']
    """
    try:
        chords = parse_progression(progression)
    except EmptyInputError:
        return []

    recipes: list[tuple[str, str, str, Callable[[Sequence[Chord], Key | str], list[Chord]]]] = [
        ("extensions", "Extended chords (sevenths)", "intermediate", _with_extensions),
        ("inversions", "Bass note inversions", "intermediate", _with_inversions),
        ("substitutions", "Chord substitutions", "advanced", _with_substitutions),
    ]
    if include_modal_interchange:
        recipes.append(("modal", "Modal interchange (borrowed chords)", "advanced", _with_modal_interchange))
    if include_jazz_harmony:
        recipes.append(("jazz", "Jazz harmony (secondary dominants)", "advanced", _with_jazz_harmony))
    recipes.append(("rhythmic", "Rhythmic variation (repeated chords)", "simple", _with_repeats))

    variations: list[ProgressionVariation] = []
    for kind, description, complexity, rewrite in recipes:
        rewritten = rewrite(chords, key)
        if tuple(rewritten) == chords:
            continue
        variations.append(
            ProgressionVariation(
                progression=tuple(chord.symbol for chord in rewritten),
                numbers=tuple(chord_to_number(chord, key) for chord in rewritten),
                kind=kind,
                description=description,
                complexity=complexity,
            )
        )
    logger.debug("Built %d variations of %s", len(variations), list(progression))
    return variations[:max_variations]


def has_good_voice_leading(numbers: Sequence[str]) -> bool:
    """Check that at least a third of the moves are strong (V-I, ii-V, vi-IV)."""
    strong = sum(1 for move in zip(numbers, numbers[1:]) if move in STRONG_MOVES)
    return strong >= len(numbers) / 3


def score_progression(numbers: Sequence[str]) -> int:
    """Heuristic quality score in [0, 100].

    Starts at 50 and adds 15 for a dominant (5 or 57), 10 for good voice
    leading, 10 for a length of 4 to 8 chords and 15 for variety (at least
    four distinct chords, or all distinct when shorter).

    Examples
    --------
    >>> score_progression(["1", "5", "6m", "4"])
    90
    """
    score = BASE_SCORE
    if "5" in numbers or "57" in numbers:
        score += DOMINANT_BONUS
    if has_good_voice_leading(numbers):
        score += VOICE_LEADING_BONUS
    if GOOD_LENGTH[0] <= len(numbers) <= GOOD_LENGTH[1]:
        score += LENGTH_BONUS
    if len(set(numbers)) >= min(VARIETY_TARGET, len(numbers)):
        score += VARIETY_BONUS
    return max(0, min(score, 100))


def _is_colorful(chord: Chord, number: str) -> bool:
    offset, _, quality = parse_degree(number)
    return bool(chord.bass) or offset != 0 or quality not in TRIAD_QUALITIES


def analyze_progression(progression: Sequence[str], key: Key | str = "C") -> ProgressionAnalysis:
    """Summarize a progression's harmony in a key and suggest improvements.

    Parameters
    ----------
    progression : Sequence[str]
        Chord symbols; they are parsed strictly.
    key : Key | str
        Key to analyze the progression in.

    Returns
    -------
    ProgressionAnalysis
        Numbers, complexity, named patterns, score and suggestions.

    Raises
    ------
    EmptyInputError
        If the progression is empty.
    ParseError
        If a symbol does not parse.

    Examples
    --------
    >>> analysis = analyze_progression(["C", "G", "Am", "F"], "C")
    >>> analysis.common_patterns, analysis.score
    (('I-V-vi-IV',), 90)
    """
    chords = parse_progression(progression)
    numbers = tuple(chord_to_number(chord, key) for chord in chords)

    colorful = sum(1 for chord, number in zip(chords, numbers) if _is_colorful(chord, number))
    if colorful == 0:
        complexity = "simple"
    elif colorful <= len(numbers) / 2:
        complexity = "intermediate"
    else:
        complexity = "advanced"

    suggestions: list[str] = []
    if complexity == "simple":
        suggestions.append("Try adding seventh chords for more color")
    if "5" not in numbers and "57" not in numbers:
        suggestions.append("Consider adding a V chord for a stronger resolution")
    if len(numbers) < GOOD_LENGTH[0]:
        suggestions.append("Extend the progression for more musical development")

    return ProgressionAnalysis(
        key=str(key),
        numbers=numbers,
        complexity=complexity,
        common_patterns=tuple(find_common_patterns(numbers)),
        score=score_progression(numbers),
        suggestions=tuple(suggestions),
    )
