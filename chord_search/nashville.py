"""Nashville number system translation.

Converts chords to key-relative scale-degree symbols ("1", "2m", "57",
"b7", "#4°") and back. Translation always uses the major scale of the key
root as its reference frame.

This module keeps the legacy lenient convention of the number system: a
chord or key that does not parse is read as C major instead of failing.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from chord_search.errors import InvalidDegreeError
from chord_search.models import Chord, Key
from chord_search.parser import parse_or_default
from chord_search.pitch_class import semitones_between, transpose_note
from chord_search.quality import NASHVILLE_SUFFIXES, Quality, lookup_quality

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

logger = logging.getLogger(__name__)

# Semitone offsets of the major scale degrees 1-7
MAJOR_SCALE_INTERVALS: tuple[int, ...] = (0, 2, 4, 5, 7, 9, 11)

# Chromatic roots are spelled flat on these degrees (b3, b6, b7) ...
FLAT_PREFERRED_DEGREES = frozenset({3, 6, 7})
# ... and sharp on these (#1, #4, #5)
SHARP_PREFERRED_DEGREES = frozenset({1, 4, 5})

DEGREE_ACCIDENTALS: dict[str, int] = {"#": 1, "♯": 1, "b": -1, "♭": -1}

# Named progressions in Nashville notation
COMMON_PROGRESSIONS: dict[str, tuple[str, ...]] = {
    "I-V-vi-IV": ("1", "5", "6m", "4"),
    "vi-IV-I-V": ("6m", "4", "1", "5"),
    "I-vi-IV-V": ("1", "6m", "4", "5"),
    "ii-V-I": ("2m", "5", "1"),
    "I-IV-V": ("1", "4", "5"),
    "vi-V-IV-V": ("6m", "5", "4", "5"),
    "I-V-vi-iii-IV-I-IV-V": ("1", "5", "6m", "3m", "4", "1", "4", "5"),
    "I-bVII-IV": ("1", "b7", "4"),
    "i-bVII-bVI-bVII": ("1m", "b7", "b6", "b7"),
}


def _key_root(key: Key | str | None) -> str:
    """Return the root note of a key, reading unparseable keys as C."""
    if isinstance(key, Key):
        return key.root
    return parse_or_default(key).root


def _chromatic_degree(interval: int) -> str:
    """Spell a non-diatonic interval as a flat or sharp scale degree.

    Each chromatic interval is both a lowered degree and a raised one
    (e.g. 10 semitones is b7 or #6); the idiomatic spelling wins.
    """
    flat_degree: int | None = None
    sharp_degree: int | None = None
    for degree, scale_interval in enumerate(MAJOR_SCALE_INTERVALS, start=1):
        if flat_degree is None and interval == (scale_interval - 1) % 12:
            flat_degree = degree
        elif sharp_degree is None and interval == (scale_interval + 1) % 12:
            sharp_degree = degree

    if flat_degree in FLAT_PREFERRED_DEGREES:
        return f"b{flat_degree}"
    if sharp_degree in SHARP_PREFERRED_DEGREES:
        return f"#{sharp_degree}"
    if flat_degree is not None:
        return f"b{flat_degree}"
    return f"#{sharp_degree}"


def chord_to_number(chord: Chord | str | None, key: Key | str | None = "C") -> str:
    """Convert a chord to its Nashville number in a key.

    Diatonic chords with their expected quality come out bare, with only the
    minor or diminished marker ("1", "2m", "7°"). Any other quality appends
    its suffix verbatim ("57", "1maj7", "5sus2"). Chromatic roots get a
    flat or sharp prefix ("b7", "#4°"). Slash basses are not represented.

    Parameters
    ----------
    chord : Chord | str | None
        Chord to convert; unparseable symbols are read as C major.
    key : Key | str | None
        Key of the progression; unparseable keys are read as C.

    Returns
    -------
    str
        The Nashville number.

    Examples
    --------
    >>> chord_to_number("G7", "C")
    '57'
    >>> chord_to_number("Bb", "C")
    'b7'
    >>> chord_to_number("F#m", "A")
    '6m'
    """
    if not isinstance(chord, Chord):
        chord = parse_or_default(chord)
    interval = semitones_between(_key_root(key), chord.root)

    # Diatonic chords carrying their expected triad quality render as the
    # bare degree plus its own marker, which is exactly the quality suffix.
    suffix = NASHVILLE_SUFFIXES[chord.quality]
    if interval in MAJOR_SCALE_INTERVALS:
        degree = MAJOR_SCALE_INTERVALS.index(interval) + 1
        return f"{degree}{suffix}"
    return f"{_chromatic_degree(interval)}{suffix}"


def progression_to_numbers(progression: Iterable[Chord | str | None], key: Key | str | None = "C") -> list[str]:
    """Convert every chord of a progression to Nashville numbers.

    Examples
    --------
    >>> progression_to_numbers(["G", "D", "Em", "C"], "G")
    ['1', '5', '6m', '4']
    """
    return [chord_to_number(chord, key) for chord in progression]


def parse_degree(number: str) -> tuple[int, int, Quality]:
    """Split a Nashville number into accidental offset, degree and quality.

    Parameters
    ----------
    number : str
        Nashville number (e.g., "57", "b7", "#4°", "6m").

    Returns
    -------
    tuple[int, int, Quality]
        Accidental offset in semitones (-1, 0 or 1), scale degree (1-7)
        and chord quality.

    Raises
    ------
    InvalidDegreeError
        If the number is empty, the degree is outside 1-7, or the quality
        suffix is unknown.

    Examples
    --------
    >>> parse_degree("b7")
    (-1, 7, <Quality.MAJOR: 'maj'>)
    >>> parse_degree("57")
    (0, 5, <Quality.DOMINANT7: '7'>)
    """
    if not isinstance(number, str) or not number.strip():
        raise InvalidDegreeError(str(number), "empty Nashville number")

    text = number.strip()
    offset = DEGREE_ACCIDENTALS.get(text[0], 0)
    if offset:
        text = text[1:]

    # Degrees are always a single digit, so "57" is degree 5 with a 7 suffix
    if not text or not text[0].isdigit():
        raise InvalidDegreeError(number, "missing scale degree")
    degree = int(text[0])
    if not 1 <= degree <= len(MAJOR_SCALE_INTERVALS):
        raise InvalidDegreeError(number, f"degree {degree} is outside 1-7")

    try:
        quality = lookup_quality(text[1:])
    except ValueError:
        raise InvalidDegreeError(number, f"unknown quality suffix {text[1:]!r}") from None
    return offset, degree, quality


def number_to_chord(number: str | None, key: Key | str | None = "C") -> Chord:
    """Convert a Nashville number back to a chord in a key.

    Invalid numbers fall back to the key root as a major chord.

    Parameters
    ----------
    number : str | None
        Nashville number.
    key : Key | str | None
        Key to realize the number in; unparseable keys are read as C.

    Returns
    -------
    Chord
        The chord, spelled canonically.

    Examples
    --------
    >>> str(number_to_chord("57", "C"))
    'G7'
    >>> str(number_to_chord("b7", "C"))
    'A#'
    >>> str(number_to_chord("8", "G"))
    'G'
    """
    key_root = _key_root(key)
    try:
        offset, degree, quality = parse_degree(number)  # type: ignore[arg-type]
    except InvalidDegreeError as exc:
        logger.debug("Falling back to key root %s: %s", key_root, exc)
        return Chord(root=key_root)

    interval = MAJOR_SCALE_INTERVALS[degree - 1] + offset
    return Chord(root=transpose_note(key_root, interval), quality=quality)


def find_common_patterns(numbers: Sequence[str]) -> list[str]:
    """Name the common progressions that occur contiguously in a number sequence.

    Examples
    --------
    >>> find_common_patterns(["2m", "5", "1", "6m", "4"])
    ['ii-V-I']
    """
    found: list[str] = []
    for name, pattern in COMMON_PROGRESSIONS.items():
        width = len(pattern)
        if any(tuple(numbers[i : i + width]) == pattern for i in range(len(numbers) - width + 1)):
            found.append(name)
    return found
