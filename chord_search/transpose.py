"""Chord and progression transposition."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chord_search.errors import ParseError
from chord_search.models import Chord
from chord_search.parser import parse_chord
from chord_search.pitch_class import transpose_note

if TYPE_CHECKING:
    from collections.abc import Iterable


def transpose_chord(chord: Chord | str, semitones: int) -> Chord:
    """Transpose a chord by a number of semitones.

    Root and bass move independently, so slash chords keep their interval.
    Shifts wrap modulo 12 in both directions.

    Parameters
    ----------
    chord : Chord | str
        The chord to transpose; strings are parsed strictly.
    semitones : int
        Number of semitones to transpose (positive = up).

    Returns
    -------
    Chord
        Transposed chord.

    Raises
    ------
    ParseError
        If ``chord`` is a string that does not parse.

    Examples
    --------
    >>> str(transpose_chord("C/E", 2))
    'D/F#'
    >>> str(transpose_chord("Am7", -14))
    'Gm7'
    """
    if isinstance(chord, str):
        chord = parse_chord(chord)

    new_bass = transpose_note(chord.bass, semitones) if chord.bass else None
    return Chord(root=transpose_note(chord.root, semitones), quality=chord.quality, bass=new_bass)


def transpose_progression(progression: Iterable[Chord | str], semitones: int) -> tuple[Chord, ...]:
    """Transpose every chord of a progression.

    Symbols that do not parse are dropped rather than failing the whole
    progression.

    Examples
    --------
    >>> [str(c) for c in transpose_progression(["C", "oops", "G7"], 5)]
    ['F', 'C7']
    """
    result: list[Chord] = []
    for chord in progression:
        try:
            result.append(transpose_chord(chord, semitones))
        except ParseError:
            continue
    return tuple(result)
