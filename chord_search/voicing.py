"""Chord tones and preview voicings.

Chord spelling is delegated to pychord; results are reduced to canonical
note names, MIDI note numbers and equal-tempered frequencies for playback
previews.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from chord_search.models import Chord
from chord_search.parser import parse_chord
from chord_search.pitch_class import note_to_pc, pc_to_note

if TYPE_CHECKING:
    from numpy.typing import NDArray

# Concert pitch reference (A4 = MIDI 69)
A4_FREQUENCY = 440.0
A4_MIDI = 69

DEFAULT_OCTAVE = 4


def _component_values(chord: Chord) -> list[int]:
    """Return pychord's pitch values (root pitch class + interval) for a chord without its bass."""
    from pychord import Chord as PyChord

    plain = Chord(root=chord.root, quality=chord.quality)
    return list(PyChord(plain.to_pychord()).components(visible=False))


def chord_tones(chord: Chord | str) -> tuple[str, ...]:
    """List the notes of a chord in canonical spelling.

    Tones run from the root upwards. A slash bass that is not already a
    chord tone is put first.

    Parameters
    ----------
    chord : Chord | str
        The chord; strings are parsed strictly.

    Returns
    -------
    tuple[str, ...]
        Canonical note names without duplicates.

    Raises
    ------
    ParseError
        If ``chord`` is a string that does not parse.

    Examples
    --------
    >>> chord_tones("Am7")
    ('A', 'C', 'E', 'G')
    >>> chord_tones("Am/G")
    ('G', 'A', 'C', 'E')
    """
    if isinstance(chord, str):
        chord = parse_chord(chord)

    tones: list[str] = []
    for value in _component_values(chord):
        note = pc_to_note(value)
        if note not in tones:
            tones.append(note)

    if chord.bass and chord.bass not in tones:
        tones.insert(0, chord.bass)
    return tuple(tones)


def chord_midi_notes(chord: Chord | str, octave: int = DEFAULT_OCTAVE) -> tuple[int, ...]:
    """Voice a chord as ascending MIDI note numbers.

    The root sits in ``octave`` (C4 = 60) and the other tones stack above it.
    A slash bass is placed in the octave below.

    Examples
    --------
    >>> chord_midi_notes("C")
    (60, 64, 67)
    >>> chord_midi_notes("C/E")
    (52, 60, 64, 67)
    """
    if isinstance(chord, str):
        chord = parse_chord(chord)

    base = 12 * (octave + 1)
    notes = [base + value for value in _component_values(chord)]
    if chord.bass:
        notes.insert(0, 12 * octave + note_to_pc(chord.bass))
    return tuple(notes)


def chord_frequencies(chord: Chord | str, octave: int = DEFAULT_OCTAVE) -> NDArray[np.float64]:
    """Equal-tempered frequencies (Hz) of a chord's preview voicing.

    Examples
    --------
    >>> chord_frequencies("A").round(2).tolist()
    [440.0, 554.37, 659.26]
    """
    midi = np.asarray(chord_midi_notes(chord, octave), dtype=np.float64)
    return A4_FREQUENCY * 2.0 ** ((midi - A4_MIDI) / 12.0)
