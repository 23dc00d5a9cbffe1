"""Pitch class arithmetic for note names.

All notes leaving this module use the canonical sharp spelling, which keeps
equality checks and transposition arithmetic trivial.
"""

from __future__ import annotations

# Note name to pitch class (0-11, where C=0)
NOTE_TO_PC: dict[str, int] = {
    "C": 0,
    "C#": 1,
    "Db": 1,
    "D": 2,
    "D#": 3,
    "Eb": 3,
    "E": 4,
    "Fb": 4,
    "E#": 5,
    "F": 5,
    "F#": 6,
    "Gb": 6,
    "G": 7,
    "G#": 8,
    "Ab": 8,
    "A": 9,
    "A#": 10,
    "Bb": 10,
    "B": 11,
    "Cb": 11,
    "B#": 0,
}

# Pitch class to canonical note name (sharps preferred)
PC_TO_NOTE: tuple[str, ...] = ("C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B")

# Accidental glyphs after the note letter. An upper-case "B" there can only
# be a flat ("EB", "DBM"), since no quality token starts with B.
ACCIDENTALS: dict[str, str] = {
    "#": "#",
    "♯": "#",
    "b": "b",
    "B": "b",
    "♭": "b",
}


def _spelling(note: str) -> str:
    """Normalize letter case and accidental glyphs ("bb" -> "Bb", "F♯" -> "F#")."""
    note = note.strip()
    if not note:
        return note
    letter = note[0].upper()
    rest = "".join(ACCIDENTALS.get(c, c) for c in note[1:])
    return letter + rest


def note_to_pc(note: str) -> int:
    """Convert a note name to pitch class (0-11).

    Letter case is ignored and unicode accidentals are accepted.

    Parameters
    ----------
    note : str
        Note name (e.g., "C", "F#", "Bb", "eb").

    Returns
    -------
    int
        Pitch class (0-11, where C=0).

    Raises
    ------
    ValueError
        If the note name is not recognized.

    Examples
    --------
    >>> note_to_pc("C")
    0
    >>> note_to_pc("F#")
    6
    >>> note_to_pc("bb")
    10
    """
    spelled = _spelling(note)
    if spelled in NOTE_TO_PC:
        return NOTE_TO_PC[spelled]
    msg = f"Unknown note: {note}"
    raise ValueError(msg)


def pc_to_note(pc: int) -> str:
    """Return the canonical (sharp) note name for a pitch class.

    Any integer is accepted and wrapped modulo 12.

    Examples
    --------
    >>> pc_to_note(1)
    'C#'
    >>> pc_to_note(-2)
    'A#'
    """
    return PC_TO_NOTE[pc % 12]


def canonical_note(note: str) -> str:
    """Return the canonical sharp spelling of a note.

    Parameters
    ----------
    note : str
        Note name in any supported spelling.

    Returns
    -------
    str
        One of the 12 canonical note names.

    Raises
    ------
    ValueError
        If the note name is not recognized.

    Examples
    --------
    >>> canonical_note("Db")
    'C#'
    >>> canonical_note("Cb")
    'B'
    """
    return pc_to_note(note_to_pc(note))


def transpose_note(note: str, semitones: int) -> str:
    """Shift a note by a number of semitones (positive = up).

    Examples
    --------
    >>> transpose_note("C", 2)
    'D'
    >>> transpose_note("C", -1)
    'B'
    >>> transpose_note("E", 26)
    'F#'
    """
    return pc_to_note(note_to_pc(note) + semitones)


def semitones_between(from_note: str, to_note: str) -> int:
    """Return the upward interval (0-11) from one note to another.

    Examples
    --------
    >>> semitones_between("C", "G")
    7
    >>> semitones_between("G", "C")
    5
    """
    return (note_to_pc(to_note) - note_to_pc(from_note)) % 12


def enharmonic_spellings(note: str) -> list[str]:
    """Return every supported spelling of a note's pitch class.

    Examples
    --------
    >>> enharmonic_spellings("C#")
    ['C#', 'Db']
    >>> enharmonic_spellings("E")
    ['E', 'Fb']
    """
    pc = note_to_pc(note)
    return [name for name, value in NOTE_TO_PC.items() if value == pc]
