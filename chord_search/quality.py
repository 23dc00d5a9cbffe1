"""Closed set of chord qualities and their notation tables.

Every :class:`Quality` member has exactly one entry in each of the
translation tables below (display symbol, Nashville suffix, pychord quality).
The alias table maps the many ways a quality is written in lead sheets onto
the closed set.
"""

from __future__ import annotations

from enum import Enum


class Quality(str, Enum):
    """Chord quality, valued by its Harte shorthand."""

    MAJOR = "maj"
    MINOR = "min"
    DIMINISHED = "dim"
    AUGMENTED = "aug"
    DOMINANT7 = "7"
    MAJOR7 = "maj7"
    MINOR7 = "min7"
    DIMINISHED7 = "dim7"
    HALF_DIMINISHED7 = "hdim7"
    MINOR_MAJOR7 = "minmaj7"
    AUGMENTED7 = "aug7"
    MAJOR6 = "maj6"
    MINOR6 = "min6"
    DOMINANT9 = "9"
    MAJOR9 = "maj9"
    MINOR9 = "min9"
    DOMINANT11 = "11"
    MINOR11 = "min11"
    DOMINANT13 = "13"
    SUS2 = "sus2"
    SUS4 = "sus4"
    DOMINANT7_SUS4 = "7sus4"
    ADD9 = "maj(9)"
    MINOR_ADD9 = "min(9)"
    ADD11 = "maj(11)"
    POWER = "5"

    def __str__(self) -> str:
        return self.value


# Canonical lead-sheet suffix used when rendering a chord symbol
QUALITY_SYMBOLS: dict[Quality, str] = {
    Quality.MAJOR: "",
    Quality.MINOR: "m",
    Quality.DIMINISHED: "dim",
    Quality.AUGMENTED: "aug",
    Quality.DOMINANT7: "7",
    Quality.MAJOR7: "maj7",
    Quality.MINOR7: "m7",
    Quality.DIMINISHED7: "dim7",
    Quality.HALF_DIMINISHED7: "m7b5",
    Quality.MINOR_MAJOR7: "mMaj7",
    Quality.AUGMENTED7: "aug7",
    Quality.MAJOR6: "6",
    Quality.MINOR6: "m6",
    Quality.DOMINANT9: "9",
    Quality.MAJOR9: "maj9",
    Quality.MINOR9: "m9",
    Quality.DOMINANT11: "11",
    Quality.MINOR11: "m11",
    Quality.DOMINANT13: "13",
    Quality.SUS2: "sus2",
    Quality.SUS4: "sus4",
    Quality.DOMINANT7_SUS4: "7sus4",
    Quality.ADD9: "add9",
    Quality.MINOR_ADD9: "madd9",
    Quality.ADD11: "add11",
    Quality.POWER: "5",
}

# Suffix appended to a scale degree in Nashville notation (e.g. "6m", "7°", "57")
NASHVILLE_SUFFIXES: dict[Quality, str] = {
    Quality.MAJOR: "",
    Quality.MINOR: "m",
    Quality.DIMINISHED: "°",
    Quality.AUGMENTED: "+",
    Quality.DOMINANT7: "7",
    Quality.MAJOR7: "maj7",
    Quality.MINOR7: "m7",
    Quality.DIMINISHED7: "°7",
    Quality.HALF_DIMINISHED7: "ø7",
    Quality.MINOR_MAJOR7: "mMaj7",
    Quality.AUGMENTED7: "+7",
    Quality.MAJOR6: "6",
    Quality.MINOR6: "m6",
    Quality.DOMINANT9: "9",
    Quality.MAJOR9: "maj9",
    Quality.MINOR9: "m9",
    Quality.DOMINANT11: "11",
    Quality.MINOR11: "m11",
    Quality.DOMINANT13: "13",
    Quality.SUS2: "sus2",
    Quality.SUS4: "sus4",
    Quality.DOMINANT7_SUS4: "7sus4",
    Quality.ADD9: "add9",
    Quality.MINOR_ADD9: "madd9",
    Quality.ADD11: "add11",
    Quality.POWER: "5",
}

# pychord quality names, used to decompose chords into component notes
PYCHORD_QUALITIES: dict[Quality, str] = {
    Quality.MAJOR: "",
    Quality.MINOR: "m",
    Quality.DIMINISHED: "dim",
    Quality.AUGMENTED: "aug",
    Quality.DOMINANT7: "7",
    Quality.MAJOR7: "maj7",
    Quality.MINOR7: "m7",
    Quality.DIMINISHED7: "dim7",
    Quality.HALF_DIMINISHED7: "m7-5",
    Quality.MINOR_MAJOR7: "mmaj7",
    Quality.AUGMENTED7: "7+5",
    Quality.MAJOR6: "6",
    Quality.MINOR6: "m6",
    Quality.DOMINANT9: "9",
    Quality.MAJOR9: "maj9",
    Quality.MINOR9: "m9",
    Quality.DOMINANT11: "11",
    Quality.MINOR11: "m11",
    Quality.DOMINANT13: "13",
    Quality.SUS2: "sus2",
    Quality.SUS4: "sus4",
    Quality.DOMINANT7_SUS4: "7sus4",
    Quality.ADD9: "add9",
    Quality.MINOR_ADD9: "madd9",
    Quality.ADD11: "add11",
    Quality.POWER: "5",
}

# Written forms accepted by the parser
QUALITY_ALIASES: dict[str, Quality] = {
    # Major
    "": Quality.MAJOR,
    "maj": Quality.MAJOR,
    "major": Quality.MAJOR,
    "M": Quality.MAJOR,
    # Minor
    "m": Quality.MINOR,
    "min": Quality.MINOR,
    "minor": Quality.MINOR,
    "-": Quality.MINOR,
    # Diminished / augmented
    "dim": Quality.DIMINISHED,
    "diminished": Quality.DIMINISHED,
    "°": Quality.DIMINISHED,
    "o": Quality.DIMINISHED,
    "aug": Quality.AUGMENTED,
    "augmented": Quality.AUGMENTED,
    "+": Quality.AUGMENTED,
    # Sevenths
    "7": Quality.DOMINANT7,
    "dom7": Quality.DOMINANT7,
    "dominant7": Quality.DOMINANT7,
    "maj7": Quality.MAJOR7,
    "major7": Quality.MAJOR7,
    "M7": Quality.MAJOR7,
    "Δ": Quality.MAJOR7,
    "Δ7": Quality.MAJOR7,
    "m7": Quality.MINOR7,
    "min7": Quality.MINOR7,
    "minor7": Quality.MINOR7,
    "-7": Quality.MINOR7,
    "dim7": Quality.DIMINISHED7,
    "°7": Quality.DIMINISHED7,
    "o7": Quality.DIMINISHED7,
    "m7b5": Quality.HALF_DIMINISHED7,
    "m7-5": Quality.HALF_DIMINISHED7,
    "ø": Quality.HALF_DIMINISHED7,
    "ø7": Quality.HALF_DIMINISHED7,
    "hdim7": Quality.HALF_DIMINISHED7,
    "mMaj7": Quality.MINOR_MAJOR7,
    "mM7": Quality.MINOR_MAJOR7,
    "mmaj7": Quality.MINOR_MAJOR7,
    "minmaj7": Quality.MINOR_MAJOR7,
    "aug7": Quality.AUGMENTED7,
    "+7": Quality.AUGMENTED7,
    "7#5": Quality.AUGMENTED7,
    "7+5": Quality.AUGMENTED7,
    # Sixths
    "6": Quality.MAJOR6,
    "maj6": Quality.MAJOR6,
    "m6": Quality.MINOR6,
    "min6": Quality.MINOR6,
    # Extended
    "9": Quality.DOMINANT9,
    "maj9": Quality.MAJOR9,
    "M9": Quality.MAJOR9,
    "m9": Quality.MINOR9,
    "min9": Quality.MINOR9,
    "11": Quality.DOMINANT11,
    "m11": Quality.MINOR11,
    "min11": Quality.MINOR11,
    "13": Quality.DOMINANT13,
    # Suspended
    "sus2": Quality.SUS2,
    "sus4": Quality.SUS4,
    "sus": Quality.SUS4,
    "7sus4": Quality.DOMINANT7_SUS4,
    "7sus": Quality.DOMINANT7_SUS4,
    # Added tones
    "add9": Quality.ADD9,
    "add2": Quality.ADD9,
    "madd9": Quality.MINOR_ADD9,
    "add11": Quality.ADD11,
    "add4": Quality.ADD11,
    # Power chord
    "5": Quality.POWER,
    "power": Quality.POWER,
}

# Diatonic triad quality on each major-scale degree (I ii iii IV V vi vii°)
DIATONIC_QUALITIES: dict[int, Quality] = {
    1: Quality.MAJOR,
    2: Quality.MINOR,
    3: Quality.MINOR,
    4: Quality.MAJOR,
    5: Quality.MAJOR,
    6: Quality.MINOR,
    7: Quality.DIMINISHED,
}


def lookup_quality(token: str) -> Quality:
    """Resolve a written quality token to a :class:`Quality`.

    The exact spelling is tried first so that case-significant forms
    ("M7" vs "m7") keep their meaning; otherwise the lower-cased token is
    looked up.

    Parameters
    ----------
    token : str
        The quality part of a chord symbol (e.g., "m7", "maj7", "°").

    Returns
    -------
    Quality
        The matching quality.

    Raises
    ------
    ValueError
        If the token is not a known quality.

    Examples
    --------
    >>> lookup_quality("M7")
    <Quality.MAJOR7: 'maj7'>
    >>> lookup_quality("MIN")
    <Quality.MINOR: 'min'>
    """
    if token in QUALITY_ALIASES:
        return QUALITY_ALIASES[token]
    lowered = token.lower()
    if lowered in QUALITY_ALIASES:
        return QUALITY_ALIASES[lowered]
    msg = f"Unknown chord quality: {token}"
    raise ValueError(msg)
