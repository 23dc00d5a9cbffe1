"""Chord symbol parsing and normalization.

Two parsing behaviours are offered and kept deliberately separate:

- :func:`parse_chord` is strict and raises :class:`ParseError` on any
  malformed symbol. Search input and validation use it.
- :func:`parse_or_default` never fails and falls back to C major. Only the
  Nashville translator and display code use it.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from chord_search.errors import EmptyInputError, ParseError
from chord_search.models import Chord, Key
from chord_search.pitch_class import ACCIDENTALS, NOTE_TO_PC, canonical_note, enharmonic_spellings
from chord_search.quality import QUALITY_SYMBOLS, Quality, lookup_quality

if TYPE_CHECKING:
    from collections.abc import Iterable

ROOT_LETTERS = "ABCDEFG"

# Fallback chord for lenient parsing (middle-C major)
DEFAULT_CHORD = Chord(root="C", quality=Quality.MAJOR)

# Qualities offered by chord autocompletion, most common first
SUGGESTION_QUALITIES: tuple[str, ...] = ("", "m", "7", "maj7", "m7", "sus4", "sus2", "dim", "aug")

# Separators accepted between chords in free-text progression input
PROGRESSION_SEPARATOR_RE = re.compile(r"[\s,|]+")


def _split_bass(text: str) -> tuple[str, str | None]:
    """Split a trailing "/<note>" off a chord symbol.

    The slash only counts when it is neither the first nor the last character.
    """
    slash = text.rfind("/")
    if 0 < slash < len(text) - 1:
        return text[:slash], text[slash + 1 :]
    return text, None


def _split_root(symbol: str, text: str) -> tuple[str, str]:
    """Split the root token (letter plus optional accidental) off a chord."""
    if text[0].upper() not in ROOT_LETTERS:
        raise ParseError(symbol, f"invalid root letter {text[0]!r}")
    if len(text) > 1 and text[1] in ACCIDENTALS:
        return text[:2], text[2:]
    return text[:1], text[1:]


def parse_chord(symbol: str) -> Chord:
    """Parse a chord symbol into a :class:`Chord`.

    Parameters
    ----------
    symbol : str
        Chord symbol (e.g., "Am7", "F#maj7/A#", "db", "C/E").

    Returns
    -------
    Chord
        Normalized chord with canonical (sharp) root and bass.

    Raises
    ------
    ParseError
        If the symbol is empty, has an invalid root or bass note, or an
        unrecognized quality.

    Examples
    --------
    >>> parse_chord("Dbmaj7")
    Chord(root='C#', quality=<Quality.MAJOR7: 'maj7'>, bass=None)
    >>> str(parse_chord("am/c"))
    'Am/C'
    """
    if not isinstance(symbol, str):
        raise ParseError(repr(symbol), "expected a string")

    text = symbol.strip()
    if not text:
        raise ParseError(symbol, "empty chord symbol")

    main, bass_text = _split_bass(text)
    root_token, quality_token = _split_root(symbol, main)

    try:
        quality = lookup_quality(quality_token.strip())
    except ValueError:
        raise ParseError(symbol, f"unrecognized quality {quality_token!r}") from None

    bass = None
    if bass_text is not None:
        try:
            bass = canonical_note(bass_text)
        except ValueError:
            raise ParseError(symbol, f"invalid bass note {bass_text!r}") from None

    return Chord(root=canonical_note(root_token), quality=quality, bass=bass)


def parse_or_default(symbol: str | None) -> Chord:
    """Parse a chord symbol, falling back to C major on any failure.

    Examples
    --------
    >>> str(parse_or_default(""))
    'C'
    >>> str(parse_or_default("Em"))
    'Em'
    """
    if symbol is None:
        return DEFAULT_CHORD
    try:
        return parse_chord(symbol)
    except ParseError:
        return DEFAULT_CHORD


def parse_key(text: str) -> Key:
    """Parse a key name such as "G", "Bb" or "F#m".

    Raises
    ------
    ParseError
        If the key name is not a valid major or minor chord symbol.

    Examples
    --------
    >>> str(parse_key("Bbm"))
    'A#m'
    """
    chord = parse_chord(text)
    if chord.quality not in (Quality.MAJOR, Quality.MINOR) or chord.bass is not None:
        raise ParseError(text, "a key must be a plain major or minor root")
    return Key(root=chord.root, minor=chord.quality is Quality.MINOR)


def normalize_chord(symbol: str) -> str | None:
    """Return the canonical symbol for a chord, or None if it does not parse.

    Examples
    --------
    >>> normalize_chord("Dbmin7")
    'C#m7'
    >>> normalize_chord("H7") is None
    True
    """
    try:
        return parse_chord(symbol).symbol
    except ParseError:
        return None


def normalize_progression(symbols: Iterable[str]) -> tuple[Chord, ...]:
    """Parse every symbol, silently dropping the ones that fail."""
    chords: list[Chord] = []
    for symbol in symbols:
        try:
            chords.append(parse_chord(symbol))
        except ParseError:
            continue
    return tuple(chords)


def parse_progression(symbols: Iterable[str]) -> tuple[Chord, ...]:
    """Parse a progression strictly.

    Raises
    ------
    EmptyInputError
        If the progression has no chords.
    ParseError
        On the first symbol that does not parse.
    """
    chords = tuple(parse_chord(symbol) for symbol in symbols)
    if not chords:
        msg = "Progression is empty"
        raise EmptyInputError(msg)
    return chords


def parse_progression_input(text: str) -> list[str]:
    """Split free-text user input into canonical chord symbols.

    Chords may be separated by whitespace, commas, bars or dashes. Tokens that
    do not parse as a whole are split on dashes ("C-G-Am"); pieces that still
    do not parse are dropped.

    Examples
    --------
    >>> parse_progression_input("C, Am | F - G")
    ['C', 'Am', 'F', 'G']
    >>> parse_progression_input("Dm7-G7-Cmaj7 Bm7b5")
    ['Dm7', 'G7', 'Cmaj7', 'Bm7b5']
    """
    if not text:
        return []

    result: list[str] = []
    for token in PROGRESSION_SEPARATOR_RE.split(text):
        if not token or token == "-":
            continue
        normalized = normalize_chord(token)
        if normalized is not None:
            result.append(normalized)
            continue
        for piece in token.split("-"):
            normalized = normalize_chord(piece) if piece else None
            if normalized is not None:
                result.append(normalized)
    return result


def enharmonic_equivalents(symbol: str) -> list[str]:
    """Return the other spellings of a chord's root.

    The bass note keeps its canonical spelling; the input spelling itself is
    excluded.

    Raises
    ------
    ParseError
        If the symbol does not parse.

    Examples
    --------
    >>> enharmonic_equivalents("C#m")
    ['Dbm']
    >>> enharmonic_equivalents("Db7")
    ['C#7']
    """
    chord = parse_chord(symbol)
    suffix = QUALITY_SYMBOLS[chord.quality]
    if chord.bass:
        suffix = f"{suffix}/{chord.bass}"

    written = symbol.strip()
    return [f"{root}{suffix}" for root in enharmonic_spellings(chord.root) if f"{root}{suffix}" != written]


def suggest_chords(partial: str, max_suggestions: int = 10) -> list[str]:
    """Suggest common chords that complete a partially typed symbol.

    Examples
    --------
    >>> suggest_chords("Cm")
    ['Cm', 'Cmaj7', 'Cm7']
    >>> suggest_chords("x")
    []
    """
    prefix = partial.strip() if partial else ""
    if not prefix or prefix[0].upper() not in ROOT_LETTERS:
        return []

    letter = prefix[0].upper()
    roots = [name for name in (letter, f"{letter}#", f"{letter}b") if name in NOTE_TO_PC]

    suggestions: list[str] = []
    for root in roots:
        for quality in SUGGESTION_QUALITIES:
            candidate = f"{root}{quality}"
            if candidate.lower().startswith(prefix.lower()) and candidate not in suggestions:
                suggestions.append(candidate)
    return suggestions[:max_suggestions]
