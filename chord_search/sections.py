"""Plain-text song section parsing.

Sections are written one per line as ``name: chords``::

    verse: C Am F G
    chorus: F C G Am
      F C G        # lines without a colon continue the previous section

Blank lines and lines starting with ``#`` are skipped.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from chord_search.models import Section

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

# Loose chord shape: root letter, optional accidental, anything, optional slash bass
CHORD_SHAPE_RE = re.compile(r"^[A-G][#b]?[^/]*?(/[A-G][#b]?)?$")
PARENTHETICAL_RE = re.compile(r"\([^)]*\)")

# Complexity scoring
TRIAD_RE = re.compile(r"^[A-G][#b]?m?$")
SEVENTH_RE = re.compile(r"^[A-G][#b]?.*7")
EXTENDED_RE = re.compile(r"9|11|13")
ALTERED_RE = re.compile(r"dim|aug")

SIMPLE_THRESHOLD = 0.3
INTERMEDIATE_THRESHOLD = 1.0

MAX_SECTION_CHORDS = 16

EXAMPLE_SECTIONS_TEXT = """verse: C Am F G
chorus: F C G Am F C G Am
bridge: Am F C G
verse2: C Am F G
outro: F G C"""


def preprocess(text: str) -> list[str]:
    """Split text into lines, normalizing line endings.

    Parameters
    ----------
    text : str
        The raw input text.

    Returns
    -------
    list[str]
        List of lines without trailing newlines.
    """
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    return text.split("\n")


def extract_chords(text: str) -> list[str]:
    """Pick the chord-shaped tokens out of a whitespace-separated line.

    Unterminated parentheticals are dropped; complete ones are ignored when
    checking the shape, so "C(add9)" is kept.

    Examples
    --------
    >>> extract_chords("C Am (x2) F/A hello G")
    ['C', 'Am', 'F/A', 'G']
    """
    chords: list[str] = []
    for token in text.split():
        if token.startswith("(") and not token.endswith(")"):
            continue
        cleaned = PARENTHETICAL_RE.sub("", token, count=1).strip()
        if CHORD_SHAPE_RE.match(cleaned):
            chords.append(token)
    return chords


def _chord_complexity(symbol: str) -> int:
    chord = PARENTHETICAL_RE.sub("", symbol, count=1).strip()
    if TRIAD_RE.match(chord):
        return 0
    if SEVENTH_RE.match(chord) or "sus" in chord or "/" in chord:
        return 1
    if EXTENDED_RE.search(chord) or ALTERED_RE.search(chord):
        return 2
    return 1


def determine_complexity(progression: Sequence[str]) -> str:
    """Label a progression "simple", "intermediate" or "complex".

    Plain major and minor triads score 0, sevenths, suspensions and slash
    chords 1, extended (9/11/13), diminished and augmented chords 2, and
    anything else 1. The average decides the label.

    Examples
    --------
    >>> determine_complexity(["C", "Am", "F", "G"])
    'simple'
    >>> determine_complexity(["Cmaj7", "Am7", "Dm7", "G7"])
    'intermediate'
    >>> determine_complexity(["Cmaj9", "F#dim", "Bb13", "Eaug"])
    'complex'
    """
    if not progression:
        return "simple"

    average = sum(_chord_complexity(symbol) for symbol in progression) / len(progression)
    if average <= SIMPLE_THRESHOLD:
        return "simple"
    if average <= INTERMEDIATE_THRESHOLD:
        return "intermediate"
    return "complex"


def parse_sections_text(text: str | None) -> tuple[Section, ...]:
    """Parse ``name: chords`` lines into sections.

    Section names are lower-cased. A later line with an existing name
    replaces that section's chords in place. Header lines without any
    chord-shaped token are ignored.

    Parameters
    ----------
    text : str | None
        Free-form sections text.

    Returns
    -------
    tuple[Section, ...]
        Sections in order of first appearance, each with its complexity.

    Examples
    --------
    >>> [(s.name, s.progression) for s in parse_sections_text("Verse: C G\\n  Am F\\nchorus: F C")]
    [('verse', ('C', 'G', 'Am', 'F')), ('chorus', ('F', 'C'))]
    """
    if not text:
        return ()

    progressions: dict[str, list[str]] = {}
    current: str | None = None

    for line in preprocess(text):
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue

        if ":" in stripped:
            name, _, chords_text = stripped.partition(":")
            name = name.strip().lower()
            chords = extract_chords(chords_text)
            if name and chords:
                progressions[name] = chords
                current = name
        elif current is not None:
            progressions[current].extend(extract_chords(stripped))

    return tuple(
        Section(name=name, progression=tuple(chords), complexity=determine_complexity(chords))
        for name, chords in progressions.items()
    )


def validate_sections(sections: Iterable[Section]) -> list[str]:
    """Check parsed sections for common problems.

    Returns
    -------
    list[str]
        Error messages; empty when the sections are valid.
    """
    sections = list(sections)
    if not sections:
        return ["At least one section is required"]

    errors: list[str] = []
    for section in sections:
        count = len(section.progression)
        if count == 0:
            errors.append(f'Section "{section.name}" has no chords')
        elif count > MAX_SECTION_CHORDS:
            errors.append(
                f'Section "{section.name}" has too many chords ({count}). '
                "Consider breaking it into multiple sections."
            )
    return errors


def sections_to_text(sections: Iterable[Section]) -> str:
    """Render sections back to ``name: chords`` lines, skipping empty ones."""
    return "\n".join(
        f"{section.name}: {' '.join(section.progression)}" for section in sections if section.progression
    )
