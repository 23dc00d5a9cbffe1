"""Value types shared across chord-search.

All models are immutable; sequences are stored as tuples so results can be
hashed, compared and shared between concurrent searches safely.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Literal

from chord_search.pitch_class import PC_TO_NOTE
from chord_search.quality import PYCHORD_QUALITIES, QUALITY_SYMBOLS, Quality


@dataclass(frozen=True)
class Chord:
    """Normalized chord representation.

    Parameters
    ----------
    root : str
        Canonical root note (one of the 12 sharp spellings).
    quality : Quality
        The chord quality.
    bass : str | None
        Canonical bass note for slash chords.

    Examples
    --------
    >>> chord = Chord(root="G", quality=Quality.DOMINANT7)
    >>> str(chord)
    'G7'
    >>> str(Chord(root="D", bass="F#"))
    'D/F#'
    """

    root: str
    quality: Quality = Quality.MAJOR
    bass: str | None = None

    def __post_init__(self) -> None:
        if self.root not in PC_TO_NOTE:
            msg = f"Chord root must be a canonical note, got {self.root!r}"
            raise ValueError(msg)
        if self.bass is not None and self.bass not in PC_TO_NOTE:
            msg = f"Chord bass must be a canonical note, got {self.bass!r}"
            raise ValueError(msg)

    @property
    def symbol(self) -> str:
        """Canonical lead-sheet symbol (e.g., "Am7", "C/E")."""
        result = f"{self.root}{QUALITY_SYMBOLS[self.quality]}"
        if self.bass:
            result = f"{result}/{self.bass}"
        return result

    def to_pychord(self) -> str:
        """Convert to pychord notation string.

        Returns
        -------
        str
            Chord in pychord notation (e.g., "Gm7", "Am7-5", "C/E").
        """
        result = f"{self.root}{PYCHORD_QUALITIES[self.quality]}"
        if self.bass:
            result = f"{result}/{self.bass}"
        return result

    def __str__(self) -> str:
        """Return the canonical symbol as default string representation."""
        return self.symbol


@dataclass(frozen=True)
class Key:
    """Tonal reference frame.

    Only the root is used for key-relative translation (major frame); the
    mode is informational.

    Parameters
    ----------
    root : str
        Canonical tonic note.
    minor : bool
        Whether the key is minor.
    """

    root: str
    minor: bool = False

    def __str__(self) -> str:
        return f"{self.root}m" if self.minor else self.root


MatchKind = Literal["exact", "partial"]


@dataclass(frozen=True)
class Match:
    """A window of a candidate progression matched by (part of) a search.

    Parameters
    ----------
    kind : MatchKind
        "exact" for full sliding-window matches, "partial" for sub-slice hits.
    start : int
        First matched index in the candidate progression.
    end : int
        Last matched index in the candidate progression (inclusive).
    matched : tuple[str, ...]
        Candidate symbols covered by the match, as written.
    search : tuple[str, ...]
        The search symbols that produced the match.
    search_start : int
        First index of ``search`` within the full search progression.
    search_end : int
        Last index of ``search`` within the full search progression (inclusive).
    coverage : float
        Fraction of the full search progression reproduced by the match.
    """

    kind: MatchKind
    start: int
    end: int
    matched: tuple[str, ...]
    search: tuple[str, ...]
    search_start: int
    search_end: int
    coverage: float

    @property
    def length(self) -> int:
        """Number of chords in the matched window."""
        return self.end - self.start + 1


@dataclass(frozen=True)
class Section:
    """A named song section with its chord progression.

    Parameters
    ----------
    name : str
        Section name (e.g., "verse", "chorus").
    progression : tuple[str, ...]
        Chord symbols as written in the corpus.
    complexity : str | None
        Optional complexity label ("simple", "intermediate", "complex").
    """

    name: str
    progression: tuple[str, ...]
    complexity: str | None = None


@dataclass(frozen=True)
class Song:
    """A corpus entry.

    Parameters
    ----------
    song_id : str
        Unique identifier.
    sections : tuple[Section, ...]
        Song sections in order.
    title, artist, genre, decade, popularity : str
        Descriptive metadata used for filtering and ranking bonuses.
    key : str
        Original key as written (e.g., "G", "F#m").
    """

    song_id: str
    sections: tuple[Section, ...] = ()
    title: str = ""
    artist: str = ""
    genre: str = ""
    decade: str = ""
    popularity: str = ""
    key: str = ""

    def section(self, name: str) -> Section | None:
        """Return the first section with the given name, if any."""
        for section in self.sections:
            if section.name == name:
                return section
        return None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Song:
        """Build a Song from a plain mapping.

        Sections may be given either as a mapping of name to section data
        (``{"verse": {"progression": [...]}}``) or as a list of section
        mappings carrying a ``name`` key.

        Examples
        --------
        >>> song = Song.from_dict({"id": "s1", "sections": [{"name": "verse", "progression": ["C", "G"]}]})
        >>> song.sections[0].progression
        ('C', 'G')
        """
        raw_sections = data.get("sections") or {}
        if isinstance(raw_sections, Mapping):
            items = [(name, section) for name, section in raw_sections.items()]
        else:
            items = [(section["name"], section) for section in raw_sections]

        sections = tuple(
            Section(
                name=name,
                progression=tuple(section.get("progression", ())),
                complexity=section.get("complexity"),
            )
            for name, section in items
        )

        song_id = data.get("song_id") or data.get("songId") or data.get("id") or ""
        return cls(
            song_id=str(song_id),
            sections=sections,
            title=data.get("title", ""),
            artist=data.get("artist", ""),
            genre=data.get("genre", ""),
            decade=data.get("decade", ""),
            popularity=data.get("popularity", ""),
            key=data.get("key", ""),
        )


@dataclass(frozen=True)
class ScoredMatch:
    """A progression match located in a corpus song section.

    Parameters
    ----------
    song : Song
        The song containing the match.
    section : Section
        The matched section.
    match : Match
        Match details.
    confidence : float
        Confidence score in [0, 1].
    """

    song: Song
    section: Section
    match: Match
    confidence: float


@dataclass(frozen=True)
class SectionPair:
    """The best-scoring pair of sections between two songs."""

    target_section: str
    match_section: str
    similarity: float


@dataclass(frozen=True)
class RelatedSong:
    """A song related to a target song by harmonic similarity.

    Parameters
    ----------
    song : Song
        The related song.
    similarity : float
        Similarity in [0, 1], including artist/genre bonuses.
    best_match : SectionPair | None
        The section pair that produced the raw similarity.
    """

    song: Song
    similarity: float
    best_match: SectionPair | None = None


@dataclass(frozen=True)
class KeyCandidate:
    """A candidate key with its fit score."""

    key: Key
    confidence: float


@dataclass(frozen=True)
class ChordHit:
    """Chords from a search found in one song, with per-section detail.

    Parameters
    ----------
    song : Song
        The song containing the chords.
    matched_chords : tuple[str, ...]
        Distinct search chords found anywhere in the song, in search order.
    sections : tuple[tuple[str, tuple[str, ...]], ...]
        (section name, chords found in that section) pairs.
    chord_coverage : float
        Fraction of the search chords present in the song.
    """

    song: Song
    matched_chords: tuple[str, ...]
    sections: tuple[tuple[str, tuple[str, ...]], ...] = field(default=())
    chord_coverage: float = 0.0


@dataclass(frozen=True)
class ProgressionSuggestion:
    """A continuation of a partial progression observed in the corpus.

    Parameters
    ----------
    progression : tuple[str, ...]
        The partial progression followed by the suggested next chord.
    count : int
        Number of times the continuation occurs in the corpus.
    examples : tuple[tuple[str, str, str], ...]
        (title, artist, section name) of each occurrence.
    """

    progression: tuple[str, ...]
    count: int
    examples: tuple[tuple[str, str, str], ...] = ()

    @property
    def next_chord(self) -> str:
        """The suggested chord."""
        return self.progression[-1]


@dataclass(frozen=True)
class Substitution:
    """A chord that can stand in for another chord in a key.

    Parameters
    ----------
    chord : str
        Canonical symbol of the substitute.
    number : str
        Nashville number of the substitute.
    kind : str
        "diatonic", "extended", "secondary", "chromatic" or "diminished".
    description : str
        Short human-readable explanation.
    """

    chord: str
    number: str
    kind: str
    description: str


@dataclass(frozen=True)
class ProgressionVariation:
    """A rewritten version of a progression."""

    progression: tuple[str, ...]
    numbers: tuple[str, ...]
    kind: str
    description: str
    complexity: str


@dataclass(frozen=True)
class ProgressionAnalysis:
    """Harmonic summary of a progression in a key.

    Parameters
    ----------
    key : str
        The key the progression was read in.
    numbers : tuple[str, ...]
        The progression in Nashville numbers.
    complexity : str
        "simple", "intermediate" or "advanced".
    common_patterns : tuple[str, ...]
        Names of common progressions found in it.
    score : int
        Heuristic quality score in [0, 100].
    suggestions : tuple[str, ...]
        Ideas for developing the progression.
    """

    key: str
    numbers: tuple[str, ...]
    complexity: str
    common_patterns: tuple[str, ...]
    score: int
    suggestions: tuple[str, ...] = ()

    @property
    def length(self) -> int:
        """Number of chords analyzed."""
        return len(self.numbers)


@dataclass(frozen=True)
class DatabaseReport:
    """Outcome of validating a whole song database.

    Parameters
    ----------
    total_songs : int
        Number of entries checked.
    valid_songs : int
        Entries without errors.
    errors : tuple[str, ...]
        Database-wide problems, such as duplicate song ids.
    song_errors : tuple[tuple[str, tuple[str, ...]], ...]
        (song label, errors) for every invalid entry.
    """

    total_songs: int
    valid_songs: int
    errors: tuple[str, ...] = ()
    song_errors: tuple[tuple[str, tuple[str, ...]], ...] = ()

    @property
    def is_valid(self) -> bool:
        return not self.errors and not self.song_errors

    @property
    def invalid_songs(self) -> int:
        return self.total_songs - self.valid_songs

    @property
    def validation_rate(self) -> float:
        """Percentage of valid entries (0.0 for an empty database)."""
        if not self.total_songs:
            return 0.0
        return 100.0 * self.valid_songs / self.total_songs
