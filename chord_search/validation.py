"""Validation of raw song records before they enter a corpus.

Records are the plain mappings accepted by :meth:`Song.from_dict`. Every
check reports a readable message instead of raising, so a whole database can
be audited in one pass.
"""

from __future__ import annotations

import datetime
import re
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from chord_search.errors import ParseError
from chord_search.models import DatabaseReport
from chord_search.parser import parse_chord, parse_key

if TYPE_CHECKING:
    from collections.abc import Sequence

VALID_GENRES = frozenset(
    {
        "rock",
        "pop",
        "jazz",
        "blues",
        "country",
        "folk",
        "reggae",
        "hip-hop",
        "r&b",
        "soul",
        "funk",
        "disco",
        "electronic",
        "alternative",
        "grunge",
        "punk",
        "metal",
        "indie",
        "classical",
    }
)

VALID_POPULARITY_LEVELS = frozenset({"mainstream", "deep-cut", "underground", "hit", "classic", "standard"})

VALID_COMPLEXITY_LEVELS = frozenset({"simple", "intermediate", "complex"})

VALID_SECTION_NAMES = frozenset(
    {
        "intro",
        "verse",
        "pre-chorus",
        "chorus",
        "post-chorus",
        "bridge",
        "instrumental",
        "solo",
        "breakdown",
        "interlude",
        "outro",
    }
)

# "60s" or "1960s"
DECADE_RE = re.compile(r"^(?:19|20)?\d0s$")

# mm:ss audio position
TIMESTAMP_RE = re.compile(r"^(\d{1,2}):(\d{2})$")

REQUIRED_FIELDS = ("title", "artist", "genre", "decade", "popularity", "key")
ID_FIELDS = ("song_id", "songId", "id")

MIN_YEAR = 1900
MAX_TEMPO = 300


def is_valid_chord(symbol: object) -> bool:
    """Return True when ``symbol`` is a chord symbol the parser accepts.

    Examples
    --------
    >>> is_valid_chord("F#m7/A")
    True
    >>> is_valid_chord("H7")
    False
    """
    if not isinstance(symbol, str):
        return False
    try:
        parse_chord(symbol)
    except ParseError:
        return False
    return True


def _seconds(timestamp: object) -> int | None:
    if not isinstance(timestamp, str):
        return None
    match = TIMESTAMP_RE.match(timestamp)
    if match is None:
        return None
    minutes, seconds = int(match.group(1)), int(match.group(2))
    if seconds >= 60:
        return None
    return minutes * 60 + seconds


def is_valid_timestamp(timestamp: object) -> bool:
    """Return True for an "m:ss" or "mm:ss" audio position.

    Examples
    --------
    >>> is_valid_timestamp("1:23")
    True
    >>> is_valid_timestamp("1:60")
    False
    """
    return _seconds(timestamp) is not None


def _is_positive_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def validate_section(name: str, section: Any) -> list[str]:
    """Check one raw section record.

    Parameters
    ----------
    name : str
        Section name.
    section : Any
        Section mapping with ``progression`` and optional ``bars``,
        ``repetitions``, ``complexity`` and ``audioTimestamp`` entries.

    Returns
    -------
    list[str]
        Error messages; empty when the section is valid.
    """
    if not isinstance(section, Mapping):
        return ["Section must be a mapping"]

    errors: list[str] = []
    if name not in VALID_SECTION_NAMES:
        errors.append(f"Invalid section name: {name}")

    progression = section.get("progression")
    if not isinstance(progression, (list, tuple)):
        errors.append("Progression must be a list")
    else:
        if not progression:
            errors.append("Progression cannot be empty")
        errors.extend(
            f"Invalid chord at position {index}: {chord}"
            for index, chord in enumerate(progression)
            if not is_valid_chord(chord)
        )

    for field in ("bars", "repetitions"):
        if field in section and not _is_positive_int(section[field]):
            errors.append(f"{field.capitalize()} must be a positive integer")

    complexity = section.get("complexity")
    if complexity is not None and complexity not in VALID_COMPLEXITY_LEVELS:
        errors.append(f"Invalid complexity level: {complexity}")

    timestamp = section.get("audioTimestamp")
    if timestamp is not None:
        errors.extend(_timestamp_errors(timestamp))
    return errors


def _timestamp_errors(timestamp: Any) -> list[str]:
    if not isinstance(timestamp, Mapping):
        return ["Audio timestamp must be a mapping"]

    errors: list[str] = []
    start, end = _seconds(timestamp.get("start")), _seconds(timestamp.get("end"))
    if start is None:
        errors.append(f"Invalid start timestamp: {timestamp.get('start')}")
    if end is None:
        errors.append(f"Invalid end timestamp: {timestamp.get('end')}")
    if start is not None and end is not None and start >= end:
        errors.append("Start timestamp must be before end timestamp")
    return errors


def _song_id(song: Mapping[str, Any]) -> str:
    for field in ID_FIELDS:
        value = song.get(field)
        if isinstance(value, str) and value:
            return value
    return ""


def validate_song(song: Any) -> list[str]:
    """Check one raw song record.

    Metadata fields, the key and every section are checked. ``year`` and
    ``tempo`` are optional but must be in range when present.

    Parameters
    ----------
    song : Any
        Song mapping as accepted by :meth:`Song.from_dict`.

    Returns
    -------
    list[str]
        Error messages; empty when the song is valid.

    Examples
    --------
    >>> validate_song({"id": "s1", "title": "T", "artist": "A", "genre": "Rock", "decade": "1970s",
    ...                "popularity": "hit", "key": "C", "sections": {"verse": {"progression": ["C", "G"]}}})
    []
    """
    if not isinstance(song, Mapping):
        return ["Song must be a mapping"]

    errors: list[str] = []
    if not _song_id(song):
        errors.append("song id must be a non-empty string")
    for field in REQUIRED_FIELDS:
        value = song.get(field)
        if not isinstance(value, str) or not value:
            errors.append(f"{field} must be a non-empty string")

    genre = song.get("genre")
    if isinstance(genre, str) and genre and genre.lower() not in VALID_GENRES:
        errors.append(f"Invalid genre: {genre}")
    decade = song.get("decade")
    if isinstance(decade, str) and decade and not DECADE_RE.match(decade):
        errors.append(f"Invalid decade: {decade}")
    popularity = song.get("popularity")
    if isinstance(popularity, str) and popularity and popularity.lower() not in VALID_POPULARITY_LEVELS:
        errors.append(f"Invalid popularity level: {popularity}")
    key = song.get("key")
    if isinstance(key, str) and key:
        try:
            parse_key(key)
        except ParseError:
            errors.append(f"Invalid key: {key}")

    year = song.get("year")
    if year is not None and not (_is_positive_int(year) and MIN_YEAR <= year <= datetime.date.today().year):
        errors.append(f"Year must be an integer between {MIN_YEAR} and the current year")
    tempo = song.get("tempo")
    if tempo is not None and not (
        isinstance(tempo, (int, float)) and not isinstance(tempo, bool) and 0 < tempo <= MAX_TEMPO
    ):
        errors.append(f"Tempo must be a number between 1 and {MAX_TEMPO} BPM")

    errors.extend(_sections_errors(song.get("sections")))
    return errors


def _sections_errors(sections: Any) -> list[str]:
    if isinstance(sections, Mapping):
        items = list(sections.items())
    elif isinstance(sections, (list, tuple)):
        items = [(section.get("name", "") if isinstance(section, Mapping) else "", section) for section in sections]
    else:
        return ["Sections must be a mapping or a list"]

    if not items:
        return ["Song must have at least one section"]

    errors: list[str] = []
    for name, section in items:
        section_errors = validate_section(name, section)
        if section_errors:
            errors.append(f'Section "{name}": {", ".join(section_errors)}')
    return errors


def validate_database(songs: Sequence[Any]) -> DatabaseReport:
    """Validate every record of a song database and look for duplicate ids.

    Parameters
    ----------
    songs : Sequence[Any]
        Raw song records.

    Returns
    -------
    DatabaseReport
        Counts and per-song errors. Invalid songs are labelled
        ``Song <n> (<title>)`` with ``n`` counting from 1.
    """
    song_errors: list[tuple[str, tuple[str, ...]]] = []
    errors: list[str] = []
    seen: set[str] = set()

    for index, song in enumerate(songs, start=1):
        problems = validate_song(song)
        if problems:
            title = song.get("title") if isinstance(song, Mapping) else None
            song_errors.append((f"Song {index} ({title or 'Unknown'})", tuple(problems)))

        song_id = _song_id(song) if isinstance(song, Mapping) else ""
        if song_id:
            if song_id in seen:
                errors.append(f"Duplicate song ID: {song_id}")
            seen.add(song_id)

    return DatabaseReport(
        total_songs=len(songs),
        valid_songs=len(songs) - len(song_errors),
        errors=tuple(errors),
        song_errors=tuple(song_errors),
    )
