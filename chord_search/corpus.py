"""Song corpus filtering.

The corpus is any read-only sequence of :class:`Song` values; nothing here
copies or mutates it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence

    from chord_search.models import Section, Song


@dataclass(frozen=True)
class CorpusFilter:
    """Song and section filters; ``None`` disables a filter.

    Parameters
    ----------
    section : str | None
        Section name to restrict to (e.g., "chorus").
    genre : str | None
        Genre, compared case-insensitively.
    decade : str | None
        Decade label (e.g., "1980s").
    complexity : str | None
        Section complexity label.
    popularity : str | None
        Popularity label.
    """

    section: str | None = None
    genre: str | None = None
    decade: str | None = None
    complexity: str | None = None
    popularity: str | None = None

    def accepts_song(self, song: Song) -> bool:
        """Check the song-level filters (genre, decade, popularity)."""
        if self.genre and song.genre.lower() != self.genre.lower():
            return False
        if self.decade and song.decade != self.decade:
            return False
        return not (self.popularity and song.popularity != self.popularity)

    def accepts_section(self, section: Section) -> bool:
        """Check the section-level filters (name, complexity)."""
        if self.section and section.name != self.section:
            return False
        return not (self.complexity and section.complexity != self.complexity)


NO_FILTER = CorpusFilter()


def iter_sections(corpus: Sequence[Song], filters: CorpusFilter | None = None) -> Iterator[tuple[Song, Section]]:
    """Yield every (song, section) pair that passes the filters, in corpus order."""
    filters = filters or NO_FILTER
    for song in corpus:
        if not filters.accepts_song(song):
            continue
        for section in song.sections:
            if filters.accepts_section(section):
                yield song, section


def search_by_filters(corpus: Sequence[Song], filters: CorpusFilter | None = None) -> list[tuple[Song, Section]]:
    """Return the (song, section) pairs matching the filters, without any chord search.

    Examples
    --------
    >>> from chord_search.models import Song
    >>> corpus = [Song.from_dict({"id": "a", "genre": "Rock", "sections": {"verse": {"progression": ["C"]}}})]
    >>> [(song.song_id, section.name) for song, section in search_by_filters(corpus, CorpusFilter(genre="rock"))]
    [('a', 'verse')]
    """
    return list(iter_sections(corpus, filters))


def count_filtered(corpus: Sequence[Song], filters: CorpusFilter | None = None) -> int:
    """Count the (song, section) pairs matching the filters."""
    return sum(1 for _ in iter_sections(corpus, filters))


def available_filters(corpus: Sequence[Song]) -> dict[str, list[str]]:
    """Collect the sorted distinct values of every filterable attribute.

    Returns
    -------
    dict[str, list[str]]
        Keys "genres", "decades", "complexities", "sections" and
        "popularities". Empty values are left out.
    """
    values: dict[str, set[str]] = {
        "genres": set(),
        "decades": set(),
        "complexities": set(),
        "sections": set(),
        "popularities": set(),
    }
    for song in corpus:
        values["genres"].add(song.genre)
        values["decades"].add(song.decade)
        values["popularities"].add(song.popularity)
        for section in song.sections:
            values["sections"].add(section.name)
            values["complexities"].add(section.complexity or "")

    return {name: sorted(value for value in found if value) for name, found in values.items()}
