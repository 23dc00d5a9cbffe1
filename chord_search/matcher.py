"""Progression matching and confidence scoring.

A search progression is compared against candidate progressions either as a
whole (exact mode) or through every contiguous sub-slice (partial mode).
Matching can optionally ignore the key: two windows match under
transposition when one is the other shifted by a single interval.

Comparison keys
---------------
Case-insensitive matching (the default) compares parsed :class:`Chord`
values, so "Am", "am" and "Amin" are the same chord. Case-sensitive matching
compares the stripped symbols exactly as written. Candidate symbols that do
not parse never match, but keep their position so reported indices always
refer to the candidate as stored.
"""

from __future__ import annotations

import logging
from collections.abc import Hashable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from chord_search.corpus import CorpusFilter, iter_sections
from chord_search.errors import EmptyInputError, ParseError
from chord_search.models import ChordHit, Match, ProgressionSuggestion, ScoredMatch
from chord_search.parser import parse_chord, parse_progression
from chord_search.pitch_class import semitones_between

if TYPE_CHECKING:
    from collections.abc import Sequence

    from chord_search.models import Chord, Song

logger = logging.getLogger(__name__)

# Confidence scoring
LENGTH_BONUS_SPAN = 8  # match length earning the full length bonus
LENGTH_BONUS_CAP = 0.2
START_BONUS = 0.1
SHORT_MATCH_LENGTH = 3
LONG_CANDIDATE_LENGTH = 6
SHORT_MATCH_PENALTY = 0.8


@dataclass(frozen=True)
class SearchOptions(CorpusFilter):
    """Options for progression search.

    Parameters
    ----------
    exact_match : bool
        Only report windows matching the whole search progression.
    case_sensitive : bool
        Compare symbols as written instead of as parsed chords.
    allow_transposition : bool
        Also match windows that are a transposition of the search.
    max_subslice_length : int | None
        Longest search sub-slice tried in partial mode. Bounds the quadratic
        enumeration for long searches; ``None`` tries every length.

    The corpus filters of :class:`CorpusFilter` apply as well.
    """

    exact_match: bool = False
    case_sensitive: bool = False
    allow_transposition: bool = False
    max_subslice_length: int | None = None


DEFAULT_OPTIONS = SearchOptions()


@dataclass(frozen=True)
class _Progression:
    """Symbols of a progression with their comparison keys and parsed chords."""

    symbols: tuple[str, ...]
    keys: tuple[Hashable | None, ...]
    chords: tuple[Chord | None, ...]

    def __len__(self) -> int:
        return len(self.symbols)


def _search_progression(search: Sequence[str] | None, case_sensitive: bool) -> _Progression:
    """Parse a search progression strictly (raises ParseError / EmptyInputError)."""
    if not search:
        msg = "Search progression is empty"
        raise EmptyInputError(msg)
    chords = parse_progression(search)
    keys = tuple(symbol.strip() for symbol in search) if case_sensitive else chords
    return _Progression(symbols=tuple(search), keys=keys, chords=chords)


def _candidate_progression(candidate: Sequence[str], case_sensitive: bool) -> _Progression:
    """Parse a candidate progression leniently; unparseable chords become None."""
    chords: list[Chord | None] = []
    for symbol in candidate:
        try:
            chords.append(parse_chord(symbol))
        except ParseError:
            chords.append(None)

    if case_sensitive:
        keys: tuple[Hashable | None, ...] = tuple(
            symbol.strip() if chord is not None else None for symbol, chord in zip(candidate, chords)
        )
    else:
        keys = tuple(chords)
    return _Progression(symbols=tuple(candidate), keys=keys, chords=tuple(chords))


def _bass_interval(chord: Chord) -> int | None:
    return semitones_between(chord.root, chord.bass) if chord.bass else None


def _is_transposition(search: Sequence[Chord | None], window: Sequence[Chord | None]) -> bool:
    """Check whether ``window`` is ``search`` shifted by one consistent interval.

    Qualities must agree chord by chord, successive root movements must be
    the same, and slash basses must sit at the same interval from their root.
    """
    if len(search) != len(window) or None in window:
        return False

    # Stricter than equal root steps alone: C-G and Dm-A share steps but are
    # different progressions, as are C/E-G and D/A-A.
    for a, b in zip(search, window):
        if a.quality != b.quality or _bass_interval(a) != _bass_interval(b):  # type: ignore[union-attr]
            return False

    for i in range(1, len(search)):
        search_step = semitones_between(search[i - 1].root, search[i].root)  # type: ignore[union-attr]
        window_step = semitones_between(window[i - 1].root, window[i].root)  # type: ignore[union-attr]
        if search_step != window_step:
            return False
    return True


def _windows_match(
    search: _Progression,
    search_start: int,
    search_end: int,
    candidate: _Progression,
    start: int,
    allow_transposition: bool,
) -> bool:
    """Compare ``search[search_start:search_end]`` with the candidate window at ``start``."""
    width = search_end - search_start
    search_keys = search.keys[search_start:search_end]
    window_keys = candidate.keys[start : start + width]
    if all(key is not None and key == other for key, other in zip(window_keys, search_keys)):
        return True
    if allow_transposition:
        return _is_transposition(search.chords[search_start:search_end], candidate.chords[start : start + width])
    return False


def _exact_matches(search: _Progression, candidate: _Progression, allow_transposition: bool) -> list[Match]:
    width = len(search)
    matches: list[Match] = []
    for start in range(len(candidate) - width + 1):
        if _windows_match(search, 0, width, candidate, start, allow_transposition):
            matches.append(
                Match(
                    kind="exact",
                    start=start,
                    end=start + width - 1,
                    matched=candidate.symbols[start : start + width],
                    search=search.symbols,
                    search_start=0,
                    search_end=width - 1,
                    coverage=1.0,
                )
            )
    return matches


def _partial_matches(
    search: _Progression,
    candidate: _Progression,
    allow_transposition: bool,
    max_subslice_length: int | None,
) -> list[Match]:
    total = len(search)
    # Keyed by (start, end) window; dicts keep first-seen order on replacement
    best: dict[tuple[int, int], Match] = {}

    for search_start in range(total):
        for search_end in range(search_start + 1, total + 1):
            width = search_end - search_start
            # Single chords are noise unless they are the whole search
            if width == 1 and total > 1:
                continue
            if max_subslice_length is not None and width > max_subslice_length:
                continue

            coverage = width / total
            for start in range(len(candidate) - width + 1):
                if not _windows_match(search, search_start, search_end, candidate, start, allow_transposition):
                    continue
                window = (start, start + width - 1)
                existing = best.get(window)
                if existing is None or coverage > existing.coverage:
                    best[window] = Match(
                        kind="partial",
                        start=start,
                        end=start + width - 1,
                        matched=candidate.symbols[start : start + width],
                        search=search.symbols[search_start:search_end],
                        search_start=search_start,
                        search_end=search_end - 1,
                        coverage=coverage,
                    )

    return list(best.values())


def _find(search: _Progression, candidate: _Progression, options: SearchOptions) -> list[Match]:
    if options.exact_match:
        return _exact_matches(search, candidate, options.allow_transposition)
    return _partial_matches(search, candidate, options.allow_transposition, options.max_subslice_length)


def find_matches(
    search: Sequence[str],
    candidate: Sequence[str],
    options: SearchOptions | None = None,
) -> list[Match]:
    """Find every match of a search progression inside one candidate progression.

    Parameters
    ----------
    search : Sequence[str]
        Chord symbols to look for.
    candidate : Sequence[str]
        Chord symbols to search in.
    options : SearchOptions | None
        Matching options; corpus filters are ignored here.

    Returns
    -------
    list[Match]
        Matches in candidate order of discovery; one per (start, end) window.
        An empty search gives an empty list.

    Raises
    ------
    ParseError
        If a search symbol does not parse.

    Examples
    --------
    >>> [(m.start, m.end, m.coverage) for m in find_matches(["C", "Am"], ["C", "Am", "F", "G"])]
    [(0, 1, 1.0)]
    >>> opts = SearchOptions(exact_match=True, allow_transposition=True)
    >>> [m.matched for m in find_matches(["C", "G"], ["D", "A", "Em"], opts)]
    [('D', 'A')]
    """
    options = options or DEFAULT_OPTIONS
    try:
        prepared = _search_progression(search, options.case_sensitive)
    except EmptyInputError:
        return []
    return _find(prepared, _candidate_progression(candidate, options.case_sensitive), options)


def match_confidence(match: Match, candidate_length: int) -> float:
    """Score a match in [0, 1].

    The base score is 1.0 for exact matches and the coverage otherwise.
    Longer matches earn up to +0.2, matches at the start of the candidate
    +0.1, and matches shorter than three chords inside candidates longer
    than six chords are scaled by 0.8.

    Parameters
    ----------
    match : Match
        The match to score.
    candidate_length : int
        Length of the candidate progression.

    Returns
    -------
    float
        Confidence in [0, 1].

    Examples
    --------
    >>> m = Match("partial", 2, 3, ("F", "G"), ("F", "G"), 1, 2, 0.5)
    >>> round(match_confidence(m, 8), 3)
    0.56
    """
    confidence = 1.0 if match.kind == "exact" else match.coverage
    confidence += min(match.length / LENGTH_BONUS_SPAN, LENGTH_BONUS_CAP)
    if match.start == 0:
        confidence += START_BONUS
    if match.length < SHORT_MATCH_LENGTH and candidate_length > LONG_CANDIDATE_LENGTH:
        confidence *= SHORT_MATCH_PENALTY
    return max(0.0, min(confidence, 1.0))


def search_progression(
    search: Sequence[str],
    corpus: Sequence[Song],
    options: SearchOptions | None = None,
) -> list[ScoredMatch]:
    """Search every section of a corpus for a progression.

    Parameters
    ----------
    search : Sequence[str]
        Chord symbols to look for.
    corpus : Sequence[Song]
        Songs to search; sections failing the option filters are skipped.
    options : SearchOptions | None
        Matching options and corpus filters.

    Returns
    -------
    list[ScoredMatch]
        All matches, sorted by descending confidence. Equal confidences keep
        corpus order. An empty search or corpus gives an empty list.

    Raises
    ------
    ParseError
        If a search symbol does not parse.
    """
    options = options or DEFAULT_OPTIONS
    try:
        prepared = _search_progression(search, options.case_sensitive)
    except EmptyInputError:
        logger.debug("Empty search progression, nothing to match")
        return []

    results: list[ScoredMatch] = []
    for song, section in iter_sections(corpus, options):
        candidate = _candidate_progression(section.progression, options.case_sensitive)
        for match in _find(prepared, candidate, options):
            confidence = match_confidence(match, len(candidate))
            results.append(ScoredMatch(song=song, section=section, match=match, confidence=confidence))

    results.sort(key=lambda result: result.confidence, reverse=True)
    logger.debug("Found %d matches for %s in %d songs", len(results), list(prepared.symbols), len(corpus))
    return results


def search_by_chords(
    chords: Sequence[str],
    corpus: Sequence[Song],
    require_all: bool = False,
    case_sensitive: bool = False,
    filters: CorpusFilter | None = None,
) -> list[ChordHit]:
    """Find songs containing any (or all) of a set of chords, in any order.

    Parameters
    ----------
    chords : Sequence[str]
        Chord symbols to look for.
    corpus : Sequence[Song]
        Songs to search.
    require_all : bool
        Only keep songs containing every chord.
    case_sensitive : bool
        Compare symbols as written instead of as parsed chords.
    filters : CorpusFilter | None
        Song and section filters.

    Returns
    -------
    list[ChordHit]
        Songs by descending chord coverage, ties in corpus order.

    Raises
    ------
    ParseError
        If a search symbol does not parse.
    """
    try:
        wanted = _search_progression(chords, case_sensitive)
    except EmptyInputError:
        return []

    # Distinct search chords, first spelling wins
    distinct: dict[Hashable, str] = {}
    for key, symbol in zip(wanted.keys, wanted.symbols):
        distinct.setdefault(key, symbol)  # type: ignore[arg-type]

    by_song: dict[str, tuple[Song, list[tuple[str, tuple[str, ...]]]]] = {}
    order: list[str] = []
    for song, section in iter_sections(corpus, filters):
        section_keys = set(_candidate_progression(section.progression, case_sensitive).keys)
        found = tuple(symbol for key, symbol in distinct.items() if key in section_keys)
        if not found:
            continue
        if song.song_id not in by_song:
            by_song[song.song_id] = (song, [])
            order.append(song.song_id)
        by_song[song.song_id][1].append((section.name, found))

    hits: list[ChordHit] = []
    for song_id in order:
        song, sections = by_song[song_id]
        present = {symbol for _, found in sections for symbol in found}
        matched = tuple(symbol for symbol in distinct.values() if symbol in present)
        if require_all and len(matched) < len(distinct):
            continue
        hits.append(
            ChordHit(
                song=song,
                matched_chords=matched,
                sections=tuple(sections),
                chord_coverage=len(matched) / len(distinct),
            )
        )

    hits.sort(key=lambda hit: hit.chord_coverage, reverse=True)
    return hits


def progression_suggestions(
    partial: Sequence[str],
    corpus: Sequence[Song],
    max_suggestions: int = 10,
) -> list[ProgressionSuggestion]:
    """Suggest next chords for a partial progression from what the corpus plays.

    Every occurrence of ``partial`` followed by another chord counts once
    towards that continuation. Comparison is by parsed chord, so spelling
    variants of the same chord are merged.

    Parameters
    ----------
    partial : Sequence[str]
        The progression typed so far.
    corpus : Sequence[Song]
        Songs to learn continuations from.
    max_suggestions : int
        Maximum number of suggestions.

    Returns
    -------
    list[ProgressionSuggestion]
        Continuations by descending count, ties in order of first occurrence.

    Raises
    ------
    ParseError
        If a symbol of ``partial`` does not parse.
    """
    try:
        prepared = _search_progression(partial, case_sensitive=False)
    except EmptyInputError:
        return []

    width = len(prepared)
    counts: dict[str, int] = {}
    examples: dict[str, list[tuple[str, str, str]]] = {}
    for song, section in iter_sections(corpus):
        candidate = _candidate_progression(section.progression, case_sensitive=False)
        for start in range(len(candidate) - width):
            next_chord = candidate.chords[start + width]
            if next_chord is None or not _windows_match(prepared, 0, width, candidate, start, False):
                continue
            counts[next_chord.symbol] = counts.get(next_chord.symbol, 0) + 1
            examples.setdefault(next_chord.symbol, []).append((song.title, song.artist, section.name))

    suggestions = [
        ProgressionSuggestion(
            progression=(*prepared.symbols, symbol),
            count=count,
            examples=tuple(examples[symbol]),
        )
        for symbol, count in counts.items()
    ]
    suggestions.sort(key=lambda suggestion: suggestion.count, reverse=True)
    return suggestions[:max_suggestions]
