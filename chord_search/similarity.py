"""Key-independent progression similarity and related-song discovery.

Progressions are compared as Nashville numbers, so the same progression in
two different keys scores as identical.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from chord_search.models import RelatedSong, SectionPair
from chord_search.nashville import progression_to_numbers

if TYPE_CHECKING:
    from collections.abc import Sequence

    from numpy.typing import NDArray

    from chord_search.models import Key, Song

logger = logging.getLogger(__name__)

# Weights of the three similarity components (sum to 1)
SET_WEIGHT = 0.5
POSITION_WEIGHT = 0.3
LENGTH_WEIGHT = 0.2

# Similarity bands used by the explanation text and grouping
VERY_SIMILAR = 0.8
SIMILAR = 0.6
SOMEWHAT_SIMILAR = 0.4

SIMILARITY_GROUPS: dict[str, tuple[float, float]] = {
    "very_similar": (0.7, float("inf")),
    "similar": (0.5, 0.7),
    "somewhat_similar": (0.3, 0.5),
}


@dataclass(frozen=True)
class RelatedSongsOptions:
    """Options for :func:`find_related_songs`.

    Parameters
    ----------
    min_similarity : float
        Songs scoring below this (after bonuses) are dropped.
    max_results : int
        Maximum number of related songs returned.
    same_artist_bonus : float
        Added when both songs share a (non-empty) artist.
    same_genre_bonus : float
        Added when both songs share a (non-empty) genre.
    exclude_self : bool
        Skip corpus entries with the target's song id.
    """

    min_similarity: float = 0.3
    max_results: int = 5
    same_artist_bonus: float = 0.1
    same_genre_bonus: float = 0.05
    exclude_self: bool = True


DEFAULT_RELATED_OPTIONS = RelatedSongsOptions()


def jaccard_similarity(set1: frozenset[str], set2: frozenset[str]) -> float:
    """Compute Jaccard similarity between two sets.

    Parameters
    ----------
    set1 : frozenset[str]
        First set.
    set2 : frozenset[str]
        Second set.

    Returns
    -------
    float
        Jaccard similarity (0.0 to 1.0).
    """
    if not set1 and not set2:
        return 1.0
    if not set1 or not set2:
        return 0.0
    return len(set1 & set2) / len(set1 | set2)


def progression_similarity(
    prog_a: Sequence[str],
    key_a: Key | str | None,
    prog_b: Sequence[str],
    key_b: Key | str | None,
) -> float:
    """Score how alike two progressions are, independent of their keys.

    Both progressions are converted to Nashville numbers in their own key.
    Identical number sequences score 1.0; otherwise the score combines

    - chord-set overlap (Jaccard index of the numbers), weight 0.5;
    - positional agreement (same number at the same index, counted over the
      shorter progression and divided by the longer length), weight 0.3;
    - length similarity ``1 - |len_a - len_b| / max_len``, weight 0.2.

    Parameters
    ----------
    prog_a, prog_b : Sequence[str]
        Chord symbols.
    key_a, key_b : Key | str | None
        Key of each progression.

    Returns
    -------
    float
        Similarity in [0, 1]; 0.0 if either progression is empty.

    Examples
    --------
    >>> progression_similarity(["C", "G", "Am", "F"], "C", ["D", "A", "Bm", "G"], "D")
    1.0
    >>> progression_similarity([], "C", ["C"], "C")
    0.0
    """
    if not prog_a or not prog_b:
        return 0.0

    numbers_a = progression_to_numbers(prog_a, key_a)
    numbers_b = progression_to_numbers(prog_b, key_b)
    if numbers_a == numbers_b:
        return 1.0

    longest = max(len(numbers_a), len(numbers_b))
    set_score = jaccard_similarity(frozenset(numbers_a), frozenset(numbers_b))
    position_score = sum(a == b for a, b in zip(numbers_a, numbers_b)) / longest
    length_score = 1 - abs(len(numbers_a) - len(numbers_b)) / longest

    return SET_WEIGHT * set_score + POSITION_WEIGHT * position_score + LENGTH_WEIGHT * length_score


def build_similarity_matrix(target: Song, candidate: Song) -> NDArray[np.float64]:
    """Build the section-by-section similarity matrix of two songs.

    Parameters
    ----------
    target : Song
        Song whose sections index the rows.
    candidate : Song
        Song whose sections index the columns.

    Returns
    -------
    NDArray[np.float64]
        Matrix of shape (len(target.sections), len(candidate.sections)).
    """
    n, m = len(target.sections), len(candidate.sections)
    sim = np.zeros((n, m), dtype=np.float64)

    for i, row_section in enumerate(target.sections):
        for j, col_section in enumerate(candidate.sections):
            sim[i, j] = progression_similarity(
                row_section.progression, target.key, col_section.progression, candidate.key
            )

    return sim


def _best_section_pair(target: Song, candidate: Song) -> SectionPair | None:
    """Return the highest-scoring section pair, or None if nothing overlaps."""
    sim = build_similarity_matrix(target, candidate)
    if sim.size == 0 or sim.max() <= 0:
        return None

    # argmax returns the first maximum in row-major order
    i, j = np.unravel_index(int(np.argmax(sim)), sim.shape)
    return SectionPair(
        target_section=target.sections[i].name,
        match_section=candidate.sections[j].name,
        similarity=float(sim[i, j]),
    )


def find_related_songs(
    target: Song,
    corpus: Sequence[Song],
    options: RelatedSongsOptions | None = None,
) -> list[RelatedSong]:
    """Find the corpus songs harmonically closest to a target song.

    Each candidate scores the best similarity over all pairs of its sections
    with the target's sections. Sharing the artist or genre adds a bonus,
    each addition clamped to 1.0.

    Parameters
    ----------
    target : Song
        The song to find relatives for.
    corpus : Sequence[Song]
        Candidate songs.
    options : RelatedSongsOptions | None
        Thresholds and bonuses.

    Returns
    -------
    list[RelatedSong]
        At most ``max_results`` songs scoring at least ``min_similarity``,
        by descending similarity with ties in corpus order.
    """
    options = options or DEFAULT_RELATED_OPTIONS
    related: list[RelatedSong] = []

    for song in corpus:
        if options.exclude_self and song.song_id == target.song_id:
            continue

        best = _best_section_pair(target, song)
        similarity = best.similarity if best else 0.0
        if target.artist and song.artist == target.artist:
            similarity = min(1.0, similarity + options.same_artist_bonus)
        if target.genre and song.genre == target.genre:
            similarity = min(1.0, similarity + options.same_genre_bonus)

        if similarity >= options.min_similarity:
            related.append(RelatedSong(song=song, similarity=similarity, best_match=best))

    related.sort(key=lambda entry: entry.similarity, reverse=True)
    logger.debug("Found %d songs related to %r", len(related), target.song_id)
    return related[: options.max_results]


def similarity_explanation(related: RelatedSong) -> str:
    """Describe a related song's similarity in a short human-readable line.

    Examples
    --------
    >>> from chord_search.models import Song
    >>> pair = SectionPair("chorus", "verse", 0.9)
    >>> similarity_explanation(RelatedSong(Song("x"), 0.9, pair))
    '90% similar - Very similar chorus and verse progressions'
    """
    percentage = round(related.similarity * 100)
    pair = related.best_match

    if pair is not None and related.similarity >= VERY_SIMILAR:
        return f"{percentage}% similar - Very similar {pair.target_section} and {pair.match_section} progressions"
    if pair is not None and related.similarity >= SIMILAR:
        return f"{percentage}% similar - Similar chord progressions in {pair.target_section}/{pair.match_section}"
    if related.similarity >= SOMEWHAT_SIMILAR:
        return f"{percentage}% similar - Some common chord patterns"
    return f"{percentage}% similar - Shares some musical elements"


def group_by_similarity(related: Sequence[RelatedSong]) -> dict[str, list[RelatedSong]]:
    """Bucket related songs into "very_similar", "similar" and "somewhat_similar".

    Songs below 0.3 fall in no group.
    """
    return {
        name: [entry for entry in related if low <= entry.similarity < high]
        for name, (low, high) in SIMILARITY_GROUPS.items()
    }
