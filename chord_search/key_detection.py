"""Key estimation from chord roots."""

from __future__ import annotations

import logging
from collections import Counter
from typing import TYPE_CHECKING

from chord_search.models import Key, KeyCandidate
from chord_search.parser import normalize_progression
from chord_search.pitch_class import PC_TO_NOTE, semitones_between, transpose_note

if TYPE_CHECKING:
    from collections.abc import Iterable

logger = logging.getLogger(__name__)

DEFAULT_KEY = "C"

# Weight of the key's own root against its subdominant and dominant roots
TONIC_WEIGHT = 2
SUBDOMINANT_INTERVAL = 5
DOMINANT_INTERVAL = 7

MAJOR_SCALE: frozenset[int] = frozenset({0, 2, 4, 5, 7, 9, 11})
NATURAL_MINOR_SCALE: frozenset[int] = frozenset({0, 2, 3, 5, 7, 8, 10})

# First and last chords count double when fitting a key
ENDPOINT_WEIGHT = 2
TONIC_BONUS = 0.5


def detect_key(progression: Iterable[str] | None) -> str:
    """Estimate the key root of a progression.

    Every distinct chord root is scored as ``2 * count(root) +
    count(root + 5) + count(root + 7)``, rewarding roots whose subdominant and
    dominant also occur. Symbols that fail to parse are ignored.

    Parameters
    ----------
    progression : Iterable[str] | None
        Chord symbols as written.

    Returns
    -------
    str
        Canonical root note of the most likely key. Ties go to the root
        encountered first; an empty or fully invalid progression gives "C".

    Examples
    --------
    >>> detect_key(["G", "G", "C", "D"])
    'G'
    >>> detect_key(["Am", "F", "C", "G"])
    'C'
    >>> detect_key([])
    'C'
    """
    if not progression:
        return DEFAULT_KEY

    # Counter keeps first-encountered order, which settles ties
    root_counts = Counter(chord.root for chord in normalize_progression(progression))
    if not root_counts:
        return DEFAULT_KEY

    best_root = DEFAULT_KEY
    best_score = -1
    for root, count in root_counts.items():
        score = (
            TONIC_WEIGHT * count
            + root_counts[transpose_note(root, SUBDOMINANT_INTERVAL)]
            + root_counts[transpose_note(root, DOMINANT_INTERVAL)]
        )
        if score > best_score:
            best_root, best_score = root, score

    logger.debug("Detected key %s (score %d) from roots %s", best_root, best_score, dict(root_counts))
    return best_root


def _key_fit(roots: list[str], key: Key) -> float:
    """Score how well a sequence of chord roots fits a key, in [0, 1]."""
    scale = NATURAL_MINOR_SCALE if key.minor else MAJOR_SCALE
    score = 0.0
    total_weight = 0
    last = len(roots) - 1
    for index, root in enumerate(roots):
        weight = ENDPOINT_WEIGHT if index in (0, last) else 1
        total_weight += weight

        interval = semitones_between(key.root, root)
        if interval in scale:
            score += weight
            if interval == 0:
                score += weight * TONIC_BONUS

    if total_weight == 0:
        return 0.0
    return min(1.0, score / total_weight)


def analyze_key(progression: Iterable[str] | None, top: int = 5) -> list[KeyCandidate]:
    """Rank the 24 major and minor keys by how well a progression fits them.

    A chord fits a key when its root lies on the key's scale (natural minor
    for minor keys). The first and last chords weigh double and roots on the
    tonic get a bonus.

    Parameters
    ----------
    progression : Iterable[str] | None
        Chord symbols as written; unparseable ones are ignored.
    top : int
        Number of candidates to return.

    Returns
    -------
    list[KeyCandidate]
        Candidates by descending confidence. Equal scores keep the order
        C, Cm, C#, C#m, ... B, Bm.

    Examples
    --------
    >>> best = analyze_key(["C", "F", "G", "C"], top=1)[0]
    >>> str(best.key), best.confidence
    ('C', 1.0)
    """
    if not progression:
        return []

    roots = [chord.root for chord in normalize_progression(progression)]
    if not roots:
        return []

    candidates = [
        KeyCandidate(key=key, confidence=_key_fit(roots, key))
        for note in PC_TO_NOTE
        for key in (Key(root=note), Key(root=note, minor=True))
    ]
    candidates.sort(key=lambda candidate: candidate.confidence, reverse=True)
    return candidates[:top]
