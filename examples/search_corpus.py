#!/usr/bin/env python3
"""CLI tool to search a JSON song corpus for a chord progression.

The corpus file holds a list of songs in the form accepted by
``Song.from_dict``.

Usage:
    python examples/search_corpus.py <corpus_file> <chords> [--transpose] [--exact]

Examples:
    python examples/search_corpus.py songs.json "C G Am F"
    python examples/search_corpus.py songs.json "Dm7-G7-Cmaj7" --transpose --section chorus
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from chord_search import (
    ChordSearchError,
    ScoredMatch,
    SearchOptions,
    Song,
    parse_progression_input,
    search_progression,
)


def result_to_dict(result: ScoredMatch) -> dict[str, Any]:
    """Convert a ScoredMatch to a JSON-serializable dict."""
    return {
        "song_id": result.song.song_id,
        "title": result.song.title,
        "artist": result.song.artist,
        "section": result.section.name,
        "kind": result.match.kind,
        "start": result.match.start,
        "end": result.match.end,
        "matched": list(result.match.matched),
        "coverage": result.match.coverage,
        "confidence": round(result.confidence, 4),
    }


def main() -> int:
    parser = argparse.ArgumentParser(description="Search a song corpus for a chord progression")
    parser.add_argument("corpus", type=Path, help="JSON file with a list of songs")
    parser.add_argument("chords", help="Chord progression, e.g. 'C G Am F'")
    parser.add_argument("--exact", action="store_true", help="Only match the whole progression")
    parser.add_argument("--transpose", action="store_true", help="Match the progression in any key")
    parser.add_argument("--section", help="Restrict to one section name")
    parser.add_argument("--genre", help="Restrict to one genre")
    parser.add_argument("--limit", type=int, default=10, help="Maximum number of results")
    args = parser.parse_args()

    if not args.corpus.exists():
        sys.stderr.write(f"Error: File not found: {args.corpus}\n")
        return 1

    corpus = [Song.from_dict(data) for data in json.loads(args.corpus.read_text())]
    options = SearchOptions(
        exact_match=args.exact,
        allow_transposition=args.transpose,
        section=args.section,
        genre=args.genre,
    )

    try:
        results = search_progression(parse_progression_input(args.chords), corpus, options)
    except ChordSearchError as exc:
        sys.stderr.write(f"Error: {exc}\n")
        return 1

    json.dump([result_to_dict(r) for r in results[: args.limit]], sys.stdout, indent=2)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
