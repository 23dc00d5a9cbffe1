"""Shared fixtures for chord-search tests."""

from __future__ import annotations

import copy

import pytest

from chord_search import Song

SONGS = [
    {
        "id": "s1",
        "title": "Let It Be",
        "artist": "The Beatles",
        "genre": "Rock",
        "decade": "1970s",
        "popularity": "classic",
        "key": "C",
        "sections": {
            "verse": {"progression": ["C", "G", "Am", "F"], "complexity": "simple"},
            "chorus": {"progression": ["Am", "G", "F", "C"], "complexity": "simple"},
        },
    },
    {
        "id": "s2",
        "title": "Hey Jude",
        "artist": "The Beatles",
        "genre": "Rock",
        "decade": "1960s",
        "popularity": "classic",
        "key": "F",
        "sections": {
            "verse": {"progression": ["F", "C", "C7", "F"], "complexity": "simple"},
            "chorus": {"progression": ["F", "Bb", "F", "C"], "complexity": "simple"},
        },
    },
    {
        "id": "s3",
        "title": "Stand By Me",
        "artist": "Ben E. King",
        "genre": "Soul",
        "decade": "1960s",
        "popularity": "classic",
        "key": "A",
        "sections": {
            "verse": {"progression": ["A", "F#m", "D", "E", "A"], "complexity": "simple"},
        },
    },
    {
        "id": "s4",
        "title": "Autumn Leaves",
        "artist": "Joseph Kosma",
        "genre": "Jazz",
        "decade": "1940s",
        "popularity": "standard",
        "key": "G",
        "sections": {
            "verse": {
                "progression": ["Am7", "D7", "Gmaj7", "Cmaj7", "F#m7b5", "B7", "Em"],
                "complexity": "complex",
            },
        },
    },
    {
        "id": "s5",
        "title": "With or Without You",
        "artist": "U2",
        "genre": "Rock",
        "decade": "1980s",
        "popularity": "hit",
        "key": "D",
        "sections": {
            "verse": {"progression": ["D", "A", "Bm", "G"], "complexity": "simple"},
        },
    },
]


@pytest.fixture
def corpus() -> list[Song]:
    """Five songs covering rock, soul and jazz progressions."""
    return [Song.from_dict(data) for data in SONGS]


@pytest.fixture
def songs_by_id(corpus: list[Song]) -> dict[str, Song]:
    """The corpus indexed by song id."""
    return {song.song_id: song for song in corpus}


@pytest.fixture
def raw_songs() -> list[dict]:
    """The corpus records as plain mappings."""
    return copy.deepcopy(SONGS)
