import sys

from chord_search import SearchOptions, Song, chord_to_number, detect_key, search_progression

songs = [
    Song.from_dict(
        {
            "id": "let-it-be",
            "title": "Let It Be",
            "artist": "The Beatles",
            "key": "C",
            "sections": {"verse": {"progression": ["C", "G", "Am", "F"]}},
        }
    ),
    Song.from_dict(
        {
            "id": "with-or-without-you",
            "title": "With or Without You",
            "artist": "U2",
            "key": "D",
            "sections": {"verse": {"progression": ["D", "A", "Bm", "G"]}},
        }
    ),
]

# Same progression in any key
options = SearchOptions(allow_transposition=True, exact_match=True)
for result in search_progression(["C", "G", "Am", "F"], songs, options):
    sys.stdout.write(f"{result.song.title} ({result.section.name}): {result.confidence:.2f}\n")

# Nashville numbers relative to the detected key
progression = ["D", "A", "Bm", "G"]
key = detect_key(progression)
numbers = [chord_to_number(chord, key) for chord in progression]
sys.stdout.write(f"{key}: {' '.join(numbers)}\n")  # "D: 1 5 6m 4"
