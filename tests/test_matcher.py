import pytest

from chord_search import (
    CorpusFilter,
    Match,
    ParseError,
    SearchOptions,
    find_matches,
    match_confidence,
    progression_suggestions,
    search_by_chords,
    search_progression,
)

EXACT = SearchOptions(exact_match=True)
TRANSPOSED = SearchOptions(exact_match=True, allow_transposition=True)


class TestFindMatches:
    def test_partial_example(self):
        matches = find_matches(["C", "Am"], ["C", "Am", "F", "G"])
        assert len(matches) == 1
        match = matches[0]
        assert (match.kind, match.start, match.end) == ("partial", 0, 1)
        assert match.coverage == 1.0
        assert match.matched == ("C", "Am")
        assert match_confidence(match, 4) == 1.0

    def test_exact_finds_every_window(self):
        matches = find_matches(["C", "G"], ["C", "G", "C", "G"], EXACT)
        assert [(m.start, m.end) for m in matches] == [(0, 1), (2, 3)]
        assert all(m.kind == "exact" and m.coverage == 1.0 for m in matches)

    def test_exact_requires_whole_search(self):
        assert find_matches(["C", "G", "D"], ["C", "G", "Am"], EXACT) == []

    def test_search_longer_than_candidate(self):
        assert find_matches(["C", "G", "Am"], ["C", "G"], EXACT) == []

    def test_transposition(self):
        matches = find_matches(["C", "G", "Am", "F"], ["D", "A", "Bm", "G"], TRANSPOSED)
        assert [(m.start, m.end) for m in matches] == [(0, 3)]
        assert find_matches(["C", "G", "Am", "F"], ["D", "A", "Bm", "G"], EXACT) == []

    def test_transposition_requires_same_qualities(self):
        assert find_matches(["C", "G"], ["Dm", "A"], TRANSPOSED) == []

    def test_transposition_keeps_bass_interval(self):
        assert len(find_matches(["C/E", "G"], ["D/F#", "A"], TRANSPOSED)) == 1
        assert find_matches(["C/E", "G"], ["D/A", "A"], TRANSPOSED) == []

    def test_case_insensitive_by_default(self):
        assert len(find_matches(["am", "f"], ["Am", "F"])) == 1

    def test_enharmonic_spellings_match(self):
        assert len(find_matches(["Bb", "F"], ["A#", "F"], EXACT)) == 1

    def test_case_sensitive(self):
        options = SearchOptions(case_sensitive=True)
        assert find_matches(["am", "F"], ["Am", "F"], options) == []
        assert len(find_matches(["Am", "F"], ["Am", "F"], options)) == 1

    def test_unparseable_candidate_keeps_indices(self):
        matches = find_matches(["C", "G"], ["C", "??", "C", "G"], EXACT)
        assert [(m.start, m.end) for m in matches] == [(2, 3)]
        assert matches[0].matched == ("C", "G")

    def test_partial_sub_slice(self):
        matches = find_matches(["C", "G", "Am", "F"], ["E", "G", "Am", "D"])
        assert len(matches) == 1
        match = matches[0]
        assert (match.start, match.end) == (1, 2)
        assert (match.search_start, match.search_end) == (1, 2)
        assert match.search == ("G", "Am")
        assert match.coverage == pytest.approx(0.5)

    def test_partial_skips_single_chords(self):
        assert find_matches(["C", "G"], ["C", "F", "G"]) == []

    def test_single_chord_search(self):
        matches = find_matches(["C"], ["C", "G", "C"])
        assert [m.start for m in matches] == [0, 2]

    def test_windows_are_deduplicated(self):
        matches = find_matches(["C", "G", "C", "G"], ["C", "G"])
        assert len(matches) == 1
        assert matches[0].search_start == 0

    def test_full_match_reported_once_per_window(self):
        matches = find_matches(["C", "G", "Am", "F"], ["C", "G", "Am", "F"])
        windows = [(m.start, m.end) for m in matches]
        assert len(windows) == len(set(windows))
        full = [m for m in matches if (m.start, m.end) == (0, 3)]
        assert full[0].coverage == 1.0

    def test_max_subslice_length(self):
        options = SearchOptions(max_subslice_length=2)
        matches = find_matches(["C", "G", "Am", "F"], ["C", "G", "Am", "F"], options)
        assert [(m.start, m.end) for m in matches] == [(0, 1), (1, 2), (2, 3)]

    def test_partial_with_transposition(self):
        options = SearchOptions(allow_transposition=True)
        matches = find_matches(["C", "G", "Am"], ["E", "B", "C#m"], options)
        assert any(m.coverage == 1.0 and (m.start, m.end) == (0, 2) for m in matches)

    @pytest.mark.parametrize("search", [[], None])
    def test_empty_search(self, search):
        assert find_matches(search, ["C", "G"]) == []

    def test_invalid_search_raises(self):
        with pytest.raises(ParseError):
            find_matches(["C", "X"], ["C", "G"])

    CANDIDATE = ["C", "Am", "F", "G", "Em", "Dm", "G7", "C"]

    @pytest.mark.parametrize("length", [1, 2, 3, 5])
    @pytest.mark.parametrize("start", [0, 1, 3])
    def test_exact_match_completeness(self, start, length):
        """Any window of the candidate, searched exactly, is found at its own offset."""
        search = self.CANDIDATE[start : start + length]
        matches = find_matches(search, self.CANDIDATE, EXACT)
        assert start in [m.start for m in matches]


class TestMatchConfidence:
    def test_short_partial_in_long_section(self):
        match = Match("partial", 2, 3, ("F", "G"), ("F", "G"), 1, 2, 0.5)
        assert match_confidence(match, 8) == pytest.approx(0.56)

    def test_length_bonus(self):
        match = Match("partial", 1, 3, ("G", "Am", "F"), ("G", "Am", "F"), 1, 3, 0.75)
        assert match_confidence(match, 5) == pytest.approx(0.95)

    def test_depends_only_on_match_and_candidate(self):
        match = Match("partial", 2, 3, ("F", "G"), ("F", "G"), 1, 2, 0.5)
        assert match_confidence(match, candidate_length=8) == pytest.approx(0.56)
        assert match_confidence(match, candidate_length=6) == pytest.approx(0.7)

    def test_start_bonus_clamped(self):
        match = Match("exact", 0, 3, ("C",) * 4, ("C",) * 4, 0, 3, 1.0)
        assert match_confidence(match, 4) == 1.0

    @pytest.mark.parametrize("kind", ["exact", "partial"])
    @pytest.mark.parametrize("start", [0, 2])
    @pytest.mark.parametrize("length", [1, 2, 4, 10])
    @pytest.mark.parametrize("candidate_length", [3, 7, 20])
    def test_bounds(self, kind, start, length, candidate_length):
        match = Match(kind, start, start + length - 1, (), (), 0, length - 1, length / 10)
        assert 0.0 <= match_confidence(match, candidate_length) <= 1.0


class TestSearchProgression:
    def test_best_match_first(self, corpus):
        results = search_progression(["C", "G", "Am", "F"], corpus)
        best = results[0]
        assert best.song.song_id == "s1"
        assert best.section.name == "verse"
        assert best.confidence == 1.0
        full = [r for r in results if r.match.coverage == 1.0]
        assert [(r.song.song_id, r.section.name, r.match.start) for r in full] == [("s1", "verse", 0)]

    def test_sorted_by_confidence(self, corpus):
        results = search_progression(["C", "G", "Am", "F"], corpus, SearchOptions(allow_transposition=True))
        confidences = [r.confidence for r in results]
        assert confidences == sorted(confidences, reverse=True)

    def test_transposition_finds_other_keys(self, corpus):
        options = SearchOptions(allow_transposition=True, exact_match=True)
        results = search_progression(["C", "G", "Am", "F"], corpus, options)
        assert [(r.song.song_id, r.section.name) for r in results] == [("s1", "verse"), ("s5", "verse")]

    def test_ties_keep_corpus_order(self, corpus):
        results = search_progression(["F", "C"], corpus, EXACT)
        assert all(r.confidence == 1.0 for r in results)
        assert [(r.song.song_id, r.section.name) for r in results] == [
            ("s1", "chorus"),
            ("s2", "verse"),
            ("s2", "chorus"),
        ]

    def test_genre_filter_is_case_insensitive(self, corpus):
        results = search_progression(["C", "G"], corpus, SearchOptions(genre="rock", allow_transposition=True))
        assert results
        assert {r.song.genre for r in results} == {"Rock"}

    def test_section_filter(self, corpus):
        results = search_progression(["G", "F"], corpus, SearchOptions(section="chorus"))
        assert [(r.song.song_id, r.section.name) for r in results] == [("s1", "chorus")]

    def test_decade_and_complexity_filters(self, corpus):
        options = SearchOptions(decade="1940s", complexity="complex")
        results = search_progression(["Am7", "D7"], corpus, options)
        assert [r.song.song_id for r in results] == ["s4"]
        assert search_progression(["Am7", "D7"], corpus, SearchOptions(decade="1980s")) == []

    def test_empty_inputs(self, corpus):
        assert search_progression([], corpus) == []
        assert search_progression(["C", "G"], []) == []

    def test_invalid_search_raises(self, corpus):
        with pytest.raises(ParseError):
            search_progression(["C", "Q"], corpus)


class TestSearchByChords:
    def test_any_chord(self, corpus):
        hits = search_by_chords(["C", "G"], corpus)
        assert [(h.song.song_id, h.chord_coverage) for h in hits] == [("s1", 1.0), ("s2", 0.5), ("s5", 0.5)]

    def test_require_all(self, corpus):
        hits = search_by_chords(["C", "G"], corpus, require_all=True)
        assert [h.song.song_id for h in hits] == ["s1"]
        assert hits[0].matched_chords == ("C", "G")
        assert hits[0].sections == (("verse", ("C", "G")), ("chorus", ("C", "G")))

    def test_spelling_variants(self, corpus):
        hits = search_by_chords(["A#"], corpus)
        assert [h.song.song_id for h in hits] == ["s2"]
        assert hits[0].matched_chords == ("A#",)

    def test_filters(self, corpus):
        hits = search_by_chords(["C"], corpus, filters=CorpusFilter(section="chorus"))
        assert [h.song.song_id for h in hits] == ["s1", "s2"]
        assert all(h.sections == (("chorus", ("C",)),) for h in hits)

    def test_empty(self, corpus):
        assert search_by_chords([], corpus) == []


class TestProgressionSuggestions:
    def test_single_continuation(self, corpus):
        suggestions = progression_suggestions(["C", "G"], corpus)
        assert len(suggestions) == 1
        assert suggestions[0].progression == ("C", "G", "Am")
        assert suggestions[0].count == 1
        assert suggestions[0].examples == (("Let It Be", "The Beatles", "verse"),)

    def test_ranked_by_count(self, corpus):
        suggestions = progression_suggestions(["F"], corpus)
        assert [(s.next_chord, s.count) for s in suggestions] == [("C", 3), ("A#", 1)]

    def test_limit(self, corpus):
        assert len(progression_suggestions(["F"], corpus, max_suggestions=1)) == 1

    def test_no_continuation(self, corpus):
        assert progression_suggestions(["B7", "Em"], corpus) == []

    def test_empty(self, corpus):
        assert progression_suggestions([], corpus) == []
