"""Property-based tests for difusa using Hypothesis.

These tests verify properties that should hold for all inputs:
- Identity: distance(a, a) == 0, similarity(a, a) == 1.0
- Symmetry: distance(a, b) == distance(b, a)
- Triangle inequality: d(a,c) <= d(a,b) + d(b,c)
- Bounds: 0.0 <= similarity(a, b) <= 1.0, |len(a) - len(b)| <= d(a, b)
- Capped variants agree with the exact distance
- Ranking: search results and suggestions are ordered and bounded
"""

from hypothesis import assume, given, settings
from hypothesis import strategies as st

import difusa as df

# Strategy for reasonable text (avoid extremely long strings for performance)
text_strategy = st.text(max_size=40, alphabet=st.characters(blacklist_categories=["Cs"]))
short_text_strategy = st.text(max_size=15, alphabet=st.characters(blacklist_categories=["Cs"]))

# Lowercase ASCII words are unchanged by normalization
word_strategy = st.text(alphabet="abcdefghijklmnopqrstuvwxyz", min_size=1, max_size=12)
sentence_strategy = st.lists(word_strategy, min_size=1, max_size=4).map(" ".join)


class TestDistanceProperties:
    """Metric properties of levenshtein_distance."""

    @given(text_strategy)
    @settings(max_examples=100)
    def test_identity(self, a: str):
        assert df.levenshtein_distance(a, a) == 0
        assert df.calculate_similarity(a, a) == 1.0

    @given(text_strategy, text_strategy)
    @settings(max_examples=100)
    def test_symmetry(self, a: str, b: str):
        assert df.levenshtein_distance(a, b) == df.levenshtein_distance(b, a)

    @given(text_strategy, text_strategy)
    @settings(max_examples=100)
    def test_zero_only_for_equal(self, a: str, b: str):
        assume(a != b)
        assert df.levenshtein_distance(a, b) > 0

    @given(text_strategy, text_strategy)
    @settings(max_examples=100)
    def test_length_bounds(self, a: str, b: str):
        d = df.levenshtein_distance(a, b)
        assert abs(len(a) - len(b)) <= d <= max(len(a), len(b))

    @given(short_text_strategy, short_text_strategy, short_text_strategy)
    @settings(max_examples=100)
    def test_triangle_inequality(self, a: str, b: str, c: str):
        ab = df.levenshtein_distance(a, b)
        bc = df.levenshtein_distance(b, c)
        ac = df.levenshtein_distance(a, c)
        assert ac <= ab + bc


class TestSimilarityProperties:
    """Bounds and consistency of calculate_similarity."""

    @given(text_strategy, text_strategy)
    @settings(max_examples=100)
    def test_bounds(self, a: str, b: str):
        assert 0.0 <= df.calculate_similarity(a, b) <= 1.0

    @given(text_strategy, text_strategy)
    @settings(max_examples=100)
    def test_symmetry(self, a: str, b: str):
        assert df.calculate_similarity(a, b) == df.calculate_similarity(b, a)

    @given(text_strategy, text_strategy)
    @settings(max_examples=100)
    def test_consistent_with_distance(self, a: str, b: str):
        assume(a or b)
        longest = max(len(a), len(b))
        expected = (longest - df.levenshtein_distance(a, b)) / longest
        assert df.calculate_similarity(a, b) == expected


class TestCappedDistanceProperties:
    """levenshtein_bounded and partial_levenshtein agree with the exact distance."""

    @given(short_text_strategy, short_text_strategy, st.integers(min_value=0, max_value=8))
    @settings(max_examples=200)
    def test_bounded_agrees(self, a: str, b: str, k: int):
        exact = df.levenshtein_distance(a, b)
        bounded = df.levenshtein_bounded(a, b, k)
        if exact <= k:
            assert bounded == exact
        else:
            assert bounded is None

    @given(short_text_strategy, text_strategy)
    @settings(max_examples=100)
    def test_partial_at_most_full(self, pattern: str, text: str):
        partial = df.partial_levenshtein(pattern, text)
        assert partial <= df.levenshtein_distance(pattern, text)
        assert partial <= len(pattern)

    @given(short_text_strategy, text_strategy, text_strategy)
    @settings(max_examples=100)
    def test_partial_zero_for_substring(self, pattern: str, prefix: str, suffix: str):
        assert df.partial_levenshtein(pattern, prefix + pattern + suffix) == 0

    @given(short_text_strategy, text_strategy, st.integers(min_value=0, max_value=6))
    @settings(max_examples=200)
    def test_partial_cap_agrees(self, pattern: str, text: str, k: int):
        exact = df.partial_levenshtein(pattern, text)
        capped = df.partial_levenshtein(pattern, text, max_distance=k)
        if exact <= k:
            assert capped == exact
        else:
            assert capped is None


class TestMatchProperties:
    """Properties of fuzzy_match decisions."""

    @given(word_strategy, sentence_strategy)
    @settings(max_examples=200)
    def test_perfect_score_iff_substring(self, query: str, candidate: str):
        result = df.fuzzy_match(query, candidate)
        assert (result.score == 1.0) == (query in candidate)

    @given(text_strategy, text_strategy)
    @settings(max_examples=200)
    def test_score_in_range(self, query: str, candidate: str):
        result = df.fuzzy_match(query, candidate)
        assert 0.0 <= result.score <= 1.0

    @given(
        text_strategy,
        text_strategy,
        st.floats(min_value=0.0, max_value=1.0),
        st.integers(min_value=0, max_value=6),
    )
    @settings(max_examples=200)
    def test_matched_respects_threshold(self, query, candidate, threshold, max_distance):
        config = df.FuzzyConfig(threshold=threshold, max_distance=max_distance)
        result = df.fuzzy_match(query, candidate, config)
        if result.matched:
            assert result.score >= threshold

    @given(word_strategy, sentence_strategy)
    @settings(max_examples=100)
    def test_accents_and_case_ignored(self, query: str, candidate: str):
        accented = candidate.replace("a", "á").replace("e", "É").replace("n", "ñ")
        assert df.fuzzy_match(query, accented) == df.fuzzy_match(query, candidate)


class TestRankingProperties:
    """Ordering and size guarantees of search and suggestions."""

    @given(word_strategy, st.lists(sentence_strategy, max_size=20))
    @settings(max_examples=100)
    def test_search_sorted_and_matched(self, query, names):
        items = [{"nombre": name} for name in names]
        results = df.fuzzy_search(query, items, ["nombre"])
        scores = [r.score for r in results]
        assert scores == sorted(scores, reverse=True)
        assert all(df.fuzzy_match(query, r.item["nombre"]).matched for r in results)
        assert len(results) == sum(df.fuzzy_match(query, n).matched for n in names)

    @given(word_strategy, st.lists(sentence_strategy, max_size=20), st.integers(0, 10))
    @settings(max_examples=100)
    def test_suggestions_bounded_and_unique(self, query, terms, max_results):
        result = df.generate_fuzzy_suggestions(query, terms, max_results)
        assert len(result) <= max_results
        assert len({df.fold_key(t) for t in result}) == len(result)
        assert all(t in terms for t in result)

    @given(word_strategy, st.lists(sentence_strategy, max_size=10))
    @settings(max_examples=50)
    def test_sharded_equals_sequential(self, query, names):
        items = [{"nombre": name} for name in names]
        expected = df.fuzzy_search(query, items, ["nombre"])
        assert df.batch.sharded_search(query, items, ["nombre"], shard_size=3) == expected
