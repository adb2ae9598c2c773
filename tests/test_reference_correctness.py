"""Reference correctness tests comparing difusa against rapidfuzz and jellyfish.

These tests verify that difusa's pure-Python edit distance produces the
same results as well-known reference implementations.
"""

import hypothesis.strategies as st
import pytest
from hypothesis import HealthCheck, assume, given, settings

import difusa as df

# Import reference implementations
try:
    import jellyfish

    HAS_JELLYFISH = True
except ImportError:
    HAS_JELLYFISH = False

try:
    from rapidfuzz.distance import Levenshtein as RFLevenshtein

    HAS_RAPIDFUZZ = True
except ImportError:
    HAS_RAPIDFUZZ = False


# Strategy for ASCII strings (avoiding unicode edge cases in reference comparison)
ascii_text = st.text(
    alphabet=st.characters(min_codepoint=32, max_codepoint=126), min_size=0, max_size=50
)

# Spanish-looking text, accents included
spanish_text = st.text(alphabet="abcdeilmnorstuáéíóúñü ", min_size=0, max_size=30)


@pytest.mark.skipif(not HAS_JELLYFISH, reason="jellyfish not installed")
class TestLevenshteinJellyfish:
    """Test Levenshtein distance against jellyfish reference."""

    @given(ascii_text, ascii_text)
    @settings(max_examples=200, suppress_health_check=[HealthCheck.too_slow])
    def test_levenshtein_matches_jellyfish(self, a: str, b: str):
        """Verify Levenshtein distance matches jellyfish implementation."""
        expected = jellyfish.levenshtein_distance(a, b)
        actual = df.levenshtein_distance(a, b)
        assert actual == expected, f"Mismatch for ({a!r}, {b!r}): got {actual}, expected {expected}"

    @pytest.mark.parametrize(
        "a,b",
        [
            ("certificado", "certificao"),
            ("licencia", "licensia"),
            ("construccion", "construcion"),
            ("estratificacion", "estratifcacion"),
        ],
    )
    def test_spanish_typos(self, a: str, b: str):
        assert df.levenshtein_distance(a, b) == jellyfish.levenshtein_distance(a, b)


@pytest.mark.skipif(not HAS_RAPIDFUZZ, reason="rapidfuzz not installed")
class TestLevenshteinRapidfuzz:
    """Test distance, capped distance and similarity against rapidfuzz."""

    @given(spanish_text, spanish_text)
    @settings(max_examples=200, suppress_health_check=[HealthCheck.too_slow])
    def test_distance_matches_rapidfuzz(self, a: str, b: str):
        assert df.levenshtein_distance(a, b) == RFLevenshtein.distance(a, b)

    @given(spanish_text, spanish_text, st.integers(min_value=0, max_value=6))
    @settings(max_examples=200, suppress_health_check=[HealthCheck.too_slow])
    def test_bounded_matches_score_cutoff(self, a: str, b: str, k: int):
        # rapidfuzz reports k + 1 when the cutoff is exceeded
        reference = RFLevenshtein.distance(a, b, score_cutoff=k)
        bounded = df.levenshtein_bounded(a, b, k)
        if reference > k:
            assert bounded is None
        else:
            assert bounded == reference

    @given(spanish_text, spanish_text)
    @settings(max_examples=200, suppress_health_check=[HealthCheck.too_slow])
    def test_similarity_matches_normalized_similarity(self, a: str, b: str):
        assume(a or b)
        expected = RFLevenshtein.normalized_similarity(a, b)
        assert df.calculate_similarity(a, b) == pytest.approx(expected)

    @given(spanish_text, spanish_text)
    @settings(max_examples=100, suppress_health_check=[HealthCheck.too_slow])
    def test_fold_matches_preprocessed_reference(self, a: str, b: str):
        expected = RFLevenshtein.distance(df.normalize_text(a), df.normalize_text(b))
        assert df.levenshtein_distance(a, b, normalize="fold") == expected
