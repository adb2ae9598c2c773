"""Length-normalized similarity derived from edit distance."""

from __future__ import annotations

from typing import Optional, Union

from difusa.distance import _prepare, levenshtein_distance
from difusa.enums import NormalizationMode


def calculate_similarity(
    a: Optional[str],
    b: Optional[str],
    normalize: Optional[Union[str, NormalizationMode]] = None,
) -> float:
    """
    Compute Levenshtein similarity (0.0 to 1.0).

    Defined as ``1 - distance / max(len(a), len(b))``. Two empty strings are
    identical (1.0); an empty string against a non-empty one scores 0.0.

    The measure is relative to length on purpose: one edit in a 4-character
    code costs 0.25, while the same edit in a 20-character title costs
    0.05. Short names need near-exact input, long descriptions tolerate
    more noise.

    Args:
        a: First string
        b: Second string
        normalize: Optional normalization mode applied to both strings first

    Example:
        >>> calculate_similarity("hello", "helo")
        0.8
        >>> calculate_similarity("test", "best")
        0.75
    """
    a, b = _prepare(a, b, normalize)
    max_length = max(len(a), len(b))
    if max_length == 0:
        return 1.0
    return (max_length - levenshtein_distance(a, b)) / max_length


__all__ = ["calculate_similarity"]
