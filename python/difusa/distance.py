"""Levenshtein edit distance.

All functions work on Python ``str`` code points and use a rolling two-row
dynamic program, so memory is O(min(m, n)) while time is O(m*n). Inputs of
any length are accepted; callers are expected to bound input size upstream.

Example:
    >>> from difusa import levenshtein_bounded, levenshtein_distance, partial_levenshtein
    >>> levenshtein_distance("certificado", "certificao")
    1
    >>> levenshtein_bounded("abcdef", "ghijkl", max_distance=3) is None
    True
    >>> partial_levenshtein("licensia", "Licencia de Construcción".lower())
    1
"""

from __future__ import annotations

from typing import List, Optional, Tuple, Union

from difusa._utils import check_non_negative_int
from difusa.enums import NormalizationMode
from difusa.normalize import normalize_pair


def _prepare(
    a: Optional[str], b: Optional[str], normalize: Optional[Union[str, NormalizationMode]]
) -> Tuple[str, str]:
    a = a or ""
    b = b or ""
    if normalize is not None:
        a, b = normalize_pair(a, b, normalize)
    return a, b


def _trim_affixes(a: str, b: str) -> Tuple[str, str]:
    """Drop the common prefix and suffix, which never change the distance."""
    start = 0
    limit = min(len(a), len(b))
    while start < limit and a[start] == b[start]:
        start += 1
    end_a, end_b = len(a), len(b)
    while end_a > start and end_b > start and a[end_a - 1] == b[end_b - 1]:
        end_a -= 1
        end_b -= 1
    return a[start:end_a], b[start:end_b]


def _next_row(previous: List[int], char: str, other: str, first: int) -> List[int]:
    """Compute one DP row for ``char`` against every character of ``other``."""
    current = [first]
    left = first
    for j, other_char in enumerate(other):
        value = previous[j] if char == other_char else previous[j] + 1
        up = previous[j + 1] + 1
        if up < value:
            value = up
        if left + 1 < value:
            value = left + 1
        current.append(value)
        left = value
    return current


def levenshtein_distance(
    a: Optional[str],
    b: Optional[str],
    normalize: Optional[Union[str, NormalizationMode]] = None,
) -> int:
    """
    Compute Levenshtein (edit) distance between two strings.

    The distance is the minimum number of single-character insertions,
    deletions or substitutions needed to turn ``a`` into ``b``. It is
    symmetric, zero only for equal strings, and satisfies the triangle
    inequality.

    Args:
        a: First string (``None`` is treated as ``""``)
        b: Second string (``None`` is treated as ``""``)
        normalize: Optional normalization mode applied to both strings first:
                  "lowercase", "strip_accents", "fold", "search"

    Returns:
        Non-negative edit distance.

    Example:
        >>> levenshtein_distance("hello", "hallo")
        1
        >>> levenshtein_distance("Trámite", "tramite", normalize="fold")
        0
    """
    a, b = _prepare(a, b, normalize)
    if a == b:
        return 0
    a, b = _trim_affixes(a, b)
    # Keep the row over the shorter string
    if len(a) < len(b):
        a, b = b, a
    if not b:
        return len(a)

    previous = list(range(len(b) + 1))
    for i, char in enumerate(a, 1):
        previous = _next_row(previous, char, b, i)
    return previous[-1]


def levenshtein_bounded(
    a: Optional[str],
    b: Optional[str],
    max_distance: int,
    normalize: Optional[Union[str, NormalizationMode]] = None,
) -> Optional[int]:
    """
    Levenshtein distance with early termination.

    Stops as soon as the distance is known to exceed ``max_distance``: the
    length difference is a lower bound checked up front, and the minimum of
    each DP row is a lower bound checked after every row.

    Args:
        a: First string
        b: Second string
        max_distance: Largest distance worth computing exactly
        normalize: Optional normalization mode applied to both strings first

    Returns:
        The distance if it is <= max_distance, otherwise None.

    Raises:
        ValidationError: If max_distance is negative or not an integer.
    """
    check_non_negative_int("max_distance", max_distance)
    a, b = _prepare(a, b, normalize)
    return _bounded(a, b, max_distance)


def _bounded(a: str, b: str, max_distance: int) -> Optional[int]:
    if a == b:
        return 0
    if abs(len(a) - len(b)) > max_distance:
        return None
    a, b = _trim_affixes(a, b)
    if len(a) < len(b):
        a, b = b, a
    if not b:
        return len(a) if len(a) <= max_distance else None

    previous = list(range(len(b) + 1))
    for i, char in enumerate(a, 1):
        previous = _next_row(previous, char, b, i)
        if min(previous) > max_distance:
            return None
    distance = previous[-1]
    return distance if distance <= max_distance else None


def partial_levenshtein(
    pattern: Optional[str],
    text: Optional[str],
    max_distance: Optional[int] = None,
) -> Optional[int]:
    """
    Smallest edit distance between ``pattern`` and any substring of ``text``.

    This is approximate substring search: a typo'd fragment such as
    "certificao" is one edit away from the "certificad" inside
    "certificado de residencia", even though the whole strings are far
    apart. The DP starts every alignment for free at any position of
    ``text`` and takes the best value of the last row.

    Args:
        pattern: The fragment to look for
        text: The text to look in
        max_distance: Optional cap; when given, returns None as soon as the
            best alignment is known to cost more.

    Returns:
        The best alignment cost (0 when pattern is a substring of text), or
        None if it exceeds max_distance.

    Raises:
        ValidationError: If max_distance is negative or not an integer.
    """
    if max_distance is not None:
        check_non_negative_int("max_distance", max_distance)
    return _partial(pattern or "", text or "", max_distance)


def _partial(pattern: str, text: str, max_distance: Optional[int]) -> Optional[int]:
    if not pattern or pattern in text:
        return 0

    previous = [0] * (len(text) + 1)
    for i, char in enumerate(pattern, 1):
        previous = _next_row(previous, char, text, i)
        if max_distance is not None and min(previous) > max_distance:
            return None
    best = min(previous)
    if max_distance is not None and best > max_distance:
        return None
    return best


__all__ = ["levenshtein_distance", "levenshtein_bounded", "partial_levenshtein"]
