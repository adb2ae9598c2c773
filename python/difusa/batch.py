"""Batch operations API for difusa.

List-based helpers for matching one query against many strings, plus a
sharded record search for large collections.

Every difusa operation is a pure function of its inputs, so collections can
be split into contiguous shards, searched independently and merged back.
:func:`sharded_search` does exactly that on a thread pool and returns the
same list as :func:`~difusa.search.fuzzy_search`.

Example usage:
    >>> import difusa.batch as batch

    # Match a query against every string, in input order
    >>> [r.matched for r in batch.match_all(["Trámite", "Permiso", "tramites"], "tramite")]
    [True, False, True]

    # Top N matches with scores
    >>> batch.best_matches(["licencia", "licensia", "PQRS"], "licencia", limit=2)
    [('licencia', 1.0), ('licensia', 0.875)]

    # Pairwise similarity between aligned lists
    >>> batch.pairwise(["hello", "test"], ["helo", "best"])
    [0.8, 0.75]
"""

from __future__ import annotations

import heapq
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING, Any, Iterable, List, Optional, Sequence, Tuple, TypeVar, Union

from difusa.config import FuzzyConfig
from difusa.exceptions import ValidationError
from difusa.matcher import (
    NO_MATCH,
    MatchResult,
    match_normalized,
    normalize_query,
    resolve_config,
)
from difusa.normalize import normalize_for_config
from difusa.search import FieldSpec, SearchResult, as_field, search_prepared
from difusa.similarity import calculate_similarity

if TYPE_CHECKING:
    from difusa.enums import NormalizationMode

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_SHARD_SIZE = 256

__all__ = [
    "match_all",
    "best_matches",
    "pairwise",
    "sharded_search",
    "DEFAULT_SHARD_SIZE",
]


def match_all(
    strings: Iterable[Optional[str]],
    query: Optional[str],
    config: Optional[FuzzyConfig] = None,
) -> List[MatchResult]:
    """Match a query against every string.

    The query is normalized once. Results are in the same order as the
    input; ``None`` strings and an empty query give non-matches.

    Args:
        strings: Candidate strings. ``None`` is treated as an empty list.
        query: The query string to match.
        config: Matching configuration (defaults to ``FuzzyConfig()``).

    Returns:
        One MatchResult per input string.
    """
    if strings is None:
        return []
    config = resolve_config(config)
    normalized_query = normalize_query(query, config)
    if not normalized_query:
        return [NO_MATCH for _ in strings]
    return [
        NO_MATCH
        if s is None
        else match_normalized(normalized_query, normalize_for_config(s, config), config)
        for s in strings
    ]


def best_matches(
    strings: Sequence[Optional[str]],
    query: Optional[str],
    limit: int = 5,
    config: Optional[FuzzyConfig] = None,
) -> List[Tuple[str, float]]:
    """Find the top N matching strings for a query.

    Unlike :func:`~difusa.suggest.generate_fuzzy_suggestions` this does not
    deduplicate, and it reports scores.

    Args:
        strings: List of strings to search.
        query: The query string to match.
        limit: Maximum number of results to return (default: 5).
        config: Matching configuration (defaults to ``FuzzyConfig()``).

    Returns:
        ``(string, score)`` pairs sorted by score descending, ties in input
        order.
    """
    if strings is None or limit <= 0:
        return []
    results = match_all(strings, query, config)
    ranked = [
        (text, result.score)
        for text, result in zip(strings, results)
        if result.matched and text is not None
    ]
    ranked.sort(key=lambda pair: -pair[1])
    return ranked[:limit]


def pairwise(
    left: Sequence[Optional[str]],
    right: Sequence[Optional[str]],
    normalize: Optional[Union[str, "NormalizationMode"]] = None,
) -> List[float]:
    """Compute pairwise similarity between two equal-length lists.

    Args:
        left: First list of strings.
        right: Second list of strings (must be same length as left).
        normalize: Optional normalization mode applied to each pair.

    Returns:
        List of similarity scores (0.0 to 1.0), one for each pair.

    Raises:
        ValidationError: If left and right have different lengths.
    """
    if len(left) != len(right):
        raise ValidationError(
            f"left and right must have equal length, got {len(left)} and {len(right)}"
        )
    return [calculate_similarity(a, b, normalize=normalize) for a, b in zip(left, right)]


def sharded_search(
    query: Optional[str],
    items: Sequence[T],
    fields: Sequence[FieldSpec],
    config: Optional[FuzzyConfig] = None,
    shard_size: int = DEFAULT_SHARD_SIZE,
    max_workers: Optional[int] = None,
) -> List[SearchResult[T]]:
    """Fuzzy search a large collection shard by shard.

    The collection is cut into contiguous shards of ``shard_size`` records,
    each shard is searched on a thread pool, and the per-shard sorted
    results are merged with a stable k-way merge. Because shards are
    contiguous and ``heapq.merge`` prefers earlier inputs on ties, the
    output is identical to ``fuzzy_search(query, items, fields, config)``.

    Args:
        query: Search text. An empty query returns no results.
        items: Records to search (must support slicing and len()). ``None``
            is treated as an empty collection.
        fields: Field accessors (Field objects, callables or key names).
        config: Matching configuration (defaults to ``FuzzyConfig()``).
        shard_size: Records per shard (default: 256).
        max_workers: Thread pool size (default: the executor's default).

    Returns:
        List of SearchResult sorted by score descending, ties in input order.

    Raises:
        ValidationError: If shard_size is not a positive integer.
    """
    if isinstance(shard_size, bool) or not isinstance(shard_size, int) or shard_size <= 0:
        raise ValidationError(f"shard_size must be a positive integer, got {shard_size!r}")

    config = resolve_config(config)
    normalized_query = normalize_query(query, config)
    if not normalized_query or items is None or len(items) == 0 or not fields:
        return []

    accessors = [as_field(f) for f in fields]
    shards = [items[start : start + shard_size] for start in range(0, len(items), shard_size)]

    def search_shard(shard: Sequence[Any]) -> List[SearchResult[Any]]:
        return search_prepared(normalized_query, shard, accessors, config)

    if len(shards) == 1:
        partials = [search_shard(shards[0])]
    else:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            partials = list(executor.map(search_shard, shards))

    logger.debug(
        "sharded_search query=%r items=%d shards=%d", normalized_query, len(items), len(shards)
    )
    return list(heapq.merge(*partials, key=lambda result: -result.score))
