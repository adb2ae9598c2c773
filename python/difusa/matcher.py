"""Approximate match decision between a query and one candidate string.

Matching tries the cheap paths first and only falls back to edit distance
when it has to:

1. Normalize both strings per the config (case, accents).
2. Equal strings, or a candidate containing the query, score 1.0. A user
   typing the correct fragment "tramite" should get a perfect match against
   "Trámite de Licencia" rather than be penalized for not typing the rest.
3. Whole-string Levenshtein distance, capped at ``config.max_distance``.
4. For candidates longer than the query, the same capped distance against
   word-aligned windows of the candidate: every run of whole words, plus,
   for queries of at least 4 characters, the query-length prefix starting
   at each word. This catches typos inside a fragment ("certificao" against
   the word "certificado" in "Certificado de Residencia") without letting
   a query match wherever a few of its letters happen to appear.

Every path is scored ``(longest - d) / longest``, the same formula as
:func:`~difusa.similarity.calculate_similarity`. If no path stays under the
cap the result is a non-match with score 0.0; otherwise the best path score
is compared with the threshold.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Iterator, Optional

from difusa._utils import coerce_text
from difusa.config import FuzzyConfig
from difusa.distance import _bounded
from difusa.normalize import normalize_for_config

# Frozen, so sharing one instance is safe
_DEFAULT_CONFIG = FuzzyConfig()

# Shorter queries are only compared with whole words
MIN_PREFIX_LENGTH = 4

_word_re = re.compile(r"\S+")


@dataclass(frozen=True)
class MatchResult:
    """
    Result of a single fuzzy match.

    Attributes:
        matched: Whether the candidate counts as a match under the config
        score: Similarity score (0.0-1.0) that produced the decision

    Truthiness follows ``matched``, so ``if fuzzy_match(q, c): ...`` works.
    """

    matched: bool
    score: float

    def __bool__(self) -> bool:
        return self.matched


NO_MATCH = MatchResult(matched=False, score=0.0)
EXACT_MATCH = MatchResult(matched=True, score=1.0)


def resolve_config(config: Optional[FuzzyConfig]) -> FuzzyConfig:
    """Return ``config``, or the default configuration when it is None."""
    return _DEFAULT_CONFIG if config is None else config


def normalize_query(query: Optional[str], config: FuzzyConfig) -> str:
    """Normalize a query for ``config`` and trim it; "" means nothing to search."""
    return normalize_for_config(coerce_text(query), config).strip()


def fuzzy_match(
    query: Optional[str],
    candidate: Any,
    config: Optional[FuzzyConfig] = None,
) -> MatchResult:
    """
    Decide whether ``query`` approximately matches ``candidate``.

    Args:
        query: What the user typed. Surrounding whitespace is ignored; an
            empty query never matches.
        candidate: Text to match against. ``None`` is treated as ``""`` and
            other non-string values are converted with ``str()``.
        config: Matching configuration (defaults to ``FuzzyConfig()``).

    Returns:
        MatchResult with the decision and the score behind it. The score is
        1.0 only for exact or substring matches after normalization.

    Example:
        >>> fuzzy_match("tramite", "trámite")
        MatchResult(matched=True, score=1.0)
        >>> fuzzy_match("cert", "Certificado de Residencia").score
        1.0
        >>> fuzzy_match("hello", "world", FuzzyConfig(threshold=0.8)).matched
        False
    """
    config = resolve_config(config)
    normalized_query = normalize_query(query, config)
    if not normalized_query:
        return NO_MATCH
    normalized_candidate = normalize_for_config(coerce_text(candidate), config)
    return match_normalized(normalized_query, normalized_candidate, config)


def match_normalized(query: str, candidate: str, config: FuzzyConfig) -> MatchResult:
    """Match two strings that are already normalized for ``config``.

    Lets callers that compare one query against many candidates normalize
    the query once. ``query`` must be non-empty.
    """
    if query == candidate or query in candidate:
        return EXACT_MATCH

    best = _capped_score(query, candidate, config.max_distance)

    if len(candidate) > len(query):
        for window in _word_windows(len(query), candidate, config.max_distance):
            score = _capped_score(query, window, config.max_distance)
            if score is not None and (best is None or score > best):
                best = score

    if best is None:
        return NO_MATCH
    return MatchResult(matched=best >= config.threshold, score=best)


def _capped_score(query: str, text: str, max_distance: int) -> Optional[float]:
    distance = _bounded(query, text, max_distance)
    if distance is None:
        return None
    longest = max(len(query), len(text))
    return (longest - distance) / longest


def _word_windows(query_length: int, candidate: str, max_distance: int) -> Iterator[str]:
    """Yield the word-aligned slices of ``candidate`` a query could be a typo of."""
    words = [(m.start(), m.end()) for m in _word_re.finditer(candidate)]
    longest = query_length + max_distance
    for i, (start, _) in enumerate(words):
        if query_length >= MIN_PREFIX_LENGTH:
            yield candidate[start : start + query_length]
        for _, end in words[i:]:
            # Longer runs can only be further away
            if end - start > longest:
                break
            yield candidate[start:end]


__all__ = [
    "MatchResult",
    "NO_MATCH",
    "EXACT_MATCH",
    "fuzzy_match",
    "match_normalized",
    "normalize_query",
    "resolve_config",
]
