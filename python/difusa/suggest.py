"""Ranked, deduplicated search suggestions.

Two entry points:

- :func:`generate_fuzzy_suggestions` ranks a flat list of candidate terms.
- :func:`enhanced_search_suggestions` draws candidates from three fields of
  each record (name, description words, tags), each with its own minimum
  score, and ranks them together.

Both deduplicate case- and accent-insensitively ("Licencia" and "licencia"
count once, the best ranked spelling wins) and truncate to ``max_results``.

Example:
    >>> from difusa import generate_fuzzy_suggestions
    >>> terms = ["Licencia de Construcción", "licencia de construccion", "PQRS"]
    >>> generate_fuzzy_suggestions("licensia", terms, max_results=5)
    ['Licencia de Construcción']
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Iterable, Iterator, List, Optional, Tuple

from difusa._utils import coerce_text
from difusa.config import FuzzyConfig
from difusa.enums import SuggestionSource
from difusa.matcher import match_normalized, normalize_query, resolve_config
from difusa.normalize import fold_key, normalize_for_config
from difusa.search import Field, FieldSpec, as_field

logger = logging.getLogger(__name__)

DEFAULT_MAX_RESULTS = 8

# Queries shorter than this (after normalization) get no enhanced suggestions
MIN_QUERY_LENGTH = 2

# Description words this short are never suggested
MIN_WORD_LENGTH = 4

# A candidate must score strictly above its source floor
SOURCE_MIN_SCORES = MappingProxyType(
    {
        SuggestionSource.NAME: 0.6,
        SuggestionSource.TAG: 0.6,
        SuggestionSource.DESCRIPTION: 0.7,
    }
)

_SOURCE_RANK = {source: rank for rank, source in enumerate(SuggestionSource)}

# Stripped from both ends of description words
_WORD_PUNCTUATION = ".,;:!?¡¿()[]{}\"'«»-"


@dataclass(frozen=True)
class Suggestion:
    """A ranked suggestion with the score and source that produced it."""

    text: str
    score: float
    source: Optional[SuggestionSource] = None


# (text, source, input position)
_Candidate = Tuple[str, Optional[SuggestionSource], int]


def _rank(
    query: str,
    candidates: Iterable[_Candidate],
    max_results: int,
    config: FuzzyConfig,
) -> List[Suggestion]:
    scored = []
    for text, source, position in candidates:
        if not text:
            continue
        result = match_normalized(query, normalize_for_config(text, config), config)
        if not result.matched:
            continue
        if source is not None and result.score <= SOURCE_MIN_SCORES[source]:
            continue
        source_rank = _SOURCE_RANK[source] if source is not None else 0
        scored.append((-result.score, source_rank, position, Suggestion(text, result.score, source)))

    scored.sort(key=lambda entry: entry[:3])

    suggestions: List[Suggestion] = []
    seen = set()
    for *_, suggestion in scored:
        key = fold_key(suggestion.text)
        if key in seen:
            continue
        seen.add(key)
        suggestions.append(suggestion)
        if len(suggestions) >= max_results:
            break
    return suggestions


def rank_suggestions(
    query: Optional[str],
    terms: Iterable[Optional[str]],
    max_results: int = DEFAULT_MAX_RESULTS,
    config: Optional[FuzzyConfig] = None,
) -> List[Suggestion]:
    """Like :func:`generate_fuzzy_suggestions`, but keeps the scores."""
    config = resolve_config(config)
    normalized_query = normalize_query(query, config)
    if not normalized_query or terms is None or max_results <= 0:
        return []
    candidates = (
        (coerce_text(term), None, position)
        for position, term in enumerate(terms)
        if term is not None
    )
    return _rank(normalized_query, candidates, max_results, config)


def generate_fuzzy_suggestions(
    query: Optional[str],
    terms: Iterable[Optional[str]],
    max_results: int = DEFAULT_MAX_RESULTS,
    config: Optional[FuzzyConfig] = None,
) -> List[str]:
    """
    Suggest the terms that best match a (possibly misspelled) query.

    Args:
        query: Search text. An empty query returns no suggestions, there is
            no "browse all" behavior.
        terms: Candidate terms. ``None`` entries are skipped and ``None``
            itself counts as no terms.
        max_results: Maximum number of suggestions; <= 0 returns [].
        config: Matching configuration (defaults to ``FuzzyConfig()``)

    Returns:
        Matching terms ordered by score descending (ties in input order),
        deduplicated case- and accent-insensitively, at most max_results long.

    Example:
        >>> generate_fuzzy_suggestions("lic", ["Licencia", "licencia"], 5)
        ['Licencia']
    """
    return [s.text for s in rank_suggestions(query, terms, max_results, config)]


def _tag_values(raw: Any) -> Iterator[str]:
    if raw is None:
        return
    if isinstance(raw, (list, tuple, set, frozenset)):
        for tag in raw:
            text = coerce_text(tag).strip()
            if text:
                yield text
    else:
        text = coerce_text(raw).strip()
        if text:
            yield text


def _description_words(description: str) -> Iterator[str]:
    for word in description.split():
        word = word.strip(_WORD_PUNCTUATION)
        if len(word) >= MIN_WORD_LENGTH:
            yield word


def _record_candidates(
    items: List[Any], name: Field, description: Field, tags: Field
) -> Iterator[_Candidate]:
    position = 0
    for item in items:
        yield name(item).strip(), SuggestionSource.NAME, position
        position += 1
    for item in items:
        for word in _description_words(description(item)):
            yield word, SuggestionSource.DESCRIPTION, position
            position += 1
    for item in items:
        for tag in _tag_values(tags.getter(item)):
            yield tag, SuggestionSource.TAG, position
            position += 1


def enhanced_search_suggestions(
    query: Optional[str],
    items: Iterable[Any],
    max_results: int = DEFAULT_MAX_RESULTS,
    *,
    name: FieldSpec = Field.key("nombre"),
    description: FieldSpec = Field.key("descripcion"),
    tags: FieldSpec = Field.key("tags"),
    config: Optional[FuzzyConfig] = None,
) -> List[str]:
    """
    Suggest names, tags and description words from a set of records.

    Candidates come from three sources per record:

    - the primary name, suggested whole (must score above 0.6)
    - each description word longer than 3 characters (above 0.7)
    - each tag or keyword (above 0.6)

    All candidates are ranked together by score. Ties go to names, then
    description words, then tags, then input order. The same term found in
    several sources is suggested once, at its best score.

    Args:
        query: Search text. Queries shorter than 2 characters after
            normalization return [] to avoid noise on the first keystroke.
        items: Records to draw suggestions from (``None`` gives [])
        max_results: Maximum number of suggestions; <= 0 returns [].
        name: Accessor for the primary name (default: the "nombre" key)
        description: Accessor for the description (default: "descripcion")
        tags: Accessor for the tag list (default: "tags"). May return a
            list of strings or a single string.
        config: Matching configuration (defaults to ``FuzzyConfig()``)

    Returns:
        Ranked, deduplicated suggestion strings.

    Example:
        >>> servicios = [{
        ...     "nombre": "Licencia de Construcción",
        ...     "descripcion": "Permiso para realizar obras de construcción",
        ...     "tags": ["licencia", "construcción", "permiso", "obras"],
        ... }]
        >>> enhanced_search_suggestions("construccion", servicios, 5)
        ['Licencia de Construcción', 'construcción']
    """
    config = resolve_config(config)
    normalized_query = normalize_query(query, config)
    if len(normalized_query) < MIN_QUERY_LENGTH or items is None or max_results <= 0:
        return []

    records = list(items)
    candidates = _record_candidates(
        records, as_field(name), as_field(description), as_field(tags)
    )
    suggestions = _rank(normalized_query, candidates, max_results, config)
    logger.debug(
        "enhanced_search_suggestions query=%r records=%d suggestions=%d",
        normalized_query,
        len(records),
        len(suggestions),
    )
    return [s.text for s in suggestions]


__all__ = [
    "DEFAULT_MAX_RESULTS",
    "MIN_QUERY_LENGTH",
    "MIN_WORD_LENGTH",
    "SOURCE_MIN_SCORES",
    "Suggestion",
    "enhanced_search_suggestions",
    "generate_fuzzy_suggestions",
    "rank_suggestions",
]
