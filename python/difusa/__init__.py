"""
difusa - Typo-tolerant search and suggestions for Spanish text

A small, dependency-light engine for search-as-you-type over short,
human-authored records (service names, descriptions, keyword tags). It
tolerates typos and ignores accents, so "certificao" finds
"Certificado de Residencia" and "tramite" finds "Trámite".

Every function is a pure, synchronous computation over its arguments: no
state is kept between calls and no I/O happens, so all of it is safe to
call from several threads at once.

Example usage:
    >>> import difusa as df

    # Edit distance and similarity
    >>> df.levenshtein_distance("hello", "hallo")
    1
    >>> df.calculate_similarity("hello", "helo")
    0.8

    # Single match decision
    >>> df.fuzzy_match("tramite", "Trámite de Licencia")
    MatchResult(matched=True, score=1.0)

    # Search records across several fields
    >>> servicios = [
    ...     {"nombre": "Certificado de Residencia", "descripcion": "Documento oficial"},
    ...     {"nombre": "Licencia de Construcción", "descripcion": "Permiso para obras"},
    ... ]
    >>> results = df.fuzzy_search(
    ...     "certificao", servicios, [df.Field.key("nombre"), df.Field.key("descripcion")]
    ... )
    >>> [(r.item["nombre"], round(r.score, 2)) for r in results]
    [('Certificado de Residencia', 0.91)]

    # Ranked, deduplicated suggestions
    >>> df.generate_fuzzy_suggestions("lic", ["Licencia", "licencia", "PQRS"], max_results=5)
    ['Licencia']
"""

import logging
from importlib.metadata import version as _get_version

# Register the .fuzzy expression namespace
import difusa.expr  # noqa: F401
from difusa import batch, polars_ext
from difusa.config import DEFAULT_MAX_DISTANCE, DEFAULT_THRESHOLD, FuzzyConfig
from difusa.distance import levenshtein_bounded, levenshtein_distance, partial_levenshtein
from difusa.enums import NormalizationMode, SuggestionSource
from difusa.exceptions import DifusaError, InvalidConfiguration, ValidationError
from difusa.matcher import MatchResult, fuzzy_match
from difusa.normalize import (
    fold_key,
    normalize_for_search,
    normalize_pair,
    normalize_string,
    normalize_text,
    search_matches,
    strip_accents,
)
from difusa.polars_ext import match_series, search_dataframe, suggest_from_series
from difusa.search import Field, FieldMatch, SearchResult, fuzzy_search
from difusa.similarity import calculate_similarity
from difusa.suggest import (
    SOURCE_MIN_SCORES,
    Suggestion,
    enhanced_search_suggestions,
    generate_fuzzy_suggestions,
    rank_suggestions,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = _get_version("difusa")
__all__ = [
    # Version
    "__version__",
    # Exceptions
    "DifusaError",
    "ValidationError",
    "InvalidConfiguration",
    # Configuration
    "FuzzyConfig",
    "DEFAULT_THRESHOLD",
    "DEFAULT_MAX_DISTANCE",
    # Result types
    "MatchResult",
    "SearchResult",
    "FieldMatch",
    "Suggestion",
    # Field accessors
    "Field",
    # Enums
    "NormalizationMode",
    "SuggestionSource",
    # Distance / similarity
    "levenshtein_distance",
    "levenshtein_bounded",
    "partial_levenshtein",
    "calculate_similarity",
    # Matching, search and suggestions
    "fuzzy_match",
    "fuzzy_search",
    "generate_fuzzy_suggestions",
    "rank_suggestions",
    "enhanced_search_suggestions",
    "SOURCE_MIN_SCORES",
    # Normalization
    "strip_accents",
    "normalize_text",
    "normalize_for_search",
    "normalize_string",
    "normalize_pair",
    "fold_key",
    "search_matches",
    # Polars integration
    "search_dataframe",
    "match_series",
    "suggest_from_series",
    # Submodules
    "batch",
    "polars_ext",
    # camelCase aliases
    "levenshteinDistance",
    "calculateSimilarity",
    "fuzzyMatch",
    "fuzzySearch",
    "generateFuzzySuggestions",
    "enhancedSearchSuggestions",
    "searchMatches",
]


# Convenience aliases
edit_distance = levenshtein_distance
similarity = calculate_similarity

# camelCase names used by the web front end
levenshteinDistance = levenshtein_distance
calculateSimilarity = calculate_similarity
fuzzyMatch = fuzzy_match
fuzzySearch = fuzzy_search
generateFuzzySuggestions = generate_fuzzy_suggestions
enhancedSearchSuggestions = enhanced_search_suggestions
searchMatches = search_matches
