"""Enums for difusa API."""

from enum import Enum


class NormalizationMode(str, Enum):
    """String normalization modes.

    Used by normalization utilities to control how strings are preprocessed
    before comparison.

    Example:
        >>> from difusa import normalize_string, NormalizationMode
        >>> normalize_string("  Trámite   de Licencia. ", NormalizationMode.SEARCH)
        'tramite de licencia'
    """

    LOWERCASE = "lowercase"
    """Convert to lowercase only"""

    STRIP_ACCENTS = "strip_accents"
    """Remove combining diacritics (á -> a, ñ -> n, ç -> c), keep case"""

    FOLD = "fold"
    """Lowercase + strip accents, the default matching normalization"""

    SEARCH = "search"
    """Fold + trim + collapse whitespace + remove punctuation"""


class SuggestionSource(str, Enum):
    """Record fields that feed enhanced search suggestions.

    The declaration order is also the tie-break order when two candidate
    suggestions end up with the same score.
    """

    NAME = "name"
    """Primary record name, suggested whole"""

    DESCRIPTION = "description"
    """Free-text description, suggested word by word"""

    TAG = "tag"
    """Keyword tags, each suggested on its own"""


__all__ = ["NormalizationMode", "SuggestionSource"]
