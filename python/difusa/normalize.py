"""Text normalization for Spanish search.

Accented and unaccented spellings must compare equal, so that a user typing
"tramite" finds "Trámite de Licencia". Accent stripping decomposes text with
Unicode NFD and drops the combining marks, which also folds ``ñ`` to ``n``
and ``ç`` to ``c``.

Example:
    >>> from difusa.normalize import normalize_text, normalize_for_search
    >>> normalize_text("Estratificación Socioeconómica")
    'estratificacion socioeconomica'
    >>> normalize_for_search("  Certificación   de Residencia!  ")
    'certificacion de residencia'
"""

from __future__ import annotations

import re
import unicodedata
from typing import TYPE_CHECKING, Optional, Tuple, Union

from difusa._utils import normalize_mode
from difusa.enums import NormalizationMode

if TYPE_CHECKING:
    from difusa.config import FuzzyConfig

_whitespace_re = re.compile(r"\s+")
_punctuation_re = re.compile(r"[^\w\s]")


def strip_accents(text: Optional[str]) -> str:
    """Remove combining diacritical marks, keeping case."""
    if not text:
        return ""
    decomposed = unicodedata.normalize("NFD", text)
    stripped = "".join(c for c in decomposed if not unicodedata.combining(c))
    # Recompose whatever is left (e.g. Hangul) so lengths stay stable
    return unicodedata.normalize("NFC", stripped)


def normalize_text(text: Optional[str]) -> str:
    """Lowercase and strip accents: ``'Trámite'`` -> ``'tramite'``."""
    return strip_accents(text).lower() if text else ""


def normalize_for_search(text: Optional[str]) -> str:
    """Fold text and clean it up for search.

    On top of :func:`normalize_text` this trims the ends, collapses runs of
    whitespace to a single space and drops punctuation.
    """
    if not text:
        return ""
    folded = _punctuation_re.sub("", normalize_text(text))
    return _whitespace_re.sub(" ", folded).strip()


def normalize_string(
    text: Optional[str], mode: Union[str, NormalizationMode] = NormalizationMode.FOLD
) -> str:
    """Normalize text with the given mode.

    Args:
        text: Input text. ``None`` is treated as the empty string.
        mode: Normalization mode (string or NormalizationMode enum). Options:
            - "lowercase": Convert to lowercase
            - "strip_accents": Remove diacritics, keep case
            - "fold": Lowercase + strip accents (default)
            - "search": Fold, trim, collapse whitespace, drop punctuation

    Returns:
        The normalized string.

    Raises:
        ValidationError: If the mode is not recognized.
    """
    mode = normalize_mode(mode)
    if not text:
        return ""
    if mode is NormalizationMode.LOWERCASE:
        return text.lower()
    if mode is NormalizationMode.STRIP_ACCENTS:
        return strip_accents(text)
    if mode is NormalizationMode.FOLD:
        return normalize_text(text)
    return normalize_for_search(text)


def normalize_pair(
    a: Optional[str], b: Optional[str], mode: Union[str, NormalizationMode] = NormalizationMode.FOLD
) -> Tuple[str, str]:
    """Normalize two strings with the same mode."""
    mode = normalize_mode(mode)
    return normalize_string(a, mode), normalize_string(b, mode)


def normalize_for_config(text: Optional[str], config: "FuzzyConfig") -> str:
    """Apply the normalization a FuzzyConfig asks for.

    Lowercases unless ``config.case_sensitive`` and strips accents unless
    ``config.normalize_accents`` is False.
    """
    if not text:
        return ""
    if not config.case_sensitive:
        text = text.lower()
    if config.normalize_accents:
        text = strip_accents(text)
    return text


def fold_key(text: Optional[str]) -> str:
    """Case- and accent-insensitive key used to deduplicate suggestions."""
    return normalize_text(text).strip()


# Fuzzy search_matches allows this many edits per query character
SEARCH_TYPO_RATIO = 0.2


def search_matches(
    query: Optional[str],
    target: Optional[str],
    *,
    case_sensitive: bool = False,
    whole_word: bool = False,
    fuzzy: bool = False,
) -> bool:
    """
    Quick yes/no check of whether a query occurs in a target text.

    Both strings are normalized with :func:`normalize_for_search` (accents
    only are stripped when ``case_sensitive``), then compared by substring.

    Args:
        query: Search text. Empty or blank never matches.
        target: Text to look in. Empty never matches.
        case_sensitive: Keep case when comparing.
        whole_word: Only match the query as whole words of the target
            (``"art"`` does not match ``"Carta de Residencia"``).
        fuzzy: Compare the whole strings, allowing one edit per five query
            characters instead of requiring a substring.

    Example:
        >>> search_matches("tramite", "Trámites y Servicios")
        True
        >>> search_matches("art", "Carta de Residencia", whole_word=True)
        False
    """
    if not query or not target:
        return False
    if case_sensitive:
        query, target = strip_accents(query).strip(), strip_accents(target)
    else:
        query, target = normalize_for_search(query), normalize_for_search(target)
    if not query:
        return False

    if whole_word:
        flags = 0 if case_sensitive else re.IGNORECASE
        return re.search(rf"\b{re.escape(query)}\b", target, flags) is not None

    if fuzzy:
        # distance imports this module
        from difusa.distance import levenshtein_bounded

        max_distance = int(len(query) * SEARCH_TYPO_RATIO)
        return levenshtein_bounded(query, target, max_distance) is not None

    return query in target


__all__ = [
    "strip_accents",
    "normalize_text",
    "normalize_for_search",
    "normalize_string",
    "normalize_pair",
    "normalize_for_config",
    "fold_key",
    "search_matches",
]
