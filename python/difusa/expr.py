"""Polars expression namespace for fuzzy matching.

This module registers a `.fuzzy` namespace on Polars expressions, so
difusa's matcher can be used inside ordinary Polars expression contexts
(``with_columns``, ``filter``, ``select``).

The query is normalized once per expression and each value is matched with
the same rules as :func:`difusa.fuzzy_match`. Null values never match.

Warning:
    Every value goes through a Python callback (``map_elements``). For
    large frames, :func:`difusa.polars_ext.search_dataframe` reads the rows
    once and is the better choice.

Example:
    >>> import polars as pl
    >>> import difusa  # Registers the namespace
    >>>
    >>> df = pl.DataFrame({"nombre": ["Trámite de Licencia", "Permiso", "Tramite"]})
    >>> df.filter(pl.col("nombre").fuzzy.is_match("tramite"))
"""

from typing import Optional, Union

import polars as pl

from difusa._utils import normalize_mode
from difusa.config import FuzzyConfig
from difusa.enums import NormalizationMode
from difusa.matcher import NO_MATCH, MatchResult, match_normalized, normalize_query, resolve_config
from difusa.normalize import normalize_for_config, normalize_string


def _matcher(query: Optional[str], config: Optional[FuzzyConfig]):
    config = resolve_config(config)
    normalized_query = normalize_query(query, config)

    def match(value) -> MatchResult:
        if value is None or not normalized_query:
            return NO_MATCH
        return match_normalized(normalized_query, normalize_for_config(str(value), config), config)

    return match


@pl.api.register_expr_namespace("fuzzy")
class FuzzyExprNamespace:
    """
    Fuzzy matching namespace for Polars expressions.

    Access via `.fuzzy` on any string expression.
    """

    def __init__(self, expr: pl.Expr):
        self._expr = expr

    def score(self, query: str, config: Optional[FuzzyConfig] = None) -> pl.Expr:
        """
        Match score of each value against a query.

        Args:
            query: Query string to match
            config: Matching configuration (defaults to ``FuzzyConfig()``)

        Returns:
            Float64 expression with scores (0.0 to 1.0; 0.0 for nulls)

        Example:
            >>> df.with_columns(score=pl.col("nombre").fuzzy.score("licensia"))
        """
        match = _matcher(query, config)
        return self._expr.map_elements(
            lambda value: match(value).score,
            return_dtype=pl.Float64,
            skip_nulls=False,
        )

    def is_match(self, query: str, config: Optional[FuzzyConfig] = None) -> pl.Expr:
        """
        Whether each value fuzzy-matches a query under the config threshold.

        Args:
            query: Query string to match
            config: Matching configuration (defaults to ``FuzzyConfig()``)

        Returns:
            Boolean expression (False for nulls)

        Example:
            >>> df.filter(pl.col("nombre").fuzzy.is_match("certificao"))
        """
        match = _matcher(query, config)
        return self._expr.map_elements(
            lambda value: match(value).matched,
            return_dtype=pl.Boolean,
            skip_nulls=False,
        )

    def normalize(self, mode: Union[str, NormalizationMode] = NormalizationMode.FOLD) -> pl.Expr:
        """
        Normalize strings for fuzzy matching.

        Args:
            mode: Normalization mode:
                - "lowercase": Convert to lowercase
                - "strip_accents": Remove diacritics, keep case
                - "fold": Lowercase + strip accents (default)
                - "search": Fold + trim + collapse whitespace + drop punctuation

        Returns:
            Normalized string expression (nulls stay null)

        Example:
            >>> df.with_columns(clave=pl.col("nombre").fuzzy.normalize("search"))
        """
        mode = normalize_mode(mode)

        def normalize_value(value):
            if value is None:
                return None
            return normalize_string(str(value), mode)

        return self._expr.map_elements(normalize_value, return_dtype=pl.Utf8)


__all__ = ["FuzzyExprNamespace"]
