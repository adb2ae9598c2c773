"""Polars DataFrame operations for difusa.

This module runs difusa's search and suggestion operations over Polars
DataFrames and Series, for callers that already hold their records as a
frame (e.g. a snapshot exported from the services catalogue).

Functions in This Module
------------------------
- ``search_dataframe()``: Fuzzy search rows across several string columns
- ``match_series()``: Match every value of a Series against one query
- ``suggest_from_series()``: Ranked, deduplicated suggestions from a Series

Example Usage
-------------
>>> import polars as pl
>>> from difusa.polars_ext import search_dataframe
>>>
>>> df = pl.DataFrame({
...     "nombre": ["Certificado de Residencia", "Licencia de Construcción"],
...     "descripcion": ["Documento que certifica residencia", "Permiso para construir"],
... })
>>> search_dataframe(df, "certificao", columns=["nombre", "descripcion"])
shape: (1, 3)

See Also
--------
- ``difusa.expr``: Polars expression namespace for column operations
- ``difusa.batch.sharded_search``: Sharded search over plain Python records
"""

from typing import List, Optional, Sequence

import polars as pl

from difusa.batch import match_all
from difusa.config import FuzzyConfig
from difusa.exceptions import ValidationError
from difusa.matcher import match_normalized, normalize_query, resolve_config
from difusa.normalize import normalize_for_config
from difusa.suggest import DEFAULT_MAX_RESULTS, generate_fuzzy_suggestions


def search_dataframe(
    df: "pl.DataFrame",
    query: Optional[str],
    columns: Sequence[str],
    config: Optional[FuzzyConfig] = None,
    score_column: str = "_score",
) -> "pl.DataFrame":
    """
    Fuzzy search the rows of a DataFrame across several columns.

    Each row is scored like a record in :func:`~difusa.search.fuzzy_search`:
    the best score among the columns that match. Rows with no matching
    column are dropped. Null cells are treated as empty strings.

    Args:
        df: DataFrame to search
        query: Search text. An empty query returns an empty frame.
        columns: Names of the columns to search, in priority order
        config: Matching configuration (defaults to ``FuzzyConfig()``)
        score_column: Name of the added score column (default: "_score")

    Returns:
        The matching rows with an extra Float64 score column, sorted by
        score descending, ties in original row order.

    Raises:
        ValidationError: If a column is missing or score_column already
            exists in df.

    Example:
        >>> result = search_dataframe(df, "licencia", columns=["nombre"])
        >>> result["nombre"].to_list()
        ['Licencia de Construcción']

    See Also:
        match_series: Per-value match results for a single column
    """
    missing = [c for c in columns if c not in df.columns]
    if missing:
        raise ValidationError(f"Columns not found in DataFrame: {missing}")
    if score_column in df.columns:
        raise ValidationError(f"Score column '{score_column}' already exists in DataFrame")

    config = resolve_config(config)
    normalized_query = normalize_query(query, config)

    scores: List[Optional[float]] = []
    if normalized_query and columns:
        for row in df.select(columns).iter_rows():
            best: Optional[float] = None
            for value in row:
                if value is None:
                    continue
                result = match_normalized(
                    normalized_query, normalize_for_config(str(value), config), config
                )
                if result.matched and (best is None or result.score > best):
                    best = result.score
            scores.append(best)
    else:
        scores = [None] * df.height

    return (
        df.with_columns(pl.Series(score_column, scores, dtype=pl.Float64))
        .filter(pl.col(score_column).is_not_null())
        .sort(score_column, descending=True, maintain_order=True)
    )


def match_series(
    series: "pl.Series",
    query: Optional[str],
    config: Optional[FuzzyConfig] = None,
) -> "pl.DataFrame":
    """
    Match every value of a Series against one query.

    Args:
        series: Series of strings
        query: The query string to match
        config: Matching configuration (defaults to ``FuzzyConfig()``)

    Returns:
        DataFrame with columns: value, matched, score (one row per input
        value, in input order; nulls never match).

    Example:
        >>> match_series(pl.Series(["Trámite", None, "Permiso"]), "tramite")["matched"].to_list()
        [True, False, False]
    """
    values = series.to_list()
    results = match_all(
        [str(v) if v is not None else None for v in values], query, config
    )
    return pl.DataFrame(
        {
            "value": pl.Series("value", values, dtype=series.dtype),
            "matched": pl.Series("matched", [r.matched for r in results], dtype=pl.Boolean),
            "score": pl.Series("score", [r.score for r in results], dtype=pl.Float64),
        }
    )


def suggest_from_series(
    series: "pl.Series",
    query: Optional[str],
    max_results: int = DEFAULT_MAX_RESULTS,
    config: Optional[FuzzyConfig] = None,
) -> List[str]:
    """
    Ranked, deduplicated suggestions drawn from the values of a Series.

    Equivalent to ``generate_fuzzy_suggestions(query, series.to_list(), ...)``
    with nulls skipped.

    See Also:
        difusa.suggest.generate_fuzzy_suggestions
    """
    terms = [str(v) for v in series.to_list() if v is not None]
    return generate_fuzzy_suggestions(query, terms, max_results, config)


__all__ = ["search_dataframe", "match_series", "suggest_from_series"]
