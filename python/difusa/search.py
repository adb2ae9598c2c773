"""Multi-field fuzzy search over a collection of records.

Records are never inspected by reflection. Each searchable field is a named
accessor, a :class:`Field`, that turns a record into text. Build one from a
mapping key or an attribute, or wrap any callable:

Example:
    >>> from difusa import Field, fuzzy_search
    >>> servicios = [
    ...     {"nombre": "Certificado de Residencia"},
    ...     {"nombre": "Licencia de Construcción"},
    ... ]
    >>> results = fuzzy_search("certificao", servicios, [Field.key("nombre")])
    >>> [(r.item["nombre"], round(r.score, 2)) for r in results]
    [('Certificado de Residencia', 0.91)]
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import (
    Any,
    Callable,
    Generic,
    Iterable,
    List,
    Mapping,
    Optional,
    Sequence,
    Tuple,
    TypeVar,
    Union,
)

from difusa._utils import coerce_text
from difusa.config import FuzzyConfig
from difusa.exceptions import ValidationError
from difusa.matcher import match_normalized, normalize_query, resolve_config
from difusa.normalize import normalize_for_config

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Field(Generic[T]):
    """
    Named accessor that reads one searchable text out of a record.

    Attributes:
        name: Field name reported in FieldMatch results
        getter: Callable returning the raw value for a record. ``None`` means
            "missing" and is searched as the empty string; lists and tuples
            (e.g. tags) are joined with spaces.
    """

    name: str
    getter: Callable[[T], Any]

    def __call__(self, item: T) -> str:
        return coerce_text(self.getter(item))

    @classmethod
    def key(cls, name: str) -> "Field[Mapping[str, Any]]":
        """Accessor for ``item[name]`` on mappings; missing keys read as ``""``."""

        def getter(item: Any) -> Any:
            return item.get(name) if isinstance(item, Mapping) else None

        return cls(name, getter)

    @classmethod
    def attr(cls, name: str) -> "Field[Any]":
        """Accessor for ``item.name``; missing attributes read as ``""``."""
        return cls(name, lambda item: getattr(item, name, None))


FieldSpec = Union[Field, Callable[[Any], Any], str]


def as_field(spec: FieldSpec) -> Field:
    """Coerce a field spec to a Field.

    Plain callables are named after their ``__name__``. A string is shorthand
    for :meth:`Field.key`.

    Raises:
        ValidationError: If spec is none of the supported types.
    """
    if isinstance(spec, Field):
        return spec
    if isinstance(spec, str):
        return Field.key(spec)
    if callable(spec):
        return Field(getattr(spec, "__name__", repr(spec)), spec)
    raise ValidationError(
        f"fields must contain Field objects, callables or key names, got {type(spec).__name__}"
    )


@dataclass(frozen=True)
class FieldMatch:
    """One field of a record that matched the query."""

    field: str
    value: str
    score: float


@dataclass(frozen=True)
class SearchResult(Generic[T]):
    """
    A record that matched a fuzzy search.

    Attributes:
        item: The original record, as passed in (never copied)
        score: Best score across the record's matching fields (0.0-1.0)
        matches: Every matching field with its own score, in field order
    """

    item: T
    score: float
    matches: Tuple[FieldMatch, ...] = ()


def _score_key(result: Any) -> float:
    return -result.score


def _match_item(
    query: str, item: T, fields: Sequence[Field], config: FuzzyConfig
) -> Optional[SearchResult[T]]:
    matches = []
    for field in fields:
        value = field(item)
        if not value:
            continue
        result = match_normalized(query, normalize_for_config(value, config), config)
        if result.matched:
            matches.append(FieldMatch(field=field.name, value=value, score=result.score))
    if not matches:
        return None
    return SearchResult(item=item, score=max(m.score for m in matches), matches=tuple(matches))


def search_prepared(
    query: str, items: Iterable[T], fields: Sequence[Field], config: FuzzyConfig
) -> List[SearchResult[T]]:
    """Search with an already normalized, non-empty query and resolved fields.

    Results are sorted by score descending; ``list.sort`` is stable, so ties
    keep input order.
    """
    results = []
    for item in items:
        result = _match_item(query, item, fields, config)
        if result is not None:
            results.append(result)
    results.sort(key=_score_key)
    return results


def fuzzy_search(
    query: Optional[str],
    items: Iterable[T],
    fields: Sequence[FieldSpec],
    config: Optional[FuzzyConfig] = None,
) -> List[SearchResult[T]]:
    """
    Fuzzy search a collection of records across several fields.

    Every field is matched with :func:`~difusa.matcher.fuzzy_match` in field
    order. A record is kept when any field matches, and its score is the
    best matching field score. A record matches if *any* field matches well,
    not all of them.

    Args:
        query: Search text. An empty query returns no results.
        items: Records to search. They are returned by reference; ``None``
            is treated as an empty collection.
        fields: Field accessors (Field objects, callables or key names).
            ``None`` or an empty list matches nothing.
        config: Matching configuration (defaults to ``FuzzyConfig()``)

    Returns:
        List of SearchResult sorted by score descending, ties in input order.

    Example:
        >>> results = fuzzy_search(
        ...     "licencia",
        ...     servicios,
        ...     [Field.key("nombre"), Field.key("descripcion")],
        ...     FuzzyConfig(threshold=0.6),
        ... )
        >>> results[0].matches[0].field
        'nombre'
    """
    config = resolve_config(config)
    normalized_query = normalize_query(query, config)
    if not normalized_query or items is None or not fields:
        return []

    accessors = [as_field(f) for f in fields]
    results = search_prepared(normalized_query, items, accessors, config)
    logger.debug(
        "fuzzy_search query=%r fields=%s results=%d",
        normalized_query,
        [f.name for f in accessors],
        len(results),
    )
    return results


__all__ = [
    "Field",
    "FieldMatch",
    "FieldSpec",
    "SearchResult",
    "as_field",
    "fuzzy_search",
    "search_prepared",
]
