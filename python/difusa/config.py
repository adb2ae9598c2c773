"""Typed configuration for fuzzy matching.

A :class:`FuzzyConfig` is built once by the caller and passed explicitly to
every matching, search and suggestion call. It is frozen and validated at
construction time, so the hot paths never re-check it.

Example:
    >>> from difusa import FuzzyConfig
    >>> strict = FuzzyConfig(threshold=0.8, max_distance=2)
    >>> strict.replace(case_sensitive=True).case_sensitive
    True
    >>> FuzzyConfig.from_dict({"maxDistance": 2}).max_distance
    2
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any, Dict, Mapping

from difusa._utils import check_non_negative_int, check_unit_interval
from difusa.exceptions import InvalidConfiguration

DEFAULT_THRESHOLD = 0.5
DEFAULT_MAX_DISTANCE = 4

# camelCase spellings accepted by from_dict
_KEY_ALIASES = {
    "threshold": "threshold",
    "max_distance": "max_distance",
    "maxDistance": "max_distance",
    "case_sensitive": "case_sensitive",
    "caseSensitive": "case_sensitive",
    "normalize_accents": "normalize_accents",
    "normalizeAccents": "normalize_accents",
}


@dataclass(frozen=True)
class FuzzyConfig:
    """Fuzzy matching configuration.

    Attributes:
        threshold: Minimum similarity score (0.0 to 1.0) required to count as
            a match. Default 0.5.
        max_distance: Hard cap on the tolerated edit distance, whatever the
            string length. Default 4.
        case_sensitive: Compare case-sensitively. Default False.
        normalize_accents: Strip diacritics before comparing, so "tramite"
            equals "trámite" and "nino" equals "niño". Default True.

    Raises:
        InvalidConfiguration: If threshold is NaN or outside [0, 1], if
            max_distance is negative or not an integer, or if a flag is not
            a bool.
    """

    threshold: float = DEFAULT_THRESHOLD
    max_distance: int = DEFAULT_MAX_DISTANCE
    case_sensitive: bool = False
    normalize_accents: bool = True

    def __post_init__(self) -> None:
        threshold = check_unit_interval("threshold", self.threshold, error=InvalidConfiguration)
        check_non_negative_int("max_distance", self.max_distance, error=InvalidConfiguration)
        for name in ("case_sensitive", "normalize_accents"):
            if not isinstance(getattr(self, name), bool):
                raise InvalidConfiguration(
                    f"{name} must be a bool, got {type(getattr(self, name)).__name__}"
                )
        # Store ints as floats so equality and to_dict() are stable
        object.__setattr__(self, "threshold", threshold)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FuzzyConfig":
        """Build a config from a partial mapping layered over the defaults.

        Keys may be snake_case or camelCase (``maxDistance``,
        ``caseSensitive``, ``normalizeAccents``).

        Raises:
            InvalidConfiguration: On unknown keys or invalid values.
        """
        kwargs: Dict[str, Any] = {}
        for key, value in data.items():
            field_name = _KEY_ALIASES.get(key)
            if field_name is None:
                raise InvalidConfiguration(
                    f"Unknown configuration key: '{key}'. "
                    f"Valid keys: {sorted(_KEY_ALIASES)}"
                )
            kwargs[field_name] = value
        return cls(**kwargs)

    def replace(self, **changes: Any) -> "FuzzyConfig":
        """Return a validated copy with some fields changed."""
        try:
            return dataclasses.replace(self, **changes)
        except TypeError as exc:
            raise InvalidConfiguration(str(exc)) from exc

    def to_dict(self) -> Dict[str, Any]:
        """Effective configuration as a plain dict."""
        return dataclasses.asdict(self)


__all__ = ["FuzzyConfig", "DEFAULT_THRESHOLD", "DEFAULT_MAX_DISTANCE"]
