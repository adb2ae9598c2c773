"""Internal utilities for difusa."""

import math
from typing import Any, Union

from difusa.enums import NormalizationMode
from difusa.exceptions import ValidationError

# Valid normalization mode names (lowercase)
VALID_MODES = frozenset(m.value for m in NormalizationMode)


def normalize_mode(mode: Union[str, NormalizationMode]) -> NormalizationMode:
    """Convert a mode name to NormalizationMode, or pass an enum through.

    Args:
        mode: Either a NormalizationMode enum value or a string mode name.

    Returns:
        The matching NormalizationMode member.

    Raises:
        ValidationError: If the mode name is not recognized or has the wrong type.

    Example:
        >>> normalize_mode("FOLD")
        <NormalizationMode.FOLD: 'fold'>
    """
    if isinstance(mode, NormalizationMode):
        return mode

    if isinstance(mode, str):
        mode_lower = mode.lower()
        if mode_lower in VALID_MODES:
            return NormalizationMode(mode_lower)
        raise ValidationError(
            f"Unknown normalization mode: '{mode}'. Valid options: {sorted(VALID_MODES)}"
        )

    raise ValidationError(
        f"normalize must be str or NormalizationMode, got {type(mode).__name__}"
    )


def check_unit_interval(name: str, value: Any, error=ValidationError) -> float:
    """Validate that value is a real number in [0.0, 1.0] and return it as float."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise error(f"{name} must be a number, got {type(value).__name__}")
    if math.isnan(value) or not 0.0 <= value <= 1.0:
        raise error(f"{name} must be between 0.0 and 1.0, got {value}")
    return float(value)


def check_non_negative_int(name: str, value: Any, error=ValidationError) -> int:
    """Validate that value is an int >= 0 (bools rejected)."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise error(f"{name} must be an integer, got {type(value).__name__}")
    if value < 0:
        raise error(f"{name} must be >= 0, got {value}")
    return value


def coerce_text(value: Any) -> str:
    """Turn a raw field value into matchable text.

    ``None`` becomes the empty string, lists and tuples are joined with
    single spaces and anything else goes through ``str()``.
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (list, tuple)):
        return " ".join(coerce_text(v) for v in value if v is not None)
    return str(value)


__all__ = [
    "normalize_mode",
    "check_unit_interval",
    "check_non_negative_int",
    "coerce_text",
    "VALID_MODES",
]
