"""Exception hierarchy for difusa.

Matching and search functions never raise for odd input (``None``, empty
strings, empty collections); they degrade to "no match". Exceptions are
reserved for caller contract violations, which are reported as early as
possible, usually when a :class:`~difusa.config.FuzzyConfig` is built.
"""


class DifusaError(Exception):
    """Base exception for all difusa errors."""


class ValidationError(DifusaError, ValueError):
    """Raised when input validation fails (invalid parameters, out of range values)."""


class InvalidConfiguration(ValidationError):
    """Raised when a FuzzyConfig is constructed with invalid values."""


__all__ = ["DifusaError", "ValidationError", "InvalidConfiguration"]
