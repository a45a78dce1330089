"""Exception types raised while generating userscript metadata."""

from __future__ import annotations


class ValidationError(ValueError):
    """Raised when a metadata value cannot be expanded into a well-formed tag line."""


class InvalidLocaleError(ValidationError):
    """Raised when a locale tag is not a well-formed BCP 47 tag."""


__all__ = ["InvalidLocaleError", "ValidationError"]
