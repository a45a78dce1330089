"""Assertion helpers that raise :class:`ValidationError` with formatted messages."""

from __future__ import annotations

import re
from typing import Any, Optional, Sequence

from .errors import ValidationError


def is_array(value: Any) -> bool:
    """Return True for list-like values; strings and mappings never count."""
    return isinstance(value, (list, tuple))


def format_message(
    message: Optional[str],
    args: Sequence[Any],
    default: str,
    default_args: Optional[Sequence[Any]] = None,
) -> str:
    """Apply printf-style ``args`` to ``message``, falling back to ``default``."""
    if message is not None:
        return message % tuple(args) if args else message
    if default_args:
        return default % tuple(default_args)
    return default


def assert_that(condition: bool, message: Optional[str] = None, *args: Any) -> None:
    if not condition:
        raise ValidationError(format_message(message, args, "Assertion failed."))


def assert_not_null(value: Any, message: Optional[str] = None, *args: Any) -> None:
    if value is None:
        raise ValidationError(format_message(message, args, "Value cannot be null."))


def assert_is_array(value: Any, message: Optional[str] = None, *args: Any) -> None:
    if not is_array(value):
        raise ValidationError(format_message(message, args, "Value is not an array."))


def assert_not_array(value: Any, message: Optional[str] = None, *args: Any) -> None:
    if is_array(value):
        raise ValidationError(format_message(message, args, "Value cannot be an array."))


def assert_no_match(
    pattern: re.Pattern[str], value: str, message: Optional[str] = None, *args: Any
) -> None:
    """Fail when ``pattern`` is found anywhere in ``value``."""
    if pattern.search(value):
        raise ValidationError(
            format_message(
                message,
                args,
                'Value "%s" should not match regular expression %s.',
                (value, pattern.pattern),
            )
        )


__all__ = [
    "assert_is_array",
    "assert_no_match",
    "assert_not_array",
    "assert_not_null",
    "assert_that",
    "format_message",
    "is_array",
]
