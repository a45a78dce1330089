"""Tag expanders that turn metadata values into ``@tag value`` lines.

Every expander appends to a shared ``lines`` list and returns it, so nested
expanders (for example a transformer that emits several tags) contribute to
the same output in call order.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Any, Callable, List, Mapping, Optional, Sequence, Union

from .assertions import (
    assert_is_array,
    assert_no_match,
    assert_not_array,
    assert_not_null,
    assert_that,
    is_array,
)
from .errors import ValidationError
from .locales import LocaleResolver, resolve_locale_tag
from .models import BASE_LOCALE, enum_value

INVALID_VALUE_PATTERN = re.compile(r"\n")
INVALID_TAG_NAME_PATTERN = re.compile(r"[^a-z0-9:\-_]", re.IGNORECASE)

TranslationTransform = Callable[[str], str]
TransformResult = Union[str, Sequence[str], None]
Transformer = Callable[[Any, str, List[str]], TransformResult]


class StringsBehavior(str, Enum):
    """How an object-presented tag treats plain string values."""

    PASSTHROUGH = "passthrough"
    TRANSFORM = "transform"
    DISALLOW = "disallow"


def is_localizeable(value: Any) -> bool:
    return isinstance(value, Mapping) and value.get(BASE_LOCALE) is not None


def _assert_tag_name(tag_name: str) -> None:
    assert_that(isinstance(tag_name, str) and bool(tag_name), "Tag name cannot be empty.")
    assert_no_match(
        INVALID_TAG_NAME_PATTERN,
        tag_name,
        'Tag name "%s" is illegal.',
        tag_name,
    )


def expand_conditional_tag(
    tag_name: str,
    condition: bool,
    lines: Optional[List[str]] = None,
) -> List[str]:
    """Append a bare ``@tag_name`` line when ``condition`` holds."""
    _assert_tag_name(tag_name)
    if lines is None:
        lines = []
    if condition:
        lines.append(f"@{tag_name}")
    return lines


def expand_tag(
    tag_name: str,
    value: Optional[str],
    lines: Optional[List[str]] = None,
    *,
    check_null: bool = True,
) -> List[str]:
    """Validate and append a single ``@tag_name value`` line."""
    _assert_tag_name(tag_name)
    if check_null:
        assert_not_null(value, 'Tag "%s" cannot contain a null value.', tag_name)
    assert_not_array(value, 'Tag "%s" cannot contain an array value.', tag_name)

    if lines is None:
        lines = []

    if value is None:
        lines.append(f"@{tag_name}")
        return lines

    assert_that(
        isinstance(value, (str, Enum)),
        'Tag "%s" only accepts string values, got %s.',
        tag_name,
        type(value).__name__,
    )
    text = str(enum_value(value))
    assert_no_match(
        INVALID_VALUE_PATTERN,
        text,
        'Tag "%s" has illegal characters in its value - "%s".',
        tag_name,
        text,
    )
    lines.append(f"@{tag_name} {text}")
    return lines


def expand_multi_tag(
    tag_name: str,
    value: Union[str, Sequence[str]],
    lines: Optional[List[str]] = None,
) -> List[str]:
    """Append one line per element of ``value``, or a single line for a scalar."""
    _assert_tag_name(tag_name)
    if lines is None:
        lines = []
    if is_array(value):
        for item in value:
            expand_tag(tag_name, item, lines)
    else:
        expand_tag(tag_name, value, lines)  # type: ignore[arg-type]
    return lines


def _translation(
    tag_name: str,
    values: Mapping[str, Any],
    locale: str,
    transform: Optional[TranslationTransform],
) -> str:
    translation = values.get(locale)
    if translation is not None and transform is not None:
        translation = transform(translation)
    assert_not_null(
        translation,
        'Translation of locale "%s" for tag "%s" is null.',
        locale,
        tag_name,
    )
    return translation


def expand_localizeable_tag(
    tag_name: str,
    value: Any,
    lines: Optional[List[str]] = None,
    *,
    check_null: bool = True,
    allow_multiple: bool = False,
    transform_translation: Optional[TranslationTransform] = None,
    locale_resolver: Optional[LocaleResolver] = None,
) -> List[str]:
    """Append a base line plus one ``tag_name:locale`` line per translation.

    Locale keys are canonicalized with ``locale_resolver``; two keys that
    resolve to the same locale raise :class:`ValidationError`. A plain string
    is emitted as-is, passed through ``transform_translation`` when given.
    """
    _assert_tag_name(tag_name)
    if lines is None:
        lines = []

    if check_null:
        assert_not_null(value, 'Tag "%s" cannot contain a null value.', tag_name)

    if is_array(value):
        assert_that(allow_multiple, 'Tag "%s" cannot contain multiple values.', tag_name)
        for single_value in value:
            expand_localizeable_tag(
                tag_name,
                single_value,
                lines,
                check_null=check_null,
                allow_multiple=False,
                transform_translation=transform_translation,
                locale_resolver=locale_resolver,
            )
        return lines

    if is_localizeable(value):
        resolve = locale_resolver or resolve_locale_tag
        expand_tag(tag_name, _translation(tag_name, value, BASE_LOCALE, transform_translation), lines)

        included_locales: List[str] = []
        for locale in value:
            if locale == BASE_LOCALE:
                continue
            translation = _translation(tag_name, value, locale, transform_translation)
            resolved_locale = resolve(locale)
            if resolved_locale in included_locales:
                raise ValidationError(
                    f'Locale "{resolved_locale}" already been added to tag "{tag_name}".'
                )
            expand_tag(f"{tag_name}:{resolved_locale}", translation, lines)
            included_locales.append(resolved_locale)
        return lines

    if isinstance(value, Mapping):
        raise ValidationError(
            f'Localized value for tag "{tag_name}" requires a base "@" translation.'
        )

    if value is not None and transform_translation is not None:
        value = transform_translation(value)
    return expand_tag(tag_name, value, lines, check_null=check_null)


def expand_object_presented_tag(
    tag_name: str,
    value: Any,
    transformer: Transformer,
    lines: Optional[List[str]] = None,
    *,
    check_null: bool = True,
    strings_behavior: Union[StringsBehavior, str] = StringsBehavior.PASSTHROUGH,
) -> List[str]:
    """Expand a tag whose value is either a string shorthand or a structured object.

    ``transformer(value, tag_name, lines)`` may return a single value, a list
    of values (one ``@tag_name`` line each) or ``None`` when it appended its
    own lines.
    """
    _assert_tag_name(tag_name)
    if lines is None:
        lines = []

    if check_null:
        assert_not_null(value, 'Tag "%s" cannot contain a null value.', tag_name)

    behavior = StringsBehavior(strings_behavior)

    def transform(item: Any) -> None:
        transformed = transformer(item, tag_name, lines)
        if isinstance(transformed, str):
            transformed = [transformed]
        if transformed is not None:
            expand_multi_tag(tag_name, list(transformed), lines)

    if isinstance(value, str):
        if behavior is StringsBehavior.PASSTHROUGH:
            expand_tag(tag_name, value, lines, check_null=check_null)
        elif behavior is StringsBehavior.TRANSFORM:
            transform(value)
        else:
            raise ValidationError(f'Tag "{tag_name}" does not allow string values.')
    elif value is None:
        expand_tag(tag_name, None, lines, check_null=check_null)
    else:
        transform(value)

    return lines


def expand_multi_object_presented_tag(
    tag_name: str,
    values: Sequence[Any],
    transformer: Transformer,
    lines: Optional[List[str]] = None,
    *,
    check_null: bool = True,
    strings_behavior: Union[StringsBehavior, str] = StringsBehavior.PASSTHROUGH,
) -> List[str]:
    """Apply :func:`expand_object_presented_tag` to each element of ``values``."""
    _assert_tag_name(tag_name)
    if lines is None:
        lines = []

    assert_is_array(values, 'Tag "%s" only accepts array values.', tag_name)

    for item in values:
        expand_object_presented_tag(
            tag_name,
            item,
            transformer,
            lines,
            check_null=check_null,
            strings_behavior=strings_behavior,
        )
    return lines


__all__ = [
    "INVALID_TAG_NAME_PATTERN",
    "INVALID_VALUE_PATTERN",
    "StringsBehavior",
    "Transformer",
    "expand_conditional_tag",
    "expand_localizeable_tag",
    "expand_multi_object_presented_tag",
    "expand_multi_tag",
    "expand_object_presented_tag",
    "expand_tag",
    "is_localizeable",
]
