"""Locale tag canonicalization for localized metadata tags."""

from __future__ import annotations

import re
from typing import Callable, List, Optional

from .errors import InvalidLocaleError
from .logging import get_logger

WarningSink = Callable[[str], None]
LocaleResolver = Callable[[str], str]

_ALPHA = re.compile(r"^[A-Za-z]+$")
_ALNUM = re.compile(r"^[A-Za-z0-9]+$")
_DIGITS = re.compile(r"^[0-9]+$")

_logger = get_logger("locales")


def _default_warning(message: str) -> None:
    _logger.warning(message)


def canonicalize_locale_tag(tag: str) -> str:
    """Return the canonical casing of a well-formed BCP 47 tag.

    Accepts ``_`` as a separator. Raises :class:`InvalidLocaleError` when the
    tag is not well formed.
    """
    if not isinstance(tag, str) or not tag:
        raise InvalidLocaleError(f'Locale "{tag}" is not a valid locale.')
    subtags = tag.replace("_", "-").split("-")
    if any(not _ALNUM.match(part) or len(part) > 8 for part in subtags):
        raise InvalidLocaleError(f'Locale "{tag}" contains invalid characters.')

    if subtags[0].lower() == "x":
        return "-".join(_private_use(tag, subtags))

    language = subtags[0]
    if not _ALPHA.match(language) or len(language) < 2:
        raise InvalidLocaleError(f'Locale "{tag}" is not a valid locale.')
    result: List[str] = [language.lower()]
    index = 1

    # extended language subtags only follow a 2-3 letter primary language
    extlangs = 0
    while (
        len(language) <= 3
        and index < len(subtags)
        and extlangs < 3
        and len(subtags[index]) == 3
        and _ALPHA.match(subtags[index])
    ):
        result.append(subtags[index].lower())
        index += 1
        extlangs += 1

    if index < len(subtags) and len(subtags[index]) == 4 and _ALPHA.match(subtags[index]):
        result.append(subtags[index].title())
        index += 1

    if index < len(subtags):
        part = subtags[index]
        if (len(part) == 2 and _ALPHA.match(part)) or (len(part) == 3 and _DIGITS.match(part)):
            result.append(part.upper())
            index += 1

    while index < len(subtags) and _is_variant(subtags[index]):
        result.append(subtags[index].lower())
        index += 1

    seen_singletons: List[str] = []
    while index < len(subtags):
        singleton = subtags[index].lower()
        if singleton == "x":
            result.extend(_private_use(tag, subtags[index:]))
            return "-".join(result)
        if len(singleton) != 1 or singleton in seen_singletons:
            raise InvalidLocaleError(f'Locale "{tag}" is not a valid locale.')
        seen_singletons.append(singleton)
        index += 1
        extension: List[str] = []
        while index < len(subtags) and len(subtags[index]) >= 2:
            extension.append(subtags[index].lower())
            index += 1
        if not extension:
            raise InvalidLocaleError(f'Locale "{tag}" has an empty extension "{singleton}".')
        result.append(singleton)
        result.extend(extension)

    return "-".join(result)


def _is_variant(part: str) -> bool:
    if 5 <= len(part) <= 8:
        return True
    return len(part) == 4 and part[0].isdigit()


def _private_use(tag: str, subtags: List[str]) -> List[str]:
    if len(subtags) < 2:
        raise InvalidLocaleError(f'Locale "{tag}" has an empty private-use section.')
    return ["x"] + [part.lower() for part in subtags[1:]]


def resolve_locale_tag(
    tag: str,
    use_best_fit: bool = True,
    warn: Optional[WarningSink] = None,
) -> str:
    """Validate ``tag`` and return the form used in ``@tag:locale`` lines.

    With ``use_best_fit`` the canonical form replaces the input and a warning
    is reported to ``warn`` (the ``usermeta.locales`` logger by default)
    whenever the two differ.
    """
    canonical = canonicalize_locale_tag(tag)
    if canonical != tag and use_best_fit:
        (warn or _default_warning)(f'Locale "{tag}" has been resolved to "{canonical}".')
        return canonical
    return tag


def make_locale_resolver(warn: Optional[WarningSink] = None) -> LocaleResolver:
    """Bind a warning sink so the resolver can be handed to the expanders."""

    def _resolve(tag: str) -> str:
        return resolve_locale_tag(tag, warn=warn)

    return _resolve


__all__ = [
    "LocaleResolver",
    "WarningSink",
    "canonicalize_locale_tag",
    "make_locale_resolver",
    "resolve_locale_tag",
]
