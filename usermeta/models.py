"""Core data models describing a userscript's metadata."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Mapping, NamedTuple, Optional, Tuple, Union

from .errors import ValidationError

BASE_LOCALE = "@"


class Localized(Dict[str, str]):
    """Translations keyed by locale tag; ``"@"`` holds the source-language text."""

    def __init__(self, *args: object, **kwargs: str) -> None:
        super().__init__(*args, **kwargs)
        if BASE_LOCALE not in self:
            raise ValidationError('Localized value requires a base "@" translation.')

    @property
    def base(self) -> str:
        return self[BASE_LOCALE]


class HashType(str, Enum):
    MD5 = "md5"
    SHA256 = "sha256"


class RunAt(str, Enum):
    """Moment at which the userscript manager injects the script."""

    DOCUMENT_START = "document-start"
    DOCUMENT_BODY = "document-body"
    DOCUMENT_END = "document-end"
    DOCUMENT_IDLE = "document-idle"
    CONTEXT_MENU = "context-menu"


class AntiFeature(str, Enum):
    """Features that script catalogues require authors to disclose."""

    ADS = "ads"
    MEMBERSHIP = "membership"
    MINER = "miner"
    PAYMENT = "payment"
    REFERRAL_LINK = "referral-link"
    TRACKING = "tracking"


class InjectionContext(str, Enum):
    PAGE = "page"
    CONTENT = "content"
    AUTO = "auto"


class HashDescriptor(NamedTuple):
    """Subresource integrity hash; ``value`` may be ``"auto"`` to hash ``src``."""

    value: str
    algorithm: Union[HashType, str]


@dataclass
class UserDescriptor:
    """Author or contributor signature."""

    name: str
    email: Optional[str] = None
    url: Optional[str] = None


@dataclass
class IconDescriptor:
    """Icon URLs; ``larger`` is emitted as ``icon64``."""

    small: Optional[str] = None
    larger: Optional[str] = None


@dataclass
class ResourceDescriptor:
    """A ``@require`` or ``@resource`` entry whose URL may be resolved at generation time."""

    id: str
    src: Optional[str] = None
    url: Optional[str] = None
    hash: Optional[Union[HashDescriptor, Tuple[str, str]]] = None


LocalizeableValue = Union[str, Localized]
UserValue = Union[str, UserDescriptor]
ResourceValue = Union[str, ResourceDescriptor]
UrlPatternValue = Union[str, re.Pattern[str]]


@dataclass
class UserScriptMeta:
    """The full metadata record for a single userscript."""

    name: LocalizeableValue
    version: str
    author: UserValue
    namespace: Optional[str] = None
    description: Optional[LocalizeableValue] = None
    contributors: Optional[List[UserValue]] = None
    homepage: Optional[str] = None
    license: Optional[str] = None
    icon: Optional[IconDescriptor] = None
    update_url: Optional[str] = None
    download_url: Optional[str] = None
    support_url: Optional[str] = None
    include: Optional[List[UrlPatternValue]] = None
    match: Optional[Union[str, List[str]]] = None
    exclude: Optional[List[UrlPatternValue]] = None
    require: Optional[List[ResourceValue]] = None
    resources: Optional[List[ResourceValue]] = None
    connect: Optional[Union[str, List[str]]] = None
    run_at: Optional[Union[RunAt, str]] = None
    grant: Optional[Union[str, List[str]]] = None
    anti_features: Optional[List[Tuple[Union[AntiFeature, str], LocalizeableValue]]] = None
    no_frames: Optional[bool] = None
    no_compat: Optional[Union[str, List[str]]] = None
    inject_into: Optional[Union[InjectionContext, str]] = None
    custom_tags: Optional[Mapping[str, str]] = field(default=None)


_REGEX_FLAGS = ((re.IGNORECASE, "i"), (re.MULTILINE, "m"), (re.DOTALL, "s"))


def pattern_to_literal(pattern: re.Pattern[str]) -> str:
    """Render a compiled pattern as a ``/source/flags`` literal understood by script managers."""
    flags = "".join(letter for flag, letter in _REGEX_FLAGS if pattern.flags & flag)
    return f"/{pattern.pattern}/{flags}"


def enum_value(value: object) -> object:
    """Return the raw string of an enum member, leaving other values untouched."""
    return value.value if isinstance(value, Enum) else value


__all__ = [
    "AntiFeature",
    "BASE_LOCALE",
    "HashDescriptor",
    "HashType",
    "IconDescriptor",
    "InjectionContext",
    "Localized",
    "LocalizeableValue",
    "ResourceDescriptor",
    "RunAt",
    "UserDescriptor",
    "UserScriptMeta",
    "enum_value",
    "pattern_to_literal",
]
