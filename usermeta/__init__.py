"""Generate userscript metadata blocks from structured metadata."""

from .comments import CommentStyle
from .converters import resolve_resource_url, to_signature
from .errors import InvalidLocaleError, ValidationError
from .generator import FIELD_ORDER, GeneratorOptions, create_generator, generate, generate_lines
from .models import (
    AntiFeature,
    HashDescriptor,
    HashType,
    IconDescriptor,
    InjectionContext,
    Localized,
    ResourceDescriptor,
    RunAt,
    UserDescriptor,
    UserScriptMeta,
)

__all__ = [
    "AntiFeature",
    "CommentStyle",
    "FIELD_ORDER",
    "GeneratorOptions",
    "HashDescriptor",
    "HashType",
    "IconDescriptor",
    "InjectionContext",
    "InvalidLocaleError",
    "Localized",
    "ResourceDescriptor",
    "RunAt",
    "UserDescriptor",
    "UserScriptMeta",
    "ValidationError",
    "create_generator",
    "generate",
    "generate_lines",
    "resolve_resource_url",
    "to_signature",
]
