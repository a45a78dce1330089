"""Userscript metadata block generation."""

from __future__ import annotations

from dataclasses import dataclass
import re
from typing import Any, Callable, List, Mapping, Optional, Tuple, Union

from .comments import CommentStyle, render
from .converters import resolve_resource_url, to_signature
from .errors import ValidationError
from .expanders import (
    StringsBehavior,
    expand_conditional_tag,
    expand_localizeable_tag,
    expand_multi_object_presented_tag,
    expand_multi_tag,
    expand_object_presented_tag,
    expand_tag,
)
from .locales import LocaleResolver, WarningSink, make_locale_resolver
from .logging import get_logger
from .models import (
    IconDescriptor,
    ResourceDescriptor,
    UserDescriptor,
    UserScriptMeta,
    enum_value,
    pattern_to_literal,
)

BLOCK_START = "==UserScript=="
BLOCK_END = "==/UserScript=="

ResourceResolver = Callable[[ResourceDescriptor], Optional[str]]

_logger = get_logger("generator")


@dataclass
class GeneratorOptions:
    """Options controlling how the metadata block is assembled and rendered."""

    include_block: bool = True
    comment_style: Union[CommentStyle, str] = CommentStyle.BLOCK
    resolve_resource_src: Optional[ResourceResolver] = None
    resolve_resource_url: Optional[ResourceResolver] = None
    locale_warning: Optional[WarningSink] = None
    locale_resolver: Optional[LocaleResolver] = None


@dataclass
class _Context:
    options: GeneratorOptions
    resolve_locale: LocaleResolver


FieldExpander = Callable[[str, Any, List[str], _Context], None]


@dataclass(frozen=True)
class FieldSpec:
    """Binds a metadata field to the tag it produces and the expander that emits it."""

    field: str
    tag: str
    expand: FieldExpander
    required: bool = False


def _plain(tag: str, value: Any, lines: List[str], context: _Context) -> None:
    expand_tag(tag, enum_value(value), lines)


def _multi(tag: str, value: Any, lines: List[str], context: _Context) -> None:
    expand_multi_tag(tag, value, lines)


def _localized(tag: str, value: Any, lines: List[str], context: _Context) -> None:
    expand_localizeable_tag(tag, value, lines, locale_resolver=context.resolve_locale)


def _signature(user: UserDescriptor, tag: str, lines: List[str]) -> str:
    return to_signature(user)


def _author(tag: str, value: Any, lines: List[str], context: _Context) -> None:
    expand_object_presented_tag(tag, value, _signature, lines)


def _contributors(tag: str, value: Any, lines: List[str], context: _Context) -> None:
    expand_multi_object_presented_tag(tag, value, _signature, lines)


def _icon_lines(icon: IconDescriptor, tag: str, lines: List[str]) -> None:
    if icon.larger is not None:
        expand_tag("icon64", icon.larger, lines)
    if icon.small is not None:
        expand_tag("icon", icon.small, lines)


def _icon(tag: str, value: Any, lines: List[str], context: _Context) -> None:
    expand_object_presented_tag(
        tag, value, _icon_lines, lines, strings_behavior=StringsBehavior.DISALLOW
    )


def _pattern_literal(pattern: re.Pattern[str], tag: str, lines: List[str]) -> str:
    return pattern_to_literal(pattern)


def _url_patterns(tag: str, value: Any, lines: List[str], context: _Context) -> None:
    expand_multi_object_presented_tag(tag, value, _pattern_literal, lines)


def _anti_features(tag: str, value: Any, lines: List[str], context: _Context) -> None:
    def transform(entry: Tuple[Any, Any], tag_name: str, target: List[str]) -> None:
        feature, reason = entry
        kind = enum_value(feature)
        expand_localizeable_tag(
            tag_name,
            reason,
            target,
            transform_translation=lambda translation: f"{kind} {translation}",
            locale_resolver=context.resolve_locale,
        )

    expand_multi_object_presented_tag(tag, value, transform, lines)


def _conditional(tag: str, value: Any, lines: List[str], context: _Context) -> None:
    expand_conditional_tag(tag, bool(value), lines)


def _require(tag: str, value: Any, lines: List[str], context: _Context) -> None:
    def transform(descriptor: ResourceDescriptor, tag_name: str, target: List[str]) -> str:
        return resolve_resource_url(descriptor, context.options)

    expand_multi_object_presented_tag(tag, value, transform, lines)


def _resources(tag: str, value: Any, lines: List[str], context: _Context) -> None:
    def transform(descriptor: ResourceDescriptor, tag_name: str, target: List[str]) -> str:
        return f"{descriptor.id} {resolve_resource_url(descriptor, context.options)}"

    expand_multi_object_presented_tag(tag, value, transform, lines)


def _custom_tags(tag: str, value: Mapping[str, Any], lines: List[str], context: _Context) -> None:
    for tag_name, tag_value in value.items():
        expand_tag(tag_name, tag_value, lines)


FIELD_ORDER: Tuple[FieldSpec, ...] = (
    FieldSpec("name", "name", _localized, required=True),
    FieldSpec("description", "description", _localized),
    FieldSpec("version", "version", _plain, required=True),
    FieldSpec("author", "author", _author, required=True),
    FieldSpec("contributors", "contributor", _contributors),
    FieldSpec("namespace", "namespace", _plain),
    FieldSpec("homepage", "homepageURL", _plain),
    FieldSpec("license", "license", _plain),
    FieldSpec("icon", "icon", _icon),
    FieldSpec("update_url", "updateURL", _plain),
    FieldSpec("download_url", "downloadURL", _plain),
    FieldSpec("support_url", "supportURL", _plain),
    FieldSpec("include", "include", _url_patterns),
    FieldSpec("match", "match", _multi),
    FieldSpec("exclude", "exclude", _url_patterns),
    FieldSpec("connect", "connect", _multi),
    FieldSpec("run_at", "run-at", _plain),
    FieldSpec("grant", "grant", _multi),
    FieldSpec("anti_features", "antifeature", _anti_features),
    FieldSpec("no_frames", "noframes", _conditional),
    FieldSpec("no_compat", "nocompat", _multi),
    FieldSpec("inject_into", "inject-into", _plain),
    FieldSpec("require", "require", _require),
    FieldSpec("resources", "resource", _resources),
    FieldSpec("custom_tags", "", _custom_tags),
)


def generate_lines(
    meta: UserScriptMeta, options: Optional[GeneratorOptions] = None
) -> List[str]:
    """Return the ordered tag lines for ``meta`` without comment rendering."""
    options = options or GeneratorOptions()
    context = _Context(
        options=options,
        resolve_locale=options.locale_resolver or make_locale_resolver(options.locale_warning),
    )

    lines: List[str] = []
    if options.include_block:
        lines.append(BLOCK_START)

    for spec in FIELD_ORDER:
        value = getattr(meta, spec.field)
        if value is None and not spec.required:
            continue
        spec.expand(spec.tag, value, lines, context)

    if options.include_block:
        lines.append(BLOCK_END)
    return lines


def generate(meta: UserScriptMeta, options: Optional[GeneratorOptions] = None) -> str:
    """Generate the rendered userscript metadata block for ``meta``."""
    options = options or GeneratorOptions()
    try:
        style = CommentStyle(options.comment_style)
    except ValueError:
        raise ValidationError(f'Unknown comment style "{options.comment_style}".') from None
    lines = generate_lines(meta, options)
    _logger.debug("Generated %d metadata lines", len(lines))
    return render(lines, style)


Generator = Callable[[UserScriptMeta], str]


def create_generator(options: Optional[GeneratorOptions] = None) -> Generator:
    """Return a generator function with ``options`` bound."""
    bound = options or GeneratorOptions()

    def _generate(meta: UserScriptMeta) -> str:
        return generate(meta, bound)

    return _generate


__all__ = [
    "BLOCK_END",
    "BLOCK_START",
    "FIELD_ORDER",
    "FieldSpec",
    "Generator",
    "GeneratorOptions",
    "create_generator",
    "generate",
    "generate_lines",
]
