"""Loading metadata records from YAML or JSON files."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml

from .assertions import is_array
from .errors import ValidationError
from .models import (
    BASE_LOCALE,
    HashDescriptor,
    IconDescriptor,
    Localized,
    ResourceDescriptor,
    UserDescriptor,
    UserScriptMeta,
)

# camelCase spellings used by userscript build tooling
_KEY_ALIASES = {
    "updateUrl": "update_url",
    "downloadUrl": "download_url",
    "supportUrl": "support_url",
    "runAt": "run_at",
    "antiFeatures": "anti_features",
    "noFrames": "no_frames",
    "noCompat": "no_compat",
    "injectInto": "inject_into",
    "customTags": "custom_tags",
}

_FIELDS = {
    "name",
    "version",
    "author",
    "namespace",
    "description",
    "contributors",
    "homepage",
    "license",
    "icon",
    "update_url",
    "download_url",
    "support_url",
    "include",
    "match",
    "exclude",
    "require",
    "resources",
    "connect",
    "run_at",
    "grant",
    "anti_features",
    "no_frames",
    "no_compat",
    "inject_into",
    "custom_tags",
}

_REQUIRED = ("name", "version", "author")


def load_metadata(path: Path) -> UserScriptMeta:
    """Read a metadata record from a ``.json``, ``.yml`` or ``.yaml`` file."""
    path = Path(path).expanduser()
    text = path.read_text(encoding="utf-8")
    try:
        if path.suffix.lower() == ".json":
            data = json.loads(text)
        else:
            data = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ValidationError(f"Failed to parse {path}: {exc}") from exc
    if not isinstance(data, Mapping):
        raise ValidationError(f"{path} must contain a mapping at the root")
    return meta_from_mapping(data)


def meta_from_mapping(data: Mapping[str, Any]) -> UserScriptMeta:
    """Convert plain data (as parsed from YAML/JSON) into a typed metadata record."""
    fields: Dict[str, Any] = {}
    for key, value in data.items():
        name = _KEY_ALIASES.get(key, key)
        if name not in _FIELDS:
            raise ValidationError(f'Unknown metadata key "{key}".')
        fields[name] = value

    missing = [name for name in _REQUIRED if fields.get(name) is None]
    if missing:
        raise ValidationError(f"Metadata is missing required keys: {', '.join(missing)}")

    return UserScriptMeta(
        name=_localizeable(fields["name"]),
        version=str(fields["version"]),
        author=_user(fields["author"]),
        namespace=fields.get("namespace"),
        description=_optional(fields.get("description"), _localizeable),
        contributors=_optional(fields.get("contributors"), _users),
        homepage=fields.get("homepage"),
        license=fields.get("license"),
        icon=_optional(fields.get("icon"), _icon),
        update_url=fields.get("update_url"),
        download_url=fields.get("download_url"),
        support_url=fields.get("support_url"),
        include=_optional(fields.get("include"), _url_patterns),
        match=fields.get("match"),
        exclude=_optional(fields.get("exclude"), _url_patterns),
        require=_optional(fields.get("require"), _resources),
        resources=_optional(fields.get("resources"), _resources),
        connect=fields.get("connect"),
        run_at=fields.get("run_at"),
        grant=fields.get("grant"),
        anti_features=_optional(fields.get("anti_features"), _anti_features),
        no_frames=fields.get("no_frames"),
        no_compat=fields.get("no_compat"),
        inject_into=fields.get("inject_into"),
        custom_tags=_optional(fields.get("custom_tags"), _custom_tags),
    )


def _optional(value: Any, convert: Any) -> Any:
    return None if value is None else convert(value)


def _as_list(value: Any) -> List[Any]:
    return list(value) if is_array(value) else [value]


def _url_patterns(value: Any) -> List[str]:
    patterns = _as_list(value)
    for pattern in patterns:
        if not isinstance(pattern, str):
            raise ValidationError(f"URL patterns must be strings, got {pattern!r}.")
    return patterns


def _localizeable(value: Any) -> Any:
    if isinstance(value, Mapping):
        if value.get(BASE_LOCALE) is None:
            raise ValidationError('Localized value requires a base "@" translation.')
        return Localized(
            {str(locale): None if text is None else str(text) for locale, text in value.items()}
        )
    return str(value)


def _user(value: Any) -> Any:
    if isinstance(value, Mapping):
        if not value.get("name"):
            raise ValidationError("User entries require a name.")
        return UserDescriptor(name=value["name"], email=value.get("email"), url=value.get("url"))
    if not isinstance(value, str):
        raise ValidationError(f"User entries must be a name or a mapping, got {value!r}.")
    return value


def _users(value: Any) -> List[Any]:
    return [_user(item) for item in _as_list(value)]


def _icon(value: Any) -> Any:
    if isinstance(value, Mapping):
        return IconDescriptor(small=value.get("small"), larger=value.get("larger"))
    if not isinstance(value, str):
        raise ValidationError(f"Icon must be a mapping of small/larger URLs, got {value!r}.")
    return value


def _resource(value: Any) -> Any:
    if isinstance(value, str):
        return value
    if not isinstance(value, Mapping):
        raise ValidationError(f"Resource entries must be a URL or a mapping, got {value!r}.")
    resource_id = value.get("id") or value.get("src") or value.get("url")
    if not resource_id:
        raise ValidationError("Resource entries require an id, src or url.")
    return ResourceDescriptor(
        id=str(resource_id),
        src=value.get("src"),
        url=value.get("url"),
        hash=_optional(value.get("hash"), _hash),
    )


def _resources(value: Any) -> List[Any]:
    return [_resource(item) for item in _as_list(value)]


def _hash(value: Any) -> HashDescriptor:
    if isinstance(value, Mapping):
        value = (value.get("value"), value.get("algorithm"))
    if not is_array(value) or len(value) != 2 or None in value:
        raise ValidationError("Resource hash must be a [value, algorithm] pair.")
    return HashDescriptor(str(value[0]), str(value[1]))


def _anti_features(value: Any) -> List[Any]:
    entries: List[Any] = []
    for item in _as_list(value):
        if isinstance(item, Mapping):
            item = (item.get("type"), item.get("reason"))
        if not is_array(item) or len(item) != 2 or item[0] is None:
            raise ValidationError("Antifeatures must be [type, reason] pairs.")
        entries.append((str(item[0]), _optional(item[1], _localizeable)))
    return entries


def _custom_tags(value: Any) -> Dict[str, Optional[str]]:
    if not isinstance(value, Mapping):
        raise ValidationError("customTags must be a mapping of tag name to value.")
    return {str(tag): None if text is None else str(text) for tag, text in value.items()}


__all__ = ["load_metadata", "meta_from_mapping"]
