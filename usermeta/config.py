"""Configuration loading for usermeta (.usermeta.yml)."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import yaml

from .comments import CommentStyle
from .generator import GeneratorOptions, ResourceResolver
from .models import ResourceDescriptor

CONFIG_FILENAME = ".usermeta.yml"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class UserMetaConfig:
    """Represents the generator settings defined in .usermeta.yml."""

    root: Path
    include_block: bool = True
    comment_style: CommentStyle = CommentStyle.BLOCK
    src_dir: Optional[Path] = None
    url_base: Optional[str] = None

    def to_generator_options(self) -> GeneratorOptions:
        """Build generator options whose resource resolvers follow this config."""
        return GeneratorOptions(
            include_block=self.include_block,
            comment_style=self.comment_style,
            resolve_resource_src=_src_resolver(self.src_dir) if self.src_dir is not None else None,
            resolve_resource_url=_url_resolver(self.url_base) if self.url_base is not None else None,
        )


def _src_resolver(src_dir: Path) -> ResourceResolver:
    def _resolve(descriptor: ResourceDescriptor) -> Optional[str]:
        return str(src_dir / descriptor.id)

    return _resolve


def _url_resolver(url_base: str) -> ResourceResolver:
    base = url_base.rstrip("/")

    def _resolve(descriptor: ResourceDescriptor) -> Optional[str]:
        return f"{base}/{descriptor.id}"

    return _resolve


def load_config(config_path: Path) -> UserMetaConfig:
    """Load configuration from disk; a missing file yields the defaults."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return UserMetaConfig(root=root)

    data = _read_config(config_file)
    if data is None:
        return UserMetaConfig(root=root)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    config = UserMetaConfig(root=root)

    include_block = _as_bool(data.get("include_block"))
    if include_block is not None:
        config.include_block = include_block

    style = _as_str(data.get("comment_style"))
    if style is not None:
        try:
            config.comment_style = CommentStyle(style.lower())
        except ValueError:
            choices = ", ".join(member.value for member in CommentStyle)
            raise ConfigError(
                f"Unknown comment_style {style!r}; expected one of: {choices}"
            ) from None

    src_dir = _as_str(data.get("src_dir"))
    if src_dir:
        config.src_dir = root / src_dir

    config.url_base = _as_str(data.get("url_base")) or None
    return config


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return config_path / CONFIG_FILENAME
    return config_path


def _read_config(config_file: Path) -> Any:
    try:
        return yaml.safe_load(config_file.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {config_file}: {exc}") from exc


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


__all__ = ["CONFIG_FILENAME", "ConfigError", "UserMetaConfig", "load_config"]
