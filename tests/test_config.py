"""Tests for usermeta.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from usermeta.comments import CommentStyle
from usermeta.config import ConfigError, UserMetaConfig, load_config
from usermeta.models import ResourceDescriptor


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert isinstance(config, UserMetaConfig)
    assert config.root == tmp_path.resolve()
    assert config.include_block is True
    assert config.comment_style is CommentStyle.BLOCK
    assert config.src_dir is None
    assert config.url_base is None


def test_load_config_parses_expected_fields(workspace) -> None:
    workspace.write(
        {
            ".usermeta.yml": """
            include_block: false
            comment_style: Slashes
            src_dir: dist
            url_base: "https://cdn.example/scripts/"
            """
        }
    )

    config = load_config(workspace.path())

    assert config.include_block is False
    assert config.comment_style is CommentStyle.SLASHES
    assert config.src_dir == workspace.path().resolve() / "dist"
    assert config.url_base == "https://cdn.example/scripts/"


def test_load_config_accepts_explicit_file(workspace) -> None:
    workspace.write({"custom.yml": "comment_style: none\n"})
    config = load_config(workspace.path("custom.yml"))
    assert config.comment_style is CommentStyle.NONE


def test_load_config_empty_file_uses_defaults(workspace) -> None:
    workspace.write({".usermeta.yml": ""})
    assert load_config(workspace.path()).include_block is True


def test_load_config_rejects_non_mapping(workspace) -> None:
    workspace.write({".usermeta.yml": "- a\n- b\n"})
    with pytest.raises(ConfigError, match="mapping"):
        load_config(workspace.path())


def test_load_config_rejects_unknown_comment_style(workspace) -> None:
    workspace.write({".usermeta.yml": "comment_style: hash\n"})
    with pytest.raises(ConfigError, match="Unknown comment_style"):
        load_config(workspace.path())


def test_load_config_reports_yaml_errors(workspace) -> None:
    workspace.write({".usermeta.yml": "include_block: [unterminated\n"})
    with pytest.raises(ConfigError, match="Failed to parse"):
        load_config(workspace.path())


def test_to_generator_options_builds_resolvers(tmp_path: Path) -> None:
    config = UserMetaConfig(
        root=tmp_path,
        include_block=False,
        comment_style=CommentStyle.NONE,
        src_dir=tmp_path / "dist",
        url_base="https://cdn.example/",
    )
    options = config.to_generator_options()
    descriptor = ResourceDescriptor(id="lib.js")

    assert options.include_block is False
    assert options.comment_style is CommentStyle.NONE
    assert options.resolve_resource_src(descriptor) == str(tmp_path / "dist" / "lib.js")
    assert options.resolve_resource_url(descriptor) == "https://cdn.example/lib.js"


def test_to_generator_options_without_resolvers(tmp_path: Path) -> None:
    options = UserMetaConfig(root=tmp_path).to_generator_options()
    assert options.resolve_resource_src is None
    assert options.resolve_resource_url is None


def test_to_generator_options_resolvers_capture_current_settings(tmp_path: Path) -> None:
    config = UserMetaConfig(root=tmp_path, src_dir=tmp_path / "dist", url_base="https://a.example")
    options = config.to_generator_options()
    config.src_dir = None
    config.url_base = None

    descriptor = ResourceDescriptor(id="lib.js")
    assert options.resolve_resource_src(descriptor) == str(tmp_path / "dist" / "lib.js")
    assert options.resolve_resource_url(descriptor) == "https://a.example/lib.js"
