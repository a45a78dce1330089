"""Helper utilities for laying out userscript projects in tests."""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Mapping, Union


class WorkspaceBuilder:
    """Utility for writing metadata, config and asset files into a throwaway directory."""

    def __init__(self, tmp_path: Path) -> None:
        self.root = tmp_path / "script"
        self.root.mkdir()

    def write(self, files: Mapping[str, Union[str, bytes]]) -> None:
        """Write `path -> contents` entries; text is dedented, bytes are written as-is."""
        for relative, content in files.items():
            path = self.root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, bytes):
                path.write_bytes(content)
            else:
                path.write_text(textwrap.dedent(content).lstrip("\n"), encoding="utf-8")

    def path(self, relative: str = "") -> Path:
        """Return the workspace root, or a path inside it."""
        return self.root / relative if relative else self.root


__all__ = ["WorkspaceBuilder"]
