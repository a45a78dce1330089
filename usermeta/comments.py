"""Comment styles used to embed the metadata block in a script."""

from __future__ import annotations

from enum import Enum
from typing import Sequence, Union


class CommentStyle(str, Enum):
    BLOCK = "block"
    SLASHES = "slashes"
    NONE = "none"


def _format_block_line(content: str) -> str:
    return content.replace("*/", "*\\/").strip()


def block_comment(lines: Sequence[str]) -> str:
    """Wrap ``lines`` in ``/* */``, one entry per line."""
    if len(lines) > 1:
        body = "".join(f"\n{_format_block_line(line)}" for line in lines)
        return f"/*{body}\n*/"
    content = _format_block_line(lines[0]) if lines else ""
    return f"/* {content} */"


def slashes_comment(lines: Sequence[str]) -> str:
    """Prefix each line with ``// ``."""
    return "\n".join(f"// {line.strip()}" for line in lines)


def render(lines: Sequence[str], style: Union[CommentStyle, str] = CommentStyle.BLOCK) -> str:
    comment_style = CommentStyle(style)
    if comment_style is CommentStyle.BLOCK:
        return block_comment(lines)
    if comment_style is CommentStyle.SLASHES:
        return slashes_comment(lines)
    return "\n".join(lines)


__all__ = ["CommentStyle", "block_comment", "render", "slashes_comment"]
