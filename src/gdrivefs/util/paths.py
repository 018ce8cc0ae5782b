"""Logical path helpers (pure string handling, no Drive access)."""

from __future__ import annotations

ROOT_PATH: str = ""
SEPARATOR: str = "/"


def normalize_path(raw: str) -> str:
    """
    Canonicalize a raw path into a LogicalPath.

    - backslashes become forward slashes
    - empty and "." segments are dropped
    - ".." pops the previous segment; at the top it is discarded

    Never fails: anything that collapses to nothing is the root ("").

    >>> normalize_path("a//b/./c/../d")
    'a/b/d'
    >>> normalize_path("../a")
    'a'
    """
    parts: list[str] = []
    for segment in raw.replace("\\", SEPARATOR).split(SEPARATOR):
        if segment in ("", "."):
            continue
        if segment == "..":
            if parts:
                parts.pop()
            continue
        parts.append(segment)
    return SEPARATOR.join(parts)


def split_path(path: str) -> list[str]:
    """Split a normalized path into segments (root -> [])."""
    if not path:
        return []
    return path.split(SEPARATOR)


def is_root(path: str) -> bool:
    return path == ROOT_PATH


def dirname(path: str) -> str:
    """Containing directory of a normalized path ("" for top-level items)."""
    head, _, _ = path.rpartition(SEPARATOR)
    return head


def basename(path: str) -> str:
    """Last segment of a normalized path ("" for root)."""
    return path.rpartition(SEPARATOR)[2]


def join(parent: str, name: str) -> str:
    """Join a normalized parent path and a single child name."""
    if not parent:
        return name
    return f"{parent}{SEPARATOR}{name}"


def is_same_or_descendant(path: str, ancestor: str) -> bool:
    """True if `path` equals `ancestor` or lies beneath it."""
    if not ancestor:
        return True
    return path == ancestor or path.startswith(ancestor + SEPARATOR)
