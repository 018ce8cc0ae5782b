"""Drive `files.list` query construction."""

from __future__ import annotations

from typing import Optional

from gdrivefs.util.mime import FOLDER_MIME


def escape_query_value(value: str) -> str:
    """Escape a literal for use inside single quotes in a Drive query."""
    return value.replace("\\", "\\\\").replace("'", "\\'")


def build_children_query(
    parent_id: str,
    *,
    name: Optional[str] = None,
    mime_type: Optional[str] = None,
    folders_only: bool = False,
    include_trashed: bool = False,
) -> str:
    """Conjunction of parent membership and optional name/MIME equality."""
    clauses = [f"'{escape_query_value(parent_id)}' in parents"]
    if name is not None:
        clauses.append(f"name = '{escape_query_value(name)}'")
    if folders_only:
        mime_type = FOLDER_MIME
    if mime_type is not None:
        clauses.append(f"mimeType = '{escape_query_value(mime_type)}'")
    if not include_trashed:
        clauses.append("trashed = false")
    return " and ".join(clauses)
