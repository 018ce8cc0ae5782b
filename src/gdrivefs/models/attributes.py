"""Attribute records returned by listings and metadata queries."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional, Union


class Visibility:
    PUBLIC = "public"
    PRIVATE = "private"

    ALL: tuple[str, ...] = (PUBLIC, PRIVATE)


@dataclass(frozen=True, slots=True)
class FileAttributes:
    """
    File record.

    Metadata queries fill only the requested field; listings fill all of
    them. `extra_metadata` carries the Drive id.
    """

    path: str
    file_size: Optional[int] = None
    visibility: Optional[str] = None
    last_modified: Optional[datetime] = None
    mime_type: Optional[str] = None
    extra_metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def is_file(self) -> bool:
        return True

    @property
    def is_dir(self) -> bool:
        return False


@dataclass(frozen=True, slots=True)
class DirectoryAttributes:
    path: str
    visibility: Optional[str] = None
    last_modified: Optional[datetime] = None
    extra_metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def is_file(self) -> bool:
        return False

    @property
    def is_dir(self) -> bool:
        return True


StorageAttributes = Union[FileAttributes, DirectoryAttributes]
