"""Data model for Drive objects."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional

from gdrivefs.util.mime import is_folder


class ObjectKind(str, Enum):
    FILE = "file"
    FOLDER = "folder"


@dataclass(slots=True)
class RemoteObject:
    """
    Snapshot of one Drive item (file or folder).

    Notes:
        - Instances are copies of remote state; mutating them changes nothing
          on Drive.
        - Drive allows several parents and duplicate sibling names; gdrivefs
          treats the graph as a tree (one parent, first match wins).
    """

    id: str
    name: str
    mime_type: str
    parents: list[str] = field(default_factory=list)

    trashed: bool = False
    modified_time: Optional[datetime] = None
    size: Optional[int] = None

    @property
    def kind(self) -> ObjectKind:
        return ObjectKind.FOLDER if is_folder(self.mime_type) else ObjectKind.FILE

    @property
    def is_folder(self) -> bool:
        return self.kind is ObjectKind.FOLDER

    @property
    def is_file(self) -> bool:
        return self.kind is ObjectKind.FILE
