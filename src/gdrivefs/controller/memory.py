"""In-process object store with the GoogleDriveController contract."""

from __future__ import annotations

import dataclasses
import itertools
import threading
from typing import Iterable, Optional

from gdrivefs.errors import InvalidArgumentError, NotFoundError
from gdrivefs.models import RemoteObject
from gdrivefs.util.mime import FOLDER_MIME
from gdrivefs.util.time import now_utc


class InMemoryDriveController:
    """
    Drive-like object graph kept in memory.

    Mirrors the parts of Drive that matter to path emulation: opaque ids,
    parent lists, duplicate sibling names, trash, and paged listings.
    Children are listed in creation order, so duplicate-name lookups are
    deterministic. Every call is appended to `calls`.
    """

    def __init__(self, root_id: str = "root", *, page_size: int = 100) -> None:
        if page_size < 1:
            raise InvalidArgumentError("page_size must be >= 1")
        self.root_id = root_id
        self.page_size = page_size
        self.calls: list[tuple] = []

        self._lock = threading.Lock()
        self._ids = itertools.count(1)
        self._objects: dict[str, RemoteObject] = {
            root_id: RemoteObject(
                id=root_id,
                name="",
                mime_type=FOLDER_MIME,
                parents=[],
                modified_time=now_utc(),
            )
        }
        self._contents: dict[str, bytes] = {}

    # ----------------------------
    # Public API
    # ----------------------------
    def get(self, file_id: str) -> RemoteObject:
        self.calls.append(("get", file_id))
        with self._lock:
            return _snapshot(self._require(file_id))

    def get_bytes(self, file_id: str) -> bytes:
        self.calls.append(("get_bytes", file_id))
        with self._lock:
            obj = self._require(file_id)
            if obj.mime_type == FOLDER_MIME:
                raise InvalidArgumentError(
                    "Folders have no content",
                    details={"file_id": file_id},
                )
            return self._contents.get(file_id, b"")

    def create(
        self,
        name: str,
        mime_type: str,
        parent_id: str,
        content: Optional[bytes] = None,
    ) -> RemoteObject:
        self.calls.append(("create", name, mime_type, parent_id))
        with self._lock:
            self._require_folder(parent_id)
            file_id = f"obj-{next(self._ids)}"
            obj = RemoteObject(
                id=file_id,
                name=name,
                mime_type=mime_type,
                parents=[parent_id],
                modified_time=now_utc(),
            )
            if mime_type != FOLDER_MIME:
                data = content or b""
                self._contents[file_id] = data
                obj.size = len(data)
            self._objects[file_id] = obj
            return _snapshot(obj)

    def create_folder(self, name: str, parent_id: str) -> RemoteObject:
        return self.create(name, FOLDER_MIME, parent_id)

    def update(
        self,
        file_id: str,
        *,
        name: Optional[str] = None,
        add_parents: Iterable[str] = (),
        remove_parents: Iterable[str] = (),
    ) -> RemoteObject:
        add = list(add_parents)
        remove = list(remove_parents)
        self.calls.append(("update", file_id, name, tuple(add), tuple(remove)))
        with self._lock:
            obj = self._require(file_id)
            for parent_id in add:
                self._require_folder(parent_id)
            if name is not None:
                obj.name = name
            parents = [p for p in obj.parents if p not in remove]
            for parent_id in add:
                if parent_id not in parents:
                    parents.append(parent_id)
            obj.parents = parents
            obj.modified_time = now_utc()
            return _snapshot(obj)

    def copy(
        self,
        file_id: str,
        *,
        new_name: Optional[str] = None,
        parent_id: Optional[str] = None,
    ) -> RemoteObject:
        self.calls.append(("copy", file_id, new_name, parent_id))
        with self._lock:
            src = self._require(file_id)
            if src.mime_type == FOLDER_MIME:
                raise InvalidArgumentError(
                    "Folders cannot be copied",
                    details={"file_id": file_id},
                )
            parents = [parent_id] if parent_id is not None else list(src.parents)
            for pid in parents:
                self._require_folder(pid)
            new_id = f"obj-{next(self._ids)}"
            obj = RemoteObject(
                id=new_id,
                name=new_name if new_name is not None else src.name,
                mime_type=src.mime_type,
                parents=parents,
                modified_time=now_utc(),
                size=src.size,
            )
            self._objects[new_id] = obj
            self._contents[new_id] = self._contents.get(file_id, b"")
            return _snapshot(obj)

    def trash(self, file_id: str) -> None:
        self.calls.append(("trash", file_id))
        with self._lock:
            self._require(file_id).trashed = True

    def delete(self, file_id: str) -> None:
        """Permanently delete an object and, like Drive, everything beneath it."""
        self.calls.append(("delete", file_id))
        with self._lock:
            self._require(file_id)
            pending = [file_id]
            while pending:
                current = pending.pop()
                pending.extend(
                    oid for oid, obj in self._objects.items() if current in obj.parents
                )
                self._objects.pop(current, None)
                self._contents.pop(current, None)

    def list_children_page(
        self,
        parent_id: str,
        page_token: Optional[str] = None,
    ) -> tuple[list[RemoteObject], Optional[str]]:
        self.calls.append(("list_children_page", parent_id, page_token))
        with self._lock:
            self._require(parent_id)
            children = self._children(parent_id)

        start = int(page_token) if page_token else 0
        end = start + self.page_size
        next_token = str(end) if end < len(children) else None
        return [_snapshot(c) for c in children[start:end]], next_token

    def find_children(
        self,
        parent_id: str,
        *,
        name: Optional[str] = None,
        folders_only: bool = False,
    ) -> list[RemoteObject]:
        self.calls.append(("find_children", parent_id, name, folders_only))
        with self._lock:
            matches = [
                c
                for c in self._children(parent_id)
                if (name is None or c.name == name)
                and (not folders_only or c.mime_type == FOLDER_MIME)
            ]
            return [_snapshot(c) for c in matches]

    # ----------------------------
    # Internals
    # ----------------------------
    def _require(self, file_id: str) -> RemoteObject:
        obj = self._objects.get(file_id)
        if obj is None:
            raise NotFoundError("File not found", details={"file_id": file_id})
        return obj

    def _require_folder(self, file_id: str) -> RemoteObject:
        obj = self._require(file_id)
        if obj.mime_type != FOLDER_MIME:
            raise InvalidArgumentError(
                "Parent must be a folder",
                details={"file_id": file_id},
            )
        return obj

    def _children(self, parent_id: str) -> list[RemoteObject]:
        return [
            obj
            for obj in self._objects.values()
            if parent_id in obj.parents and not obj.trashed
        ]


def _snapshot(obj: RemoteObject) -> RemoteObject:
    return dataclasses.replace(obj, parents=list(obj.parents))
