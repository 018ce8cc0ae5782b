"""Paged, optionally recursive enumeration of a folder subtree."""

from __future__ import annotations

import logging
from typing import Any, Iterator, Optional

from gdrivefs.models import DirectoryAttributes, FileAttributes, RemoteObject, StorageAttributes
from gdrivefs.util.paths import join, normalize_path

from .resolver import PathResolver

logger = logging.getLogger(__name__)


class TreeWalker:
    """
    Lists children of a folder, depth-first when `deep` is set.

    Drive only reports local names, so each child's path is built from the
    parent path. A folder is always yielded before its descendants. Every
    call starts from scratch; iteration is lazy, and a failing page ends the
    iteration with the error (items already yielded stay yielded).
    """

    def __init__(self, controller: Any, resolver: PathResolver) -> None:
        self._controller = controller
        self._resolver = resolver

    def walk(self, path: str, deep: bool = False) -> Iterator[tuple[str, RemoteObject]]:
        """Yield `(child_path, object)` pairs under `path`.

        A missing path or a file yields nothing.
        """
        path = normalize_path(path)
        folder = self._resolver.resolve(path)
        if folder is None or not folder.is_folder:
            logger.debug("nothing to list at %r", path)
            return
        yield from self._walk_folder(path, folder.id, deep)

    def list_contents(
        self,
        path: str,
        deep: bool = False,
        *,
        visibility: Optional[str] = None,
    ) -> Iterator[StorageAttributes]:
        for child_path, obj in self.walk(path, deep):
            yield to_attributes(child_path, obj, visibility=visibility)

    def _walk_folder(
        self,
        path: str,
        folder_id: str,
        deep: bool,
    ) -> Iterator[tuple[str, RemoteObject]]:
        page_token: Optional[str] = None
        while True:
            items, page_token = self._controller.list_children_page(folder_id, page_token)
            for child in items:
                if child.trashed:
                    continue
                child_path = join(path, child.name)
                if "/" in child.name:
                    logger.warning(
                        "Name %r (%s) contains '/'; %r will not resolve back to it",
                        child.name,
                        child.id,
                        child_path,
                    )
                else:
                    self._resolver.remember(child_path, child)
                yield child_path, child
                if deep and child.is_folder:
                    yield from self._walk_folder(child_path, child.id, deep)
            if not page_token:
                break


def to_attributes(
    path: str,
    obj: RemoteObject,
    *,
    visibility: Optional[str] = None,
) -> StorageAttributes:
    extra = {"id": obj.id}
    if obj.is_folder:
        return DirectoryAttributes(
            path=path,
            visibility=visibility,
            last_modified=obj.modified_time,
            extra_metadata=extra,
        )
    return FileAttributes(
        path=path,
        file_size=obj.size or 0,
        visibility=visibility,
        last_modified=obj.modified_time,
        mime_type=obj.mime_type,
        extra_metadata=extra,
    )
