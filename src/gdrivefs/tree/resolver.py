"""Translate logical paths into Drive objects."""

from __future__ import annotations

import logging
from typing import Any, Optional

from gdrivefs.errors import PathNotFoundError
from gdrivefs.models import RemoteObject
from gdrivefs.util.mime import FOLDER_MIME
from gdrivefs.util.paths import basename, dirname, is_root, join, normalize_path, split_path

from .cache import UNKNOWN, ResolutionCache

logger = logging.getLogger(__name__)


class PathResolver:
    """
    Walks a path segment by segment from the configured root folder.

    Rules:
        - Intermediate segments must be folders; the last may be either kind.
        - Trashed objects never match (the controller filters them).
        - If siblings share a name the first one Drive returns wins; a
          warning is logged, nothing is raised.
        - With `create_missing`, missing intermediate folders are created.
          The leaf is never created here.
    """

    def __init__(
        self,
        controller: Any,
        root_id: str = "root",
        *,
        cache: Optional[ResolutionCache] = None,
    ) -> None:
        self._controller = controller
        self._root_id = root_id
        self._cache = cache if cache is not None else ResolutionCache()

    @property
    def root_id(self) -> str:
        return self._root_id

    @property
    def cache(self) -> ResolutionCache:
        return self._cache

    @property
    def root(self) -> RemoteObject:
        return RemoteObject(id=self._root_id, name="", mime_type=FOLDER_MIME)

    def resolve(self, path: str, *, create_missing: bool = False) -> Optional[RemoteObject]:
        """Object at `path`, or None if any segment is missing."""
        path = normalize_path(path)
        if is_root(path):
            return self.root

        parent = self.resolve_directory(dirname(path), create_missing=create_missing)
        if parent is None:
            return None
        return self._lookup(path, parent.id, folders_only=False)

    def resolve_directory(
        self,
        path: str,
        *,
        create_missing: bool = False,
    ) -> Optional[RemoteObject]:
        """Folder at `path`, treating every segment as a folder."""
        path = normalize_path(path)
        current = self.root
        walked = ""
        for segment in split_path(path):
            walked = join(walked, segment)
            folder = self._lookup(walked, current.id, folders_only=True)
            if folder is None:
                if not create_missing:
                    return None
                folder = self._create_folder(walked, current.id)
            current = folder
        return current

    def resolve_parent(self, path: str, *, create_missing: bool = True) -> str:
        """
        Id of the folder that contains `path`.

        Raises:
            PathNotFoundError: the directory part is missing and
                `create_missing` is False.
        """
        directory = dirname(normalize_path(path))
        folder = self.resolve_directory(directory, create_missing=create_missing)
        if folder is None:
            raise PathNotFoundError(directory)
        return folder.id

    def remember(self, path: str, obj: RemoteObject) -> None:
        """Record an object seen elsewhere (e.g. a listing) without overriding lookups."""
        self._cache.put_if_unknown(path, obj)
        if obj.is_folder:
            self._cache.put_if_unknown(path, obj, folders_only=True)

    def invalidate(self, path: str, *, recursive: bool = False) -> None:
        self._cache.invalidate(normalize_path(path), recursive=recursive)

    # ----------------------------
    # Internals
    # ----------------------------
    def _lookup(self, path: str, parent_id: str, *, folders_only: bool) -> Optional[RemoteObject]:
        cached = self._cache.get(path)
        # A known absence, or a folder as first match of any kind, also
        # answers a folder lookup.
        if cached is not UNKNOWN and (cached is None or not folders_only or cached.is_folder):
            logger.debug("cache hit: %s -> %s", path, cached.id if cached else None)
            return cached
        if folders_only:
            cached = self._cache.get(path, folders_only=True)
            if cached is not UNKNOWN:
                logger.debug("cache hit (folder): %s -> %s", path, cached.id if cached else None)
                return cached

        name = basename(path)
        matches = self._controller.find_children(parent_id, name=name, folders_only=folders_only)
        if len(matches) > 1:
            logger.warning(
                "%d items named %r under folder %s; using %s",
                len(matches),
                name,
                parent_id,
                matches[0].id,
            )
        found = matches[0] if matches else None
        self._cache.put(path, found, folders_only=folders_only)
        return found

    def _create_folder(self, path: str, parent_id: str) -> RemoteObject:
        folder = self._controller.create_folder(basename(path), parent_id)
        logger.info("Created folder %s (%s)", path, folder.id)
        self._cache.put(path, folder, folders_only=True)
        # Only a known absence can be upgraded; an unlooked-up path may hide a file.
        if self._cache.get(path) is None:
            self._cache.put(path, folder)
        return folder
