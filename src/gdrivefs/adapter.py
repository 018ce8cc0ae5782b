"""GoogleDriveAdapter: filesystem verbs over Drive's id graph."""

from __future__ import annotations

import dataclasses
import io
import logging
from typing import Any, BinaryIO, Iterator, Mapping, Optional, Union

from gdrivefs.auth import AuthInfo
from gdrivefs.config import AdapterConfig, auth_info_from_mapping
from gdrivefs.controller import GoogleDriveController
from gdrivefs.errors import (
    CheckExistenceError,
    CopyFileError,
    CreateDirectoryError,
    DeleteDirectoryError,
    DeleteFileError,
    GDriveFSError,
    InvalidArgumentError,
    ListContentsError,
    MoveFileError,
    PathNotFoundError,
    ReadFileError,
    RetrieveMetadataError,
    SetVisibilityError,
    UnsupportedOperationError,
    WriteFileError,
)
from gdrivefs.models import FileAttributes, RemoteObject, StorageAttributes, Visibility
from gdrivefs.tree import PathResolver, ResolutionCache, TreeWalker
from gdrivefs.util.mime import FOLDER_MIME, guess_mime_type, is_download_disallowed
from gdrivefs.util.paths import basename, is_root, is_same_or_descendant, normalize_path

logger = logging.getLogger(__name__)

Contents = Union[bytes, bytearray, memoryview, str]


class GoogleDriveAdapter:
    """
    Path-addressed filesystem on top of Google Drive.

    Every operation normalizes its paths, resolves them through the shared
    ResolutionCache, then issues the Drive call. Write-class operations
    create missing parent folders; read-class operations never create
    anything. Failures are re-raised as the operation's error type
    (WriteFileError, ReadFileError, ...) with the original error as cause.

    Notes:
        - write() never overwrites: writing twice to a path leaves two
          siblings with the same name, and lookups pick the first.
        - There is no internal locking beyond the cache map itself.
    """

    def __init__(
        self,
        auth_info: AuthInfo,
        config: Optional[AdapterConfig] = None,
    ) -> None:
        config = config or AdapterConfig()
        controller = GoogleDriveController(
            auth_info,
            scopes=config.scopes,
            supports_all_drives=config.supports_all_drives,
        )
        self._setup(controller, config)

    @classmethod
    def from_controller(
        cls,
        controller: Any,
        config: Optional[AdapterConfig] = None,
    ) -> "GoogleDriveAdapter":
        """Create adapter with an injected controller (useful for tests)."""
        obj = cls.__new__(cls)
        obj._setup(controller, config or AdapterConfig())
        return obj

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> "GoogleDriveAdapter":
        """Create adapter from a disk-style config dict (credentials + options)."""
        return cls(auth_info_from_mapping(config), AdapterConfig.from_mapping(config))

    def _setup(self, controller: Any, config: AdapterConfig) -> None:
        self._controller = controller
        self._config = config
        self._resolver = PathResolver(
            controller,
            config.root_folder_id,
            cache=ResolutionCache(),
        )
        self._walker = TreeWalker(controller, self._resolver)

    @property
    def config(self) -> AdapterConfig:
        return self._config

    @property
    def resolver(self) -> PathResolver:
        return self._resolver

    # ----------------------------
    # Writes
    # ----------------------------
    def write(self, path: str, contents: Contents, *, mime_type: Optional[str] = None) -> None:
        """Create a new file at `path`, creating missing parent folders."""
        path = normalize_path(path)
        try:
            _require_not_root(path)
            data = _to_bytes(contents)
            parent_id = self._resolver.resolve_parent(path, create_missing=True)
            name = basename(path)
            created = self._controller.create(
                name,
                mime_type or guess_mime_type(name),
                parent_id,
                data,
            )
            logger.info("Wrote %s (%s, %d bytes)", path, created.id, len(data))
        except GDriveFSError as exc:
            raise WriteFileError(path, cause=exc) from exc
        finally:
            self._resolver.invalidate(path)

    def write_stream(
        self,
        path: str,
        stream: BinaryIO,
        *,
        mime_type: Optional[str] = None,
    ) -> None:
        path = normalize_path(path)
        read = getattr(stream, "read", None)
        if not callable(read):
            exc = InvalidArgumentError(
                "Expected a readable stream",
                details={"type": type(stream).__name__},
            )
            raise WriteFileError(path, cause=exc) from exc
        try:
            data = read()
        except (OSError, ValueError) as exc:
            # ValueError: I/O on a closed file.
            raise WriteFileError(path, cause=exc) from exc
        self.write(path, data or b"", mime_type=mime_type)

    def create_directory(self, path: str) -> None:
        path = normalize_path(path)
        try:
            _require_not_root(path)
            parent_id = self._resolver.resolve_parent(path, create_missing=True)
            folder = self._controller.create(basename(path), FOLDER_MIME, parent_id)
            logger.info("Created directory %s (%s)", path, folder.id)
        except GDriveFSError as exc:
            raise CreateDirectoryError(path, cause=exc) from exc
        finally:
            self._resolver.invalidate(path)

    def copy(self, source: str, destination: str) -> None:
        """Copy a file into the destination's folder under the destination's name."""
        source = normalize_path(source)
        destination = normalize_path(destination)
        try:
            _require_not_root(destination)
            obj = self._require(source)
            if obj.is_folder:
                raise InvalidArgumentError("Folders cannot be copied", details={"path": source})
            parent_id = self._resolver.resolve_parent(destination, create_missing=True)
            copied = self._controller.copy(
                obj.id,
                new_name=basename(destination),
                parent_id=parent_id,
            )
            logger.info("Copied %s -> %s (%s)", source, destination, copied.id)
        except GDriveFSError as exc:
            raise CopyFileError(source, destination=destination, cause=exc) from exc
        finally:
            self._resolver.invalidate(destination, recursive=True)

    def move(self, source: str, destination: str) -> None:
        """
        Rename and re-parent in one Drive update.

        The object keeps its id; all previous parents are replaced by the
        destination folder.
        """
        source = normalize_path(source)
        destination = normalize_path(destination)
        try:
            _require_not_root(source)
            _require_not_root(destination)
            obj = self._require(source)
            if source == destination:
                return
            if is_same_or_descendant(destination, source):
                raise InvalidArgumentError(
                    "Cannot move a folder into itself",
                    details={"source": source, "destination": destination},
                )
            parent_id = self._resolver.resolve_parent(destination, create_missing=True)

            add = [] if parent_id in obj.parents else [parent_id]
            remove = [p for p in obj.parents if p != parent_id]
            self._controller.update(
                obj.id,
                name=basename(destination),
                add_parents=add,
                remove_parents=remove,
            )
            logger.info("Moved %s -> %s (%s)", source, destination, obj.id)
        except GDriveFSError as exc:
            raise MoveFileError(source, destination=destination, cause=exc) from exc
        finally:
            self._resolver.invalidate(source, recursive=True)
            self._resolver.invalidate(destination, recursive=True)

    # ----------------------------
    # Deletes
    # ----------------------------
    def delete(self, path: str) -> None:
        path = normalize_path(path)
        try:
            _require_not_root(path)
            obj = self._require(path)
            self._remove(obj)
            logger.info("Deleted %s (%s)", path, obj.id)
        except GDriveFSError as exc:
            raise DeleteFileError(path, cause=exc) from exc
        finally:
            self._resolver.invalidate(path, recursive=True)

    def delete_directory(self, path: str) -> None:
        """
        Delete a folder and everything beneath it, children first.

        Files go first, then sub-folders deepest first, then the folder
        itself. The root folder is emptied but kept. A missing folder is a
        no-op. Not transactional: a failure leaves what was already deleted
        deleted.
        """
        path = normalize_path(path)
        try:
            directory = self._resolver.resolve(path)
            if directory is None:
                logger.debug("delete_directory: %r does not exist", path)
                return
            if not directory.is_folder:
                raise InvalidArgumentError("Not a directory", details={"path": path})

            entries = list(self._walker.walk(path, deep=True))
            for _, obj in entries:
                if obj.is_file:
                    self._remove(obj)
            # Listing order puts folders before their descendants.
            for _, obj in reversed(entries):
                if obj.is_folder:
                    self._remove(obj)
            if not is_root(path):
                self._remove(directory)
            logger.info("Deleted directory %s (%d descendants)", path, len(entries))
        except GDriveFSError as exc:
            raise DeleteDirectoryError(path, cause=exc) from exc
        finally:
            self._resolver.invalidate(path, recursive=True)

    # ----------------------------
    # Reads
    # ----------------------------
    def read(self, path: str) -> bytes:
        path = normalize_path(path)
        try:
            obj = self._require(path)
            if is_download_disallowed(obj.mime_type):
                raise InvalidArgumentError(
                    "Object has no downloadable content",
                    details={"path": path, "mime_type": obj.mime_type},
                )
            return self._controller.get_bytes(obj.id)
        except GDriveFSError as exc:
            raise ReadFileError(path, cause=exc) from exc

    def read_stream(self, path: str) -> BinaryIO:
        return io.BytesIO(self.read(path))

    def list_contents(self, path: str = "", deep: bool = False) -> Iterator[StorageAttributes]:
        """Lazily yield File/DirectoryAttributes under `path`."""
        path = normalize_path(path)
        try:
            yield from self._walker.list_contents(path, deep, visibility=self._config.visibility)
        except GDriveFSError as exc:
            raise ListContentsError(path, cause=exc) from exc

    def get_object(self, path: str) -> Optional[RemoteObject]:
        """Copy of the Drive object at `path`, or None."""
        path = normalize_path(path)
        try:
            obj = self._resolver.resolve(path)
        except GDriveFSError as exc:
            raise RetrieveMetadataError(path, cause=exc) from exc
        return dataclasses.replace(obj, parents=list(obj.parents)) if obj else None

    # ----------------------------
    # Metadata
    # ----------------------------
    def mime_type(self, path: str) -> FileAttributes:
        obj, path = self._metadata_target(path)
        return FileAttributes(path, mime_type=obj.mime_type)

    def last_modified(self, path: str) -> FileAttributes:
        obj, path = self._metadata_target(path)
        return FileAttributes(path, last_modified=obj.modified_time)

    def file_size(self, path: str) -> FileAttributes:
        obj, path = self._metadata_target(path)
        if obj.is_folder:
            raise RetrieveMetadataError(path, "file size is not available for directories")
        return FileAttributes(path, file_size=obj.size or 0)

    def visibility(self, path: str) -> FileAttributes:
        # Drive sharing is permission-based; a fixed value is reported.
        _, path = self._metadata_target(path)
        return FileAttributes(path, visibility=self._config.visibility)

    def set_visibility(self, path: str, visibility: str) -> None:
        path = normalize_path(path)
        if visibility not in Visibility.ALL:
            exc: GDriveFSError = InvalidArgumentError(
                f"visibility must be one of {Visibility.ALL}",
                details={"visibility": visibility},
            )
            raise SetVisibilityError(path, cause=exc) from exc
        if self._config.ignore_visibility_changes:
            logger.warning("Ignoring visibility change for %s (%s)", path, visibility)
            return
        exc = UnsupportedOperationError("Google Drive does not support visibility changes")
        raise SetVisibilityError(path, cause=exc) from exc

    # ----------------------------
    # Existence
    # ----------------------------
    def exists(self, path: str) -> bool:
        return self._check(path) is not None

    def file_exists(self, path: str) -> bool:
        obj = self._check(path)
        return obj is not None and obj.is_file

    def directory_exists(self, path: str) -> bool:
        obj = self._check(path)
        return obj is not None and obj.is_folder

    # ----------------------------
    # Internals
    # ----------------------------
    def _require(self, path: str) -> RemoteObject:
        obj = self._resolver.resolve(path)
        if obj is None:
            raise PathNotFoundError(path)
        return obj

    def _check(self, path: str) -> Optional[RemoteObject]:
        path = normalize_path(path)
        try:
            return self._resolver.resolve(path)
        except GDriveFSError as exc:
            raise CheckExistenceError(path, cause=exc) from exc

    def _metadata_target(self, path: str) -> tuple[RemoteObject, str]:
        path = normalize_path(path)
        try:
            return self._require(path), path
        except GDriveFSError as exc:
            raise RetrieveMetadataError(path, cause=exc) from exc

    def _remove(self, obj: RemoteObject) -> None:
        if self._config.soft_delete:
            self._controller.trash(obj.id)
        else:
            self._controller.delete(obj.id)


def _require_not_root(path: str) -> None:
    if is_root(path):
        raise InvalidArgumentError("Operation not allowed on the root folder")


def _to_bytes(contents: Contents) -> bytes:
    if isinstance(contents, str):
        return contents.encode("utf-8")
    if isinstance(contents, (bytes, bytearray, memoryview)):
        return bytes(contents)
    raise InvalidArgumentError(
        "contents must be bytes or str",
        details={"type": type(contents).__name__},
    )
