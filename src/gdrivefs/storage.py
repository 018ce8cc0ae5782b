"""DriveStorage: forgiving convenience calls over a GoogleDriveAdapter."""

from __future__ import annotations

import logging
import os
from typing import Any, BinaryIO, Optional, Union

from gdrivefs.adapter import GoogleDriveAdapter
from gdrivefs.errors import GDriveFSError, InvalidArgumentError
from gdrivefs.models import StorageAttributes

logger = logging.getLogger(__name__)


class DriveStorage:
    """
    Helper layer for scripts and applications.

    Unlike the adapter, most calls report failure through their return
    value (False / None) and log the error instead of raising.
    The adapter is passed in explicitly; there is no global default disk.
    """

    def __init__(self, adapter: GoogleDriveAdapter) -> None:
        self._adapter = adapter

    @property
    def adapter(self) -> GoogleDriveAdapter:
        return self._adapter

    def health_check(self) -> bool:
        """True if the root folder can be listed."""
        try:
            list(self._adapter.list_contents("", deep=False))
        except GDriveFSError as exc:
            logger.warning("Health check failed: %s", exc)
            return False
        return True

    def put(self, path: str, contents: Union[bytes, str, BinaryIO]) -> bool:
        try:
            if isinstance(contents, (bytes, bytearray, str)):
                self._adapter.write(path, contents)
            else:
                self._adapter.write_stream(path, contents)
        except GDriveFSError as exc:
            logger.error("put(%s) failed: %s", path, exc)
            return False
        return True

    def put_stream(self, path: str, stream: BinaryIO) -> bool:
        """Like put(), but `stream` must be a readable file object."""
        if not callable(getattr(stream, "read", None)):
            raise InvalidArgumentError("stream must be a readable file object")
        return self.put(path, stream)

    def get(self, path: str) -> Optional[bytes]:
        """File contents, or None if missing or unreadable (e.g. a Google Doc)."""
        try:
            if not self._adapter.file_exists(path):
                return None
            return self._adapter.read(path)
        except GDriveFSError as exc:
            logger.error("get(%s) failed: %s", path, exc)
            return None

    def read_stream(self, path: str) -> Optional[BinaryIO]:
        try:
            if not self._adapter.file_exists(path):
                return None
            return self._adapter.read_stream(path)
        except GDriveFSError as exc:
            logger.error("read_stream(%s) failed: %s", path, exc)
            return None

    def delete(self, path: str) -> bool:
        try:
            self._adapter.delete(path)
        except GDriveFSError as exc:
            logger.error("delete(%s) failed: %s", path, exc)
            return False
        return True

    def rename(self, source: str, destination: str) -> bool:
        try:
            if not self._adapter.exists(source):
                return False
            self._adapter.move(source, destination)
        except GDriveFSError as exc:
            logger.error("rename(%s, %s) failed: %s", source, destination, exc)
            return False
        return True

    def copy(self, source: str, destination: str) -> bool:
        try:
            self._adapter.copy(source, destination)
        except GDriveFSError as exc:
            logger.error("copy(%s, %s) failed: %s", source, destination, exc)
            return False
        return True

    def exists(self, path: str) -> bool:
        return self._adapter.exists(path)

    def info(self, path: str) -> Optional[dict[str, Any]]:
        """Size, MIME type and modification time of a path, or None if missing."""
        obj = self._adapter.get_object(path)
        if obj is None:
            return None
        return {
            "size": obj.size or 0,
            "mime_type": obj.mime_type,
            "last_modified": obj.modified_time,
            "path": path,
        }

    def list(self, directory: str = "/", recursive: bool = False) -> list[StorageAttributes]:
        return list(self._adapter.list_contents(directory, deep=recursive))

    def download(self, remote_path: str, local_path: str) -> bool:
        """Save a Drive file to the local filesystem; False if missing or empty."""
        contents = self.get(remote_path)
        if not contents:
            return False

        parent_dir = os.path.dirname(local_path)
        if parent_dir:
            os.makedirs(parent_dir, exist_ok=True)
        with open(local_path, "wb") as f:
            f.write(contents)
        return True

    def make_directory(self, directory: str) -> bool:
        if self._adapter.exists(directory):
            return True
        self._adapter.create_directory(directory)
        return True

    def delete_directory(self, directory: str) -> bool:
        try:
            self._adapter.delete_directory(directory)
        except GDriveFSError as exc:
            logger.error("delete_directory(%s) failed: %s", directory, exc)
            return False
        return True
