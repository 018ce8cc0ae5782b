"""Public model exports for gdrivefs."""

from __future__ import annotations

from .attributes import DirectoryAttributes, FileAttributes, StorageAttributes, Visibility
from .remote_object import ObjectKind, RemoteObject

__all__ = [
    "RemoteObject",
    "ObjectKind",
    "Visibility",
    "FileAttributes",
    "DirectoryAttributes",
    "StorageAttributes",
]
