"""gdrivefs public API."""

from __future__ import annotations

import logging

from gdrivefs.adapter import GoogleDriveAdapter
from gdrivefs.auth import AuthClient, AuthInfo
from gdrivefs.config import AdapterConfig, auth_info_from_mapping
from gdrivefs.controller import GoogleDriveController, InMemoryDriveController
from gdrivefs.errors import (
    ApiError,
    AuthError,
    CheckExistenceError,
    ConflictError,
    CopyFileError,
    CreateDirectoryError,
    DeleteDirectoryError,
    DeleteFileError,
    FilesystemOperationError,
    GDriveFSError,
    HttpErrorInfo,
    InvalidArgumentError,
    ListContentsError,
    MoveFileError,
    NetworkError,
    NotFoundError,
    PathNotFoundError,
    PermissionError,
    QuotaExceededError,
    RateLimitError,
    ReadFileError,
    RemoteError,
    RetrieveMetadataError,
    SetVisibilityError,
    UnsupportedOperationError,
    WriteFileError,
    map_http_error,
)
from gdrivefs.models import (
    DirectoryAttributes,
    FileAttributes,
    ObjectKind,
    RemoteObject,
    StorageAttributes,
    Visibility,
)
from gdrivefs.storage import DriveStorage
from gdrivefs.util.paths import normalize_path

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # High-level
    "GoogleDriveAdapter",
    "DriveStorage",
    "AdapterConfig",
    "normalize_path",
    # Remote store
    "GoogleDriveController",
    "InMemoryDriveController",
    # Auth
    "AuthInfo",
    "AuthClient",
    "auth_info_from_mapping",
    # Models
    "RemoteObject",
    "ObjectKind",
    "Visibility",
    "FileAttributes",
    "DirectoryAttributes",
    "StorageAttributes",
    # Errors
    "GDriveFSError",
    "RemoteError",
    "AuthError",
    "PermissionError",
    "InvalidArgumentError",
    "NotFoundError",
    "ConflictError",
    "RateLimitError",
    "QuotaExceededError",
    "NetworkError",
    "ApiError",
    "HttpErrorInfo",
    "map_http_error",
    "PathNotFoundError",
    "UnsupportedOperationError",
    "FilesystemOperationError",
    "WriteFileError",
    "ReadFileError",
    "DeleteFileError",
    "CreateDirectoryError",
    "DeleteDirectoryError",
    "CopyFileError",
    "MoveFileError",
    "RetrieveMetadataError",
    "SetVisibilityError",
    "ListContentsError",
    "CheckExistenceError",
]
