"""Public error exports for gdrivefs."""

from __future__ import annotations

from .exceptions import (
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

__all__ = [
    "GDriveFSError",
    # Remote
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
    # Paths / operations
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
