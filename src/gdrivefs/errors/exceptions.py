"""Exception hierarchy and HTTP error mapping for gdrivefs."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


class GDriveFSError(Exception):
    """
    Base exception for gdrivefs.

    Attributes:
        details: Optional structured information (e.g., HTTP status, path).
        cause: Optional original exception that triggered this error.
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.details = details or {}
        self.cause = cause


# ----------------------------
# Remote store failures
# ----------------------------
class RemoteError(GDriveFSError):
    """Base for failures reported by the Drive API or its transport."""


class AuthError(RemoteError):
    """Raised when OAuth authentication/refresh fails."""


class PermissionError(RemoteError):
    """Raised when access is denied (HTTP 403 non-quota)."""


class InvalidArgumentError(RemoteError):
    """Raised when arguments are invalid (HTTP 400, non-stream input, etc.)."""


class NotFoundError(RemoteError):
    """Raised when a Drive resource is not found (HTTP 404)."""


class ConflictError(RemoteError):
    """Raised when a conflict occurs (HTTP 409/412)."""


class RateLimitError(RemoteError):
    """Raised when rate-limited (HTTP 429)."""


class QuotaExceededError(RemoteError):
    """Raised when quota is exceeded (HTTP 403 with quota-related reason)."""


class NetworkError(RemoteError):
    """Raised when network/timeout issues prevent the request."""


class ApiError(RemoteError):
    """Raised for unclassified API errors (5xx, unknown 4xx, etc.)."""


# ----------------------------
# Path / adapter level failures
# ----------------------------
class PathNotFoundError(NotFoundError):
    """Raised when a path does not resolve to a Drive object."""

    def __init__(self, path: str, *, cause: Optional[BaseException] = None) -> None:
        super().__init__(
            f"Path not found: '{path}'",
            details={"path": path},
            cause=cause,
        )
        self.path = path


class UnsupportedOperationError(GDriveFSError):
    """Raised for operations Drive cannot express (e.g., visibility changes)."""


class FilesystemOperationError(GDriveFSError):
    """
    A filesystem verb failed.

    The message names the operation and the path(s) involved; the original
    failure is kept in `cause` (and chained as `__cause__` by callers).
    """

    operation: str = "access"

    def __init__(
        self,
        path: str,
        reason: str = "",
        *,
        destination: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        if not reason and cause is not None:
            reason = str(cause)

        message = f"Unable to {self.operation} '{path}'"
        if destination is not None:
            message += f" to '{destination}'"
        if reason:
            message += f": {reason}"

        details: dict[str, Any] = {"operation": self.operation, "path": path}
        if destination is not None:
            details["destination"] = destination

        super().__init__(message, details=details, cause=cause)
        self.path = path
        self.destination = destination
        self.reason = reason


class WriteFileError(FilesystemOperationError):
    operation = "write file"


class ReadFileError(FilesystemOperationError):
    operation = "read file"


class DeleteFileError(FilesystemOperationError):
    operation = "delete file"


class CreateDirectoryError(FilesystemOperationError):
    operation = "create directory"


class DeleteDirectoryError(FilesystemOperationError):
    operation = "delete directory"


class CopyFileError(FilesystemOperationError):
    operation = "copy file"


class MoveFileError(FilesystemOperationError):
    operation = "move file"


class RetrieveMetadataError(FilesystemOperationError):
    operation = "retrieve metadata of"


class SetVisibilityError(FilesystemOperationError):
    operation = "set visibility of"


class ListContentsError(FilesystemOperationError):
    operation = "list contents of"


class CheckExistenceError(FilesystemOperationError):
    operation = "check existence of"


@dataclass(frozen=True)
class HttpErrorInfo:
    """Lightweight HTTP error information for mapping to gdrivefs exceptions."""

    status_code: int
    reason: str | None = None
    message: str | None = None
    details: dict[str, Any] | None = None


_QUOTA_REASONS: tuple[str, ...] = (
    "quota",
    "ratelimitexceeded",
    "dailylimitexceeded",
    "usagelimits",
)

_STATUS_ERRORS: dict[int, type[RemoteError]] = {
    400: InvalidArgumentError,
    401: AuthError,
    403: PermissionError,
    404: NotFoundError,
    409: ConflictError,
    412: ConflictError,
    429: RateLimitError,
}


def _is_quota_reason(reason: str | None) -> bool:
    lowered = (reason or "").lower()
    return any(key in lowered for key in _QUOTA_REASONS)


def map_http_error(
    info: HttpErrorInfo,
    *,
    cause: Optional[BaseException] = None,
) -> RemoteError:
    """
    Map a Drive HTTP error to a gdrivefs exception.

    400 InvalidArgument, 401 Auth, 403 Permission (QuotaExceeded when the
    reason mentions quota or rate limits), 404 NotFound, 409/412 Conflict,
    429 RateLimit. Everything else, 5xx included, is ApiError.
    """
    details: dict[str, Any] = {"status_code": info.status_code, "reason": info.reason}
    details.update(info.details or {})
    message = info.message or f"HTTP error {info.status_code}"

    error_cls = _STATUS_ERRORS.get(info.status_code, ApiError)
    if error_cls is PermissionError and _is_quota_reason(info.reason):
        error_cls = QuotaExceededError
    return error_cls(message, details=details, cause=cause)
