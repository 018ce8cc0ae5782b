"""Google Drive API controller (the remote object store binding)."""

from __future__ import annotations

import io
import json
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Optional, Sequence, TypeVar

from gdrivefs.auth import AuthClient, AuthInfo
from gdrivefs.errors import (
    ApiError,
    AuthError,
    HttpErrorInfo,
    NetworkError,
    RateLimitError,
    map_http_error,
)
from gdrivefs.models import RemoteObject
from gdrivefs.util.mime import FOLDER_MIME
from gdrivefs.util.time import parse_drive_time

from .query import build_children_query

T = TypeVar("T")

logger = logging.getLogger(__name__)

# Everything RemoteObject needs; nothing else is requested.
FILE_FIELDS: str = "id,name,mimeType,parents,trashed,modifiedTime,size"
LIST_FIELDS: str = f"nextPageToken,files({FILE_FIELDS})"


@dataclass(frozen=True)
class _RetryPolicy:
    max_retries: int = 3
    initial_delay_sec: float = 1.0

    def delays(self) -> Iterable[float]:
        """Sleep before each retry: initial delay, doubled every time."""
        delay = self.initial_delay_sec
        for _ in range(self.max_retries):
            yield delay
            delay *= 2


class GoogleDriveController:
    """
    Drive API controller.

    Every object is addressed by id; path semantics live in `gdrivefs.tree`.

    Notes:
        - The Drive `service` object is NOT exposed.
        - `supports_all_drives` is applied to all requests consistently.
        - Transient failures (429, 5xx, network) are retried here and only here.
    """

    DEFAULT_SCOPES: tuple[str, ...] = ("https://www.googleapis.com/auth/drive",)

    def __init__(
        self,
        auth_info: AuthInfo,
        *,
        scopes: Optional[Sequence[str]] = None,
        supports_all_drives: bool = True,
    ) -> None:
        self._supports_all_drives = supports_all_drives
        self._retry_policy = _RetryPolicy()

        use_scopes = list(scopes) if scopes is not None else list(self.DEFAULT_SCOPES)
        client = AuthClient(auth_info)
        self._service = client.build_drive_service(use_scopes)

    @classmethod
    def from_service(
        cls,
        service: Any,
        *,
        supports_all_drives: bool = True,
    ) -> "GoogleDriveController":
        """Create controller from a pre-built Drive service (useful for tests)."""
        obj = cls.__new__(cls)
        obj._supports_all_drives = supports_all_drives
        obj._retry_policy = _RetryPolicy()
        obj._service = service
        return obj

    # ----------------------------
    # Public API
    # ----------------------------
    def get(self, file_id: str) -> RemoteObject:
        logger.debug("files.get id=%s", file_id)
        req = self._service.files().get(
            fileId=file_id,
            fields=FILE_FIELDS,
            **self._drive_kwargs(),
        )
        data = self._execute(req.execute)
        return _file_dict_to_remote_object(data)

    def get_bytes(self, file_id: str) -> bytes:
        """Download the media content of a file into memory."""
        download_cls = _media_class("MediaIoBaseDownload")

        logger.debug("files.get_media id=%s", file_id)
        req = self._service.files().get_media(
            fileId=file_id,
            **self._drive_kwargs(),
        )

        buffer = io.BytesIO()
        downloader = download_cls(buffer, req)
        done = False
        while not done:
            _, done = self._execute(downloader.next_chunk)
        return buffer.getvalue()

    def create(
        self,
        name: str,
        mime_type: str,
        parent_id: str,
        content: Optional[bytes] = None,
    ) -> RemoteObject:
        """Create a file (with `content`) or a folder (FOLDER_MIME, no content)."""
        body = {"name": name, "mimeType": mime_type, "parents": [parent_id]}
        kwargs = self._drive_kwargs()

        if content is not None and mime_type != FOLDER_MIME:
            kwargs["media_body"] = _media_class("MediaIoBaseUpload")(
                io.BytesIO(content),
                mimetype=mime_type,
                resumable=False,
            )

        logger.debug("files.create name=%r parent=%s mime=%s", name, parent_id, mime_type)
        req = self._service.files().create(
            body=body,
            fields=FILE_FIELDS,
            **kwargs,
        )
        data = self._execute(req.execute)
        return _file_dict_to_remote_object(data)

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
        """Patch the name and/or swap parents in a single request."""
        body: dict[str, Any] = {}
        if name is not None:
            body["name"] = name

        kwargs = self._drive_kwargs()
        add = ",".join(add_parents)
        remove = ",".join(remove_parents)
        if add:
            kwargs["addParents"] = add
        if remove:
            kwargs["removeParents"] = remove

        logger.debug("files.update id=%s body=%s add=%s remove=%s", file_id, body, add, remove)
        req = self._service.files().update(
            fileId=file_id,
            body=body,
            fields=FILE_FIELDS,
            **kwargs,
        )
        data = self._execute(req.execute)
        return _file_dict_to_remote_object(data)

    def copy(
        self,
        file_id: str,
        *,
        new_name: Optional[str] = None,
        parent_id: Optional[str] = None,
    ) -> RemoteObject:
        body: dict[str, Any] = {}
        if new_name is not None:
            body["name"] = new_name
        if parent_id is not None:
            body["parents"] = [parent_id]

        logger.debug("files.copy id=%s body=%s", file_id, body)
        req = self._service.files().copy(
            fileId=file_id,
            body=body,
            fields=FILE_FIELDS,
            **self._drive_kwargs(),
        )
        data = self._execute(req.execute)
        return _file_dict_to_remote_object(data)

    def trash(self, file_id: str) -> None:
        logger.debug("files.update(trashed) id=%s", file_id)
        req = self._service.files().update(
            fileId=file_id,
            body={"trashed": True},
            fields="id",
            **self._drive_kwargs(),
        )
        self._execute(req.execute)

    def delete(self, file_id: str) -> None:
        logger.debug("files.delete id=%s", file_id)
        req = self._service.files().delete(
            fileId=file_id,
            **self._drive_kwargs(),
        )
        self._execute(req.execute)

    def list_children_page(
        self,
        parent_id: str,
        page_token: Optional[str] = None,
    ) -> tuple[list[RemoteObject], Optional[str]]:
        """One page of non-trashed children of `parent_id`."""
        q = build_children_query(parent_id)
        return self._list_page(q, page_token)

    def find_children(
        self,
        parent_id: str,
        *,
        name: Optional[str] = None,
        folders_only: bool = False,
    ) -> list[RemoteObject]:
        """All non-trashed children of `parent_id` matching name/kind, in Drive order."""
        q = build_children_query(parent_id, name=name, folders_only=folders_only)
        return self._find_by_query(q)

    # ----------------------------
    # Internals
    # ----------------------------
    def _drive_kwargs(self, *, listing: bool = False) -> dict[str, Any]:
        if not self._supports_all_drives:
            return {}
        if listing:
            return {"supportsAllDrives": True, "includeItemsFromAllDrives": True}
        return {"supportsAllDrives": True}

    def _list_page(
        self,
        q: str,
        page_token: Optional[str],
    ) -> tuple[list[RemoteObject], Optional[str]]:
        logger.debug("files.list q=%r page_token=%s", q, page_token)
        req = self._service.files().list(
            q=q,
            fields=LIST_FIELDS,
            pageToken=page_token,
            **self._drive_kwargs(listing=True),
        )
        data = self._execute(req.execute)
        items = [_file_dict_to_remote_object(f) for f in data.get("files", [])]
        return items, data.get("nextPageToken") or None

    def _find_by_query(self, q: str) -> list[RemoteObject]:
        items, page_token = self._list_page(q, None)
        while page_token:
            more, page_token = self._list_page(q, page_token)
            items.extend(more)
        return items

    def _execute(self, func: Callable[[], T]) -> T:
        policy = self._retry_policy
        delays = iter(policy.delays())
        attempt = 0
        while True:
            try:
                return func()
            except Exception as exc:
                mapped = self._map_exception(exc)
                delay = next(delays, None) if self._should_retry(mapped) else None
                if delay is None:
                    raise mapped from exc
                attempt += 1
                logger.warning(
                    "Drive request failed (%s), retry %d/%d in %.1fs",
                    mapped,
                    attempt,
                    policy.max_retries,
                    delay,
                )
                time.sleep(delay)

    def _should_retry(self, exc: Exception) -> bool:
        """429, network failures and 5xx are transient."""
        if isinstance(exc, (RateLimitError, NetworkError)):
            return True
        if isinstance(exc, ApiError):
            status_code = exc.details.get("status_code")
            return isinstance(status_code, int) and 500 <= status_code <= 599
        return False

    def _map_exception(self, exc: Exception) -> Exception:
        from googleapiclient.errors import HttpError

        if isinstance(exc, HttpError):
            return map_http_error(_http_error_to_info(exc), cause=exc)
        if isinstance(exc, (OSError, TimeoutError)):
            return NetworkError("Network error", cause=exc)
        return ApiError("Drive API error", cause=exc)


def _media_class(name: str) -> Any:
    """MediaIoBaseUpload / MediaIoBaseDownload, imported on first use."""
    try:
        from googleapiclient import http
    except ImportError as exc:  # pragma: no cover
        raise AuthError("google-api-python-client is not available", cause=exc) from exc
    return getattr(http, name)


def _str_field(data: dict[str, Any], key: str) -> str:
    value = data.get(key)
    return value if isinstance(value, str) else ""


def _file_dict_to_remote_object(data: dict[str, Any]) -> RemoteObject:
    parents = data.get("parents")
    # Drive reports int64 sizes as decimal strings; folders have none.
    size = data.get("size")
    if isinstance(size, str):
        size = int(size) if size.isdigit() else None
    elif not isinstance(size, int):
        size = None

    return RemoteObject(
        id=_str_field(data, "id"),
        name=_str_field(data, "name"),
        mime_type=_str_field(data, "mimeType"),
        parents=list(parents) if isinstance(parents, list) else [],
        trashed=bool(data.get("trashed", False)),
        modified_time=parse_drive_time(data.get("modifiedTime")),
        size=size,
    )


def _http_error_to_info(exc: Any) -> HttpErrorInfo:
    """Status line plus the first entry of Drive's `error.errors` list."""
    resp = getattr(exc, "resp", None)
    status_code = getattr(resp, "status", None)
    reason = getattr(resp, "reason", None)
    message = None
    details: dict[str, Any] = {}

    content = getattr(exc, "content", None)
    if isinstance(content, (bytes, bytearray)):
        try:
            error = json.loads(content.decode("utf-8")).get("error", {})
            message = error.get("message") or None
            first = (error.get("errors") or [None])[0]
        except (ValueError, AttributeError, TypeError, KeyError):
            # Non-JSON bodies keep the status line only.
            first = None
        if isinstance(first, dict):
            details["domain"] = first.get("domain")
            details["reason_detail"] = first.get("reason")
            if isinstance(first.get("reason"), str):
                reason = first["reason"]

    return HttpErrorInfo(
        status_code=status_code if isinstance(status_code, int) else 0,
        reason=reason if isinstance(reason, str) else None,
        message=message,
        details=details or None,
    )
