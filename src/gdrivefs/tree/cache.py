"""Path -> Drive object memo shared by one adapter instance."""

from __future__ import annotations

import threading
from typing import Optional, Union

from gdrivefs.models import RemoteObject
from gdrivefs.util.paths import is_same_or_descendant


class _Unknown:
    """Marker for "never looked up" (distinct from a cached absence)."""

    _instance: Optional["_Unknown"] = None

    def __new__(cls) -> "_Unknown":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNKNOWN"

    def __bool__(self) -> bool:
        return False


UNKNOWN = _Unknown()

CacheValue = Union[RemoteObject, None, _Unknown]


class ResolutionCache:
    """
    Maps normalized paths to a resolved RemoteObject or to None (absent).

    Two namespaces share the same keys. The default one holds answers to
    "what is at this path" (first match of any kind); the `folders_only`
    one holds answers to "which folder is at this path" (first folder).
    They differ when a file and a folder share a name, so neither may stand
    in for the other.

    Keys are LogicalPath strings, so raw inputs that normalize the same way
    share an entry. There is no TTL; entries leave only through
    `invalidate` / `clear`, which mutating adapter operations call.
    The maps are guarded by a lock so concurrent callers cannot corrupt
    them; racing lookups may still both hit Drive.
    """

    def __init__(self) -> None:
        self._entries: dict[str, Optional[RemoteObject]] = {}
        self._folders: dict[str, Optional[RemoteObject]] = {}
        self._lock = threading.Lock()

    def _table(self, folders_only: bool) -> dict[str, Optional[RemoteObject]]:
        return self._folders if folders_only else self._entries

    def get(self, path: str, *, folders_only: bool = False) -> CacheValue:
        with self._lock:
            return self._table(folders_only).get(path, UNKNOWN)

    def put(self, path: str, value: Optional[RemoteObject], *, folders_only: bool = False) -> None:
        with self._lock:
            self._table(folders_only)[path] = value

    def put_if_unknown(
        self,
        path: str,
        value: Optional[RemoteObject],
        *,
        folders_only: bool = False,
    ) -> None:
        with self._lock:
            self._table(folders_only).setdefault(path, value)

    def invalidate(self, path: str, *, recursive: bool = False) -> None:
        """Drop `path` (and with `recursive`, every path beneath it) from both namespaces."""
        with self._lock:
            for table in (self._entries, self._folders):
                if not recursive:
                    table.pop(path, None)
                    continue
                for key in [k for k in table if is_same_or_descendant(k, path)]:
                    del table[key]

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._folders.clear()

    def __contains__(self, path: object) -> bool:
        with self._lock:
            return path in self._entries or path in self._folders

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries) + len(self._folders)
