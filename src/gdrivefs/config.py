"""Adapter configuration and credential selection."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from gdrivefs.auth import AuthInfo
from gdrivefs.errors import InvalidArgumentError
from gdrivefs.models import Visibility

DEFAULT_ROOT_FOLDER_ID: str = "root"
DEFAULT_SCOPES: tuple[str, ...] = ("https://www.googleapis.com/auth/drive",)

_TRUE_STRINGS = {"1", "true", "yes", "on"}
_FALSE_STRINGS = {"0", "false", "no", "off", ""}

# Keys understood by from_mapping / from_env (env names are upper-cased + prefixed).
_CONFIG_KEYS: tuple[str, ...] = (
    "root",
    "visibility",
    "ignore_visibility_changes",
    "soft_delete",
    "supports_all_drives",
    "scopes",
    "service_account",
    "subject",
    "client_id",
    "client_secret",
    "refresh_token",
    "access_token",
    "client_secrets_file",
    "token_file",
)


def normalize_root_folder_id(value: Optional[str]) -> str:
    """None, "" and "/" all mean the Drive root."""
    if value is None:
        return DEFAULT_ROOT_FOLDER_ID
    value = value.strip()
    if value in ("", "/"):
        return DEFAULT_ROOT_FOLDER_ID
    return value


@dataclass(frozen=True)
class AdapterConfig:
    """
    Behaviour switches for GoogleDriveAdapter.

    Attributes:
        root_folder_id: Drive folder that plays the role of "/".
        visibility: value reported by visibility() and listings.
        ignore_visibility_changes: when True, set_visibility() is a logged
            no-op instead of raising.
        soft_delete: move to trash instead of deleting permanently.
        supports_all_drives: pass supportsAllDrives to every request.
        scopes: OAuth scopes used when building the Drive service.
    """

    root_folder_id: str = DEFAULT_ROOT_FOLDER_ID
    visibility: str = Visibility.PUBLIC
    ignore_visibility_changes: bool = False
    soft_delete: bool = False
    supports_all_drives: bool = True
    scopes: tuple[str, ...] = field(default=DEFAULT_SCOPES)

    def __post_init__(self) -> None:
        object.__setattr__(self, "root_folder_id", normalize_root_folder_id(self.root_folder_id))
        if self.visibility not in Visibility.ALL:
            raise InvalidArgumentError(
                f"visibility must be one of {Visibility.ALL}",
                details={"visibility": self.visibility},
            )
        scopes = tuple(self.scopes)
        if not scopes:
            raise InvalidArgumentError("scopes must not be empty")
        object.__setattr__(self, "scopes", scopes)

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any]) -> "AdapterConfig":
        """Build from a disk-style config dict (`root`, `visibility`, ...)."""
        kwargs: dict[str, Any] = {
            "root_folder_id": config.get("root"),
            "visibility": config.get("visibility") or Visibility.PUBLIC,
        }
        for key in ("ignore_visibility_changes", "soft_delete", "supports_all_drives"):
            if key in config:
                kwargs[key] = _to_bool(config[key], key)

        scopes = config.get("scopes")
        if isinstance(scopes, str):
            scopes = [s.strip() for s in scopes.split(",") if s.strip()]
        if scopes:
            kwargs["scopes"] = tuple(scopes)

        return cls(**kwargs)

    @classmethod
    def from_env(
        cls,
        prefix: str = "GDRIVEFS_",
        environ: Optional[Mapping[str, str]] = None,
    ) -> "AdapterConfig":
        return cls.from_mapping(read_env_mapping(prefix, environ))


def read_env_mapping(
    prefix: str = "GDRIVEFS_",
    environ: Optional[Mapping[str, str]] = None,
) -> dict[str, str]:
    """Collect known config keys from `PREFIX<KEY>` environment variables."""
    env = os.environ if environ is None else environ
    mapping: dict[str, str] = {}
    for key in _CONFIG_KEYS:
        value = env.get(prefix + key.upper())
        if value is not None and value.strip():
            mapping[key] = value.strip()
    return mapping


def auth_info_from_mapping(config: Mapping[str, Any]) -> AuthInfo:
    """
    Choose the authentication method from a config dict.

    Order: service account file, refresh-token credentials, installed-app OAuth.
    """
    if config.get("service_account"):
        data: dict[str, Any] = {"service_account_file": config["service_account"]}
        if config.get("subject"):
            data["subject"] = config["subject"]
        return AuthInfo(kind="service_account", data=data)

    if config.get("client_id") and config.get("client_secret") and config.get("refresh_token"):
        data = {
            key: config[key]
            for key in ("client_id", "client_secret", "refresh_token", "access_token")
            if config.get(key)
        }
        return AuthInfo(kind="authorized_user", data=data)

    if config.get("client_secrets_file") and config.get("token_file"):
        return AuthInfo(
            kind="oauth",
            data={
                "client_secrets_file": config["client_secrets_file"],
                "token_file": config["token_file"],
            },
        )

    raise InvalidArgumentError("Google Drive credentials are not properly configured")


def _to_bool(value: Any, key: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    raise InvalidArgumentError(
        f"{key} must be a boolean",
        details={"key": key, "value": value},
    )
