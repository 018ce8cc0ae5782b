"""Credential loading and Drive service construction for gdrivefs."""

from __future__ import annotations

import logging
import os
from typing import Any, Optional, Sequence

from gdrivefs.errors import AuthError, InvalidArgumentError

from .auth_info import AuthInfo

logger = logging.getLogger(__name__)

DEFAULT_TOKEN_URI = "https://oauth2.googleapis.com/token"


class AuthClient:
    """
    Turn an AuthInfo into Google credentials and a Drive v3 service.

    Three credential sources are supported: a service account key file,
    a pre-issued refresh token, and the installed-app consent flow with
    its token cached on disk.
    """

    def __init__(self, auth_info: AuthInfo) -> None:
        self._auth_info = auth_info

    def get_credentials(self, scopes: Sequence[str], ensure_valid: bool = True):
        """
        Return google.auth credentials for `scopes`.

        With `ensure_valid`, expired credentials are refreshed (and, for the
        installed-app kind, the consent flow is run when no usable token
        is cached).

        Raises:
            AuthError: on load/refresh/flow failures.
            InvalidArgumentError: if scopes is empty or malformed.
        """
        if not scopes or not all(isinstance(s, str) and s.strip() for s in scopes):
            raise InvalidArgumentError("scopes must be a non-empty sequence of strings")

        scope_list = list(scopes)
        kind = self._auth_info.kind
        if kind == "service_account":
            return self._from_service_account(scope_list)
        if kind == "authorized_user":
            return self._from_refresh_token(scope_list, ensure_valid)
        return self._from_installed_app(scope_list, ensure_valid)

    def build_drive_service(self, scopes: Sequence[str], ensure_valid: bool = True):
        """Build a `googleapiclient` Drive v3 resource."""
        try:
            from googleapiclient.discovery import build
        except ImportError as exc:  # pragma: no cover
            raise _missing_library("google-api-python-client", exc) from exc

        creds = self.get_credentials(scopes=scopes, ensure_valid=ensure_valid)
        try:
            return build("drive", "v3", credentials=creds, cache_discovery=False)
        except Exception as exc:
            raise AuthError("Failed to build Drive service", cause=exc) from exc

    # ----------------------------
    # Credential sources
    # ----------------------------
    def _from_service_account(self, scopes: list[str]):
        try:
            from google.oauth2 import service_account
        except ImportError as exc:  # pragma: no cover
            raise _missing_library("google-auth", exc) from exc

        key_file = self._auth_info.service_account_file
        details = {"service_account_file": key_file}
        if not os.path.isfile(key_file):
            raise AuthError("Service account file not found", details=details)

        try:
            creds = service_account.Credentials.from_service_account_file(key_file, scopes=scopes)
        except Exception as exc:
            raise AuthError(
                "Failed to load service account credentials",
                details=details,
                cause=exc,
            ) from exc

        # Domain-wide delegation.
        subject = self._auth_info.data.get("subject")
        if isinstance(subject, str) and subject:
            creds = creds.with_subject(subject)
        return creds

    def _from_refresh_token(self, scopes: list[str], ensure_valid: bool):
        try:
            from google.oauth2.credentials import Credentials
        except ImportError as exc:  # pragma: no cover
            raise _missing_library("google-auth", exc) from exc

        data: dict[str, Any] = self._auth_info.data
        creds = Credentials(
            token=data.get("access_token") or None,
            refresh_token=data["refresh_token"],
            token_uri=data.get("token_uri") or DEFAULT_TOKEN_URI,
            client_id=data["client_id"],
            client_secret=data["client_secret"],
            scopes=scopes,
        )
        if ensure_valid and not creds.valid:
            _refresh(creds)
            logger.debug("Refreshed access token from refresh_token")
        return creds

    def _from_installed_app(self, scopes: list[str], ensure_valid: bool):
        creds = self._load_cached_token(scopes)
        if creds is not None and not ensure_valid:
            return creds

        if creds is not None and not creds.valid and creds.refresh_token:
            _refresh(creds, details={"token_file": self._auth_info.token_file})
            self._save_credentials(creds)

        if creds is not None and creds.valid:
            return creds
        return self._run_consent_flow(scopes)

    # ----------------------------
    # Installed-app helpers
    # ----------------------------
    def _load_cached_token(self, scopes: list[str]):
        token_file = self._auth_info.token_file
        if not os.path.exists(token_file):
            return None

        try:
            from google.oauth2.credentials import Credentials
        except ImportError as exc:  # pragma: no cover
            raise _missing_library("google-auth", exc) from exc

        try:
            return Credentials.from_authorized_user_file(token_file, scopes=scopes)
        except Exception as exc:
            raise AuthError(
                "Failed to load token_file",
                details={"token_file": token_file},
                cause=exc,
            ) from exc

    def _run_consent_flow(self, scopes: list[str]):
        try:
            from google_auth_oauthlib.flow import InstalledAppFlow
        except ImportError as exc:  # pragma: no cover
            raise _missing_library("google-auth-oauthlib", exc) from exc

        client_secrets = self._auth_info.client_secrets_file
        logger.info("Starting OAuth authorization flow (%s)", client_secrets)
        try:
            flow = InstalledAppFlow.from_client_secrets_file(client_secrets, scopes=scopes)
            creds = flow.run_local_server(port=0)
        except Exception as exc:
            raise AuthError(
                "OAuth authorization flow failed",
                details={
                    "client_secrets_file": client_secrets,
                    "token_file": self._auth_info.token_file,
                },
                cause=exc,
            ) from exc

        self._save_credentials(creds)
        return creds

    def _save_credentials(self, creds) -> None:
        token_file = self._auth_info.token_file
        try:
            token_dir = os.path.dirname(token_file)
            if token_dir:
                os.makedirs(token_dir, exist_ok=True)
            with open(token_file, "w", encoding="utf-8") as f:
                f.write(creds.to_json())
        except OSError as exc:
            raise AuthError(
                "Failed to save OAuth token file",
                details={"token_file": token_file},
                cause=exc,
            ) from exc


def _refresh(creds, details: Optional[dict[str, Any]] = None) -> None:
    try:
        from google.auth.transport.requests import Request
    except ImportError as exc:  # pragma: no cover
        raise _missing_library("google-auth", exc) from exc

    try:
        creds.refresh(Request())
    except Exception as exc:
        raise AuthError("Failed to refresh OAuth credentials", details=details, cause=exc) from exc


def _missing_library(package: str, exc: BaseException) -> AuthError:
    return AuthError(
        f"{package} is not available",
        details={"hint": f"Install {package}"},
        cause=exc,
    )
