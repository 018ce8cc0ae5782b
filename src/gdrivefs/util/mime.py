"""MIME types with special meaning on Drive."""

from __future__ import annotations

import mimetypes

GOOGLE_APPS_PREFIX: str = "application/vnd.google-apps."
FOLDER_MIME: str = GOOGLE_APPS_PREFIX + "folder"

# Uploads whose name has no recognizable extension.
DEFAULT_FILE_MIME: str = "application/octet-stream"


def is_folder(mime_type: str) -> bool:
    return mime_type == FOLDER_MIME


def is_google_app(mime_type: str) -> bool:
    """Docs, Sheets, Slides, Forms, shortcuts, ... (folders included)."""
    return mime_type.startswith(GOOGLE_APPS_PREFIX)


def is_download_disallowed(mime_type: str) -> bool:
    """
    Folders and Google-apps documents carry no media content; reading them
    would need export handling, which is not supported.
    """
    return is_google_app(mime_type)


def guess_mime_type(name: str) -> str:
    """Guess an upload MIME type from a file name."""
    guessed, _ = mimetypes.guess_type(name, strict=False)
    return guessed or DEFAULT_FILE_MIME
