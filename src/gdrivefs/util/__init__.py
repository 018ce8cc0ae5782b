from .mime import (
    DEFAULT_FILE_MIME,
    FOLDER_MIME,
    GOOGLE_APPS_PREFIX,
    guess_mime_type,
    is_download_disallowed,
    is_folder,
    is_google_app,
)
from .paths import (
    ROOT_PATH,
    basename,
    dirname,
    is_root,
    is_same_or_descendant,
    join,
    normalize_path,
    split_path,
)
from .time import now_utc, parse_drive_time, parse_rfc3339, to_rfc3339

__all__ = [
    "FOLDER_MIME",
    "DEFAULT_FILE_MIME",
    "GOOGLE_APPS_PREFIX",
    "is_folder",
    "is_google_app",
    "is_download_disallowed",
    "guess_mime_type",
    "ROOT_PATH",
    "normalize_path",
    "split_path",
    "is_root",
    "dirname",
    "basename",
    "join",
    "is_same_or_descendant",
    "now_utc",
    "parse_rfc3339",
    "to_rfc3339",
    "parse_drive_time",
]
