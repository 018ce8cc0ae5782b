"""Remote object store implementations for gdrivefs."""

from __future__ import annotations

from .drive_controller import GoogleDriveController
from .memory import InMemoryDriveController

__all__ = ["GoogleDriveController", "InMemoryDriveController"]
