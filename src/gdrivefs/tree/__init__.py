"""Path emulation over Drive's id graph."""

from __future__ import annotations

from .cache import UNKNOWN, ResolutionCache
from .resolver import PathResolver
from .walker import TreeWalker, to_attributes

__all__ = ["UNKNOWN", "ResolutionCache", "PathResolver", "TreeWalker", "to_attributes"]
