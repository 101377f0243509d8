"""Sticky-to-task linking."""

from .sticky_linker import StickyTaskLinker

__all__ = ["StickyTaskLinker"]
