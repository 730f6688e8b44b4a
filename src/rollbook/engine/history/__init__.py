"""Undo/redo history."""

from .manager import HistoryManager, Snapshot

__all__ = ["HistoryManager", "Snapshot"]
