"""Scene stores for ScriptBoard."""

from __future__ import annotations

from .base import SceneStore, SnapshotCallback, Subscription
from .memory import MemorySceneStore
from .sqlite import SQLiteSceneStore

__all__ = [
    "MemorySceneStore",
    "SQLiteSceneStore",
    "SceneStore",
    "SnapshotCallback",
    "Subscription",
]
