"""Schedule projection and production statistics."""

from __future__ import annotations

from scriptboard.schedule.projector import project
from scriptboard.schedule.stats import ProductionStats, compute_stats, is_done, upcoming

__all__ = [
    "ProductionStats",
    "compute_stats",
    "is_done",
    "project",
    "upcoming",
]
