"""Production workflows over the scene store."""

from __future__ import annotations

from scriptboard.api.models import AnalyzeResult, IntakeResult, SaveResult
from scriptboard.api.production import ProductionService

__all__ = [
    "AnalyzeResult",
    "IntakeResult",
    "ProductionService",
    "SaveResult",
]
