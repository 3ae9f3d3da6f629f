"""Scene analysis and AI writing assistance."""

from __future__ import annotations

from scriptboard.analysis.analyzer import LLMSceneAnalyzer
from scriptboard.analysis.assistant import ScriptAssistant
from scriptboard.analysis.base import BaseSceneAnalysisAdapter
from scriptboard.analysis.models import SceneWithAnalysis
from scriptboard.analysis.responses import parse_json_payload, strip_code_fences

__all__ = [
    "BaseSceneAnalysisAdapter",
    "LLMSceneAnalyzer",
    "SceneWithAnalysis",
    "ScriptAssistant",
    "parse_json_payload",
    "strip_code_fences",
]
