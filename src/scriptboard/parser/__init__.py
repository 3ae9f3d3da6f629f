"""Screenplay segmentation for ScriptBoard."""

from __future__ import annotations

from .models import SceneDraft, SluglineInfo
from .segmenter import is_scene_heading, parse_slugline, segment

__all__ = ["SceneDraft", "SluglineInfo", "is_scene_heading", "parse_slugline", "segment"]
