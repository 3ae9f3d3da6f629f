"""Normalization of model responses before parsing."""

from __future__ import annotations

import json
import re
from typing import Any

_FENCE = re.compile(r"^\s*```[A-Za-z0-9_-]*[ \t]*\r?\n?(.*?)\r?\n?```\s*$", re.DOTALL)


def strip_code_fences(text: str, language: str | None = None) -> str:
    """Remove a surrounding markdown code fence, if present.

    Args:
        text: Raw model output
        language: When set, only a fence tagged with this language (or an
            untagged fence) is removed

    Returns:
        Inner text, trimmed; the input trimmed when no fence surrounds it
    """
    stripped = text.strip()
    match = _FENCE.match(stripped)
    if not match:
        return stripped
    if language is not None:
        tag = stripped[3:].split("\n", 1)[0].strip().lower()
        if tag and tag != language.lower():
            return stripped
    return match.group(1).strip()


def parse_json_payload(text: str) -> Any:
    """Parse a model response as JSON after stripping code fences.

    Raises:
        ValueError: If the text is empty or not valid JSON
    """
    cleaned = strip_code_fences(text)
    if not cleaned:
        raise ValueError("Empty response")
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError as e:
        embedded = _embedded_json(cleaned)
        if embedded is not None:
            return embedded
        raise ValueError(f"Response is not valid JSON: {e.msg}") from e


def _embedded_json(text: str) -> Any:
    # Prose around a single JSON object or array
    for opener, closer in (("{", "}"), ("[", "]")):
        start, end = text.find(opener), text.rfind(closer)
        if start != -1 and end > start:
            try:
                return json.loads(text[start : end + 1])
            except json.JSONDecodeError:
                continue
    return None
