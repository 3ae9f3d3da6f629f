"""Deterministic screenplay segmentation into scene drafts."""

from __future__ import annotations

import re

from scriptboard.parser.models import SceneDraft, SluglineInfo

SCENE_HEADING_PATTERN = re.compile(r"^(?:INT\.|EXT\.|I/E\.|INT/EXT\.)", re.IGNORECASE)

# Any newline convention: CRLF, LF or a bare CR
_LINE_BREAK = re.compile(r"\r\n|\r|\n")

# Longest prefixes first so INT./EXT. is not read as plain INT.
_SCENE_TYPES = [
    ("INT./EXT.", "INT/EXT"),
    ("INT/EXT.", "INT/EXT"),
    ("I/E.", "INT/EXT"),
    ("INT.", "INT"),
    ("EXT.", "EXT"),
]

_TIME_INDICATORS = [
    "MOMENTS LATER",
    "CONTINUOUS",
    "AFTERNOON",
    "MORNING",
    "EVENING",
    "SUNRISE",
    "SUNSET",
    "NIGHT",
    "LATER",
    "DAWN",
    "DUSK",
    "NOON",
    "DAY",
]


def is_scene_heading(line: str) -> bool:
    """Check whether a line opens a new scene.

    Args:
        line: A single line of script text

    Returns:
        True if the trimmed line starts with INT., EXT., I/E. or INT/EXT.
    """
    return bool(SCENE_HEADING_PATTERN.match(line.strip()))


def segment(script_text: str) -> list[SceneDraft]:
    """Split raw script text into ordered scene drafts.

    Text before the first scene heading is discarded. Scene numbers are
    assigned sequentially as headings are met, starting at 1, and ignore any
    numbering present in the source. Scenes repeating an earlier
    (slugline, body) pair are dropped, keeping the first occurrence.

    Args:
        script_text: Raw screenplay text in any line-ending convention

    Returns:
        Scene drafts in source order; empty when no heading is found
    """
    scenes: list[SceneDraft] = []
    current: SceneDraft | None = None
    buffer: list[str] = []
    counter = 1

    def finalize(scene: SceneDraft) -> None:
        if not scene.slugline:
            return
        scene.body = "\n".join(buffer).strip()
        if scene.body or scene.slugline:
            scenes.append(scene)

    for line in _LINE_BREAK.split(script_text):
        if is_scene_heading(line):
            if current is not None:
                finalize(current)
            current = SceneDraft(scene_number=str(counter), slugline=line.strip())
            counter += 1
            buffer = []
        elif current is not None:
            buffer.append(line)

    if current is not None:
        finalize(current)

    return _drop_repeated_scenes(scenes)


def _drop_repeated_scenes(scenes: list[SceneDraft]) -> list[SceneDraft]:
    """Keep only the first scene for each (slugline, body) pair."""
    seen: set[tuple[str, str]] = set()
    unique: list[SceneDraft] = []
    for scene in scenes:
        key = (scene.slugline, scene.body)
        if key in seen:
            continue
        seen.add(key)
        unique.append(scene)
    return unique


def parse_slugline(slugline: str) -> SluglineInfo:
    """Split a scene heading into type, location and time of day.

    Args:
        slugline: Scene heading (e.g., "INT. COFFEE SHOP - DAY")

    Returns:
        SluglineInfo; location and time are None when absent
    """
    heading = slugline.strip()
    heading_upper = heading.upper()

    scene_type = ""
    rest = heading
    for prefix, kind in _SCENE_TYPES:
        if heading_upper.startswith(prefix):
            scene_type = kind
            rest = heading[len(prefix) :].strip()
            break

    location: str | None = rest
    time_of_day: str | None = None
    if rest.startswith("- "):
        location, last_part = None, rest[2:]
    elif " - " in rest:
        location, last_part = rest.rsplit(" - ", 1)
    else:
        last_part = ""

    if last_part:
        time_of_day = _find_time_indicator(last_part)
        if time_of_day is None and location is not None:
            # Not a time word, so the dash belongs to the location
            location = rest

    location = location.strip() if location else None
    return SluglineInfo(
        scene_type=scene_type,
        location=location or None,
        time_of_day=time_of_day,
    )


def _find_time_indicator(text: str) -> str | None:
    """Return the first time-of-day word found in text, if any."""
    upper = text.upper()
    if re.search(r"\bMIDNIGHT\b", upper):
        return "NIGHT"
    for indicator in _TIME_INDICATORS:
        if re.search(rf"\b{re.escape(indicator)}\b", upper):
            return indicator
    return None
