"""Shared test data builders."""

from typing import Any

COFFEE_SHOP_SCRIPT = (
    "INT. COFFEE SHOP - DAY\n"
    "John sits.\n"
    "\n"
    "EXT. STREET - NIGHT\n"
    "John walks."
)

ANALYSIS_JSON = (
    '{"title": "Coffee Break", "summary": "John waits. Nobody comes.", '
    '"cast": ["JOHN", "BARISTA"], "complexity": "Medium", "time_of_day": "☁️"}'
)


def analysis(complexity: str = "Low", cast: list[str] | None = None, **extra: Any) -> dict:
    """Analysis payload accepted by the scene model."""
    return {"complexity": complexity, "cast": cast or [], **extra}
