"""JSON output formatter for CLI."""

from __future__ import annotations

import json
from dataclasses import asdict, is_dataclass
from typing import Any

from scriptboard.cli.formatters.base import OutputFormat, OutputFormatter


def to_jsonable(data: Any) -> Any:
    """Convert models, dataclasses and collections to JSON-ready values."""
    if hasattr(data, "model_dump"):
        return data.model_dump(mode="json")
    if is_dataclass(data) and not isinstance(data, type):
        return to_jsonable(asdict(data))
    if isinstance(data, dict):
        return {str(key): to_jsonable(value) for key, value in data.items()}
    if isinstance(data, list | tuple):
        return [to_jsonable(item) for item in data]
    return data


class JsonFormatter(OutputFormatter[Any]):
    """Generic JSON formatter for CLI output."""

    def format(self, data: Any, format_type: OutputFormat = OutputFormat.JSON) -> str:  # noqa: ARG002
        """Format data as JSON.

        Args:
            data: Data to format
            format_type: Output format type (ignored, always JSON)

        Returns:
            JSON string
        """
        return json.dumps(to_jsonable(data), default=str, indent=2, ensure_ascii=False)

    def format_success(self, message: str, data: Any = None) -> str:
        """Format a success response."""
        response: dict[str, Any] = {"success": True, "message": message}
        if data is not None:
            response["data"] = to_jsonable(data)
        return json.dumps(response, default=str, indent=2, ensure_ascii=False)

    def format_error_response(self, error: str | Exception, code: int = 1) -> str:
        """Format an error response.

        Args:
            error: Error message or exception
            code: Error code

        Returns:
            JSON string
        """
        error_msg = getattr(error, "message", None) or str(error)
        response = {"success": False, "error": error_msg, "code": code}
        return json.dumps(response, indent=2, ensure_ascii=False)
