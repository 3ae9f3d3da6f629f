"""Custom exception hierarchy for ScriptBoard with helpful error messages."""

from __future__ import annotations

from typing import Any


class ScriptBoardError(Exception):
    """Base exception with helpful formatting for all ScriptBoard errors.

    Provides structured error messages with hints and details to help users
    understand and fix problems.
    """

    def __init__(
        self,
        message: str,
        hint: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize exception with structured error information.

        Args:
            message: Primary error message describing what went wrong
            hint: Optional hint suggesting how to fix the problem
            details: Optional dictionary with additional debugging information
        """
        self.message = message
        self.hint = hint
        self.details = details
        super().__init__(self.format_error())

    def format_error(self) -> str:
        """Format the error message with hint and details.

        Returns:
            Formatted error string with all available information
        """
        output = f"Error: {self.message}"
        if self.hint:
            output += f"\nHint: {self.hint}"
        if self.details:
            details_str = "\n".join(
                f"  {key}: {value}" for key, value in self.details.items()
            )
            output += f"\nDetails:\n{details_str}"
        return output


class ConfigurationError(ScriptBoardError):
    """Configuration errors including invalid settings and missing config files."""

    pass


class StoreError(ScriptBoardError):
    """Scene store errors including failed reads, writes and subscriptions."""

    pass


class SceneNotFoundError(StoreError):
    """Raised when a scene id does not exist in the project."""

    def __init__(self, project_id: str, scene_id: str) -> None:
        """Initialize with the missing scene coordinates.

        Args:
            project_id: Project the lookup was scoped to
            scene_id: Scene id that was not found
        """
        self.project_id = project_id
        self.scene_id = scene_id
        super().__init__(
            message=f"Scene not found: {scene_id}",
            hint="Run 'scriptboard board' to list scene ids for the project",
            details={"project_id": project_id, "scene_id": scene_id},
        )


class ValidationError(ScriptBoardError):
    """Input validation errors with details about what was expected."""

    pass


class InvalidTransitionError(ValidationError):
    """Raised when a status write targets a column that does not exist."""

    def __init__(self, status: str, columns: list[str]) -> None:
        """Initialize with the rejected status and the live column set.

        Args:
            status: Requested status value
            columns: Columns currently defined for the project
        """
        self.status = status
        self.columns = list(columns)
        super().__init__(
            message=f"Unknown column '{status}'",
            hint="Add the column first with 'scriptboard column add'",
            details={"columns": ", ".join(columns)},
        )


class LLMError(ScriptBoardError):
    """LLM provider errors including configuration and API issues."""

    pass


class LLMProviderError(LLMError):
    """Generic LLM provider error for request and response failures."""

    pass


class ScriptParseError(LLMError):
    """Whole-script AI parsing failed; raised with a descriptive message."""

    pass


def check_config_keys(config: dict[str, Any]) -> None:
    """Check for common configuration mistakes.

    Args:
        config: Configuration dictionary to validate

    Raises:
        ConfigurationError: With hints about correct configuration keys
    """
    wrong_keys = {
        "db_path": "database_path",
        "api_key": "llm_api_key",  # pragma: allowlist secret
        "model": "llm_model",
        "columns": "default_columns",
        "default_column": "default_columns",
        "max_chars": "analysis_max_chars",
    }

    for wrong, correct in wrong_keys.items():
        if wrong in config:
            raise ConfigurationError(
                message=f"Invalid configuration key '{wrong}'",
                hint=f"Use '{correct}' instead of '{wrong}'",
                details={
                    "found_keys": list(config.keys()),
                    "invalid_key": wrong,
                    "correct_key": correct,
                },
            )
