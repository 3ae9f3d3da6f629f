"""Domain models for the production board."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator

from scriptboard.exceptions import ValidationError

UNSCHEDULED = "unscheduled"
SCHEDULED = "scheduled"
SHOT = "shot"
EDIT = "edit"


class Complexity(str, Enum):
    """Coarse production difficulty of a scene."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"

    @property
    def rank(self) -> int:
        """Ordering rank: Low=1, Medium=2, High=3."""
        return {"Low": 1, "Medium": 2, "High": 3}[self.value]

    @classmethod
    def _missing_(cls, value: object) -> Complexity | None:
        if isinstance(value, str):
            normalized = value.strip().lower()
            for member in cls:
                if member.value.lower() == normalized:
                    return member
        return None


_VARIATION_SELECTOR = "\ufe0f"

_TIME_WORDS = {
    "MORNING": "☁️",
    "DAY": "☁️",
    "AFTERNOON": "☀️",
    "EVENING": "🌤️",
    "NIGHT": "🌙",
}


class TimeOfDay(str, Enum):
    """Lighting/time symbol for a scene."""

    MORNING = "☁️"
    AFTERNOON = "☀️"
    EVENING = "🌤️"
    NIGHT = "🌙"

    @classmethod
    def _missing_(cls, value: object) -> TimeOfDay | None:
        if not isinstance(value, str):
            return None
        text = value.strip()
        if text.upper() in _TIME_WORDS:
            return cls(_TIME_WORDS[text.upper()])
        bare = text.replace(_VARIATION_SELECTOR, "")
        for member in cls:
            if member.value.replace(_VARIATION_SELECTOR, "") == bare:
                return member
        return None


def _parse_time_of_day(value: Any) -> TimeOfDay | None:
    """Coerce loose time-of-day input; unknown text raises ValueError."""
    if value is None or isinstance(value, TimeOfDay):
        return value
    if isinstance(value, str):
        if not value.strip():
            return None
        return TimeOfDay(value)
    raise ValueError(f"time_of_day must be text, got {type(value).__name__}")


class SortKey(str, Enum):
    """Sort orders offered by the board."""

    SCENE_NUMBER = "scene_number"
    COMPLEXITY = "complexity"
    CAST_SIZE = "cast_size"
    SHOOT_DATE_ASC = "shoot_date_asc"
    SHOOT_DATE_DESC = "shoot_date_desc"


class SceneAnalysis(BaseModel):
    """Structured metadata produced by scene analysis."""

    title: str = ""
    summary: str = ""
    cast: list[str] = Field(default_factory=list)
    complexity: Complexity
    time_of_day: TimeOfDay | None = None

    @field_validator("complexity", mode="before")
    @classmethod
    def parse_complexity(cls, v: Any) -> Any:
        """Accept any casing of Low/Medium/High."""
        if isinstance(v, str):
            return Complexity(v)
        return v

    @field_validator("cast", mode="before")
    @classmethod
    def clean_cast(cls, v: Any) -> Any:
        """Drop blank names and surrounding whitespace."""
        if v is None:
            return []
        if isinstance(v, list):
            return [str(name).strip() for name in v if str(name).strip()]
        return v

    @field_validator("time_of_day", mode="before")
    @classmethod
    def parse_time_of_day(cls, v: Any) -> Any:
        """Accept symbol variants and words; blank means absent."""
        return _parse_time_of_day(v)


class Scene(BaseModel):
    """A scene record as held by the scene store."""

    id: str
    scene_number: str = ""
    slugline: str = ""
    body: str = ""
    status: str = UNSCHEDULED
    completed: bool = False
    shoot_date: str | None = None
    time_of_day: TimeOfDay | None = None
    characters: list[str] = Field(default_factory=list)
    analysis: SceneAnalysis | None = None
    custom_field_values: dict[str, Any] = Field(default_factory=dict)

    @field_validator("time_of_day", mode="before")
    @classmethod
    def parse_time_of_day(cls, v: Any) -> Any:
        """Accept symbol variants and words; blank means absent."""
        return _parse_time_of_day(v)

    @field_validator("status", mode="before")
    @classmethod
    def default_status(cls, v: Any) -> Any:
        """Missing or blank status means unscheduled."""
        if v is None or (isinstance(v, str) and not v.strip()):
            return UNSCHEDULED
        return v

    @property
    def effective_status(self) -> str:
        """Status with a blank value read as unscheduled."""
        return self.status or UNSCHEDULED

    @property
    def cast_size(self) -> int:
        """Larger of the analysed cast and the character list."""
        analysed = len(self.analysis.cast) if self.analysis else 0
        return max(analysed, len(self.characters))

    def document(self) -> dict[str, Any]:
        """Stored fields of the scene, without its id."""
        return self.model_dump(mode="json", exclude={"id"})


SCENE_FIELDS = frozenset(name for name in Scene.model_fields if name != "id")


class FieldType(str, Enum):
    """Value shapes a custom field can declare."""

    SHORT_TEXT = "short_text"
    LONG_TEXT = "long_text"
    SINGLE_SELECT = "single_select"
    MULTI_SELECT = "multi_select"

    @property
    def is_select(self) -> bool:
        """Whether the field takes values from its option list."""
        return self in (FieldType.SINGLE_SELECT, FieldType.MULTI_SELECT)


class FieldOption(BaseModel):
    """A selectable option with its display colour tag."""

    label: str
    color: str = "gray"


class CustomFieldDefinition(BaseModel):
    """Project-scoped schema for an extra scene attribute."""

    id: str
    name: str
    type: FieldType = FieldType.SHORT_TEXT
    options: list[FieldOption] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        """Field names are trimmed and must not be empty."""
        v = v.strip()
        if not v:
            raise ValueError("Custom field name cannot be empty")
        return v

    def option_labels(self) -> list[str]:
        """Labels of the declared options, in order."""
        return [option.label for option in self.options]

    def validate_value(self, value: Any) -> Any:
        """Check a stored value against this definition's type.

        Args:
            value: Candidate value for a scene

        Returns:
            The value, normalised (multi-select values become a list)

        Raises:
            ValidationError: If the value does not fit the declared type
        """
        if value is None:
            return None
        if self.type in (FieldType.SHORT_TEXT, FieldType.LONG_TEXT):
            if not isinstance(value, str):
                raise self._invalid(value, "expected text")
            return value
        labels = self.option_labels()
        if self.type == FieldType.SINGLE_SELECT:
            if not isinstance(value, str):
                raise self._invalid(value, "expected a single option label")
            if value and value not in labels:
                raise self._invalid(value, f"choose one of: {', '.join(labels)}")
            return value
        if isinstance(value, str):
            value = [value]
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            raise self._invalid(value, "expected a list of option labels")
        unknown = [v for v in value if v not in labels]
        if unknown:
            raise self._invalid(value, f"unknown options: {', '.join(unknown)}")
        return value

    def _invalid(self, value: Any, hint: str) -> ValidationError:
        return ValidationError(
            message=f"Invalid value for custom field '{self.name}'",
            hint=hint,
            details={"field_id": self.id, "type": self.type.value, "value": value},
        )
