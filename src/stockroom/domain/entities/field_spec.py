"""Field specifications for collection records.

A field specification is the closed description of one input field:
its type, whether it is required, its bounds and how it is normalized.
"""

from dataclasses import dataclass
from enum import Enum


class FieldType(str, Enum):
    """Supported field types for record schemas."""

    TEXT = "text"
    NUMBER = "number"
    BOOLEAN = "boolean"


@dataclass(frozen=True)
class FieldSpec:
    """Specification of a single record field.

    Attributes:
        name: Field name as it appears in request bodies and records.
        type: Expected value type.
        required: Whether the field must be present (and, for text, non-blank).
        min: Lower bound for numbers.
        max: Upper bound for numbers, or maximum length for text.
        trim: Strip surrounding whitespace from text values.
        lowercase: Lower-case text values after trimming.
        label: Human-readable name used in error messages.
        message: Error message override.
    """

    name: str
    type: FieldType
    required: bool = False
    min: float | None = None
    max: float | None = None
    trim: bool = False
    lowercase: bool = False
    label: str | None = None
    message: str | None = None

    @property
    def error_message(self) -> str:
        """Message reported when a value violates this specification."""
        if self.message:
            return self.message

        label = self.label or self.name
        prefix = f"{label} is required and must be" if self.required else f"{label} must be"
        return f"{prefix} {self._describe_expected()}"

    def _describe_expected(self) -> str:
        if self.type == FieldType.BOOLEAN:
            return "a boolean value"

        if self.type == FieldType.TEXT:
            text = "a non-empty string" if self.required else "a string"
            if self.max is not None:
                text += f" of at most {self.max:g} characters"
            return text

        if self.min is not None and self.max is not None:
            return f"a number between {self.min:g} and {self.max:g}"
        if self.min == 0:
            return "a non-negative number"
        if self.min is not None:
            return f"a number of at least {self.min:g}"
        if self.max is not None:
            return f"a number of at most {self.max:g}"
        return "a number"
