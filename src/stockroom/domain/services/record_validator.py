"""Record validation service for validating request bodies against a field schema.

Every violated field is reported, in schema order, so a client can fix
all problems in one round-trip. Fields outside the schema are ignored
and ``id`` is never taken from input.
"""

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from stockroom.core.errors import Failure
from stockroom.domain.entities.field_spec import FieldSpec, FieldType
from stockroom.domain.entities.product import Record

BODY_NOT_OBJECT_MESSAGE = "Request body must be a JSON object"


@dataclass
class RecordValidationError:
    """A single record validation error."""

    field: str
    message: str
    code: str


@dataclass(frozen=True)
class ValidationResult:
    """Normalized record or the list of errors, never both."""

    record: Record | None = None
    errors: tuple[RecordValidationError, ...] = field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        return not self.errors

    def to_failure(self) -> Failure:
        """Collapse the errors into a single validation failure."""
        if self.ok:
            raise ValueError("Cannot build a failure from a successful validation")
        return Failure.validation_failed([error.message for error in self.errors])


class RecordValidator:
    """Validator for record data against a field schema.

    Validates presence, types and bounds, and normalizes text values.
    """

    @classmethod
    def validate_text(cls, value: Any, spec: FieldSpec) -> RecordValidationError | None:
        """Validate a text field value."""
        if not isinstance(value, str):
            return RecordValidationError(
                field=spec.name, message=spec.error_message, code="invalid_type"
            )

        stripped = value.strip()
        if spec.required and not stripped:
            return RecordValidationError(
                field=spec.name, message=spec.error_message, code="blank_value"
            )

        if spec.max is not None and len(stripped if spec.trim else value) > spec.max:
            return RecordValidationError(
                field=spec.name, message=spec.error_message, code="too_long"
            )
        return None

    @classmethod
    def validate_number(cls, value: Any, spec: FieldSpec) -> RecordValidationError | None:
        """Validate a number field value."""
        # bool is a subclass of int
        if not isinstance(value, (int, float)) or isinstance(value, bool):
            return RecordValidationError(
                field=spec.name, message=spec.error_message, code="invalid_type"
            )

        # Only floats can be non-finite; huge ints overflow math.isfinite
        if isinstance(value, float) and not math.isfinite(value):
            return RecordValidationError(
                field=spec.name, message=spec.error_message, code="invalid_type"
            )

        if spec.min is not None and value < spec.min:
            return RecordValidationError(
                field=spec.name, message=spec.error_message, code="below_minimum"
            )

        if spec.max is not None and value > spec.max:
            return RecordValidationError(
                field=spec.name, message=spec.error_message, code="above_maximum"
            )
        return None

    @classmethod
    def validate_boolean(cls, value: Any, spec: FieldSpec) -> RecordValidationError | None:
        """Validate a boolean field value."""
        if not isinstance(value, bool):
            return RecordValidationError(
                field=spec.name, message=spec.error_message, code="invalid_type"
            )
        return None

    @classmethod
    def validate_field_value(cls, value: Any, spec: FieldSpec) -> RecordValidationError | None:
        """Validate a single field value against its specification.

        Args:
            value: The value to validate.
            spec: The field specification.

        Returns:
            RecordValidationError if invalid, None if valid.
        """
        validators = {
            FieldType.TEXT: cls.validate_text,
            FieldType.NUMBER: cls.validate_number,
            FieldType.BOOLEAN: cls.validate_boolean,
        }
        return validators[spec.type](value, spec)

    @staticmethod
    def normalize_value(value: Any, spec: FieldSpec) -> Any:
        """Apply trimming and case folding to an already valid value."""
        if spec.type != FieldType.TEXT:
            return value
        if spec.trim:
            value = value.strip()
        if spec.lowercase:
            value = value.lower()
        return value

    @classmethod
    def validate(
        cls,
        data: Any,
        schema: tuple[FieldSpec, ...] | list[FieldSpec],
        partial: bool = False,
    ) -> ValidationResult:
        """Validate a request body against a schema.

        Args:
            data: The decoded request body.
            schema: Field specifications, in reporting order.
            partial: If True, only validate fields present in data (for updates).

        Returns:
            ValidationResult holding the normalized record (only schema
            fields that were present) or every error found.
        """
        if not isinstance(data, Mapping):
            return ValidationResult(
                errors=(
                    RecordValidationError(
                        field="body", message=BODY_NOT_OBJECT_MESSAGE, code="invalid_body"
                    ),
                )
            )

        errors: list[RecordValidationError] = []
        processed: Record = {}

        for spec in schema:
            if spec.name not in data:
                if spec.required and not partial:
                    errors.append(
                        RecordValidationError(
                            field=spec.name,
                            message=spec.error_message,
                            code="required_missing",
                        )
                    )
                continue

            value = data[spec.name]
            error = cls.validate_field_value(value, spec)
            if error:
                errors.append(error)
            else:
                processed[spec.name] = cls.normalize_value(value, spec)

        if errors:
            return ValidationResult(errors=tuple(errors))
        return ValidationResult(record=processed)
