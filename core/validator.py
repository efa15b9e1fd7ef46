from __future__ import annotations

import math
from typing import Any, Callable, Dict, List, Optional, Sequence, Type

from core.fields import (
    BooleanField,
    DateField,
    EnumField,
    FieldDescriptor,
    FieldError,
    NumberCheck,
    NumberField,
    StringField,
    StringFormat,
    ValidationResult,
    parse_input_fields,
)
from core.formats import is_date, is_email, is_url, is_uuid, matches_pattern


def _format_number(value: float) -> str:
    # Render 10.0 as "10", matching how the host prints numbers.
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _check_string(field: StringField) -> Optional[str]:
    value = field.stringData or ""
    fmt = field.stringFormat

    if field.required and value == "":
        return "String cannot be empty"
    if fmt is StringFormat.EMAIL:
        if not is_email(value):
            return "Invalid email format"
    elif fmt is StringFormat.URL:
        if field.required and value == "":
            return "URL cannot be empty"
        if value != "" and not is_url(value):
            return "Invalid URL format"
    elif fmt is StringFormat.UUID:
        if field.required and value == "":
            return "UUID cannot be empty"
        if value != "" and not is_uuid(value):
            return "Invalid UUID format"
    elif fmt is StringFormat.PATTERN:
        if field.pattern and not matches_pattern(value, field.pattern):
            return f"Value does not match pattern: {field.pattern}"
    return None


def _check_number(field: NumberField) -> Optional[str]:
    value = field.numberData
    low, high = field.minValue, field.maxValue

    if value is None:
        return "Value must be a number" if field.required else None
    if math.isnan(value):
        return "Value must be a valid number"

    check = field.numberValidationType
    too_low = low is not None and value < low
    too_high = high is not None and value > high

    if check is NumberCheck.MIN:
        if too_low:
            return f"Value must be greater than or equal to {_format_number(low)}"
    elif check is NumberCheck.MAX:
        if too_high:
            return f"Value must be less than or equal to {_format_number(high)}"
    elif check is NumberCheck.RANGE:
        if (too_low or too_high) and low is not None and high is not None:
            return (
                f"Value must be between {_format_number(low)} "
                f"and {_format_number(high)}"
            )
        # Half-open range: report the bound that is actually configured.
        if too_low:
            return f"Value must be greater than or equal to {_format_number(low)}"
        if too_high:
            return f"Value must be less than or equal to {_format_number(high)}"
    return None


def _check_boolean(field: BooleanField) -> Optional[str]:
    # False is a value; only absence fails a required boolean.
    if field.required and field.booleanData is None:
        return "Value must be a boolean"
    return None


def _check_date(field: DateField) -> Optional[str]:
    value = field.dateData or ""
    if field.required and value == "":
        return "Date cannot be empty"
    if value != "" and not is_date(value):
        return "Invalid date format"
    return None


def _check_enum(field: EnumField) -> Optional[str]:
    value = field.stringData or ""
    allowed = field.allowed_values
    if field.required and value == "":
        return "Value cannot be empty"
    if value != "" and value not in allowed:
        return f"Value must be one of: {', '.join(allowed)}"
    return None


FIELD_CHECKS: Dict[Type[Any], Callable[[Any], Optional[str]]] = {
    StringField: _check_string,
    NumberField: _check_number,
    BooleanField: _check_boolean,
    DateField: _check_date,
    EnumField: _check_enum,
}


def validate_input_fields(fields: Sequence[FieldDescriptor]) -> ValidationResult:
    """
    Validate configured input fields.

    Each field is checked on its own and yields at most one error; errors
    keep the order of the fields they came from.

    Args:
        fields: Field descriptors, usually from parse_input_fields

    Returns:
        ValidationResult; is_valid is True exactly when errors is empty
    """
    errors: List[FieldError] = []
    for field in fields:
        check = FIELD_CHECKS.get(type(field))
        if check is None:
            raise TypeError(f"unsupported field descriptor: {type(field).__name__}")
        message = check(field)
        if message is not None:
            errors.append(FieldError(field=field.name, message=message))
    return ValidationResult(errors=errors)


def validate_raw_fields(raw: Sequence[Dict[str, Any]]) -> ValidationResult:
    """Parse host parameter dicts and validate them in one step."""
    return validate_input_fields(parse_input_fields(raw))
