from __future__ import annotations

import math
from enum import Enum
from typing import Annotated, Any, Dict, List, Literal, Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator


class StringFormat(str, Enum):
    NONE = "none"
    EMAIL = "email"
    URL = "url"
    UUID = "uuid"
    PATTERN = "pattern"


class NumberCheck(str, Enum):
    NONE = "none"
    MIN = "min"
    MAX = "max"
    RANGE = "range"


def _none_as_empty(value: Any) -> Any:
    # Unset host parameters arrive as null; they mean "no value".
    return "" if value is None else value


class _FieldBase(BaseModel):
    # Host parameters may carry values for other validation types (hidden UI
    # defaults, legacy useRegex); they are dropped rather than stored.
    model_config = ConfigDict(extra="ignore", frozen=True)

    name: Optional[str] = None
    required: bool = False

    @field_validator("required", mode="before")
    @classmethod
    def required_default(cls, value: Any) -> Any:
        return False if value is None else value


class StringField(_FieldBase):
    validationType: Literal["string"] = "string"
    stringData: str = ""
    stringFormat: StringFormat = StringFormat.NONE
    pattern: str = ""

    @field_validator("stringData", "pattern", mode="before")
    @classmethod
    def empty_when_unset(cls, value: Any) -> Any:
        return _none_as_empty(value)

    @field_validator("stringFormat", mode="before")
    @classmethod
    def format_default(cls, value: Any) -> Any:
        return StringFormat.NONE if value in (None, "") else value


class NumberField(_FieldBase):
    validationType: Literal["number"] = "number"
    numberData: Optional[float] = None
    numberValidationType: NumberCheck = NumberCheck.NONE
    minValue: Optional[float] = None
    maxValue: Optional[float] = None

    @field_validator("numberData", mode="before")
    @classmethod
    def coerce_number(cls, value: Any) -> Any:
        """Keep absence as None; anything present that is not a number becomes NaN."""
        if value is None or isinstance(value, (int, float)):
            return value
        if isinstance(value, str) and not value.strip():
            return None
        try:
            return float(value)
        except (TypeError, ValueError):
            return math.nan

    @field_validator("minValue", "maxValue", mode="before")
    @classmethod
    def blank_bound(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("numberValidationType", mode="before")
    @classmethod
    def check_default(cls, value: Any) -> Any:
        return NumberCheck.NONE if value in (None, "") else value


class BooleanField(_FieldBase):
    validationType: Literal["boolean"] = "boolean"
    booleanData: Optional[bool] = None


class DateField(_FieldBase):
    validationType: Literal["date"] = "date"
    dateData: str = ""

    @field_validator("dateData", mode="before")
    @classmethod
    def empty_when_unset(cls, value: Any) -> Any:
        return _none_as_empty(value)


class EnumField(_FieldBase):
    validationType: Literal["enum"] = "enum"
    stringData: str = ""
    enumValues: str = ""

    @field_validator("stringData", "enumValues", mode="before")
    @classmethod
    def empty_when_unset(cls, value: Any) -> Any:
        return _none_as_empty(value)

    @property
    def allowed_values(self) -> List[str]:
        return [value.strip() for value in self.enumValues.split(",")]


FieldDescriptor = Annotated[
    Union[StringField, NumberField, BooleanField, DateField, EnumField],
    Field(discriminator="validationType"),
]

_descriptor_list = TypeAdapter(List[FieldDescriptor])


def parse_input_fields(raw: Sequence[Dict[str, Any]]) -> List[FieldDescriptor]:
    """
    Build field descriptors from the host's parameter dicts.

    Raises:
        pydantic.ValidationError: a descriptor has no or an unknown
            validationType, or a payload of the wrong type
    """
    return _descriptor_list.validate_python(list(raw))


class FieldError(BaseModel):
    """One failed check for one field."""

    model_config = ConfigDict(frozen=True)

    field: Optional[str] = None
    message: str

    def describe(self) -> str:
        if self.field:
            return f"{self.field}: {self.message}"
        return self.message


class ValidationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    errors: List[FieldError] = Field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def error_summary(self) -> str:
        return " | ".join(error.describe() for error in self.errors)

    def to_json(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"isValid": self.is_valid}
        if self.errors:
            payload["errors"] = [error.model_dump() for error in self.errors]
        return payload
