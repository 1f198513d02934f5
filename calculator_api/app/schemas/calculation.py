"""
Pydantic schemas and input parsing for calculations.

``CalculationRead`` is the public representation of a stored record.
Field names follow Python conventions; aliases give the camelCase
names used on the wire (``createdAt``, ``updatedAt``).  The envelope
models describe the uniform ``{success, message, data}`` response
shape.

Incoming operands are not bound to a typed request model because the
add endpoint must distinguish "missing" from "present but not a
number" and answer each with its own message.  ``parse_operands``
performs that step explicitly.
"""

import math
from datetime import datetime, timezone
from typing import Any, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from calculator_api.app.core.errors import ValidationError

REQUIRED_MESSAGE = "Both number1 and number2 are required"
INVALID_MESSAGE = "Invalid numbers provided"


class Operands(BaseModel):
    """A validated pair of finite operands."""

    number1: float
    number2: float

    @property
    def sum(self) -> float:
        return self.number1 + self.number2


def parse_number(value: Any) -> float:
    """Convert a payload value to a finite float.

    Integers and floats are accepted as they are; strings are parsed
    after stripping surrounding whitespace.  Booleans, ``None``,
    containers, unparseable strings, integers beyond the float range,
    NaN and infinities raise ``ValidationError``.
    """
    if isinstance(value, bool):
        raise ValidationError(INVALID_MESSAGE)
    if isinstance(value, str):
        value = value.strip()
    elif not isinstance(value, (int, float)):
        raise ValidationError(INVALID_MESSAGE)
    try:
        number = float(value)
    except (ValueError, OverflowError):
        # OverflowError: JSON integers too large for a double.
        raise ValidationError(INVALID_MESSAGE)
    if not math.isfinite(number):
        raise ValidationError(INVALID_MESSAGE)
    return number


def parse_operands(payload: Optional[Mapping[str, Any]]) -> Operands:
    """Validate an add request body.

    Presence is checked for both fields before either value is parsed,
    so a body missing one field always reports the "required" message.
    Operands whose sum overflows to infinity are rejected as well.
    """
    if not isinstance(payload, Mapping) or "number1" not in payload or "number2" not in payload:
        raise ValidationError(REQUIRED_MESSAGE)
    operands = Operands(
        number1=parse_number(payload["number1"]),
        number2=parse_number(payload["number2"]),
    )
    if not math.isfinite(operands.sum):
        raise ValidationError(INVALID_MESSAGE)
    return operands


def parse_limit(raw: Optional[str], default: int, maximum: int) -> int:
    """Interpret the ``limit`` query parameter.

    Absent, unparseable and non‑positive values fall back to
    ``default``; larger values are clamped to ``maximum``.
    """
    if raw is None:
        return default
    try:
        limit = int(raw.strip())
    except ValueError:
        return default
    if limit <= 0:
        return default
    return min(limit, maximum)


class CalculationRead(BaseModel):
    """Schema for reading a stored calculation."""

    id: str
    number1: float
    number2: float
    sum: float
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: datetime = Field(..., alias="updatedAt")

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_document(cls, document: Mapping[str, Any]) -> "CalculationRead":
        """Build the schema from a raw MongoDB document."""
        return cls(
            id=str(document["_id"]),
            number1=document["number1"],
            number2=document["number2"],
            sum=document["sum"],
            created_at=_as_utc(document["createdAt"]),
            updated_at=_as_utc(document["updatedAt"]),
        )


def _as_utc(value: datetime) -> datetime:
    # Clients opened without tz_aware return naive UTC datetimes.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class CalculationCreated(BaseModel):
    """Subset of a calculation returned by the add endpoint."""

    id: str
    number1: float
    number2: float
    sum: float
    created_at: datetime = Field(..., alias="createdAt")

    model_config = ConfigDict(populate_by_name=True)


class CalculationResponse(BaseModel):
    success: bool = True
    message: Optional[str] = None
    data: CalculationRead


class CalculationCreatedResponse(BaseModel):
    success: bool = True
    message: str
    data: CalculationCreated


class CalculationListResponse(BaseModel):
    success: bool = True
    count: int
    data: List[CalculationRead]


class ErrorResponse(BaseModel):
    """Envelope for every failure response."""

    success: bool = False
    message: str
    error: Optional[str] = None
