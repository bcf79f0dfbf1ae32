"""
Task Pydantic schemas and the validation gate for task payloads.

Every create and update payload goes through validate_task_payload() before
it reaches the repository. The gate collects every violated rule instead of
stopping at the first one, so a client can fix all problems in one round trip.
"""

import re
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Dict, List, Mapping, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from task_tracker.errors import ValidationError
from task_tracker.schemas.base import TimestampedRead

CLIENT_NAME_MAX_LENGTH = 255
# Largest value NUMERIC(10, 2) can hold
MAX_EXPECTED_AMOUNT = Decimal("99999999.99")
CENT = Decimal("0.01")

# The browser client posts camelCase keys; rows and responses use snake_case
FIELD_ALIASES: Dict[str, str] = {
    "clientName": "client_name",
    "taskDescription": "task_description",
    "dateCommissioned": "date_commissioned",
    "dateDelivered": "date_delivered",
    "expectedAmount": "expected_amount",
    "isPaid": "is_paid",
}

INVALID_DATE = "must be a valid ISO 8601 date"
INVALID_BOOLEAN = "must be a boolean"

# Calendar dates only: YYYY-MM-DD, optionally followed by a time part
ISO_DATE = re.compile(r"\d{4}-\d{2}-\d{2}")
ISO_DATETIME = re.compile(r"\d{4}-\d{2}-\d{2}[T ]")


def _aliases(field_name: str) -> AliasChoices:
    camel = next(alias for alias, name in FIELD_ALIASES.items() if name == field_name)
    return AliasChoices(field_name, camel)


class TaskPayload(BaseModel):
    """Normalized create/update payload. Every mutable column, nothing else."""

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    client_name: str = Field(
        validation_alias=_aliases("client_name"),
        min_length=1,
        max_length=CLIENT_NAME_MAX_LENGTH,
    )
    task_description: str = Field(
        validation_alias=_aliases("task_description"),
        min_length=1,
    )
    date_commissioned: Optional[date] = Field(
        default=None,
        validation_alias=_aliases("date_commissioned"),
    )
    date_delivered: Optional[date] = Field(
        default=None,
        validation_alias=_aliases("date_delivered"),
    )
    expected_amount: Decimal = Field(
        validation_alias=_aliases("expected_amount"),
        ge=0,
        le=MAX_EXPECTED_AMOUNT,
    )
    is_paid: bool = Field(
        default=False,
        validation_alias=_aliases("is_paid"),
    )

    @field_validator("date_commissioned", "date_delivered", mode="before")
    @classmethod
    def parse_optional_date(cls, value: Any) -> Optional[date]:
        # Blank means "no value", never an empty string in the database
        if value is None:
            return None
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        if not isinstance(value, str):
            raise ValueError(INVALID_DATE)

        value = value.strip()
        if not value:
            return None
        try:
            if ISO_DATE.fullmatch(value):
                return date.fromisoformat(value)
            if ISO_DATETIME.match(value):
                return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
        except ValueError:
            pass
        raise ValueError(INVALID_DATE)

    @field_validator("is_paid", mode="before")
    @classmethod
    def parse_paid_flag(cls, value: Any) -> bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, str) and value.strip().lower() in ("true", "false"):
            return value.strip().lower() == "true"
        raise ValueError(INVALID_BOOLEAN)

    @field_validator("expected_amount", mode="before")
    @classmethod
    def parse_amount(cls, value: Any) -> Any:
        if value is None or isinstance(value, bool):
            raise ValueError("must be a number")
        if isinstance(value, str):
            try:
                value = Decimal(value.strip())
            except InvalidOperation:
                raise ValueError("must be a number") from None
        if isinstance(value, (float, Decimal)) and not Decimal(str(value)).is_finite():
            raise ValueError("must be a finite number")
        return value

    @field_validator("expected_amount")
    @classmethod
    def round_to_cents(cls, value: Decimal) -> Decimal:
        return value.quantize(CENT, rounding=ROUND_HALF_UP)


class TaskRead(TimestampedRead):
    """Schema for reading task data (API response)."""

    client_name: str
    task_description: str
    date_commissioned: Optional[date] = None
    date_delivered: Optional[date] = None
    expected_amount: Decimal
    is_paid: bool


def _describe(error: Mapping[str, Any]) -> str:
    """Turn one pydantic error into a '<field> <reason>' message."""
    loc = error.get("loc") or ()
    field = FIELD_ALIASES.get(str(loc[0]), str(loc[0])) if loc else "payload"
    error_type = error.get("type", "")
    ctx = error.get("ctx") or {}

    if error_type == "extra_forbidden":
        # Name the key as sent, e.g. a duplicate camelCase alias
        field = str(loc[0]) if loc else field
        reason = "is not allowed"
    elif error_type == "missing":
        reason = "is required"
    elif error_type == "string_type":
        reason = "must be a string"
    elif error_type == "string_too_short":
        reason = "must not be empty"
    elif error_type == "string_too_long":
        reason = f"must be at most {ctx.get('max_length')} characters"
    elif error_type in ("decimal_parsing", "decimal_type"):
        reason = "must be a number"
    elif error_type == "greater_than_equal":
        reason = f"must be greater than or equal to {ctx.get('ge')}"
    elif error_type == "less_than_equal":
        reason = f"must be less than or equal to {ctx.get('le')}"
    elif error_type.startswith("bool"):
        reason = INVALID_BOOLEAN
    elif error_type.startswith("date"):
        reason = INVALID_DATE
    elif error_type == "value_error" and "error" in ctx:
        reason = str(ctx["error"])
    else:
        reason = f"is invalid ({error.get('msg')})"
    return f"{field} {reason}"


def validate_task_payload(data: Any) -> TaskPayload:
    """
    Check and normalize a raw task payload.

    Raises:
        ValidationError: listing every violated rule, one message per rule
    """
    if isinstance(data, TaskPayload):
        return data
    if not isinstance(data, Mapping):
        raise ValidationError("Validation error", ["payload must be a JSON object"])

    try:
        return TaskPayload.model_validate(dict(data))
    except PydanticValidationError as exc:
        details: List[str] = [_describe(error) for error in exc.errors()]
        raise ValidationError("Validation error", details) from exc
