from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Iterable, Optional, Type, TypeVar, Union

from ..core.exceptions import ValidationError
from .datetime_utils import DateLike, coerce_date

E = TypeVar("E", bound=Enum)


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if value is not None and not isinstance(value, str):
        raise ValidationError(f"{field_name} must be text")
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_date(value: DateLike, field_name: str) -> date:
    parsed = coerce_date(value)
    if parsed is None:
        raise ValidationError(f"{field_name} is not a valid date (YYYY-MM-DD)")
    return parsed


def require_date_range(start: DateLike, end: DateLike) -> tuple[date, date]:
    start_d = require_date(start, "From date")
    end_d = require_date(end, "To date")
    if end_d < start_d:
        raise ValidationError("To date must be on or after from date")
    return start_d, end_d


def require_any(values: Iterable[str], message: str) -> list[str]:
    items = [v for v in values if v]
    if not items:
        raise ValidationError(message)
    return items


def require_non_negative(value: float, field_name: str) -> float:
    if value is None or float(value) < 0:
        raise ValidationError(f"{field_name} must be zero or more")
    return float(value)


def require_choice(enum_cls: Type[E], value: Union[E, str, None], field_name: str) -> E:
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ValidationError(f"{field_name} must be one of: {allowed}")
