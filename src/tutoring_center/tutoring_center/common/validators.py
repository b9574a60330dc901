from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from ..core.constants import FCC_ID_PATTERN
from ..core.exceptions import ValidationError

_FCC_ID_RE = re.compile(FCC_ID_PATTERN)

_TRUE_STRINGS = {"1", "true", "yes", "on"}
_FALSE_STRINGS = {"0", "false", "no", "off", ""}


def require_non_empty(value: Any, field_name: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def is_valid_fcc_id(value: str) -> bool:
    return bool(_FCC_ID_RE.match(value or ""))


def require_fcc_id(value: Any) -> str:
    fcc_id = require_non_empty(value, "fcc_id")
    if not is_valid_fcc_id(fcc_id):
        raise ValidationError(f"Invalid FCC ID format: {fcc_id}")
    return fcc_id


def parse_int(value: Any, field_name: str, *, minimum: Optional[int] = None) -> int:
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be an integer")
    try:
        number = int(str(value).strip())
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer")
    if minimum is not None and number < minimum:
        raise ValidationError(f"{field_name} must be at least {minimum}")
    return number


def parse_flag(value: Any) -> bool:
    """Interpret a JSON/form flag. Missing values are false."""

    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    text = str(value).strip().lower()
    if text in _TRUE_STRINGS:
        return True
    if text in _FALSE_STRINGS:
        return False
    raise ValidationError(f"Invalid boolean value: {value!r}")


def parse_amount(value: Any, field_name: str = "amount", *, maximum: Optional[Decimal] = None) -> Decimal:
    if value is None or isinstance(value, bool):
        raise ValidationError(f"Invalid {field_name} provided")
    try:
        amount = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise ValidationError(f"Invalid {field_name} provided")
    if not amount.is_finite():
        raise ValidationError(f"Invalid {field_name} provided")
    if amount < 0:
        raise ValidationError(f"{field_name} must not be negative")
    if maximum is not None and amount > maximum:
        raise ValidationError(f"{field_name} must not exceed {maximum}")
    return amount


def parse_int_list(value: Any, field_name: str) -> list[int]:
    """Accept a list of ints or a comma separated string ("1, 15")."""

    if value is None or value == "":
        return []
    items = value if isinstance(value, (list, tuple)) else str(value).split(",")
    return [parse_int(item, field_name) for item in items if str(item).strip()]
