from __future__ import annotations

import dataclasses
from datetime import date, datetime, timedelta
from decimal import Decimal
from enum import Enum
from typing import Any

from flask import jsonify


def to_json(value: Any) -> Any:
    """Convert dataclasses/rows into JSON-safe structures.

    Dates become ISO strings, Decimals become floats, bytes are dropped.
    """

    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: to_json(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, dict):
        return {k: to_json(v) for k, v in value.items() if not isinstance(v, (bytes, bytearray))}
    if isinstance(value, (list, tuple)):
        return [to_json(v) for v in value]
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, timedelta):
        return int(value.total_seconds())
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, Enum):
        return value.value
    return value


def error_response(message: str, status: int, *, key: str = "error"):
    return jsonify({key: message}), status


def json_body(request) -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}
