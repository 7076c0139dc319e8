from datetime import datetime, timezone
from enum import Enum
from typing import Any, Union


def to_server_date(value: datetime) -> int:
    """
    Converts a datetime to the server's unix-seconds convention.

    Naive datetimes are taken as UTC, matching from_server_date().
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return int(value.timestamp())


def from_server_date(value: Union[int, float]) -> datetime:
    """Converts unix seconds from the server to an aware UTC datetime."""
    return datetime.fromtimestamp(value, tz=timezone.utc)


def is_numeric(value: Any) -> bool:
    """True for finite numbers and numeric strings (booleans excluded)."""
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return value == value and value not in (float('inf'), float('-inf'))
    if isinstance(value, str):
        try:
            parsed = float(value)
        except ValueError:
            return False
        return parsed == parsed and parsed not in (float('inf'), float('-inf'))
    return False


def to_number(value: Any) -> Union[int, float]:
    """
    Casts a value to int or float.

    Enum members contribute their value, booleans become 0/1 and numeric
    strings are parsed (integral strings stay integers).

    Raises:
        ValueError: If the value is not numeric
    """
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return float(value)
    raise ValueError(f"Not a number: {value!r}")
