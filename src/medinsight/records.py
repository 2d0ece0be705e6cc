"""Lenient accessors for raw domain records.

Records arrive as plain JSON-like mappings from the persistence layer.
Fields may be missing, ``None``, strings, or nested documents that were
populated (``{"_id": ..., "name": ...}``) or left as bare identifiers.
Every helper here returns a usable default instead of raising.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from datetime import date, datetime, timezone
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Any, Optional, Union

Number = Union[int, float]


def safe_num(x: Any, default: Number = 0) -> Number:
    """Convert input to a number if possible; return ``default`` for empty/invalid.

    Integers stay integers so counts render without a trailing ``.0``.
    """
    if x is None or isinstance(x, bool):
        return default
    if isinstance(x, int):
        return x
    if isinstance(x, float):
        return default if math.isnan(x) or math.isinf(x) else x
    s = str(x).strip()
    if not s:
        return default
    try:
        return int(s)
    except ValueError:
        pass
    try:
        value = float(s)
    except ValueError:
        return default
    return default if math.isnan(value) or math.isinf(value) else value


def first_truthy(*values: Any, default: Any = None) -> Any:
    """Return the first truthy value, mirroring ``a || b || default`` chains."""
    for value in values:
        if value:
            return value
    return default


def get_field(record: Any, key: str, default: Any = None) -> Any:
    """Read ``key`` from a mapping, tolerating non-mapping values."""
    if isinstance(record, Mapping):
        return record.get(key, default)
    return default


def record_id(value: Any) -> Optional[str]:
    """Extract a string identifier from a populated document or a bare id."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Mapping):
        inner = value.get("_id", value.get("id"))
        return record_id(inner) if not isinstance(inner, Mapping) else None
    text = str(value).strip()
    return text or None


def text_field(record: Any, key: str) -> str:
    """Read a text field, coercing ``None`` and non-strings to ``str``."""
    value = get_field(record, key)
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def parse_datetime(value: Any) -> Optional[datetime]:
    """Parse a creation timestamp into an aware UTC datetime.

    Accepts ``datetime``/``date`` objects, ISO-8601 strings (``Z`` suffix
    included) and epoch milliseconds.  Returns ``None`` when unparseable.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(value, Mapping) and "$date" in value:
        return parse_datetime(value["$date"])
    text = str(value).strip()
    if not text:
        return None
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


def month_key(value: Any) -> Optional[str]:
    """Return the ``YYYY-MM`` bucket of a timestamp, in UTC."""
    parsed = parse_datetime(value)
    if parsed is None:
        return None
    return parsed.astimezone(timezone.utc).strftime("%Y-%m")


def round_half_up(value: float, digits: int) -> float:
    """Round the exact binary value of ``value`` half-up to ``digits`` places."""
    return float(to_fixed(value, digits))


def to_fixed(value: float, digits: int) -> str:
    """Fixed-point formatting with half-up ties, e.g. ``to_fixed(6.25, 1) == "6.3"``.

    Works at any magnitude; non-finite values render as ``Infinity`` or ``NaN``.
    """
    exact = Decimal(value)
    if not exact.is_finite():
        return "NaN" if exact.is_nan() else ("-Infinity" if exact < 0 else "Infinity")
    quantum = Decimal(1).scaleb(-digits)
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, exact.adjusted() + digits + 2)
        result = exact.quantize(quantum, rounding=ROUND_HALF_UP)
    if result == 0:
        result = abs(result)
    return f"{result:.{digits}f}"


def format_number(value: Number) -> str:
    """Render a number the shortest way, ``12.0`` as ``12`` and ``7.5`` as ``7.5``."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
