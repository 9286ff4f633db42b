"""Validation helpers to keep backend values finite and well-shaped."""

import math
from typing import Any, Mapping, Optional


def finite_float(value: Any, default: float = 0.0) -> float:
    """Return a finite float or a default fallback."""
    try:
        fval = float(value)
        if math.isfinite(fval):
            return fval
    except Exception:
        pass
    return default


def finite_int(value: Any, default: int = 0) -> int:
    """Return an int for numeric-looking values, else the default."""
    fval = finite_float(value, float("nan"))
    if math.isnan(fval):
        return default
    return int(fval)


def optional_str(value: Any) -> Optional[str]:
    """Non-empty string or None (empty strings count as missing)."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def as_mapping(payload: Any) -> Optional[Mapping[str, Any]]:
    """Return payload if it is a JSON object, else None."""
    if isinstance(payload, Mapping):
        return payload
    return None


def as_rows(payload: Any) -> Optional[list]:
    """Return payload if it is a JSON array of objects (non-objects dropped), else None."""
    if not isinstance(payload, list):
        return None
    return [row for row in payload if isinstance(row, Mapping)]
