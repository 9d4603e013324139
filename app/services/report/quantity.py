import math
import re

_LEADING_NUMBER = re.compile(r"^[-+]?\d+(?:\.\d+)?")

_SQUARE_FEET = re.compile(r"^(sq\s*ft|sqft|sf)$", re.IGNORECASE)
_LINEAR_FEET = re.compile(r"^(lf|linear\s*ft|linear\s*feet)$", re.IGNORECASE)


def parse_quantity(raw: str | None) -> float | None:
    """Extract the leading signed decimal from free text like "12.5 sq ft"."""
    if not raw:
        return None
    match = _LEADING_NUMBER.match(raw.strip())
    if not match:
        return None
    amount = float(match.group(0))
    if not math.isfinite(amount):
        return None
    return amount


def parse_quantity_with_unit(raw: str | None) -> tuple[float, str] | None:
    """Split "40 linear feet" into (40.0, "LF"); None without a leading number."""
    amount = parse_quantity(raw)
    if amount is None:
        return None
    text = raw.strip()
    return amount, normalize_unit(text[_LEADING_NUMBER.match(text).end():])


def normalize_unit(raw_unit: str | None) -> str:
    unit = (raw_unit or "").strip()
    if _SQUARE_FEET.match(unit):
        return "SqFt"
    if _LINEAR_FEET.match(unit):
        return "LF"
    return unit


def format_quantity(estimated_quantity: str | None, quantity_unit: str | None = None) -> str:
    """Render a sample quantity, appending the separate unit field when present."""
    raw = (estimated_quantity or "").strip()
    if not raw:
        return ""
    match = _LEADING_NUMBER.match(raw)
    if match is None:
        return raw
    trailing = raw[match.end():].strip()
    unit = normalize_unit(trailing or quantity_unit)
    return f"{match.group(0)} {unit}" if unit else match.group(0)
