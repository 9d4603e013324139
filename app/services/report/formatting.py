"""Value normalization helpers shared by every report section."""
import datetime as dt
import math
import re

PLACEHOLDER = "—"

MATERIAL_TYPE_LABELS: dict[str, str] = {
    "ceiling-tiles": "Ceiling Tiles",
    "floor-tiles-9x9": '9"x9" Floor Tiles',
    "floor-tiles-12x12": '12"x12" Floor Tiles',
    "pipe-insulation": "Pipe Insulation",
    "duct-insulation": "Duct Insulation",
    "boiler-insulation": "Boiler Insulation",
    "drywall": "Drywall/Joint Compound",
    "paint": "Paint/Coatings",
    "roofing": "Roofing Material",
    "siding": "Siding Material",
    "window-glazing": "Window Glazing",
    "plaster": "Plaster",
    "masonry": "Masonry/Mortar",
    "vinyl-tiles": "Vinyl Floor Tiles",
    "carpet-mastic": "Carpet Mastic",
    "electrical-materials": "Electrical Materials",
    "other": "Other",
}

# Fixed table so output never depends on the process locale
_MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

_SINGLE_WORD = re.compile(r"^[A-Za-z]+$")


def _capitalize_token(token: str) -> str:
    return token[:1].upper() + token[1:]


def format_material_type(code: str | None) -> str:
    if not code:
        return ""
    label = MATERIAL_TYPE_LABELS.get(code)
    if label is not None:
        return label
    return " ".join(_capitalize_token(part) for part in code.split("-"))


def format_status(code: str | None) -> str:
    raw = code or ""
    if not raw:
        return ""
    return " ".join(_capitalize_token(part) for part in raw.split("-"))


def format_survey_type(code: str | None) -> str:
    """Render hyphen-joined hazard codes as a comma separated label."""
    raw = code or ""
    return ", ".join(_capitalize_token(part) for part in raw.split("-") if part)


def format_number(value: float) -> str:
    if not math.isfinite(value):
        return PLACEHOLDER
    if float(value).is_integer():
        return str(int(value))
    text = f"{value:.6f}".rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def to_number(value) -> float | None:
    """Parse a number or numeric string, None when absent or not finite."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def format_optional_number(value, suffix: str = "") -> str:
    number = to_number(value)
    if number is None:
        return PLACEHOLDER
    return f"{format_number(number)}{suffix}"


def sentence_case_if_single_word(value: str | None) -> str:
    if not value:
        return ""
    trimmed = value.strip()
    if not _SINGLE_WORD.match(trimmed):
        return trimmed
    return trimmed[:1].upper() + trimmed[1:].lower()


def format_substrate(sample) -> str:
    substrate = sample.substrate or ""
    if substrate.strip().lower() == "other":
        return (sample.substrate_other or "").strip() or "Other"
    return sentence_case_if_single_word(substrate)


def or_placeholder(value) -> str:
    if value is None:
        return PLACEHOLDER
    text = str(value).strip()
    return text or PLACEHOLDER


def _coerce_datetime(value) -> dt.date | None:
    if isinstance(value, (dt.date, dt.datetime)):
        return value
    if isinstance(value, str) and value.strip():
        raw = value.strip()
        if raw.endswith("Z"):
            raw = raw[:-1] + "+00:00"
        try:
            return dt.datetime.fromisoformat(raw)
        except ValueError:
            return None
    return None


def format_date_long(value) -> str:
    """Format a date as "March 4, 2025"; unparsable text is returned as-is."""
    parsed = _coerce_datetime(value)
    if parsed is None:
        return or_placeholder(value)
    return f"{_MONTHS[parsed.month - 1]} {parsed.day}, {parsed.year}"


def format_timestamp(value: dt.datetime) -> str:
    if value.tzinfo is not None:
        value = value.astimezone(dt.timezone.utc)
    return f"{format_date_long(value)} at {value:%H:%M} UTC"


def format_by_unit(totals) -> str:
    """Render per-unit totals as "40 LF + 850 SqFt"; no totals renders "0"."""
    if not totals:
        return "0"
    return " + ".join(
        f"{format_number(amount)} {unit}" if unit else format_number(amount)
        for unit, amount in totals.items()
    )
