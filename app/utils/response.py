import re
from typing import Any

_UNSAFE_FILENAME_CHARS = re.compile(r'[^A-Za-z0-9._ -]+')


def success_response(data: Any = None, message: str | None = None) -> dict:
    return {"status": "success", "data": data, "message": message}


def error_response(message: str, data: Any = None) -> dict:
    return {"status": "error", "data": data, "message": message}


def attachment_filename(site_name: str | None, suffix: str = "_report.html") -> str:
    """Build a download filename from a free-text site name."""
    stem = _UNSAFE_FILENAME_CHARS.sub("_", (site_name or "").strip()).strip(" ._")
    return f"{stem or 'survey'}{suffix}"


def attachment_headers(filename: str) -> dict[str, str]:
    return {"Content-Disposition": f'attachment; filename="{filename}"'}
