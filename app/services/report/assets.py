"""Resolve photo references to URLs usable inside the printed report."""
import base64
import os
from dataclasses import dataclass

from app.schemas.observation import PhotoRecord

_EMBEDDED_PREFIX = "data:"
_ABSOLUTE_PREFIXES = ("http://", "https://")

_IMAGE_MIME_TYPES: dict[str, str] = {
    ".png": "image/png",
    ".gif": "image/gif",
    ".webp": "image/webp",
}


def resolve_asset_url(candidate: str | None, base_url: str | None = None) -> str:
    if not candidate:
        return ""
    if candidate.startswith(_EMBEDDED_PREFIX) or candidate.startswith(_ABSOLUTE_PREFIXES):
        return candidate
    relative = "/" + candidate.lstrip("/")
    if base_url:
        return f"{base_url.rstrip('/')}{relative}"
    return relative


def to_data_url(payload: bytes, name: str | None = None) -> str:
    """Embed image bytes as a data URL, picking the MIME type from the extension."""
    ext = os.path.splitext(name or "")[1].lower()
    mime = _IMAGE_MIME_TYPES.get(ext, "image/jpeg")
    return f"data:{mime};base64,{base64.b64encode(payload).decode('ascii')}"


@dataclass(frozen=True)
class AssetResolver:
    """Path-prefixing strategy for one storage deployment.

    Static serving passes the host URL as `base_url`, remote object storage
    passes its public bucket URL and embedded-only delivery passes nothing.
    """

    base_url: str | None = None
    upload_prefix: str = "/uploads"

    def resolve(self, candidate: str | None) -> str:
        return resolve_asset_url(candidate, self.base_url)

    def upload_path(self, filename: str) -> str:
        return f"{self.upload_prefix.rstrip('/')}/{filename.lstrip('/')}"

    def photo_src(self, photo: PhotoRecord) -> str:
        if photo.data_url:
            return photo.data_url
        if photo.url:
            return self.resolve(photo.url)
        if photo.filename:
            return self.resolve(self.upload_path(photo.filename))
        return ""

    def site_photo_src(self, override: str | None, stored: str | None) -> str:
        if override:
            return self.resolve(override)
        return self.resolve(stored)
