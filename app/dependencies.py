from fastapi import Header, HTTPException, Request

from app.config import settings
from app.services.report.assets import AssetResolver


async def verify_api_key(x_api_key: str = Header(default="")) -> None:
    if not settings.api_key:
        return
    if x_api_key != settings.api_key:
        raise HTTPException(status_code=403, detail="Invalid or missing API key")


def get_asset_resolver(request: Request) -> AssetResolver:
    """Pick the asset path strategy for the configured storage deployment."""
    if settings.asset_mode == "remote":
        base_url = settings.asset_base_url or None
    else:
        # static and embedded both fall back to files served by this host
        base_url = settings.asset_base_url or str(request.base_url).rstrip("/")
    return AssetResolver(base_url=base_url, upload_prefix=settings.upload_url_prefix)
