from app.services.report.assets import AssetResolver, resolve_asset_url
from app.services.report.composer import render

__all__ = ["AssetResolver", "render", "resolve_asset_url"]
