from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from app.config import settings
from app.database import async_session
from app.dependencies import get_asset_resolver
from app.services.report.assets import AssetResolver
from app.services.report_loader import ReportLoader
from app.utils.response import attachment_filename, attachment_headers

router = APIRouter(prefix="/surveys", tags=["reports"])


@router.get("/{survey_id}/report", response_class=HTMLResponse)
async def download_survey_report(
    survey_id: str,
    resolver: AssetResolver = Depends(get_asset_resolver),
):
    async with async_session() as db_session:
        loader = ReportLoader(db_session, inline_images=settings.asset_mode == "embedded")
        snapshot = await loader.load(survey_id)

    html = snapshot.render(resolver, generated_at=datetime.now(timezone.utc))
    filename = attachment_filename(snapshot.survey.site_name)
    return HTMLResponse(content=html, headers=attachment_headers(filename))
