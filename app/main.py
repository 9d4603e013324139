import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Depends
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings
from app.database import create_tables, async_session
from app.dependencies import verify_api_key
from app.seed import seed_data
from app.routers.reports import router as reports_router
from app.utils.exceptions import register_exception_handlers
from app.utils.response import success_response

logger = logging.getLogger(__name__)

SERVICE_NAME = "survey-report-api"
SERVICE_VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    await create_tables()
    if settings.seed_demo_data:
        logger.info("Seeding demo survey data")
        async with async_session() as session:
            await seed_data(session)
    yield


app = FastAPI(
    title="Survey Report API",
    description="Printable reports for environmental hazard site surveys",
    version=SERVICE_VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

_api_key_dep = [Depends(verify_api_key)]

app.include_router(reports_router, prefix="/api/v1", dependencies=_api_key_dep)


@app.get("/health")
async def health_check():
    return success_response(data={"service": SERVICE_NAME, "version": SERVICE_VERSION})
