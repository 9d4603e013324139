import datetime as dt
import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.area import FunctionalArea, HomogeneousArea
from app.models.observation import Observation, ObservationPhoto
from app.models.sample import (
    AsbestosSample,
    AsbestosSampleLayer,
    AsbestosSamplePhoto,
    PaintSample,
    PaintSamplePhoto,
)
from app.models.survey import Survey


def _seed_id(name: str) -> str:
    return str(uuid.uuid5(uuid.NAMESPACE_DNS, name))


SEED_SURVEY_ID = _seed_id("survey-riverside-school")
SEED_SITE_NAME = "Riverside Elementary School"
SEED_ASBESTOS_ID = _seed_id("asbestos-sample-a-001")


async def seed_data(session: AsyncSession) -> None:
    result = await session.execute(select(Survey).limit(1))
    if result.scalars().first() is not None:
        return

    session.add(Survey(
        id=SEED_SURVEY_ID,
        site_name=SEED_SITE_NAME,
        address="120 River Road",
        survey_type="asbestos-lead",
        survey_date=dt.date(2025, 3, 4),
        inspector="J. Rivera",
        status="report-completed",
        notes="Access to the crawl space was limited.",
        site_photo_url="/uploads/site-overview.jpg",
    ))
    await session.flush()

    session.add_all([
        FunctionalArea(id=_seed_id("fa-boiler"), survey_id=SEED_SURVEY_ID, title="Boiler Room",
                       description="Basement mechanical space"),
        FunctionalArea(id=_seed_id("fa-classroom"), survey_id=SEED_SURVEY_ID, title="Classroom 101"),
        HomogeneousArea(id=_seed_id("ha-2"), survey_id=SEED_SURVEY_ID, ha_id="HA-2",
                        title="9x9 Floor Tile", description="Tan floor tile with black mastic"),
        HomogeneousArea(id=_seed_id("ha-1"), survey_id=SEED_SURVEY_ID, ha_id="HA-1",
                        title="Pipe Insulation"),
    ])

    session.add_all([
        AsbestosSample(
            id=SEED_ASBESTOS_ID, survey_id=SEED_SURVEY_ID, functional_area="Boiler Room",
            homogeneous_area="HA-1", sample_number="A-001", material_type="pipe-insulation",
            sample_location="North wall riser", estimated_quantity="40 lf", condition="damaged",
            collection_method="bulk", asbestos_type="Chrysotile", asbestos_percent=15,
        ),
        AsbestosSample(
            id=_seed_id("asbestos-sample-a-002"), survey_id=SEED_SURVEY_ID,
            functional_area="Classroom 101", homogeneous_area="HA-2", sample_number="A-002",
            material_type="floor-tiles-9x9", estimated_quantity="850 sf", condition="good",
            collection_method="bulk",
        ),
    ])
    await session.flush()

    session.add_all([
        AsbestosSampleLayer(id=_seed_id("layer-a-002-1"), sample_id=_seed_id("asbestos-sample-a-002"),
                            layer_number=1, material_type="floor-tiles-9x9",
                            asbestos_type="Chrysotile", asbestos_percent=5),
        AsbestosSampleLayer(id=_seed_id("layer-a-002-2"), sample_id=_seed_id("asbestos-sample-a-002"),
                            layer_number=2, material_type="carpet-mastic",
                            asbestos_type="None Detected", description="Black mastic"),
        AsbestosSamplePhoto(id=_seed_id("photo-a-001"), sample_id=SEED_ASBESTOS_ID,
                            url="/uploads/a-001.jpg", filename="a-001.jpg"),
    ])

    session.add(PaintSample(
        id=_seed_id("paint-sample-p-001"), survey_id=SEED_SURVEY_ID, functional_area="Classroom 101",
        sample_number="P-001", sample_location="Window trim", substrate="wood",
        collection_method="scrape", lead_result_mg_kg=5400, cadmium_result_mg_kg=12.5,
    ))
    await session.flush()
    session.add(PaintSamplePhoto(id=_seed_id("photo-p-001"), sample_id=_seed_id("paint-sample-p-001"),
                                 url="https://storage.example.com/p-001.jpg", filename="p-001.jpg"))

    session.add(Observation(
        id=_seed_id("observation-1"), survey_id=SEED_SURVEY_ID, area="boiler room",
        homogeneous_area="HA-1", material_type="pipe-insulation", condition="damaged",
        quantity="40 lf", risk_level="high", sample_collected=True, sample_id="A-001",
        latitude=40.7128, longitude=-74.006, notes="Friable insulation on riser.",
    ))
    await session.flush()
    session.add(ObservationPhoto(id=_seed_id("obs-photo-1"), observation_id=_seed_id("observation-1"),
                                 filename="obs-1.jpg", original_name="riser.jpg",
                                 mime_type="image/jpeg", size=2048))

    await session.commit()
