"""Fetch one survey snapshot from the database and render it."""
import logging
import os
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
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
from app.schemas.observation import ObservationRecord, PhotoRecord
from app.schemas.sample import AsbestosSampleRecord, PaintSampleRecord, SampleLayerRecord
from app.schemas.survey import FunctionalAreaRecord, HomogeneousAreaRecord, SurveyRecord
from app.services.report.assets import AssetResolver, to_data_url
from app.services.report.composer import render
from app.utils.exceptions import SurveyNotFound

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReportSnapshot:
    survey: SurveyRecord
    observations: list[ObservationRecord] = field(default_factory=list)
    photos_by_observation: dict[str, list[PhotoRecord]] = field(default_factory=dict)
    homogeneous_areas: list[HomogeneousAreaRecord] = field(default_factory=list)
    functional_areas: list[FunctionalAreaRecord] = field(default_factory=list)
    asbestos_samples: list[AsbestosSampleRecord] = field(default_factory=list)
    paint_samples: list[PaintSampleRecord] = field(default_factory=list)
    layers_by_sample: dict[str, list[SampleLayerRecord]] = field(default_factory=dict)
    asbestos_photos_by_sample: dict[str, list[PhotoRecord]] = field(default_factory=dict)
    paint_photos_by_sample: dict[str, list[PhotoRecord]] = field(default_factory=dict)
    site_photo_override: str | None = None

    def render(self, resolver: AssetResolver, generated_at: datetime | None = None) -> str:
        return render(
            self.survey,
            self.observations,
            self.photos_by_observation,
            self.homogeneous_areas,
            self.functional_areas,
            self.asbestos_samples,
            self.paint_samples,
            self.layers_by_sample,
            self.asbestos_photos_by_sample,
            self.paint_photos_by_sample,
            site_photo_override=self.site_photo_override,
            resolver=resolver,
            generated_at=generated_at,
        )


def read_inline_image(filename: str | None, original_name: str | None = None) -> str | None:
    """Read an uploaded image from disk as a data URL, None when unavailable."""
    if not filename:
        return None
    safe_name = os.path.basename(filename)
    file_path = os.path.join(settings.uploads_dir, safe_name)
    if not os.path.exists(file_path):
        logger.warning("Inline image not found: %s", file_path)
        return None
    if os.path.getsize(file_path) > settings.max_inline_image_bytes:
        logger.warning("Inline image too large, linking instead: %s", file_path)
        return None
    with open(file_path, "rb") as f:
        return to_data_url(f.read(), original_name or safe_name)


def _group(records, key: str) -> dict[str, list]:
    grouped: dict[str, list] = defaultdict(list)
    for record in records:
        grouped[getattr(record, key)].append(record)
    return dict(grouped)


class ReportLoader:
    """Loads the entity graph of one survey as immutable records."""

    def __init__(self, session: AsyncSession, inline_images: bool = False):
        self.session = session
        self.inline_images = inline_images

    async def _all(self, stmt):
        result = await self.session.execute(stmt)
        return result.scalars().all()

    def _photo(self, row, original_name: str | None = None) -> PhotoRecord:
        filename = getattr(row, "filename", None)
        data_url = read_inline_image(filename, original_name) if self.inline_images else None
        return PhotoRecord(
            id=row.id,
            filename=filename,
            original_name=original_name or filename,
            data_url=data_url,
            url=getattr(row, "url", None),
        )

    async def load(self, survey_id: str) -> ReportSnapshot:
        survey = await self.session.get(Survey, survey_id)
        if not survey:
            raise SurveyNotFound(survey_id)

        observations = await self._all(
            select(Observation).where(Observation.survey_id == survey_id).order_by(Observation.area, Observation.id)
        )
        observation_ids = [o.id for o in observations]
        obs_photos = await self._all(
            select(ObservationPhoto)
            .where(ObservationPhoto.observation_id.in_(observation_ids))
            .order_by(ObservationPhoto.id)
        ) if observation_ids else []

        functional_areas = await self._all(
            select(FunctionalArea).where(FunctionalArea.survey_id == survey_id).order_by(FunctionalArea.title)
        )
        homogeneous_areas = await self._all(
            select(HomogeneousArea).where(HomogeneousArea.survey_id == survey_id)
        )

        asbestos = await self._all(
            select(AsbestosSample)
            .where(AsbestosSample.survey_id == survey_id)
            .order_by(AsbestosSample.sample_number)
        )
        asbestos_ids = [s.id for s in asbestos]
        layers = await self._all(
            select(AsbestosSampleLayer)
            .where(AsbestosSampleLayer.sample_id.in_(asbestos_ids))
            .order_by(AsbestosSampleLayer.sample_id, AsbestosSampleLayer.layer_number)
        ) if asbestos_ids else []
        asbestos_photos = await self._all(
            select(AsbestosSamplePhoto)
            .where(AsbestosSamplePhoto.sample_id.in_(asbestos_ids))
            .order_by(AsbestosSamplePhoto.id)
        ) if asbestos_ids else []

        paint = await self._all(
            select(PaintSample)
            .where(PaintSample.survey_id == survey_id)
            .order_by(PaintSample.sample_number)
        )
        paint_ids = [s.id for s in paint]
        paint_photos = await self._all(
            select(PaintSamplePhoto)
            .where(PaintSamplePhoto.sample_id.in_(paint_ids))
            .order_by(PaintSamplePhoto.id)
        ) if paint_ids else []

        site_photo_override = None
        if self.inline_images and survey.site_photo_url:
            site_photo_override = read_inline_image(survey.site_photo_url)

        logger.info(
            "Loaded survey %s: %d observations, %d asbestos samples (%d layers), %d paint samples",
            survey_id, len(observations), len(asbestos), len(layers), len(paint),
        )

        photos_by_observation: dict[str, list[PhotoRecord]] = defaultdict(list)
        for p in obs_photos:
            photos_by_observation[p.observation_id].append(self._photo(p, p.original_name))

        asbestos_photos_by_sample: dict[str, list[PhotoRecord]] = defaultdict(list)
        for p in asbestos_photos:
            asbestos_photos_by_sample[p.sample_id].append(self._photo(p))

        paint_photos_by_sample: dict[str, list[PhotoRecord]] = defaultdict(list)
        for p in paint_photos:
            paint_photos_by_sample[p.sample_id].append(self._photo(p))

        return ReportSnapshot(
            survey=SurveyRecord.model_validate(survey),
            observations=[ObservationRecord.model_validate(o) for o in observations],
            photos_by_observation=dict(photos_by_observation),
            homogeneous_areas=[HomogeneousAreaRecord.model_validate(a) for a in homogeneous_areas],
            functional_areas=[FunctionalAreaRecord.model_validate(a) for a in functional_areas],
            asbestos_samples=[AsbestosSampleRecord.model_validate(s) for s in asbestos],
            paint_samples=[PaintSampleRecord.model_validate(s) for s in paint],
            layers_by_sample=_group([SampleLayerRecord.model_validate(layer) for layer in layers], "sample_id"),
            asbestos_photos_by_sample=dict(asbestos_photos_by_sample),
            paint_photos_by_sample=dict(paint_photos_by_sample),
            site_photo_override=site_photo_override,
        )
