from app.models.survey import Survey
from app.models.area import FunctionalArea, HomogeneousArea
from app.models.observation import Observation, ObservationPhoto
from app.models.sample import (
    AsbestosSample,
    AsbestosSampleLayer,
    AsbestosSamplePhoto,
    PaintSample,
    PaintSamplePhoto,
)

__all__ = [
    "Survey",
    "FunctionalArea",
    "HomogeneousArea",
    "Observation",
    "ObservationPhoto",
    "AsbestosSample",
    "AsbestosSampleLayer",
    "AsbestosSamplePhoto",
    "PaintSample",
    "PaintSamplePhoto",
]
