from pydantic import BaseModel

from app.schemas.survey import _RECORD_CONFIG


class AsbestosSampleRecord(BaseModel):
    id: str
    functional_area: str | None = None
    homogeneous_area: str | None = None
    sample_number: str = ""
    material_type: str | None = None
    sample_description: str | None = None
    sample_location: str | None = None
    estimated_quantity: str | None = None
    quantity_unit: str | None = None
    condition: str | None = None
    collection_method: str | None = None
    asbestos_type: str | None = None
    asbestos_percent: float | str | None = None
    results: str | None = None
    notes: str | None = None

    model_config = _RECORD_CONFIG


class SampleLayerRecord(BaseModel):
    id: str
    sample_id: str
    layer_number: int
    material_type: str | None = None
    asbestos_type: str | None = None
    asbestos_percent: float | str | None = None
    description: str | None = None
    notes: str | None = None

    model_config = _RECORD_CONFIG


class PaintSampleRecord(BaseModel):
    id: str
    functional_area: str | None = None
    sample_number: str = ""
    sample_description: str | None = None
    sample_location: str | None = None
    substrate: str | None = None
    substrate_other: str | None = None
    collection_method: str | None = None
    lead_result_mg_kg: float | str | None = None
    cadmium_result_mg_kg: float | str | None = None
    notes: str | None = None

    model_config = _RECORD_CONFIG
