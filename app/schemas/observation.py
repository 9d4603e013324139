from pydantic import BaseModel

from app.schemas.survey import _RECORD_CONFIG


class PhotoRecord(BaseModel):
    """A photo attached to an observation, a sample or the site.

    `data_url` carries an already embedded image, `url` a remote or
    storage-relative location and `filename` the stored upload name.
    """

    id: str
    filename: str | None = None
    original_name: str | None = None
    data_url: str | None = None
    url: str | None = None

    model_config = _RECORD_CONFIG


class ObservationRecord(BaseModel):
    id: str
    area: str = ""
    homogeneous_area: str | None = None
    material_type: str | None = None
    condition: str | None = None
    quantity: str | None = None
    risk_level: str | None = None
    sample_collected: bool | None = None
    sample_id: str | None = None
    latitude: float | str | None = None
    longitude: float | str | None = None
    notes: str | None = None

    model_config = _RECORD_CONFIG
