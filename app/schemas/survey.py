import datetime as dt

from pydantic import BaseModel

_RECORD_CONFIG = {"from_attributes": True, "frozen": True}


class SurveyRecord(BaseModel):
    id: str
    site_name: str = ""
    address: str | None = None
    survey_type: str | None = None
    survey_date: dt.datetime | dt.date | str | None = None
    inspector: str = ""
    status: str | None = None
    notes: str | None = None
    site_photo_url: str | None = None

    model_config = _RECORD_CONFIG


class FunctionalAreaRecord(BaseModel):
    id: str
    title: str = ""
    description: str | None = None

    model_config = _RECORD_CONFIG


class HomogeneousAreaRecord(BaseModel):
    id: str
    ha_id: str | None = None
    title: str = ""
    description: str | None = None

    model_config = _RECORD_CONFIG
