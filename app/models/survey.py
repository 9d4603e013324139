from sqlalchemy import Column, String, Date

from app.database import Base


class Survey(Base):
    __tablename__ = "surveys"

    id = Column(String, primary_key=True)
    organization_id = Column(String, nullable=True)
    site_name = Column(String, nullable=False)
    address = Column(String, nullable=True)
    survey_type = Column(String, nullable=False)  # hyphen-joined hazards, e.g. asbestos-lead
    survey_date = Column(Date, nullable=False)
    inspector = Column(String, nullable=False)
    status = Column(String, nullable=False, default="draft")
    notes = Column(String, nullable=True)
    site_photo_url = Column(String, nullable=True)
