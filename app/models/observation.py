from sqlalchemy import Boolean, Column, Float, ForeignKey, Integer, String

from app.database import Base


class Observation(Base):
    __tablename__ = "observations"

    id = Column(String, primary_key=True)
    survey_id = Column(String, ForeignKey("surveys.id", ondelete="CASCADE"), nullable=False)
    area = Column(String, nullable=False)
    homogeneous_area = Column(String, nullable=True)
    material_type = Column(String, nullable=False)
    condition = Column(String, nullable=False)
    quantity = Column(String, nullable=True)
    risk_level = Column(String, nullable=True)  # low, medium, high, critical
    sample_collected = Column(Boolean, nullable=False, default=False)
    sample_id = Column(String, nullable=True)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)
    notes = Column(String, nullable=True)


class ObservationPhoto(Base):
    __tablename__ = "observation_photos"

    id = Column(String, primary_key=True)
    observation_id = Column(String, ForeignKey("observations.id", ondelete="CASCADE"), nullable=False)
    filename = Column(String, nullable=False)
    original_name = Column(String, nullable=False)
    mime_type = Column(String, nullable=False)
    size = Column(Integer, nullable=False)
