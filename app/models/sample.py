from sqlalchemy import Column, Float, ForeignKey, Integer, String

from app.database import Base


class AsbestosSample(Base):
    __tablename__ = "asbestos_samples"

    id = Column(String, primary_key=True)
    survey_id = Column(String, ForeignKey("surveys.id", ondelete="CASCADE"), nullable=False)
    functional_area = Column(String, nullable=False)
    homogeneous_area = Column(String, nullable=False)
    sample_number = Column(String, nullable=False)
    material_type = Column(String, nullable=False)
    sample_description = Column(String, nullable=True)
    sample_location = Column(String, nullable=True)
    estimated_quantity = Column(String, nullable=True)
    quantity_unit = Column(String, nullable=True)
    condition = Column(String, nullable=True)
    collection_method = Column(String, nullable=True)
    asbestos_type = Column(String, nullable=True)
    asbestos_percent = Column(Float, nullable=True)
    results = Column(String, nullable=True)
    notes = Column(String, nullable=True)


class AsbestosSampleLayer(Base):
    __tablename__ = "asbestos_sample_layers"

    id = Column(String, primary_key=True)
    sample_id = Column(String, ForeignKey("asbestos_samples.id", ondelete="CASCADE"), nullable=False)
    layer_number = Column(Integer, nullable=False)
    material_type = Column(String, nullable=True)
    asbestos_type = Column(String, nullable=True)
    asbestos_percent = Column(Float, nullable=True)
    description = Column(String, nullable=True)
    notes = Column(String, nullable=True)


class AsbestosSamplePhoto(Base):
    __tablename__ = "asbestos_sample_photos"

    id = Column(String, primary_key=True)
    sample_id = Column(String, ForeignKey("asbestos_samples.id", ondelete="CASCADE"), nullable=False)
    url = Column(String, nullable=False)
    filename = Column(String, nullable=True)


class PaintSample(Base):
    __tablename__ = "paint_samples"

    id = Column(String, primary_key=True)
    survey_id = Column(String, ForeignKey("surveys.id", ondelete="CASCADE"), nullable=False)
    functional_area = Column(String, nullable=False)
    sample_number = Column(String, nullable=False)
    sample_description = Column(String, nullable=True)
    sample_location = Column(String, nullable=True)
    substrate = Column(String, nullable=True)
    substrate_other = Column(String, nullable=True)
    collection_method = Column(String, nullable=True)
    lead_result_mg_kg = Column(Float, nullable=True)
    cadmium_result_mg_kg = Column(Float, nullable=True)
    notes = Column(String, nullable=True)


class PaintSamplePhoto(Base):
    __tablename__ = "paint_sample_photos"

    id = Column(String, primary_key=True)
    sample_id = Column(String, ForeignKey("paint_samples.id", ondelete="CASCADE"), nullable=False)
    url = Column(String, nullable=False)
    filename = Column(String, nullable=True)
