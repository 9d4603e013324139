from sqlalchemy import Column, String, ForeignKey

from app.database import Base


class FunctionalArea(Base):
    __tablename__ = "functional_areas"

    id = Column(String, primary_key=True)
    survey_id = Column(String, ForeignKey("surveys.id", ondelete="CASCADE"), nullable=False)
    title = Column(String, nullable=False)
    description = Column(String, nullable=True)


class HomogeneousArea(Base):
    __tablename__ = "homogeneous_areas"

    id = Column(String, primary_key=True)
    survey_id = Column(String, ForeignKey("surveys.id", ondelete="CASCADE"), nullable=False)
    # Matched against samples by value, there is no foreign key
    ha_id = Column(String, nullable=True)
    title = Column(String, nullable=False)
    description = Column(String, nullable=True)
