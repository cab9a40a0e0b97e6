import uuid
from sqlalchemy import Column, String, Integer, Text, Date, DateTime, ForeignKey, JSON, Uuid, func
from sqlalchemy.orm import relationship
from app.db.base_class import Base


class RoadInspection(Base):
    __tablename__ = "road_inspections"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, index=True)
    organization_id = Column(
        Uuid, ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False, index=True
    )
    road_id = Column(String, nullable=False)
    road_name = Column(String, nullable=False)
    location = Column(String(500), nullable=False)
    coordinates = Column(JSON, nullable=False)  # {"lat": ..., "lng": ...}
    inspector = Column(String, nullable=False)
    inspection_date = Column(Date, nullable=False, index=True)
    status = Column(String(20), nullable=False)  # shares TaskStatus values
    priority = Column(String(20), nullable=False)
    pci_score = Column(Integer, nullable=True)
    surface_type = Column(String(100), nullable=True)
    distress_types = Column(JSON, default=list)
    photos = Column(Integer, default=0)
    weather_conditions = Column(String, nullable=True)
    traffic_volume = Column(String(100), nullable=True)
    findings = Column(Text, nullable=True)
    recommendations = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    organization = relationship("Organization", back_populates="road_inspections")
