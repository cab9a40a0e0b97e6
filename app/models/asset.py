import uuid
from sqlalchemy import Column, String, Integer, Float, Date, DateTime, ForeignKey, Uuid, func
from sqlalchemy.orm import relationship
from app.db.base_class import Base


class Asset(Base):
    __tablename__ = "assets"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, index=True)
    organization_id = Column(
        Uuid, ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name = Column(String, nullable=False)
    type = Column(String(50), nullable=False)  # road, bridge, sidewalk, signal, ...
    address = Column(String, nullable=True)
    lat = Column(Float, nullable=True)
    lng = Column(Float, nullable=True)
    condition = Column(String(20), default="good")  # excellent / good / fair / poor / critical
    pci = Column(Integer, nullable=True)
    install_date = Column(Date, nullable=True)
    last_inspection = Column(Date, nullable=True)
    cost = Column(Integer, nullable=True)  # whole dollars
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    organization = relationship("Organization", back_populates="assets")
