import uuid
from sqlalchemy import Column, String, DateTime, JSON, Uuid, func
from sqlalchemy.orm import relationship
from app.db.base_class import Base


class Organization(Base):
    __tablename__ = "organizations"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, index=True)
    name = Column(String, index=True, nullable=False)
    slug = Column(String, unique=True, index=True, nullable=False)
    plan = Column(String, default="free", nullable=False)  # see feature_matrix.Plan
    settings = Column(JSON, default=dict)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    users = relationship("User", back_populates="organization", cascade="all, delete-orphan")
    transactions = relationship("Transaction", back_populates="organization", cascade="all, delete-orphan")
    assets = relationship("Asset", back_populates="organization", cascade="all, delete-orphan")
    issue_reports = relationship("IssueReport", back_populates="organization", cascade="all, delete-orphan")
    maintenance_tasks = relationship("MaintenanceTask", back_populates="organization", cascade="all, delete-orphan")
    road_inspections = relationship("RoadInspection", back_populates="organization", cascade="all, delete-orphan")
