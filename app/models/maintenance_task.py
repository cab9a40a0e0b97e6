import uuid
import enum
from sqlalchemy import Column, String, Integer, Boolean, Text, Date, DateTime, ForeignKey, JSON, Uuid, func
from sqlalchemy.orm import relationship
from app.db.base_class import Base


class TaskPriority(str, enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class TaskStatus(str, enum.Enum):
    SCHEDULED = "scheduled"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    DELAYED = "delayed"
    CANCELED = "canceled"


class MaintenanceTask(Base):
    __tablename__ = "maintenance_tasks"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, index=True)
    organization_id = Column(
        Uuid, ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    asset_id = Column(String, nullable=False)
    asset_name = Column(String, nullable=False)
    contractor = Column(String, nullable=False)
    priority = Column(String(20), nullable=False, default=TaskPriority.MEDIUM.value)
    status = Column(String(20), nullable=False, default=TaskStatus.SCHEDULED.value, index=True)
    scheduled_date = Column(Date, nullable=False)
    estimated_duration = Column(Integer, nullable=True)  # hours
    estimated_cost = Column(Integer, nullable=True)  # whole dollars
    actual_cost = Column(Integer, nullable=True)
    progress = Column(Integer, default=0)  # percent
    materials = Column(JSON, default=list)
    weather_sensitive = Column(Boolean, default=False)
    assigned_crew = Column(String, nullable=True)
    pci_score = Column(Integer, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    organization = relationship("Organization", back_populates="maintenance_tasks")
