import uuid
import enum
from sqlalchemy import Column, String, Boolean, Text, DateTime, ForeignKey, Uuid, func
from sqlalchemy.orm import relationship
from app.db.base_class import Base


class IssueType(str, enum.Enum):
    POTHOLE = "pothole"
    ROAD_DAMAGE = "road-damage"
    SIDEWALK_CRACK = "sidewalk-crack"
    FADED_STRIPING = "faded-striping"
    DRAIN_CLOGGED = "drain-clogged"
    MISSING_SIGN = "missing-sign"
    GRAFFITI = "graffiti"
    LIGHT_OUT = "light-out"


class IssueStatus(str, enum.Enum):
    OPEN = "open"
    IN_PROGRESS = "in_progress"
    RESOLVED = "resolved"


class IssueReport(Base):
    __tablename__ = "issue_reports"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, index=True)
    organization_id = Column(
        Uuid, ForeignKey("organizations.id", ondelete="CASCADE"), nullable=True, index=True
    )
    issue_type = Column(String(30), nullable=False)
    location = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    reporter_name = Column(String, nullable=True)
    reporter_email = Column(String, nullable=True)
    reporter_phone = Column(String, nullable=True)
    notify_when_resolved = Column(Boolean, default=False)
    status = Column(String(20), default=IssueStatus.OPEN.value, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    organization = relationship("Organization", back_populates="issue_reports")
