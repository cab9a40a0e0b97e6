import uuid
from sqlalchemy import Column, String, Text, DateTime, Uuid, UniqueConstraint, func
from app.db.base_class import Base


class FeatureMatrixOverride(Base):
    """Admin override of one (plan, section, feature) cell of the default matrix."""

    __tablename__ = "feature_matrix_tracking"
    __table_args__ = (
        UniqueConstraint("feature_section", "feature_name", "plan_type", name="uq_feature_matrix_cell"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    feature_section = Column(String(50), nullable=False)
    feature_name = Column(String(100), nullable=False, index=True)
    plan_type = Column(String(50), nullable=False, index=True)
    feature_state = Column(String(20), nullable=False)
    description = Column(Text, nullable=True)
    last_updated = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
