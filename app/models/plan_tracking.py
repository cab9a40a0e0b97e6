from sqlalchemy import Column, Integer, String, Boolean, Text, DateTime, func
from app.db.base_class import Base


class PlanImplementationTracking(Base):
    __tablename__ = "plan_implementation_tracking"

    id = Column(Integer, primary_key=True, autoincrement=True)
    page_name = Column(String(100), unique=True, nullable=False)
    page_path = Column(String(200), nullable=False)
    implementation_status = Column(String(20), default="pending")  # pending / in_progress / completed
    plan_restrictions_implemented = Column(Boolean, default=False)
    free_plan_behavior = Column(Text, nullable=True)
    basic_plan_behavior = Column(Text, nullable=True)
    pro_plan_behavior = Column(Text, nullable=True)
    premium_plan_behavior = Column(Text, nullable=True)
    enterprise_plan_behavior = Column(Text, nullable=True)
    implementation_notes = Column(Text, nullable=True)
    implemented_by = Column(String(100), default="assistant")
    last_updated = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
    created_at = Column(DateTime(timezone=True), server_default=func.now())
