import uuid
from sqlalchemy import Column, String, Text, DateTime, Uuid, func
from app.db.base_class import Base

DEFAULT_SETTINGS = {
    "stripe_public_key": ("", "Stripe publishable key"),
    "stripe_secret_key": ("", "Stripe secret key"),
    "maintenance_mode": ("false", "Reject non-admin traffic when true"),
    "max_organizations_per_user": ("5", "Organizations a single user may own"),
    "trial_duration_days": ("14", "Length of the free trial in days"),
    "email_notifications": ("true", "Send transactional email"),
}


class SystemSetting(Base):
    __tablename__ = "system_settings"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    key = Column(String, unique=True, index=True, nullable=False)
    value = Column(Text, nullable=True)
    description = Column(Text, nullable=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
