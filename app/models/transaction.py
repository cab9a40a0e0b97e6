import uuid
import enum
from sqlalchemy import Column, String, Integer, DateTime, ForeignKey, JSON, Text, Uuid, Enum, func
from sqlalchemy.orm import relationship
from app.db.base_class import Base


class TransactionType(str, enum.Enum):
    PAYMENT = "payment"
    REFUND = "refund"
    UPGRADE = "upgrade"
    DOWNGRADE = "downgrade"


class TransactionStatus(str, enum.Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELED = "canceled"


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


class Transaction(Base):
    __tablename__ = "transactions"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, index=True)
    organization_id = Column(
        Uuid, ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False, index=True
    )
    amount = Column(Integer, nullable=False)  # cents
    currency = Column(String(3), default="USD", nullable=False)
    type = Column(
        Enum(TransactionType, name="transaction_type", values_callable=_enum_values),
        nullable=False,
    )
    status = Column(
        Enum(TransactionStatus, name="transaction_status", values_callable=_enum_values),
        default=TransactionStatus.PENDING,
        nullable=False,
        index=True,
    )
    stripe_payment_id = Column(String, nullable=True)
    description = Column(Text, nullable=True)
    # "metadata" is reserved on declarative classes
    extra = Column("metadata", JSON, default=dict)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    completed_at = Column(DateTime(timezone=True), nullable=True)

    organization = relationship("Organization", back_populates="transactions")

    @property
    def amount_dollars(self) -> float:
        return self.amount / 100
