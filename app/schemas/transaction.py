from typing import Any, Dict, List, Optional
from uuid import UUID
from datetime import datetime
from pydantic import BaseModel, Field

from app.models.transaction import TransactionStatus, TransactionType


class TransactionCreate(BaseModel):
    organization_id: UUID
    amount: int = Field(..., description="Amount in cents")
    currency: str = Field("USD", min_length=3, max_length=3)
    type: TransactionType
    status: TransactionStatus = TransactionStatus.PENDING
    stripe_payment_id: Optional[str] = None
    description: Optional[str] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)


class Transaction(BaseModel):
    id: UUID
    organization_id: UUID
    organization_name: Optional[str] = None
    amount: int
    currency: str
    type: TransactionType
    status: TransactionStatus
    stripe_payment_id: Optional[str] = None
    description: Optional[str] = None
    created_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None


class TransactionPage(BaseModel):
    transactions: List[Transaction]
    total: int
    page: int
    limit: int
