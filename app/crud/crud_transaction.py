from datetime import datetime, timezone
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy.orm import Session, joinedload

from app.models.organization import Organization
from app.models.transaction import Transaction, TransactionStatus, TransactionType
from app.schemas.transaction import TransactionCreate


def get(db: Session, transaction_id: UUID) -> Optional[Transaction]:
    return db.query(Transaction).filter(Transaction.id == transaction_id).first()


def get_page(
    db: Session, *, status: Optional[str] = None, type: Optional[str] = None,
    organization_id: Optional[UUID] = None, page: int = 1, limit: int = 50,
) -> Tuple[List[Transaction], int]:
    query = db.query(Transaction)
    if status:
        query = query.filter(Transaction.status == TransactionStatus(status))
    if type:
        query = query.filter(Transaction.type == TransactionType(type))
    if organization_id:
        query = query.filter(Transaction.organization_id == organization_id)
    total = query.count()
    rows = (
        query.options(joinedload(Transaction.organization))
        .order_by(Transaction.created_at.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    return rows, total


def get_completed_since(db: Session, since: Optional[datetime] = None) -> List[Tuple[Transaction, Organization]]:
    query = (
        db.query(Transaction, Organization)
        .join(Organization, Organization.id == Transaction.organization_id)
        .filter(Transaction.status == TransactionStatus.COMPLETED)
    )
    if since is not None:
        query = query.filter(Transaction.created_at >= since)
    return query.all()


def get_all(db: Session) -> List[Transaction]:
    return (
        db.query(Transaction)
        .options(joinedload(Transaction.organization))
        .order_by(Transaction.created_at.desc())
        .all()
    )


def create(db: Session, *, obj_in: TransactionCreate) -> Transaction:
    db_obj = Transaction(
        organization_id=obj_in.organization_id,
        amount=obj_in.amount,
        currency=obj_in.currency.upper(),
        type=obj_in.type,
        status=obj_in.status,
        stripe_payment_id=obj_in.stripe_payment_id,
        description=obj_in.description,
        extra=obj_in.metadata,
        completed_at=datetime.now(timezone.utc) if obj_in.status == TransactionStatus.COMPLETED else None,
    )
    db.add(db_obj)
    db.commit()
    db.refresh(db_obj)
    return db_obj
