from typing import List, Optional
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.models.asset import Asset
from app.schemas.asset import AssetCreate, AssetUpdate

CRITICAL_PCI = 40


def get(db: Session, asset_id: UUID) -> Optional[Asset]:
    return db.query(Asset).filter(Asset.id == asset_id).first()


def get_multi_by_organization(db: Session, organization_id: UUID, skip: int = 0, limit: int = 500) -> List[Asset]:
    return (
        db.query(Asset)
        .filter(Asset.organization_id == organization_id)
        .order_by(Asset.created_at.desc())
        .offset(skip)
        .limit(limit)
        .all()
    )


def create(db: Session, *, obj_in: AssetCreate, organization_id: UUID) -> Asset:
    db_obj = Asset(organization_id=organization_id, **obj_in.model_dump())
    db.add(db_obj)
    db.commit()
    db.refresh(db_obj)
    return db_obj


def update(db: Session, *, db_obj: Asset, obj_in: AssetUpdate) -> Asset:
    update_data = obj_in.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        setattr(db_obj, field, value)
    db.add(db_obj)
    db.commit()
    db.refresh(db_obj)
    return db_obj


def remove(db: Session, *, db_obj: Asset) -> None:
    db.delete(db_obj)
    db.commit()


def average_pci(db: Session, organization_id: UUID) -> Optional[float]:
    value = db.query(func.avg(Asset.pci)).filter(
        Asset.organization_id == organization_id, Asset.pci.isnot(None)
    ).scalar()
    return round(float(value), 1) if value is not None else None


def get_critical(db: Session, organization_id: UUID) -> List[Asset]:
    return (
        db.query(Asset)
        .filter(Asset.organization_id == organization_id, Asset.pci < CRITICAL_PCI)
        .order_by(Asset.pci)
        .all()
    )
