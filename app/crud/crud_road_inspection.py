from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from app.models.road_inspection import RoadInspection
from app.schemas.road_inspection import RoadInspectionCreate, RoadInspectionUpdate


def _columns(data: Dict[str, Any]) -> Dict[str, Any]:
    for field in ("priority", "status"):
        if data.get(field) is not None:
            data[field] = data[field].value
    return data


def get_for_organization(db: Session, inspection_id: UUID, organization_id: UUID) -> Optional[RoadInspection]:
    return db.query(RoadInspection).filter(
        RoadInspection.id == inspection_id, RoadInspection.organization_id == organization_id
    ).first()


def get_multi_by_organization(db: Session, organization_id: UUID, limit: int = 500) -> List[RoadInspection]:
    return (
        db.query(RoadInspection)
        .filter(RoadInspection.organization_id == organization_id)
        .order_by(RoadInspection.inspection_date.desc())
        .limit(limit)
        .all()
    )


def create(db: Session, *, obj_in: RoadInspectionCreate, organization_id: UUID) -> RoadInspection:
    db_obj = RoadInspection(organization_id=organization_id, **_columns(obj_in.model_dump()))
    db.add(db_obj)
    db.commit()
    db.refresh(db_obj)
    return db_obj


def update(db: Session, *, db_obj: RoadInspection, obj_in: RoadInspectionUpdate) -> RoadInspection:
    update_data = _columns(obj_in.model_dump(exclude_unset=True))
    for field, value in update_data.items():
        setattr(db_obj, field, value)
    db.add(db_obj)
    db.commit()
    db.refresh(db_obj)
    return db_obj


def remove(db: Session, *, db_obj: RoadInspection) -> None:
    db.delete(db_obj)
    db.commit()
