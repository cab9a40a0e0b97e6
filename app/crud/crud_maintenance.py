from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from app.models.maintenance_task import MaintenanceTask
from app.schemas.maintenance_task import MaintenanceTaskCreate, MaintenanceTaskUpdate


def _columns(data: Dict[str, Any]) -> Dict[str, Any]:
    for field in ("priority", "status"):
        if data.get(field) is not None:
            data[field] = data[field].value
    return data


def get_for_organization(db: Session, task_id: UUID, organization_id: UUID) -> Optional[MaintenanceTask]:
    return db.query(MaintenanceTask).filter(
        MaintenanceTask.id == task_id, MaintenanceTask.organization_id == organization_id
    ).first()


def get_multi_by_organization(db: Session, organization_id: UUID, limit: int = 500) -> List[MaintenanceTask]:
    return (
        db.query(MaintenanceTask)
        .filter(MaintenanceTask.organization_id == organization_id)
        .order_by(MaintenanceTask.scheduled_date.desc())
        .limit(limit)
        .all()
    )


def create(db: Session, *, obj_in: MaintenanceTaskCreate, organization_id: UUID) -> MaintenanceTask:
    db_obj = MaintenanceTask(organization_id=organization_id, **_columns(obj_in.model_dump()))
    db.add(db_obj)
    db.commit()
    db.refresh(db_obj)
    return db_obj


def update(db: Session, *, db_obj: MaintenanceTask, obj_in: MaintenanceTaskUpdate) -> MaintenanceTask:
    update_data = _columns(obj_in.model_dump(exclude_unset=True))
    for field, value in update_data.items():
        setattr(db_obj, field, value)
    db.add(db_obj)
    db.commit()
    db.refresh(db_obj)
    return db_obj


def remove(db: Session, *, db_obj: MaintenanceTask) -> None:
    db.delete(db_obj)
    db.commit()
