"""
Maintenance scheduler

Reads are gated by ``maintenanceScheduling``: live tasks on Pro and up, a
locked sample schedule below that. Writes require the feature to be shown.
"""
import logging
from typing import Any
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.api import deps
from app.api.deps_permissions import FeatureGate
from app.crud import crud_maintenance
from app.models.user import User
from app.schemas.gated import GatedDataResponse
from app.schemas.maintenance_task import MaintenanceTask, MaintenanceTaskCreate, MaintenanceTaskUpdate
from app.services.plan_gate import GatedDataSource

router = APIRouter()
logger = logging.getLogger("scanstreet.maintenance")

FEATURE = "maintenanceScheduling"


def _get_own_task(db: Session, task_id: UUID, user: User):
    task = crud_maintenance.get_for_organization(db, task_id, user.organization_id)
    if not task:
        raise HTTPException(status_code=404, detail="Maintenance task not found")
    return task


@router.get("/", response_model=GatedDataResponse)
async def list_tasks(
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_active_user),
    gate: GatedDataSource = Depends(deps.get_gated_data),
) -> Any:
    org = current_user.organization

    def load_live():
        return [
            MaintenanceTask.model_validate(t).model_dump(mode="json")
            for t in crud_maintenance.get_multi_by_organization(db, org.id)
        ]

    result = await gate.load(org.plan, FEATURE, load_live)
    return result.to_dict()


@router.post("/", response_model=MaintenanceTask, status_code=201)
def create_task(
    body: MaintenanceTaskCreate,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(FeatureGate(FEATURE)),
) -> Any:
    task = crud_maintenance.create(db, obj_in=body, organization_id=current_user.organization_id)
    logger.info("Maintenance task %s scheduled for %s", task.id, task.scheduled_date)
    return task


@router.put("/{task_id}", response_model=MaintenanceTask)
def update_task(
    task_id: UUID,
    body: MaintenanceTaskUpdate,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(FeatureGate(FEATURE)),
) -> Any:
    task = _get_own_task(db, task_id, current_user)
    return crud_maintenance.update(db, db_obj=task, obj_in=body)


@router.delete("/{task_id}")
def delete_task(
    task_id: UUID,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(FeatureGate(FEATURE)),
) -> Any:
    task = _get_own_task(db, task_id, current_user)
    crud_maintenance.remove(db, db_obj=task)
    return {"message": "Maintenance task deleted successfully"}
