"""
Road inspections

Free organizations read sample inspections (``roadInspectionDataSource``) and
cannot record their own; ``roadInspection`` gates writes.
"""
from typing import Any
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.api import deps
from app.api.deps_permissions import FeatureGate
from app.crud import crud_road_inspection
from app.models.user import User
from app.schemas.gated import GatedDataResponse
from app.schemas.road_inspection import RoadInspection, RoadInspectionCreate, RoadInspectionUpdate
from app.services.plan_gate import GatedDataSource

router = APIRouter()

READ_FEATURE = "roadInspectionDataSource"
WRITE_FEATURE = "roadInspection"


def _get_own_inspection(db: Session, inspection_id: UUID, user: User):
    inspection = crud_road_inspection.get_for_organization(db, inspection_id, user.organization_id)
    if not inspection:
        raise HTTPException(status_code=404, detail="Road inspection not found")
    return inspection


@router.get("/", response_model=GatedDataResponse)
async def list_inspections(
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_active_user),
    gate: GatedDataSource = Depends(deps.get_gated_data),
) -> Any:
    org = current_user.organization

    def load_live():
        return [
            RoadInspection.model_validate(i).model_dump(mode="json")
            for i in crud_road_inspection.get_multi_by_organization(db, org.id)
        ]

    result = await gate.load(org.plan, READ_FEATURE, load_live)
    return result.to_dict()


@router.post("/", response_model=RoadInspection, status_code=201)
def create_inspection(
    body: RoadInspectionCreate,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(FeatureGate(WRITE_FEATURE)),
) -> Any:
    return crud_road_inspection.create(db, obj_in=body, organization_id=current_user.organization_id)


@router.put("/{inspection_id}", response_model=RoadInspection)
def update_inspection(
    inspection_id: UUID,
    body: RoadInspectionUpdate,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(FeatureGate(WRITE_FEATURE)),
) -> Any:
    inspection = _get_own_inspection(db, inspection_id, current_user)
    return crud_road_inspection.update(db, db_obj=inspection, obj_in=body)


@router.delete("/{inspection_id}")
def delete_inspection(
    inspection_id: UUID,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(FeatureGate(WRITE_FEATURE)),
) -> Any:
    inspection = _get_own_inspection(db, inspection_id, current_user)
    crud_road_inspection.remove(db, db_obj=inspection)
    return {"message": "Road inspection deleted successfully"}
