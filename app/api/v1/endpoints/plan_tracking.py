"""
Plan implementation tracking (admin)

Bookkeeping of which pages already enforce plan restrictions.
"""
import logging
from typing import Any, List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.api import deps
from app.api.deps_permissions import require_superuser
from app.crud import crud_plan_tracking
from app.models.user import User
from app.schemas.plan_tracking import PlanTracking, PlanTrackingUpdate

router = APIRouter()
logger = logging.getLogger("scanstreet.plan_tracking")


@router.post("/init")
def init_tracking_table(
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(require_superuser),
) -> Any:
    crud_plan_tracking.create_table(db)
    return {"ok": True, "message": "Plan tracking table ready"}


@router.get("/all", response_model=List[PlanTracking])
def list_tracking(
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(require_superuser),
) -> Any:
    if not crud_plan_tracking.table_exists(db):
        return []
    return crud_plan_tracking.get_multi(db)


@router.put("/update/{tracking_id}", response_model=PlanTracking)
def update_tracking(
    tracking_id: int,
    body: PlanTrackingUpdate,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(require_superuser),
) -> Any:
    row = crud_plan_tracking.get(db, tracking_id=tracking_id)
    if not row:
        raise HTTPException(status_code=404, detail="Tracking record not found")
    return crud_plan_tracking.update(db, db_obj=row, obj_in=body)


@router.post("/seed")
def seed_tracking(
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(require_superuser),
) -> Any:
    if not crud_plan_tracking.table_exists(db):
        raise HTTPException(status_code=400, detail="Plan tracking table does not exist; call /init first")
    written = crud_plan_tracking.seed(db)
    logger.info("Plan tracking seeded with %d pages by admin %s", written, current_user.id)
    return {"ok": True, "pages": written}
