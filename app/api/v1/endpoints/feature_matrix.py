"""
Feature Matrix API

Endpoints:
  - GET  /plan/{plan}   → Public: resolved matrix for a plan
  - GET  /resolve       → Public: single (plan, feature) lookup
  - GET  /me            → Matrix for the caller's organization
  - GET  /all           → Admin: every cell, with override markers
  - PUT  /update        → Admin: override one cell
  - POST /initialize    → Admin: drop all overrides
"""
import logging
from typing import Any, List

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from app.api import deps
from app.api.deps_permissions import require_superuser
from app.crud import crud_feature_matrix
from app.models.user import User
from app.schemas.feature_matrix import (
    FeatureMatrixCell,
    FeatureMatrixUpdate,
    FeatureResolution,
    PlanMatrixResponse,
)
from app.services.feature_matrix import (
    PLAN_ORDER,
    FeatureMatrixResolver,
    FeatureSection,
    FeatureState,
    PlanMatrix,
    normalize_plan,
    parse_plan,
)
from app.services.plans import get_upgrade_message

router = APIRouter()
logger = logging.getLogger("scanstreet.feature_matrix")


def _matrix_response(requested: str, matrix: PlanMatrix) -> PlanMatrixResponse:
    data = matrix.to_dict()
    return PlanMatrixResponse(
        requested_plan=requested,
        resolved_plan=data["plan"],
        version=data["version"],
        dashboard=data["dashboard"],
        navMenu=data["navMenu"],
        pages=data["pages"],
    )


@router.get("/plan/{plan}", response_model=PlanMatrixResponse)
def get_plan_matrix(
    plan: str,
    resolver: FeatureMatrixResolver = Depends(deps.get_feature_matrix),
) -> Any:
    return _matrix_response(plan, resolver.get_matrix_for_plan(plan))


@router.get("/resolve", response_model=FeatureResolution)
def resolve_feature(
    plan: str = Query(...),
    feature: str = Query(...),
    resolver: FeatureMatrixResolver = Depends(deps.get_feature_matrix),
) -> Any:
    canonical = normalize_plan(plan)
    state = resolver.resolve(canonical, feature)
    target = resolver.upgrade_target(canonical, feature)
    message = None
    if state is not FeatureState.SHOWN and feature in resolver.matrix:
        message = get_upgrade_message(canonical, resolver.matrix.definition(feature).description, target)
    return FeatureResolution(
        requested_plan=plan,
        resolved_plan=canonical.value,
        feature=feature,
        state=state.value,
        upgrade_to=target.value if target else None,
        upgrade_message=message,
    )


@router.get("/me", response_model=PlanMatrixResponse)
def get_my_matrix(
    current_user: User = Depends(deps.get_current_active_user),
    resolver: FeatureMatrixResolver = Depends(deps.get_feature_matrix),
) -> Any:
    plan = current_user.organization.plan
    return _matrix_response(plan, resolver.get_matrix_for_plan(plan))


@router.get("/all", response_model=List[FeatureMatrixCell])
def list_all_cells(
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(require_superuser),
    resolver: FeatureMatrixResolver = Depends(deps.get_feature_matrix),
) -> Any:
    overrides = {
        (row.plan_type, row.feature_name): row for row in crud_feature_matrix.get_multi(db)
    }
    cells = []
    for plan in PLAN_ORDER:
        for definition in resolver.matrix.features:
            row = overrides.get((plan.value, definition.key))
            cells.append(FeatureMatrixCell(
                plan_type=plan.value,
                feature_section=definition.section.value,
                feature_name=definition.key,
                feature_state=definition.state_for(plan).value,
                description=(row.description if row and row.description else definition.description),
                overridden=row is not None,
                last_updated=row.last_updated if row else None,
            ))
    return cells


@router.put("/update", response_model=FeatureMatrixCell)
def update_cell(
    body: FeatureMatrixUpdate,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(require_superuser),
    resolver: FeatureMatrixResolver = Depends(deps.get_feature_matrix),
) -> Any:
    plan = parse_plan(body.plan_type)
    if plan is None:
        raise HTTPException(status_code=400, detail=f"Invalid plan type: {body.plan_type}")
    try:
        section = FeatureSection(body.feature_section)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid feature section: {body.feature_section}")
    try:
        state = FeatureState(body.feature_state)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid feature state: {body.feature_state}")

    definition = resolver.matrix.definition(body.feature_name)
    if definition is None or definition.section is not section:
        raise HTTPException(status_code=404, detail="Feature not found")

    row = crud_feature_matrix.upsert(
        db, section=section.value, feature=definition.key, plan=plan.value,
        state=state.value, description=body.description,
    )
    resolver.apply_overrides(crud_feature_matrix.load_overrides(db))
    logger.info(
        "Feature %s/%s for plan %s set to %s by admin %s",
        section.value, definition.key, plan.value, state.value, current_user.id,
    )
    return FeatureMatrixCell(
        plan_type=plan.value,
        feature_section=section.value,
        feature_name=definition.key,
        feature_state=state.value,
        description=row.description or definition.description,
        overridden=True,
        last_updated=row.last_updated,
    )


@router.post("/initialize")
def initialize_matrix(
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(require_superuser),
    resolver: FeatureMatrixResolver = Depends(deps.get_feature_matrix),
) -> Any:
    removed = crud_feature_matrix.clear(db)
    snapshot = resolver.apply_overrides([])
    logger.info("Feature matrix reset to defaults by admin %s (%d overrides removed)", current_user.id, removed)
    return {
        "ok": True,
        "message": "Feature matrix initialized",
        "overrides_removed": removed,
        "version": snapshot.version,
        "features": len(snapshot),
    }
