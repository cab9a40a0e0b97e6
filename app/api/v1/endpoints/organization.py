"""
Organization self-service

  - GET  /organization         → profile, plan details, limits, usage
  - GET  /organization/users   → members of the caller's organization
  - POST /organization/users   → invite a member (org admin / manager; team quota)
  - GET  /plans                → public plan catalog
"""
import logging
from typing import Any, List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.api import deps
from app.api.deps_permissions import require_org_admin
from app.crud import crud_organization, crud_user
from app.models.user import User, UserRole
from app.schemas.user import User as UserSchema
from app.schemas.user import UserCreate
from app.services.feature_matrix import PLAN_ORDER
from app.services.plans import get_plan, get_plan_limit, next_plan, serialize_plan

router = APIRouter()
logger = logging.getLogger("scanstreet.organization")


@router.get("/plans")
def list_plans() -> Any:
    return [serialize_plan(plan) for plan in PLAN_ORDER]


@router.get("/organization")
def get_my_organization(
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_active_user),
) -> Any:
    org = current_user.organization
    plan = get_plan(org.plan)
    upgrade = next_plan(org.plan)
    return {
        "id": str(org.id),
        "name": org.name,
        "slug": org.slug,
        "plan": org.plan,
        "display_name": plan["display_name"],
        "limits": {
            "team_members": plan["team_members"],
            "exports_per_month": plan["exports_per_month"],
            "rescans_per_year": plan["rescans_per_year"],
            "map_access": plan["map_access"],
        },
        "usage": {"team_members": crud_organization.count_users(db, org.id)},
        "upgrade_available": upgrade is not None,
        "next_plan": upgrade.value if upgrade else None,
    }


@router.get("/organization/users", response_model=List[UserSchema])
def list_members(
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_active_user),
) -> Any:
    return crud_user.get_multi(db, organization_id=current_user.organization_id, limit=500)


@router.post("/organization/users", response_model=UserSchema, status_code=201)
def invite_member(
    body: UserCreate,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(require_org_admin),
) -> Any:
    if body.role not in [r.value for r in UserRole]:
        raise HTTPException(status_code=400, detail="Invalid role")
    if body.role == UserRole.ADMIN.value and current_user.role != UserRole.ADMIN.value and not current_user.is_superuser:
        raise HTTPException(status_code=403, detail="Only organization admins can add admins")
    if crud_user.get_by_email(db, email=body.email):
        raise HTTPException(status_code=409, detail="A user with this email already exists")

    org = current_user.organization
    limit = get_plan_limit(org.plan, "team_members")
    if limit is not None and not current_user.is_superuser:
        current = crud_organization.count_users(db, org.id)
        if current >= limit:
            raise HTTPException(
                status_code=429,
                detail={
                    "error": "quota_exceeded",
                    "message": f"Your {get_plan(org.plan)['display_name']} plan allows {limit} team member(s)",
                    "resource": "team_members",
                    "current": current,
                    "limit": limit,
                },
            )

    user = crud_user.create(db, obj_in=body, organization_id=org.id)
    logger.info("User %s added to organization %s by %s", user.id, org.id, current_user.id)
    return user
