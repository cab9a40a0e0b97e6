"""
Platform admin API (platform staff only)

Cross-organization management: organizations and their plans, users and
roles, billing transactions, revenue analytics, system settings.
"""
import logging
from typing import Any, List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from app.api import deps
from app.api.deps_permissions import require_superuser
from app.crud import crud_organization, crud_setting, crud_transaction, crud_user
from app.models.transaction import Transaction as TransactionModel
from app.models.transaction import TransactionStatus, TransactionType
from app.models.user import User, UserRole
from app.schemas.analytics import AdminStats, RevenueAnalytics
from app.schemas.organization import (
    Organization,
    OrganizationCreate,
    OrganizationPlanUpdate,
    OrganizationRef,
    OrganizationSummary,
)
from app.schemas.system_setting import SystemSetting, SystemSettingUpdate
from app.schemas.transaction import Transaction, TransactionCreate, TransactionPage
from app.schemas.user import AdminUserCreate, AdminUserInfo, UserRoleUpdate
from app.services import analytics
from app.services.cache import Cache, cache_key
from app.services.feature_matrix import parse_plan
from app.services.plans import ASSIGNABLE_PLANS

router = APIRouter()
logger = logging.getLogger("scanstreet.admin")

VALID_ROLES = [r.value for r in UserRole]


def admin_user_info(user: User) -> AdminUserInfo:
    org = user.organization
    return AdminUserInfo(
        id=user.id,
        email=user.email,
        name=user.display_name,
        phone=user.phone,
        role=user.role,
        is_active=user.is_active,
        is_superuser=user.is_superuser,
        organization_id=user.organization_id,
        last_login=user.last_login,
        created_at=user.created_at,
        organization=OrganizationRef(id=org.id, name=org.name, plan=org.plan) if org else None,
    )


def transaction_info(txn: TransactionModel) -> Transaction:
    return Transaction(
        id=txn.id,
        organization_id=txn.organization_id,
        organization_name=txn.organization.name if txn.organization else None,
        amount=txn.amount,
        currency=txn.currency,
        type=txn.type,
        status=txn.status,
        stripe_payment_id=txn.stripe_payment_id,
        description=txn.description,
        created_at=txn.created_at,
        completed_at=txn.completed_at,
    )


# ═══════════════════════════════════════════
#  Stats & analytics
# ═══════════════════════════════════════════

@router.get("/stats", response_model=AdminStats)
def admin_stats(
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(require_superuser),
) -> Any:
    return analytics.get_admin_stats(db)


@router.get("/revenue-analytics", response_model=RevenueAnalytics)
def revenue_analytics(
    months: int = Query(6, ge=1, le=24),
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(require_superuser),
) -> Any:
    return analytics.get_revenue_analytics(db, months=months)


# ═══════════════════════════════════════════
#  Organizations
# ═══════════════════════════════════════════

@router.get("/organizations", response_model=List[OrganizationSummary])
def list_organizations(
    search: Optional[str] = None,
    plan: Optional[str] = None,
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(require_superuser),
) -> Any:
    rows = crud_organization.get_multi_with_user_counts(db, search=search, plan=plan, skip=skip, limit=limit)
    return [
        OrganizationSummary.model_validate(org).model_copy(update={"user_count": count})
        for org, count in rows
    ]


@router.post("/organizations", response_model=Organization, status_code=201)
def create_organization(
    body: OrganizationCreate,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(require_superuser),
) -> Any:
    if parse_plan(body.plan) is None:
        raise HTTPException(status_code=400, detail="Invalid plan specified")
    if body.slug and crud_organization.get_by_slug(db, body.slug):
        raise HTTPException(status_code=409, detail="Organization slug already exists")
    org = crud_organization.create(db, obj_in=body)
    logger.info("Organization %s created by admin %s", org.id, current_user.id)
    return org


@router.put("/organizations/{organization_id}/plan", response_model=Organization)
def update_organization_plan(
    organization_id: UUID,
    body: OrganizationPlanUpdate,
    db: Session = Depends(deps.get_db),
    cache: Cache = Depends(deps.get_cache),
    current_user: User = Depends(require_superuser),
) -> Any:
    plan = parse_plan(body.plan)
    if plan is None or plan not in ASSIGNABLE_PLANS:
        raise HTTPException(status_code=400, detail="Invalid plan specified")

    org = crud_organization.get(db, organization_id=organization_id)
    if not org:
        raise HTTPException(status_code=404, detail="Organization not found")

    old_plan = org.plan
    org.plan = plan.value
    db.commit()
    db.refresh(org)
    cache.invalidate(cache_key("org", org.id))
    logger.info(
        "Organization %s plan changed: %s → %s (by admin %s)",
        org.id, old_plan, plan.value, current_user.id,
    )
    return org


@router.delete("/organizations/{organization_id}")
def delete_organization(
    organization_id: UUID,
    db: Session = Depends(deps.get_db),
    cache: Cache = Depends(deps.get_cache),
    current_user: User = Depends(require_superuser),
) -> Any:
    org = crud_organization.get(db, organization_id=organization_id)
    if not org:
        raise HTTPException(status_code=404, detail="Organization not found")
    if org.id == current_user.organization_id:
        raise HTTPException(status_code=400, detail="Cannot delete your own organization")
    crud_organization.remove(db, db_obj=org)
    cache.invalidate(cache_key("org", organization_id))
    logger.warning("Organization %s deleted by admin %s", organization_id, current_user.id)
    return {"ok": True}


# ═══════════════════════════════════════════
#  Users
# ═══════════════════════════════════════════

@router.get("/users", response_model=List[AdminUserInfo])
def list_users(
    search: Optional[str] = None,
    organization_id: Optional[UUID] = None,
    role: Optional[str] = None,
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(require_superuser),
) -> Any:
    users = crud_user.get_multi(
        db, organization_id=organization_id, role=role, search=search, skip=skip, limit=limit,
    )
    return [admin_user_info(u) for u in users]


@router.post("/users", response_model=AdminUserInfo, status_code=201)
def create_user(
    body: AdminUserCreate,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(require_superuser),
) -> Any:
    if body.role not in VALID_ROLES:
        raise HTTPException(status_code=400, detail=f"Invalid role. Must be one of: {', '.join(VALID_ROLES)}")
    if crud_user.get_by_email(db, email=body.email):
        raise HTTPException(status_code=409, detail="A user with this email already exists")
    if not crud_organization.get(db, organization_id=body.organization_id):
        raise HTTPException(status_code=404, detail="Organization not found")
    user = crud_user.create(db, obj_in=body, organization_id=body.organization_id)
    logger.info("User %s created in organization %s by admin %s", user.id, user.organization_id, current_user.id)
    return admin_user_info(user)


@router.put("/users/{user_id}/role", response_model=AdminUserInfo)
def update_user_role(
    user_id: UUID,
    body: UserRoleUpdate,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(require_superuser),
) -> Any:
    if body.role not in VALID_ROLES:
        raise HTTPException(status_code=400, detail=f"Invalid role. Must be one of: {', '.join(VALID_ROLES)}")
    user = crud_user.get(db, user_id=user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    user = crud_user.set_role(db, db_obj=user, role=body.role)
    return admin_user_info(user)


@router.delete("/users/{user_id}")
def delete_user(
    user_id: UUID,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(require_superuser),
) -> Any:
    if user_id == current_user.id:
        raise HTTPException(status_code=400, detail="Cannot delete your own account")
    user = crud_user.get(db, user_id=user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    crud_user.remove(db, db_obj=user)
    logger.info("User %s deleted by admin %s", user_id, current_user.id)
    return {"ok": True}


# ═══════════════════════════════════════════
#  Transactions
# ═══════════════════════════════════════════

@router.get("/transactions", response_model=TransactionPage)
def list_transactions(
    status: Optional[TransactionStatus] = None,
    type: Optional[TransactionType] = None,
    organization_id: Optional[UUID] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=500),
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(require_superuser),
) -> Any:
    rows, total = crud_transaction.get_page(
        db,
        status=status.value if status else None,
        type=type.value if type else None,
        organization_id=organization_id,
        page=page,
        limit=limit,
    )
    return TransactionPage(
        transactions=[transaction_info(t) for t in rows], total=total, page=page, limit=limit,
    )


@router.post("/transactions", response_model=Transaction, status_code=201)
def create_transaction(
    body: TransactionCreate,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(require_superuser),
) -> Any:
    if not crud_organization.get(db, organization_id=body.organization_id):
        raise HTTPException(status_code=404, detail="Organization not found")
    txn = crud_transaction.create(db, obj_in=body)
    return transaction_info(txn)


# ═══════════════════════════════════════════
#  System settings
# ═══════════════════════════════════════════

@router.get("/settings", response_model=List[SystemSetting])
def list_settings(
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(require_superuser),
) -> Any:
    crud_setting.seed_defaults(db)
    return crud_setting.get_multi(db)


@router.put("/settings/{key}", response_model=SystemSetting)
def update_setting(
    key: str,
    body: SystemSettingUpdate,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(require_superuser),
) -> Any:
    setting = crud_setting.upsert(db, key=key, value=body.value, description=body.description)
    logger.info("System setting %s updated by admin %s", key, current_user.id)
    return setting
