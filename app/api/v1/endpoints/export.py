"""
Admin data export

  - GET /organizations?format=csv|json
  - GET /users?format=csv|json
  - GET /transactions?format=csv|json   (amounts in dollars)
  - GET /analytics?format=csv|json      (per-organization revenue rollup)
"""
from typing import Any

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.api import deps
from app.api.deps_permissions import require_superuser
from app.crud import crud_organization, crud_transaction, crud_user
from app.models.user import User
from app.services import analytics
from app.services.exporter import export_response

router = APIRouter()

FORMAT_QUERY = Query("csv", pattern="^(csv|json)$")


@router.get("/organizations")
def export_organizations(
    format: str = FORMAT_QUERY,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(require_superuser),
) -> Any:
    rows = [
        {
            "id": str(org.id),
            "name": org.name,
            "slug": org.slug,
            "plan": org.plan,
            "user_count": count,
            "created_at": org.created_at,
        }
        for org, count in crud_organization.get_multi_with_user_counts(db, limit=10_000)
    ]
    return export_response("organizations", rows, format,
                           ["id", "name", "slug", "plan", "user_count", "created_at"])


@router.get("/users")
def export_users(
    format: str = FORMAT_QUERY,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(require_superuser),
) -> Any:
    rows = [
        {
            "id": str(u.id),
            "email": u.email,
            "name": u.display_name,
            "role": u.role,
            "organization": u.organization.name if u.organization else None,
            "plan": u.organization.plan if u.organization else None,
            "last_login": u.last_login,
            "created_at": u.created_at,
        }
        for u in crud_user.get_multi(db, limit=10_000)
    ]
    return export_response("users", rows, format,
                           ["id", "email", "name", "role", "organization", "plan", "last_login", "created_at"])


@router.get("/transactions")
def export_transactions(
    format: str = FORMAT_QUERY,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(require_superuser),
) -> Any:
    rows = [
        {
            "id": str(t.id),
            "organization": t.organization.name if t.organization else None,
            "amount": t.amount_dollars,
            "currency": t.currency,
            "type": t.type.value,
            "status": t.status.value,
            "description": t.description,
            "created_at": t.created_at,
            "completed_at": t.completed_at,
        }
        for t in crud_transaction.get_all(db)
    ]
    return export_response("transactions", rows, format,
                           ["id", "organization", "amount", "currency", "type", "status",
                            "description", "created_at", "completed_at"])


@router.get("/analytics")
def export_analytics(
    format: str = FORMAT_QUERY,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(require_superuser),
) -> Any:
    rows = analytics.analytics_rows(db)
    return export_response("analytics", rows, format,
                           ["organization_id", "organization", "plan", "users", "transactions",
                            "revenue", "list_price_monthly"])
