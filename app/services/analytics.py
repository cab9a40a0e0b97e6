"""
Admin analytics: headline stats and revenue breakdowns.

Aggregation happens in Python over completed transactions so the same code
runs on PostgreSQL and SQLite. Amounts are stored in cents and reported in
dollars.
"""

from collections import defaultdict
from datetime import datetime, timezone
from typing import Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.crud import crud_organization, crud_transaction
from app.models.organization import Organization
from app.models.transaction import Transaction
from app.models.user import User
from app.services.plans import monthly_price

TOP_CUSTOMERS = 5


def _month_start(now: Optional[datetime] = None) -> datetime:
    now = now or datetime.now(timezone.utc)
    return now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)


def _shift_months(month: datetime, delta: int) -> datetime:
    index = month.year * 12 + (month.month - 1) + delta
    return month.replace(year=index // 12, month=index % 12 + 1)


def _month_label(value: datetime) -> str:
    return value.strftime("%Y-%m")


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def get_admin_stats(db: Session, now: Optional[datetime] = None) -> Dict:
    distribution = crud_organization.plan_distribution(db)
    month_start = _month_start(now)

    this_month = [t for t, _ in crud_transaction.get_completed_since(db, month_start)]

    return {
        "total_organizations": db.query(func.count(Organization.id)).scalar() or 0,
        "total_users": db.query(func.count(User.id)).scalar() or 0,
        "active_users": db.query(func.count(User.id)).filter(User.is_active.is_(True)).scalar() or 0,
        "monthly_revenue": float(sum(monthly_price(plan) * n for plan, n in distribution.items())),
        "revenue_this_month": sum(t.amount for t in this_month) / 100,
        "total_transactions": db.query(func.count(Transaction.id)).scalar() or 0,
        "plan_distribution": distribution,
    }


def get_revenue_analytics(db: Session, months: int = 6, now: Optional[datetime] = None) -> Dict:
    current = _month_start(now)
    first = _shift_months(current, -(months - 1))
    labels = [_month_label(_shift_months(first, i)) for i in range(months)]

    trend = {label: {"month": label, "revenue": 0, "transactions": 0} for label in labels}
    by_plan: Dict[str, Dict] = defaultdict(lambda: {"revenue": 0, "transactions": 0})
    by_org: Dict[str, Dict] = {}

    for txn, org in crud_transaction.get_completed_since(db, first):
        label = _month_label(_as_utc(txn.created_at)) if txn.created_at else labels[-1]
        if label in trend:
            trend[label]["revenue"] += txn.amount
            trend[label]["transactions"] += 1

        by_plan[org.plan]["revenue"] += txn.amount
        by_plan[org.plan]["transactions"] += 1

        customer = by_org.setdefault(str(org.id), {
            "organization_id": str(org.id), "name": org.name, "plan": org.plan,
            "revenue": 0, "transactions": 0,
        })
        customer["revenue"] += txn.amount
        customer["transactions"] += 1

    top = sorted(by_org.values(), key=lambda c: c["revenue"], reverse=True)[:TOP_CUSTOMERS]

    return {
        "monthly_trend": [_to_dollars(trend[label]) for label in labels],
        "plan_revenue": [
            _to_dollars({"plan": plan, **totals})
            for plan, totals in sorted(by_plan.items(), key=lambda kv: kv[1]["revenue"], reverse=True)
        ],
        "top_customers": [_to_dollars(c) for c in top],
    }


def _to_dollars(row: Dict) -> Dict:
    return {**row, "revenue": row["revenue"] / 100}


def analytics_rows(db: Session) -> List[Dict]:
    """Flat per-organization rows for the analytics export."""
    revenue: Dict[str, int] = defaultdict(int)
    count: Dict[str, int] = defaultdict(int)
    for txn, org in crud_transaction.get_completed_since(db):
        revenue[str(org.id)] += txn.amount
        count[str(org.id)] += 1

    rows = []
    for org, users in crud_organization.get_multi_with_user_counts(db, limit=10_000):
        key = str(org.id)
        rows.append({
            "organization_id": key,
            "organization": org.name,
            "plan": org.plan,
            "users": users,
            "transactions": count[key],
            "revenue": revenue[key] / 100,
            "list_price_monthly": monthly_price(org.plan),
        })
    return rows
