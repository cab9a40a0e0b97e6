from typing import List, Optional

from sqlalchemy import inspect
from sqlalchemy.orm import Session

from app.models.plan_tracking import PlanImplementationTracking
from app.schemas.plan_tracking import PlanTrackingUpdate

_COMPLETED = "completed"
_PENDING = "pending"

# page_name, page_path, status, restrictions implemented, free, basic, pro, premium, enterprise, notes
SEED_PAGES = [
    ("Dashboard", "/dashboard", _COMPLETED, True,
     "Sample data for roads, PCI and budget; sample data controls visible",
     "Live critical issues and budget; sample roads and PCI",
     "Live critical issues and budget; sample roads and PCI",
     "Live critical issues and budget; sample roads and PCI",
     "All live data; scan method cards hidden",
     "Gated through the feature matrix dashboard section"),
    ("Asset Management", "/asset-manager", _COMPLETED, True,
     "Paywall with sample inventory", "Full access", "Full access", "Full access", "Full access",
     "Asset inventory and predictive maintenance gated per page"),
    ("Expenses", "/expenses", _COMPLETED, True,
     "Paywall", "Full access", "Full access", "Full access", "Full access", None),
    ("Maintenance Scheduler", "/maintenance", _COMPLETED, True,
     "Paywall with advanced scheduling card", "Paywall with advanced scheduling card",
     "Full access", "Full access", "Full access", None),
    ("Citizen Engagement", "/citizen-reports", _COMPLETED, True,
     "Paywall", "Paywall", "Full access", "Full access", "Full access", None),
    ("Reports & Exports", "/reports", _COMPLETED, True,
     "Sample reports, PDF export locked", "Full access", "Full access", "Full access", "Full access", None),
    ("Contractors", "/contractors", _PENDING, False,
     "Paywall", "Paywall", "Full access", "Full access", "Full access", None),
    ("Inspections", "/inspections", _PENDING, False,
     "Paywall", "Paywall", "Full access", "Full access", "Full access", None),
    ("Road Inspection Dashboard", "/road-inspection", _PENDING, False,
     "Paywall with upgrade card", "Full access", "Full access", "Full access", "Full access", None),
    ("Budget Planning", "/budget-planning", _PENDING, False,
     "Sample data", "Full access", "Full access", "Full access", "Full access", None),
    ("Cost Estimator", "/cost-estimator", _PENDING, False,
     "Paywall", "Full access", "Full access", "Full access", "Full access", None),
    ("Funding Center", "/funding-center", _PENDING, False,
     "Paywall", "Paywall", "Full access", "Full access", "Full access", None),
    ("Map View", "/map", _PENDING, False,
     "Sample data on OpenStreetMap", "Enhanced map", "Full map", "Full map", "Full map", None),
    ("Settings", "/settings", _PENDING, False,
     "Full access", "Full access", "Full access", "Full access", "Full access", None),
    ("Integrations", "/integrations", _PENDING, False,
     "Sample data", "Full access", "Full access", "Full access", "Full access", None),
]


def table_exists(db: Session) -> bool:
    return inspect(db.get_bind()).has_table(PlanImplementationTracking.__tablename__)


def create_table(db: Session) -> None:
    PlanImplementationTracking.__table__.create(bind=db.get_bind(), checkfirst=True)


def get(db: Session, tracking_id: int) -> Optional[PlanImplementationTracking]:
    return db.query(PlanImplementationTracking).filter(PlanImplementationTracking.id == tracking_id).first()


def get_multi(db: Session) -> List[PlanImplementationTracking]:
    return db.query(PlanImplementationTracking).order_by(PlanImplementationTracking.page_name).all()


def update(db: Session, *, db_obj: PlanImplementationTracking, obj_in: PlanTrackingUpdate) -> PlanImplementationTracking:
    update_data = obj_in.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        setattr(db_obj, field, value)
    db.add(db_obj)
    db.commit()
    db.refresh(db_obj)
    return db_obj


def seed(db: Session) -> int:
    """Upsert the known pages by name; returns how many rows were written."""
    existing = {row.page_name: row for row in get_multi(db)}
    for (name, path, status, implemented, free, basic, pro, premium, enterprise, notes) in SEED_PAGES:
        row = existing.get(name) or PlanImplementationTracking(page_name=name)
        row.page_path = path
        row.implementation_status = status
        row.plan_restrictions_implemented = implemented
        row.free_plan_behavior = free
        row.basic_plan_behavior = basic
        row.pro_plan_behavior = pro
        row.premium_plan_behavior = premium
        row.enterprise_plan_behavior = enterprise
        row.implementation_notes = notes
        db.add(row)
    db.commit()
    return len(SEED_PAGES)
