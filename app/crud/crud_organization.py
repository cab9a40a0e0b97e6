import re
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.models.organization import Organization
from app.models.user import User
from app.schemas.organization import OrganizationCreate, OrganizationUpdate
from app.services.feature_matrix import normalize_plan


def slugify(name: str) -> str:
    slug = re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")
    return slug or "organization"


def get(db: Session, organization_id: UUID) -> Optional[Organization]:
    return db.query(Organization).filter(Organization.id == organization_id).first()


def get_by_slug(db: Session, slug: str) -> Optional[Organization]:
    return db.query(Organization).filter(Organization.slug == slug).first()


def get_multi(db: Session, skip: int = 0, limit: int = 100) -> List[Organization]:
    return db.query(Organization).order_by(Organization.created_at.desc()).offset(skip).limit(limit).all()


def get_multi_with_user_counts(
    db: Session, *, search: Optional[str] = None, plan: Optional[str] = None,
    skip: int = 0, limit: int = 100,
) -> List[Tuple[Organization, int]]:
    user_count = (
        db.query(User.organization_id, func.count(User.id).label("n"))
        .group_by(User.organization_id)
        .subquery()
    )
    query = (
        db.query(Organization, func.coalesce(user_count.c.n, 0))
        .outerjoin(user_count, user_count.c.organization_id == Organization.id)
    )
    if search:
        query = query.filter(Organization.name.ilike(f"%{search}%"))
    if plan:
        query = query.filter(Organization.plan == plan)
    return query.order_by(Organization.created_at.desc()).offset(skip).limit(limit).all()


def unique_slug(db: Session, name: str) -> str:
    base = slugify(name)
    slug, n = base, 2
    while get_by_slug(db, slug) is not None:
        slug = f"{base}-{n}"
        n += 1
    return slug


def create(db: Session, *, obj_in: OrganizationCreate, commit: bool = True) -> Organization:
    db_obj = Organization(
        name=obj_in.name,
        slug=obj_in.slug or unique_slug(db, obj_in.name),
        plan=normalize_plan(obj_in.plan).value,
        settings={},
    )
    db.add(db_obj)
    if commit:
        db.commit()
        db.refresh(db_obj)
    else:
        db.flush()
    return db_obj


def update(db: Session, *, db_obj: Organization, obj_in: OrganizationUpdate) -> Organization:
    update_data = obj_in.model_dump(exclude_unset=True)
    if "plan" in update_data and update_data["plan"] is not None:
        update_data["plan"] = normalize_plan(update_data["plan"]).value
    for field, value in update_data.items():
        setattr(db_obj, field, value)
    db.add(db_obj)
    db.commit()
    db.refresh(db_obj)
    return db_obj


def count_users(db: Session, organization_id: UUID) -> int:
    return db.query(func.count(User.id)).filter(
        User.organization_id == organization_id, User.is_active.is_(True)
    ).scalar() or 0


def plan_distribution(db: Session) -> dict:
    rows = db.query(Organization.plan, func.count(Organization.id)).group_by(Organization.plan).all()
    return {plan: count for plan, count in rows}


def remove(db: Session, *, db_obj: Organization) -> None:
    db.delete(db_obj)
    db.commit()
