from datetime import datetime, timezone
from typing import List, Optional
from uuid import UUID

from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload

from app.core.security import get_password_hash, verify_password
from app.models.user import User
from app.schemas.user import UserCreate


def get(db: Session, user_id: UUID) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()


def get_by_email(db: Session, *, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == email.lower()).first()


def get_multi(
    db: Session, *, organization_id: Optional[UUID] = None, role: Optional[str] = None,
    search: Optional[str] = None, skip: int = 0, limit: int = 100,
) -> List[User]:
    query = db.query(User).options(joinedload(User.organization))
    if organization_id:
        query = query.filter(User.organization_id == organization_id)
    if role:
        query = query.filter(User.role == role)
    if search:
        pattern = f"%{search}%"
        query = query.filter(or_(User.email.ilike(pattern), User.name.ilike(pattern)))
    return query.order_by(User.created_at.desc()).offset(skip).limit(limit).all()


def create(
    db: Session, *, obj_in: UserCreate, organization_id: UUID,
    is_superuser: bool = False, commit: bool = True,
) -> User:
    db_obj = User(
        email=obj_in.email.lower(),
        name=obj_in.name,
        phone=obj_in.phone,
        hashed_password=get_password_hash(obj_in.password),
        role=obj_in.role,
        organization_id=organization_id,
        is_superuser=is_superuser,
    )
    db.add(db_obj)
    if commit:
        db.commit()
        db.refresh(db_obj)
    return db_obj


def authenticate(db: Session, *, email: str, password: str) -> Optional[User]:
    user = get_by_email(db, email=email)
    if not user:
        return None
    if not verify_password(password, user.hashed_password):
        return None
    return user


def touch_last_login(db: Session, *, db_obj: User) -> User:
    db_obj.last_login = datetime.now(timezone.utc)
    db.add(db_obj)
    db.commit()
    db.refresh(db_obj)
    return db_obj


def set_role(db: Session, *, db_obj: User, role: str) -> User:
    db_obj.role = role
    db.add(db_obj)
    db.commit()
    db.refresh(db_obj)
    return db_obj


def remove(db: Session, *, db_obj: User) -> None:
    db.delete(db_obj)
    db.commit()
