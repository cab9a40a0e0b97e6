from typing import List, Optional

from sqlalchemy.orm import Session

from app.models.system_setting import DEFAULT_SETTINGS, SystemSetting


def get_by_key(db: Session, key: str) -> Optional[SystemSetting]:
    return db.query(SystemSetting).filter(SystemSetting.key == key).first()


def get_multi(db: Session) -> List[SystemSetting]:
    return db.query(SystemSetting).order_by(SystemSetting.key).all()


def upsert(db: Session, *, key: str, value: str, description: Optional[str] = None) -> SystemSetting:
    db_obj = get_by_key(db, key)
    if db_obj is None:
        db_obj = SystemSetting(key=key)
    db_obj.value = value
    if description is not None:
        db_obj.description = description
    db.add(db_obj)
    db.commit()
    db.refresh(db_obj)
    return db_obj


def seed_defaults(db: Session) -> int:
    """Insert missing default settings; existing values are left alone."""
    existing = {row.key for row in db.query(SystemSetting.key).all()}
    added = 0
    for key, (value, description) in DEFAULT_SETTINGS.items():
        if key not in existing:
            db.add(SystemSetting(key=key, value=value, description=description))
            added += 1
    if added:
        db.commit()
    return added


def get_bool(db: Session, key: str, default: bool = False) -> bool:
    db_obj = get_by_key(db, key)
    if db_obj is None or db_obj.value is None:
        return default
    return db_obj.value.strip().lower() in ("1", "true", "yes", "on")
