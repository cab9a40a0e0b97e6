import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from app.models.feature_matrix import FeatureMatrixOverride
from app.services.feature_matrix import FeatureState, Override, parse_plan

logger = logging.getLogger("scanstreet.feature_matrix")


def get_multi(db: Session) -> List[FeatureMatrixOverride]:
    return db.query(FeatureMatrixOverride).all()


def get_cell(db: Session, *, section: str, feature: str, plan: str) -> Optional[FeatureMatrixOverride]:
    return db.query(FeatureMatrixOverride).filter(
        FeatureMatrixOverride.feature_section == section,
        FeatureMatrixOverride.feature_name == feature,
        FeatureMatrixOverride.plan_type == plan,
    ).first()


def load_overrides(db: Session) -> List[Override]:
    """Override rows as resolver tuples. Rows with an unknown plan or state are skipped."""
    overrides: List[Override] = []
    for row in get_multi(db):
        plan = parse_plan(row.plan_type)
        try:
            state = FeatureState((row.feature_state or "").strip().lower())
        except ValueError:
            state = None
        if plan is None or state is None:
            logger.warning(
                "Skipping feature matrix override %s (plan=%r, state=%r)",
                row.id, row.plan_type, row.feature_state,
            )
            continue
        overrides.append((plan, row.feature_name, state))
    return overrides


def upsert(
    db: Session, *, section: str, feature: str, plan: str, state: str,
    description: Optional[str] = None,
) -> FeatureMatrixOverride:
    db_obj = get_cell(db, section=section, feature=feature, plan=plan)
    if db_obj is None:
        db_obj = FeatureMatrixOverride(feature_section=section, feature_name=feature, plan_type=plan)
    db_obj.feature_state = state
    if description is not None:
        db_obj.description = description
    db.add(db_obj)
    db.commit()
    db.refresh(db_obj)
    return db_obj


def clear(db: Session) -> int:
    deleted = db.query(FeatureMatrixOverride).delete()
    db.commit()
    return deleted
