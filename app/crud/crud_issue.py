from typing import List, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from app.models.issue_report import IssueReport
from app.schemas.issue_report import IssueReportCreate


def get(db: Session, issue_id: UUID) -> Optional[IssueReport]:
    return db.query(IssueReport).filter(IssueReport.id == issue_id).first()


def get_multi_by_organization(
    db: Session, organization_id: UUID, *, status: Optional[str] = None, limit: int = 200,
) -> List[IssueReport]:
    query = db.query(IssueReport).filter(IssueReport.organization_id == organization_id)
    if status:
        query = query.filter(IssueReport.status == status)
    return query.order_by(IssueReport.created_at.desc()).limit(limit).all()


def create(db: Session, *, obj_in: IssueReportCreate, organization_id: Optional[UUID]) -> IssueReport:
    db_obj = IssueReport(
        organization_id=organization_id,
        issue_type=obj_in.issue_type.value,
        location=obj_in.location,
        description=obj_in.description,
        reporter_name=obj_in.name,
        reporter_email=obj_in.email,
        reporter_phone=obj_in.phone,
        notify_when_resolved=obj_in.notify_when_resolved,
    )
    db.add(db_obj)
    db.commit()
    db.refresh(db_obj)
    return db_obj


def set_status(db: Session, *, db_obj: IssueReport, status: str) -> IssueReport:
    db_obj.status = status
    db.add(db_obj)
    db.commit()
    db.refresh(db_obj)
    return db_obj
