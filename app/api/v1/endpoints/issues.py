"""
Citizen issue reports

``public_router`` takes anonymous submissions; ``router`` is the gated staff
view (``citizenReports``).
"""
import logging
from typing import Any
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.api import deps
from app.api.deps_permissions import FeatureGate, PermissionChecker
from app.crud import crud_issue, crud_organization
from app.models.user import User, UserRole
from app.schemas.gated import GatedDataResponse
from app.schemas.issue_report import IssueReport, IssueReportCreate, IssueReportReceipt, IssueStatusUpdate
from app.services.plan_gate import GatedDataSource

router = APIRouter()
public_router = APIRouter()
logger = logging.getLogger("scanstreet.issues")

FEATURE = "citizenReports"


@public_router.post("/issues", response_model=IssueReportReceipt, status_code=201)
def submit_issue(body: IssueReportCreate, db: Session = Depends(deps.get_db)) -> Any:
    organization_id = None
    if body.organization_slug:
        org = crud_organization.get_by_slug(db, body.organization_slug)
        if not org:
            raise HTTPException(status_code=404, detail="Organization not found")
        organization_id = org.id
    issue = crud_issue.create(db, obj_in=body, organization_id=organization_id)
    logger.info("Citizen issue %s (%s) submitted", issue.id, issue.issue_type)
    return IssueReportReceipt(id=issue.id, status=issue.status)


@router.get("/", response_model=GatedDataResponse)
async def list_issues(
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_active_user),
    gate: GatedDataSource = Depends(deps.get_gated_data),
) -> Any:
    org = current_user.organization

    def load_live():
        return [
            IssueReport.model_validate(i).model_dump(mode="json")
            for i in crud_issue.get_multi_by_organization(db, org.id)
        ]

    result = await gate.load(org.plan, FEATURE, load_live)
    return result.to_dict()


@router.put(
    "/{issue_id}/status",
    response_model=IssueReport,
    dependencies=[Depends(FeatureGate(FEATURE))],
)
def update_issue_status(
    issue_id: UUID,
    body: IssueStatusUpdate,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(PermissionChecker([UserRole.ADMIN.value, UserRole.MANAGER.value])),
) -> Any:
    issue = crud_issue.get(db, issue_id=issue_id)
    if not issue or issue.organization_id != current_user.organization_id:
        raise HTTPException(status_code=404, detail="Issue not found")
    return crud_issue.set_status(db, db_obj=issue, status=body.status.value)
