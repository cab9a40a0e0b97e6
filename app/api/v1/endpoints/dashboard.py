"""
Dashboard

One call returns the caller's plan matrix plus the three gated metric cards
(average PCI, critical issues, monthly budget).
"""
from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api import deps
from app.crud import crud_asset, crud_issue
from app.models.issue_report import IssueStatus
from app.models.user import User
from app.services.feature_matrix import FeatureMatrixResolver
from app.services.plan_gate import GatedDataSource

router = APIRouter()


@router.get("/")
async def get_dashboard(
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_active_user),
    resolver: FeatureMatrixResolver = Depends(deps.get_feature_matrix),
    gate: GatedDataSource = Depends(deps.get_gated_data),
) -> Any:
    org = current_user.organization

    def average_pci():
        return [{"average_pci": crud_asset.average_pci(db, org.id)}]

    def critical_issues():
        assets = [
            {"id": str(a.id), "title": a.name, "location": a.address, "severity": "critical", "pci": a.pci}
            for a in crud_asset.get_critical(db, org.id)
        ]
        reports = [
            {"id": str(i.id), "title": i.issue_type, "location": i.location, "severity": "reported", "pci": None}
            for i in crud_issue.get_multi_by_organization(db, org.id, status=IssueStatus.OPEN.value)
        ]
        return assets + reports

    def monthly_budget():
        budget = (org.settings or {}).get("monthly_budget")
        return [budget] if budget else []

    matrix = resolver.get_matrix_for_plan(org.plan)
    cards = {
        "averagePCIScore": await gate.load(org.plan, "averagePCIScore", average_pci),
        "criticalIssues": await gate.load(org.plan, "criticalIssues", critical_issues),
        "monthlyBudget": await gate.load(org.plan, "monthlyBudget", monthly_budget),
    }
    return {
        "organization": {"id": str(org.id), "name": org.name, "plan": org.plan},
        "matrix": matrix.to_dict(),
        "cards": {key: card.to_dict() for key, card in cards.items()},
    }
