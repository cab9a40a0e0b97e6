from typing import Optional
from uuid import UUID
from datetime import datetime
from pydantic import BaseModel, EmailStr, Field

from app.models.issue_report import IssueStatus, IssueType


class IssueReportCreate(BaseModel):
    """Citizen-submitted report; all contact fields are optional."""
    organization_slug: Optional[str] = None
    issue_type: IssueType
    location: str = Field(..., min_length=1, max_length=500)
    description: str = Field(..., min_length=1, max_length=5000)
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    notify_when_resolved: bool = False


class IssueReportReceipt(BaseModel):
    id: UUID
    status: str
    message: str = "Thank you for your report"


class IssueReport(BaseModel):
    id: UUID
    organization_id: Optional[UUID] = None
    issue_type: str
    location: str
    description: str
    reporter_name: Optional[str] = None
    reporter_email: Optional[str] = None
    reporter_phone: Optional[str] = None
    notify_when_resolved: bool = False
    status: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class IssueStatusUpdate(BaseModel):
    status: IssueStatus
