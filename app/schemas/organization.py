from typing import Any, Dict, Optional
from uuid import UUID
from datetime import datetime
from pydantic import BaseModel, Field


# Shared properties
class OrganizationBase(BaseModel):
    name: Optional[str] = None
    plan: Optional[str] = None


# Properties to receive via API on creation
class OrganizationCreate(OrganizationBase):
    name: str = Field(..., min_length=1, max_length=200)
    slug: Optional[str] = Field(None, pattern=r"^[a-z0-9]+(?:-[a-z0-9]+)*$", max_length=100)
    plan: str = "free"


class OrganizationUpdate(OrganizationBase):
    settings: Optional[Dict[str, Any]] = None


class OrganizationPlanUpdate(BaseModel):
    plan: str


class OrganizationInDBBase(OrganizationBase):
    id: Optional[UUID] = None
    slug: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


# Additional properties to return via API
class Organization(OrganizationInDBBase):
    pass


class OrganizationSummary(OrganizationInDBBase):
    """Admin list row."""
    user_count: int = 0


class OrganizationRef(BaseModel):
    id: UUID
    name: str
    plan: str

    class Config:
        from_attributes = True
