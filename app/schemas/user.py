from typing import Optional
from uuid import UUID
from datetime import datetime
from pydantic import BaseModel, EmailStr, Field

from app.schemas.organization import OrganizationRef


# Shared properties
class UserBase(BaseModel):
    email: Optional[EmailStr] = None
    name: Optional[str] = None
    phone: Optional[str] = None


# Properties to receive via API on creation (organization self-service)
class UserCreate(UserBase):
    email: EmailStr
    password: str = Field(..., min_length=8)
    role: str = "member"


# Properties a platform admin may set
class AdminUserCreate(UserCreate):
    organization_id: UUID


class UserRoleUpdate(BaseModel):
    role: str


class UserInDBBase(UserBase):
    id: Optional[UUID] = None
    organization_id: Optional[UUID] = None
    role: Optional[str] = None
    is_active: Optional[bool] = True
    is_superuser: Optional[bool] = False
    last_login: Optional[datetime] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


# Additional properties to return via API
class User(UserInDBBase):
    pass


class AdminUserInfo(UserInDBBase):
    """Admin list row: name falls back to the email local part."""
    name: str
    organization: Optional[OrganizationRef] = None
