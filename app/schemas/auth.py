from typing import Optional
from pydantic import BaseModel, EmailStr, Field

from app.schemas.organization import Organization
from app.schemas.user import User


class SignInRequest(BaseModel):
    email: EmailStr
    password: str


class SignUpRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=8)
    name: Optional[str] = None
    organization_name: str = Field(..., min_length=1, max_length=200)


class AuthResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: User
    organization: Organization


class SessionInfo(BaseModel):
    user: User
    organization: Organization
