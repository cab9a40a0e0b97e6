"""
Authentication API

Endpoints:
  - POST /signin  → email + password → bearer token
  - POST /signup  → new organization on the free plan plus its first admin
  - GET  /verify  → current user and organization for a token
"""
import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.api import deps
from app.core.security import create_access_token
from app.crud import crud_organization, crud_user
from app.models.user import User, UserRole
from app.schemas.auth import AuthResponse, SessionInfo, SignInRequest, SignUpRequest
from app.schemas.organization import OrganizationCreate
from app.schemas.user import UserCreate
from app.services.feature_matrix import Plan

router = APIRouter()
logger = logging.getLogger("scanstreet.auth")


def _issue_token(user: User) -> str:
    return create_access_token(
        user.id,
        extra_claims={"org": str(user.organization_id), "role": user.role},
    )


@router.post("/signin", response_model=AuthResponse)
def signin(body: SignInRequest, db: Session = Depends(deps.get_db)) -> Any:
    user = crud_user.authenticate(db, email=body.email, password=body.password)
    if not user:
        raise HTTPException(status_code=401, detail="Invalid email or password")
    if not user.is_active:
        raise HTTPException(status_code=400, detail="Inactive user")

    user = crud_user.touch_last_login(db, db_obj=user)
    logger.info("User %s signed in", user.id)
    return AuthResponse(
        access_token=_issue_token(user), user=user, organization=user.organization,
    )


@router.post("/signup", response_model=AuthResponse, status_code=201)
def signup(body: SignUpRequest, db: Session = Depends(deps.get_db)) -> Any:
    if crud_user.get_by_email(db, email=body.email):
        raise HTTPException(status_code=409, detail="A user with this email already exists")

    organization = crud_organization.create(
        db, obj_in=OrganizationCreate(name=body.organization_name, plan=Plan.FREE.value), commit=False,
    )
    user = crud_user.create(
        db,
        obj_in=UserCreate(email=body.email, password=body.password, name=body.name, role=UserRole.ADMIN.value),
        organization_id=organization.id,
    )
    logger.info("Organization %s created by signup of user %s", organization.id, user.id)
    return AuthResponse(access_token=_issue_token(user), user=user, organization=user.organization)


@router.get("/verify", response_model=SessionInfo)
def verify(current_user: User = Depends(deps.get_current_active_user)) -> Any:
    return SessionInfo(user=current_user, organization=current_user.organization)
