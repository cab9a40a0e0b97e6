from typing import Generator, Optional
from uuid import UUID

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.orm import Session

from app.core.security import decode_access_token
from app.crud import crud_feature_matrix, crud_user
from app.db.session import SessionLocal
from app.models.organization import Organization
from app.models.user import User
from app.services.cache import Cache
from app.services.feature_matrix import FeatureMatrixResolver
from app.services.overpass import OverpassClient
from app.services.plan_gate import GatedDataSource

bearer_scheme = HTTPBearer(auto_error=False)


def get_db() -> Generator:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_current_user(
    db: Session = Depends(get_db),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> User:
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        payload = decode_access_token(credentials.credentials)
        user_id = UUID(payload["sub"])
    except (JWTError, KeyError, ValueError):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    user = crud_user.get(db, user_id=user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


def get_current_active_user(current_user: User = Depends(get_current_user)) -> User:
    if not current_user.is_active:
        raise HTTPException(status_code=400, detail="Inactive user")
    return current_user


def get_current_organization(current_user: User = Depends(get_current_active_user)) -> Organization:
    return current_user.organization


# ── Services built at startup (see app.main lifespan) ──

def get_cache(request: Request) -> Cache:
    return request.app.state.cache


def get_feature_matrix(request: Request, db: Session = Depends(get_db)) -> FeatureMatrixResolver:
    resolver: FeatureMatrixResolver = request.app.state.feature_matrix
    resolver.sync(lambda: crud_feature_matrix.load_overrides(db))
    return resolver


def get_gated_data(request: Request, resolver: FeatureMatrixResolver = Depends(get_feature_matrix)) -> GatedDataSource:
    return GatedDataSource(resolver, request.app.state.sample_data)


def get_overpass_client(request: Request) -> OverpassClient:
    return request.app.state.overpass
