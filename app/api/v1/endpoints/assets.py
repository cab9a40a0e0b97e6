"""
Asset inventory

GET is gated by ``assetManager``: live rows on paid plans, a locked sample
inventory on free. Writes only succeed when the feature is fully shown and
drop the cached inventory.
"""
from typing import Any
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.api import deps
from app.api.deps_permissions import FeatureGate
from app.config import settings
from app.crud import crud_asset
from app.models.user import User
from app.schemas.asset import Asset, AssetCreate, AssetUpdate
from app.schemas.gated import GatedDataResponse
from app.services.cache import Cache, cache_key
from app.services.plan_gate import GatedDataSource

router = APIRouter()

FEATURE = "assetManager"


def _assets_key(organization_id) -> str:
    return cache_key("org", organization_id, "assets")


@router.get("/", response_model=GatedDataResponse)
async def list_assets(
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_active_user),
    gate: GatedDataSource = Depends(deps.get_gated_data),
    cache: Cache = Depends(deps.get_cache),
) -> Any:
    org = current_user.organization

    def load_live():
        return cache.get_or_set(
            _assets_key(org.id),
            lambda: [
                Asset.model_validate(a).model_dump(mode="json")
                for a in crud_asset.get_multi_by_organization(db, org.id)
            ],
            settings.DATA_CACHE_TTL,
        )

    result = await gate.load(org.plan, FEATURE, load_live)
    return result.to_dict()


@router.post("/", response_model=Asset, status_code=201)
def create_asset(
    body: AssetCreate,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(FeatureGate(FEATURE)),
    cache: Cache = Depends(deps.get_cache),
) -> Any:
    asset = crud_asset.create(db, obj_in=body, organization_id=current_user.organization_id)
    cache.delete(_assets_key(current_user.organization_id))
    return asset


def _get_own_asset(db: Session, asset_id: UUID, user: User):
    asset = crud_asset.get(db, asset_id)
    if not asset or asset.organization_id != user.organization_id:
        raise HTTPException(status_code=404, detail="Asset not found")
    return asset


@router.put("/{asset_id}", response_model=Asset)
def update_asset(
    asset_id: UUID,
    body: AssetUpdate,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(FeatureGate(FEATURE)),
    cache: Cache = Depends(deps.get_cache),
) -> Any:
    asset = _get_own_asset(db, asset_id, current_user)
    asset = crud_asset.update(db, db_obj=asset, obj_in=body)
    cache.delete(_assets_key(current_user.organization_id))
    return asset


@router.delete("/{asset_id}")
def delete_asset(
    asset_id: UUID,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(FeatureGate(FEATURE)),
    cache: Cache = Depends(deps.get_cache),
) -> Any:
    asset = _get_own_asset(db, asset_id, current_user)
    crud_asset.remove(db, db_obj=asset)
    cache.delete(_assets_key(current_user.organization_id))
    return {"message": "Asset deleted successfully"}
