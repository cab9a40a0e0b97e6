"""Road network, gated by ``sampleRoads``."""
from dataclasses import asdict
from typing import Any

from fastapi import APIRouter, Depends

from app.api import deps
from app.models.user import User
from app.schemas.gated import GatedDataResponse
from app.services.overpass import OverpassClient
from app.services.plan_gate import GatedDataSource

router = APIRouter()

FEATURE = "sampleRoads"


@router.get("/", response_model=GatedDataResponse)
async def list_roads(
    current_user: User = Depends(deps.get_current_active_user),
    gate: GatedDataSource = Depends(deps.get_gated_data),
    overpass: OverpassClient = Depends(deps.get_overpass_client),
) -> Any:
    async def load_live():
        return [asdict(segment) for segment in await overpass.fetch_roads()]

    result = await gate.load(current_user.organization.plan, FEATURE, load_live)
    return result.to_dict()
