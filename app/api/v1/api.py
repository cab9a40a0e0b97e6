from fastapi import APIRouter

from app.api.v1.endpoints import (
    admin,
    assets,
    auth,
    dashboard,
    export,
    feature_matrix,
    issues,
    maintenance,
    organization,
    plan_tracking,
    road_inspections,
    roads,
)

api_router = APIRouter()
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(admin.router, prefix="/admin", tags=["admin"])
api_router.include_router(export.router, prefix="/export", tags=["export"])
api_router.include_router(feature_matrix.router, prefix="/feature-matrix", tags=["feature-matrix"])
api_router.include_router(plan_tracking.router, prefix="/plan-tracking", tags=["plan-tracking"])
api_router.include_router(organization.router, tags=["organization"])
api_router.include_router(assets.router, prefix="/assets", tags=["assets"])
api_router.include_router(roads.router, prefix="/roads", tags=["roads"])
api_router.include_router(road_inspections.router, prefix="/road-inspections", tags=["road-inspections"])
api_router.include_router(maintenance.router, prefix="/maintenance", tags=["maintenance"])
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
api_router.include_router(issues.router, prefix="/issues", tags=["issues"])
api_router.include_router(issues.public_router, prefix="/public", tags=["public"])
