"""
Permission checking utilities: platform staff, organization roles and plan gates.
"""
from typing import List

from fastapi import Depends, HTTPException, status

from app.api import deps
from app.models.user import User, UserRole
from app.services.plan_gate import GatedDataSource


def require_superuser(current_user: User = Depends(deps.get_current_active_user)) -> User:
    """Dependency: require current user to be platform staff."""
    if not current_user.is_superuser:
        raise HTTPException(status_code=403, detail="Admin access required")
    return current_user


class PermissionChecker:
    """
    Organization role check.
    Usage:
        @router.post("/")
        def endpoint(
            current_user: User = Depends(require_org_admin),
        ):
            ...
    """

    def __init__(self, allowed_roles: List[str]):
        self.allowed_roles = allowed_roles

    def __call__(self, current_user: User = Depends(deps.get_current_active_user)) -> User:
        if current_user.is_superuser:
            return current_user  # Platform staff bypass role checks
        if current_user.role not in self.allowed_roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"This action requires one of the roles: {', '.join(self.allowed_roles)}",
            )
        return current_user


require_org_admin = PermissionChecker([UserRole.ADMIN.value, UserRole.MANAGER.value])


class FeatureGate:
    """
    Dependency that rejects writes to features the organization's plan does
    not fully unlock. Raises ``PlanRestrictionError`` (mapped to 403).

        @router.post("/", dependencies=[Depends(FeatureGate("assetManager"))])
    """

    def __init__(self, feature_key: str):
        self.feature_key = feature_key

    def __call__(
        self,
        current_user: User = Depends(deps.get_current_active_user),
        gate: GatedDataSource = Depends(deps.get_gated_data),
    ) -> User:
        gate.ensure_can_mutate(current_user.organization.plan, self.feature_key)
        return current_user
