"""
Subscription Plans Catalog

Prices, limits and upgrade copy for every tier. Feature visibility is not
configured here; see ``app.services.feature_matrix``.
"""

from typing import Any, Optional

from app.services.feature_matrix import Plan, normalize_plan

PLAN_CATALOG = {
    Plan.FREE: {
        "display_name": "Free",
        "price_monthly_usd": 0,
        "team_members": 1,
        "exports_per_month": 1,
        "rescans_per_year": 0,
        "map_access": "openstreetmap",
        "data_retention_days": 30,
    },
    Plan.BASIC: {
        "display_name": "Basic",
        "price_monthly_usd": 99,
        "team_members": 3,
        "exports_per_month": 1,
        "rescans_per_year": 0,
        "map_access": "enhanced",
        "data_retention_days": 365,
    },
    Plan.PRO: {
        "display_name": "Pro",
        "price_monthly_usd": 199,
        "team_members": 10,
        "exports_per_month": None,  # Unlimited
        "rescans_per_year": 1,
        "map_access": "full",
        "data_retention_days": None,
    },
    Plan.PREMIUM: {
        "display_name": "Premium",
        "price_monthly_usd": 999,
        "team_members": None,
        "exports_per_month": None,
        "rescans_per_year": 2,
        "map_access": "full",
        "data_retention_days": None,
    },
    Plan.SATELLITE_ENTERPRISE: {
        "display_name": "Satellite Enterprise",
        "price_monthly_usd": None,  # Priced by sales
        "team_members": None,
        "exports_per_month": None,
        "rescans_per_year": 5,
        "map_access": "full",
        "data_retention_days": None,
    },
    Plan.DRIVING_ENTERPRISE: {
        "display_name": "Driving Enterprise",
        "price_monthly_usd": None,
        "team_members": None,
        "exports_per_month": None,
        "rescans_per_year": 5,
        "map_access": "full",
        "data_retention_days": None,
    },
}

# Plans an admin may assign directly; enterprise tiers are provisioned by sales.
ASSIGNABLE_PLANS = (Plan.FREE, Plan.BASIC, Plan.PRO, Plan.PREMIUM)


def get_plan(plan_name: Any) -> dict:
    """Get plan config by name. Unknown names fall back to 'free'."""
    return PLAN_CATALOG[normalize_plan(plan_name)]


def get_plan_limit(plan_name: Any, limit_name: str) -> Optional[Any]:
    """Get a limit for a plan. None = unlimited."""
    return get_plan(plan_name).get(limit_name)


def monthly_price(plan_name: Any) -> int:
    """Monthly list price in whole dollars; sales-priced tiers count as 0."""
    return get_plan(plan_name)["price_monthly_usd"] or 0


def next_plan(plan_name: Any) -> Optional[Plan]:
    current = normalize_plan(plan_name)
    if current not in ASSIGNABLE_PLANS:
        return None
    index = ASSIGNABLE_PLANS.index(current)
    if index + 1 < len(ASSIGNABLE_PLANS):
        return ASSIGNABLE_PLANS[index + 1]
    return None


def get_upgrade_message(current_plan: Any, feature_label: str, target: Optional[Plan] = None) -> str:
    """
    Upgrade copy shown next to locked features.

    ``target`` is the cheapest plan that unlocks the feature when known;
    otherwise the next self-serve tier above ``current_plan`` is suggested.
    Sales-priced tiers get a contact-sales message.
    """
    if target is None:
        target = next_plan(current_plan)
    if target is None or get_plan(target)["price_monthly_usd"] is None:
        return f"Contact sales to unlock {feature_label}"
    return f"Upgrade to {get_plan(target)['display_name']} Plan to unlock {feature_label}"


def serialize_plan(plan: Plan) -> dict:
    info = PLAN_CATALOG[plan]
    return {"plan": plan.value, **info}
