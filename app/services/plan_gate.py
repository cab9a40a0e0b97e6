"""
Plan-gated data access.

``GatedDataSource.load`` chooses between live rows, sample rows, a locked
preview and nothing, based on how the feature resolves for the caller's plan.
``ensure_can_mutate`` guards writes: only ``shown`` features accept them.
"""

import inspect
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Optional, Union

from app.middleware.metrics import FEATURE_GATE_DECISIONS
from app.services.feature_matrix import FeatureMatrixResolver, FeatureState, normalize_plan
from app.services.plans import get_upgrade_message
from app.services.sample_data import SampleDataRegistry

logger = logging.getLogger("scanstreet.plan_gate")

LiveLoader = Callable[[], Union[List[Dict[str, Any]], Awaitable[List[Dict[str, Any]]]]]


class PlanRestrictionError(Exception):
    """A write (or live read) was attempted on a feature the plan does not unlock."""

    def __init__(self, feature: str, current_plan: str, state: FeatureState,
                 message: str, upgrade_to: Optional[str] = None):
        super().__init__(message)
        self.feature = feature
        self.current_plan = current_plan
        self.state = state
        self.message = message
        self.upgrade_to = upgrade_to

    def to_detail(self) -> Dict[str, Any]:
        return {
            "error": "upgrade_required",
            "message": self.message,
            "feature": self.feature,
            "current_plan": self.current_plan,
            "feature_state": self.state.value,
            "upgrade_to": self.upgrade_to,
        }


@dataclass
class GatedData:
    feature: str
    state: FeatureState
    data_source: str  # live / sample / none
    locked: bool = False
    items: List[Dict[str, Any]] = field(default_factory=list)
    upgrade_message: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "feature": self.feature,
            "state": self.state.value,
            "data_source": self.data_source,
            "locked": self.locked,
            "items": self.items,
            "upgrade_message": self.upgrade_message,
        }


class GatedDataSource:
    def __init__(self, resolver: FeatureMatrixResolver, registry: SampleDataRegistry):
        self.resolver = resolver
        self.registry = registry

    def _upgrade_message(self, plan: Any, feature_key: str) -> str:
        target = self.resolver.upgrade_target(plan, feature_key)
        definition = self.resolver.matrix.definition(feature_key)
        label = definition.description if definition else feature_key
        return get_upgrade_message(plan, label, target)

    async def load(self, plan: Any, feature_key: str, live_loader: LiveLoader) -> GatedData:
        state = self.resolver.resolve(plan, feature_key)
        FEATURE_GATE_DECISIONS.labels(feature=feature_key, state=state.value).inc()

        if state is FeatureState.SHOWN:
            items = live_loader()
            if inspect.isawaitable(items):
                items = await items
            return GatedData(feature_key, state, "live", items=list(items))

        if state is FeatureState.SAMPLE_DATA:
            return GatedData(
                feature_key, state, "sample",
                items=self.registry.sample_items(feature_key),
                upgrade_message=self._upgrade_message(plan, feature_key),
            )

        if state is FeatureState.PAYWALL:
            return GatedData(
                feature_key, state, "sample", locked=True,
                items=self.registry.sample_items(feature_key),
                upgrade_message=self._upgrade_message(plan, feature_key),
            )

        return GatedData(feature_key, state, "none")

    def ensure_can_mutate(self, plan: Any, feature_key: str) -> FeatureState:
        state = self.resolver.resolve(plan, feature_key)
        if state is FeatureState.SHOWN:
            return state

        canonical = normalize_plan(plan)
        target = self.resolver.upgrade_target(canonical, feature_key)
        logger.info(
            "Blocked write on %s for plan %s (state=%s)", feature_key, canonical.value, state.value
        )
        raise PlanRestrictionError(
            feature=feature_key,
            current_plan=canonical.value,
            state=state,
            message=self._upgrade_message(canonical, feature_key),
            upgrade_to=target.value if target else None,
        )
