"""
Feature Matrix
==============

Maps ``(plan, feature key)`` to a ``FeatureState``:

- ``shown``        render with live data
- ``sample_data``  render with canned demo data
- ``paywall``      render locked behind an upgrade prompt
- ``not_shown``    omit entirely

The default table lives in ``DEFAULT_FEATURES``. Each feature carries a rule
table of exact plan entries plus an optional ``*`` default; the exact entry for
the normalized plan always wins. Admin overrides (persisted elsewhere) are laid
over the defaults to produce an immutable ``FeatureMatrix`` snapshot whose
``version`` is a hash of its content.

Resolution never raises: unknown plans resolve as ``free`` and unknown keys as
``not_shown``.
"""

import enum
import hashlib
import json
import logging
import threading
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple

from app.services.cache import Cache, cache_key

logger = logging.getLogger("scanstreet.feature_matrix")

WILDCARD = "*"


class Plan(str, enum.Enum):
    FREE = "free"
    BASIC = "basic"
    PRO = "pro"
    PREMIUM = "premium"
    SATELLITE_ENTERPRISE = "satellite_enterprise"
    DRIVING_ENTERPRISE = "driving_enterprise"


# Cheapest first; used for upgrade suggestions.
PLAN_ORDER: Tuple[Plan, ...] = (
    Plan.FREE,
    Plan.BASIC,
    Plan.PRO,
    Plan.PREMIUM,
    Plan.SATELLITE_ENTERPRISE,
    Plan.DRIVING_ENTERPRISE,
)

PLAN_ALIASES: Dict[str, Plan] = {
    "satellite": Plan.SATELLITE_ENTERPRISE,
    "driving": Plan.DRIVING_ENTERPRISE,
    "professional": Plan.PRO,
    "enterprise": Plan.PREMIUM,
}


def normalize_plan(plan: Any) -> Plan:
    """Canonical plan for any input. Canonical values are never re-aliased."""
    if isinstance(plan, Plan):
        return plan
    if not isinstance(plan, str):
        return Plan.FREE
    raw = plan.strip().lower()
    try:
        return Plan(raw)
    except ValueError:
        return PLAN_ALIASES.get(raw, Plan.FREE)


def parse_plan(plan: Any) -> Optional[Plan]:
    """Strict variant of ``normalize_plan``: ``None`` for unrecognized input."""
    if isinstance(plan, Plan):
        return plan
    if not isinstance(plan, str):
        return None
    raw = plan.strip().lower()
    try:
        return Plan(raw)
    except ValueError:
        return PLAN_ALIASES.get(raw)


class FeatureState(str, enum.Enum):
    SHOWN = "shown"
    SAMPLE_DATA = "sample_data"
    PAYWALL = "paywall"
    NOT_SHOWN = "not_shown"

    @property
    def is_visible(self) -> bool:
        return self is not FeatureState.NOT_SHOWN

    @property
    def uses_live_data(self) -> bool:
        return self is FeatureState.SHOWN

    @property
    def uses_sample_data(self) -> bool:
        return self is FeatureState.SAMPLE_DATA

    @property
    def is_interactive(self) -> bool:
        return self in (FeatureState.SHOWN, FeatureState.SAMPLE_DATA)

    @property
    def requires_upgrade(self) -> bool:
        return self is FeatureState.PAYWALL


class FeatureSection(str, enum.Enum):
    DASHBOARD = "dashboard"
    NAV_MENU = "navMenu"
    PAGES = "pages"


@dataclass(frozen=True)
class FeatureDefinition:
    key: str
    section: FeatureSection
    description: str
    rules: Mapping[str, FeatureState] = field(default_factory=dict)

    def state_for(self, plan: Plan) -> FeatureState:
        state = self.rules.get(plan.value)
        if state is None:
            state = self.rules.get(WILDCARD, FeatureState.NOT_SHOWN)
        return state

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key": self.key,
            "section": self.section.value,
            "description": self.description,
            "rules": {p: s.value for p, s in sorted(self.rules.items())},
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FeatureDefinition":
        return cls(
            key=data["key"],
            section=FeatureSection(data["section"]),
            description=data.get("description", ""),
            rules={p: FeatureState(s) for p, s in data.get("rules", {}).items()},
        )


S = FeatureState.SHOWN
D = FeatureState.SAMPLE_DATA
P = FeatureState.PAYWALL
N = FeatureState.NOT_SHOWN


def _feature(section: FeatureSection, key: str, description: str,
             default: Optional[FeatureState] = None, **per_plan: FeatureState) -> FeatureDefinition:
    rules: Dict[str, FeatureState] = {Plan(p).value: s for p, s in per_plan.items()}
    if default is not None:
        rules[WILDCARD] = default
    return FeatureDefinition(key=key, section=section, description=description, rules=rules)


_DASH = FeatureSection.DASHBOARD
_NAV = FeatureSection.NAV_MENU
_PAGE = FeatureSection.PAGES

DEFAULT_FEATURES: Tuple[FeatureDefinition, ...] = (
    # ── Dashboard ──
    _feature(_DASH, "sampleRoads", "Sample roads section",
             D, satellite_enterprise=S, driving_enterprise=S),
    _feature(_DASH, "averagePCIScore", "Average PCI score metric",
             D, satellite_enterprise=S, driving_enterprise=S),
    _feature(_DASH, "criticalIssues", "Critical issues metric", S, free=D),
    _feature(_DASH, "monthlyBudget", "Monthly budget metric", S, free=D),
    _feature(_DASH, "chooseYourPCIScanningMethod", "PCI scanning method selection",
             S, satellite_enterprise=N, driving_enterprise=N),
    _feature(_DASH, "satelliteVsDrivingPCIScanComparison", "Satellite vs driving scan comparison",
             S, satellite_enterprise=N, driving_enterprise=N),
    _feature(_DASH, "sampleDataControls", "Sample data toggle controls", N, free=S),
    _feature(_DASH, "exportPDF", "PDF export of dashboard reports", S, free=P),
    _feature(_DASH, "satelliteScan", "Satellite PCI scanning", N, satellite_enterprise=S),
    _feature(_DASH, "drivingScan", "Vehicle-mounted PCI scanning", N, driving_enterprise=S),
    # ── Navigation menu ──
    _feature(_NAV, "roadInspection", "Road inspection page", S, free=P),
    _feature(_NAV, "assetManager", "Asset manager page", S, free=P),
    _feature(_NAV, "maintenance", "Maintenance scheduler page", S, free=P, basic=P),
    _feature(_NAV, "inspections", "Inspections page", S, free=P, basic=P),
    _feature(_NAV, "mapView", "Map view page", S, free=D),
    _feature(_NAV, "budgetPlanning", "Budget planning page", S, free=D),
    _feature(_NAV, "costEstimator", "Cost estimator page", S, free=P),
    _feature(_NAV, "fundingCenter", "Funding center page", S, free=P, basic=P),
    _feature(_NAV, "expenses", "Expenses page", S, free=P),
    _feature(_NAV, "contractors", "Contractors page", S, free=P, basic=P),
    _feature(_NAV, "citizenReports", "Citizen reports page", S, free=P, basic=P),
    _feature(_NAV, "reports", "Reports and exports page", S, free=D),
    _feature(_NAV, "pricing", "Pricing page", S),
    _feature(_NAV, "integrations", "Integrations page", S, free=D),
    _feature(_NAV, "settings", "Settings page", S),
    # ── Page-level gates ──
    _feature(_PAGE, "roadInspectionDataSource", "Road inspection data source", S, free=D),
    _feature(_PAGE, "roadInspectionUpgradeCard", "Road inspection upgrade card", N, free=S),
    _feature(_PAGE, "assetInventory", "Asset inventory table", S, free=P),
    _feature(_PAGE, "predictiveMaintenance", "Predictive maintenance panel", S, free=P),
    _feature(_PAGE, "advancedSchedulingCard", "Advanced scheduling upgrade card",
             N, free=S, basic=S),
    _feature(_PAGE, "maintenanceScheduling", "Maintenance scheduling functionality",
             S, free=P, basic=P),
)


@dataclass(frozen=True)
class PlanMatrix:
    """Resolved matrix for one plan: section -> {key -> state}."""

    plan: Plan
    version: str
    sections: Mapping[FeatureSection, Mapping[str, FeatureState]]

    @property
    def dashboard(self) -> Mapping[str, FeatureState]:
        return self.sections.get(FeatureSection.DASHBOARD, {})

    @property
    def nav_menu(self) -> Mapping[str, FeatureState]:
        return self.sections.get(FeatureSection.NAV_MENU, {})

    @property
    def pages(self) -> Mapping[str, FeatureState]:
        return self.sections.get(FeatureSection.PAGES, {})

    def state(self, key: str) -> FeatureState:
        for entries in self.sections.values():
            if key in entries:
                return entries[key]
        return FeatureState.NOT_SHOWN

    def keys(self) -> List[str]:
        return [k for entries in self.sections.values() for k in entries]

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"plan": self.plan.value, "version": self.version}
        for section in FeatureSection:
            data[section.value] = {
                k: s.value for k, s in self.sections.get(section, {}).items()
            }
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PlanMatrix":
        sections = {
            section: {k: FeatureState(s) for k, s in data.get(section.value, {}).items()}
            for section in FeatureSection
        }
        return cls(plan=Plan(data["plan"]), version=data["version"], sections=sections)

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), sort_keys=True)

    @classmethod
    def from_json(cls, raw: str) -> "PlanMatrix":
        return cls.from_dict(json.loads(raw))


Override = Tuple[Plan, str, FeatureState]


class FeatureMatrix:
    """Immutable snapshot of every feature definition, defaults plus overrides."""

    def __init__(self, features: Iterable[FeatureDefinition] = DEFAULT_FEATURES):
        by_key: Dict[str, FeatureDefinition] = {}
        for feature in features:
            if feature.key in by_key:
                raise ValueError(f"Duplicate feature key: {feature.key}")
            by_key[feature.key] = feature
        self._features = by_key
        self.version = self._compute_version()

    def _compute_version(self) -> str:
        payload = json.dumps(
            [f.to_dict() for f in self._features.values()], sort_keys=True
        )
        return hashlib.sha256(payload.encode()).hexdigest()[:12]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key in self._features

    def __len__(self) -> int:
        return len(self._features)

    @property
    def features(self) -> List[FeatureDefinition]:
        return list(self._features.values())

    def keys(self) -> List[str]:
        return list(self._features)

    def definition(self, key: str) -> Optional[FeatureDefinition]:
        if not isinstance(key, str):
            return None
        return self._features.get(key)

    def resolve(self, plan: Any, key: Any) -> FeatureState:
        feature = self.definition(key)
        if feature is None:
            return FeatureState.NOT_SHOWN
        return feature.state_for(normalize_plan(plan))

    def matrix_for_plan(self, plan: Any) -> PlanMatrix:
        canonical = normalize_plan(plan)
        sections: Dict[FeatureSection, Dict[str, FeatureState]] = {s: {} for s in FeatureSection}
        for feature in self._features.values():
            sections[feature.section][feature.key] = feature.state_for(canonical)
        return PlanMatrix(plan=canonical, version=self.version, sections=sections)

    def with_overrides(self, overrides: Iterable[Override]) -> "FeatureMatrix":
        """New snapshot with exact plan entries replaced; unknown keys are skipped."""
        rules: Dict[str, Dict[str, FeatureState]] = {
            key: dict(f.rules) for key, f in self._features.items()
        }
        for plan, key, state in overrides:
            if key not in rules:
                logger.warning("Ignoring override for unknown feature %s", key)
                continue
            rules[key][normalize_plan(plan).value] = FeatureState(state)
        return FeatureMatrix(
            FeatureDefinition(key=f.key, section=f.section, description=f.description,
                              rules=rules[f.key])
            for f in self._features.values()
        )

    def upgrade_target(self, plan: Any, key: Any) -> Optional[Plan]:
        """Cheapest plan above ``plan`` in which ``key`` is fully shown."""
        current = normalize_plan(plan)
        feature = self.definition(key)
        if feature is None or feature.state_for(current) is FeatureState.SHOWN:
            return None
        for candidate in PLAN_ORDER[PLAN_ORDER.index(current) + 1:]:
            if feature.state_for(candidate) is FeatureState.SHOWN:
                return candidate
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": self.version,
            "features": [f.to_dict() for f in self._features.values()],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FeatureMatrix":
        matrix = cls(FeatureDefinition.from_dict(f) for f in data.get("features", []))
        expected = data.get("version")
        if expected and expected != matrix.version:
            raise ValueError(
                f"Feature matrix version mismatch: {expected} != {matrix.version}"
            )
        return matrix


class FeatureMatrixResolver:
    """
    Current matrix snapshot plus a thin per-plan cache.

    Built once at startup and shared through ``app.state``. The snapshot is
    swapped atomically when overrides change; cached plan matrices are keyed by
    snapshot version so stale entries are never read back.
    """

    def __init__(
        self,
        cache: Cache,
        matrix: Optional[FeatureMatrix] = None,
        ttl: int = 300,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._base = FeatureMatrix()
        self._matrix = matrix if matrix is not None else self._base
        self._cache = cache
        self._ttl = ttl
        self._clock = clock
        self._synced_at: Optional[float] = None
        self._lock = threading.Lock()

    @property
    def matrix(self) -> FeatureMatrix:
        return self._matrix

    @property
    def version(self) -> str:
        return self._matrix.version

    def resolve(self, plan: Any, feature_key: Any) -> FeatureState:
        return self._matrix.resolve(plan, feature_key)

    def get_matrix_for_plan(self, plan: Any) -> PlanMatrix:
        matrix = self._matrix
        canonical = normalize_plan(plan)
        key = cache_key("feature-matrix", matrix.version, canonical.value)
        cached = self._cache.get(key)
        if cached is not None:
            return PlanMatrix.from_dict(cached)
        result = matrix.matrix_for_plan(canonical)
        self._cache.set(key, result.to_dict(), self._ttl)
        return result

    def upgrade_target(self, plan: Any, feature_key: Any) -> Optional[Plan]:
        return self._matrix.upgrade_target(plan, feature_key)

    def apply_overrides(self, overrides: Iterable[Override]) -> FeatureMatrix:
        """Rebuild the snapshot from the defaults plus ``overrides``."""
        snapshot = self._base.with_overrides(overrides)
        with self._lock:
            previous = self._matrix.version
            self._matrix = snapshot
            self._synced_at = self._clock()
        if previous != snapshot.version:
            self._cache.invalidate(cache_key("feature-matrix", previous))
            logger.info("Feature matrix version %s → %s", previous, snapshot.version)
        return snapshot

    def sync(self, load_overrides: Callable[[], Iterable[Override]]) -> None:
        """Reload overrides when the last load is older than the cache TTL."""
        synced_at = self._synced_at
        if synced_at is not None and self._clock() - synced_at < self._ttl:
            return
        self.apply_overrides(load_overrides())
