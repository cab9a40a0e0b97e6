"""Sample data registry and plan-gated loading."""
import pytest

from app.services.cache import MemoryCache
from app.services.feature_matrix import FeatureMatrixResolver, FeatureState
from app.services.plan_gate import GatedDataSource, PlanRestrictionError
from app.services.sample_data import (
    DEFAULT_FEATURE_ENTITIES,
    AssetSampleProvider,
    SampleDataRegistry,
)


@pytest.fixture
def gate():
    return GatedDataSource(FeatureMatrixResolver(MemoryCache()), SampleDataRegistry())


class _Loader:
    def __init__(self, rows):
        self.rows = rows
        self.calls = 0

    def __call__(self):
        self.calls += 1
        return self.rows


# ── Registry ──

def test_every_mapped_feature_has_samples():
    registry = SampleDataRegistry()
    for feature_key in DEFAULT_FEATURE_ENTITIES:
        items = registry.sample_items(feature_key)
        assert items, feature_key
        assert all(item["is_sample_data"] is True for item in items)


def test_sample_items_are_copies():
    registry = SampleDataRegistry()
    first = registry.sample_items("assetManager")
    first[0]["name"] = "Mutated"
    assert registry.sample_items("assetManager")[0]["name"] == "Sample Road Asset"


def test_unmapped_feature_has_no_samples():
    assert SampleDataRegistry().sample_items("exportPDF") == []


def test_registry_rejects_unknown_entity():
    with pytest.raises(ValueError):
        SampleDataRegistry(providers=[AssetSampleProvider()], feature_entities={"mapView": "roads"})


def test_entities_listed():
    entities = SampleDataRegistry().entities
    assert {"roads", "maintenance", "inspections"} <= set(entities)


def test_inspection_and_maintenance_features_share_providers():
    registry = SampleDataRegistry()
    assert registry.for_feature("roadInspection") is registry.provider("inspections")
    assert registry.for_feature("roadInspectionDataSource") is registry.provider("inspections")
    assert registry.for_feature("maintenance") is registry.provider("maintenance")
    assert registry.sample_items("maintenanceScheduling")[0]["id"] == "TASK-SAMPLE-001"


# ── Gated loading ──

@pytest.mark.asyncio
async def test_shown_feature_loads_live_rows(gate):
    loader = _Loader([{"id": "A-1"}])
    result = await gate.load("basic", "assetManager", loader)
    assert result.state is FeatureState.SHOWN
    assert result.data_source == "live"
    assert result.items == [{"id": "A-1"}]
    assert loader.calls == 1


@pytest.mark.asyncio
async def test_async_live_loader_is_awaited(gate):
    async def loader():
        return [{"id": 1}]

    result = await gate.load("pro", "citizenReports", loader)
    assert result.items == [{"id": 1}]


@pytest.mark.asyncio
async def test_sample_feature_never_calls_loader(gate):
    loader = _Loader([{"id": "live"}])
    result = await gate.load("free", "mapView", loader)
    assert result.state is FeatureState.SAMPLE_DATA
    assert result.data_source == "sample"
    assert result.locked is False
    assert result.items and all(i["is_sample_data"] for i in result.items)
    assert result.upgrade_message == "Upgrade to Basic Plan to unlock Map view page"
    assert loader.calls == 0


@pytest.mark.asyncio
async def test_paywall_returns_locked_preview(gate):
    loader = _Loader([{"id": "live"}])
    result = await gate.load("free", "assetManager", loader)
    assert result.state is FeatureState.PAYWALL
    assert result.locked is True
    assert result.data_source == "sample"
    assert result.upgrade_message == "Upgrade to Basic Plan to unlock Asset manager page"
    assert loader.calls == 0


@pytest.mark.asyncio
async def test_not_shown_returns_nothing(gate):
    loader = _Loader([{"id": "live"}])
    result = await gate.load("basic", "satelliteScan", loader)
    assert result.data_source == "none"
    assert result.items == []
    assert result.to_dict()["state"] == "not_shown"
    assert loader.calls == 0


@pytest.mark.asyncio
async def test_enterprise_sample_message_points_to_sales(gate):
    result = await gate.load("premium", "sampleRoads", _Loader([]))
    assert result.upgrade_message == "Contact sales to unlock Sample roads section"


def test_ensure_can_mutate_allows_shown(gate):
    assert gate.ensure_can_mutate("basic", "assetManager") is FeatureState.SHOWN


def test_ensure_can_mutate_blocks_paywall(gate):
    with pytest.raises(PlanRestrictionError) as exc:
        gate.ensure_can_mutate("free", "assetManager")
    detail = exc.value.to_detail()
    assert detail["error"] == "upgrade_required"
    assert detail["current_plan"] == "free"
    assert detail["feature_state"] == "paywall"
    assert detail["upgrade_to"] == "basic"


def test_ensure_can_mutate_blocks_sample_data(gate):
    with pytest.raises(PlanRestrictionError) as exc:
        gate.ensure_can_mutate("gold", "mapView")
    assert exc.value.current_plan == "free"
    assert exc.value.state is FeatureState.SAMPLE_DATA


def test_ensure_can_mutate_blocks_unknown_feature(gate):
    with pytest.raises(PlanRestrictionError) as exc:
        gate.ensure_can_mutate("premium", "noSuchFeature")
    assert exc.value.upgrade_to is None
