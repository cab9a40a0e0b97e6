"""
Sample data providers.

One provider per domain entity; the registry maps feature keys onto them so a
plan-gated loader can swap live rows for canned demo rows. Everything here is
static and shaped like the matching live API payloads, with ``is_sample_data``
set on every item.
"""

import copy
from typing import Any, Dict, Iterable, List, Optional


class SampleDataProvider:
    entity: str = ""
    _items: List[Dict[str, Any]] = []

    def items(self) -> List[Dict[str, Any]]:
        # Callers may mutate what they get back.
        return [dict(copy.deepcopy(item), is_sample_data=True) for item in self._items]


class RoadSampleProvider(SampleDataProvider):
    """Springfield, OH road segments in the ``RoadSegment`` shape."""

    entity = "roads"
    _items = [
        {
            "id": 900001, "name": "East Main Street", "highway": "primary",
            "road_type": "Arterial", "pci": 72, "length_miles": 1.42,
            "center_lat": 39.9242, "center_lng": -83.8010,
            "coordinates": [[39.9240, -83.8150], [39.9243, -83.7870]],
            "surface": "asphalt", "lanes": 4, "maxspeed": "35 mph",
        },
        {
            "id": 900002, "name": "North Limestone Street", "highway": "secondary",
            "road_type": "Collector", "pci": 58, "length_miles": 1.10,
            "center_lat": 39.9330, "center_lng": -83.8087,
            "coordinates": [[39.9250, -83.8088], [39.9410, -83.8086]],
            "surface": "asphalt", "lanes": 2, "maxspeed": "30 mph",
        },
        {
            "id": 900003, "name": "Fountain Avenue", "highway": "tertiary",
            "road_type": "Collector", "pci": 81, "length_miles": 0.95,
            "center_lat": 39.9275, "center_lng": -83.8120,
            "coordinates": [[39.9205, -83.8121], [39.9345, -83.8119]],
            "surface": "asphalt", "lanes": 2, "maxspeed": "25 mph",
        },
        {
            "id": 900004, "name": "Wittenberg Avenue", "highway": "residential",
            "road_type": "Local", "pci": 43, "length_miles": 0.61,
            "center_lat": 39.9335, "center_lng": -83.8150,
            "coordinates": [[39.9290, -83.8151], [39.9380, -83.8149]],
            "surface": "asphalt", "lanes": 2, "maxspeed": "25 mph",
        },
        {
            "id": 900005, "name": "Bechtle Avenue", "highway": "primary",
            "road_type": "Arterial", "pci": 33, "length_miles": 1.27,
            "center_lat": 39.9445, "center_lng": -83.7960,
            "coordinates": [[39.9440, -83.8080], [39.9450, -83.7840]],
            "surface": "concrete", "lanes": 4, "maxspeed": "40 mph",
        },
    ]


class AssetSampleProvider(SampleDataProvider):
    entity = "assets"
    _items = [
        {
            "id": "SAMPLE-001", "name": "Sample Road Asset", "type": "road",
            "address": "Sample Street", "lat": 39.9242, "lng": -83.8088,
            "condition": "good", "pci": 75, "cost": 50000,
            "install_date": "2015-06-01", "last_inspection": "2024-04-15",
        },
        {
            "id": "SAMPLE-002", "name": "Sample Bridge Asset", "type": "bridge",
            "address": "Sample Bridge", "lat": 39.9301, "lng": -83.8032,
            "condition": "fair", "pci": 60, "cost": 150000,
            "install_date": "1995-09-12", "last_inspection": "2024-02-20",
        },
        {
            "id": "SAMPLE-003", "name": "Sample Sidewalk", "type": "sidewalk",
            "address": "Main Street Sidewalk", "lat": 39.9238, "lng": -83.8115,
            "condition": "excellent", "pci": 90, "cost": 25000,
            "install_date": "2020-03-30", "last_inspection": "2024-05-02",
        },
    ]


class CriticalIssueSampleProvider(SampleDataProvider):
    entity = "critical_issues"
    _items = [
        {"id": "CI-1", "title": "Severe potholes", "location": "Bechtle Avenue",
         "severity": "critical", "pci": 33},
        {"id": "CI-2", "title": "Alligator cracking", "location": "Wittenberg Avenue",
         "severity": "high", "pci": 43},
        {"id": "CI-3", "title": "Drainage failure", "location": "Yellow Springs Street",
         "severity": "high", "pci": 38},
    ]


class BudgetSampleProvider(SampleDataProvider):
    entity = "budget"
    _items = [
        {"month": "2024-01", "allocated": 125000, "spent": 98000},
        {"month": "2024-02", "allocated": 125000, "spent": 112500},
        {"month": "2024-03", "allocated": 150000, "spent": 141200},
    ]


class PCIScoreSampleProvider(SampleDataProvider):
    entity = "pci"
    _items = [
        {"average_pci": 64, "segments_scanned": 412, "miles_scanned": 187.3,
         "distribution": {"good": 168, "fair": 139, "poor": 82, "failed": 23}},
    ]


class ContractorSampleProvider(SampleDataProvider):
    entity = "contractors"
    _items = [
        {"id": "SAMPLE-C1", "name": "Buckeye Paving Co.", "specialty": "Asphalt resurfacing",
         "rating": 4.6, "active_jobs": 3, "phone": "(937) 555-0142"},
        {"id": "SAMPLE-C2", "name": "Clark County Concrete", "specialty": "Sidewalks and curbs",
         "rating": 4.2, "active_jobs": 1, "phone": "(937) 555-0178"},
        {"id": "SAMPLE-C3", "name": "Mad River Striping", "specialty": "Pavement markings",
         "rating": 4.8, "active_jobs": 2, "phone": "(937) 555-0119"},
    ]


class MaintenanceTaskSampleProvider(SampleDataProvider):
    entity = "maintenance"
    _items = [
        {
            "id": "TASK-SAMPLE-001", "title": "Pothole repair", "description": "Patch potholes in the eastbound lanes",
            "asset_id": "SAMPLE-001", "asset_name": "East Main Street", "contractor": "Buckeye Paving Co.",
            "priority": "high", "status": "scheduled", "scheduled_date": "2024-06-18",
            "estimated_duration": 4, "estimated_cost": 850, "actual_cost": None, "progress": 0,
            "materials": ["Hot mix asphalt", "Tack coat"], "weather_sensitive": True,
            "assigned_crew": "Crew A", "pci_score": 45,
        },
        {
            "id": "TASK-SAMPLE-002", "title": "Crack sealing", "description": "Seal longitudinal cracks",
            "asset_id": "SAMPLE-002", "asset_name": "Wittenberg Avenue", "contractor": "Clark County Concrete",
            "priority": "medium", "status": "in_progress", "scheduled_date": "2024-06-10",
            "estimated_duration": 6, "estimated_cost": 2400, "actual_cost": None, "progress": 40,
            "materials": ["Rubberized sealant"], "weather_sensitive": True,
            "assigned_crew": "Crew B", "pci_score": 58,
        },
    ]


class RoadInspectionSampleProvider(SampleDataProvider):
    entity = "inspections"
    _items = [
        {
            "id": "INS-SAMPLE-001", "road_id": "900001", "road_name": "East Main Street",
            "location": "E Main St from Limestone St to Burnett Rd",
            "coordinates": {"lat": 39.9242, "lng": -83.8010}, "inspector": "J. Alvarez",
            "inspection_date": "2024-01-15", "status": "completed", "priority": "medium", "pci_score": 72,
            "surface_type": "Asphalt", "distress_types": ["Cracking", "Rutting"], "photos": 8,
            "weather_conditions": "Clear", "traffic_volume": "High",
            "findings": "Moderate longitudinal cracking in both directions",
            "recommendations": "Crack seal within 12 months",
        },
        {
            "id": "INS-SAMPLE-002", "road_id": "900005", "road_name": "Bechtle Avenue",
            "location": "Bechtle Ave near Home Rd",
            "coordinates": {"lat": 39.9445, "lng": -83.7960}, "inspector": "M. Chen",
            "inspection_date": "2024-02-02", "status": "completed", "priority": "high", "pci_score": 33,
            "surface_type": "Concrete", "distress_types": ["Potholes", "Joint spalling"], "photos": 14,
            "weather_conditions": "Overcast", "traffic_volume": "High",
            "findings": "Multiple potholes in the right lane",
            "recommendations": "Full-depth patching",
        },
    ]


class ReportSampleProvider(SampleDataProvider):
    entity = "reports"
    _items = [
        {"id": "SAMPLE-R1", "title": "Quarterly Pavement Condition Report",
         "period": "2024-Q1", "format": "pdf"},
        {"id": "SAMPLE-R2", "title": "Maintenance Spend Summary",
         "period": "2024-03", "format": "csv"},
    ]


class CitizenIssueSampleProvider(SampleDataProvider):
    entity = "issues"
    _items = [
        {"id": "SAMPLE-I1", "issue_type": "pothole", "location": "E Main St & S Limestone St",
         "description": "Deep pothole in the right lane", "status": "open"},
        {"id": "SAMPLE-I2", "issue_type": "faded-striping", "location": "N Fountain Ave",
         "description": "Crosswalk paint nearly gone", "status": "in_progress"},
        {"id": "SAMPLE-I3", "issue_type": "light-out", "location": "Bechtle Ave near Home Rd",
         "description": "Street light out for a week", "status": "resolved"},
    ]


DEFAULT_PROVIDERS = (
    RoadSampleProvider(),
    AssetSampleProvider(),
    CriticalIssueSampleProvider(),
    BudgetSampleProvider(),
    PCIScoreSampleProvider(),
    ContractorSampleProvider(),
    MaintenanceTaskSampleProvider(),
    RoadInspectionSampleProvider(),
    ReportSampleProvider(),
    CitizenIssueSampleProvider(),
)

# feature key -> entity
DEFAULT_FEATURE_ENTITIES = {
    "sampleRoads": "roads",
    "mapView": "roads",
    "roadInspection": "inspections",
    "roadInspectionDataSource": "inspections",
    "inspections": "inspections",
    "maintenance": "maintenance",
    "maintenanceScheduling": "maintenance",
    "averagePCIScore": "pci",
    "criticalIssues": "critical_issues",
    "monthlyBudget": "budget",
    "budgetPlanning": "budget",
    "assetManager": "assets",
    "assetInventory": "assets",
    "contractors": "contractors",
    "reports": "reports",
    "citizenReports": "issues",
}


class SampleDataRegistry:
    def __init__(
        self,
        providers: Iterable[SampleDataProvider] = DEFAULT_PROVIDERS,
        feature_entities: Optional[Dict[str, str]] = None,
    ):
        self._providers = {p.entity: p for p in providers}
        self._feature_entities = dict(
            DEFAULT_FEATURE_ENTITIES if feature_entities is None else feature_entities
        )
        unknown = set(self._feature_entities.values()) - set(self._providers)
        if unknown:
            raise ValueError(f"No sample provider for: {', '.join(sorted(unknown))}")

    def provider(self, entity: str) -> Optional[SampleDataProvider]:
        return self._providers.get(entity)

    def for_feature(self, feature_key: str) -> Optional[SampleDataProvider]:
        entity = self._feature_entities.get(feature_key)
        return self._providers.get(entity) if entity else None

    def sample_items(self, feature_key: str) -> List[Dict[str, Any]]:
        provider = self.for_feature(feature_key)
        return provider.items() if provider else []

    @property
    def entities(self) -> List[str]:
        return sorted(self._providers)
