"""
OpenStreetMap road network client (Overpass API).

Fetches drivable ``way`` elements inside a bounding box and turns them into
``RoadSegment`` rows. Results are cached for five minutes; when Overpass is
unreachable the Springfield sample road set is returned instead.
"""

import logging
import math
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence

import httpx
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from app.config import settings
from app.middleware.metrics import ROAD_NETWORK_FALLBACKS
from app.services.cache import Cache, cache_key
from app.services.sample_data import RoadSampleProvider

logger = logging.getLogger("scanstreet.overpass")

EARTH_RADIUS_MILES = 3958.8

EXCLUDED_HIGHWAYS = ("service", "footway", "cycleway", "path")

HIGHWAY_ROAD_TYPES = {
    "motorway": "Highway",
    "trunk": "Arterial",
    "primary": "Arterial",
    "secondary": "Collector",
    "tertiary": "Collector",
    "residential": "Local",
    "unclassified": "Local",
    "living_street": "Local",
    "road": "Local",
    "service": "Service",
    "track": "Track",
}

# (upper bound of id % 100, lowest PCI, band width)
_PCI_BANDS = (
    (15, 86, 10),  # excellent
    (35, 71, 15),  # good
    (55, 56, 15),  # satisfactory
    (70, 41, 15),  # fair
    (85, 26, 15),  # poor
    (95, 11, 15),  # serious
    (100, 0, 11),  # very poor
)


@dataclass(frozen=True)
class BoundingBox:
    south: float
    west: float
    north: float
    east: float

    def as_overpass(self) -> str:
        return f"{self.south},{self.west},{self.north},{self.east}"


SPRINGFIELD_OH = BoundingBox(south=39.90, west=-83.82, north=39.95, east=-83.78)


@dataclass
class RoadSegment:
    id: int
    name: str
    highway: str
    road_type: str
    pci: int
    length_miles: float
    center_lat: float
    center_lng: float
    coordinates: List[List[float]] = field(default_factory=list)
    surface: Optional[str] = None
    lanes: Optional[int] = None
    maxspeed: Optional[str] = None


def build_query(bounds: BoundingBox, timeout: int = 25) -> str:
    excluded = "".join(f'["highway"!="{h}"]' for h in EXCLUDED_HIGHWAYS)
    return (
        f"[out:json][timeout:{timeout}];\n"
        f'(\n  way["highway"]{excluded}({bounds.as_overpass()});\n);\n'
        "out geom;"
    )


def haversine_miles(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2
    )
    return EARTH_RADIUS_MILES * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def segment_length(coordinates: Sequence[Sequence[float]]) -> float:
    total = sum(
        haversine_miles(a[0], a[1], b[0], b[1])
        for a, b in zip(coordinates, coordinates[1:])
    )
    return round(total, 2)


def pci_for_way(way_id: int) -> int:
    """Stable PCI in 0-100 derived from the way id."""
    seed = way_id % 100
    for upper, low, width in _PCI_BANDS:
        if seed < upper:
            return low + (way_id // 100) % width
    return 0


def road_type_for(highway: str) -> str:
    return HIGHWAY_ROAD_TYPES.get(highway, "Local")


def _parse_lanes(raw: Optional[str]) -> Optional[int]:
    if not raw:
        return None
    try:
        return int(raw.split(";")[0])
    except ValueError:
        return None


def parse_elements(elements: Iterable[Dict[str, Any]]) -> List[RoadSegment]:
    segments: List[RoadSegment] = []
    for element in elements:
        if element.get("type") != "way" or not element.get("tags") or not element.get("geometry"):
            continue
        coordinates = [[p["lat"], p["lon"]] for p in element["geometry"]]
        tags = element["tags"]
        highway = tags.get("highway", "unknown")
        road_type = road_type_for(highway)
        segments.append(RoadSegment(
            id=element["id"],
            name=tags.get("name") or tags.get("ref") or f"Unnamed {road_type}",
            highway=highway,
            road_type=road_type,
            pci=pci_for_way(element["id"]),
            length_miles=segment_length(coordinates),
            center_lat=sum(c[0] for c in coordinates) / len(coordinates),
            center_lng=sum(c[1] for c in coordinates) / len(coordinates),
            coordinates=coordinates,
            surface=tags.get("surface"),
            lanes=_parse_lanes(tags.get("lanes")),
            maxspeed=tags.get("maxspeed"),
        ))
    return segments


class OverpassClient:
    def __init__(
        self,
        cache: Cache,
        base_url: str = settings.OVERPASS_API_URL,
        timeout: float = settings.OVERPASS_TIMEOUT,
        cache_ttl: int = settings.ROAD_CACHE_TTL,
        max_attempts: int = 2,
        wait=None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.cache = cache
        self.base_url = base_url
        self.timeout = timeout
        self.cache_ttl = cache_ttl
        self.max_attempts = max_attempts
        self.wait = wait if wait is not None else wait_exponential(multiplier=1, min=2, max=10)
        self.transport = transport

    async def _post(self, query: str) -> Dict[str, Any]:
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=self.wait,
            retry=retry_if_exception_type(httpx.HTTPError),
            reraise=True,
        ):
            with attempt:
                async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                    response = await client.post(self.base_url, data={"data": query})
                    response.raise_for_status()
                    return response.json()

    async def fetch_roads(self, bounds: BoundingBox = SPRINGFIELD_OH) -> List[RoadSegment]:
        key = cache_key("roads", bounds.as_overpass())
        cached = self.cache.get(key)
        if cached is not None:
            return [RoadSegment(**row) for row in cached]

        try:
            payload = await self._post(build_query(bounds))
        except (httpx.HTTPError, ValueError) as e:
            ROAD_NETWORK_FALLBACKS.inc()
            logger.warning("Overpass request failed, serving sample roads: %s", e)
            return sample_roads()

        segments = parse_elements(payload.get("elements", []))
        self.cache.set(key, [asdict(s) for s in segments], self.cache_ttl)
        logger.info("Fetched %d road segments for %s", len(segments), bounds.as_overpass())
        return segments


def sample_roads() -> List[RoadSegment]:
    rows = RoadSampleProvider().items()
    for row in rows:
        row.pop("is_sample_data", None)
    return [RoadSegment(**row) for row in rows]
