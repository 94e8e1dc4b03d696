"""
aggregator.py - Fold shapefile records into regions, search index entries and
simplified state outlines.

One RegionAggregator instance owns all mutable state of a build: the id
counter, the (name, type) -> Region map, the search index list and the state
polygon table. Records must be applied from a single thread, in the order the
sources are processed (zip, city, state), since ids follow first-seen order.
"""

from collections import Counter, defaultdict
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Tuple

from shapely.errors import GEOSException
from shapely.geometry import mapping, shape

from region_utils.config import SIMPLIFY_TOLERANCE
from region_utils.download.sources import REGION_TYPES, ShapefileSource, state_name_for_abbreviation
from region_utils.utils.logger import get_logger
from .bounds import Bounds, clean_coordinates, compute_bounds
from .reader import ShapeRecord

logger = get_logger()

POLYGON_TYPES = ('Polygon', 'MultiPolygon')


@dataclass
class Region:
    id: int
    name: str
    type: str
    bounds: Bounds


@dataclass(frozen=True)
class SearchIndexEntry:
    id: int
    name: str
    type: str

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "type": self.type}


@dataclass(frozen=True)
class StatePolygon:
    region_id: int
    geometry: Dict[str, Any]


class SkipReason(str, Enum):
    EMPTY_NAME = "empty_name"
    UNSUPPORTED_GEOMETRY = "unsupported_geometry"
    NO_VALID_BOUNDS = "no_valid_bounds"


@dataclass(frozen=True)
class RecordOutcome:
    """
    Result of applying one record. Accepted outcomes carry the region id and
    whether the record created the region or merged into an existing one;
    skipped outcomes carry the reason.
    """
    accepted: bool
    region_id: Optional[int] = None
    created: bool = False
    reason: Optional[SkipReason] = None

    @classmethod
    def skipped(cls, reason: SkipReason) -> "RecordOutcome":
        return cls(accepted=False, reason=reason)


def simplify_geometry(geometry: Dict[str, Any], tolerance: float = SIMPLIFY_TOLERANCE) -> Dict[str, Any]:
    """
    Douglas-Peucker simplification without topology preservation (fast, lossy).

    Invalid positions are removed first. If shapely cannot build the cleaned
    geometry (rings too short after cleaning) or simplification collapses it
    entirely, the cleaned coordinates are returned unsimplified.
    """
    cleaned = {"type": geometry["type"], "coordinates": clean_coordinates(geometry.get("coordinates"))}
    try:
        simplified = shape(cleaned).simplify(tolerance, preserve_topology=False)
    except (ValueError, TypeError, GEOSException) as e:
        logger.debug(f"Could not simplify {cleaned['type']}, keeping cleaned outline: {e}")
        return cleaned
    if simplified.is_empty:
        logger.debug("Simplification produced an empty geometry, keeping cleaned outline")
        return cleaned
    return mapping(simplified)


class RegionAggregator:
    """Accumulates regions across all source files of one build."""

    def __init__(self, tolerance: float = SIMPLIFY_TOLERANCE):
        self.tolerance = tolerance
        self._next_id = 1
        self._regions: Dict[Tuple[str, str], Region] = {}
        self.search_index: List[SearchIndexEntry] = []
        self.state_polygons: List[StatePolygon] = []
        self.created = Counter()
        self.merged = Counter()
        self.skipped: Dict[str, Counter] = defaultdict(Counter)

    @property
    def regions(self) -> List[Region]:
        """Regions in id order."""
        return list(self._regions.values())

    def get(self, name: str, region_type: str) -> Optional[Region]:
        return self._regions.get((name, region_type))

    def add_record(self, source: ShapefileSource, record: ShapeRecord) -> RecordOutcome:
        """Apply one record from source; never raises for bad record data."""
        if source.region_type not in REGION_TYPES:
            raise ValueError(f"Unknown region type: {source.region_type!r}")
        outcome = self._apply(source, record)
        if outcome.accepted:
            (self.created if outcome.created else self.merged)[source.region_type] += 1
        else:
            self.skipped[source.region_type][outcome.reason] += 1
        return outcome

    def _apply(self, source: ShapefileSource, record: ShapeRecord) -> RecordOutcome:
        name = source.region_name(record.properties)
        if not name:
            return RecordOutcome.skipped(SkipReason.EMPTY_NAME)

        geometry = record.geometry
        if not geometry or geometry.get("type") not in POLYGON_TYPES:
            return RecordOutcome.skipped(SkipReason.UNSUPPORTED_GEOMETRY)

        bounds = compute_bounds(geometry.get("coordinates"))
        if bounds is None:
            return RecordOutcome.skipped(SkipReason.NO_VALID_BOUNDS)

        region_type = source.region_type
        existing = self._regions.get((name, region_type))
        if existing is not None:
            existing.bounds = existing.bounds.union(bounds)
            return RecordOutcome(accepted=True, region_id=existing.id, created=False)

        region = Region(self._next_id, name, region_type, bounds)
        self._next_id += 1
        self._regions[(name, region_type)] = region
        self.search_index.append(SearchIndexEntry(region.id, name, region_type))

        if region_type == 'state':
            full_name = state_name_for_abbreviation(name)
            if full_name:
                self.search_index.append(SearchIndexEntry(region.id, full_name, region_type))
            self.state_polygons.append(StatePolygon(region.id, simplify_geometry(geometry, self.tolerance)))

        return RecordOutcome(accepted=True, region_id=region.id, created=True)

    def process_source(self, source: ShapefileSource, records: Iterable[ShapeRecord]) -> int:
        """
        Apply every record of one source in order. Returns the number of
        records read.
        """
        count = 0
        for record in records:
            count += 1
            outcome = self.add_record(source, record)
            if not outcome.accepted:
                logger.debug(f"Skipped {source.region_type} record {count}: {outcome.reason.value}")
            if count % 10000 == 0:
                logger.info(f"Processed {count} {source.region_type} records")
        logger.info(
            f"Finished {source.shapefile}: {count} records, "
            f"{self.created[source.region_type]} new regions, "
            f"{self.merged[source.region_type]} merged, "
            f"{sum(self.skipped[source.region_type].values())} skipped"
        )
        return count
