"""
regions: shapefile record streaming, bounding boxes and region aggregation.

Modules:
	- reader: Streams (geometry, attributes) records from a shapefile
	- bounds: Bounding boxes from polygon coordinates
	- aggregator: Dedupes regions by (name, type), merges bounds, builds the search index
	- pipeline: Fetch -> aggregate -> write orchestration (import directly;
	  it depends on load_db.region_db, which imports this package)
"""

from .bounds import Bounds, compute_bounds
from .reader import ShapeRecord, read_records
from .aggregator import (
    Region, RegionAggregator, RecordOutcome, SearchIndexEntry, SkipReason, StatePolygon,
)
