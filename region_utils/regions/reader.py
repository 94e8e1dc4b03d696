"""
reader.py - Stream (geometry, attributes) records out of a shapefile with fiona.
"""

from pathlib import Path
from typing import Any, Dict, Iterator, NamedTuple, Optional

import fiona
from fiona.errors import FionaError

from region_utils.errors import ExtractError
from region_utils.utils.logger import get_logger

logger = get_logger()


class ShapeRecord(NamedTuple):
    """One shapefile feature: GeoJSON-like geometry mapping (or None) and attributes."""
    geometry: Optional[Dict[str, Any]]
    properties: Dict[str, Any]


def _geometry_mapping(geometry) -> Optional[Dict[str, Any]]:
    if geometry is None:
        return None
    return dict(geometry.__geo_interface__)


def read_records(shp_path: Path) -> Iterator[ShapeRecord]:
    """
    Lazily yield every record of shp_path in file order.

    The file stays open until the generator is exhausted or closed; it cannot
    be rewound, call again to start over. Records fiona fails to decode are
    logged and skipped. Raises ExtractError if the file cannot be opened.
    """
    shp_path = Path(shp_path)
    try:
        src = fiona.open(shp_path)
    except (FionaError, OSError) as e:
        raise ExtractError(f"Could not open shapefile {shp_path}: {e}") from e

    with src:
        logger.debug(f"Opened {shp_path.name}: {len(src)} records, geometry {src.schema.get('geometry')}")
        features = iter(src)
        position = 0
        while True:
            try:
                feat = next(features)
            except StopIteration:
                return
            except (FionaError, ValueError) as e:
                logger.warning(f"Skipping unreadable record {position} in {shp_path.name}: {e}")
                position += 1
                continue
            position += 1
            yield ShapeRecord(_geometry_mapping(feat.geometry), dict(feat.properties or {}))
