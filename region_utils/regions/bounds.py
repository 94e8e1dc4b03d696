"""
bounds.py - Axis-aligned bounding boxes for polygon geometries.
"""

import math
from dataclasses import dataclass
from numbers import Real
from typing import Any, Iterator, Optional, Sequence, Tuple


@dataclass(frozen=True)
class Bounds:
    """Lon/lat rectangle in degrees."""
    xmin: float
    ymin: float
    xmax: float
    ymax: float

    def union(self, other: "Bounds") -> "Bounds":
        return Bounds(
            min(self.xmin, other.xmin),
            min(self.ymin, other.ymin),
            max(self.xmax, other.xmax),
            max(self.ymax, other.ymax),
        )

    def as_tuple(self) -> Tuple[float, float, float, float]:
        return (self.xmin, self.ymin, self.xmax, self.ymax)


def _is_position(value: Any) -> bool:
    return isinstance(value, (list, tuple)) and (not value or not isinstance(value[0], (list, tuple)))


def iter_positions(coordinates: Any) -> Iterator[Sequence]:
    """Flatten arbitrarily nested rings into a stream of coordinate positions."""
    if not isinstance(coordinates, (list, tuple)):
        return
    if _is_position(coordinates):
        yield coordinates
        return
    for part in coordinates:
        yield from iter_positions(part)


def _valid_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool) and math.isfinite(value)


def compute_bounds(coordinates: Any) -> Optional[Bounds]:
    """
    Bounding box of a Polygon/MultiPolygon coordinate structure.

    Positions whose longitude or latitude is not a finite number
    (None, strings, NaN, infinity) are ignored. Returns None when no valid position is
    left; callers must skip such records.
    """
    xmin = ymin = math.inf
    xmax = ymax = -math.inf
    for position in iter_positions(coordinates):
        if len(position) < 2:
            continue
        lon, lat = position[0], position[1]
        if not (_valid_number(lon) and _valid_number(lat)):
            continue
        if lon < xmin:
            xmin = lon
        if lon > xmax:
            xmax = lon
        if lat < ymin:
            ymin = lat
        if lat > ymax:
            ymax = lat
    if math.isinf(xmin) or math.isinf(ymin):
        return None
    return Bounds(xmin, ymin, xmax, ymax)


def clean_coordinates(coordinates: Any) -> Any:
    """
    Copy of a nested coordinate structure with invalid positions removed.
    Parts left empty after cleaning are dropped as well.
    """
    if not isinstance(coordinates, (list, tuple)):
        return []
    if _is_position(coordinates):
        if len(coordinates) >= 2 and _valid_number(coordinates[0]) and _valid_number(coordinates[1]):
            return list(coordinates)
        return None
    cleaned = []
    for part in coordinates:
        part = clean_coordinates(part)
        if part:
            cleaned.append(part)
    return cleaned
