from .downloader import download_file, ensure_shapefile, fetch_sources
from .sources import (
    ShapefileSource, SHAPEFILE_SOURCES, STATE_NAMES, REGION_TYPES,
    construct_url, state_name_for_abbreviation,
)

__all__ = [
    "download_file", "ensure_shapefile", "fetch_sources",
    "ShapefileSource", "SHAPEFILE_SOURCES", "STATE_NAMES", "REGION_TYPES",
    "construct_url", "state_name_for_abbreviation",
]
