"""
pipeline.py - End-to-end region build: fetch shapefiles, aggregate regions,
write the bounds database and search index with gzip copies.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, Optional

from region_utils.config import (
    BUILD_DIR_DEFAULT, CENSUS_BASE_URL, DOWNLOAD_TIMEOUT, REGION_DB_NAME,
    SEARCH_INDEX_NAME, SIMPLIFY_TOLERANCE,
)
from region_utils.download.downloader import fetch_sources
from region_utils.download.sources import SHAPEFILE_SOURCES, ShapefileSource
from region_utils.load_db.region_db import gzip_file, write_region_database, write_search_index
from region_utils.utils.logger import get_logger
from .aggregator import RegionAggregator
from .reader import read_records

logger = get_logger()


@dataclass
class BuildSummary:
    db_path: Path
    index_path: Path
    db_gz_path: Path
    index_gz_path: Path
    regions_by_type: Dict[str, int] = field(default_factory=dict)
    index_entries: int = 0
    state_polygons: int = 0
    skipped: Dict[str, Dict[str, int]] = field(default_factory=dict)

    @property
    def total_regions(self) -> int:
        return sum(self.regions_by_type.values())


def aggregate_sources(shapefiles: Dict[str, Path], sources: Iterable[ShapefileSource],
                      aggregator: RegionAggregator) -> RegionAggregator:
    """
    Stream each source's shapefile through the aggregator, one file at a time
    and in the given order.
    """
    for source in sources:
        shp_path = shapefiles[source.shapefile]
        logger.info(f"Processing {source.region_type} regions from {shp_path.name}")
        aggregator.process_source(source, read_records(shp_path))
    return aggregator


def build_region_database(build_dir: Path = BUILD_DIR_DEFAULT,
                          sources: Iterable[ShapefileSource] = SHAPEFILE_SOURCES,
                          base_url: str = CENSUS_BASE_URL,
                          timeout: int = DOWNLOAD_TIMEOUT,
                          parallel: int = 1,
                          download: bool = True,
                          tolerance: float = SIMPLIFY_TOLERANCE,
                          aggregator: Optional[RegionAggregator] = None) -> BuildSummary:
    """
    Run a full build into build_dir and return a summary of what was written.

    All shapefiles are made present first (optionally fetched in parallel),
    then processed sequentially. Nothing is written until every source has
    been aggregated. DownloadError, ExtractError and StorageError propagate.
    """
    build_dir = Path(build_dir)
    build_dir.mkdir(parents=True, exist_ok=True)
    sources = list(sources)
    aggregator = aggregator or RegionAggregator(tolerance=tolerance)

    paths = fetch_sources(sources, build_dir, base_url=base_url, timeout=timeout,
                          parallel=parallel, download=download)
    shapefiles = {s.shapefile: p for s, p in zip(sources, paths)}
    aggregate_sources(shapefiles, sources, aggregator)

    db_path = write_region_database(build_dir / REGION_DB_NAME, aggregator.regions, aggregator.state_polygons)
    index_path = write_search_index(build_dir / SEARCH_INDEX_NAME, aggregator.search_index)
    summary = BuildSummary(
        db_path=db_path,
        index_path=index_path,
        db_gz_path=gzip_file(db_path),
        index_gz_path=gzip_file(index_path),
        regions_by_type={t: aggregator.created[t] for t in (s.region_type for s in sources)},
        index_entries=len(aggregator.search_index),
        state_polygons=len(aggregator.state_polygons),
        skipped={t: {r.value: n for r, n in c.items()} for t, c in aggregator.skipped.items()},
    )
    logger.info(
        f"Built {summary.total_regions} regions "
        f"({', '.join(f'{t}: {n}' for t, n in summary.regions_by_type.items())}), "
        f"{summary.index_entries} index entries, {summary.state_polygons} state outlines"
    )
    return summary
