"""
Build command - Download Census shapefiles and build the region database
"""

from pathlib import Path

from region_utils.errors import RegionBuildError
from region_utils.regions.pipeline import build_region_database
from region_utils.utils.logger import get_logger

logger = get_logger()


def cmd_build(args):
    """Handle 'build' subcommand."""
    output_dir = Path(args.output)
    logger.info(f"Building region database in {output_dir}")
    try:
        summary = build_region_database(
            build_dir=output_dir,
            base_url=args.base_url,
            timeout=args.timeout,
            parallel=args.parallel,
            download=args.download,
            tolerance=args.tolerance,
        )
    except RegionBuildError as e:
        logger.error(f"Failed to build region database: {e}")
        return 1

    for region_type, reasons in summary.skipped.items():
        if reasons:
            logger.info(f"Skipped {region_type} records: {reasons}")
    logger.info(f"Artifacts: {summary.db_path}, {summary.index_path}, {summary.db_gz_path}, {summary.index_gz_path}")
    return 0
