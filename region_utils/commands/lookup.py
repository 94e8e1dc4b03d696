"""
Lookup command - Spot-check a built region database by name
"""

from pathlib import Path

from region_utils.config import REGION_DB_NAME
from region_utils.errors import StorageError
from region_utils.load_db.region_db import lookup_region
from region_utils.utils.logger import get_logger

logger = get_logger()


def cmd_lookup(args):
    """Handle 'lookup' subcommand."""
    db_path = Path(args.output) / REGION_DB_NAME
    if not db_path.exists():
        logger.error(f"Region database not found: {db_path}")
        return 1
    try:
        rows = lookup_region(db_path, args.name)
    except StorageError as e:
        logger.error(str(e))
        return 1
    if not rows:
        print(f"No region named {args.name!r}")
        return 1
    for row in rows:
        print(f"  {row['id']:>6} {row['type']:5s} {row['name']}  "
              f"[{row['xmin']:.5f}, {row['ymin']:.5f}, {row['xmax']:.5f}, {row['ymax']:.5f}]")
    return 0
