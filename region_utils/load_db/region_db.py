"""
region_db.py
Writes the region bounds database and the search index, plus gzip copies of
both, and reads them back for lookups and verification.
"""
import gzip
import json
import shutil
import sqlite3
from pathlib import Path
from typing import Dict, Iterable, List

from region_utils.config import GZIP_SUFFIX, RELEASE_ASSETS
from region_utils.errors import StorageError
from region_utils.regions.aggregator import Region, SearchIndexEntry, StatePolygon
from region_utils.utils.logger import get_logger

logger = get_logger()

# Get the directory where this module is located
MODULE_DIR = Path(__file__).parent
SQL_DIR = MODULE_DIR / "sql"


def create_schema(conn: sqlite3.Connection) -> None:
    """
    Drops and recreates region_bounds and state_regions using sql/create.sql.
    """
    with open(SQL_DIR / "create.sql", 'r') as f:
        create_sql = f.read()
    conn.executescript(create_sql)


def write_region_database(db_path: Path, regions: Iterable[Region], state_polygons: Iterable[StatePolygon]) -> Path:
    """
    Replace the contents of db_path with the given regions and state outlines.
    Raises StorageError if the database cannot be written.
    """
    db_path = Path(db_path)
    try:
        db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(db_path)
    except (OSError, sqlite3.Error) as e:
        raise StorageError(f"Could not open region database {db_path}: {e}") from e
    try:
        conn.execute("PRAGMA foreign_keys = ON")
        create_schema(conn)
        with conn:
            conn.executemany(
                "INSERT INTO region_bounds (id, name, type, xmin, ymin, xmax, ymax) VALUES (?, ?, ?, ?, ?, ?, ?)",
                ((r.id, r.name, r.type, *r.bounds.as_tuple()) for r in regions),
            )
            conn.executemany(
                "INSERT INTO state_regions (region_id, polygon_geojson) VALUES (?, ?)",
                ((p.region_id, json.dumps(p.geometry, separators=(',', ':'))) for p in state_polygons),
            )
    except (OSError, sqlite3.Error) as e:
        raise StorageError(f"Could not write region database {db_path}: {e}") from e
    finally:
        conn.close()
    logger.info(f"Region DB written to {db_path}")
    return db_path


def write_search_index(json_path: Path, entries: Iterable[SearchIndexEntry]) -> Path:
    """Write the search index as a JSON array of {id, name, type} objects."""
    json_path = Path(json_path)
    try:
        json_path.parent.mkdir(parents=True, exist_ok=True)
        with open(json_path, 'w', encoding='utf-8') as f:
            json.dump([e.to_dict() for e in entries], f, indent=2, ensure_ascii=False)
    except OSError as e:
        raise StorageError(f"Could not write search index {json_path}: {e}") from e
    logger.info(f"Search index written to {json_path}")
    return json_path


def gzip_file(path: Path) -> Path:
    """Write a gzip copy of path next to it (path + .gz); the original is kept."""
    path = Path(path)
    gz_path = path.with_name(path.name + GZIP_SUFFIX)
    try:
        with open(path, 'rb') as src, gzip.open(gz_path, 'wb') as dst:
            shutil.copyfileobj(src, dst)
    except OSError as e:
        raise StorageError(f"Could not compress {path}: {e}") from e
    logger.info(f"Gzipped copy written to {gz_path}")
    return gz_path


def lookup_region(db_path: Path, name: str) -> List[Dict]:
    """
    Rows of region_bounds whose name matches (case-insensitive input), in id order.
    Raises StorageError if the database cannot be read.
    """
    try:
        conn = sqlite3.connect(Path(db_path))
    except sqlite3.Error as e:
        raise StorageError(f"Could not open region database {db_path}: {e}") from e
    conn.row_factory = sqlite3.Row
    try:
        cur = conn.execute(
            "SELECT id, name, type, xmin, ymin, xmax, ymax FROM region_bounds WHERE name = ? ORDER BY id",
            (name.strip().lower(),),
        )
        return [dict(row) for row in cur.fetchall()]
    except sqlite3.Error as e:
        raise StorageError(f"Could not read region database {db_path}: {e}") from e
    finally:
        conn.close()


def verify_artifacts(build_dir: Path) -> Dict[str, str]:
    """
    Check the four release files in build_dir. Returns {file name: problem}
    for every file that is missing or whose gzip copy does not decompress to
    the original bytes; an empty dict means the build output is complete.
    """
    build_dir = Path(build_dir)
    problems = {}
    for name in RELEASE_ASSETS:
        if not (build_dir / name).exists():
            problems[name] = "missing"
    for name in RELEASE_ASSETS:
        if not name.endswith(GZIP_SUFFIX) or name in problems:
            continue
        original = build_dir / name[:-len(GZIP_SUFFIX)]
        if original.name in problems:
            continue
        try:
            with gzip.open(build_dir / name, 'rb') as f:
                matches = f.read() == original.read_bytes()
        except (OSError, EOFError) as e:
            problems[name] = f"unreadable: {e}"
            continue
        if not matches:
            problems[name] = f"does not match {original.name}"
    return problems
