"""
downloader.py - Fetch and unpack the shapefile archives a region build needs
"""

from pathlib import Path
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Iterable, List

import requests

from region_utils.config import CENSUS_BASE_URL, DOWNLOAD_CHUNK_SIZE, DOWNLOAD_TIMEOUT
from region_utils.errors import DownloadError
from region_utils.load_db.unzipper import extract_archive
from region_utils.utils.logger import get_logger
from .sources import ShapefileSource, construct_url

logger = get_logger()

_HEADERS = {
    "User-Agent": "RegionBuilder/1.0 (Research/Educational Use)",
    "Accept": "application/zip,application/octet-stream;q=0.9,*/*;q=0.8",
}


def download_file(url: str, output_path: Path, timeout: int = DOWNLOAD_TIMEOUT) -> Path:
    """
    Download url to output_path in one attempt.
    Writes to a .tmp sibling first and renames on success; the partial file is
    removed on failure. Raises DownloadError on transport failure or a
    non-2xx response.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    temp_path = output_path.with_suffix(output_path.suffix + '.tmp')
    logger.info(f"Downloading {url} -> {output_path}")
    try:
        r = requests.get(url, stream=True, timeout=timeout, headers=_HEADERS)
    except requests.RequestException as e:
        raise DownloadError(f"Failed to download {url}: {e}") from e
    try:
        if not 200 <= r.status_code < 300:
            raise DownloadError(f"Failed to download {url}: HTTP {r.status_code}")
        with open(temp_path, 'wb') as f:
            for chunk in r.iter_content(chunk_size=DOWNLOAD_CHUNK_SIZE):
                if chunk:
                    f.write(chunk)
        temp_path.replace(output_path)
    except requests.RequestException as e:
        temp_path.unlink(missing_ok=True)
        raise DownloadError(f"Failed to download {url}: {e}") from e
    except OSError as e:
        temp_path.unlink(missing_ok=True)
        raise DownloadError(f"Could not write {output_path}: {e}") from e
    finally:
        r.close()
    logger.info(f"Downloaded: {output_path} ({output_path.stat().st_size} bytes)")
    return output_path


def ensure_shapefile(source: ShapefileSource, dest_dir: Path, base_url: str = CENSUS_BASE_URL,
                     timeout: int = DOWNLOAD_TIMEOUT, download: bool = True) -> Path:
    """
    Make sure source.shapefile exists in dest_dir, downloading and unpacking
    its archive when it does not. The archive is deleted after a successful
    extraction.
    """
    dest_dir = Path(dest_dir)
    shp_path = dest_dir / source.shapefile
    if shp_path.exists():
        logger.info(f"File already exists: {shp_path}")
        return shp_path
    if not download:
        raise DownloadError(f"{source.shapefile} is missing from {dest_dir} and downloads are disabled")

    zip_path = download_file(construct_url(source.archive, base_url), dest_dir / source.archive, timeout)
    logger.info(f"Extracting {zip_path.name}...")
    extract_archive(zip_path, dest_dir, expected=source.shapefile)
    zip_path.unlink()
    return shp_path


def fetch_sources(sources: Iterable[ShapefileSource], dest_dir: Path, base_url: str = CENSUS_BASE_URL,
                  timeout: int = DOWNLOAD_TIMEOUT, parallel: int = 1, download: bool = True) -> List[Path]:
    """
    Ensure every source shapefile is on disk. Returns their paths in source order.
    With parallel > 1 the archives are fetched concurrently; the first failure
    is re-raised once all workers have finished.
    """
    sources = list(sources)
    if parallel <= 1 or len(sources) <= 1:
        return [ensure_shapefile(s, dest_dir, base_url, timeout, download) for s in sources]

    logger.info(f"Fetching {len(sources)} sources with {parallel} workers")
    paths = {}
    errors = []
    with ThreadPoolExecutor(max_workers=parallel) as executor:
        future_to_source = {
            executor.submit(ensure_shapefile, s, dest_dir, base_url, timeout, download): s
            for s in sources
        }
        for future in as_completed(future_to_source):
            source = future_to_source[future]
            try:
                paths[source.shapefile] = future.result()
            except Exception as e:
                logger.error(f"Error fetching {source.archive}: {e}")
                errors.append(e)
    if errors:
        raise errors[0]
    return [paths[s.shapefile] for s in sources]
