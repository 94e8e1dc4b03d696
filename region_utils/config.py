from pathlib import Path

CENSUS_BASE_URL = "https://www2.census.gov/geo/tiger/GENZ2020/shp/"

BUILD_DIR_DEFAULT = Path("build")

REGION_DB_NAME = "regions.sqlite"
SEARCH_INDEX_NAME = "region-names.json"
GZIP_SUFFIX = ".gz"

# Files the release publisher picks up from the build directory, by name
RELEASE_ASSETS = (
    REGION_DB_NAME,
    SEARCH_INDEX_NAME,
    REGION_DB_NAME + GZIP_SUFFIX,
    SEARCH_INDEX_NAME + GZIP_SUFFIX,
)

# Degrees; state outlines only
SIMPLIFY_TOLERANCE = 0.01

DOWNLOAD_TIMEOUT = 120
DOWNLOAD_CHUNK_SIZE = 8192
