"""
sources.py - Shapefile catalogue, URL construction and the state name table
for the region build.
"""

from typing import Callable, Dict, NamedTuple, Optional

from region_utils.config import CENSUS_BASE_URL

# The 50 US states by USPS abbreviation
STATE_NAMES = {
    'AL': 'Alabama', 'AK': 'Alaska', 'AZ': 'Arizona', 'AR': 'Arkansas',
    'CA': 'California', 'CO': 'Colorado', 'CT': 'Connecticut', 'DE': 'Delaware',
    'FL': 'Florida', 'GA': 'Georgia', 'HI': 'Hawaii', 'ID': 'Idaho',
    'IL': 'Illinois', 'IN': 'Indiana', 'IA': 'Iowa', 'KS': 'Kansas',
    'KY': 'Kentucky', 'LA': 'Louisiana', 'ME': 'Maine', 'MD': 'Maryland',
    'MA': 'Massachusetts', 'MI': 'Michigan', 'MN': 'Minnesota', 'MS': 'Mississippi',
    'MO': 'Missouri', 'MT': 'Montana', 'NE': 'Nebraska', 'NV': 'Nevada',
    'NH': 'New Hampshire', 'NJ': 'New Jersey', 'NM': 'New Mexico', 'NY': 'New York',
    'NC': 'North Carolina', 'ND': 'North Dakota', 'OH': 'Ohio', 'OK': 'Oklahoma',
    'OR': 'Oregon', 'PA': 'Pennsylvania', 'RI': 'Rhode Island', 'SC': 'South Carolina',
    'SD': 'South Dakota', 'TN': 'Tennessee', 'TX': 'Texas', 'UT': 'Utah',
    'VT': 'Vermont', 'VA': 'Virginia', 'WA': 'Washington', 'WV': 'West Virginia',
    'WI': 'Wisconsin', 'WY': 'Wyoming',
}

REGION_TYPES = ('zip', 'city', 'state')


def state_name_for_abbreviation(abbreviation: str) -> Optional[str]:
    """Full English name for a state abbreviation (any case), or None."""
    return STATE_NAMES.get(abbreviation.strip().upper())


def _zip_name(props: Dict) -> Optional[str]:
    return props.get('ZCTA5CE20')


def _city_name(props: Dict) -> Optional[str]:
    name = props.get('NAME')
    state = props.get('STUSPS')
    if not name or not state:
        return None
    return f"{name}, {state}"


def _state_name(props: Dict) -> Optional[str]:
    return props.get('STUSPS')


class ShapefileSource(NamedTuple):
    """One national shapefile and how to name the regions it contains."""
    region_type: str
    shapefile: str
    archive: str
    name_rule: Callable[[Dict], Optional[str]]

    def region_name(self, props: Dict) -> Optional[str]:
        """
        Derive the lowercase, trimmed region name from a record's attributes.
        Returns None when the attribute(s) are missing or blank.
        """
        raw = self.name_rule(props or {})
        if raw is None:
            return None
        name = str(raw).strip().lower()
        return name or None


# Processing order is significant: ids are handed out in first-seen order
SHAPEFILE_SOURCES = (
    ShapefileSource('zip', 'cb_2020_us_zcta520_500k.shp', 'cb_2020_us_zcta520_500k.zip', _zip_name),
    ShapefileSource('city', 'cb_2020_us_place_500k.shp', 'cb_2020_us_place_500k.zip', _city_name),
    ShapefileSource('state', 'cb_2020_us_state_500k.shp', 'cb_2020_us_state_500k.zip', _state_name),
)


def construct_url(archive: str, base_url: str = CENSUS_BASE_URL) -> str:
    """
    Construct the download URL for a cartographic boundary archive.
    URL pattern: https://www2.census.gov/geo/tiger/GENZ2020/shp/{archive}
    """
    if not base_url.endswith('/'):
        base_url += '/'
    return f"{base_url}{archive}"
