"""
Static catalogue of Tai-Chi (balance training) class locations.
"""

from typing import List, Optional

from schemas.favorite import TaiChiLocation

TAI_CHI_LOCATIONS: List[TaiChiLocation] = [
    TaiChiLocation(
        id=1,
        title="Tai-Chi at South Bend Senior Center",
        description="Every Tuesday 10am-11am",
        latitude=41.6764,
        longitude=-86.25199,
    ),
    TaiChiLocation(
        id=2,
        title="Tai-Chi in Elkhart Park",
        description="Saturdays 9am-10am",
        latitude=41.68199,
        longitude=-85.97667,
    ),
    TaiChiLocation(
        id=3,
        title="Tai-Chi at Valparaiso YMCA",
        description="Thursdays 5pm-6pm",
        latitude=41.4731,
        longitude=-87.0611,
    ),
]

_BY_ID = {location.id: location for location in TAI_CHI_LOCATIONS}


def get_location(location_id: int) -> Optional[TaiChiLocation]:
    return _BY_ID.get(location_id)
