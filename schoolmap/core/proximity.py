import math
from typing import Iterable, List, Union

from schoolmap.models.location import Coordinate
from schoolmap.models.school import RankedSchool, School

EARTH_RADIUS_KM = 6371.0

Point = Union[Coordinate, School]


def distance(point_a: Point, point_b: Point) -> float:
    """Great-circle distance in kilometers between two points (haversine)."""
    values = (point_a.latitude, point_a.longitude, point_b.latitude, point_b.longitude)
    if not all(math.isfinite(value) for value in values):
        # Unusable stored coordinates rank as far away as possible
        return EARTH_RADIUS_KM * math.pi

    lat1 = math.radians(point_a.latitude)
    lat2 = math.radians(point_b.latitude)
    d_lat = math.radians(point_b.latitude - point_a.latitude)
    d_lon = math.radians(point_b.longitude - point_a.longitude)

    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(lat1) * math.cos(lat2) * math.sin(d_lon / 2) ** 2
    )
    # Rounding drift near the poles and the antimeridian can leave [0, 1]
    a = min(1.0, max(0.0, a))
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def rank_by_proximity(schools: Iterable[School], reference: Coordinate) -> List[RankedSchool]:
    """Order schools by ascending distance from ``reference``.

    Distances are rounded to 2 decimals before sorting; schools at the same
    rounded distance keep their input order.
    """
    ranked = [
        RankedSchool(school=school, distance_km=round(distance(reference, school), 2))
        for school in schools
    ]
    return sorted(ranked, key=lambda item: item.distance_km)
