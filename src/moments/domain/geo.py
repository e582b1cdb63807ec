from pyproj import Geod

from moments.domain.models import Location

_GEOD = Geod(ellps="WGS84")


def distance_m(a: Location, b: Location) -> float:
    """Geodesic distance on the WGS84 ellipsoid, in meters."""
    _az12, _az21, dist = _GEOD.inv(a.lon, a.lat, b.lon, b.lat)
    return dist
