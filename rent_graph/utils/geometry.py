"""
Geometric helpers for geographic coordinates.
"""

import math

EARTH_RADIUS_KM = 6371.0


def haversine_distance(coord1, coord2, radius=EARTH_RADIUS_KM):
    """
    Great-circle distance between two points using the haversine formula.

    Parameters
    ----------
    coord1 : tuple of float
        (latitude, longitude) of the first point in decimal degrees
    coord2 : tuple of float
        (latitude, longitude) of the second point in decimal degrees
    radius : float, optional
        Sphere radius, defaults to the Earth's mean radius in km

    Returns
    -------
    float
        Distance in the units of ``radius`` (km by default)
    """
    lat1, lon1 = coord1
    lat2, lon2 = coord2

    dlat = math.radians(lat2 - lat1)
    dlon = math.radians(lon2 - lon1)

    a = (math.sin(dlat / 2.0) ** 2
         + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(dlon / 2.0) ** 2)
    # rounding can push a past 1 for antipodal points
    a = min(a, 1.0)
    c = 2.0 * math.atan2(math.sqrt(a), math.sqrt(1.0 - a))

    return radius * c


def within_radius(distance, radius, inclusive=True):
    """Apply the inclusion policy of the graph builder to a distance."""
    if inclusive:
        return distance <= radius
    return distance < radius


__all__ = ['EARTH_RADIUS_KM', 'haversine_distance', 'within_radius']
