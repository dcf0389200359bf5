# app/core.py

from math import radians, sin, cos, atan2, sqrt

EARTH_RADIUS_KM = 6371


def distance_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """
    Great circle distance in kilometers between two points given in
    decimal degrees (haversine). NaN in, NaN out.
    """
    d_lat = radians(lat2 - lat1)
    d_lng = radians(lng2 - lng1)

    a = sin(d_lat / 2) ** 2 + cos(radians(lat1)) * cos(radians(lat2)) * sin(d_lng / 2) ** 2
    a = min(a, 1.0)  # rounding near antipodes
    c = 2 * atan2(sqrt(a), sqrt(1 - a))

    return EARTH_RADIUS_KM * c
