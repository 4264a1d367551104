"""Geographic utility functions."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import Coordinates

EARTH_RADIUS = 6371000  # meters


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Calculate distance between two points in meters using Haversine formula"""
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    delta_phi = math.radians(lat2 - lat1)
    delta_lambda = math.radians(lon2 - lon1)

    a = (math.sin(delta_phi / 2) ** 2 +
         math.cos(phi1) * math.cos(phi2) * math.sin(delta_lambda / 2) ** 2)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS * c


def distance_meters(a: Coordinates, b: Coordinates) -> float:
    """Great-circle distance between two points with lat/lon attributes.

    Inputs are assumed finite and in range; callers validate upstream.
    """
    return haversine_distance(a.lat, a.lon, b.lat, b.lon)


def estimate_walk_time_seconds(distance: float, speed: float = 80) -> int:
    """Coarse walking time in whole seconds.

    ``speed`` is in meters per minute. Only meant for display when the
    directions provider has not supplied a duration.
    """
    if distance <= 0:
        return 0
    return math.ceil(distance * 60 / speed)


def estimate_walk_time_minutes(distance: float, speed: float = 80) -> int:
    """Coarse walking time in whole minutes, ``ceil(distance / speed)``"""
    if distance <= 0:
        return 0
    return math.ceil(distance / speed)


def parse_lon_lat(text: str) -> tuple[float, float]:
    """Parse a ``"lon, lat"`` coordinate string into a ``(lat, lon)`` tuple.

    Raises ValueError for anything that is not two comma-separated numbers.
    """
    parts = [p.strip() for p in text.split(",")]
    if len(parts) != 2:
        raise ValueError(f"Expected 'lon, lat', got {text!r}")
    lon, lat = float(parts[0]), float(parts[1])
    if not (-90 <= lat <= 90 and -180 <= lon <= 180):
        raise ValueError(f"Coordinate out of range: {text!r}")
    return lat, lon


def format_distance(meters: float) -> str:
    """Format a distance in kilometers with one decimal, e.g. '0.5km'"""
    return f"{meters / 1000:.1f}km"


def format_duration(seconds: float) -> str:
    """Format a duration as rounded minutes, e.g. '7 min'"""
    return f"{math.floor(seconds / 60 + 0.5)} min"
