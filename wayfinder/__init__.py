"""Wayfinder - Campus location search and turn-by-turn walking guidance."""

from .config import CONFIG
from .errors import (
    WayfinderError,
    NavigationError,
    MissingOriginError,
    NoRouteFoundError,
    ProviderError,
    ProviderResponseError,
    ProviderConfigError,
)
from .models import Coordinates, Location, RouteStep, Route, SearchStatus, SessionStatus
from .logger import Logger
from .geo import (
    haversine_distance,
    distance_meters,
    estimate_walk_time_seconds,
    estimate_walk_time_minutes,
    parse_lon_lat,
    format_distance,
    format_duration,
)
from .catalog import load_catalog
from .directory import LocationDirectory, filter_by_category, filter_by_text, rank_by_proximity
from .providers import MapboxGeocoder, MapboxDirections, OfflineGeocoder
from .search import SearchSession
from .planner import RoutePlanner
from .navigation import NavigationSession, NavigationState, advance_step, retreat_step
from .position import GPS, FixedPosition, ManualStartPoint, PositionResolver
from .surface import ConsoleSurface, WebSocketSurface
from .app import CampusMap

__all__ = [
    "CONFIG",
    "WayfinderError",
    "NavigationError",
    "MissingOriginError",
    "NoRouteFoundError",
    "ProviderError",
    "ProviderResponseError",
    "ProviderConfigError",
    "Coordinates",
    "Location",
    "RouteStep",
    "Route",
    "SearchStatus",
    "SessionStatus",
    "Logger",
    "haversine_distance",
    "distance_meters",
    "estimate_walk_time_seconds",
    "estimate_walk_time_minutes",
    "parse_lon_lat",
    "format_distance",
    "format_duration",
    "load_catalog",
    "LocationDirectory",
    "filter_by_category",
    "filter_by_text",
    "rank_by_proximity",
    "MapboxGeocoder",
    "MapboxDirections",
    "OfflineGeocoder",
    "SearchSession",
    "RoutePlanner",
    "NavigationSession",
    "NavigationState",
    "advance_step",
    "retreat_step",
    "GPS",
    "FixedPosition",
    "ManualStartPoint",
    "PositionResolver",
    "ConsoleSurface",
    "WebSocketSurface",
    "CampusMap",
]
