"""Data classes for Wayfinder."""

from dataclasses import dataclass, asdict, field
from enum import Enum
from typing import Optional, Union

from .geo import distance_meters, format_distance, format_duration, parse_lon_lat

CATEGORIES = ("academic", "administrative", "facility", "searched")

SOURCE_CATALOG = "catalog"
SOURCE_GEOCODED = "geocoded"

ICON_SYMBOLS = {
    "GATE": "\U0001F6AA",
    "ADMIN": "\U0001F3DB",
    "LIBRARY": "\U0001F4DA",
    "AUDITORIUM": "\U0001F3AD",
    "ENGINEERING": "⚙",
    "ARTS": "\U0001F3A8",
    "SOCIAL": "\U0001F465",
    "LAW": "⚖",
    "SPORTS": "⚽",
    "HOSPITAL": "\U0001F3E5",
    "COMPUTER": "\U0001F4BB",
    "SCIENCE": "\U0001F52C",
    "BIOLOGY": "\U0001F9EC",
    "EDUCATION": "\U0001F4D6",
    "LECTURE": "\U0001F3AD",
    "THEATRE": "\U0001F3DB",
    "HOSTEL_M": "\U0001F3E0",
    "HOSTEL_F": "\U0001F3E0",
    "CAFETERIA": "\U0001F37D",
    "LOCATION": "\U0001F4CD",
}
DEFAULT_ICON = "\U0001F3E2"


@dataclass(frozen=True)
class Coordinates:
    lat: float
    lon: float
    accuracy: Optional[float] = None
    timestamp: Optional[float] = None

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: dict) -> "Coordinates":
        return cls(**d)

    @classmethod
    def parse(cls, text: str) -> "Coordinates":
        """Parse a catalog-style ``"lon, lat"`` string"""
        lat, lon = parse_lon_lat(text)
        return cls(lat=lat, lon=lon)

    def lon_lat(self) -> list[float]:
        """Provider order: [lon, lat]"""
        return [self.lon, self.lat]


class SearchStatus(Enum):
    IDLE = "idle"
    SEARCHING = "searching"
    DONE = "done"
    FAILED = "failed"


class SessionStatus(Enum):
    IDLE = "idle"
    NAVIGATING = "navigating"


@dataclass(frozen=True)
class Location:
    """A named campus place, either from the catalog or from live geocoding"""
    id: Union[int, str]  # catalog ids are ints, geocoded ids are "mapbox-..." strings
    name: str
    category: str
    type: str
    coordinates: Coordinates
    description: str = ""
    icon_key: str = ""
    source: str = SOURCE_CATALOG
    faculty: str = ""
    image_url: Optional[str] = None

    @property
    def icon(self) -> str:
        return ICON_SYMBOLS.get(self.icon_key, DEFAULT_ICON)

    @property
    def is_geocoded(self) -> bool:
        return self.source == SOURCE_GEOCODED

    def distance_from(self, position: Coordinates) -> int:
        """Whole meters from ``position`` to this location"""
        return round(distance_meters(position, self.coordinates))

    def to_dict(self) -> dict:
        d = asdict(self)
        d["coordinates"] = {"lat": self.coordinates.lat, "lon": self.coordinates.lon}
        return d


@dataclass(frozen=True)
class RouteStep:
    """A single provider maneuver, kept in provider order"""
    instruction: str
    distance_meters: float
    geometry_segment: Optional[dict] = None

    def to_dict(self) -> dict:
        return {
            "instruction": self.instruction,
            "distance_meters": self.distance_meters,
            "geometry_segment": self.geometry_segment,
        }


@dataclass(frozen=True)
class Route:
    """A walking route. Never mutated; a new plan replaces it entirely."""
    origin: Coordinates
    destination: Location
    distance_meters: float
    duration_seconds: float
    steps: tuple[RouteStep, ...] = field(default_factory=tuple)
    geometry: Optional[dict] = None

    @property
    def last_step_index(self) -> int:
        return len(self.steps) - 1

    def summary(self) -> dict:
        """Display-ready totals for the rendering surface"""
        return {
            "destination": self.destination.name,
            "distance": format_distance(self.distance_meters),
            "duration": format_duration(self.duration_seconds),
            "steps": len(self.steps),
        }

    def to_dict(self) -> dict:
        return {
            "origin": {"lat": self.origin.lat, "lon": self.origin.lon},
            "destination": self.destination.to_dict(),
            "distance_meters": self.distance_meters,
            "duration_seconds": self.duration_seconds,
            "steps": [s.to_dict() for s in self.steps],
            "geometry": self.geometry,
        }
