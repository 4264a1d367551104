"""Location Directory: filtering and ranking over the static campus catalog."""

from typing import Iterable, Optional, Sequence

from .catalog import load_catalog
from .geo import distance_meters
from .models import Coordinates, Location

ALL_CATEGORIES = "all"


def filter_by_category(locations: Iterable[Location], category: str) -> list[Location]:
    """Every location for ``"all"``, otherwise an exact category match"""
    if category == ALL_CATEGORIES:
        return list(locations)
    return [loc for loc in locations if loc.category == category]


def matches_text(location: Location, query: str) -> bool:
    """Case-insensitive substring match over name, type and faculty"""
    needle = query.strip().lower()
    if not needle:
        return True
    return (needle in location.name.lower() or
            needle in location.type.lower() or
            needle in location.faculty.lower())


def filter_by_text(locations: Iterable[Location], query: str) -> list[Location]:
    """Locations whose name, type or faculty contains ``query``.

    An empty or whitespace query passes everything through. Both filters are
    plain predicates over single locations, so they compose in either order.
    """
    return [loc for loc in locations if matches_text(loc, query)]


def rank_by_proximity(locations: Iterable[Location], anchor: Coordinates) -> list[Location]:
    """Sort nearest-first from ``anchor``; ties keep their input order"""
    return sorted(locations, key=lambda loc: distance_meters(anchor, loc.coordinates))


class LocationDirectory:
    """In-memory catalog of campus locations, built once at startup"""

    def __init__(self, locations: Optional[Sequence[Location]] = None):
        self._locations: tuple[Location, ...] = tuple(locations) if locations is not None else load_catalog()
        self._by_id = {loc.id: loc for loc in self._locations}
        if len(self._by_id) != len(self._locations):
            raise ValueError("Catalog location ids must be unique")

    @property
    def locations(self) -> tuple[Location, ...]:
        return self._locations

    def get(self, location_id) -> Optional[Location]:
        return self._by_id.get(location_id)

    def find(self, category: str = ALL_CATEGORIES, query: str = "") -> list[Location]:
        """Catalog locations matching both category and text"""
        return filter_by_text(filter_by_category(self._locations, category), query)

    def categories(self) -> list[str]:
        """Categories present in the catalog, in first-seen order"""
        seen: list[str] = []
        for loc in self._locations:
            if loc.category not in seen:
                seen.append(loc.category)
        return seen

    def nearest(self, position: Coordinates, limit: int = 5,
                category: str = ALL_CATEGORIES) -> list[Location]:
        """The ``limit`` closest catalog locations to ``position``"""
        return rank_by_proximity(filter_by_category(self._locations, category), position)[:limit]

    def resolve(self, name_or_id: str) -> Optional[Location]:
        """Look up by id, then exact name, then the first text match"""
        text = str(name_or_id).strip()
        if text.isdigit() and int(text) in self._by_id:
            return self._by_id[int(text)]
        for loc in self._locations:
            if loc.name.lower() == text.lower():
                return loc
        matches = filter_by_text(self._locations, text)
        return matches[0] if matches else None

    def __len__(self) -> int:
        return len(self._locations)

    def __iter__(self):
        return iter(self._locations)
