"""Search Session: catalog filtering merged with live geocoder results."""

import asyncio
from typing import Optional

from .config import CONFIG
from .directory import ALL_CATEGORIES, LocationDirectory
from .errors import ProviderError, ProviderResponseError
from .logger import Logger
from .models import Coordinates, Location, SearchStatus, SOURCE_GEOCODED

GEOCODED_ID_PREFIX = "mapbox-"


def geocoded_location(result: dict) -> Location:
    """Map one provider result onto a geocoded Location"""
    lon, lat = result["center"]
    display_name = result["display_name"]
    return Location(
        id=f"{GEOCODED_ID_PREFIX}{result['id']}",
        name=display_name.split(",")[0].strip(),
        category="searched",
        type="searched",
        coordinates=Coordinates(lat=float(lat), lon=float(lon)),
        description=display_name,
        icon_key="LOCATION",
        source=SOURCE_GEOCODED,
        faculty="Searched Location",
    )


class SearchSession:
    """Owns the query, the geocoded result set and the search status.

    ``results`` is only ever replaced as a whole. Every call to ``search``
    takes a ticket; when it resolves, it may write ``results`` only if no
    newer search (or clear) has been issued since, so a slow stale response
    can never overwrite a fresher one.

    Provider failures are fail-soft here: they surface as an empty result set
    with ``status == FAILED`` and never raise to the caller.
    """

    def __init__(self, geocoder, directory: Optional[LocationDirectory] = None,
                 proximity_anchor: Optional[Coordinates] = None,
                 limit: Optional[int] = None, debounce: Optional[float] = None,
                 context: Optional[str] = None, context_markers: Optional[tuple] = None,
                 logger: Optional[Logger] = None):
        self.geocoder = geocoder
        self.directory = directory or LocationDirectory()
        if proximity_anchor is None:
            lat, lon = CONFIG["proximity_anchor"]
            proximity_anchor = Coordinates(lat=lat, lon=lon)
        self.proximity_anchor = proximity_anchor
        self.limit = limit if limit is not None else CONFIG["search_result_limit"]
        self.debounce = debounce if debounce is not None else CONFIG["search_debounce"]
        self.context = context if context is not None else CONFIG["search_context"]
        self.context_markers = context_markers if context_markers is not None else CONFIG["search_context_markers"]
        self.logger = (logger or Logger(echo=False)).scoped("search")

        self.query: str = ""
        self.results: tuple[Location, ...] = ()
        self.status = SearchStatus.IDLE
        self._issued = 0  # ticket of the most recently issued search
        self._debounce_ticket = 0

    def contextualize(self, query: str) -> str:
        """Append the campus name unless the query already mentions it"""
        if not self.context or any(marker in query for marker in self.context_markers):
            return query
        return f"{query} {self.context}"

    def clear(self):
        """Drop geocoded results without touching the provider"""
        self._issued += 1
        self.query = ""
        self.results = ()
        self.status = SearchStatus.IDLE

    async def search(self, query: str,
                     proximity_anchor: Optional[Coordinates] = None) -> list[Location]:
        """Geocode ``query`` near the anchor and publish the results.

        Returns only the geocoded locations this call produced; catalog
        matches are not included. Read ``visible()`` afterwards for the merged
        catalog + geocoded list. A call overtaken by a newer search still
        returns its own locations but leaves session state alone.
        """
        if not query or not query.strip():
            self.clear()
            return []

        self._issued += 1
        ticket = self._issued
        anchor = proximity_anchor or self.proximity_anchor
        self.query = query
        self.status = SearchStatus.SEARCHING
        self.logger.log("Search issued", {"query": query, "ticket": ticket})

        try:
            response = await self.geocoder.geocode(self.contextualize(query.strip()), anchor, self.limit)
            locations = self._to_locations(response)
        except (ProviderError, OSError) as e:
            if ticket != self._issued:
                self.logger.log("Stale search failed, ignored", {"ticket": ticket})
                return []
            self.logger.log("Search failed", {"query": query, "error": str(e)})
            self.results = ()
            self.status = SearchStatus.FAILED
            return []

        if ticket != self._issued:
            self.logger.log("Stale search discarded", {"ticket": ticket, "latest": self._issued})
            return locations

        self.results = tuple(locations)
        self.status = SearchStatus.DONE
        self.logger.log("Search done", {"query": query, "count": len(locations)})
        return locations

    async def search_debounced(self, query: str,
                               proximity_anchor: Optional[Coordinates] = None) -> list[Location]:
        """Search once typing settles.

        Each call waits ``debounce`` seconds; if another call arrived in the
        meantime this one gives up and returns the current results. Clearing
        the query is applied immediately.
        """
        self._debounce_ticket += 1
        ticket = self._debounce_ticket
        if not query or not query.strip():
            self.clear()
            return []
        await asyncio.sleep(self.debounce)
        if ticket != self._debounce_ticket:
            return list(self.results)
        return await self.search(query, proximity_anchor)

    def visible(self, category: str = ALL_CATEGORIES) -> list[Location]:
        """Catalog matches for the current query, then geocoded results.

        Catalog ids are ints and geocoded ids are prefixed strings, so ids
        stay unique across the merged list.
        """
        merged = self.directory.find(category, self.query)
        seen = {loc.id for loc in merged}
        for loc in self.results:
            if loc.id not in seen:
                merged.append(loc)
                seen.add(loc.id)
        return merged

    def _to_locations(self, response: dict) -> list[Location]:
        try:
            raw_results = response["results"]
            locations = []
            seen = set()
            for result in raw_results[:self.limit]:
                loc = geocoded_location(result)
                if loc.id in seen:
                    continue
                seen.add(loc.id)
                locations.append(loc)
        except (KeyError, TypeError, ValueError) as e:
            raise ProviderResponseError(f"Malformed geocoding response: {e}") from e
        return locations
