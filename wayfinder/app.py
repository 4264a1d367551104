"""Main Wayfinder application: one campus map instance."""

import asyncio
from typing import Optional

from .directory import ALL_CATEGORIES, LocationDirectory
from .errors import MissingOriginError, NoRouteFoundError, ProviderError
from .logger import Logger
from .models import Coordinates, Location, Route, SessionStatus
from .navigation import NavigationSession, NavigationState
from .planner import RoutePlanner
from .position import PositionResolver
from .search import SearchSession
from .surface import ConsoleSurface

NOTICE_MISSING_ORIGIN = "Please enable location services or set a start point on the map."
NOTICE_NO_ROUTE = "Could not find a route to this location."
NOTICE_DIRECTIONS_FAILED = "Failed to get directions. Please try again."


class CampusMap:
    """Ties search, planning and guidance to one surface and one position source.

    Each map owns exactly one NavigationSession; asking for directions while a
    route is active replaces it.
    """

    def __init__(self, geocoder, directions,
                 directory: Optional[LocationDirectory] = None,
                 position: Optional[PositionResolver] = None,
                 surface=None,
                 logger: Optional[Logger] = None,
                 interval: Optional[float] = None,
                 scheduler=None):
        self.logger = logger or Logger(echo=False)
        self.directory = directory or LocationDirectory()
        self.position = position or PositionResolver()
        self.surface = surface or ConsoleSurface()
        self.search = SearchSession(geocoder, self.directory, logger=self.logger)
        self.planner = RoutePlanner(directions, logger=self.logger)
        self.navigation = NavigationSession(
            self.planner,
            interval=interval,
            scheduler=scheduler,
            logger=self.logger,
            on_change=self._on_navigation_change,
        )
        self.category = ALL_CATEGORIES
        self.selected: Optional[Location] = None
        self.last_notice: Optional[str] = None
        self._shown_route: Optional[Route] = None

    # Search

    async def find(self, query: str) -> list[Location]:
        """Run a search and show the merged catalog + geocoded results"""
        await self.search.search(query)
        results = self.visible()
        self.surface.show_results(results, self.position.manual.point)
        return results

    def set_category(self, category: str) -> list[Location]:
        self.category = category
        return self.visible()

    def visible(self) -> list[Location]:
        return self.search.visible(self.category)

    def select(self, location_id) -> Optional[Location]:
        """Pick a location from the visible results or the catalog"""
        for loc in self.visible():
            if loc.id == location_id:
                self.selected = loc
                return loc
        self.selected = self.directory.get(location_id)
        return self.selected

    async def nearby(self, limit: int = 5) -> list[Location]:
        """Closest catalog locations to the current origin"""
        origin = await self.current_origin()
        if origin is None:
            self._notice(NOTICE_MISSING_ORIGIN)
            return []
        return self.directory.nearest(origin, limit=limit, category=self.category)

    # Position

    def place_start_point(self, point: Coordinates) -> bool:
        """Place a manual start point; refused while navigating"""
        placed = self.position.manual.place(
            point, navigating=self.navigation.status is SessionStatus.NAVIGATING)
        self.logger.log("Start point placed" if placed else "Start point ignored while navigating",
                        {"lat": point.lat, "lon": point.lon})
        return placed

    async def current_origin(self) -> Optional[Coordinates]:
        # Device reads can block on a subprocess
        return await asyncio.to_thread(self.position.current)

    # Guidance

    async def navigate_to(self, destination: Location) -> Optional[Route]:
        """Start guidance to ``destination`` from the current origin.

        Failures become user notices on the surface and return None.
        """
        self.selected = destination
        origin = await self.current_origin()
        try:
            return await self.navigation.start(origin, destination)
        except MissingOriginError:
            self._notice(NOTICE_MISSING_ORIGIN)
        except NoRouteFoundError:
            self._notice(NOTICE_NO_ROUTE)
        except ProviderError as e:
            self.logger.log("Directions failed", {"error": str(e)})
            self._notice(NOTICE_DIRECTIONS_FAILED)
        return None

    def next_step(self) -> bool:
        return self.navigation.next_step()

    def previous_step(self) -> bool:
        return self.navigation.previous_step()

    def stop(self):
        """End guidance and forget the manual start point"""
        self.navigation.stop()
        self.position.manual.clear()

    def close(self):
        self.stop()
        self.logger.close()

    def get_state(self) -> dict:
        """Current state as dict for logging and surfaces"""
        state = {
            "category": self.category,
            "query": self.search.query,
            "search_status": self.search.status.value,
            "results": len(self.search.results),
            "selected": self.selected.name if self.selected else None,
            "position": self.position.get_status(),
        }
        state.update(self.navigation.state.progress())
        return state

    def _notice(self, message: str):
        self.last_notice = message
        self.logger.log("Notice", {"message": message})
        self.surface.notice(message)

    def _on_navigation_change(self, state: NavigationState):
        if state.route is None:
            if self._shown_route is not None:
                self._shown_route = None
                self.surface.clear()
            return
        if state.route is not self._shown_route:
            self._shown_route = state.route
            self.surface.show_route(state.route)
        self.surface.show_progress(state.progress())
