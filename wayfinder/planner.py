"""Route Planner: walking directions normalized into Route aggregates."""

from typing import Optional, Union

from .config import CONFIG
from .errors import ProviderResponseError
from .logger import Logger
from .models import Coordinates, Location, Route, RouteStep, SOURCE_GEOCODED


def pin_location(coords: Coordinates) -> Location:
    """Wrap a bare coordinate as a destination Location"""
    return Location(
        id=f"pin-{coords.lat:.6f},{coords.lon:.6f}",
        name="Dropped pin",
        category="searched",
        type="searched",
        coordinates=Coordinates(lat=coords.lat, lon=coords.lon),
        icon_key="LOCATION",
        source=SOURCE_GEOCODED,
    )


def build_route(origin: Coordinates, destination: Location, payload: dict) -> Optional[Route]:
    """Turn a provider route response into a Route, or None if it has no routes.

    The first route is used. Steps are kept exactly as the provider ordered
    them.
    """
    try:
        routes = payload["routes"]
        if not routes:
            return None
        raw = routes[0]
        steps = tuple(
            RouteStep(
                instruction=str(step["instruction"]),
                distance_meters=float(step["distance_meters"]),
                geometry_segment=step.get("geometry"),
            )
            for step in raw["steps"]
        )
        return Route(
            origin=origin,
            destination=destination,
            distance_meters=float(raw["distance_meters"]),
            duration_seconds=float(raw["duration_seconds"]),
            steps=steps,
            geometry=raw.get("geometry"),
        )
    except (KeyError, TypeError, ValueError, IndexError) as e:
        raise ProviderResponseError(f"Malformed directions response: {e}") from e


class RoutePlanner:
    """Requests walking routes from a directions provider.

    No caching and no retry: two identical calls are two provider requests.
    Transport failures propagate; "no viable route" comes back as ``None``.
    """

    def __init__(self, directions, profile: Optional[str] = None,
                 logger: Optional[Logger] = None):
        self.directions = directions
        self.profile = profile or CONFIG["walking_profile"]
        self.logger = (logger or Logger(echo=False)).scoped("planner")

    async def plan_route(self, origin: Coordinates,
                         destination: Union[Location, Coordinates]) -> Optional[Route]:
        if isinstance(destination, Coordinates):
            destination = pin_location(destination)

        self.logger.log("Planning route", {
            "origin": [origin.lat, origin.lon],
            "destination": destination.name,
        })
        payload = await self.directions.route(origin, destination.coordinates, self.profile)
        route = build_route(origin, destination, payload)

        if route is None:
            self.logger.log("No route found", {"destination": destination.name})
            return None
        if not route.steps:
            raise ProviderResponseError("Directions route has no steps")

        self.logger.log("Route planned", {
            "distance_m": round(route.distance_meters, 1),
            "duration_s": round(route.duration_seconds, 1),
            "steps": len(route.steps),
        })
        return route
