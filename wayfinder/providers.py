"""Mapbox geocoding and directions clients.

Both clients return plain dicts in the engine's provider shape, so the
search and planning layers never see Mapbox field names:

    geocode(...) -> {"results": [{"id", "display_name", "center": [lon, lat]}]}
    route(...)   -> {"routes": [{"distance_meters", "duration_seconds",
                                 "geometry", "steps": [{"instruction",
                                 "distance_meters", "geometry"}]}]}

Any other object with async ``geocode`` / ``route`` methods of the same
shape can stand in for them (tests use in-memory stubs).
"""

import asyncio
from typing import Optional
from urllib.parse import quote

import requests

from .config import CONFIG, MAPBOX_ACCESS_TOKEN
from .errors import ProviderConfigError, ProviderError, ProviderResponseError
from .models import Coordinates

# Directions codes that mean "the provider worked, there is just no route"
NO_ROUTE_CODES = {"NoRoute", "NoSegment"}


class _MapboxClient:
    """Shared HTTP plumbing for the Mapbox APIs"""

    def __init__(self, access_token: Optional[str] = None, timeout: Optional[float] = None,
                 session: Optional[requests.Session] = None):
        self.access_token = access_token if access_token is not None else MAPBOX_ACCESS_TOKEN
        if not self.access_token:
            raise ProviderConfigError("MAPBOX_ACCESS_TOKEN is not set")
        self.timeout = timeout if timeout is not None else CONFIG["http_timeout"]
        self.session = session

    def _get_json(self, url: str, params: dict, accept_status: tuple[int, ...] = ()) -> dict:
        params = dict(params, access_token=self.access_token)
        getter = self.session.get if self.session else requests.get
        try:
            response = getter(url, params=params, timeout=self.timeout)
            if response.status_code not in accept_status:
                response.raise_for_status()
        except requests.RequestException as e:
            detail = str(e).replace(self.access_token, "***")
            raise ProviderError(f"Request to {url} failed: {detail}") from e
        try:
            data = response.json()
        except ValueError as e:
            raise ProviderResponseError(f"Invalid JSON from {url}") from e
        if not isinstance(data, dict):
            raise ProviderResponseError(f"Unexpected payload type {type(data).__name__}")
        return data


class MapboxGeocoder(_MapboxClient):
    """Forward geocoding via the Mapbox Places API"""

    def __init__(self, access_token: Optional[str] = None, timeout: Optional[float] = None,
                 session: Optional[requests.Session] = None,
                 base_url: Optional[str] = None):
        super().__init__(access_token, timeout, session)
        self.base_url = base_url or CONFIG["geocoding_url"]

    def geocode_sync(self, query: str, proximity: Coordinates,
                     limit: int = CONFIG["search_result_limit"]) -> dict:
        """Blocking geocode call, normalized to the engine's result shape"""
        url = f"{self.base_url}/{quote(query, safe='')}.json"
        data = self._get_json(url, {
            "proximity": f"{proximity.lon},{proximity.lat}",
            "limit": limit,
        })
        results = []
        try:
            for feature in data.get("features", []):
                lon, lat = feature["center"]
                results.append({
                    "id": str(feature["id"]),
                    "display_name": feature["place_name"],
                    "center": [float(lon), float(lat)],
                })
        except (KeyError, TypeError, ValueError) as e:
            raise ProviderResponseError(f"Malformed geocoding feature: {e}") from e
        return {"results": results}

    async def geocode(self, query: str, proximity: Coordinates,
                      limit: int = CONFIG["search_result_limit"]) -> dict:
        return await asyncio.to_thread(self.geocode_sync, query, proximity, limit)


class OfflineGeocoder:
    """Geocoder used when no access token is configured: catalog-only search"""

    async def geocode(self, query: str, proximity: Coordinates,
                      limit: int = CONFIG["search_result_limit"]) -> dict:
        return {"results": []}


class MapboxDirections(_MapboxClient):
    """Walking directions via the Mapbox Directions API"""

    def __init__(self, access_token: Optional[str] = None, timeout: Optional[float] = None,
                 session: Optional[requests.Session] = None,
                 base_url: Optional[str] = None):
        super().__init__(access_token, timeout, session)
        self.base_url = base_url or CONFIG["directions_url"]

    def route_sync(self, origin: Coordinates, destination: Coordinates,
                   profile: str = CONFIG["walking_profile"]) -> dict:
        """Blocking directions call, normalized to the engine's route shape"""
        url = (f"{self.base_url}/{profile}/"
               f"{origin.lon},{origin.lat};{destination.lon},{destination.lat}")
        # 422 carries NoSegment when a point is too far from any walkable way
        data = self._get_json(url, {"geometries": "geojson", "steps": "true"},
                              accept_status=(422,))
        code = data.get("code", "Ok")
        if code in NO_ROUTE_CODES:
            return {"routes": []}
        if code != "Ok":
            raise ProviderError(f"Directions provider returned {code}: {data.get('message', '')}")

        routes = []
        try:
            for raw in data.get("routes", []):
                steps = []
                for leg in raw.get("legs", [])[:1]:
                    for step in leg.get("steps", []):
                        steps.append({
                            "instruction": step["maneuver"]["instruction"],
                            "distance_meters": float(step["distance"]),
                            "geometry": step.get("geometry"),
                        })
                routes.append({
                    "distance_meters": float(raw["distance"]),
                    "duration_seconds": float(raw["duration"]),
                    "geometry": raw.get("geometry"),
                    "steps": steps,
                })
        except (KeyError, TypeError, ValueError) as e:
            raise ProviderResponseError(f"Malformed directions route: {e}") from e
        return {"routes": routes}

    async def route(self, origin: Coordinates, destination: Coordinates,
                    profile: str = CONFIG["walking_profile"]) -> dict:
        return await asyncio.to_thread(self.route_sync, origin, destination, profile)
