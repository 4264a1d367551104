"""Central error types used across Wayfinder."""

from __future__ import annotations


class WayfinderError(RuntimeError):
    """Base error for the wayfinding engine."""


class NavigationError(WayfinderError):
    """Base error for navigation start failures that leave the session unchanged."""


class MissingOriginError(NavigationError):
    """Raised when directions are requested without a current or manual start point."""


class NoRouteFoundError(NavigationError):
    """Raised when the directions provider answered but offered no walkable route."""


class ProviderError(WayfinderError):
    """Raised when a geocoding or directions request fails in transport."""


class ProviderResponseError(ProviderError):
    """Raised when a provider payload is missing fields or is not valid JSON."""


class ProviderConfigError(ProviderError):
    """Raised when a live provider client is built without an access token."""


__all__ = [
    "WayfinderError",
    "NavigationError",
    "MissingOriginError",
    "NoRouteFoundError",
    "ProviderError",
    "ProviderResponseError",
    "ProviderConfigError",
]
