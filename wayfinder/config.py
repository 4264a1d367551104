"""Configuration settings for Wayfinder."""

import os

CONFIG = {
    "auto_advance_interval": 10,  # seconds between automatic step advances
    "search_result_limit": 5,  # max geocoder results per query
    "search_debounce": 0.3,  # seconds to wait for typing to settle
    "walking_speed": 80,  # meters per minute, for coarse ETA only
    # UNIBEN main gate - biases geocoder results toward campus
    "proximity_anchor": (6.399885, 5.609032),  # (lat, lon)
    # Appended to queries that do not already name the campus
    "search_context": "University of Benin",
    "search_context_markers": ("UNIBEN", "University"),
    "walking_profile": "walking",
    "http_timeout": 15,  # seconds, per provider request
    "geocoding_url": "https://api.mapbox.com/geocoding/v5/mapbox.places",
    "directions_url": "https://api.mapbox.com/directions/v5/mapbox",
    "surface_port": 8765,  # websocket surface
}

# Provider credentials come from the environment, never from this file.
MAPBOX_ACCESS_TOKEN = os.getenv("MAPBOX_ACCESS_TOKEN", "")
