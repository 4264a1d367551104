"""Shared pytest fixtures & helpers.

Adds project root to path and provides in-memory providers, a manual-clock
scheduler and a small catalog so tests never touch the network or wait on
real timers.
"""
from __future__ import annotations

import asyncio
import os
import sys

import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from wayfinder.directory import LocationDirectory
from wayfinder.models import Coordinates, Location


# --- Factory helpers -------------------------------------------------
def make_location(loc_id, name, category="facility", type_="library", faculty="General",
                  lat=6.3990, lon=5.6100):
    return Location(
        id=loc_id,
        name=name,
        category=category,
        type=type_,
        coordinates=Coordinates(lat=lat, lon=lon),
        faculty=faculty,
        icon_key="LIBRARY",
    )


def make_route_payload(step_count=3, distance=500.0, duration=400.0):
    per_step = distance / step_count if step_count else 0
    return {
        "routes": [{
            "distance_meters": distance,
            "duration_seconds": duration,
            "geometry": {"type": "LineString", "coordinates": [[5.61, 6.40], [5.6137, 6.3996]]},
            "steps": [
                {"instruction": f"Step {i + 1}", "distance_meters": per_step, "geometry": None}
                for i in range(step_count)
            ],
        }]
    }


def make_geocode_result(result_id, display_name, lon=5.6101, lat=6.3991):
    return {"id": result_id, "display_name": display_name, "center": [lon, lat]}


class StubGeocoder:
    """Answers from a query -> results table; optional gates hold a query open"""

    def __init__(self, table=None, error=None):
        self.table = table or {}
        self.error = error
        self.calls: list[tuple] = []
        self.gates: dict[str, asyncio.Event] = {}

    def hold(self, query_prefix):
        """Block geocode calls whose query starts with ``query_prefix`` until released"""
        gate = asyncio.Event()
        self.gates[query_prefix] = gate
        return gate

    async def geocode(self, query, proximity, limit=5):
        self.calls.append((query, proximity, limit))
        for prefix, gate in self.gates.items():
            if query.startswith(prefix + " ") or query == prefix:
                await gate.wait()
        if self.error:
            raise self.error
        key = query.split(" University of Benin")[0]
        return {"results": list(self.table.get(key, []))}


class StubDirections:
    """Returns a fixed payload (or raises) and records each request"""

    def __init__(self, payload=None, error=None):
        self.payload = payload if payload is not None else make_route_payload()
        self.error = error
        self.calls: list[tuple] = []
        self.gate: asyncio.Event | None = None

    async def route(self, origin, destination, profile="walking"):
        self.calls.append((origin, destination, profile))
        if self.gate is not None:
            await self.gate.wait()
        if self.error:
            raise self.error
        return self.payload


class FakeHandle:
    def __init__(self, when, callback):
        self.when = when
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self):
        self.cancelled = True


class ManualScheduler:
    """call_later() against a clock that only moves when advance() is called"""

    def __init__(self):
        self.now = 0.0
        self.handles: list[FakeHandle] = []

    def call_later(self, delay, callback):
        handle = FakeHandle(self.now + delay, callback)
        self.handles.append(handle)
        return handle

    def pending(self):
        return [h for h in self.handles if not h.cancelled and not h.fired]

    def advance(self, seconds):
        target = self.now + seconds
        while True:
            due = [h for h in self.pending() if h.when <= target]
            if not due:
                break
            handle = min(due, key=lambda h: h.when)
            self.now = handle.when
            handle.fired = True
            handle.callback()
        self.now = target


class RecordingSurface:
    def __init__(self):
        self.events: list[tuple] = []

    def show_results(self, locations, origin=None):
        self.events.append(("results", [loc.id for loc in locations]))

    def show_route(self, route):
        self.events.append(("route", route))

    def show_progress(self, progress):
        self.events.append(("progress", progress["step_index"]))

    def notice(self, message):
        self.events.append(("notice", message))

    def clear(self):
        self.events.append(("clear", None))

    def send_log(self, message, data=None):
        pass

    def of_kind(self, kind):
        return [payload for k, payload in self.events if k == kind]


# --- Fixtures --------------------------------------------------------
@pytest.fixture
def small_catalog():
    return [
        make_location(1, "Library", category="facility", type_="library"),
        make_location(2, "Faculty of Engineering", category="academic", type_="faculty",
                      faculty="Engineering", lat=6.4019, lon=5.6152),
        make_location(3, "Bursary", category="administrative", type_="administrative",
                      lat=6.3975, lon=5.6147),
        make_location(4, "Computer Science Department", category="academic", type_="department",
                      faculty="Physical Sciences", lat=6.4008, lon=5.6178),
        make_location(5, "Library Annex", category="facility", type_="library",
                      lat=6.3345, lon=5.5989),
    ]


@pytest.fixture
def directory(small_catalog):
    return LocationDirectory(small_catalog)


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def origin():
    return Coordinates(lat=6.40, lon=5.61)
