import asyncio

import pytest

from conftest import StubDirections, make_route_payload

from wayfinder.errors import ProviderError, ProviderResponseError
from wayfinder.models import Coordinates
from wayfinder.planner import RoutePlanner, build_route, pin_location


def test_plan_route_builds_route_in_provider_order(small_catalog, origin):
    directions = StubDirections(make_route_payload(step_count=3, distance=500, duration=400))
    planner = RoutePlanner(directions)

    route = asyncio.run(planner.plan_route(origin, small_catalog[0]))

    assert route.origin == origin
    assert route.destination.name == "Library"
    assert route.distance_meters == 500
    assert route.duration_seconds == 400
    assert [s.instruction for s in route.steps] == ["Step 1", "Step 2", "Step 3"]
    assert route.last_step_index == 2
    assert directions.calls == [(origin, small_catalog[0].coordinates, "walking")]


def test_no_routes_returns_none(small_catalog, origin):
    planner = RoutePlanner(StubDirections({"routes": []}))
    assert asyncio.run(planner.plan_route(origin, small_catalog[0])) is None


def test_route_without_steps_is_rejected(small_catalog, origin):
    planner = RoutePlanner(StubDirections(make_route_payload(step_count=0)))
    with pytest.raises(ProviderResponseError):
        asyncio.run(planner.plan_route(origin, small_catalog[0]))


def test_malformed_payload_raises_response_error(small_catalog, origin):
    planner = RoutePlanner(StubDirections({"routes": [{"steps": []}]}))
    with pytest.raises(ProviderResponseError):
        asyncio.run(planner.plan_route(origin, small_catalog[0]))


def test_transport_failure_propagates(small_catalog, origin):
    planner = RoutePlanner(StubDirections(error=ProviderError("connection reset")))
    with pytest.raises(ProviderError):
        asyncio.run(planner.plan_route(origin, small_catalog[0]))


def test_identical_requests_are_not_cached(small_catalog, origin):
    directions = StubDirections()
    planner = RoutePlanner(directions)

    asyncio.run(planner.plan_route(origin, small_catalog[0]))
    asyncio.run(planner.plan_route(origin, small_catalog[0]))

    assert len(directions.calls) == 2


def test_bare_coordinates_become_a_pin(origin):
    directions = StubDirections()
    planner = RoutePlanner(directions, profile="walking")
    target = Coordinates(lat=6.3996, lon=5.6137)

    route = asyncio.run(planner.plan_route(origin, target))

    assert route.destination.name == "Dropped pin"
    assert route.destination.coordinates == target
    assert directions.calls[0][1] == target


def test_build_route_keeps_step_geometry(small_catalog, origin):
    payload = make_route_payload(step_count=2)
    payload["routes"][0]["steps"][1]["geometry"] = {"type": "LineString", "coordinates": [[5.61, 6.4]]}

    route = build_route(origin, small_catalog[0], payload)

    assert route.steps[0].geometry_segment is None
    assert route.steps[1].geometry_segment["type"] == "LineString"


def test_pin_location_id_is_stable():
    point = Coordinates(lat=6.4, lon=5.61)
    assert pin_location(point).id == pin_location(point).id
