import asyncio
from dataclasses import replace

import pytest

from conftest import StubDirections, make_route_payload

from wayfinder.errors import MissingOriginError, NoRouteFoundError, ProviderError
from wayfinder.models import SessionStatus
from wayfinder.navigation import (
    IDLE,
    NavigationSession,
    advance_step,
    begin,
    retreat_step,
)
from wayfinder.planner import RoutePlanner, build_route


def make_session(scheduler, payload=None, interval=10, **kwargs):
    directions = StubDirections(payload if payload is not None else make_route_payload(step_count=4))
    session = NavigationSession(RoutePlanner(directions), interval=interval,
                                scheduler=scheduler, **kwargs)
    return session, directions


def make_route(small_catalog, origin, step_count=3):
    return build_route(origin, small_catalog[0], make_route_payload(step_count=step_count))


# --- Pure transitions ------------------------------------------------

def test_advance_and_retreat_clamp(small_catalog, origin):
    state = begin(make_route(small_catalog, origin, step_count=3))

    assert retreat_step(state) is state
    state = advance_step(advance_step(state))
    assert state.current_step_index == 2
    assert state.at_final_step
    assert advance_step(state) is state
    assert retreat_step(state).current_step_index == 1


def test_transitions_ignore_idle_state():
    assert advance_step(IDLE) is IDLE
    assert retreat_step(IDLE) is IDLE
    assert IDLE.current_step is None
    assert IDLE.progress() == {"status": "idle", "step_index": 0, "step_count": 0}


def test_progress_snapshot(small_catalog, origin):
    state = advance_step(begin(make_route(small_catalog, origin, step_count=3)))
    progress = state.progress()
    assert progress["status"] == "navigating"
    assert progress["step_index"] == 1
    assert progress["step_count"] == 3
    assert progress["instruction"] == "Step 2"
    assert progress["final_step"] is False


def test_begin_rejects_empty_route(small_catalog, origin):
    route = replace(make_route(small_catalog, origin), steps=())
    with pytest.raises(ValueError):
        begin(route)


# --- Session lifecycle -----------------------------------------------

def test_start_begins_at_first_step_and_arms_timer(scheduler, small_catalog, origin):
    session, directions = make_session(scheduler)

    route = asyncio.run(session.start(origin, small_catalog[0]))

    assert route is session.route
    assert session.status is SessionStatus.NAVIGATING
    assert session.current_step_index == 0
    assert session.current_step.instruction == "Step 1"
    assert session.timer_armed
    assert len(scheduler.pending()) == 1
    assert len(directions.calls) == 1


def test_missing_origin_never_reaches_provider(scheduler, small_catalog):
    session, directions = make_session(scheduler)

    with pytest.raises(MissingOriginError):
        asyncio.run(session.start(None, small_catalog[0]))

    assert directions.calls == []
    assert session.status is SessionStatus.IDLE


def test_no_route_leaves_session_idle(scheduler, small_catalog, origin):
    session, _ = make_session(scheduler, payload={"routes": []})

    with pytest.raises(NoRouteFoundError):
        asyncio.run(session.start(origin, small_catalog[0]))

    assert session.status is SessionStatus.IDLE
    assert session.route is None
    assert not session.timer_armed


def test_provider_failure_propagates_and_keeps_current_route(scheduler, small_catalog, origin):
    session, directions = make_session(scheduler)
    first = asyncio.run(session.start(origin, small_catalog[0]))

    directions.error = ProviderError("timeout")
    with pytest.raises(ProviderError):
        asyncio.run(session.start(origin, small_catalog[1]))

    assert session.route is first
    assert session.timer_armed


def test_auto_advance_stops_itself_at_final_step(scheduler, small_catalog, origin):
    session, _ = make_session(scheduler)
    asyncio.run(session.start(origin, small_catalog[0]))

    for expected in (1, 2, 3):
        scheduler.advance(10)
        assert session.current_step_index == expected

    assert not session.timer_armed
    assert scheduler.pending() == []
    assert session.status is SessionStatus.NAVIGATING

    scheduler.advance(100)
    assert session.current_step_index == 3


def test_manual_step_restarts_cadence_without_double_advance(scheduler, small_catalog, origin):
    session, _ = make_session(scheduler)
    asyncio.run(session.start(origin, small_catalog[0]))

    scheduler.advance(9.9)
    assert session.next_step()
    assert session.current_step_index == 1

    # The original deadline at t=10 must not fire
    scheduler.advance(0.2)
    assert session.current_step_index == 1
    assert len(scheduler.pending()) == 1

    scheduler.advance(10)
    assert session.current_step_index == 2


def test_manual_steps_clamp_and_report(scheduler, small_catalog, origin):
    session, _ = make_session(scheduler)
    asyncio.run(session.start(origin, small_catalog[0]))

    assert not session.previous_step()
    assert session.current_step_index == 0
    for _ in range(3):
        assert session.next_step()
    assert not session.next_step()
    assert session.current_step_index == 3
    assert not session.timer_armed


def test_previous_from_final_step_rearms(scheduler, small_catalog, origin):
    session, _ = make_session(scheduler)
    asyncio.run(session.start(origin, small_catalog[0]))
    scheduler.advance(30)
    assert not session.timer_armed

    assert session.previous_step()
    assert session.current_step_index == 2
    assert session.timer_armed

    scheduler.advance(10)
    assert session.current_step_index == 3


def test_single_step_route_arms_no_timer(scheduler, small_catalog, origin):
    session, _ = make_session(scheduler, payload=make_route_payload(step_count=1))

    asyncio.run(session.start(origin, small_catalog[0]))

    assert session.status is SessionStatus.NAVIGATING
    assert session.current_step_index == 0
    assert not session.timer_armed


def test_stop_is_idempotent(scheduler, small_catalog, origin):
    session, _ = make_session(scheduler)
    session.stop()
    assert session.status is SessionStatus.IDLE

    asyncio.run(session.start(origin, small_catalog[0]))
    session.stop()
    session.stop()

    assert session.status is SessionStatus.IDLE
    assert session.route is None
    assert session.current_step_index == 0
    assert scheduler.pending() == []

    scheduler.advance(50)
    assert session.route is None


def test_new_start_replaces_route_and_cancels_old_timer(scheduler, small_catalog, origin):
    session, directions = make_session(scheduler)
    asyncio.run(session.start(origin, small_catalog[0]))
    scheduler.advance(10)
    assert session.current_step_index == 1

    directions.payload = make_route_payload(step_count=2)
    route = asyncio.run(session.start(origin, small_catalog[2]))

    assert session.route is route
    assert route.destination.name == "Bursary"
    assert session.current_step_index == 0
    assert len(scheduler.pending()) == 1

    scheduler.advance(10)
    assert session.current_step_index == 1
    assert not session.timer_armed


def test_restart_goes_through_stop(scheduler, small_catalog, origin):
    changes = []
    session, _ = make_session(scheduler, on_change=lambda state: changes.append(state.status))
    asyncio.run(session.start(origin, small_catalog[0]))

    asyncio.run(session.restart(origin, small_catalog[1]))

    assert changes == [SessionStatus.NAVIGATING, SessionStatus.IDLE, SessionStatus.NAVIGATING]
    assert session.route.destination.name == "Faculty of Engineering"


def test_stop_during_planning_voids_the_start(scheduler, small_catalog, origin):
    session, directions = make_session(scheduler)

    async def scenario():
        directions.gate = asyncio.Event()
        pending = asyncio.create_task(session.start(origin, small_catalog[0]))
        await asyncio.sleep(0)
        session.stop()
        directions.gate.set()
        return await pending

    assert asyncio.run(scenario()) is None
    assert session.status is SessionStatus.IDLE
    assert not session.timer_armed


def test_stop_voids_start_queued_behind_another(scheduler, small_catalog, origin):
    session, directions = make_session(scheduler)

    async def scenario():
        directions.gate = asyncio.Event()
        first = asyncio.create_task(session.start(origin, small_catalog[0]))
        await asyncio.sleep(0)
        second = asyncio.create_task(session.start(origin, small_catalog[1]))
        await asyncio.sleep(0)
        session.stop()
        directions.gate.set()
        return await first, await second

    assert asyncio.run(scenario()) == (None, None)
    assert session.status is SessionStatus.IDLE
    assert session.route is None
    assert not session.timer_armed
    assert scheduler.pending() == []
    assert len(directions.calls) == 1


def test_failing_listener_still_leaves_timer_armed(scheduler, small_catalog, origin):
    def listener(state):
        raise RuntimeError("surface went away")

    session, _ = make_session(scheduler, on_change=listener)

    with pytest.raises(RuntimeError):
        asyncio.run(session.start(origin, small_catalog[0]))

    assert session.status is SessionStatus.NAVIGATING
    assert session.timer_armed
    assert len(scheduler.pending()) == 1

    with pytest.raises(RuntimeError):
        session.next_step()
    assert session.current_step_index == 1
    assert len(scheduler.pending()) == 1


def test_on_change_sees_every_step(scheduler, small_catalog, origin):
    seen = []
    session, _ = make_session(scheduler, on_change=lambda state: seen.append(state.current_step_index))
    asyncio.run(session.start(origin, small_catalog[0]))

    scheduler.advance(10)
    session.next_step()
    session.previous_step()

    assert seen == [0, 1, 2, 1]


def test_real_event_loop_timer(small_catalog, origin):
    async def scenario():
        session, _ = make_session(None, payload=make_route_payload(step_count=3), interval=0.01)
        await session.start(origin, small_catalog[0])
        await asyncio.sleep(0.2)
        return session

    session = asyncio.run(scenario())

    assert session.current_step_index == 2
    assert not session.timer_armed
