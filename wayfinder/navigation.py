"""Navigation Session: the active route, step progress and auto-advance timer.

Step movement is split into pure transitions over an immutable
``NavigationState`` (``advance_step``, ``retreat_step``) and the session
object that owns the timer and applies those transitions. The transitions
can be tested without any clock; the session only decides when to apply
them.
"""

import asyncio
from dataclasses import dataclass, replace
from typing import Callable, Optional, Union

from .config import CONFIG
from .errors import MissingOriginError, NoRouteFoundError
from .logger import Logger
from .models import Coordinates, Location, Route, RouteStep, SessionStatus


@dataclass(frozen=True)
class NavigationState:
    route: Optional[Route] = None
    current_step_index: int = 0
    status: SessionStatus = SessionStatus.IDLE

    @property
    def is_navigating(self) -> bool:
        return self.status is SessionStatus.NAVIGATING

    @property
    def current_step(self) -> Optional[RouteStep]:
        if self.route is None:
            return None
        return self.route.steps[self.current_step_index]

    @property
    def at_final_step(self) -> bool:
        return self.route is not None and self.current_step_index >= self.route.last_step_index

    def progress(self) -> dict:
        """Snapshot for the rendering surface"""
        if self.route is None:
            return {"status": self.status.value, "step_index": 0, "step_count": 0}
        step = self.current_step
        return {
            "status": self.status.value,
            "step_index": self.current_step_index,
            "step_count": len(self.route.steps),
            "instruction": step.instruction,
            "step_distance_m": step.distance_meters,
            "final_step": self.at_final_step,
        }


IDLE = NavigationState()


def begin(route: Route) -> NavigationState:
    """State for a freshly started route"""
    if not route.steps:
        raise ValueError("Cannot navigate a route without steps")
    return NavigationState(route=route, current_step_index=0, status=SessionStatus.NAVIGATING)


def advance_step(state: NavigationState) -> NavigationState:
    """One step forward; unchanged when idle or already at the final step"""
    if not state.is_navigating or state.at_final_step:
        return state
    return replace(state, current_step_index=state.current_step_index + 1)


def retreat_step(state: NavigationState) -> NavigationState:
    """One step back; unchanged when idle or at the first step"""
    if not state.is_navigating or state.current_step_index == 0:
        return state
    return replace(state, current_step_index=state.current_step_index - 1)


class NavigationSession:
    """Drives one route at a time for a single map.

    ``scheduler`` is anything with ``call_later(delay, callback)`` returning a
    handle with ``cancel()``; the running asyncio loop is used when it is not
    given. The session keeps the only reference to its timer handle, and
    arms at most one at a time: a handle exists exactly while navigating
    short of the final step.

    ``on_change`` is called with the new NavigationState after every change.
    """

    def __init__(self, planner, interval: Optional[float] = None, scheduler=None,
                 logger: Optional[Logger] = None,
                 on_change: Optional[Callable[[NavigationState], None]] = None):
        self.planner = planner
        self.interval = interval if interval is not None else CONFIG["auto_advance_interval"]
        self._scheduler = scheduler
        self.logger = (logger or Logger(echo=False)).scoped("navigation")
        self.on_change = on_change

        self.state: NavigationState = IDLE
        self._timer = None
        self._start_lock = asyncio.Lock()
        self._epoch = 0  # bumped by stop() to void in-flight starts

    # Read-only views

    @property
    def route(self) -> Optional[Route]:
        return self.state.route

    @property
    def current_step_index(self) -> int:
        return self.state.current_step_index

    @property
    def status(self) -> SessionStatus:
        return self.state.status

    @property
    def current_step(self) -> Optional[RouteStep]:
        return self.state.current_step

    @property
    def timer_armed(self) -> bool:
        return self._timer is not None

    # Lifecycle

    async def start(self, origin: Optional[Coordinates],
                    destination: Union[Location, Coordinates]) -> Optional[Route]:
        """Plan a route and begin guiding along it.

        Raises MissingOriginError without an origin and NoRouteFoundError when
        the provider has no route; both leave the session untouched, as does
        a provider failure (which propagates). Returns None if ``stop()`` was
        called while the route was being planned.
        """
        if origin is None:
            raise MissingOriginError("Enable location or set a start point first")

        # Taken before queueing on the lock so a stop() issued while waiting voids this start too
        epoch = self._epoch
        async with self._start_lock:
            if epoch != self._epoch:
                self.logger.log("Start discarded, session stopped while queued")
                return None
            route = await self.planner.plan_route(origin, destination)
            if epoch != self._epoch:
                self.logger.log("Start discarded, session stopped during planning")
                return None
            if route is None:
                raise NoRouteFoundError(f"Could not find a route to {getattr(destination, 'name', destination)}")

            # Ownership transfer: the previous route's timer dies before the new one arms
            self._cancel_timer()
            self.logger.log("Navigation started", {
                "destination": route.destination.name,
                "steps": len(route.steps),
            })
            self._set_state(begin(route))
            return route

    async def restart(self, origin: Optional[Coordinates],
                      destination: Union[Location, Coordinates]) -> Optional[Route]:
        """Stop, then start afresh"""
        self.stop()
        return await self.start(origin, destination)

    def stop(self):
        """Tear down the session. Safe from any state, any number of times."""
        self._epoch += 1
        self._cancel_timer()
        if self.state is not IDLE:
            self._set_state(IDLE)
            self.logger.log("Navigation stopped")

    # Manual stepping

    def next_step(self) -> bool:
        """Advance one step and restart the automatic cadence. False if clamped."""
        return self._manual(advance_step)

    def previous_step(self) -> bool:
        """Go back one step and restart the automatic cadence. False if clamped."""
        return self._manual(retreat_step)

    def _manual(self, transition) -> bool:
        new_state = transition(self.state)
        if new_state is self.state:
            return False
        self.logger.log("Step changed", {"step": new_state.current_step_index, "manual": True})
        self._set_state(new_state)
        return True

    # Timer

    def _arm(self):
        """Rearm: cancel any timer, then schedule a fresh one if steps remain"""
        self._cancel_timer()
        if self.state.is_navigating and not self.state.at_final_step:
            scheduler = self._scheduler or asyncio.get_running_loop()
            self._timer = scheduler.call_later(self.interval, self._on_timer)
        self._check_invariants()

    def _cancel_timer(self):
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _on_timer(self):
        self._timer = None
        new_state = advance_step(self.state)
        if new_state is not self.state:
            self.logger.log("Step changed", {"step": new_state.current_step_index, "manual": False})
            self._set_state(new_state)
        else:
            self._arm()
        if self._timer is None and self.state.is_navigating:
            self.logger.log("Final step reached, auto-advance ended")

    def _set_state(self, state: NavigationState):
        """Install ``state``, rearm for it, then notify ``on_change``"""
        self.state = state
        self._arm()
        if self.on_change:
            self.on_change(state)

    def _check_invariants(self):
        state = self.state
        if state.route is not None:
            assert 0 <= state.current_step_index <= state.route.last_step_index, "step index out of range"
        expect_timer = state.is_navigating and not state.at_final_step
        assert (self._timer is not None) == expect_timer, "timer armed in the wrong state"
