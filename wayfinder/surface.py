"""Rendering surfaces: where route geometry and step progress get displayed.

The engine only writes to a surface. A surface may hand user input back
(a start point placed on the map) through a callback, never by being read.
"""

import asyncio
import json
import queue
import threading
import time
from typing import Callable, Iterable, Optional

import websockets

from .config import CONFIG
from .models import Coordinates, Location, Route


class ConsoleSurface:
    """Prints route summaries and the current step to stdout"""

    def __init__(self, out=print):
        self.out = out
        self._last_step: Optional[int] = None

    def show_results(self, locations: Iterable[Location], origin: Optional[Coordinates] = None):
        locations = list(locations)
        if not locations:
            self.out("No results")
            return
        for loc in locations:
            distance = f" ({loc.distance_from(origin)} m)" if origin else ""
            self.out(f"  {loc.icon} [{loc.id}] {loc.name} - {loc.category}{distance}")

    def show_route(self, route: Route):
        summary = route.summary()
        self.out(f"Route to {summary['destination']}: {summary['distance']}, "
                 f"{summary['duration']}, {summary['steps']} steps")
        self._last_step = None

    def show_progress(self, progress: dict):
        if progress.get("step_count", 0) == 0:
            self._last_step = None
            return
        index = progress["step_index"]
        if index == self._last_step:
            return
        self._last_step = index
        self.out(f"  Step {index + 1}/{progress['step_count']}: {progress['instruction']} "
                 f"({progress['step_distance_m']:.0f} m)")

    def notice(self, message: str):
        self.out(f"! {message}")

    def clear(self):
        self._last_step = None
        self.out("Navigation ended")

    def send_log(self, message: str, data: Optional[dict] = None):
        """Ignored: the logger already echoes to stdout"""


class WebSocketSurface:
    """Streams engine output as JSON to websocket clients.

    Outbound messages: ``route``, ``progress``, ``results``, ``notice``,
    ``clear``, ``log``. Inbound: ``{"type": "start_point", "data": {"lat",
    "lon"}}`` places a manual start point. The server runs its own event loop
    in a background thread; inbound points are handed to ``on_start_point``
    on the caller's loop when one is attached, else queued.
    """

    def __init__(self, port: Optional[int] = None, host: str = "localhost"):
        self.port = port if port is not None else CONFIG["surface_port"]
        self.host = host
        self.start_points: queue.Queue = queue.Queue()
        self.connected_clients: set = set()
        self.ws_loop: Optional[asyncio.AbstractEventLoop] = None
        self.ws_thread: Optional[threading.Thread] = None
        self._running = False
        self._ready = threading.Event()
        self._on_start_point: Optional[Callable[[Coordinates], None]] = None
        self._target_loop: Optional[asyncio.AbstractEventLoop] = None

    def attach(self, loop: asyncio.AbstractEventLoop, on_start_point: Callable[[Coordinates], None]):
        """Deliver inbound start points to ``on_start_point`` on ``loop``"""
        self._target_loop = loop
        self._on_start_point = on_start_point

    def start(self, wait: float = 2.0):
        """Start the websocket server in a background thread"""
        self._running = True
        self.ws_thread = threading.Thread(target=self._run_ws_server, daemon=True)
        self.ws_thread.start()
        self._ready.wait(wait)
        print(f"Surface streaming on ws://{self.host}:{self.port}")

    def stop(self):
        self._running = False

    def _run_ws_server(self):
        self.ws_loop = asyncio.new_event_loop()
        asyncio.set_event_loop(self.ws_loop)

        async def handler(websocket):
            self.connected_clients.add(websocket)
            try:
                async for message in websocket:
                    self._handle_inbound(message)
            finally:
                self.connected_clients.discard(websocket)

        async def main():
            async with websockets.serve(handler, self.host, self.port):
                self._ready.set()
                while self._running:
                    await asyncio.sleep(0.1)

        try:
            self.ws_loop.run_until_complete(main())
        except OSError as e:
            print(f"WebSocket surface error: {e}")
        finally:
            self._ready.set()

    def _handle_inbound(self, message: str):
        try:
            data = json.loads(message)
        except json.JSONDecodeError:
            return
        if data.get("type") != "start_point":
            return
        try:
            point = Coordinates(lat=float(data["data"]["lat"]), lon=float(data["data"]["lon"]),
                                accuracy=0, timestamp=time.time())
        except (KeyError, TypeError, ValueError):
            return
        if self._target_loop and self._on_start_point:
            self._target_loop.call_soon_threadsafe(self._on_start_point, point)
        else:
            self.start_points.put(point)

    def get_start_point(self, timeout: float = 30) -> Optional[Coordinates]:
        """Block until a client places a start point"""
        try:
            return self.start_points.get(timeout=timeout)
        except queue.Empty:
            return None

    def _send_message(self, msg_type: str, data):
        """Send a message to all connected clients"""
        if not self.connected_clients or not self.ws_loop:
            return

        message = json.dumps({"type": msg_type, "data": data}, default=str)

        async def send_to_all():
            for client in list(self.connected_clients):
                try:
                    await client.send(message)
                except websockets.ConnectionClosed:
                    self.connected_clients.discard(client)

        asyncio.run_coroutine_threadsafe(send_to_all(), self.ws_loop)

    def show_results(self, locations: Iterable[Location], origin: Optional[Coordinates] = None):
        payload = []
        for loc in locations:
            item = loc.to_dict()
            if origin:
                item["distance_m"] = loc.distance_from(origin)
            payload.append(item)
        self._send_message("results", payload)

    def show_route(self, route: Route):
        data = route.to_dict()
        data["summary"] = route.summary()
        self._send_message("route", data)

    def show_progress(self, progress: dict):
        self._send_message("progress", progress)

    def notice(self, message: str):
        self._send_message("notice", {"message": message})

    def clear(self):
        self._send_message("clear", {})

    def send_log(self, message: str, data: Optional[dict] = None):
        self._send_message("log", {"message": message, "data": data})
