"""Position sources: device GPS, fixed points and the manual start point."""

import json
import subprocess
import time
from typing import Optional

from .models import Coordinates


class GPS:
    """Device position from ``termux-location``.

    Each failed read bumps ``consecutive_failures`` and records why in
    ``last_error`` (the command's stderr where it printed one), which
    ``get_status`` reports until the next good fix.
    """

    COMMAND = ["termux-location", "-p", "gps", "-r", "once"]

    def __init__(self, command: Optional[list] = None):
        self.command = command or list(self.COMMAND)
        self.last_location: Optional[Coordinates] = None
        self.last_error: Optional[str] = None
        self.consecutive_failures = 0

    def get_location(self, timeout: int = 30) -> Optional[Coordinates]:
        """One fix from the device, None when unavailable"""
        try:
            result = subprocess.run(self.command, capture_output=True, text=True, timeout=timeout)
        except subprocess.TimeoutExpired:
            return self._fail(f"no fix within {timeout}s")
        except FileNotFoundError:
            return self._fail(f"{self.command[0]} not installed")

        if result.returncode != 0 or not result.stdout.strip():
            return self._fail(result.stderr.strip() or f"exit status {result.returncode}")
        try:
            data = json.loads(result.stdout)
            location = Coordinates(lat=float(data["latitude"]), lon=float(data["longitude"]),
                                   accuracy=data.get("accuracy"), timestamp=time.time())
        except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            return self._fail(f"unreadable fix: {e}")

        self.last_location = location
        self.last_error = None
        self.consecutive_failures = 0
        return location

    def _fail(self, reason: str) -> None:
        self.consecutive_failures += 1
        self.last_error = reason
        return None

    def get_status(self) -> str:
        if self.consecutive_failures:
            return f"GPS: {self.consecutive_failures} failures ({self.last_error})"
        if self.last_location is None:
            return "GPS: no fix yet"
        if self.last_location.accuracy:
            return f"GPS OK, accuracy {self.last_location.accuracy:.0f}m"
        return "GPS OK"


class FixedPosition:
    """A position source pinned to one point (CLI --lat/--lon, tests)"""

    def __init__(self, location: Optional[Coordinates]):
        self.last_location = location

    def get_location(self, timeout: int = 30) -> Optional[Coordinates]:
        return self.last_location

    def get_status(self) -> str:
        return "Fixed position" if self.last_location else "No position"


class ManualStartPoint:
    """A start point placed by the user on the map.

    Placing a point is ignored while a route is being followed, so the origin
    of an active route cannot shift under it.
    """

    def __init__(self):
        self.point: Optional[Coordinates] = None

    def place(self, point: Coordinates, navigating: bool = False) -> bool:
        """Set the start point; False if refused because navigation is active"""
        if navigating:
            return False
        self.point = point
        return True

    def clear(self):
        self.point = None


class PositionResolver:
    """Picks the origin for a route: manual start point first, then the device"""

    def __init__(self, device=None, manual: Optional[ManualStartPoint] = None):
        self.device = device
        self.manual = manual or ManualStartPoint()

    def current(self, timeout: int = 10) -> Optional[Coordinates]:
        if self.manual.point is not None:
            return self.manual.point
        if self.device is None:
            return None
        return self.device.get_location(timeout=timeout)

    def get_status(self) -> str:
        if self.manual.point is not None:
            return "Manual start point"
        if self.device is not None and hasattr(self.device, "get_status"):
            return self.device.get_status()
        return "No position source"
