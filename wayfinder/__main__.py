#!/usr/bin/env python3
"""
Wayfinder - Campus search and turn-by-turn walking directions

Usage:
    python -m wayfinder [query] [options]

Options:
    --category CAT    Restrict catalog results (all, academic, administrative, facility)
    --list            List catalog locations (nearest first when --lat/--lon given)
    --lat LAT         Start latitude (manual start point)
    --lon LON         Start longitude (manual start point)
    --gps             Use the device position (termux-location) when no --lat/--lon
    --go              Navigate to the first result
    --preview         Print the planned route without running guidance
    --interval SECS   Seconds per automatic step (default: 10)
    --serve           Stream route and progress over a websocket
    --port PORT       Websocket port (default: 8765)
    --log FILE        Log file path (default: wayfinder_TIMESTAMP.log)

Set MAPBOX_ACCESS_TOKEN for live geocoding and directions; without it only
the campus catalog is searched.
"""

import argparse
import asyncio
import sys
from datetime import datetime

from .app import CampusMap
from .config import CONFIG, MAPBOX_ACCESS_TOKEN
from .directory import ALL_CATEGORIES
from .errors import ProviderConfigError
from .logger import Logger
from .models import Coordinates
from .position import GPS, PositionResolver
from .providers import MapboxDirections, MapboxGeocoder, OfflineGeocoder
from .surface import ConsoleSurface, WebSocketSurface


def _build_map(args, logger: Logger, surface) -> CampusMap:
    if MAPBOX_ACCESS_TOKEN:
        geocoder = MapboxGeocoder()
        directions = MapboxDirections()
    else:
        geocoder = OfflineGeocoder()
        directions = None

    position = PositionResolver(device=GPS() if args.gps else None)
    campus = CampusMap(geocoder, directions, position=position, surface=surface,
                       logger=logger, interval=args.interval)
    campus.category = args.category
    if args.lat is not None:
        campus.place_start_point(Coordinates(lat=args.lat, lon=args.lon))
    return campus


async def _guide(campus: CampusMap, destination, preview: bool) -> int:
    route = await campus.navigate_to(destination)
    if route is None:
        return 1

    if preview:
        for i, step in enumerate(route.steps):
            print(f"  {i + 1}. {step.instruction} ({step.distance_meters:.0f} m)")
        campus.stop()
        return 0

    # Automatic advancement carries the session to the final step
    try:
        while campus.navigation.timer_armed:
            await asyncio.sleep(0.2)
        await asyncio.sleep(campus.navigation.interval)
    finally:
        campus.stop()
    return 0


async def _run(args, campus: CampusMap) -> int:
    if args.list:
        origin = await campus.current_origin()
        locations = campus.directory.find(args.category)
        if origin:
            locations = campus.directory.nearest(origin, limit=len(locations), category=args.category)
        campus.surface.show_results(locations, origin)
        return 0

    results = await campus.find(args.query or "")
    if not args.go and not args.preview:
        return 0
    if not results:
        return 1
    if campus.planner.directions is None:
        print("Directions need MAPBOX_ACCESS_TOKEN")
        return 1
    return await _guide(campus, results[0], args.preview)


def main():
    parser = argparse.ArgumentParser(
        description="Wayfinder - Campus search and turn-by-turn walking directions"
    )
    parser.add_argument("query", nargs="?", default="",
                        help="Place to search for (catalog name, type or faculty)")
    parser.add_argument("--category", default=ALL_CATEGORIES,
                        choices=[ALL_CATEGORIES, "academic", "administrative", "facility", "searched"],
                        help="Catalog category filter (default: all)")
    parser.add_argument("--list", action="store_true",
                        help="List catalog locations")
    parser.add_argument("--lat", type=float, metavar="LAT",
                        help="Start latitude")
    parser.add_argument("--lon", type=float, metavar="LON",
                        help="Start longitude")
    parser.add_argument("--gps", action="store_true",
                        help="Use device GPS (termux-location) for the start point")
    parser.add_argument("--go", action="store_true",
                        help="Navigate to the first result")
    parser.add_argument("--preview", action="store_true",
                        help="Print the planned route without guidance")
    parser.add_argument("--interval", type=float, default=CONFIG["auto_advance_interval"],
                        help="Seconds per automatic step (default: %(default)s)")
    parser.add_argument("--serve", action="store_true",
                        help="Stream route and progress over a websocket")
    parser.add_argument("--port", type=int, default=CONFIG["surface_port"],
                        help="Websocket port (default: %(default)s)")
    parser.add_argument("--log", metavar="FILE",
                        help="Log file path (default: wayfinder_TIMESTAMP.log)")

    args = parser.parse_args()

    # Validate lat/lon - must provide both or neither
    if (args.lat is None) != (args.lon is None):
        parser.error("--lat and --lon must be used together")
    if (args.go or args.preview) and not args.query:
        parser.error("--go and --preview need a query")

    log_path = args.log
    if not log_path:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_path = f"wayfinder_{timestamp}.log"

    surface = ConsoleSurface()
    if args.serve:
        surface = WebSocketSurface(port=args.port)
        surface.start()
    logger = Logger(log_path, callback=surface.send_log, echo=False)

    try:
        campus = _build_map(args, logger, surface)
    except ProviderConfigError as e:
        print(f"Provider setup failed: {e}")
        sys.exit(1)

    async def run() -> int:
        if isinstance(surface, WebSocketSurface):
            surface.attach(asyncio.get_running_loop(), campus.place_start_point)
        return await _run(args, campus)

    try:
        code = asyncio.run(run())
    except KeyboardInterrupt:
        code = 130
    finally:
        campus.close()
        if isinstance(surface, WebSocketSurface):
            surface.stop()
    sys.exit(code)


if __name__ == "__main__":
    main()
