#!/usr/bin/env python3
"""
Cargo Port Simulator - CLI Entry Point

Usage:
    python main.py                              # Run the demo port for 60 minutes
    python main.py --minutes 120                # Simulate two hours
    python main.py --load saves/port.txt        # Start from a snapshot file
    python main.py --save saves/after.txt       # Write a snapshot when done
    python main.py --print-snapshot             # Print the final snapshot
    python main.py --verbose                    # Log every dock, unload and movement
    python main.py --web                        # Launch the web inspection API
"""

import argparse
import logging
import sys

from portsim.config.constants import DEFAULT_SIMULATION_MINUTES, WEB_HOST, WEB_PORT
from portsim.data_collection.demo_data import build_demo_port
from portsim.services.simulation import load_port, run_simulation, save_port, summarize_port
from portsim.utils.exceptions import BadEncodingError
from portsim.utils.logger import set_level
from portsim.utils.registry import Registry


def print_summary(summary: dict):
    """Print a human-readable overview of the port state."""
    print("=" * 50)
    print(f"  {summary['name'].upper()} at t={summary['time']}")
    print("=" * 50)
    print()

    print("Quays:")
    for quay in summary["quays"]:
        ship = quay["ship"]
        occupant = f"{ship['name']} ({ship['imo_number']})" if ship else "empty"
        print(f"  {quay['kind']:<14} {quay['id']:>3}  cap {quay['capacity']:>5}  {occupant}")
    print()

    print(f"Queue ({len(summary['queue'])} ship(s)):")
    for ship in summary["queue"]:
        marker = "->" if ship["imo_number"] == summary["next_to_dock"] else "  "
        print(f"  {marker} {ship['name']:<12} {ship['kind']:<9} [{ship['flag']}] from {ship['origin']}")
    print()

    print(f"Warehouse ({len(summary['warehouse'])} item(s)):")
    for item in summary["warehouse"]:
        print(f"  {item}")
    print()

    print(f"Pending movements: {len(summary['pending_movements'])}")
    for movement in summary["pending_movements"]:
        print(f"  {movement}")
    print()

    for name, stats in summary["evaluators"].items():
        print(name)
        for key, value in stats.items():
            print(f"  {key}: {value}")


def launch_web():
    """Launch the web inspection API."""
    try:
        import uvicorn
    except ImportError:
        print("FastAPI and uvicorn required.")
        print('Install with: pip install "portsim[web]"')
        return

    print(f"Launching web API at http://localhost:{WEB_PORT}")
    print("Press Ctrl+C to stop.")
    uvicorn.run("portsim.web.app:app", host=WEB_HOST, port=WEB_PORT, reload=True)


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Cargo Port Simulator -- minute-by-minute port operations",
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--load", type=str, default=None, help="Snapshot file to start from")
    source.add_argument("--demo", action="store_true", help="Use the built-in demo port (default)")
    parser.add_argument(
        "--minutes", type=int, default=DEFAULT_SIMULATION_MINUTES,
        help=f"Minutes to simulate (default: {DEFAULT_SIMULATION_MINUTES})",
    )
    parser.add_argument("--save", type=str, default=None, help="Write a snapshot to this file")
    parser.add_argument("--print-snapshot", action="store_true", help="Print the final snapshot")
    parser.add_argument("--verbose", action="store_true", help="Log every tick event")
    parser.add_argument("--web", action="store_true", help="Launch web inspection API")

    args = parser.parse_args(argv)

    if args.minutes < 0:
        parser.error("--minutes must be non-negative")

    if args.verbose:
        set_level(logging.DEBUG)

    if args.web:
        launch_web()
        return 0

    registry = Registry()
    try:
        if args.load:
            port = load_port(args.load, registry)
        else:
            port = build_demo_port(registry)
    except (BadEncodingError, OSError) as e:
        print(f"Error loading port: {e}")
        return 1

    run_simulation(port, args.minutes)
    print_summary(summarize_port(port))

    if args.print_snapshot:
        print()
        print(port.encode())

    if args.save:
        try:
            save_port(port, args.save)
        except OSError as e:
            print(f"Error saving port: {e}")
            return 1
        print(f"\nSnapshot saved to {args.save}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
