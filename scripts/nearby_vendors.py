"""
Command-line lookup of nearby shops with delivery ETAs.

Talks to the managed storefront backend configured by DIRECTORY_BASE_URL
(.env is read) and prints the same payload the HTTP endpoint returns.

Usage:
    python scripts/nearby_vendors.py --lat 28.6139 --lng 77.2090
    python scripts/nearby_vendors.py --lat 28.6139 --lng 77.2090 --radius-km 5

Exit Codes:
    0: Success
    1: Invalid location / radius
    2: Shop directory unavailable
"""

import argparse
import json
import logging
import os
import sys
from typing import List, Optional

# Ensure the repo root packages are importable when run as a script
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from routing.distance import Coordinate, InvalidCoordinateError
from vendors.directory import DirectoryUnavailableError, HttpVendorDirectory
from vendors.nearby import InvalidRadiusError, get_nearby_vendors_with_eta
from vendors.policy import policy_from_env


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Find nearby shops and their delivery ETAs")
    parser.add_argument("--lat", type=float, required=True, help="Customer latitude")
    parser.add_argument("--lng", type=float, required=True, help="Customer longitude")
    parser.add_argument("--radius-km", type=float, default=None,
                        help="Search radius in km (default: NEARBY_DEFAULT_RADIUS_KM or 2)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log per-shop fallbacks")
    return parser


def main(argv: Optional[List[str]] = None, directory=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    policy = policy_from_env()
    radius_km = args.radius_km if args.radius_km is not None else policy.default_radius_km

    try:
        result = get_nearby_vendors_with_eta(
            directory or HttpVendorDirectory(),
            Coordinate(lat=args.lat, lng=args.lng),
            radius_km,
            policy=policy,
        )
    except (InvalidCoordinateError, InvalidRadiusError) as exc:
        print(f"Invalid input: {exc}", file=sys.stderr)
        return 1
    except DirectoryUnavailableError as exc:
        print(f"Shop directory unavailable: {exc}", file=sys.stderr)
        return 2

    print(json.dumps({
        "vendors": [vendor.to_dict() for vendor in result.vendors],
        "count": result.count,
        "userLocation": result.origin.as_dict(),
        "radiusKm": result.radius_km,
        "peakHour": result.peak_hour,
    }, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
