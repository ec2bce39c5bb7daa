"""Command-line geocoding tester.

Usage:
  geocoding-tester forward "1600 Pennsylvania Avenue NW, Washington, DC"
  geocoding-tester forward "Springfield" --all
  geocoding-tester reverse 38.897 -77.036 --debug

The API key is read from GEO_API_KEY (or passed with --api-key).
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import List, Mapping, Optional, Sequence, TextIO

import pydantic

from .config import get_config
from .container import Container
from .domain.errors import ClientError, ConfigurationError
from .domain.models import Location
from .monitoring import configure_logging
from .ports.transport import HttpTransportPort
from .services import GeocodingClient


def humanize_component(key: str) -> str:
    """Turn a component token into a label: ``postal_code`` -> ``Postal Code``."""
    return key.replace("_", " ").title()


def format_location(
    location: Location,
    map_templates: Optional[Mapping[str, str]] = None,
    debug: bool = False,
) -> str:
    """Render a Location as a plain-text report."""
    lines: List[str] = [
        f"Coordinates:     {location.latitude}, {location.longitude}",
        f"Display Name:    {location.display_name}",
        "Address Components:",
    ]

    if location.address_components:
        for key, value in location.address_components.items():
            lines.append(f"  {humanize_component(key)}: {value}")
    else:
        lines.append("  No detailed address components available.")

    lines += [
        "OSM Information:",
        f"  Place ID: {location.place_id or '-'}",
        f"  OSM Type: {location.osm_type or '-'}",
        f"  OSM ID:   {location.osm_id or '-'}",
        f"License:         {location.license_text or '-'}",
    ]

    if location.has_bounding_box():
        bbox = location.bounding_box
        lines += [
            "Bounding Box:",
            f"  Min Latitude:  {bbox.min_lat}",
            f"  Max Latitude:  {bbox.max_lat}",
            f"  Min Longitude: {bbox.min_lon}",
            f"  Max Longitude: {bbox.max_lon}",
        ]

    links = location.map_links(map_templates)
    if links:
        lines.append("Map Links:")
        for service, url in links.items():
            lines.append(f"  {humanize_component(service)}: {url}")

    if debug:
        lines.append("Raw Response Data:")
        lines.append(json.dumps(location.raw_payload, indent=2, ensure_ascii=False))

    return "\n".join(lines)


def format_error(error: ClientError) -> str:
    return f"Error [{error.kind.value}]: {error.message}"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="geocoding-tester",
        description="Run forward or reverse geocoding lookups against Maps.co.",
    )
    parser.add_argument("--api-key", help="Maps.co API key (default: GEO_API_KEY)")
    parser.add_argument("--language", help="Language for the results (e.g. en, fr)")
    parser.add_argument(
        "--debug", action="store_true", help="Also print the raw response data"
    )
    subparsers = parser.add_subparsers(dest="test_type", required=True)

    forward = subparsers.add_parser("forward", help="Address to coordinates")
    forward.add_argument("address", help='Full address, e.g. "1600 Pennsylvania Avenue NW"')
    forward.add_argument(
        "--all", action="store_true", help="List every candidate, not just the first"
    )

    reverse = subparsers.add_parser("reverse", help="Coordinates to address")
    reverse.add_argument("latitude", type=float)
    reverse.add_argument("longitude", type=float)

    return parser


def run(
    args: argparse.Namespace,
    client: GeocodingClient,
    map_templates: Optional[Mapping[str, str]] = None,
    out: TextIO = sys.stdout,
) -> int:
    """Execute one lookup and print its report.

    Returns:
        Process exit status: 0 on success, 1 when a ClientError came back.
    """
    if args.test_type == "forward" and getattr(args, "all", False):
        candidates = client.geocode_candidates(args.address, language=args.language)
        if isinstance(candidates, ClientError):
            print(format_error(candidates), file=out)
            return 1
        for index, location in enumerate(candidates, start=1):
            print(f"--- Result {index} of {len(candidates)} ---", file=out)
            print(format_location(location, map_templates, args.debug), file=out)
        return 0

    if args.test_type == "forward":
        result = client.geocode(args.address, language=args.language)
    else:
        result = client.reverse_geocode(
            args.latitude, args.longitude, language=args.language
        )

    if isinstance(result, ClientError):
        print(format_error(result), file=out)
        return 1

    print(format_location(result, map_templates, args.debug), file=out)
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Entry point of the ``geocoding-tester`` command."""
    args = build_parser().parse_args(argv)

    try:
        config = get_config()
    except pydantic.ValidationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2
    configure_logging(config.observability)

    container = Container.create_default(config)
    try:
        if args.api_key:
            client = GeocodingClient(
                api_key=args.api_key,
                transport=container.resolve(HttpTransportPort),
                language=config.geocoding.language,
            )
        else:
            client = container.resolve(GeocodingClient)
    except ConfigurationError as e:
        print(
            f"Configuration error: {e.message} (set GEO_API_KEY or use --api-key)",
            file=sys.stderr,
        )
        return 2

    return run(args, client, config.map_links.templates)


if __name__ == "__main__":  # pragma: no cover - script entry
    sys.exit(main())
