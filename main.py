"""CLI entry point for the restaurant ranking engine."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from src.core.config import Settings
from src.core.schemas import Place
from src.pipeline.ranker import export_rank_json, rank
from src.platforms.google_places.parser import parse_places
from src.profile.schema import Profile


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Restaurant ranking engine - score and explain candidate places",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # --- rank subcommand ---
    rank_parser = subparsers.add_parser("rank", help="Rank candidate places for a profile")
    rank_parser.add_argument(
        "--candidates",
        required=True,
        help="Path to a JSON list of places",
    )
    rank_parser.add_argument(
        "--profile",
        help="Path to profile YAML (default: no preferences)",
    )
    rank_parser.add_argument(
        "--origin",
        type=_parse_origin,
        help="User position as LAT,LNG",
    )
    rank_parser.add_argument(
        "--top-k",
        type=float,
        help="Number of results to return (default: ranking.default_top_k)",
    )
    rank_parser.add_argument(
        "--raw",
        action="store_true",
        help="Candidates are raw Google Places API payloads",
    )
    rank_parser.add_argument(
        "--config",
        default="config/settings.yaml",
        help="Path to settings YAML file (default: config/settings.yaml)",
    )
    rank_parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )

    # --- parse-places subcommand ---
    parse_parser = subparsers.add_parser(
        "parse-places",
        help="Normalize raw Google Places API payloads into places",
    )
    parse_parser.add_argument(
        "--input",
        required=True,
        help="Path to a JSON file with raw payloads",
    )
    parse_parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )

    return parser.parse_args(argv)


def setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def load_json(path: str | Path) -> Any:
    path = Path(path)
    if not path.exists():
        msg = f"Input file not found: {path}"
        raise FileNotFoundError(msg)
    return json.loads(path.read_text())


def load_raw_places(path: str | Path) -> list[Place]:
    """Read raw payloads, either a list or a Places API ``{"places": [...]}`` response."""
    data = load_json(path)
    if isinstance(data, dict):
        data = data.get("places", [])
    if not isinstance(data, list):
        msg = "raw input must be a list of places or an object with a 'places' list"
        raise ValueError(msg)
    return parse_places(data)


def cmd_rank(args: argparse.Namespace) -> None:
    """Handle rank subcommand."""
    settings = Settings.from_yaml(args.config) if Path(args.config).exists() else Settings()
    profile = Profile.from_yaml(args.profile) if args.profile else Profile()
    candidates = load_raw_places(args.candidates) if args.raw else load_json(args.candidates)
    top_k = args.top_k if args.top_k is not None else settings.ranking.default_top_k

    result = rank(candidates, profile, args.origin, top_k, settings.scoring)
    print(export_rank_json(result, settings.ranking.score_precision))


def cmd_parse_places(args: argparse.Namespace) -> None:
    """Handle parse-places subcommand."""
    places = load_raw_places(args.input)
    data = [p.model_dump(mode="json", by_alias=True) for p in places]
    print(json.dumps(data, indent=2, ensure_ascii=False))


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    setup_logging(args.verbose)

    try:
        if args.command == "parse-places":
            cmd_parse_places(args)
        else:
            cmd_rank(args)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


def _parse_origin(value: str) -> dict[str, float]:
    try:
        lat, lng = (float(part) for part in value.split(","))
    except ValueError:
        msg = f"origin must be LAT,LNG, got '{value}'"
        raise argparse.ArgumentTypeError(msg) from None
    return {"lat": lat, "lng": lng}


if __name__ == "__main__":
    main()
