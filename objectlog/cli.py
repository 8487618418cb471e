#!/usr/bin/env python3
"""
objectlog CLI

Inspect the activity trail of a JSON file store.

Usage:
  objectlog timeline [--object ID] [--actor ID] [--verb VERB] [--kind KIND]
                     [--since ISO] [--until ISO] [--limit N]
  objectlog show <id>

Global options:
  --config FILE     YAML config (store_dir, default_limit, view, log_level)
  --store-dir DIR   Store directory (overrides config)
  -v, --verbose     Debug logging
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from .activity import ActivityVerb
from .config import Config
from .errors import DecodeError, ObjectLogError
from .objects import ObjectKind, parse_timestamp
from .store import JsonFileStore
from .timeline import Timeline, TimelineFilter, TimelineView

logger = logging.getLogger(__name__)


def load_config(args) -> Config:
    config = Config.from_file(args.config) if args.config else Config()
    if args.store_dir:
        config.store_dir = Path(args.store_dir).expanduser()
    return config


def build_filter(args, config: Config) -> TimelineFilter:
    """Turn timeline arguments into a TimelineFilter."""
    try:
        start = parse_timestamp(args.since) if args.since else None
        end = parse_timestamp(args.until) if args.until else None
    except DecodeError as e:
        raise ValueError(str(e)) from e

    return TimelineFilter(
        object_id=args.object or "",
        actor_id=args.actor or "",
        verb=ActivityVerb(args.verb) if args.verb else None,
        object_kind=ObjectKind.parse(args.kind) if args.kind else None,
        start_date=start,
        end_date=end,
        limit=args.limit if args.limit is not None else config.default_limit,
    )


def cmd_timeline(args, config: Config):
    """Render the filtered timeline."""
    store = JsonFileStore(config.store_dir)
    view = TimelineView(Timeline(store), width=config.view_width, height=config.view_height)
    print(view.render_filtered(build_filter(args, config)))


def cmd_show(args, config: Config):
    """Print one stored object as JSON."""
    store = JsonFileStore(config.store_dir)
    obj = store.get(args.id)
    print(json.dumps(obj.to_dict(), indent=2))


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="objectlog",
        description="objectlog - object store activity trail",
    )
    parser.add_argument("--config", help="YAML config file")
    parser.add_argument("--store-dir", help="Store directory")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose logging")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    timeline_parser = subparsers.add_parser("timeline", help="Show the activity timeline")
    timeline_parser.add_argument("--object", help="Only activities about this object id")
    timeline_parser.add_argument("--actor", help="Only activities by this actor")
    timeline_parser.add_argument("--verb", choices=[v.value for v in ActivityVerb],
                                 help="Only activities with this verb")
    timeline_parser.add_argument("--kind", help="Only activities about this object kind")
    timeline_parser.add_argument("--since", help="Earliest created_at (ISO 8601)")
    timeline_parser.add_argument("--until", help="Latest created_at (ISO 8601)")
    timeline_parser.add_argument("--limit", type=int, help="Maximum number of activities")

    show_parser = subparsers.add_parser("show", help="Print a stored object")
    show_parser.add_argument("id", help="Object id")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    try:
        config = load_config(args)
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else getattr(logging, config.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    try:
        if args.command == "timeline":
            cmd_timeline(args, config)
        elif args.command == "show":
            cmd_show(args, config)
    except (ObjectLogError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
