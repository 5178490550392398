"""Entry point for running workshopcal as a module.

Usage:
    python -m workshopcal generate [--data PATH] [--output DIR]
    python -m workshopcal export [--data PATH] [--output FILE] [--area ID ...]
    python -m workshopcal links OFFERING_ID [--data PATH] [--json]
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from workshopcal.batch import generate_calendar_files
from workshopcal.config.settings import CalendarConfig, load_config
from workshopcal.core.calendar_links import generate_links
from workshopcal.core.dataset import load_dataset
from workshopcal.core.event_builder import event_from_offering
from workshopcal.core.filtering import SORT_KEYS, WorkshopFilter, filter_workshops, sort_workshops
from workshopcal.core.ics_builder import build_ics_for_workshops
from workshopcal.exceptions.errors import WorkshopCalendarError
from workshopcal.utils.paths import get_default_dataset_path, get_default_output_dir

logger = logging.getLogger("workshopcal")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="workshopcal",
        description="Generate iCalendar files and calendar links for the workshop catalogue.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--env-file", default=".env", help="Settings file (default: .env)")

    sub = parser.add_subparsers(dest="command", required=True)

    gen = sub.add_parser("generate", help="Write static ICS files for common filter combinations")
    gen.add_argument("--data", help="Path to workshops.json")
    gen.add_argument("--output", help="Directory for generated .ics files")

    export = sub.add_parser("export", help="Write one ICS document for a filtered selection")
    export.add_argument("--data", help="Path to workshops.json")
    export.add_argument("--output", help="Output file (default: stdout)")
    export.add_argument("--search", help="Case-insensitive text search")
    for key in ("area", "audience", "format", "department", "instructor"):
        export.add_argument(f"--{key}", help=f"Only workshops with this {key} id")
    export.add_argument("--sort", choices=SORT_KEYS, default="date", help="Event order")

    links = sub.add_parser("links", help="Print calendar links for one offering")
    links.add_argument("offering_id", help="Offering id")
    links.add_argument("--data", help="Path to workshops.json")
    links.add_argument("--json", action="store_true", help="Print links as JSON")

    return parser


def cmd_generate(args: argparse.Namespace, config: CalendarConfig) -> int:
    dataset = load_dataset(args.data or get_default_dataset_path(config.data_path))
    output_dir = Path(args.output) if args.output else get_default_output_dir(config.output_dir)
    written = generate_calendar_files(dataset, output_dir, config=config)
    logger.info("Calendar generation complete: %d file(s) in %s", len(written), output_dir)
    return 0


def cmd_export(args: argparse.Namespace, config: CalendarConfig) -> int:
    dataset = load_dataset(args.data or get_default_dataset_path(config.data_path))
    filters = WorkshopFilter.from_mapping({
        key: getattr(args, key)
        for key in ("search", "area", "audience", "format", "department", "instructor")
    })
    workshops = sort_workshops(
        filter_workshops(dataset.workshops, filters), dataset, args.sort, tz=config.timezone
    )
    content = build_ics_for_workshops(workshops, dataset, config=config)

    if args.output:
        with open(args.output, "w", encoding="utf-8", newline="") as f:
            f.write(content)
        logger.info("Wrote %d workshop(s) to %s", len(workshops), args.output)
    else:
        sys.stdout.write(content)
    return 0


def cmd_links(args: argparse.Namespace, config: CalendarConfig) -> int:
    dataset = load_dataset(args.data or get_default_dataset_path(config.data_path))
    offering = dataset.offering(args.offering_id)
    workshop = dataset.workshop(offering.workshop_id) if offering else None
    if offering is None or workshop is None:
        logger.error("Unknown offering '%s'", args.offering_id)
        return 1

    event = event_from_offering(workshop, offering, dataset.lookups)
    links = generate_links(event, config=config)
    if args.json:
        print(json.dumps(links.to_dict(), indent=2))
    else:
        for name in ("google", "outlook", "office365", "yahoo"):
            print(f"{name}: {getattr(links, name)}")
    return 0


COMMANDS = {
    "generate": cmd_generate,
    "export": cmd_export,
    "links": cmd_links,
}


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the command line tool."""
    args = build_parser().parse_args(argv)

    # Configure logging
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stderr,
    )

    config = load_config(env_file=args.env_file)
    try:
        return COMMANDS[args.command](args, config)
    except WorkshopCalendarError as e:
        logger.error("%s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
