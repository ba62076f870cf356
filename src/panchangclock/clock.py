"""CLI entry point: print the Panchangam board for every configured city.

    uv run panchang-clock
    uv run panchang-clock --at "2025-12-05 11:26" --zone Asia/Kolkata
"""

import argparse
import logging
import sys
from datetime import datetime

from dotenv import load_dotenv
from pytz import UnknownTimeZoneError, timezone, utc

from panchangclock.compute import detect_home_city, run
from panchangclock.config import ConfigError, load_settings
from panchangclock.renderers.text import render_board_text


def _parse_at(value: str, zone: str) -> datetime:
    naive = datetime.strptime(value, "%Y-%m-%d %H:%M")
    return timezone(zone).localize(naive).astimezone(utc)


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    parser = argparse.ArgumentParser(prog="panchang-clock")
    parser.add_argument("--at", help='Evaluate at local time "YYYY-MM-DD HH:MM"')
    parser.add_argument("--zone", default="UTC", help="Zone of --at and the header clock")
    parser.add_argument("--lang", default=None, help="Label language (en/ta)")
    args = parser.parse_args(argv)

    try:
        settings = load_settings()
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2
    logging.basicConfig(level=settings.log_level)

    try:
        now = _parse_at(args.at, args.zone) if args.at else datetime.now(utc)
    except (ValueError, UnknownTimeZoneError) as e:
        parser.error(f"invalid --at/--zone: {e}")

    home = detect_home_city(settings.cities, args.zone, now)
    reports = run(
        settings.cities,
        settings.policy(home),
        now,
        home=home,
        timeout=settings.timeout,
    )
    lang = args.lang or settings.lang
    sys.stdout.write(render_board_text(reports, now, args.zone, lang=lang))
    return 0


if __name__ == "__main__":
    sys.exit(main())
