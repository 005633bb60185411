from __future__ import annotations

import argparse
import json
import logging
import sys
import warnings
from typing import List, Optional

from solarcal.services.calendar_service import get_calendar
from solarcal.services.calendar_types import CalendarDate, SolarDate
from solarcal.services.errors import DegradedApproximation, InvalidInputDate
from solarcal.services.layouts import LAYOUTS


def _parse_args(argv: Optional[List[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Convert between Gregorian dates and the equinox-anchored solar calendar."
    )
    parser.add_argument("date", nargs="?", help="Gregorian date YYYY-MM-DD (default: today, UTC)")
    parser.add_argument("--layout", choices=sorted(LAYOUTS), default=None)
    parser.add_argument(
        "--solar",
        nargs=2,
        type=int,
        metavar=("YEAR", "DAY"),
        help="convert solar YEAR / day-of-year DAY to a Gregorian date instead",
    )
    parser.add_argument("--json", action="store_true", help="print JSON instead of text")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser.parse_args(argv)


def _payload(gregorian: CalendarDate, solar: SolarDate) -> dict:
    return {
        "gregorian": gregorian.isoformat(),
        "year": solar.year,
        "month": solar.month_name,
        "month_number": solar.month_number,
        "day": None if solar.is_special else solar.day,
        "day_of_year": solar.day_of_year,
        "weekday": gregorian.weekday_name,
    }


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(level=logging.INFO if args.verbose else logging.ERROR)
    engine = get_calendar(args.layout)

    if args.solar:
        year, day_of_year = args.solar
        result = engine.solar_day_to_gregorian_status(year, day_of_year)
        if not result.ok:
            print(f"No Gregorian date for solar {year} day {day_of_year}: {result.reason}", file=sys.stderr)
            return 1
        gregorian = result.value
    else:
        try:
            gregorian = CalendarDate.parse(args.date) if args.date else CalendarDate.today()
        except InvalidInputDate as exc:
            print(str(exc), file=sys.stderr)
            return 2
        result = engine.gregorian_to_solar_status(gregorian)
        if not result.ok:
            print(f"No solar date for {gregorian}: {result.reason}", file=sys.stderr)
            return 1

    solar = engine.gregorian_to_solar(gregorian)
    if result.degraded:
        warnings.warn("approximate vernal equinox data in use", DegradedApproximation)

    data = _payload(gregorian, solar)
    if args.json:
        print(json.dumps(data))
    else:
        for key in ("gregorian", "year", "month", "day", "day_of_year", "weekday"):
            print(f"{key.replace('_', ' ').title()}: {data[key] if data[key] is not None else ''}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
