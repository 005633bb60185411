"""Month title cross references between the two calendars."""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from typing import Optional

from .calendar_types import CalendarDate, SolarDate
from .converter import SolarCalendar
from .errors import MonthIndexError


GREGORIAN_MONTHS = [
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
]


@dataclass(frozen=True)
class MonthTitle:
    primary: str
    secondary: str
    degraded: bool = False


def _short_month(day: CalendarDate) -> str:
    return GREGORIAN_MONTHS[day.month - 1][:3]


def format_solar_month_title(engine: SolarCalendar, month_index: int, solar_year: int) -> MonthTitle:
    """Title a solar month with the Gregorian months it overlaps.

    ``("March / (1/13)", "Gregorian: Mar-Apr")``
    """

    layout = engine.layout
    if not 0 <= month_index < layout.month_count:
        raise MonthIndexError(month_index, layout.month_count)
    month = layout.months[month_index]

    first = engine.month_start_day(month_index)
    last = first + engine.days_in_month(month_index, solar_year) - 1
    start_status = engine.solar_day_to_gregorian_status(solar_year, first)
    end_status = engine.solar_day_to_gregorian_status(solar_year, last)
    start, end = start_status.value, end_status.value

    greg_range = ""
    if start is not None and end is not None:
        start_m, end_m = _short_month(start), _short_month(end)
        greg_range = start_m if start_m == end_m else f"{start_m}-{end_m}"

    return MonthTitle(
        primary=f"{month.name} / ({month_index + 1}/{layout.month_count})",
        secondary=f"Gregorian: {greg_range}",
        degraded=start_status.degraded or end_status.degraded,
    )


def _solar_number_range(start: SolarDate, end: SolarDate, month_count: int) -> str:
    if start.month_number and end.month_number:
        return f"{start.month_number}-{end.month_number}/{month_count}"
    if start.month_number:
        return f"{start.month_number}/{month_count}+"
    if end.month_number:
        return f"+{end.month_number}/{month_count}"
    return ""


def format_gregorian_month_title(
    engine: SolarCalendar,
    month_index: int,
    gregorian_year: int,
) -> MonthTitle:
    """Title a Gregorian month (0-based index) with the solar months it overlaps.

    ``("March / Solar: Sol-March", "Month(s) 13-1/13")``
    """

    if not 0 <= month_index < len(GREGORIAN_MONTHS):
        raise MonthIndexError(month_index, len(GREGORIAN_MONTHS))
    month_name = GREGORIAN_MONTHS[month_index]
    month_count = engine.layout.month_count

    last_day = calendar.monthrange(gregorian_year, month_index + 1)[1]
    start_status = engine.gregorian_to_solar_status(CalendarDate(gregorian_year, month_index + 1, 1))
    end_status = engine.gregorian_to_solar_status(CalendarDate(gregorian_year, month_index + 1, last_day))
    start: Optional[SolarDate] = start_status.value
    end: Optional[SolarDate] = end_status.value

    solar_info = ""
    solar_nums = ""
    if start is not None and end is not None:
        if start.month_name == end.month_name:
            solar_info = start.month_name
            if start.month_number:
                solar_nums = f"{start.month_number}/{month_count}"
        else:
            solar_info = f"{start.month_name}-{end.month_name}"
            solar_nums = _solar_number_range(start, end, month_count)

    return MonthTitle(
        primary=f"{month_name} / Solar: {solar_info}",
        secondary=f"Month(s) {solar_nums}" if solar_nums else "",
        degraded=start_status.degraded or end_status.degraded,
    )
