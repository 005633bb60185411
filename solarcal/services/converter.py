"""Bidirectional Gregorian <-> solar calendar conversion.

:class:`SolarCalendar` is the engine the rest of the service talks to. It
owns one equinox table, one month layout and the anchor and leap caches
derived from them. Every public query is synchronous and side-effect free
apart from populating those caches.

The plain query methods return ``None`` when there is no answer (missing
equinox data, a day outside the year). The ``*_status`` variants return a
:class:`~solarcal.services.calendar_types.Conversion` carrying the reason and
the degraded-accuracy flag.
"""

from __future__ import annotations

import logging
from typing import Optional

from .calendar_types import CalendarDate, Conversion, SolarDate, SpecialDay
from .equinox import EquinoxTable
from .errors import DegradedApproximation, InvalidInputDate, MissingAnchorData, MonthIndexError, OutOfRangeDay
from .layouts import FIXED_28, CalendarLayout
from .leap import LeapDeterminer
from .year_anchor import YearAnchorCache, YearAnchorResolver


logger = logging.getLogger(__name__)

# Normal equinox spacing needs one step; the cap only guards malformed data.
MAX_YEAR_STEPS = 3
UNRESOLVED_YEAR = "unresolved_year"


class SolarCalendar:
    def __init__(
        self,
        table: EquinoxTable,
        layout: CalendarLayout = FIXED_28,
        *,
        approximate_missing: bool = False,
        cache: Optional[YearAnchorCache] = None,
    ) -> None:
        self.table = table
        self.layout = layout
        self.anchors = YearAnchorResolver(
            table,
            layout.anchor_policy,
            cache=cache,
            approximate_missing=approximate_missing,
        )
        self.leap = LeapDeterminer(self.anchors, layout)

    def __repr__(self) -> str:
        return f"SolarCalendar(layout={self.layout.key!r}, table={self.table!r})"

    # Anchors and leap years ---------------------------------------------

    def resolve_year_anchor(self, year: int) -> Optional[CalendarDate]:
        return self.anchors.resolve(year)

    def is_leap_year(self, year: int) -> bool:
        return self.leap.is_leap_year(year)

    def year_length(self, year: int) -> int:
        return self.leap.year_length(year)

    def is_degraded(self, year: int) -> bool:
        return self.anchors.is_degraded(year) or self.leap.is_degraded(year)

    def warm(self, start: Optional[int] = None, end: Optional[int] = None) -> int:
        return self.anchors.warm(start, end)

    # Month structure ----------------------------------------------------

    def _check_month(self, index: int) -> None:
        if not 0 <= index < self.layout.month_count:
            raise MonthIndexError(index, self.layout.month_count)

    def month_start_day(self, index: int) -> int:
        """1-based day of year on which month ``index`` starts."""

        self._check_month(index)
        return self.layout.month_start_offset(index) + 1

    def days_in_month(self, index: int, year: int) -> int:
        self._check_month(index)
        leap = self.is_leap_year(year) if self.layout.months[index].leap_days else False
        return self.layout.month_days(index, leap)

    # Solar -> Gregorian -------------------------------------------------

    def solar_day_to_gregorian_status(self, year: int, day_of_year: int) -> Conversion[CalendarDate]:
        anchor = self.anchors.resolve(year)
        if anchor is None:
            return Conversion(None, reason=MissingAnchorData.code)

        length = self.leap.year_length(year)
        if not 1 <= day_of_year <= length:
            logger.debug("%s", OutOfRangeDay(year, day_of_year, length))
            return Conversion(None, reason=OutOfRangeDay.code)

        try:
            gregorian = anchor + (day_of_year - 1)
        except InvalidInputDate:
            logger.debug("Solar %s day %s lies past 9999-12-31", year, day_of_year)
            return Conversion(None, reason=OutOfRangeDay.code)

        degraded = self.is_degraded(year)
        return Conversion(
            gregorian,
            degraded=degraded,
            reason=DegradedApproximation.code if degraded else None,
        )

    def solar_day_to_gregorian(self, year: int, day_of_year: int) -> Optional[CalendarDate]:
        return self.solar_day_to_gregorian_status(year, day_of_year).value

    # Gregorian -> Solar -------------------------------------------------

    def _classify(self, year: int, offset: int) -> Optional[SolarDate]:
        layout = self.layout
        leap = self.is_leap_year(year)
        grid = layout.grid_days(leap)

        if offset >= grid:
            if not layout.has_special_days:
                logger.error("Offset %s lies beyond the months of solar year %s", offset, year)
                return None
            if offset == grid:
                return SolarDate(
                    year=year,
                    month_index=None,
                    day=1,
                    day_of_year=offset + 1,
                    month_name=layout.year_day_name,
                    special_day=SpecialDay.YEAR_DAY,
                )
            return SolarDate(
                year=year,
                month_index=None,
                day=offset - grid + 1,
                day_of_year=offset + 1,
                month_name=layout.leap_day_name,
                special_day=SpecialDay.LEAP_DAY,
            )

        located = layout.locate(offset, leap)
        if located is None:
            logger.error("Invalid month calculated for offset %s in solar year %s", offset, year)
            return None
        index, day = located
        return SolarDate(
            year=year,
            month_index=index,
            day=day,
            day_of_year=offset + 1,
            month_name=layout.months[index].name,
        )

    def gregorian_to_solar_status(self, value: object) -> Conversion[SolarDate]:
        """Convert a Gregorian date; malformed input raises ``InvalidInputDate``.

        The Gregorian year is only a first guess for the solar year. The
        search steps back while the date precedes the candidate's anchor and
        forward while it lies past the candidate's last day.
        """

        target = CalendarDate.parse(value)
        year = target.year

        for step in range(MAX_YEAR_STEPS):
            anchor = self.anchors.resolve(year)
            if anchor is None:
                if step == 0:
                    # The hint year may sit just past the end of the table.
                    year -= 1
                    continue
                return Conversion(None, reason=MissingAnchorData.code)

            offset = target - anchor
            if offset < 0:
                year -= 1
                continue
            length = self.leap.year_length(year)
            if offset >= length:
                logger.warning(
                    "Date %s overflowed solar year %s, re-evaluating with %s", target, year, year + 1
                )
                year += 1
                continue

            solar = self._classify(year, offset)
            if solar is None:
                return Conversion(None, reason=UNRESOLVED_YEAR)
            degraded = self.is_degraded(year)
            return Conversion(
                solar,
                degraded=degraded,
                reason=DegradedApproximation.code if degraded else None,
            )

        logger.error("No solar year found for %s within %d steps", target, MAX_YEAR_STEPS)
        return Conversion(None, reason=UNRESOLVED_YEAR)

    def gregorian_to_solar(self, value: object) -> Optional[SolarDate]:
        return self.gregorian_to_solar_status(value).value

    def solar_date_for_day(self, year: int, day_of_year: int) -> Optional[SolarDate]:
        """Classify ``day_of_year`` of ``year`` without a Gregorian round trip."""

        if self.anchors.resolve(year) is None:
            return None
        if not 1 <= day_of_year <= self.leap.year_length(year):
            return None
        return self._classify(year, day_of_year - 1)
