"""Error kinds raised or reported by the solar calendar engine."""

from __future__ import annotations

from typing import Sequence


class SolarCalendarError(Exception):
    """Base class for calendar engine failures."""

    code = "solar_calendar_error"


class MissingAnchorData(SolarCalendarError):
    code = "missing_anchor_data"

    def __init__(self, year: int) -> None:
        super().__init__(f"No vernal equinox data for solar year {year}")
        self.year = year


class OutOfRangeDay(SolarCalendarError):
    code = "out_of_range_day"

    def __init__(self, year: int, day_of_year: int, year_length: int) -> None:
        super().__init__(
            f"Day {day_of_year} is outside 1..{year_length} for solar year {year}"
        )
        self.year = year
        self.day_of_year = day_of_year
        self.year_length = year_length


class InvalidInputDate(SolarCalendarError, ValueError):
    """A caller supplied a malformed or impossible calendar date."""

    code = "invalid_input_date"


class AnchorGapError(SolarCalendarError):
    """Consecutive year anchors are a number of days apart that no layout allows.

    This always points at broken equinox data or a broken anchor policy and is
    never converted into a "no result" answer.
    """

    code = "anchor_gap"

    def __init__(self, year: int, gap: int, allowed: Sequence[int]) -> None:
        allowed_txt = "/".join(str(v) for v in allowed)
        super().__init__(
            f"Solar year {year} spans {gap} days; expected one of {allowed_txt}"
        )
        self.year = year
        self.gap = gap
        self.allowed = tuple(allowed)


class MonthIndexError(SolarCalendarError, IndexError):
    code = "month_index"

    def __init__(self, index: int, month_count: int) -> None:
        super().__init__(f"Month index {index} is outside 0..{month_count - 1}")
        self.index = index
        self.month_count = month_count


class DegradedApproximation(UserWarning):
    """Warning category for results built on approximated equinox data."""

    code = "degraded_approximation"
