"""Month-layout configurations for the solar calendar engine.

A layout is data, not code: the ordered months with their day counts, the
names of the intercalary days that sit outside the month grid, and the
policy that turns an equinox date into day 1 of the year. The converter,
leap determiner and title formatter all read the layout; none of them
special-cases a particular calendar.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple


DAYS_PER_WEEK = 7


class AnchorPolicy(str, Enum):
    SNAP_TO_MONDAY = "snap_to_monday"
    NONE = "none"


@dataclass(frozen=True)
class MonthSpec:
    name: str
    days: int
    leap_days: int = 0


@dataclass(frozen=True)
class CalendarLayout:
    key: str
    months: Tuple[MonthSpec, ...]
    anchor_policy: AnchorPolicy = AnchorPolicy.NONE
    year_day_name: Optional[str] = None
    leap_day_name: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.months:
            raise ValueError(f"layout {self.key!r} has no months")
        if any(m.days <= 0 or m.leap_days < 0 for m in self.months):
            raise ValueError(f"layout {self.key!r} has a month with a non-positive length")
        if (self.year_day_name is None) != (self.leap_day_name is None):
            raise ValueError(f"layout {self.key!r} must name both intercalary days or neither")
        if self.has_special_days:
            if any(m.leap_days for m in self.months):
                raise ValueError(
                    f"layout {self.key!r} cannot grow months when leap days are intercalary"
                )
        else:
            if self.anchor_policy is AnchorPolicy.SNAP_TO_MONDAY:
                raise ValueError(
                    f"layout {self.key!r} needs intercalary days to absorb weekday snapping"
                )
            if any(m.leap_days for m in self.months[:-1]) or self.months[-1].leap_days != 1:
                raise ValueError(
                    f"layout {self.key!r} must add exactly one day to its last month in leap years"
                )

    # Structure ----------------------------------------------------------

    @property
    def month_count(self) -> int:
        return len(self.months)

    @property
    def has_special_days(self) -> bool:
        return self.year_day_name is not None

    @property
    def uniform_month_days(self) -> Optional[int]:
        """Common month length when every month has the same fixed size."""

        lengths = {m.days for m in self.months}
        if len(lengths) == 1 and not any(m.leap_days for m in self.months):
            return lengths.pop()
        return None

    def month_days(self, index: int, leap: bool) -> int:
        month = self.months[index]
        return month.days + (month.leap_days if leap else 0)

    def grid_days(self, leap: bool) -> int:
        """Days covered by the month grid, intercalary days excluded."""

        return sum(self.month_days(i, leap) for i in range(self.month_count))

    def month_start_offset(self, index: int) -> int:
        # Leap days only ever extend the final month, so starts never move.
        return sum(m.days for m in self.months[:index])

    # Year lengths -------------------------------------------------------

    @property
    def common_year_days(self) -> int:
        return self.grid_days(False) + (1 if self.has_special_days else 0)

    @property
    def year_lengths(self) -> Tuple[int, int]:
        """Allowed ``(common, leap)`` distances between consecutive anchors.

        Anchors taken straight from the equinox are 365 or 366 days apart.
        Anchors snapped to a weekday are always a whole number of weeks
        apart, so the year is either 52 or 53 weeks long.
        """

        common = self.common_year_days
        if self.anchor_policy is AnchorPolicy.SNAP_TO_MONDAY:
            short = (common // DAYS_PER_WEEK) * DAYS_PER_WEEK
            return short, short + DAYS_PER_WEEK
        return common, common + 1

    # Lookup -------------------------------------------------------------

    def locate(self, offset: int, leap: bool) -> Optional[Tuple[int, int]]:
        """Map a 0-based offset inside the grid to ``(month_index, day)``."""

        if offset < 0:
            return None
        size = self.uniform_month_days
        if size:
            index, rem = divmod(offset, size)
            if index < self.month_count:
                return index, rem + 1
            return None

        start = 0
        for index in range(self.month_count):
            days = self.month_days(index, leap)
            if start <= offset < start + days:
                return index, offset - start + 1
            start += days
        return None


FIXED_28 = CalendarLayout(
    key="fixed28",
    months=tuple(
        MonthSpec(name, 28)
        for name in (
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
            "January",
            "February",
            "Sol",
        )
    ),
    anchor_policy=AnchorPolicy.SNAP_TO_MONDAY,
    year_day_name="Year Day",
    leap_day_name="Leap Day",
)

FIXED_28_EQUINOX = CalendarLayout(
    key="fixed28-equinox",
    months=tuple(
        MonthSpec(name, 28)
        for name in (
            "March",
            "April",
            "May",
            "June",
            "Quintilis",
            "Sextilis",
            "September",
            "October",
            "November",
            "December",
            "January",
            "February",
            "Sol",
        )
    ),
    anchor_policy=AnchorPolicy.NONE,
    year_day_name="Equinox Day",
    leap_day_name="Solstice Day",
)

VARIABLE = CalendarLayout(
    key="variable",
    months=(
        MonthSpec("Farvardin", 31),
        MonthSpec("Ordibehesht", 31),
        MonthSpec("Khordad", 31),
        MonthSpec("Tir", 31),
        MonthSpec("Mordad", 31),
        MonthSpec("Shahrivar", 31),
        MonthSpec("Mehr", 30),
        MonthSpec("Aban", 30),
        MonthSpec("Azar", 30),
        MonthSpec("Dey", 30),
        MonthSpec("Bahman", 30),
        MonthSpec("Esfand", 29, leap_days=1),
    ),
    anchor_policy=AnchorPolicy.NONE,
)

LAYOUTS: Dict[str, CalendarLayout] = {
    layout.key: layout for layout in (FIXED_28, FIXED_28_EQUINOX, VARIABLE)
}


def get_layout(key: str) -> CalendarLayout:
    try:
        return LAYOUTS[key.strip().lower()]
    except KeyError:
        known = ", ".join(sorted(LAYOUTS))
        raise ValueError(f"Unknown calendar layout {key!r}; expected one of {known}") from None
