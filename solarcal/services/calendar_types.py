"""Value types shared by the solar calendar services.

``CalendarDate`` is a plain proleptic Gregorian day with no time-of-day or
timezone attached, so day arithmetic can never drift across a midnight
boundary. ``SolarDate`` is the converter's output and ``Conversion`` wraps
any engine answer together with its accuracy flag.
"""

from __future__ import annotations

import calendar
import re
from dataclasses import dataclass
from datetime import date as date_cls, datetime, timezone
from enum import Enum
from typing import Generic, Optional, TypeVar

from .errors import InvalidInputDate


WEEKDAY_NAMES = [
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
]

_ISO_DATE = re.compile(r"^(\d{1,4})-(\d{1,2})-(\d{1,2})$")


def is_gregorian_leap(year: int) -> bool:
    return calendar.isleap(year)


@dataclass(frozen=True, order=True)
class CalendarDate:
    year: int
    month: int
    day: int

    def __post_init__(self) -> None:
        try:
            date_cls(self.year, self.month, self.day)
        except (TypeError, ValueError) as exc:
            raise InvalidInputDate(
                f"Not a valid calendar date: {self.year!r}-{self.month!r}-{self.day!r}"
            ) from exc

    # Construction -------------------------------------------------------

    @classmethod
    def parse(cls, value: object) -> "CalendarDate":
        """Coerce ``value`` into a ``CalendarDate``.

        Accepts another ``CalendarDate``, a ``datetime.date``, a
        ``datetime.datetime`` (aware values are taken in UTC) or a
        ``YYYY-MM-DD`` string whose month and day may be unpadded.
        """

        if isinstance(value, CalendarDate):
            return value
        if isinstance(value, datetime):
            if value.tzinfo is not None:
                value = value.astimezone(timezone.utc)
            return cls(value.year, value.month, value.day)
        if isinstance(value, date_cls):
            return cls(value.year, value.month, value.day)
        if isinstance(value, str):
            match = _ISO_DATE.match(value.strip())
            if not match:
                raise InvalidInputDate(f"Invalid date format {value!r}. Use YYYY-MM-DD.")
            year, month, day = (int(part) for part in match.groups())
            return cls(year, month, day)
        raise InvalidInputDate(f"Unsupported date value of type {type(value).__name__}")

    @classmethod
    def from_ordinal(cls, ordinal: int) -> "CalendarDate":
        try:
            day = date_cls.fromordinal(ordinal)
        except (ValueError, OverflowError) as exc:
            raise InvalidInputDate(f"Day number {ordinal} is outside 0001-01-01..9999-12-31") from exc
        return cls.parse(day)

    @classmethod
    def today(cls) -> "CalendarDate":
        return cls.parse(datetime.now(timezone.utc))

    # Arithmetic ---------------------------------------------------------

    def to_ordinal(self) -> int:
        return date_cls(self.year, self.month, self.day).toordinal()

    def to_date(self) -> date_cls:
        return date_cls(self.year, self.month, self.day)

    def add_days(self, days: int) -> "CalendarDate":
        return CalendarDate.from_ordinal(self.to_ordinal() + days)

    def days_until(self, other: "CalendarDate") -> int:
        """Whole days from ``self`` to ``other`` (negative when ``other`` is earlier)."""

        return other.to_ordinal() - self.to_ordinal()

    def __add__(self, days: object) -> "CalendarDate":
        if isinstance(days, bool) or not isinstance(days, int):
            return NotImplemented
        return self.add_days(days)

    def __sub__(self, other: object):
        if isinstance(other, CalendarDate):
            return self.to_ordinal() - other.to_ordinal()
        if isinstance(other, int) and not isinstance(other, bool):
            return self.add_days(-other)
        return NotImplemented

    # Presentation -------------------------------------------------------

    @property
    def weekday(self) -> int:
        """0 = Monday ... 6 = Sunday."""

        return self.to_date().weekday()

    @property
    def sunday_based_weekday(self) -> int:
        """0 = Sunday, 1 = Monday ... 6 = Saturday."""

        return (self.weekday + 1) % 7

    @property
    def weekday_name(self) -> str:
        return WEEKDAY_NAMES[self.weekday]

    def isoformat(self) -> str:
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"

    def __str__(self) -> str:
        return self.isoformat()


class SpecialDay(str, Enum):
    NONE = "none"
    YEAR_DAY = "year_day"
    LEAP_DAY = "leap_day"


@dataclass(frozen=True)
class SolarDate:
    year: int
    month_index: Optional[int]
    day: int
    day_of_year: int
    month_name: str
    special_day: SpecialDay = SpecialDay.NONE

    def __post_init__(self) -> None:
        if self.special_day is not SpecialDay.NONE and self.month_index is not None:
            raise ValueError("special days sit outside the month grid")
        if self.special_day is SpecialDay.NONE and self.month_index is None:
            raise ValueError("ordinary solar dates need a month index")

    @property
    def is_special(self) -> bool:
        return self.special_day is not SpecialDay.NONE

    @property
    def month_number(self) -> Optional[int]:
        if self.month_index is None:
            return None
        return self.month_index + 1


T = TypeVar("T")


@dataclass(frozen=True)
class Conversion(Generic[T]):
    """Engine answer plus accuracy metadata.

    ``value`` is ``None`` when there is no result; ``reason`` then carries the
    error code. ``degraded`` is set whenever approximated equinox data fed
    into the answer.
    """

    value: Optional[T]
    degraded: bool = False
    reason: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.value is not None
