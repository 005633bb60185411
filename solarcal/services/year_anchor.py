"""Year anchor resolution: the Gregorian date of day 1 of a solar year."""

from __future__ import annotations

import logging
import threading
from datetime import MAXYEAR, MINYEAR
from types import MappingProxyType
from typing import Callable, Dict, Mapping, Optional

from .calendar_types import CalendarDate, Conversion
from .equinox import EquinoxTable, fallback_equinox_date
from .errors import DegradedApproximation, MissingAnchorData
from .layouts import AnchorPolicy


logger = logging.getLogger(__name__)

MONDAY = 1  # Sunday-based weekday numbering
# Leave room for the snap to Monday and the year+1 lookup.
MIN_YEAR = MINYEAR
MAX_YEAR = MAXYEAR - 1


class YearAnchorCache:
    """Populate-once, read-many cache of solar year anchors.

    Lookups are lock-free; the first computation for a year happens under a
    lock with a second check, so each year is computed at most once even with
    concurrent callers.
    """

    def __init__(self) -> None:
        self._anchors: Dict[int, CalendarDate] = {}
        self._lock = threading.Lock()

    def get(self, year: int) -> Optional[CalendarDate]:
        return self._anchors.get(year)

    def get_or_compute(
        self,
        year: int,
        compute: Callable[[int], Optional[CalendarDate]],
    ) -> Optional[CalendarDate]:
        cached = self._anchors.get(year)
        if cached is not None:
            return cached
        with self._lock:
            cached = self._anchors.get(year)
            if cached is None:
                cached = compute(year)
                if cached is not None:
                    self._anchors[year] = cached
            return cached

    def snapshot(self) -> Mapping[int, CalendarDate]:
        return MappingProxyType(dict(self._anchors))

    def __contains__(self, year: object) -> bool:
        return year in self._anchors

    def __len__(self) -> int:
        return len(self._anchors)


def first_monday_on_or_after(day: CalendarDate) -> CalendarDate:
    dow = day.sunday_based_weekday
    if dow == MONDAY:
        return day
    return day + (8 - dow) % 7


def anchor_from_equinox(equinox: CalendarDate, policy: AnchorPolicy) -> CalendarDate:
    if policy is AnchorPolicy.SNAP_TO_MONDAY:
        return first_monday_on_or_after(equinox)
    return equinox


class YearAnchorResolver:
    """Resolve and memoise year anchors from an equinox table.

    With ``approximate_missing`` a year absent from the table is filled from
    :func:`fallback_equinox_date` instead of being reported as missing; such
    years are reported as degraded.
    """

    def __init__(
        self,
        table: EquinoxTable,
        policy: AnchorPolicy,
        *,
        cache: Optional[YearAnchorCache] = None,
        approximate_missing: bool = False,
    ) -> None:
        self.table = table
        self.policy = policy
        self.cache = cache if cache is not None else YearAnchorCache()
        self.approximate_missing = approximate_missing

    def equinox(self, year: int) -> Optional[CalendarDate]:
        found = self.table.get(year)
        if found is not None:
            return found
        if self.approximate_missing and MIN_YEAR <= year <= MAX_YEAR:
            return fallback_equinox_date(year)
        return None

    def is_degraded(self, year: int) -> bool:
        if year in self.table:
            return self.table.approximate
        return self.approximate_missing

    def _compute(self, year: int) -> Optional[CalendarDate]:
        equinox = self.equinox(year)
        if equinox is None:
            logger.error("Missing vernal equinox data for year %s. Cannot calculate start date.", year)
            return None
        if year not in self.table:
            logger.warning("Approximating vernal equinox for year %s as %s", year, equinox)
        return anchor_from_equinox(equinox, self.policy)

    def resolve(self, year: int) -> Optional[CalendarDate]:
        return self.cache.get_or_compute(year, self._compute)

    def resolve_status(self, year: int) -> Conversion[CalendarDate]:
        anchor = self.resolve(year)
        if anchor is None:
            return Conversion(None, reason=MissingAnchorData.code)
        degraded = self.is_degraded(year)
        return Conversion(
            anchor,
            degraded=degraded,
            reason=DegradedApproximation.code if degraded else None,
        )

    def warm(self, start: Optional[int] = None, end: Optional[int] = None) -> int:
        """Resolve every anchor in ``start..end`` (default: the table range)."""

        start = self.table.first_year if start is None else start
        end = self.table.last_year if end is None else end
        if start is None or end is None:
            return 0
        logger.info("Pre-calculating solar year start dates for %s..%s", start, end)
        resolved = sum(1 for year in range(start, end + 1) if self.resolve(year) is not None)
        logger.info("Finished pre-calculating %d start dates", resolved)
        return resolved
