"""Leap-year determination for solar years.

A solar year is as long as the distance between its anchor and the next
year's anchor. The Gregorian leap rule is only consulted when one of those
anchors cannot be resolved, and answers built that way are flagged degraded.
"""

from __future__ import annotations

import logging
import threading
from typing import Dict, Tuple

from .calendar_types import Conversion, is_gregorian_leap
from .errors import AnchorGapError, DegradedApproximation
from .layouts import CalendarLayout
from .year_anchor import YearAnchorResolver


logger = logging.getLogger(__name__)


class LeapDeterminer:
    def __init__(self, anchors: YearAnchorResolver, layout: CalendarLayout) -> None:
        self.anchors = anchors
        self.layout = layout
        self._lengths: Dict[int, Tuple[int, bool]] = {}
        self._lock = threading.Lock()

    def _gregorian_fallback(self, year: int) -> Tuple[int, bool]:
        equinox = self.anchors.equinox(year)
        equinox_year = equinox.year if equinox is not None else year
        logger.warning(
            "Cannot determine leap year status for %s: missing start date data. Falling back.",
            year,
        )
        common, leap = self.layout.year_lengths
        return (leap if is_gregorian_leap(equinox_year) else common), True

    def _measure(self, year: int) -> Tuple[int, bool]:
        start = self.anchors.resolve(year)
        following = self.anchors.resolve(year + 1)
        if start is None or following is None:
            return self._gregorian_fallback(year)

        gap = following - start
        allowed = self.layout.year_lengths
        if gap not in allowed:
            raise AnchorGapError(year, gap, allowed)
        degraded = self.anchors.is_degraded(year) or self.anchors.is_degraded(year + 1)
        return gap, degraded

    def _lookup(self, year: int) -> Tuple[int, bool]:
        cached = self._lengths.get(year)
        if cached is not None:
            return cached
        with self._lock:
            cached = self._lengths.get(year)
            if cached is not None:
                return cached
            measured = self._measure(year)
            # Years without an anchor of their own are not memoised.
            if self.anchors.resolve(year) is not None:
                self._lengths[year] = measured
            return measured

    def year_length(self, year: int) -> int:
        return self._lookup(year)[0]

    def is_leap_year(self, year: int) -> bool:
        return self.year_length(year) == self.layout.year_lengths[1]

    def is_degraded(self, year: int) -> bool:
        return self._lookup(year)[1]

    def leap_status(self, year: int) -> Conversion[bool]:
        length, degraded = self._lookup(year)
        return Conversion(
            length == self.layout.year_lengths[1],
            degraded=degraded,
            reason=DegradedApproximation.code if degraded else None,
        )
