"""Approximate seasonal markers for calendar displays.

Only the vernal equinox comes from the equinox table; the solstices and the
autumnal equinox use fixed approximate dates.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Dict, Optional

from .calendar_types import CalendarDate
from .equinox import EquinoxTable


VERNAL_EQUINOX = "vernal_equinox"
SUMMER_SOLSTICE = "summer_solstice"
AUTUMN_EQUINOX = "autumn_equinox"
WINTER_SOLSTICE = "winter_solstice"

# (month, day) used when the table has no entry / for the other three events
APPROX_DATES = {
    VERNAL_EQUINOX: (3, 20),
    SUMMER_SOLSTICE: (6, 21),
    AUTUMN_EQUINOX: (9, 22),
    WINTER_SOLSTICE: (12, 21),
}

ICONS = {
    VERNAL_EQUINOX: "🌱",
    SUMMER_SOLSTICE: "☀️",
    AUTUMN_EQUINOX: "🍂",
    WINTER_SOLSTICE: "❄️",
}


@dataclass(frozen=True)
class SeasonMarker:
    key: str
    date: CalendarDate
    icon: str

    @property
    def css_class(self) -> str:
        return self.key.replace("_", "-")


class SeasonCalendar:
    def __init__(self, table: EquinoxTable) -> None:
        self.table = table
        self._events: Dict[int, Dict[str, CalendarDate]] = {}
        self._lock = threading.Lock()

    def _build(self, year: int) -> Dict[str, CalendarDate]:
        events = {key: CalendarDate(year, m, d) for key, (m, d) in APPROX_DATES.items()}
        vernal = self.table.get(year)
        if vernal is not None:
            events[VERNAL_EQUINOX] = vernal
        return events

    def astronomical_events(self, year: int) -> Dict[str, CalendarDate]:
        with self._lock:
            events = self._events.get(year)
            if events is None:
                events = self._events[year] = self._build(year)
        return dict(events)

    def markers(self, year: int):
        return [
            SeasonMarker(key=key, date=day, icon=ICONS[key])
            for key, day in self.astronomical_events(year).items()
        ]

    def check_astronomical_event(self, value: object) -> Optional[SeasonMarker]:
        day = CalendarDate.parse(value)
        for marker in self.markers(day.year):
            if marker.date == day:
                return marker
        return None
