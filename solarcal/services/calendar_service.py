"""Process-wide calendar engines used by the API and CLI.

The equinox table is loaded once; one :class:`SolarCalendar` is built per
layout on first use and, unless disabled, its anchor cache is warmed over the
whole table range before it answers any query.
"""

from __future__ import annotations

import logging
import threading
from typing import Dict, Optional

from .converter import SolarCalendar
from .equinox import EquinoxTable, load_equinox_table
from .layouts import get_layout
from .seasons import SeasonCalendar
from .util import calendar_defaults


logger = logging.getLogger(__name__)

_LOCK = threading.RLock()
_TABLE: Optional[EquinoxTable] = None
_ENGINES: Dict[str, SolarCalendar] = {}
_SEASONS: Optional[SeasonCalendar] = None


def equinox_table() -> EquinoxTable:
    global _TABLE
    with _LOCK:
        if _TABLE is None:
            _TABLE = load_equinox_table(
                path=calendar_defaults.equinox_data_path(),
                url=calendar_defaults.equinox_data_url(),
                range_=calendar_defaults.equinox_range(),
            )
        return _TABLE


def get_calendar(layout_key: Optional[str] = None) -> SolarCalendar:
    """Return the shared engine for ``layout_key`` (default from configuration).

    Unknown keys raise ``ValueError``.
    """

    layout = get_layout(layout_key or calendar_defaults.default_layout())
    with _LOCK:
        engine = _ENGINES.get(layout.key)
        if engine is None:
            engine = SolarCalendar(
                equinox_table(),
                layout,
                approximate_missing=calendar_defaults.approximate_missing(),
            )
            if calendar_defaults.warm_cache():
                engine.warm()
            _ENGINES[layout.key] = engine
            logger.info("Built %r", engine)
        return engine


def get_seasons() -> SeasonCalendar:
    global _SEASONS
    with _LOCK:
        if _SEASONS is None:
            _SEASONS = SeasonCalendar(equinox_table())
        return _SEASONS


def reset() -> None:
    """Drop the loaded table and every engine (configuration changes, tests)."""

    global _TABLE, _SEASONS
    with _LOCK:
        _TABLE = None
        _SEASONS = None
        _ENGINES.clear()
