"""Vernal equinox lookup table.

The table maps a Gregorian year to the calendar date of that year's vernal
equinox. It is loaded once (from a JSON file or URL holding
``[{"year": 2025, "date": "2025-03-20"}, ...]``) and never mutated. When the
source is unavailable a deterministic approximation is synthesised instead
and the table is marked as approximate so every downstream answer can say so.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterable, Iterator, Mapping, Optional, Tuple

import requests

from .calendar_types import CalendarDate, is_gregorian_leap
from .errors import InvalidInputDate


logger = logging.getLogger(__name__)


# The converter looks one year either side of the queried year.
DEFAULT_RANGE: Tuple[int, int] = (1899, 2101)
FETCH_TIMEOUT_SECONDS = 10

SOURCE_FALLBACK = "fallback"
SOURCE_MEMORY = "memory"


class EquinoxTable(Mapping[int, CalendarDate]):
    """Read-only ``year -> CalendarDate`` mapping with provenance."""

    def __init__(
        self,
        entries: Mapping[int, CalendarDate],
        *,
        approximate: bool = False,
        source: str = SOURCE_MEMORY,
    ) -> None:
        self._entries: Mapping[int, CalendarDate] = MappingProxyType(
            {int(year): CalendarDate.parse(value) for year, value in entries.items()}
        )
        self.approximate = approximate
        self.source = source

    def __getitem__(self, year: int) -> CalendarDate:
        return self._entries[year]

    def __iter__(self) -> Iterator[int]:
        return iter(sorted(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def first_year(self) -> Optional[int]:
        return min(self._entries) if self._entries else None

    @property
    def last_year(self) -> Optional[int]:
        return max(self._entries) if self._entries else None

    def __repr__(self) -> str:
        return (
            f"EquinoxTable(source={self.source!r}, years={self.first_year}..{self.last_year}, "
            f"approximate={self.approximate})"
        )


def fallback_equinox_date(year: int) -> CalendarDate:
    """Approximate vernal equinox: March 20, March 19 in leap years from 2044."""

    day = 19 if year >= 2044 and is_gregorian_leap(year) else 20
    return CalendarDate(year, 3, day)


def fallback_table(range_: Tuple[int, int] = DEFAULT_RANGE) -> EquinoxTable:
    start, end = range_
    logger.warning("Using fallback vernal equinox data (approximation) for %s..%s", start, end)
    entries = {year: fallback_equinox_date(year) for year in range(start, end + 1)}
    return EquinoxTable(entries, approximate=True, source=SOURCE_FALLBACK)


def _parse_record(entry: Mapping[str, Any]) -> Tuple[int, CalendarDate]:
    try:
        year = int(str(entry["year"]).strip())
        raw_date = str(entry["date"]).strip()
    except (KeyError, TypeError, ValueError) as exc:
        raise InvalidInputDate(f"Malformed equinox record: {entry!r}") from exc

    parts = raw_date.split("-")
    if len(parts) < 3:
        raise InvalidInputDate(f"Malformed equinox date {raw_date!r} for {year}")
    try:
        month, day = int(parts[-2]), int(parts[-1])
    except ValueError as exc:
        raise InvalidInputDate(f"Malformed equinox date {raw_date!r} for {year}") from exc
    # The record's own year is authoritative; the date string may be unpadded.
    return year, CalendarDate(year, month, day)


def table_from_records(
    records: Iterable[Mapping[str, Any]],
    range_: Tuple[int, int] = DEFAULT_RANGE,
    *,
    source: str = SOURCE_MEMORY,
) -> EquinoxTable:
    """Build a table from ``{year, date}`` records, keeping years inside ``range_``."""

    start, end = range_
    entries: Dict[int, CalendarDate] = {}
    for record in records:
        if not isinstance(record, Mapping):
            raise InvalidInputDate(f"Malformed equinox record: {record!r}")
        year, equinox = _parse_record(record)
        if start <= year <= end:
            entries[year] = equinox
    return EquinoxTable(entries, approximate=False, source=source)


def _read_records(path: Path) -> list:
    with path.open("r", encoding="utf-8") as handle:
        payload = json.load(handle)
    if isinstance(payload, dict):
        payload = payload.get("entries", [])
    if not isinstance(payload, list):
        raise ValueError(f"Equinox data in {path} must be a list of records")
    return payload


def _fetch_records(url: str) -> list:
    r = requests.get(url, timeout=FETCH_TIMEOUT_SECONDS)
    r.raise_for_status()
    payload = r.json()
    if isinstance(payload, dict):
        payload = payload.get("entries", [])
    if not isinstance(payload, list):
        raise ValueError(f"Equinox data at {url} must be a list of records")
    return payload


def load_equinox_table(
    path: Optional[str | os.PathLike[str]] = None,
    url: Optional[str] = None,
    range_: Tuple[int, int] = DEFAULT_RANGE,
) -> EquinoxTable:
    """Load equinox data from ``path`` or ``url``, degrading to the fallback table.

    A file path wins over a URL. Any read, network or parse failure, or a
    source with no entries in range, yields :func:`fallback_table`.
    """

    if not path and not url:
        return fallback_table(range_)

    try:
        if path:
            records = _read_records(Path(path))
            source = os.fspath(path)
        else:
            records = _fetch_records(url)
            source = url
        table = table_from_records(records, range_, source=source)
    except (OSError, ValueError, requests.RequestException) as exc:
        logger.error("Error loading vernal equinox data, using simplified fallback: %s", exc)
        return fallback_table(range_)

    if not len(table):
        logger.error("Vernal equinox source %s has no entries in %s..%s", source, *range_)
        return fallback_table(range_)

    logger.info("Vernal equinox data loaded from %s (%d years)", source, len(table))
    return table
