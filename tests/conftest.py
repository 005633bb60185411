import json

import pytest

from solarcal.services import calendar_service
from solarcal.services.calendar_types import CalendarDate
from solarcal.services.converter import SolarCalendar
from solarcal.services.equinox import EquinoxTable, fallback_table
from solarcal.services.layouts import FIXED_28, FIXED_28_EQUINOX, VARIABLE


# Observed vernal equinox dates (UTC); every one of these years falls on March 20.
OBSERVED_EQUINOXES = {year: CalendarDate(year, 3, 20) for year in range(2022, 2030)}


@pytest.fixture(autouse=True)
def _fresh_calendar_service(monkeypatch):
    for name in (
        "EQUINOX_DATA_PATH",
        "EQUINOX_DATA_URL",
        "EQUINOX_RANGE_START",
        "EQUINOX_RANGE_END",
        "SOLARCAL_DEFAULT_LAYOUT",
        "SOLARCAL_APPROXIMATE_MISSING",
        "SOLARCAL_WARM_CACHE",
        "LOGGING_ENABLED",
    ):
        monkeypatch.delenv(name, raising=False)
    calendar_service.reset()
    yield
    calendar_service.reset()


@pytest.fixture
def observed_table():
    return EquinoxTable(OBSERVED_EQUINOXES, source="observed")


@pytest.fixture(scope="session")
def approx_table():
    return fallback_table()


@pytest.fixture
def fixed28(observed_table):
    return SolarCalendar(observed_table, FIXED_28)


@pytest.fixture
def fixed28_equinox(observed_table):
    return SolarCalendar(observed_table, FIXED_28_EQUINOX)


@pytest.fixture
def variable(observed_table):
    return SolarCalendar(observed_table, VARIABLE)


@pytest.fixture
def equinox_file(tmp_path):
    path = tmp_path / "spring_equinox_dates.json"
    records = [{"year": year, "date": day.isoformat()} for year, day in OBSERVED_EQUINOXES.items()]
    path.write_text(json.dumps(records), encoding="utf-8")
    return path
