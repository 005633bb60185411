import logging

import pytest

from solarcal.services.calendar_types import CalendarDate
from solarcal.services.converter import UNRESOLVED_YEAR, SolarCalendar
from solarcal.services.equinox import EquinoxTable
from solarcal.services.layouts import VARIABLE


def test_equinox_is_first_day_of_farvardin(variable):
    assert variable.resolve_year_anchor(2023) == CalendarDate(2023, 3, 20)
    solar = variable.gregorian_to_solar("2023-03-20")
    assert (solar.year, solar.month_index, solar.day, solar.month_name) == (2023, 0, 1, "Farvardin")


@pytest.mark.parametrize(
    "gregorian, month_index, day, name",
    [
        ("2023-04-19", 0, 31, "Farvardin"),
        ("2023-04-20", 1, 1, "Ordibehesht"),
        ("2023-09-21", 5, 31, "Shahrivar"),
        ("2023-09-22", 6, 1, "Mehr"),
        ("2024-02-19", 11, 1, "Esfand"),
    ],
)
def test_month_boundaries(variable, gregorian, month_index, day, name):
    solar = variable.gregorian_to_solar(gregorian)
    assert solar.year == 2023
    assert (solar.month_index, solar.day, solar.month_name) == (month_index, day, name)


def test_last_month_gains_a_day_in_leap_years(variable):
    assert variable.is_leap_year(2023)
    assert variable.days_in_month(11, 2023) == 30
    last = variable.gregorian_to_solar(variable.solar_day_to_gregorian(2023, 366))
    assert (last.year, last.month_name, last.day, last.day_of_year) == (2023, "Esfand", 30, 366)

    assert not variable.is_leap_year(2024)
    assert variable.days_in_month(11, 2024) == 29
    assert variable.solar_day_to_gregorian(2024, 365) == CalendarDate(2025, 3, 19)
    assert variable.solar_day_to_gregorian(2024, 366) is None


def test_no_special_days_in_variable_layout(variable):
    for day_of_year in range(1, variable.year_length(2023) + 1):
        solar = variable.solar_date_for_day(2023, day_of_year)
        assert not solar.is_special
        assert solar.month_index is not None


def test_month_start_days(variable):
    assert variable.month_start_day(6) == 187
    assert variable.month_start_day(11) == 337


def test_overflow_steps_forward_to_the_next_year():
    # Malformed table: both anchors sit a year early.
    table = EquinoxTable({2024: CalendarDate(2023, 3, 20), 2025: CalendarDate(2024, 3, 20)})
    engine = SolarCalendar(table, VARIABLE)
    status = engine.gregorian_to_solar_status("2024-06-01")
    assert (status.value.year, status.value.month_name, status.value.day) == (2025, "Khordad", 12)
    # 2026 is absent, so the length of 2025 comes from the Gregorian rule.
    assert status.degraded


def test_overflow_into_a_missing_year_has_no_result(caplog):
    caplog.set_level(logging.WARNING)
    engine = SolarCalendar(EquinoxTable({2023: CalendarDate(2023, 3, 20)}), VARIABLE)
    # 2023-03-20 + 365 days; 2023 is 365 days long by the Gregorian rule.
    status = engine.gregorian_to_solar_status("2024-03-19")
    assert status.value is None
    assert status.reason == "missing_anchor_data"
    assert "overflowed solar year 2023" in caplog.text


def test_year_search_is_bounded_on_malformed_data(caplog):
    caplog.set_level(logging.WARNING)
    table = EquinoxTable(
        {
            2022: CalendarDate(2025, 4, 1),
            2023: CalendarDate(2025, 5, 1),
            2024: CalendarDate(2025, 6, 1),
        }
    )
    engine = SolarCalendar(table, VARIABLE)
    status = engine.gregorian_to_solar_status("2024-06-01")
    assert status.value is None
    assert status.reason == UNRESOLVED_YEAR
    assert "within 3 steps" in caplog.text


def test_days_past_the_last_representable_date_have_no_result():
    engine = SolarCalendar(EquinoxTable({9998: CalendarDate(9999, 12, 30)}), VARIABLE)
    assert engine.solar_day_to_gregorian(9998, 2) == CalendarDate(9999, 12, 31)
    status = engine.solar_day_to_gregorian_status(9998, 5)
    assert status.value is None
    assert status.reason == "out_of_range_day"
