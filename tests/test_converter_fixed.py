import dataclasses

import pytest

from solarcal.services.calendar_types import CalendarDate, SpecialDay
from solarcal.services.converter import SolarCalendar
from solarcal.services.errors import InvalidInputDate, MonthIndexError
from solarcal.services.layouts import FIXED_28, AnchorPolicy


def test_year_starts_on_first_monday_after_equinox(fixed28):
    # Equinox 2025-03-20 is a Thursday.
    assert fixed28.resolve_year_anchor(2025) == CalendarDate(2025, 3, 24)
    assert fixed28.solar_day_to_gregorian(2025, 1) == CalendarDate(2025, 3, 24)


def test_anchor_date_is_day_one(fixed28):
    solar = fixed28.gregorian_to_solar(CalendarDate(2025, 3, 24))
    assert (solar.year, solar.month_index, solar.day) == (2025, 0, 1)
    assert solar.month_name == "March"
    assert solar.day_of_year == 1
    assert solar.special_day is SpecialDay.NONE


def test_day_before_anchor_belongs_to_previous_year(fixed28):
    solar = fixed28.gregorian_to_solar("2025-03-23")
    assert solar.year == 2024
    assert solar.day_of_year == 364
    assert (solar.month_index, solar.day, solar.month_name) == (12, 28, "Sol")


def test_january_dates_step_back_a_year(fixed28):
    solar = fixed28.gregorian_to_solar("2025-01-01")
    # 2024-03-25 + 282 days
    assert solar.year == 2024
    assert solar.day_of_year == 283
    assert (solar.month_index, solar.day) == (10, 3)
    assert solar.month_name == "January"


def test_long_year_ends_with_intercalary_days(fixed28):
    # 2023 runs Monday 2023-03-20 .. Sunday 2024-03-24: 371 days.
    year_day = fixed28.solar_day_to_gregorian(2023, 365)
    assert year_day == CalendarDate(2024, 3, 18)
    solar = fixed28.gregorian_to_solar(year_day)
    assert solar.special_day is SpecialDay.YEAR_DAY
    assert solar.month_name == "Year Day"
    assert solar.month_index is None and solar.day == 1

    leap_day = fixed28.gregorian_to_solar(fixed28.solar_day_to_gregorian(2023, 366))
    assert leap_day.special_day is SpecialDay.LEAP_DAY
    assert leap_day.month_name == "Leap Day"
    assert leap_day.day == 2

    last = fixed28.gregorian_to_solar(CalendarDate(2024, 3, 24))
    assert last.special_day is SpecialDay.LEAP_DAY
    assert (last.year, last.day_of_year, last.day) == (2023, 371, 7)
    assert fixed28.solar_day_to_gregorian(2023, 372) is None


def test_short_year_has_no_intercalary_days(fixed28):
    assert fixed28.year_length(2024) == 364
    status = fixed28.solar_day_to_gregorian_status(2024, 365)
    assert status.value is None
    assert status.reason == "out_of_range_day"
    assert fixed28.solar_day_to_gregorian(2024, 0) is None


def test_year_day_marker_for_equinox_anchored_fixed_layout(observed_table):
    plain = dataclasses.replace(FIXED_28, key="fixed28-plain", anchor_policy=AnchorPolicy.NONE)
    engine = SolarCalendar(observed_table, plain)
    # anchor(2026) - anchor(2025) == 365
    assert not engine.is_leap_year(2025)
    solar = engine.gregorian_to_solar(engine.solar_day_to_gregorian(2025, 365))
    assert solar.special_day is SpecialDay.YEAR_DAY
    assert solar.month_name == "Year Day"
    assert solar.month_index is None
    assert engine.solar_day_to_gregorian(2025, 366) is None

    assert engine.is_leap_year(2023)
    leap_day = engine.gregorian_to_solar(CalendarDate(2024, 3, 19))
    assert (leap_day.year, leap_day.special_day, leap_day.day) == (2023, SpecialDay.LEAP_DAY, 2)


def test_equinox_variant_names_its_special_days(fixed28_equinox):
    solar = fixed28_equinox.gregorian_to_solar(CalendarDate(2025, 3, 19))
    assert solar.year == 2024
    assert solar.special_day is SpecialDay.YEAR_DAY
    assert solar.month_name == "Equinox Day"
    quintilis = fixed28_equinox.gregorian_to_solar("2023-07-10")
    assert (quintilis.month_index, quintilis.day, quintilis.month_name) == (4, 1, "Quintilis")


def test_missing_data_returns_no_result(fixed28):
    status = fixed28.gregorian_to_solar_status("1990-06-01")
    assert status.value is None
    assert status.reason == "missing_anchor_data"
    assert fixed28.solar_day_to_gregorian(1990, 1) is None
    assert fixed28.solar_date_for_day(1990, 1) is None


def test_date_after_table_end_uses_previous_year(fixed28):
    # 2030 is absent; January 2030 still belongs to solar 2029.
    solar = fixed28.gregorian_to_solar("2030-01-10")
    assert solar.year == 2029


def test_last_table_year_is_degraded(fixed28):
    status = fixed28.gregorian_to_solar_status("2029-04-01")
    assert status.value.year == 2029
    assert (status.value.month_index, status.value.day) == (0, 7)
    assert status.degraded
    assert not fixed28.gregorian_to_solar_status("2025-04-01").degraded


def test_invalid_input_fails_loudly(fixed28):
    with pytest.raises(InvalidInputDate):
        fixed28.gregorian_to_solar("2025-02-29")
    with pytest.raises(InvalidInputDate):
        fixed28.gregorian_to_solar(None)


def test_month_helpers(fixed28):
    assert fixed28.month_start_day(0) == 1
    assert fixed28.month_start_day(12) == 337
    assert fixed28.days_in_month(12, 2024) == 28
    with pytest.raises(MonthIndexError):
        fixed28.month_start_day(13)
    with pytest.raises(IndexError):
        fixed28.days_in_month(-1, 2024)


def test_approximated_years_convert_and_are_degraded(observed_table):
    engine = SolarCalendar(observed_table, FIXED_28, approximate_missing=True)
    # 2021 is filled in as 2021-03-20 (Saturday), snapped to Monday 2021-03-22.
    assert engine.resolve_year_anchor(2021) == CalendarDate(2021, 3, 22)
    status = engine.gregorian_to_solar_status("2022-01-01")
    assert status.value.year == 2021
    assert (status.value.month_name, status.value.day) == ("January", 6)
    assert status.degraded
    assert status.reason == "degraded_approximation"

    assert engine.solar_day_to_gregorian_status(2030, 1).value == CalendarDate(2030, 3, 25)
    assert engine.solar_day_to_gregorian_status(2030, 1).degraded
    assert not engine.gregorian_to_solar_status("2025-06-01").degraded
