"""Calendar conversion endpoints."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, HTTPException, Path, Query

from ..schemas import (
    ConversionResponse,
    GregorianOut,
    LayoutKey,
    MetaOut,
    MonthTitleResponse,
    SeasonEventsResponse,
    SeasonMarkerOut,
    SolarOut,
    YearInfoResponse,
)
from ..services.calendar_service import get_calendar, get_seasons
from ..services.calendar_types import CalendarDate, Conversion, SolarDate
from ..services.converter import SolarCalendar
from ..services.errors import InvalidInputDate, MonthIndexError
from ..services.seasons import SeasonMarker
from ..services.titles import MonthTitle, format_gregorian_month_title, format_solar_month_title


router = APIRouter(prefix="/v1/calendar", tags=["calendar"])

DEGRADED_WARNING = "Approximate vernal equinox data used; anchor and leap-year accuracy is reduced."

LayoutQuery = Query(default=None, description="Month layout; defaults to SOLARCAL_DEFAULT_LAYOUT")


def _meta(engine: SolarCalendar, degraded: bool) -> MetaOut:
    return MetaOut(
        layout=engine.layout.key,
        equinox_source=engine.table.source,
        degraded=degraded,
        warnings=[DEGRADED_WARNING] if degraded else None,
    )


def _gregorian_out(day: CalendarDate) -> GregorianOut:
    return GregorianOut(date=day.isoformat(), weekday=day.weekday_name)


def _solar_out(solar: SolarDate) -> SolarOut:
    return SolarOut(
        year=solar.year,
        month_index=solar.month_index,
        month_number=solar.month_number,
        month_name=solar.month_name,
        day=solar.day,
        day_of_year=solar.day_of_year,
        special_day=solar.special_day.value,
    )


def _marker_out(marker: SeasonMarker) -> SeasonMarkerOut:
    return SeasonMarkerOut(
        key=marker.key,
        date=marker.date.isoformat(),
        icon=marker.icon,
        css_class=marker.css_class,
    )


def _not_found(result: Conversion) -> HTTPException:
    return HTTPException(status_code=404, detail=result.reason or "not_found")


def _convert(engine: SolarCalendar, day: CalendarDate) -> ConversionResponse:
    result = engine.gregorian_to_solar_status(day)
    if not result.ok:
        raise _not_found(result)
    marker = get_seasons().check_astronomical_event(day)
    return ConversionResponse(
        gregorian=_gregorian_out(day),
        solar=_solar_out(result.value),
        event=_marker_out(marker) if marker else None,
        meta=_meta(engine, result.degraded),
    )


@router.get("/today", response_model=ConversionResponse, summary="Today's date in the solar calendar")
def today(layout: Optional[LayoutKey] = LayoutQuery):
    return _convert(get_calendar(layout), CalendarDate.today())


@router.get(
    "/gregorian/{date}",
    response_model=ConversionResponse,
    summary="Convert a Gregorian date (YYYY-MM-DD) to the solar calendar",
)
def gregorian_to_solar(date: str, layout: Optional[LayoutKey] = LayoutQuery):
    try:
        day = CalendarDate.parse(date)
    except InvalidInputDate as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    return _convert(get_calendar(layout), day)


@router.get(
    "/solar/{year}/{day_of_year}",
    response_model=ConversionResponse,
    summary="Convert a solar day of year to its Gregorian date",
)
def solar_to_gregorian(
    year: int,
    day_of_year: int = Path(..., ge=1),
    layout: Optional[LayoutKey] = LayoutQuery,
):
    engine = get_calendar(layout)
    result = engine.solar_day_to_gregorian_status(year, day_of_year)
    if not result.ok:
        raise _not_found(result)
    solar = engine.solar_date_for_day(year, day_of_year)
    marker = get_seasons().check_astronomical_event(result.value)
    return ConversionResponse(
        gregorian=_gregorian_out(result.value),
        solar=_solar_out(solar),
        event=_marker_out(marker) if marker else None,
        meta=_meta(engine, result.degraded),
    )


@router.get("/years/{year}", response_model=YearInfoResponse, summary="Anchor and leap status of a solar year")
def year_info(year: int, layout: Optional[LayoutKey] = LayoutQuery):
    engine = get_calendar(layout)
    anchor = engine.anchors.resolve_status(year)
    if not anchor.ok:
        raise _not_found(anchor)
    leap = engine.leap.leap_status(year)
    equinox = engine.anchors.equinox(year)
    return YearInfoResponse(
        year=year,
        equinox=equinox.isoformat() if equinox else None,
        anchor=anchor.value.isoformat(),
        is_leap=bool(leap.value),
        length=engine.year_length(year),
        meta=_meta(engine, anchor.degraded or leap.degraded),
    )


def _title_response(engine: SolarCalendar, title: MonthTitle) -> MonthTitleResponse:
    return MonthTitleResponse(
        primary=title.primary,
        secondary=title.secondary,
        meta=_meta(engine, title.degraded),
    )


@router.get("/titles/solar/{year}/{month_index}", response_model=MonthTitleResponse)
def solar_month_title(year: int, month_index: int, layout: Optional[LayoutKey] = LayoutQuery):
    engine = get_calendar(layout)
    try:
        title = format_solar_month_title(engine, month_index, year)
    except MonthIndexError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return _title_response(engine, title)


@router.get("/titles/gregorian/{year}/{month_index}", response_model=MonthTitleResponse)
def gregorian_month_title(year: int, month_index: int, layout: Optional[LayoutKey] = LayoutQuery):
    engine = get_calendar(layout)
    try:
        title = format_gregorian_month_title(engine, month_index, year)
    except MonthIndexError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except InvalidInputDate as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    return _title_response(engine, title)


@router.get("/events/{year}", response_model=SeasonEventsResponse, summary="Approximate seasonal markers")
def season_events(year: int):
    if not 1 <= year <= 9999:
        raise HTTPException(status_code=422, detail="year must be within 1..9999")
    markers = get_seasons().markers(year)
    return SeasonEventsResponse(year=year, events=[_marker_out(m) for m in markers])
