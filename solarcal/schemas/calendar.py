from pydantic import BaseModel
from typing import Optional, List, Literal

LayoutKey = Literal["fixed28", "fixed28-equinox", "variable"]
SpecialDayName = Literal["none", "year_day", "leap_day"]


class MetaOut(BaseModel):
    engine: str = "solarcal"
    layout: str
    equinox_source: str
    degraded: bool = False
    warnings: Optional[List[str]] = None


class GregorianOut(BaseModel):
    date: str  # YYYY-MM-DD
    weekday: str


class SolarOut(BaseModel):
    year: int
    month_index: Optional[int] = None
    month_number: Optional[int] = None
    month_name: str
    day: int
    day_of_year: int
    special_day: SpecialDayName = "none"


class SeasonMarkerOut(BaseModel):
    key: str
    date: str
    icon: str
    css_class: str


class ConversionResponse(BaseModel):
    gregorian: GregorianOut
    solar: SolarOut
    event: Optional[SeasonMarkerOut] = None
    meta: MetaOut


class YearInfoResponse(BaseModel):
    year: int
    equinox: Optional[str] = None
    anchor: str
    is_leap: bool
    length: int
    meta: MetaOut


class MonthTitleResponse(BaseModel):
    primary: str
    secondary: str
    meta: MetaOut


class SeasonEventsResponse(BaseModel):
    year: int
    events: List[SeasonMarkerOut]
