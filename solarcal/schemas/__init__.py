from .calendar import (
    LayoutKey,
    MetaOut,
    GregorianOut,
    SolarOut,
    SeasonMarkerOut,
    ConversionResponse,
    YearInfoResponse,
    MonthTitleResponse,
    SeasonEventsResponse,
)
