"""Environment-driven defaults for the calendar engine."""

import os
from typing import Optional, Tuple


DEF_LAYOUT = "fixed28"
DEF_RANGE_START = 1899
DEF_RANGE_END = 2101


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() == "true"


def equinox_data_path() -> Optional[str]:
    return os.getenv("EQUINOX_DATA_PATH") or None


def equinox_data_url() -> Optional[str]:
    return os.getenv("EQUINOX_DATA_URL") or None


def equinox_range() -> Tuple[int, int]:
    """Configured equinox year range, falling back to the defaults on bad input."""

    try:
        start = int(os.getenv("EQUINOX_RANGE_START", str(DEF_RANGE_START)))
        end = int(os.getenv("EQUINOX_RANGE_END", str(DEF_RANGE_END)))
    except ValueError:
        return DEF_RANGE_START, DEF_RANGE_END
    if start > end:
        return DEF_RANGE_START, DEF_RANGE_END
    return start, end


def default_layout() -> str:
    raw = os.getenv("SOLARCAL_DEFAULT_LAYOUT")
    return raw.strip().lower() if raw and raw.strip() else DEF_LAYOUT


def approximate_missing() -> bool:
    return _flag("SOLARCAL_APPROXIMATE_MISSING", "false")


def warm_cache() -> bool:
    return _flag("SOLARCAL_WARM_CACHE", "true")
