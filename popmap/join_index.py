"""Country name -> coordinate lookup built from the coordinate table."""

from __future__ import annotations

import math
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Optional

import pandas as pd

from .config import COORD_LAT_COL, COORD_LON_COL, COORD_NAME_COL
from .models import CoordinateRecord


def _parse_coordinate(value: Any) -> float:
    """Parse a latitude/longitude cell; NaN marks an invalid value."""
    if value is None or isinstance(value, bool):
        return math.nan
    if isinstance(value, str) and not value.strip():
        return math.nan
    number = pd.to_numeric(value, errors="coerce")
    return math.nan if pd.isna(number) else float(number)


def build_index(
    coordinate_rows: Iterable[Mapping[str, Any]],
) -> Mapping[str, CoordinateRecord]:
    """Map each country name to its :class:`CoordinateRecord`.

    Later rows overwrite earlier ones with the same name.  Rows with
    non-numeric coordinates are kept with NaN values so that the country
    is known but never plotted.
    """
    index: Dict[str, CoordinateRecord] = {}
    for row in coordinate_rows:
        country = row.get(COORD_NAME_COL)
        if country is None:
            continue
        country = str(country)
        index[country] = CoordinateRecord(
            country=country,
            lat=_parse_coordinate(row.get(COORD_LAT_COL)),
            lon=_parse_coordinate(row.get(COORD_LON_COL)),
        )
    return MappingProxyType(index)


def lookup(
    index: Mapping[str, CoordinateRecord], country: str
) -> Optional[CoordinateRecord]:
    """Return the plottable coordinate for ``country``, if any."""
    record = index.get(country)
    if record is None or not record.is_valid:
        return None
    return record
