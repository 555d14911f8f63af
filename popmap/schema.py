"""Schema discovery for the population table.

The population table has a fixed pair of identifying columns
(``Country/Territory`` and ``Continent``) and an open set of year columns
named ``"<year> Population"``.  The helpers here discover which years and
regions exist, coerce raw cell values to integers and build the
:class:`~popmap.models.PopulationRow` objects consumed by the rest of the
pipeline.  Downstream code reads ``PopulationRow.year_values`` and never
re-derives column names.
"""

from __future__ import annotations

import math
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

import pandas as pd

from .config import CONTINENT_COL, COUNTRY_COL, YEAR_COLUMN_SUFFIX
from .models import PopulationRow


def year_label(column: str) -> Optional[str]:
    """Return ``"2022"`` for ``"2022 Population"``, otherwise ``None``."""
    if not isinstance(column, str) or not column.endswith(YEAR_COLUMN_SUFFIX):
        return None
    label = column[: -len(YEAR_COLUMN_SUFFIX)].strip()
    return label or None


def year_column(label: str) -> str:
    return f"{label}{YEAR_COLUMN_SUFFIX}"


def discover_years(rows: Sequence[Mapping[str, Any]]) -> List[str]:
    """Return the year labels found in the columns of the first row.

    All rows are assumed to share the first row's columns.  Labels keep
    the column order; duplicates are dropped.
    """
    if not rows:
        return []
    years: List[str] = []
    for key in rows[0].keys():
        label = year_label(key)
        if label is not None and label not in years:
            years.append(label)
    return years


def discover_regions(rows: Iterable[Mapping[str, Any]]) -> List[str]:
    """Return the distinct continent values in first-seen order."""
    regions: List[str] = []
    for row in rows:
        region = row.get(CONTINENT_COL)
        if region is not None and region not in regions:
            regions.append(region)
    return regions


def parse_population(value: Any) -> Optional[int]:
    """Coerce a raw cell to an int, or ``None`` if it is not numeric.

    Empty strings, ``None``, NaN and infinities are all unparsable.
    Fractional values are truncated.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    number = pd.to_numeric(value, errors="coerce")
    if pd.isna(number) or not math.isfinite(float(number)):
        return None
    return int(number)


def parse_year(label: str) -> Optional[int]:
    """Numeric value of a year label, ``None`` for non-numeric labels."""
    try:
        return int(label)
    except (TypeError, ValueError):
        return None


def build_population_rows(
    raw_rows: Iterable[Mapping[str, Any]], years: Sequence[str]
) -> List[PopulationRow]:
    """Build one :class:`PopulationRow` per raw row.

    Only the discovered ``years`` are read.  A row missing one of those
    columns simply has no entry for that label.
    """
    rows: List[PopulationRow] = []
    for raw in raw_rows:
        values: Dict[str, Optional[int]] = {}
        for label in years:
            column = year_column(label)
            if column in raw:
                values[label] = parse_population(raw[column])
        rows.append(
            PopulationRow(
                country=str(raw.get(COUNTRY_COL, "")),
                continent=str(raw.get(CONTINENT_COL, "")),
                year_values=MappingProxyType(values),
            )
        )
    return rows
