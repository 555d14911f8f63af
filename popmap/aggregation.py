"""Per-country population aggregation for the current filter state.

With the year selector on "All" every year column of a row is summed and
the latest year provides the point-in-time value.  With a specific year
selected both values come from that single column.  Unparsable cells
count as 0 and never abort the computation.
"""

from __future__ import annotations

from typing import List, Mapping, Optional, Tuple

from .config import ALL_YEARS_DIVISOR, SINGLE_YEAR_DIVISOR
from .filters import is_visible
from .join_index import lookup
from .models import AggregationResult, CoordinateRecord, FilterState, PopulationRow
from .schema import parse_year


def format_population(value: Optional[int]) -> str:
    """Thousands-separated population, ``n/a`` for unparsable cells."""
    return "n/a" if value is None else f"{value:,}"


def latest_year_value(row: PopulationRow) -> int:
    """Population of the numerically largest year label in the row.

    The latest label wins even when its own value is unparsable, which
    then yields 0.
    """
    latest: Optional[int] = None
    current = 0
    for label, value in row.year_values.items():
        year = parse_year(label)
        if year is None:
            continue
        if latest is None or year > latest:
            latest = year
            current = value or 0
    return current


def _aggregate_all_years(row: PopulationRow) -> Tuple[int, int, List[str]]:
    total = 0
    lines: List[str] = []
    for label, value in row.year_values.items():
        total += value or 0
        lines.append(f"Year {label}: {format_population(value)}")
    return total, latest_year_value(row), lines


def _aggregate_single_year(row: PopulationRow, year: str) -> Tuple[int, int, List[str]]:
    value = row.year_values.get(year)
    population = value or 0
    lines = [f"Population: {format_population(value)}  Year: {year}"]
    return population, population, lines


def aggregate(
    row: PopulationRow,
    index: Mapping[str, CoordinateRecord],
    filter_state: FilterState,
) -> AggregationResult:
    """Compute the population values and summary for one country.

    Parameters
    ----------
    row : PopulationRow
        The country's population data.
    index : Mapping[str, CoordinateRecord]
        Country join index used for the coordinates and visibility.
    filter_state : FilterState
        Current year/region selection.

    Returns
    -------
    AggregationResult
        A new result; calling twice with the same inputs gives equal
        results.
    """
    if filter_state.all_years:
        total, current, lines = _aggregate_all_years(row)
        divisor = ALL_YEARS_DIVISOR
    else:
        total, current, lines = _aggregate_single_year(row, filter_state.year_selector)
        divisor = SINGLE_YEAR_DIVISOR

    return AggregationResult(
        country=row.country,
        coords=lookup(index, row.country),
        visible=is_visible(row, index, filter_state),
        total_population=total,
        current_population=current,
        summary_lines=tuple(lines),
        divisor=divisor,
    )
