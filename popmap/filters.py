"""Filter selection helpers and the row visibility predicate."""

from __future__ import annotations

from typing import List, Mapping, Sequence

from .config import ALL_SELECTOR
from .join_index import lookup
from .models import CoordinateRecord, FilterState, PopulationRow


def reset_filter() -> FilterState:
    return FilterState(year_selector=ALL_SELECTOR, region_selector=ALL_SELECTOR)


def year_choices(years: Sequence[str]) -> List[str]:
    """Dropdown options: "All" followed by the discovered years."""
    return [ALL_SELECTOR, *years]


def region_choices(regions: Sequence[str]) -> List[str]:
    return [ALL_SELECTOR, *regions]


def is_visible(
    row: PopulationRow,
    index: Mapping[str, CoordinateRecord],
    filter_state: FilterState,
) -> bool:
    """A row is visible when it can be plotted and matches the region.

    The year selector never affects visibility.  A region absent from the
    data just hides every row.
    """
    if lookup(index, row.country) is None:
        return False
    region = filter_state.region_selector
    return region == ALL_SELECTOR or row.continent == region
