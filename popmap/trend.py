"""Population time series for a single country and its chart scales."""

from __future__ import annotations

from typing import List

from .config import EMPTY_X_DOMAIN, EMPTY_Y_DOMAIN, YEAR_AXIS_PADDING
from .models import ChartScales, PopulationRow, TrendPoint, TrendSeries
from .schema import parse_year


def extract_trend(row: PopulationRow) -> TrendSeries:
    """Return the row's (year, population) points sorted by year.

    Zero and unparsable populations are dropped rather than plotted as
    zero.  The filter state plays no part here.
    """
    points: List[TrendPoint] = []
    for label, value in row.year_values.items():
        year = parse_year(label)
        if year is None or not value:
            continue
        points.append(TrendPoint(year=year, population=value))
    return tuple(sorted(points, key=lambda point: point.year))


def compute_scales(series: TrendSeries) -> ChartScales:
    """Axis domains for a trend chart.

    The x domain is padded past the last year and the y domain always
    starts at zero.  Empty series get a fixed safe domain.
    """
    if not series:
        return ChartScales(x_domain=EMPTY_X_DOMAIN, y_domain=EMPTY_Y_DOMAIN)

    years = [point.year for point in series]
    max_population = max(point.population for point in series)
    y_domain = (0, max_population) if max_population > 0 else EMPTY_Y_DOMAIN
    return ChartScales(
        x_domain=(min(years), max(years) + YEAR_AXIS_PADDING),
        y_domain=y_domain,
    )
