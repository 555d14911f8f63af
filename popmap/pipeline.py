"""Event dispatch: turn user interactions into map and chart instructions.

This module connects the pure pipeline functions to the two rendering
surfaces.  User interactions arrive as explicit event objects:

* :class:`FilterChanged` when a year or region dropdown changes,
* :class:`CountrySelected` when a map marker is clicked,
* :class:`ResetRequested` when the reset button is pressed.

:class:`Explorer` consumes these one at a time.  Its only state is the
current :class:`~popmap.models.FilterState`; every event recomputes the
derived output from scratch and hands it to the surfaces.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import List, Optional, Protocol, Sequence, Union

from .aggregation import aggregate
from .encoding import encode
from .filters import is_visible, reset_filter
from .models import ChartInstruction, Dataset, DrawInstruction, FilterState, PopulationRow
from .trend import compute_scales, extract_trend

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FilterChanged:
    """New dropdown value(s); ``None`` keeps the current selector."""

    year: Optional[str] = None
    region: Optional[str] = None


@dataclass(frozen=True)
class CountrySelected:
    country: str


@dataclass(frozen=True)
class ResetRequested:
    pass


Event = Union[FilterChanged, CountrySelected, ResetRequested]


# ---------------------------------------------------------------------------
# Rendering surfaces
# ---------------------------------------------------------------------------


class MapSurface(Protocol):
    def clear(self) -> None: ...

    def draw(self, instructions: Sequence[DrawInstruction]) -> None: ...


class ChartSurface(Protocol):
    def show(self, chart: ChartInstruction) -> None: ...

    def clear(self) -> None: ...


# ---------------------------------------------------------------------------
# Instruction builders
# ---------------------------------------------------------------------------


def tooltip_text(country: str, summary_lines: Sequence[str]) -> str:
    return "<br>".join([f"<b>{country}</b>", *summary_lines])


def build_map_instructions(
    dataset: Dataset, filter_state: FilterState
) -> List[DrawInstruction]:
    """Build one draw instruction per visible country, in row order.

    Parameters
    ----------
    dataset : Dataset
        Loaded rows and the country join index.
    filter_state : FilterState
        Current year/region selection.

    Returns
    -------
    List[DrawInstruction]
        Empty when no row is visible (e.g. an unknown region).
    """
    instructions: List[DrawInstruction] = []
    for row in dataset.rows:
        if not is_visible(row, dataset.index, filter_state):
            continue
        result = aggregate(row, dataset.index, filter_state)
        marker = encode(result)
        instructions.append(
            DrawInstruction(
                country=row.country,
                lat=result.coords.lat,
                lon=result.coords.lon,
                radius=marker.radius,
                color_tier=marker.color_tier,
                tooltip_text=tooltip_text(row.country, result.summary_lines),
            )
        )
    return instructions


def build_trend_chart(row: PopulationRow) -> ChartInstruction:
    series = extract_trend(row)
    scales = compute_scales(series)
    return ChartInstruction(
        series=series,
        x_domain=scales.x_domain,
        y_domain=scales.y_domain,
        title=f"Population Trend for {row.country}",
    )


# ---------------------------------------------------------------------------
# Dispatcher
# ---------------------------------------------------------------------------


class Explorer:
    """Single-threaded event loop body for one viewer session."""

    def __init__(
        self,
        dataset: Dataset,
        map_surface: MapSurface,
        chart_surface: ChartSurface,
    ) -> None:
        self.dataset = dataset
        self.map_surface = map_surface
        self.chart_surface = chart_surface
        self.filter_state = reset_filter()

    def start(self) -> None:
        self._redraw_map()

    def dispatch(self, event: Event) -> None:
        if isinstance(event, FilterChanged):
            self._on_filter_changed(event)
        elif isinstance(event, CountrySelected):
            self._on_country_selected(event)
        elif isinstance(event, ResetRequested):
            self._on_reset()
        else:
            raise TypeError(f"Unsupported event: {event!r}")

    def _on_filter_changed(self, event: FilterChanged) -> None:
        changes = {}
        if event.year is not None:
            changes["year_selector"] = event.year
        if event.region is not None:
            changes["region_selector"] = event.region
        self.filter_state = replace(self.filter_state, **changes)
        logger.debug("Filter changed to %s", self.filter_state)
        self._redraw_map()

    def _on_country_selected(self, event: CountrySelected) -> None:
        row = self.dataset.find_row(event.country)
        if row is None:
            logger.debug("Ignoring selection of unknown country %r", event.country)
            return
        self.chart_surface.show(build_trend_chart(row))

    def _on_reset(self) -> None:
        self.filter_state = reset_filter()
        self.chart_surface.clear()
        self._redraw_map()

    def _redraw_map(self) -> None:
        instructions = build_map_instructions(self.dataset, self.filter_state)
        self.map_surface.clear()
        self.map_surface.draw(instructions)
