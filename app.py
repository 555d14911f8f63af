import logging
from typing import Sequence

import plotly.graph_objects as go
from shiny import reactive
from shiny.express import input, ui
from shinywidgets import render_widget

# Import organized modules
from popmap.config import ALL_SELECTOR, LOG_LEVEL
from popmap.data_manager import LoadFailure, load_dataset
from popmap.filters import region_choices, year_choices
from popmap.models import ChartInstruction, DrawInstruction
from popmap.pipeline import (
    CountrySelected,
    Explorer,
    FilterChanged,
    ResetRequested,
)
from popmap.plotting import create_population_map, create_trend_plot, empty_trend_plot

logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)

# ======================================================
#  DATA LOAD
# ======================================================
# Load once on startup; values stay in-memory until app restart.
try:
    dataset = load_dataset()
except LoadFailure as exc:
    dataset = None
    load_error = str(exc)
    logger.error("Visualization not initialized: %s", load_error)
else:
    load_error = None


# ======================================================
#  RENDERING SURFACES
# ======================================================
map_markers = reactive.Value(())
trend_chart = reactive.Value(None)
clicked_country = reactive.Value(None)


class ReactiveMapSurface:
    def clear(self) -> None:
        map_markers.set(())

    def draw(self, instructions: Sequence[DrawInstruction]) -> None:
        map_markers.set(tuple(instructions))


class ReactiveChartSurface:
    def show(self, chart: ChartInstruction) -> None:
        trend_chart.set(chart)

    def clear(self) -> None:
        trend_chart.set(None)


explorer = None
if dataset is not None:
    explorer = Explorer(dataset, ReactiveMapSurface(), ReactiveChartSurface())
    explorer.start()


# ======================================================
#  UI LAYOUT
# ======================================================
ui.page_opts(
    title="World Population Map",
    fillable=False,
    fillable_mobile=True,
    full_width=True,
    id="page",
    lang="en",
)

with ui.sidebar(open="always", position="right"):
    ui.input_select(
        "year",
        "Year",
        year_choices(dataset.years if dataset else ()),
        selected=ALL_SELECTOR,
    )
    ui.input_select(
        "region",
        "Region",
        region_choices(dataset.regions if dataset else ()),
        selected=ALL_SELECTOR,
    )
    ui.input_action_button(
        "reset_filters",
        "Reset filters",
        class_="btn-primary mt-3",
    )


# ======================================================
#  EVENTS
# ======================================================
@reactive.effect
@reactive.event(input.year)
def _year_changed():
    if explorer is not None:
        explorer.dispatch(FilterChanged(year=input.year()))


@reactive.effect
@reactive.event(input.region)
def _region_changed():
    if explorer is not None:
        explorer.dispatch(FilterChanged(region=input.region()))


@reactive.effect
@reactive.event(input.reset_filters)
def _reset_filters():
    ui.update_select("year", selected=ALL_SELECTOR)
    ui.update_select("region", selected=ALL_SELECTOR)
    if explorer is not None:
        explorer.dispatch(ResetRequested())


@reactive.effect
@reactive.event(clicked_country)
def _country_selected():
    country = clicked_country.get()
    if explorer is not None and country is not None:
        explorer.dispatch(CountrySelected(country))
        # Allow the same marker to be selected again after a reset
        clicked_country.set(None)


def _on_marker_click(trace, points, selector):
    if not points.point_inds:
        return
    clicked_country.set(trace.customdata[points.point_inds[0]])


# ======================================================
#  OUTPUTS
# ======================================================
if load_error is not None:
    ui.markdown(f"**Error loading data:** {load_error}")
else:
    with ui.card():

        @render_widget
        def population_map():
            fig = go.FigureWidget(create_population_map(map_markers.get()))
            fig.data[0].on_click(_on_marker_click)
            return fig

    with ui.card():

        @render_widget
        def population_trend():
            chart = trend_chart.get()
            if chart is None:
                return go.FigureWidget(empty_trend_plot())
            return go.FigureWidget(create_trend_plot(chart))
