import pytest

from popmap import pipeline
from popmap.models import ColorTier, Dataset, FilterState
from popmap.pipeline import (
    CountrySelected,
    Explorer,
    FilterChanged,
    ResetRequested,
    build_map_instructions,
    build_trend_chart,
)


class RecordingMap:
    def __init__(self):
        self.calls = []
        self.markers = []

    def clear(self):
        self.calls.append("clear")
        self.markers = []

    def draw(self, instructions):
        self.calls.append("draw")
        self.markers = list(instructions)


class RecordingChart:
    def __init__(self):
        self.chart = None
        self.cleared = 0

    def show(self, chart):
        self.chart = chart

    def clear(self):
        self.chart = None
        self.cleared += 1


@pytest.fixture
def surfaces():
    return RecordingMap(), RecordingChart()


@pytest.fixture
def explorer(dataset, surfaces):
    map_surface, chart_surface = surfaces
    explorer = Explorer(dataset, map_surface, chart_surface)
    explorer.start()
    return explorer


def test_map_instructions_only_for_plottable_rows(dataset):
    instructions = build_map_instructions(dataset, FilterState())
    assert [i.country for i in instructions] == ["China", "India", "France"]

    china = instructions[0]
    assert (china.lat, china.lon) == (35.86, 104.19)
    assert china.color_tier is ColorTier.HIGH
    assert china.tooltip_text.startswith("<b>China</b><br>Year 2022: 1,425,887,337")


def test_region_without_matches_never_encodes(dataset, monkeypatch):
    def fail(result):
        raise AssertionError("encoder should not run")

    monkeypatch.setattr(pipeline, "encode", fail)
    without_asia = Dataset(
        rows=tuple(row for row in dataset.rows if row.continent != "Asia"),
        index=dataset.index,
        years=dataset.years,
        regions=dataset.regions,
    )
    assert build_map_instructions(without_asia, FilterState(region_selector="Asia")) == []


def test_trend_chart_instruction(dataset):
    chart = build_trend_chart(dataset.find_row("France"))
    assert chart.title == "Population Trend for France"
    assert [p.year for p in chart.series] == [2022]
    assert chart.x_domain == (2022, 2025)
    assert chart.y_domain == (0, 64626628)


def test_start_draws_default_map(explorer, surfaces):
    map_surface, _ = surfaces
    assert explorer.filter_state == FilterState("All", "All")
    assert map_surface.calls == ["clear", "draw"]
    assert len(map_surface.markers) == 3


def test_filter_change_replaces_state_and_redraws(explorer, surfaces):
    map_surface, _ = surfaces
    before = explorer.filter_state

    explorer.dispatch(FilterChanged(region="Europe"))
    explorer.dispatch(FilterChanged(year="2020"))

    assert before == FilterState()
    assert explorer.filter_state == FilterState("2020", "Europe")
    assert [m.country for m in map_surface.markers] == ["France"]
    assert map_surface.markers[0].tooltip_text == "<b>France</b><br>Population: n/a  Year: 2020"
    assert map_surface.calls == ["clear", "draw"] * 3


def test_country_selection_shows_trend(explorer, surfaces):
    _, chart_surface = surfaces
    explorer.dispatch(CountrySelected("China"))
    assert chart_surface.chart.title == "Population Trend for China"
    assert [p.year for p in chart_surface.chart.series] == [2020, 2022]


def test_unknown_country_selection_is_ignored(explorer, surfaces):
    _, chart_surface = surfaces
    explorer.dispatch(CountrySelected("Narnia"))
    assert chart_surface.chart is None


def test_reset_restores_defaults_and_clears_chart(explorer, surfaces):
    map_surface, chart_surface = surfaces
    explorer.dispatch(FilterChanged(year="2022", region="Asia"))
    explorer.dispatch(CountrySelected("India"))

    explorer.dispatch(ResetRequested())

    assert explorer.filter_state == FilterState("All", "All")
    assert chart_surface.chart is None
    assert chart_surface.cleared == 1
    assert len(map_surface.markers) == 3


def test_invalid_selector_gives_empty_map(explorer, surfaces):
    map_surface, _ = surfaces
    explorer.dispatch(FilterChanged(region="Antarctica"))
    assert map_surface.markers == []


def test_unsupported_event_raises(explorer):
    with pytest.raises(TypeError):
        explorer.dispatch("click")
