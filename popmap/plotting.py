from typing import Sequence

import plotly.graph_objects as go

from .config import (
    MAP_CENTER,
    MAP_HEIGHT,
    MAP_PROJECTION,
    MARKER_OPACITY,
    MARKER_SIZE_FACTOR,
    TIER_COLORS,
    TREND_HEIGHT,
)
from .models import ChartInstruction, ColorTier, DrawInstruction


# ============================================================
# Configuration / constants
# ============================================================

HOVER_TEMPLATE_TREND = "Year: %{x}<br>Population: %{y:,}<extra></extra>"

LINE_COLOR = "#1f77b4"


# ============================================================
# Helper functions
# ============================================================


def _resolve_color(tier: ColorTier, palette: dict[str, str] | None = None) -> str:
    """
    Get the marker color for a tier (user palette overrides defaults).
    """
    colors = {**TIER_COLORS, **(palette or {})}
    return colors[tier.value]


def _marker_size(radius: float) -> float:
    # Plotly sizes markers by diameter
    return radius * MARKER_SIZE_FACTOR


# ============================================================
# Map
# ============================================================


def create_population_map(
    instructions: Sequence[DrawInstruction],
    *,
    palette: dict[str, str] | None = None,
) -> go.Figure:
    """
    Draw one marker per instruction on a world map.

    Parameters
    ----------
    instructions : Sequence[DrawInstruction]
        Markers to draw; may be empty.
    palette : dict[str, str] | None, default None
        Optional mapping of tier value ("low", "mid", "high") -> color.

    Returns
    -------
    go.Figure
        A figure with a single ``Scattergeo`` trace.  Each point carries
        its country name in ``customdata`` for click handling.
    """
    fig = go.Figure(
        go.Scattergeo(
            lat=[i.lat for i in instructions],
            lon=[i.lon for i in instructions],
            mode="markers",
            marker=dict(
                size=[_marker_size(i.radius) for i in instructions],
                sizemode="diameter",
                color=[_resolve_color(i.color_tier, palette) for i in instructions],
                opacity=MARKER_OPACITY,
                line=dict(width=1),
            ),
            hovertext=[i.tooltip_text for i in instructions],
            hoverinfo="text",
            customdata=[i.country for i in instructions],
            showlegend=False,
        )
    )
    fig.update_layout(
        height=MAP_HEIGHT,
        margin=dict(l=0, r=0, t=0, b=0),
        geo=dict(
            projection_type=MAP_PROJECTION,
            center=dict(lat=MAP_CENTER[0], lon=MAP_CENTER[1]),
            showcountries=True,
            showland=True,
            landcolor="rgb(229, 236, 246)",
            coastlinecolor="rgb(150, 150, 150)",
        ),
    )
    return fig


# ============================================================
# Trend chart
# ============================================================


def empty_trend_plot() -> go.Figure:
    """Placeholder shown until a country is selected."""
    fig = go.Figure()
    fig.update_layout(
        height=TREND_HEIGHT,
        title="Click a country on the map to see its population trend",
        xaxis=dict(visible=False),
        yaxis=dict(visible=False),
        plot_bgcolor="#f5f7fb",
    )
    return fig


def create_trend_plot(chart: ChartInstruction) -> go.Figure:
    """
    Line chart of one country's population over the years.

    Axis ranges come straight from the instruction so that the y axis
    starts at zero and the x axis is padded past the last year.
    """
    fig = go.Figure(
        go.Scatter(
            x=[point.year for point in chart.series],
            y=[point.population for point in chart.series],
            mode="lines+markers",
            line=dict(width=2.5, color=LINE_COLOR),
            marker=dict(size=8, color=LINE_COLOR),
            hovertemplate=HOVER_TEMPLATE_TREND,
            showlegend=False,
        )
    )
    fig.update_xaxes(
        title_text="Year",
        range=list(chart.x_domain),
        tickformat="d",
        showgrid=True,
        griddash="dot",
    )
    fig.update_yaxes(
        title_text="Population",
        range=list(chart.y_domain),
        tickformat=",",
        nticks=6,
        showgrid=True,
        griddash="dot",
    )
    fig.update_layout(
        title=dict(text=f"<b>{chart.title}</b>", x=0.5, xanchor="center"),
        height=TREND_HEIGHT,
        margin=dict(t=80, l=100, r=30, b=60),
        plot_bgcolor="#f5f7fb",
    )
    return fig
