"""Data model definitions shared by the load, compute and render layers."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from .config import ALL_SELECTOR


@dataclass(frozen=True)
class CoordinateRecord:
    """Geographic position of one country from the coordinate table."""

    country: str
    lat: float  # NaN when the source cell was not numeric
    lon: float

    @property
    def is_valid(self) -> bool:
        return math.isfinite(self.lat) and math.isfinite(self.lon)


@dataclass(frozen=True)
class PopulationRow:
    """One country of the population table.

    ``year_values`` maps each year label (``"2022"``) to its parsed
    population, in column order.  ``None`` marks a cell that was present
    but unparsable; labels whose column is missing are not keys at all.
    """

    country: str
    continent: str
    year_values: Mapping[str, Optional[int]] = field(
        default_factory=lambda: MappingProxyType({})
    )


@dataclass(frozen=True)
class FilterState:
    """Current dropdown selection.  Replaced, never mutated."""

    year_selector: str = ALL_SELECTOR
    region_selector: str = ALL_SELECTOR

    @property
    def all_years(self) -> bool:
        return self.year_selector == ALL_SELECTOR


@dataclass(frozen=True)
class AggregationResult:
    country: str
    coords: Optional[CoordinateRecord]
    visible: bool
    total_population: int
    current_population: int
    summary_lines: Tuple[str, ...]
    divisor: int


class ColorTier(Enum):
    LOW = "low"
    MID = "mid"
    HIGH = "high"


@dataclass(frozen=True)
class MarkerEncoding:
    radius: float
    color_tier: ColorTier


@dataclass(frozen=True)
class TrendPoint:
    year: int
    population: int


TrendSeries = Tuple[TrendPoint, ...]


@dataclass(frozen=True)
class ChartScales:
    x_domain: Tuple[int, int]
    y_domain: Tuple[int, int]


@dataclass(frozen=True)
class DrawInstruction:
    """Everything the map surface needs to draw one marker."""

    country: str
    lat: float
    lon: float
    radius: float
    color_tier: ColorTier
    tooltip_text: str


@dataclass(frozen=True)
class ChartInstruction:
    """Everything the chart surface needs to draw one trend chart."""

    series: TrendSeries
    x_domain: Tuple[int, int]
    y_domain: Tuple[int, int]
    title: str


@dataclass(frozen=True)
class Dataset:
    """Immutable result of the load phase, passed to every consumer."""

    rows: Tuple[PopulationRow, ...]
    index: Mapping[str, CoordinateRecord]
    years: Tuple[str, ...]
    regions: Tuple[str, ...]

    def find_row(self, country: str) -> Optional[PopulationRow]:
        for row in self.rows:
            if row.country == country:
                return row
        return None
