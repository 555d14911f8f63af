"""Marker radius and color tier for an aggregation result."""

from __future__ import annotations

import math

from .config import LOW_TIER_LIMIT, MID_TIER_LIMIT
from .models import AggregationResult, ColorTier, MarkerEncoding


def color_tier(population: int) -> ColorTier:
    """Bin a point-in-time population into a tier.

    Bounds are inclusive-exclusive: exactly 100 million is MID, exactly
    one billion is HIGH.
    """
    if population < LOW_TIER_LIMIT:
        return ColorTier.LOW
    if population < MID_TIER_LIMIT:
        return ColorTier.MID
    return ColorTier.HIGH


def marker_radius(total_population: int, divisor: int) -> float:
    return math.sqrt(max(total_population, 0)) / divisor


def encode(result: AggregationResult) -> MarkerEncoding:
    """Radius follows the total, color follows the current population."""
    return MarkerEncoding(
        radius=marker_radius(result.total_population, result.divisor),
        color_tier=color_tier(result.current_population),
    )
