"""
Configuration constants for the population map pipeline.
"""

import os
from pathlib import Path
from typing import Dict, Tuple

# ======================================================
#  DATA SOURCES / CONSTANTS
# ======================================================
DATA_DIR: Path = Path(__file__).resolve().parent.parent / "data"

COORDINATES_SOURCE: str = os.getenv(
    "POPMAP_COORDINATES_SOURCE", str(DATA_DIR / "coordinates.csv")
)
POPULATION_SOURCE: str = os.getenv(
    "POPMAP_POPULATION_SOURCE", str(DATA_DIR / "world_population.csv")
)

DEFAULT_SEP: str = ","

# Coordinate table columns
COORD_NAME_COL: str = "name"
COORD_LAT_COL: str = "latitude"
COORD_LON_COL: str = "longitude"

# Population table columns; year columns look like "2022 Population"
COUNTRY_COL: str = "Country/Territory"
CONTINENT_COL: str = "Continent"
YEAR_COLUMN_SUFFIX: str = " Population"

# ======================================================
#  FILTERS
# ======================================================
ALL_SELECTOR: str = "All"

# ======================================================
#  VISUAL ENCODING
# ======================================================
# Aggregate totals are larger than single-year values, hence the larger divisor
ALL_YEARS_DIVISOR: int = 5000
SINGLE_YEAR_DIVISOR: int = 3000

LOW_TIER_LIMIT: int = 100_000_000
MID_TIER_LIMIT: int = 1_000_000_000

TIER_COLORS: Dict[str, str] = {
    "low": "green",
    "mid": "orange",
    "high": "red",
}

# Plotly marker sizes are diameters in pixels
MARKER_SIZE_FACTOR: float = 2.0
MARKER_OPACITY: float = 0.5

# ======================================================
#  TREND CHART
# ======================================================
YEAR_AXIS_PADDING: int = 3
EMPTY_X_DOMAIN: Tuple[int, int] = (0, 3)
EMPTY_Y_DOMAIN: Tuple[int, int] = (0, 1)

# ======================================================
#  UI DEFAULTS
# ======================================================
MAP_CENTER: Tuple[float, float] = (20.0, 0.0)
MAP_PROJECTION: str = "natural earth"
MAP_HEIGHT: int = 600
TREND_HEIGHT: int = 450

LOG_LEVEL: str = os.getenv("POPMAP_LOG_LEVEL", "INFO")
