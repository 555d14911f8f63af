"""Data manager for loading the two source tables and caching the result.

This module reads the coordinate and population CSV files, builds the
country join index and the population rows, and packages them into an
immutable :class:`~popmap.models.Dataset`.  Both files are read
concurrently; nothing is built until both reads have finished.  Any
failure is logged and re-raised as :class:`LoadFailure` so that callers
never see a partially loaded dataset.  Results are cached in memory per
source pair; pass ``force_reload=True`` to reload from scratch.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd

from .config import (
    CONTINENT_COL,
    COORD_LAT_COL,
    COORD_LON_COL,
    COORD_NAME_COL,
    COORDINATES_SOURCE,
    COUNTRY_COL,
    DEFAULT_SEP,
    POPULATION_SOURCE,
)
from .join_index import build_index
from .models import Dataset
from .schema import build_population_rows, discover_regions, discover_years

logger = logging.getLogger(__name__)


class LoadFailure(RuntimeError):
    """Raised when either source table cannot be fetched or parsed."""


def ensure_columns(df: pd.DataFrame, required: List[str]) -> None:
    """Raise an error if the DataFrame lacks any of the required columns."""
    missing = [col for col in required if col not in df.columns]
    if missing:
        raise KeyError(f"Missing expected columns: {missing}")


def read_table(source: str | Path, sep: str = DEFAULT_SEP) -> pd.DataFrame:
    """Read a CSV with every cell kept as the raw string.

    Empty cells stay empty strings so that parsing decisions are made by
    the pipeline rather than by ``read_csv``.
    """
    return pd.read_csv(source, sep=sep, dtype=str, keep_default_na=False)


def _records(df: pd.DataFrame) -> List[Dict[str, Any]]:
    return df.to_dict(orient="records")


@lru_cache(maxsize=4)
def _build_dataset(coordinates_source: str, population_source: str) -> Dataset:
    """Read both tables in parallel and build the dataset."""
    with ThreadPoolExecutor(max_workers=2) as pool:
        coords_future = pool.submit(read_table, coordinates_source)
        population_future = pool.submit(read_table, population_source)
        coords_df = coords_future.result()
        population_df = population_future.result()

    ensure_columns(coords_df, [COORD_NAME_COL, COORD_LAT_COL, COORD_LON_COL])
    ensure_columns(population_df, [COUNTRY_COL, CONTINENT_COL])

    population_records = _records(population_df)
    years = discover_years(population_records)
    regions = discover_regions(population_records)
    index = build_index(_records(coords_df))
    rows = build_population_rows(population_records, years)

    return Dataset(
        rows=tuple(rows),
        index=index,
        years=tuple(years),
        regions=tuple(regions),
    )


def load_dataset(
    coordinates_source: Optional[str | Path] = None,
    population_source: Optional[str | Path] = None,
    *,
    force_reload: bool = False,
) -> Dataset:
    """
    Load both source tables and build the dataset, using the cache if warm.

    Parameters
    ----------
    coordinates_source : str or Path, optional
        Path or URL of the coordinate CSV.  Defaults to
        ``config.COORDINATES_SOURCE``.
    population_source : str or Path, optional
        Path or URL of the population CSV.  Defaults to
        ``config.POPULATION_SOURCE``.
    force_reload : bool, optional
        If ``True``, drop any cached dataset and read the files again.

    Returns
    -------
    Dataset
        Population rows, join index, discovered years and regions.

    Raises
    ------
    LoadFailure
        If either table cannot be read or lacks its key columns.
    """
    coords = str(coordinates_source or COORDINATES_SOURCE)
    population = str(population_source or POPULATION_SOURCE)

    if force_reload:
        _build_dataset.cache_clear()

    logger.info("Loading coordinates from %s and population from %s", coords, population)
    try:
        dataset = _build_dataset(coords, population)
    except Exception as exc:
        logger.exception("Error loading data")
        raise LoadFailure(f"Could not load source tables: {exc}") from exc

    logger.info(
        "Loaded %d countries, %d coordinates, %d years, %d regions",
        len(dataset.rows),
        len(dataset.index),
        len(dataset.years),
        len(dataset.regions),
    )
    return dataset
