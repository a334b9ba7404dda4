"""
Loading of the report's source tables.

The loader is deliberately lenient: it only guarantees that a file exists
and parses as a delimited table with a header. Column expectations are
enforced by the transformations (see `common.errors.require_columns`), so
a missing column is reported for the chart that needs it rather than for
the whole build.

Expected layouts:

    nutrition indicator   country, sex, time_period, obs_value, ...
    country metadata      country, year,
                          GDP per capita (constant 2015 US$),
                          Life expectancy at birth, total (years), ...
    world map vertices    long, lat, group, order, region
"""

from __future__ import annotations

from pathlib import Path

import pandas as pd

from common.errors import LoadError


def load_table(path: Path | str, *, label: str = "table") -> pd.DataFrame:
    """
    Read a delimited file with a header row into a DataFrame.

    Column names are kept as written in the header; pandas infers string
    vs numeric types from the content.

    Raises LoadError when the file is missing, unreadable, empty or not
    parseable as tabular data.
    """
    path = Path(path)
    if not path.exists():
        raise LoadError(path, "file does not exist")
    if not path.is_file():
        raise LoadError(path, "not a regular file")

    try:
        df = pd.read_csv(path)
    except pd.errors.EmptyDataError as exc:
        raise LoadError(path, "file is empty (no header row)") from exc
    except pd.errors.ParserError as exc:
        raise LoadError(path, f"not parseable as a delimited table: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise LoadError(path, f"not valid UTF-8 text: {exc}") from exc
    except OSError as exc:
        raise LoadError(path, f"unreadable: {exc}") from exc

    print(f"[ingestion] Loaded {label} {path}: {df.shape[0]} rows x {df.shape[1]} columns")
    return df


def load_nutrition_indicator(path: Path | str) -> pd.DataFrame:
    return load_table(path, label="nutrition indicator")


def load_country_metadata(path: Path | str) -> pd.DataFrame:
    return load_table(path, label="country metadata")


def load_world_map(path: Path | str) -> pd.DataFrame:
    """Load the world map vertex table (one row per polygon vertex)."""
    return load_table(path, label="world map")


__all__ = [
    "load_table",
    "load_nutrition_indicator",
    "load_country_metadata",
    "load_world_map",
]
