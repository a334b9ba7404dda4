# tests/conftest.py
"""Pytest configuration for the dairy report tests."""
from __future__ import annotations

import os
import sys
from pathlib import Path

import pandas as pd
import pytest

os.environ.setdefault("MPLBACKEND", "Agg")


def pytest_configure() -> None:
    # The report modules live as top-level packages under src/.
    repo_root = Path(__file__).resolve().parents[1]
    src_dir = repo_root / "src"
    if src_dir.exists() and str(src_dir) not in sys.path:
        sys.path.insert(0, str(src_dir))


@pytest.fixture
def nutrition_df():
    """Two countries, three years, Male/Female/Total rows."""
    rows = []
    values = {
        "Kenya": {"Male": [30.0, 32.0, 34.0], "Female": [40.0, 42.0, 44.0], "Total": [35.0, 37.0, 39.0]},
        "Peru": {"Male": [50.0, 52.0, 54.0], "Female": [60.0, 62.0, 64.0], "Total": [55.0, 57.0, 59.0]},
    }
    for country, by_sex in values.items():
        for sex, series in by_sex.items():
            for year, value in zip((2010, 2011, 2012), series):
                rows.append(
                    {"country": country, "sex": sex, "time_period": year, "obs_value": value}
                )
    return pd.DataFrame(rows)


@pytest.fixture
def metadata_df():
    """GDP and life expectancy for Kenya only."""
    return pd.DataFrame({
        "country": ["Kenya", "Kenya", "Kenya"],
        "year": [2010, 2011, 2012],
        "GDP per capita (constant 2015 US$)": [1000.0, 1100.0, 1200.0],
        "Life expectancy at birth, total (years)": [60.0, 61.0, 62.0],
    })


@pytest.fixture
def world_map_df():
    """Two unit squares: one for Kenya and one for a region with no data."""
    square = [(0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0)]
    rows = []
    for group, (region, dx) in enumerate([("Kenya", 0.0), ("Atlantis", 2.0)], start=1):
        for order, (x, y) in enumerate(square, start=1):
            rows.append({"long": x + dx, "lat": y, "group": group, "order": order, "region": region})
    return pd.DataFrame(rows)
