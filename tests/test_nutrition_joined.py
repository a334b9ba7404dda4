"""Tests for the nutrition x metadata full outer join."""

import pandas as pd
import pytest

from common.errors import MissingColumnError
from transformations import (
    build_country_economic_summary,
    build_nutrition_metadata_join,
    standardize_metadata_columns,
    union_nutrition_sources,
)


def test_standardize_metadata_renames_source_headers(metadata_df):
    df = standardize_metadata_columns(metadata_df)
    assert {"country", "time_period", "gdp_per_capita", "life_expectancy"} <= set(df.columns)
    assert str(df["time_period"].dtype) == "Int64"
    # Input untouched.
    assert "year" in metadata_df.columns


def test_standardize_metadata_accepts_header_without_comma():
    df = standardize_metadata_columns(pd.DataFrame({
        "country": ["Chad"],
        "year": ["2015"],
        "Life expectancy at birth total (years)": ["54.2"],
    }))
    assert df["life_expectancy"].iloc[0] == pytest.approx(54.2)
    assert df["time_period"].iloc[0] == 2015


def test_union_deduplicates_identical_rows():
    primary = pd.DataFrame({
        "country": ["Chad", "Chad"],
        "sex": ["Total", "Total"],
        "time_period": [2010, 2011],
        "obs_value": [10.0, 11.0],
    })
    secondary = pd.DataFrame({
        "country": ["Chad", "Mali"],
        "sex": ["Total", "Total"],
        "time_period": ["2011", "2011"],
        "obs_value": [11.0, 30.0],
    })
    merged = union_nutrition_sources(primary, secondary)
    assert len(merged) == 3
    assert sorted(merged["country"].tolist()) == ["Chad", "Chad", "Mali"]


def test_join_keeps_rows_from_both_sides(nutrition_df):
    metadata = pd.DataFrame({
        "country": ["Kenya", "Norway"],
        "year": [2010, 2010],
        "GDP per capita (constant 2015 US$)": [1000.0, 75000.0],
        "Life expectancy at birth, total (years)": [60.0, 82.0],
    })
    joined = build_nutrition_metadata_join(nutrition_df, metadata)

    norway = joined[joined["country"] == "Norway"]
    assert len(norway) == 1
    assert pd.isna(norway["sex"].iloc[0])

    kenya_total_2010 = joined[
        (joined["country"] == "Kenya") & (joined["sex"] == "Total") & (joined["time_period"] == 2010)
    ]
    assert kenya_total_2010["gdp_per_capita"].iloc[0] == pytest.approx(1000.0)

    peru = joined[joined["country"] == "Peru"]
    assert len(peru) == 9
    assert peru["gdp_per_capita"].isna().all()


def test_join_requires_metadata_year(nutrition_df):
    metadata = pd.DataFrame({"country": ["Kenya"], "GDP per capita (constant 2015 US$)": [1.0]})
    with pytest.raises(MissingColumnError) as exc_info:
        build_nutrition_metadata_join(nutrition_df, metadata)
    assert exc_info.value.column == "time_period"


def test_join_never_pairs_rows_without_a_year():
    nutrition = pd.DataFrame({
        "country": ["Kenya", "Kenya"],
        "sex": ["Total", "Total"],
        "time_period": ["2010", "2010-2012"],
        "obs_value": [30.0, 40.0],
    })
    metadata = pd.DataFrame({
        "country": ["Kenya", "Kenya"],
        "year": ["2010", ""],
        "GDP per capita (constant 2015 US$)": [1000.0, 9000.0],
        "Life expectancy at birth, total (years)": [60.0, 70.0],
    })
    joined = build_nutrition_metadata_join(nutrition, metadata)

    assert len(joined) == 3
    undated_nutrition = joined[joined["obs_value"] == 40.0]
    assert undated_nutrition["gdp_per_capita"].isna().all()
    undated_metadata = joined[joined["gdp_per_capita"] == 9000.0]
    assert undated_metadata["sex"].isna().all()

    summary = build_country_economic_summary(joined).set_index("country")
    assert summary.loc["Kenya", "avg_gdp"] == pytest.approx(1000.0)
