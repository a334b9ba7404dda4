"""
Nutrition x country metadata join.

Builds the country-year table shared by the economic scatter plots and the
yearly trend chart:

- Optional union of a second nutrition indicator table with the primary
  one: full outer join on every shared column, then identical rows are
  dropped.
- Full outer join with the country metadata on (country, time_period),
  where the metadata `year` column plays the role of `time_period`.

Outer joins keep every country-year from both sides, so GDP and life
expectancy are missing on rows without metadata and the nutrition columns
are missing on metadata-only rows. Each aggregation downstream states how
it combines those missing values.

Resulting columns (besides any extra column carried by the sources):
    country           string
    sex               string (missing on metadata-only rows)
    time_period       Int64
    obs_value         float
    gdp_per_capita    float
    life_expectancy   float
"""

from __future__ import annotations

from typing import Optional

import pandas as pd

from common.errors import require_columns

JOIN_KEYS = ["country", "time_period"]

GDP_COLUMN = "gdp_per_capita"
LIFE_EXPECTANCY_COLUMN = "life_expectancy"

# Source headers of the metadata CSV -> canonical column names.
METADATA_COLUMN_RENAMES = {
    "GDP per capita (constant 2015 US$)": GDP_COLUMN,
    "Life expectancy at birth, total (years)": LIFE_EXPECTANCY_COLUMN,
    "Life expectancy at birth total (years)": LIFE_EXPECTANCY_COLUMN,
    "year": "time_period",
}


def _coerce_year(series: pd.Series) -> pd.Series:
    return pd.to_numeric(series, errors="coerce").astype("Int64")


def _align_merge_dtypes(
    left: pd.DataFrame,
    right: pd.DataFrame,
    columns: list[str],
) -> tuple[pd.DataFrame, pd.DataFrame]:
    """
    Cast shared key columns to object where one side is textual and the
    other is not (e.g. a column that is entirely empty in one file).
    """
    left = left.copy()
    right = right.copy()
    for col in columns:
        left_numeric = pd.api.types.is_numeric_dtype(left[col])
        right_numeric = pd.api.types.is_numeric_dtype(right[col])
        if left_numeric != right_numeric:
            left[col] = left[col].astype("object")
            right[col] = right[col].astype("object")
    return left, right


def standardize_metadata_columns(metadata: pd.DataFrame) -> pd.DataFrame:
    """
    Rename the metadata headers to the canonical join/aggregate names and
    coerce the numeric columns. Headers that are absent are left absent.
    """
    df = metadata.rename(columns=METADATA_COLUMN_RENAMES).copy()
    # Two accepted spellings of life expectancy can collide after renaming.
    df = df.loc[:, ~df.columns.duplicated()]

    if "time_period" in df.columns:
        df["time_period"] = _coerce_year(df["time_period"])
    for col in (GDP_COLUMN, LIFE_EXPECTANCY_COLUMN):
        if col in df.columns:
            df[col] = pd.to_numeric(df[col], errors="coerce")
    return df


def union_nutrition_sources(
    primary: pd.DataFrame,
    secondary: Optional[pd.DataFrame] = None,
) -> pd.DataFrame:
    """
    Full outer join of two nutrition tables on all of their shared columns,
    dropping duplicate identical rows.

    With no secondary table this returns a copy of `primary` with
    `time_period` coerced to integers.
    """
    require_columns(primary, ["country", "time_period"], derivation="nutrition union")
    left = primary.copy()
    left["time_period"] = _coerce_year(left["time_period"])

    if secondary is None:
        return left

    require_columns(secondary, ["country", "time_period"], derivation="nutrition union")
    right = secondary.copy()
    right["time_period"] = _coerce_year(right["time_period"])

    shared = [c for c in left.columns if c in right.columns]
    left, right = _align_merge_dtypes(left, right, shared)
    merged = left.merge(right, how="outer", on=shared)
    merged = merged.drop_duplicates().reset_index(drop=True)

    print(
        f"[transform] Nutrition union: {len(primary)} + {len(secondary)} rows "
        f"-> {len(merged)} rows (join on {len(shared)} shared columns)"
    )
    return merged


def build_nutrition_metadata_join(
    nutrition: pd.DataFrame,
    metadata: pd.DataFrame,
    secondary: Optional[pd.DataFrame] = None,
) -> pd.DataFrame:
    """
    Three-way full outer join: (nutrition ∪ secondary) x metadata on
    (country, time_period).
    """
    nutrition_all = union_nutrition_sources(nutrition, secondary)
    meta = standardize_metadata_columns(metadata)
    require_columns(meta, JOIN_KEYS, derivation="nutrition/metadata join")

    left, right = _align_merge_dtypes(nutrition_all, meta, ["country"])

    # pandas matches missing keys to each other; rows without a usable year
    # stay in the result but are never paired with the other side.
    left_unknown = left["time_period"].isna()
    right_unknown = right["time_period"].isna()
    joined = left[~left_unknown].merge(
        right[~right_unknown],
        how="outer",
        on=JOIN_KEYS,
        suffixes=("", "_metadata"),
    )
    if left_unknown.any() or right_unknown.any():
        overlap = [c for c in right.columns if c in left.columns and c not in JOIN_KEYS]
        right_rest = right[right_unknown].rename(columns={c: f"{c}_metadata" for c in overlap})
        joined = pd.concat(
            [joined, left[left_unknown], right_rest],
            ignore_index=True,
        )
        print(
            f"[transform] {int(left_unknown.sum())} nutrition and "
            f"{int(right_unknown.sum())} metadata rows have no year; kept unmatched."
        )

    if "obs_value" in joined.columns:
        joined["obs_value"] = pd.to_numeric(joined["obs_value"], errors="coerce")

    if GDP_COLUMN in joined.columns and "sex" in joined.columns:
        without_meta = joined["sex"].notna() & joined[GDP_COLUMN].isna()
        if without_meta.any():
            print(
                f"[transform] {int(without_meta.sum())} nutrition rows have no GDP "
                "value after the metadata join; kept as missing."
            )

    return joined


__all__ = [
    "JOIN_KEYS",
    "GDP_COLUMN",
    "LIFE_EXPECTANCY_COLUMN",
    "METADATA_COLUMN_RENAMES",
    "standardize_metadata_columns",
    "union_nutrition_sources",
    "build_nutrition_metadata_join",
]
