"""
Per-country summaries of the dairy consumption ratio.

- build_country_average           -> choropleth map
- join_world_map                  -> choropleth map polygons
- build_country_gender_split      -> stacked bar chart (top 15, Male/Female)
- build_country_economic_summary  -> dairy vs GDP / life expectancy scatter
- fit_linear_trend                -> OLS line for each scatter view

All functions return new DataFrames and never modify their inputs.
"""

from __future__ import annotations

from typing import Optional, Tuple

import numpy as np
import pandas as pd

from common.errors import require_columns
from .country_names import apply_country_label_overrides
from .nutrition_joined import GDP_COLUMN, LIFE_EXPECTANCY_COLUMN

TOTAL_SEX = "Total"
SEX_ORDER = ["Male", "Female"]

# Nudges separating the two stacked labels of a bar.
SEX_LABEL_NUDGE = {"Male": -0.25, "Female": 0.25}

TOP_N_COUNTRIES = 15

HIGHLIGHT_COUNTRIES = frozenset({"Cuba", "Uruguay", "Burundi", "Swaziland", "Sudan"})


def _total_rows(df: pd.DataFrame) -> pd.DataFrame:
    return df[df["sex"] == TOTAL_SEX]


def build_country_average(nutrition: pd.DataFrame) -> pd.DataFrame:
    """
    Mean obs_value per country over the sex == "Total" rows.

    Countries without any Total observation do not appear in the result.
    Columns: country, avg_dairy.
    """
    require_columns(nutrition, ["country", "sex", "obs_value"], derivation="country average")

    df = _total_rows(nutrition).copy()
    df["obs_value"] = pd.to_numeric(df["obs_value"], errors="coerce")
    result = (
        df.groupby("country", sort=True)["obs_value"]
        .mean()
        .rename("avg_dairy")
        .reset_index()
    )
    return result


def join_world_map(world_map: pd.DataFrame, country_average: pd.DataFrame) -> pd.DataFrame:
    """
    Left join of the map vertex table with the per-country averages on
    region == country.

    Regions whose name has no exact counterpart keep avg_dairy missing and
    are drawn as "no data"; names are not reconciled.
    """
    require_columns(world_map, ["long", "lat", "group", "order", "region"], derivation="world map join")
    require_columns(country_average, ["country", "avg_dairy"], derivation="world map join")

    averages = country_average[["country", "avg_dairy"]].rename(columns={"country": "region"})
    joined = world_map.merge(averages, how="left", on="region")

    regions = joined.drop_duplicates("region")
    unmatched = int(regions["avg_dairy"].isna().sum())
    unused = sorted(set(country_average["country"]) - set(world_map["region"]))
    print(
        f"[transform] World map join: {len(regions) - unmatched} regions with data, "
        f"{unmatched} without; {len(unused)} countries not found on the map."
    )
    return joined


def build_country_gender_split(
    nutrition: pd.DataFrame,
    *,
    top_n: int = TOP_N_COUNTRIES,
) -> pd.DataFrame:
    """
    Mean obs_value per (country, sex) for the Male and Female rows, laid out
    for a stacked bar chart of the `top_n` countries with the highest
    Male + Female total.

    Columns:
        country         display name (label overrides applied)
        sex             "Male" then "Female" within each country
        avg_dairy       mean ratio for that sex
        tot_dairy       avg_dairy(Male) + avg_dairy(Female)
        text_position   y of the value label inside its stacked segment
        label           avg_dairy formatted as "12.3%"

    Only countries with a mean for both sexes are kept, so every country
    contributes exactly two rows and the result has at most 2 * top_n rows.
    """
    require_columns(nutrition, ["country", "sex", "obs_value"], derivation="gender split")

    df = nutrition[nutrition["sex"] != TOTAL_SEX].copy()
    df = df[df["sex"].isin(SEX_ORDER)]
    df = apply_country_label_overrides(df)
    df["obs_value"] = pd.to_numeric(df["obs_value"], errors="coerce")

    means = (
        df.groupby(["country", "sex"], sort=True)["obs_value"]
        .mean()
        .rename("avg_dairy")
        .reset_index()
        .dropna(subset=["avg_dairy"])
    )

    complete = means.groupby("country")["sex"].transform("nunique") == len(SEX_ORDER)
    means = means[complete].copy()

    # Male before Female inside each country, countries alphabetical.
    means["sex"] = pd.Categorical(means["sex"], categories=SEX_ORDER, ordered=True)
    means = means.sort_values(["country", "sex"], kind="mergesort").reset_index(drop=True)
    means["sex"] = means["sex"].astype(str)

    means["tot_dairy"] = means.groupby("country")["avg_dairy"].transform("sum")
    means = means.sort_values("tot_dairy", ascending=False, kind="mergesort").reset_index(drop=True)

    cumulative = means.groupby("country", sort=False)["avg_dairy"].cumsum()
    nudge = means["sex"].map(SEX_LABEL_NUDGE)
    means["text_position"] = cumulative - means["avg_dairy"] / 2 + nudge
    means["label"] = means["avg_dairy"].map(lambda v: f"{v:.1f}%")

    return means.head(len(SEX_ORDER) * top_n).reset_index(drop=True)


def build_country_economic_summary(joined: pd.DataFrame) -> pd.DataFrame:
    """
    Per-country means of the dairy ratio, GDP per capita and life expectancy
    over the sex == "Total" rows of the nutrition/metadata join.

    A measure that is missing on every row of a country yields a missing
    mean for that country (never zero); plots treat it as "no point".

    Columns: country, avg_dairy, avg_gdp, avg_life_exp, highlight, label.
    """
    require_columns(
        joined,
        ["country", "sex", "obs_value", GDP_COLUMN, LIFE_EXPECTANCY_COLUMN],
        derivation="economic summary",
    )

    df = _total_rows(joined)
    summary = (
        df.groupby("country", sort=True)
        .agg(
            avg_dairy=("obs_value", "mean"),
            avg_gdp=(GDP_COLUMN, "mean"),
            avg_life_exp=(LIFE_EXPECTANCY_COLUMN, "mean"),
        )
        .reset_index()
    )
    summary["highlight"] = summary["country"].isin(HIGHLIGHT_COUNTRIES)
    summary["label"] = summary["country"].where(summary["highlight"], "")
    return summary


def fit_linear_trend(
    summary: pd.DataFrame,
    x: str,
    y: str,
) -> Optional[Tuple[float, float]]:
    """
    Ordinary least squares fit y = slope * x + intercept over the rows where
    both values are present. Returns None with fewer than two such rows or
    when x is constant.
    """
    require_columns(summary, [x, y], derivation="linear trend")
    valid = summary[[x, y]].dropna()
    if len(valid) < 2 or valid[x].nunique() < 2:
        return None
    slope, intercept = np.polyfit(valid[x].astype(float), valid[y].astype(float), 1)
    return float(slope), float(intercept)


__all__ = [
    "TOTAL_SEX",
    "SEX_ORDER",
    "SEX_LABEL_NUDGE",
    "TOP_N_COUNTRIES",
    "HIGHLIGHT_COUNTRIES",
    "build_country_average",
    "join_world_map",
    "build_country_gender_split",
    "build_country_economic_summary",
    "fit_linear_trend",
]
