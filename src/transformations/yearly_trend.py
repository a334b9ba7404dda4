"""
Yearly totals of the dairy ratio and GDP per capita.

Unlike the per-country summary, missing values are counted as zero here:
a country without metadata for a year adds nothing to that year's GDP sum
instead of making it missing.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
import pandas as pd

from common.errors import require_columns
from .country_summaries import TOTAL_SEX
from .nutrition_joined import GDP_COLUMN

# Year dropped from the trend as a known data-quality exception.
EXCLUDED_YEARS = frozenset({2020})


@dataclass(frozen=True)
class YearlyTrend:
    """
    table:
        time_period  numeric year
        tot_dairy    sum of obs_value over all countries
        tot_gdp      sum of GDP per capita over all countries
        gdp_scaled   tot_gdp * scaling_factor (plotted on the dairy axis)
        gdp_label    "$Nk", N = tot_gdp / 1000 rounded
    scaling_factor:
        max(tot_dairy) / max(tot_gdp); NaN when the table is empty.
    """

    table: pd.DataFrame
    scaling_factor: float

    def gdp_axis_from_dairy(self, values):
        """Secondary axis transform: plotted (scaled) values -> GDP."""
        return np.asarray(values, dtype=float) / self.scaling_factor

    def dairy_axis_from_gdp(self, values):
        return np.asarray(values, dtype=float) * self.scaling_factor


def format_gdp_label(tot_gdp: float) -> str:
    return f"${round(tot_gdp / 1000):.0f}k"


def build_yearly_trend(joined: pd.DataFrame) -> YearlyTrend:
    """
    Sum obs_value and GDP per capita per year over the sex == "Total" rows
    of the nutrition/metadata join, missing values counting as zero.

    Years whose GDP sum is not positive and the excluded year 2020 are
    dropped before the scaling factor is computed.
    """
    require_columns(
        joined,
        ["sex", "time_period", "obs_value", GDP_COLUMN],
        derivation="yearly trend",
    )

    df = joined[joined["sex"] == TOTAL_SEX].copy()
    df["obs_value"] = pd.to_numeric(df["obs_value"], errors="coerce").fillna(0.0)
    df[GDP_COLUMN] = pd.to_numeric(df[GDP_COLUMN], errors="coerce").fillna(0.0)

    totals = (
        df.groupby("time_period", sort=True)
        .agg(tot_dairy=("obs_value", "sum"), tot_gdp=(GDP_COLUMN, "sum"))
        .reset_index()
    )

    totals["time_period"] = pd.to_numeric(totals["time_period"], errors="coerce")
    excluded = totals["time_period"].isin(EXCLUDED_YEARS)
    totals = totals[(totals["tot_gdp"] > 0) & ~excluded].copy()
    totals = totals.reset_index(drop=True)

    if totals.empty:
        scaling_factor = float("nan")
    else:
        scaling_factor = float(totals["tot_dairy"].max() / totals["tot_gdp"].max())

    totals["gdp_scaled"] = totals["tot_gdp"] * scaling_factor
    totals["gdp_label"] = totals["tot_gdp"].map(format_gdp_label)

    print(
        f"[transform] Yearly trend: {len(totals)} years kept, "
        f"scaling factor {scaling_factor:.6g}"
    )
    return YearlyTrend(table=totals, scaling_factor=scaling_factor)


__all__ = [
    "EXCLUDED_YEARS",
    "YearlyTrend",
    "format_gdp_label",
    "build_yearly_trend",
]
