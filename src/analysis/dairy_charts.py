"""
Charts of the dairy consumption report.

One builder per figure, each taking the summary table produced by
`transformations` and returning a matplotlib Figure:

- Figure 1: build_dairy_choropleth
    World map filled by the average dairy ratio (sex == Total); regions
    without a matching country are drawn as "no data".
- Figure 2: build_gender_split_bar
    Stacked bars (Male bottom, Female top) for the top 15 countries by
    Male + Female average, with the percentage printed in each segment.
- Figure 3: build_economic_scatter
    Two panels: dairy vs GDP per capita and dairy vs life expectancy, each
    with its own OLS line; only the highlight countries are labelled.
- Figure 4: build_yearly_trend_chart
    Yearly sums of the dairy ratio and of GDP per capita on a shared axis,
    GDP rescaled by the trend's scaling factor and read on a secondary axis.

Figures are turned into PNG bytes with `figure_to_png_bytes`, which also
closes them.
"""

from __future__ import annotations

import io
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
from matplotlib.cm import ScalarMappable
from matplotlib.patches import Patch

from common.errors import require_columns
from transformations import YearlyTrend, fit_linear_trend
from .world_map import NO_DATA_COLOR, draw_choropleth

FIGURE_DPI = 150

MALE_COLOR = "#4c72b0"
FEMALE_COLOR = "#dd8452"
DAIRY_COLOR = "#2a9d8f"
GDP_COLOR = "crimson"


def _no_data_notice(ax: plt.Axes, message: str = "No data available") -> None:
    ax.text(
        0.5,
        0.5,
        message,
        transform=ax.transAxes,
        ha="center",
        va="center",
        color="grey",
    )


def figure_to_png_bytes(fig: plt.Figure, *, dpi: int = FIGURE_DPI) -> bytes:
    buf = io.BytesIO()
    fig.savefig(buf, format="png", dpi=dpi)
    plt.close(fig)
    buf.seek(0)
    return buf.getvalue()


def save_figure_png(fig: plt.Figure, path: Path | str, *, dpi: int = FIGURE_DPI) -> Path:
    """Write the figure to `path` without closing it."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(path, dpi=dpi)
    return path


def build_dairy_choropleth(map_joined: pd.DataFrame) -> plt.Figure:
    require_columns(
        map_joined,
        ["long", "lat", "group", "order", "region", "avg_dairy"],
        derivation="choropleth",
    )
    fig, ax = plt.subplots(figsize=(12, 6))
    norm = draw_choropleth(ax, map_joined, "avg_dairy")

    mappable = ScalarMappable(norm=norm, cmap="viridis")
    mappable.set_array([])
    fig.colorbar(mappable, ax=ax, shrink=0.6, label="Average dairy consumption (%)")
    if pd.to_numeric(map_joined["avg_dairy"], errors="coerce").isna().any():
        ax.legend(
            handles=[Patch(facecolor=NO_DATA_COLOR, edgecolor="white", label="No data")],
            loc="lower left",
            frameon=False,
        )
    ax.set_title("Average dairy consumption among children aged 6-23 months")
    fig.tight_layout()
    return fig


def build_gender_split_bar(split: pd.DataFrame) -> plt.Figure:
    require_columns(
        split,
        ["country", "sex", "avg_dairy", "text_position", "label"],
        derivation="gender split bar",
    )
    fig, ax = plt.subplots(figsize=(12, 6))

    countries = split["country"].drop_duplicates().tolist()
    if not countries:
        _no_data_notice(ax)
        return fig

    wide = split.pivot(index="country", columns="sex", values="avg_dairy").reindex(countries)
    x = np.arange(len(countries))
    male = wide["Male"].to_numpy(dtype=float)
    female = wide["Female"].to_numpy(dtype=float)

    ax.bar(x, male, color=MALE_COLOR, label="Male")
    ax.bar(x, female, bottom=male, color=FEMALE_COLOR, label="Female")

    positions = {country: i for i, country in enumerate(countries)}
    for row in split.itertuples(index=False):
        ax.text(
            positions[row.country],
            row.text_position,
            row.label,
            ha="center",
            va="center",
            fontsize=7,
            color="white",
        )

    ax.set_xticks(x)
    ax.set_xticklabels(countries, rotation=60, ha="right")
    ax.set_ylabel("Average dairy consumption (%)")
    ax.set_title(f"Top {len(countries)} countries by dairy consumption, by sex")
    ax.legend(frameon=False)
    ax.grid(True, axis="y", linestyle="--", alpha=0.3)
    fig.tight_layout()
    return fig


def _scatter_panel(
    ax: plt.Axes,
    summary: pd.DataFrame,
    x_col: str,
    xlabel: str,
) -> None:
    points = summary.dropna(subset=[x_col, "avg_dairy"])
    if points.empty:
        _no_data_notice(ax)
        ax.set_xlabel(xlabel)
        return

    x = points[x_col].to_numpy(dtype=float)
    y = points["avg_dairy"].to_numpy(dtype=float)
    ax.scatter(x, y, color=DAIRY_COLOR, alpha=0.7, edgecolors="none")

    fit = fit_linear_trend(points, x_col, "avg_dairy")
    if fit is not None:
        slope, intercept = fit
        x_line = np.linspace(np.nanmin(x), np.nanmax(x), 200)
        ax.plot(x_line, slope * x_line + intercept, color=GDP_COLOR, linewidth=2, label="Linear fit")
        ax.legend(frameon=False)

    for row in points[points["highlight"]].itertuples(index=False):
        ax.annotate(
            row.label,
            (getattr(row, x_col), row.avg_dairy),
            textcoords="offset points",
            xytext=(5, 5),
            fontsize=8,
        )

    ax.set_xlabel(xlabel)
    ax.grid(True, linestyle="--", alpha=0.3)


def build_economic_scatter(summary: pd.DataFrame) -> plt.Figure:
    require_columns(
        summary,
        ["country", "avg_dairy", "avg_gdp", "avg_life_exp", "highlight", "label"],
        derivation="economic scatter",
    )
    fig, (ax_gdp, ax_life) = plt.subplots(1, 2, figsize=(12, 5), sharey=True)

    _scatter_panel(ax_gdp, summary, "avg_gdp", "Average GDP per capita (constant 2015 US$)")
    _scatter_panel(ax_life, summary, "avg_life_exp", "Average life expectancy at birth (years)")

    ax_gdp.set_ylabel("Average dairy consumption (%)")
    ax_gdp.set_title("Dairy consumption vs GDP per capita")
    ax_life.set_title("Dairy consumption vs life expectancy")
    fig.tight_layout()
    return fig


def build_yearly_trend_chart(trend: YearlyTrend) -> plt.Figure:
    table = trend.table
    require_columns(
        table,
        ["time_period", "tot_dairy", "gdp_scaled", "gdp_label"],
        derivation="yearly trend chart",
    )
    fig, ax = plt.subplots(figsize=(12, 6))
    if table.empty:
        _no_data_notice(ax)
        return fig

    years = table["time_period"].to_numpy(dtype=float)
    ax.plot(
        years,
        table["tot_dairy"].to_numpy(dtype=float),
        marker="o",
        color=DAIRY_COLOR,
        label="Total dairy consumption",
    )
    ax.plot(
        years,
        table["gdp_scaled"].to_numpy(dtype=float),
        marker="s",
        color=GDP_COLOR,
        label="Total GDP per capita",
    )

    for year, scaled, label in zip(years, table["gdp_scaled"], table["gdp_label"]):
        ax.annotate(
            label,
            (year, scaled),
            textcoords="offset points",
            xytext=(0, 8),
            ha="center",
            fontsize=7,
            color=GDP_COLOR,
        )

    if np.isfinite(trend.scaling_factor) and trend.scaling_factor > 0:
        secondary = ax.secondary_yaxis(
            "right",
            functions=(trend.gdp_axis_from_dairy, trend.dairy_axis_from_gdp),
        )
        secondary.set_ylabel("Total GDP per capita (constant 2015 US$)", color=GDP_COLOR)

    ax.set_xlabel("Year")
    ax.set_ylabel("Total dairy consumption (%)", color=DAIRY_COLOR)
    ax.set_title("Dairy consumption and GDP per capita over time")
    ax.legend(frameon=False, loc="upper left")
    ax.grid(True, linestyle="--", alpha=0.3)
    fig.tight_layout()
    return fig


__all__ = [
    "FIGURE_DPI",
    "figure_to_png_bytes",
    "save_figure_png",
    "build_dairy_choropleth",
    "build_gender_split_bar",
    "build_economic_scatter",
    "build_yearly_trend_chart",
]
