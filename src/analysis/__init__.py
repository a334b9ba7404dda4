"""
Analysis layer
--------------

Figure builders for the dairy consumption report:

- choropleth of the average dairy ratio per country
- stacked bar chart of the top 15 countries by sex
- dairy vs GDP / life expectancy scatter plots with trend lines
- yearly dairy and GDP totals on a dual axis
"""

from .dairy_charts import (  # noqa: F401
    FIGURE_DPI,
    build_dairy_choropleth,
    build_economic_scatter,
    build_gender_split_bar,
    build_yearly_trend_chart,
    figure_to_png_bytes,
    save_figure_png,
)
from .world_map import NO_DATA_COLOR, draw_choropleth  # noqa: F401

__all__ = [
    "FIGURE_DPI",
    "NO_DATA_COLOR",
    "draw_choropleth",
    "build_dairy_choropleth",
    "build_gender_split_bar",
    "build_economic_scatter",
    "build_yearly_trend_chart",
    "figure_to_png_bytes",
    "save_figure_png",
]
