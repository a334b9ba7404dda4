"""
Transformations layer
----------------------

Derivations turning the loaded source tables into the per-chart summary
tables of the dairy report. Each derivation is a pure function of its
inputs and can run independently of the others.
"""

from .country_names import (  # noqa: F401
    COUNTRY_LABEL_OVERRIDES,
    apply_country_label_overrides,
)
from .nutrition_joined import (  # noqa: F401
    GDP_COLUMN,
    LIFE_EXPECTANCY_COLUMN,
    build_nutrition_metadata_join,
    standardize_metadata_columns,
    union_nutrition_sources,
)
from .country_summaries import (  # noqa: F401
    HIGHLIGHT_COUNTRIES,
    build_country_average,
    build_country_economic_summary,
    build_country_gender_split,
    fit_linear_trend,
    join_world_map,
)
from .yearly_trend import (  # noqa: F401
    EXCLUDED_YEARS,
    YearlyTrend,
    build_yearly_trend,
    format_gdp_label,
)

__all__ = [
    "COUNTRY_LABEL_OVERRIDES",
    "GDP_COLUMN",
    "LIFE_EXPECTANCY_COLUMN",
    "HIGHLIGHT_COUNTRIES",
    "EXCLUDED_YEARS",
    "YearlyTrend",
    "apply_country_label_overrides",
    "standardize_metadata_columns",
    "union_nutrition_sources",
    "build_nutrition_metadata_join",
    "build_country_average",
    "join_world_map",
    "build_country_gender_split",
    "build_country_economic_summary",
    "fit_linear_trend",
    "build_yearly_trend",
    "format_gdp_label",
]
