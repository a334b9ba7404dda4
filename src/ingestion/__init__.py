"""
Ingestion layer
---------------

Readers for the CSV inputs of the dairy report.
"""

from .csv_loader import (  # noqa: F401
    load_country_metadata,
    load_nutrition_indicator,
    load_table,
    load_world_map,
)

__all__ = [
    "load_table",
    "load_nutrition_indicator",
    "load_country_metadata",
    "load_world_map",
]
