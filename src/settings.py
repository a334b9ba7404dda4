"""
Report configuration.

Input/output locations are resolved from environment variables (optionally
seeded from a local .env file) and can be overridden per run from the
command line:

- DAIRY_REPORT_INDICATOR_PATH
    Nutrition indicator CSV (country, sex, time_period, obs_value).
- DAIRY_REPORT_SECONDARY_INDICATOR_PATH (optional)
    Second indicator CSV with the same layout, unioned with the first
    before the metadata join.
- DAIRY_REPORT_METADATA_PATH
    Country metadata CSV (country, year, GDP per capita, life expectancy).
- DAIRY_REPORT_WORLD_MAP_PATH
    World map vertex table (long, lat, group, order, region).
- DAIRY_REPORT_OUTPUT_DIR
    Directory receiving dairy_report.html and the figures/ artefacts.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional

from env_loader import load_dotenv_if_present

INDICATOR_PATH_ENV = "DAIRY_REPORT_INDICATOR_PATH"
SECONDARY_INDICATOR_PATH_ENV = "DAIRY_REPORT_SECONDARY_INDICATOR_PATH"
METADATA_PATH_ENV = "DAIRY_REPORT_METADATA_PATH"
WORLD_MAP_PATH_ENV = "DAIRY_REPORT_WORLD_MAP_PATH"
OUTPUT_DIR_ENV = "DAIRY_REPORT_OUTPUT_DIR"

DEFAULT_DATA_DIR = Path("data")
DEFAULT_INDICATOR_PATH = DEFAULT_DATA_DIR / "unicef_indicator_1.csv"
DEFAULT_METADATA_PATH = DEFAULT_DATA_DIR / "unicef_metadata.csv"
DEFAULT_WORLD_MAP_PATH = DEFAULT_DATA_DIR / "world_map.csv"
DEFAULT_OUTPUT_DIR = Path("report")


@dataclass(frozen=True)
class ReportSettings:
    indicator_path: Path = DEFAULT_INDICATOR_PATH
    metadata_path: Path = DEFAULT_METADATA_PATH
    world_map_path: Path = DEFAULT_WORLD_MAP_PATH
    output_dir: Path = DEFAULT_OUTPUT_DIR
    secondary_indicator_path: Optional[Path] = None
    write_figures: bool = True

    @classmethod
    def from_env(cls, *, load_dotenv: bool = True) -> "ReportSettings":
        if load_dotenv:
            load_dotenv_if_present()

        secondary = os.getenv(SECONDARY_INDICATOR_PATH_ENV) or None
        return cls(
            indicator_path=Path(os.getenv(INDICATOR_PATH_ENV) or DEFAULT_INDICATOR_PATH),
            metadata_path=Path(os.getenv(METADATA_PATH_ENV) or DEFAULT_METADATA_PATH),
            world_map_path=Path(os.getenv(WORLD_MAP_PATH_ENV) or DEFAULT_WORLD_MAP_PATH),
            output_dir=Path(os.getenv(OUTPUT_DIR_ENV) or DEFAULT_OUTPUT_DIR),
            secondary_indicator_path=Path(secondary) if secondary else None,
        )

    def with_overrides(self, **overrides) -> "ReportSettings":
        """Return a copy where every non-None override replaces the current value."""
        values = {}
        for key, value in overrides.items():
            if value is None:
                continue
            if key.endswith("_path") or key == "output_dir":
                value = Path(value)
            values[key] = value
        return replace(self, **values)


__all__ = [
    "INDICATOR_PATH_ENV",
    "SECONDARY_INDICATOR_PATH_ENV",
    "METADATA_PATH_ENV",
    "WORLD_MAP_PATH_ENV",
    "OUTPUT_DIR_ENV",
    "ReportSettings",
]
