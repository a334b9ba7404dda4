"""
Entrypoint building the dairy consumption report end-to-end:

1. Load the source tables (nutrition indicator, optional secondary
   indicator, country metadata, world map)
2. Choropleth of the average dairy ratio per country
3. Stacked bars of the top 15 countries by sex
4. Dairy vs GDP / life expectancy scatter plots
5. Yearly dairy and GDP totals
6. HTML document with the four figures and their captions

A source that cannot be loaded aborts the build before anything is
written. A chart whose input lacks a required column is skipped and
replaced by a notice in the document; the other charts are still built.

Intended usage (local):

    PYTHONPATH=src python -m report_pipeline \\
        --indicator data/unicef_indicator_1.csv \\
        --metadata data/unicef_metadata.csv \\
        --world-map data/world_map.csv

Paths not passed on the command line are read from the environment (see
`settings`).
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Optional

import matplotlib.pyplot as plt
import pandas as pd

from analysis import (
    build_dairy_choropleth,
    build_economic_scatter,
    build_gender_split_bar,
    build_yearly_trend_chart,
    figure_to_png_bytes,
    save_figure_png,
)
from common.errors import LoadError, MissingColumnError
from ingestion import load_country_metadata, load_nutrition_indicator, load_world_map
from report import ReportSection, write_report
from report import captions
from settings import ReportSettings
from transformations import (
    build_country_average,
    build_country_economic_summary,
    build_country_gender_split,
    build_nutrition_metadata_join,
    build_yearly_trend,
    join_world_map,
)

FIGURES_DIR_NAME = "figures"


@dataclass(frozen=True)
class SourceTables:
    nutrition: pd.DataFrame
    metadata: pd.DataFrame
    world_map: pd.DataFrame
    secondary_nutrition: Optional[pd.DataFrame] = None


@dataclass(frozen=True)
class ChartStep:
    key: str
    title: str
    caption: str
    build: Callable[[SourceTables], plt.Figure]


def load_sources(settings: ReportSettings) -> SourceTables:
    """Load every input table; raises LoadError on the first failure."""
    secondary = None
    if settings.secondary_indicator_path is not None:
        secondary = load_nutrition_indicator(settings.secondary_indicator_path)
    return SourceTables(
        nutrition=load_nutrition_indicator(settings.indicator_path),
        metadata=load_country_metadata(settings.metadata_path),
        world_map=load_world_map(settings.world_map_path),
        secondary_nutrition=secondary,
    )


def _choropleth(sources: SourceTables) -> plt.Figure:
    averages = build_country_average(sources.nutrition)
    return build_dairy_choropleth(join_world_map(sources.world_map, averages))


def _gender_split(sources: SourceTables) -> plt.Figure:
    return build_gender_split_bar(build_country_gender_split(sources.nutrition))


def _joined(sources: SourceTables) -> pd.DataFrame:
    return build_nutrition_metadata_join(
        sources.nutrition,
        sources.metadata,
        secondary=sources.secondary_nutrition,
    )


def _economic_scatter(sources: SourceTables) -> plt.Figure:
    return build_economic_scatter(build_country_economic_summary(_joined(sources)))


def _yearly_trend(sources: SourceTables) -> plt.Figure:
    return build_yearly_trend_chart(build_yearly_trend(_joined(sources)))


CHART_STEPS: List[ChartStep] = [
    ChartStep("choropleth", captions.CHOROPLETH_TITLE, captions.CHOROPLETH_CAPTION, _choropleth),
    ChartStep("gender_split", captions.GENDER_SPLIT_TITLE, captions.GENDER_SPLIT_CAPTION, _gender_split),
    ChartStep("economic_scatter", captions.ECONOMIC_TITLE, captions.ECONOMIC_CAPTION, _economic_scatter),
    ChartStep("yearly_trend", captions.YEARLY_TREND_TITLE, captions.YEARLY_TREND_CAPTION, _yearly_trend),
]


def render_chart(
    step: ChartStep,
    sources: SourceTables,
    *,
    figures_dir: Optional[Path] = None,
) -> tuple[ReportSection, Optional[Path]]:
    """
    Build one chart. A MissingColumnError is turned into a section carrying
    the error instead of a figure.
    """
    section = ReportSection(key=step.key, title=step.title, caption=step.caption)
    try:
        fig = step.build(sources)
    except MissingColumnError as exc:
        print(f"[report] Skipping {step.key}: {exc}")
        section.error = str(exc)
        return section, None

    png_path = None
    try:
        if figures_dir is not None:
            png_path = save_figure_png(fig, figures_dir / f"{step.key}.png")
        section.png = figure_to_png_bytes(fig)
    finally:
        plt.close(fig)
    return section, png_path


def run_report(settings: ReportSettings) -> Dict[str, List[Path]]:
    """
    Build the full report.

    Returns
    -------
    artefacts:
        {"report": [html path], "figures": [png paths]}; charts that were
        skipped have no PNG.
    """
    total = len(CHART_STEPS) + 2

    print(f"[1/{total}] Loading source tables...")
    sources = load_sources(settings)

    figures_dir = Path(settings.output_dir) / FIGURES_DIR_NAME if settings.write_figures else None
    sections: List[ReportSection] = []
    figure_paths: List[Path] = []
    for i, step in enumerate(CHART_STEPS, start=2):
        print(f"[{i}/{total}] Building {step.key} chart...")
        section, png_path = render_chart(step, sources, figures_dir=figures_dir)
        sections.append(section)
        if png_path is not None:
            figure_paths.append(png_path)
            print(f"      Figure: {png_path}")

    print(f"[{total}/{total}] Writing report document...")
    report_path = write_report(sections, output_dir=settings.output_dir)
    print(f"      Report: {report_path}")

    skipped = [s.key for s in sections if not s.rendered]
    if skipped:
        print(f"\nReport completed with skipped charts: {', '.join(skipped)}")
    else:
        print("\nReport completed successfully.")
    return {"report": [report_path], "figures": figure_paths}


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(
        description="Build the child dairy consumption report (four figures, one HTML document).",
    )
    parser.add_argument("--indicator", type=str, default=None, help="Nutrition indicator CSV.")
    parser.add_argument(
        "--secondary-indicator",
        type=str,
        default=None,
        help="Optional second indicator CSV unioned with the first before the metadata join.",
    )
    parser.add_argument("--metadata", type=str, default=None, help="Country metadata CSV.")
    parser.add_argument("--world-map", type=str, default=None, help="World map vertex CSV (long, lat, group, order, region).")
    parser.add_argument("--output-dir", type=str, default=None, help="Directory receiving the HTML report.")
    parser.add_argument(
        "--skip-figures",
        action="store_true",
        help="Do not write the individual PNG figures next to the report.",
    )

    args = parser.parse_args()
    settings = ReportSettings.from_env().with_overrides(
        indicator_path=args.indicator,
        secondary_indicator_path=args.secondary_indicator,
        metadata_path=args.metadata,
        world_map_path=args.world_map,
        output_dir=args.output_dir,
        write_figures=False if args.skip_figures else None,
    )
    try:
        run_report(settings)
    except LoadError as exc:
        raise SystemExit(f"[report] Aborting: {exc}") from exc


__all__ = ["SourceTables", "ChartStep", "CHART_STEPS", "load_sources", "render_chart", "run_report"]
