"""End-to-end tests for the report entrypoint."""

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import pytest  # noqa: E402

from common.errors import LoadError  # noqa: E402
from report import REPORT_HTML_NAME  # noqa: E402
import report_pipeline  # noqa: E402
from report_pipeline import CHART_STEPS, load_sources, render_chart, run_report  # noqa: E402
from settings import ReportSettings  # noqa: E402


@pytest.fixture
def source_files(tmp_path, nutrition_df, metadata_df, world_map_df):
    data_dir = tmp_path / "data"
    data_dir.mkdir()
    paths = {
        "indicator_path": data_dir / "indicator.csv",
        "metadata_path": data_dir / "metadata.csv",
        "world_map_path": data_dir / "world_map.csv",
    }
    nutrition_df.to_csv(paths["indicator_path"], index=False)
    metadata_df.to_csv(paths["metadata_path"], index=False)
    world_map_df.to_csv(paths["world_map_path"], index=False)
    return paths


def _settings(tmp_path, **paths):
    return ReportSettings(output_dir=tmp_path / "out", **paths)


def test_report_contains_four_figures_in_order(tmp_path, source_files):
    artefacts = run_report(_settings(tmp_path, **source_files))

    report_path = artefacts["report"][0]
    assert report_path.name == REPORT_HTML_NAME
    html = report_path.read_text(encoding="utf-8")

    positions = [html.index(f'<section id="{step.key}">') for step in CHART_STEPS]
    assert positions == sorted(positions)
    assert html.count("data:image/png;base64,") == 4
    # Caption precedes its figure.
    first = CHART_STEPS[0]
    assert html.index(first.caption.split(".")[0]) < html.index("data:image/png;base64,")

    assert [p.name for p in artefacts["figures"]] == [f"{s.key}.png" for s in CHART_STEPS]
    assert all(p.exists() for p in artefacts["figures"])


def test_secondary_indicator_is_unioned(tmp_path, source_files, nutrition_df):
    secondary = tmp_path / "data" / "indicator_2.csv"
    nutrition_df.assign(obs_value=nutrition_df["obs_value"] + 1).to_csv(secondary, index=False)

    artefacts = run_report(
        _settings(tmp_path, secondary_indicator_path=secondary, **source_files)
    )
    html = artefacts["report"][0].read_text(encoding="utf-8")
    assert html.count("data:image/png;base64,") == 4


def test_missing_metadata_column_skips_only_dependent_charts(tmp_path, source_files, metadata_df):
    metadata_df.drop(columns=["GDP per capita (constant 2015 US$)"]).to_csv(
        source_files["metadata_path"], index=False
    )
    artefacts = run_report(_settings(tmp_path, write_figures=False, **source_files))
    html = artefacts["report"][0].read_text(encoding="utf-8")

    assert html.count("data:image/png;base64,") == 2
    assert html.count("Chart not rendered") == 2
    assert "gdp_per_capita" in html
    assert artefacts["figures"] == []


def test_missing_source_aborts_without_output(tmp_path, source_files):
    source_files["metadata_path"].unlink()
    settings = _settings(tmp_path, **source_files)
    with pytest.raises(LoadError):
        run_report(settings)
    assert not settings.output_dir.exists()


def test_figure_closed_when_saving_png_fails(tmp_path, source_files, monkeypatch):
    def _fail_save(fig, path, **kwargs):
        raise OSError("disk full")

    monkeypatch.setattr(report_pipeline, "save_figure_png", _fail_save)
    sources = load_sources(_settings(tmp_path, **source_files))
    plt.close("all")

    with pytest.raises(OSError):
        render_chart(CHART_STEPS[0], sources, figures_dir=tmp_path / "figures")
    assert plt.get_fignums() == []
