"""Tests for the lenient CSV loader."""

import pytest

from common.errors import LoadError
from ingestion import load_nutrition_indicator, load_table


def test_load_table_infers_types(tmp_path):
    path = tmp_path / "indicator.csv"
    path.write_text(
        "country,sex,time_period,obs_value\n"
        "Kenya,Total,2010,35.5\n"
        "Kenya,Male,2010,30\n",
        encoding="utf-8",
    )
    df = load_nutrition_indicator(path)
    assert list(df.columns) == ["country", "sex", "time_period", "obs_value"]
    assert df["obs_value"].dtype.kind == "f"
    assert df["time_period"].dtype.kind == "i"


def test_load_is_lenient_about_columns(tmp_path):
    path = tmp_path / "other.csv"
    path.write_text("a,b\n1,2\n", encoding="utf-8")
    df = load_table(path)
    assert list(df.columns) == ["a", "b"]


def test_missing_file_raises_load_error(tmp_path):
    missing = tmp_path / "nope.csv"
    with pytest.raises(LoadError) as exc_info:
        load_table(missing)
    assert exc_info.value.path == missing
    assert "does not exist" in str(exc_info.value)


def test_empty_file_raises_load_error(tmp_path):
    path = tmp_path / "empty.csv"
    path.write_text("", encoding="utf-8")
    with pytest.raises(LoadError):
        load_table(path)


def test_directory_raises_load_error(tmp_path):
    with pytest.raises(LoadError):
        load_table(tmp_path)


def test_ragged_rows_raise_load_error(tmp_path):
    path = tmp_path / "ragged.csv"
    path.write_text("a,b\n1,2\n3,4,5,6\n", encoding="utf-8")
    with pytest.raises(LoadError):
        load_table(path)
