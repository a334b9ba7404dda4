from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional

import pandas as pd


class ReportError(Exception):
    """Base class for failures raised while building the dairy report."""


class LoadError(ReportError):
    """
    A source file is missing, unreadable or not parseable as a table.

    Fatal for the whole build: the pipeline aborts before writing anything.
    """

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Could not load {self.path}: {reason}")


class MissingColumnError(ReportError, KeyError):
    """
    A derivation references a column that is absent from its input table.

    Fatal for the chart being derived only; the pipeline skips that chart
    and keeps rendering the others.
    """

    def __init__(self, column: str, derivation: Optional[str] = None) -> None:
        self.column = column
        self.derivation = derivation
        where = f" (required by {derivation})" if derivation else ""
        super().__init__(f"Missing column {column!r}{where}")

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the whole message.
        return self.args[0]


def require_columns(
    df: pd.DataFrame,
    columns: Iterable[str],
    *,
    derivation: Optional[str] = None,
) -> None:
    """Raise MissingColumnError for the first of `columns` absent from `df`."""
    for column in columns:
        if column not in df.columns:
            raise MissingColumnError(column, derivation)


__all__ = [
    "ReportError",
    "LoadError",
    "MissingColumnError",
    "require_columns",
]
