"""
Common helpers
--------------

Error types shared by the ingestion, transformation and report layers.
"""

from .errors import (  # noqa: F401
    LoadError,
    MissingColumnError,
    ReportError,
    require_columns,
)

__all__ = [
    "ReportError",
    "LoadError",
    "MissingColumnError",
    "require_columns",
]
