"""
Country label overrides
-----------------------

Display-name rewrites applied to country names before they are used as
chart labels. Only exact matches are rewritten; no fuzzy normalization is
attempted, so spelling differences against the world map reference stay
visible as unfilled regions.
"""

from __future__ import annotations

from typing import Dict, Mapping, Optional

import pandas as pd

COUNTRY_LABEL_OVERRIDES: Dict[str, str] = {
    "Macedonia, the former Yugoslav Republic of": "Macedonia",
}


def apply_country_label_overrides(
    df: pd.DataFrame,
    *,
    column: str = "country",
    overrides: Optional[Mapping[str, str]] = None,
) -> pd.DataFrame:
    """Return a copy of `df` with `column` rewritten through `overrides`."""
    mapping = COUNTRY_LABEL_OVERRIDES if overrides is None else overrides
    out = df.copy()
    out[column] = out[column].replace(dict(mapping))
    return out


__all__ = ["COUNTRY_LABEL_OVERRIDES", "apply_country_label_overrides"]
