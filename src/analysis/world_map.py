"""
Choropleth drawing on a world map vertex table.

The map reference is a long table with one row per polygon vertex
(long, lat, group, order, region); each `group` is one closed polygon whose
vertices are drawn in `order`. Polygons are filled from a value column and
drawn with a fixed "no data" colour where that value is missing.
"""

from __future__ import annotations

from typing import List, Tuple

import matplotlib
import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
from matplotlib.collections import PolyCollection
from matplotlib.colors import Normalize

NO_DATA_COLOR = "#d9d9d9"


def polygons_from_vertices(
    map_df: pd.DataFrame,
    value_col: str,
) -> Tuple[List[np.ndarray], np.ndarray]:
    """Return (vertex arrays, value per polygon) in group order."""
    verts: List[np.ndarray] = []
    values: List[float] = []
    ordered = map_df.sort_values(["group", "order"], kind="mergesort")
    for _, poly in ordered.groupby("group", sort=False):
        verts.append(poly[["long", "lat"]].to_numpy(dtype=float))
        values.append(pd.to_numeric(poly[value_col], errors="coerce").iloc[0])
    return verts, np.asarray(values, dtype=float)


def draw_choropleth(
    ax: plt.Axes,
    map_df: pd.DataFrame,
    value_col: str,
    *,
    cmap: str = "viridis",
    no_data_color: str = NO_DATA_COLOR,
) -> Normalize:
    """
    Fill every polygon of `map_df` on `ax`. Returns the Normalize used for
    the colour scale so the caller can attach a colorbar.
    """
    verts, values = polygons_from_vertices(map_df, value_col)
    has_value = ~np.isnan(values)

    if has_value.any():
        norm = Normalize(vmin=float(values[has_value].min()), vmax=float(values[has_value].max()))
    else:
        norm = Normalize(vmin=0.0, vmax=1.0)

    colormap = matplotlib.colormaps[cmap]
    facecolors = [
        colormap(norm(v)) if ok else no_data_color
        for v, ok in zip(values, has_value)
    ]

    collection = PolyCollection(
        verts,
        facecolors=facecolors,
        edgecolors="white",
        linewidths=0.2,
    )
    ax.add_collection(collection)
    ax.autoscale_view()
    ax.set_aspect("equal")
    ax.set_axis_off()
    return norm


__all__ = ["NO_DATA_COLOR", "polygons_from_vertices", "draw_choropleth"]
