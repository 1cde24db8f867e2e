"""Synthetic street networks for demos, benchmarks and tests."""

import numpy as np

from street_route.domain.street_graph import StreetMapGraph


def jittered_grid(
    rows: int,
    cols: int,
    *,
    rng: np.random.Generator,
    spacing_deg: float = 0.001,
    origin_lon: float = -122.27,
    origin_lat: float = 37.87,
    jitter: float = 0.2,
    drop_fraction: float = 0.0,
) -> StreetMapGraph:
    """
    rows x cols intersections on a lon/lat grid, each displaced by up to
    `jitter * spacing_deg` in both axes. Row streets are named "Row <r> St",
    column streets "Col <c> Ave". Each block (edge between neighbors) is kept
    with probability 1 - drop_fraction. Node ids are r * cols + c.
    """
    if rows < 1 or cols < 1:
        raise ValueError("grid needs at least one row and one column")
    if not 0.0 <= drop_fraction < 1.0:
        raise ValueError(f"drop_fraction must be in [0, 1), got {drop_fraction}")

    offsets = rng.uniform(-jitter, jitter, size=(rows, cols, 2)) * spacing_deg
    lon = origin_lon + np.arange(cols)[None, :] * spacing_deg + offsets[:, :, 0]
    lat = origin_lat + np.arange(rows)[:, None] * spacing_deg + offsets[:, :, 1]

    g = StreetMapGraph()
    for r in range(rows):
        for c in range(cols):
            g.add_node(r * cols + c, float(lon[r, c]), float(lat[r, c]))

    keep_row = rng.random(size=(rows, max(cols - 1, 0))) >= drop_fraction
    keep_col = rng.random(size=(max(rows - 1, 0), cols)) >= drop_fraction

    for r in range(rows):
        for c in range(cols - 1):
            if keep_row[r, c]:
                g.add_way([r * cols + c, r * cols + c + 1], name=f"Row {r} St")
    for r in range(rows - 1):
        for c in range(cols):
            if keep_col[r, c]:
                g.add_way([r * cols + c, (r + 1) * cols + c], name=f"Col {c} Ave")
    return g


def random_points(n: int, *, rng: np.random.Generator, bounds=(0.0, 0.0, 1.0, 1.0)):
    """n uniform points in (x0, y0, x1, y1) as a list of (x, y) float tuples."""
    x0, y0, x1, y1 = bounds
    xy = rng.uniform((x0, y0), (x1, y1), size=(n, 2))
    return [(float(x), float(y)) for x, y in xy]
