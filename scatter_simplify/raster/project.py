from __future__ import annotations

import numpy as np

from scatter_simplify.config import AxisRange, GridSpec


def round_half_away(values: np.ndarray) -> np.ndarray:
    values = np.asarray(values, dtype=np.float64)
    whole = np.trunc(values)
    with np.errstate(invalid="ignore"):
        return whole + np.sign(values) * (np.abs(values - whole) >= 0.5)


def axis_to_pixels(coord: np.ndarray, lo: float, hi: float, n: int) -> np.ndarray:
    """Map data coordinates onto 0-based pixel positions, unclamped.

    The nearest 1-based pixel ``round(1 + (n - 1) * norm)`` is taken with ties
    rounded away from zero, then shifted down by one.
    """
    norm = (coord - lo) / (hi - lo)
    return round_half_away(1.0 + (n - 1) * norm) - 1.0


def map_to_pixels(
    x: np.ndarray,
    y: np.ndarray,
    axis: AxisRange,
    grid: GridSpec,
    *,
    reach: int = 0,
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Return ``(px, py, keep)`` for the points whose footprint can touch the grid.

    ``keep`` is a boolean mask over the inputs; ``px``/``py`` are int64 pixel
    positions of the kept points only. Points with non-finite coordinates or
    lying more than ``reach`` pixels outside the grid are dropped before the
    integer conversion.
    """
    fx = axis_to_pixels(np.asarray(x, dtype=np.float64), axis.x_min, axis.x_max, grid.n_x)
    fy = axis_to_pixels(np.asarray(y, dtype=np.float64), axis.y_min, axis.y_max, grid.n_y)
    keep = np.isfinite(fx) & np.isfinite(fy)
    keep &= (fx >= -reach) & (fx <= grid.n_x - 1 + reach)
    keep &= (fy >= -reach) & (fy <= grid.n_y - 1 + reach)
    return fx[keep].astype(np.int64), fy[keep].astype(np.int64), keep
