from __future__ import annotations

import numpy as np

from scatter_simplify.config import GridSpec


# Point indices are >= 0, so -1 never collides with a real index and sorts below all of them.
EMPTY = -1


def new_buffer(grid: GridSpec) -> np.ndarray:
    return np.full((grid.n_x, grid.n_y), EMPTY, dtype=np.int64)


def filled_pixels(buffer: np.ndarray) -> int:
    return int(np.count_nonzero(buffer != EMPTY))


def extract_indices(buffer: np.ndarray) -> np.ndarray:
    """Distinct point indices still present in ``buffer``, ascending."""
    values = np.unique(buffer)
    return values[values != EMPTY].astype(np.int64, copy=False)
