from __future__ import annotations

import logging

import numpy as np

from scatter_simplify.chunks import chunk_count, iter_chunks
from scatter_simplify.config import AxisRange, GridSpec
from scatter_simplify.mask import DiskMask
from scatter_simplify.raster.buffer import new_buffer
from scatter_simplify.raster.project import map_to_pixels


LOGGER = logging.getLogger(__name__)


def stamp_points(dst: np.ndarray, px: np.ndarray, py: np.ndarray, ids: np.ndarray, mask: DiskMask) -> int:
    """Write ``ids`` into ``dst`` over each point's disk footprint.

    ``ids`` must be ascending and larger than every index already in ``dst``.
    Where footprints collide inside the batch the largest index wins. Returns
    the number of distinct pixels written.
    """
    if ids.size == 0 or mask.size == 0:
        return 0
    if not dst.flags.c_contiguous:
        raise ValueError("pixel buffer must be C-contiguous")
    n_x, n_y = dst.shape
    cx = px[:, None] + mask.dx[None, :]
    cy = py[:, None] + mask.dy[None, :]
    on = (cx >= 0) & (cx < n_x) & (cy >= 0) & (cy < n_y)
    flat = cx[on] * n_y + cy[on]
    # Row-major selection keeps candidates point-major, so the last hit on a pixel carries the max id.
    values = np.broadcast_to(ids[:, None], cx.shape)[on]
    pixels, first = np.unique(flat[::-1], return_index=True)
    dst.reshape(-1)[pixels] = values[::-1][first]
    return int(pixels.size)


def rasterize(
    x: np.ndarray,
    y: np.ndarray,
    axis: AxisRange,
    grid: GridSpec,
    mask: DiskMask,
    chunk_size: int,
) -> np.ndarray:
    chunks = iter_chunks(int(x.size), chunk_size)
    total = chunk_count(int(x.size), chunk_size)
    dst = new_buffer(grid)
    for number, chunk in enumerate(chunks, start=1):
        px, py, keep = map_to_pixels(x[chunk.start : chunk.stop], y[chunk.start : chunk.stop], axis, grid, reach=mask.reach)
        ids = np.arange(chunk.start, chunk.stop, dtype=np.int64)[keep]
        written = stamp_points(dst, px, py, ids, mask)
        LOGGER.debug(
            "chunk %d/%d [%d, %d): %d points on grid, %d pixels written",
            number,
            total,
            chunk.start,
            chunk.stop,
            ids.size,
            written,
        )
    return dst
