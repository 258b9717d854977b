from __future__ import annotations

import logging

import numpy as np
import torch

from scatter_simplify.chunks import iter_chunks
from scatter_simplify.config import AxisRange, GridSpec
from scatter_simplify.mask import DiskMask
from scatter_simplify.raster.buffer import EMPTY


LOGGER = logging.getLogger(__name__)


def _round_half_away(values: torch.Tensor) -> torch.Tensor:
    whole = torch.trunc(values)
    return whole + torch.sign(values) * (torch.abs(values - whole) >= 0.5).to(values.dtype)


def _axis_to_pixels(coord: torch.Tensor, lo: float, hi: float, n: int) -> torch.Tensor:
    norm = (coord - lo) / (hi - lo)
    return _round_half_away(1.0 + (n - 1) * norm) - 1.0


def stamp_points_torch(dst: torch.Tensor, px: torch.Tensor, py: torch.Tensor, ids: torch.Tensor, mask_dx: torch.Tensor, mask_dy: torch.Tensor, grid: GridSpec) -> None:
    """Max-reduce ``ids`` into the flat ``dst`` over every footprint pixel.

    The amax reduction makes the result independent of write order, so the
    scatter may run in parallel on any device.
    """
    if ids.numel() == 0:
        return
    cx = px[:, None] + mask_dx[None, :]
    cy = py[:, None] + mask_dy[None, :]
    on = (cx >= 0) & (cx < grid.n_x) & (cy >= 0) & (cy < grid.n_y)
    flat = cx[on] * grid.n_y + cy[on]
    values = ids[:, None].expand_as(cx)[on]
    dst.scatter_reduce_(0, flat, values, reduce="amax", include_self=True)


def rasterize_torch(
    x: np.ndarray,
    y: np.ndarray,
    axis: AxisRange,
    grid: GridSpec,
    mask: DiskMask,
    chunk_size: int,
    device: str | torch.device | None = None,
) -> np.ndarray:
    chunks = iter_chunks(int(x.size), chunk_size)
    dev = torch.device(device) if device is not None else torch.device("cpu")
    dst = torch.full((grid.n_pixels,), EMPTY, dtype=torch.int64, device=dev)
    mask_dx = torch.as_tensor(mask.dx, dtype=torch.int64, device=dev)
    mask_dy = torch.as_tensor(mask.dy, dtype=torch.int64, device=dev)
    xt = torch.as_tensor(np.ascontiguousarray(x, dtype=np.float64))
    yt = torch.as_tensor(np.ascontiguousarray(y, dtype=np.float64))
    reach = mask.reach
    for chunk in chunks:
        fx = _axis_to_pixels(xt[chunk.start : chunk.stop].to(dev), axis.x_min, axis.x_max, grid.n_x)
        fy = _axis_to_pixels(yt[chunk.start : chunk.stop].to(dev), axis.y_min, axis.y_max, grid.n_y)
        keep = torch.isfinite(fx) & torch.isfinite(fy)
        keep &= (fx >= -reach) & (fx <= grid.n_x - 1 + reach)
        keep &= (fy >= -reach) & (fy <= grid.n_y - 1 + reach)
        ids = torch.arange(chunk.start, chunk.stop, dtype=torch.int64, device=dev)[keep]
        stamp_points_torch(dst, fx[keep].to(torch.int64), fy[keep].to(torch.int64), ids, mask_dx, mask_dy, grid)
        LOGGER.debug("chunk [%d, %d): %d points on grid", chunk.start, chunk.stop, int(ids.numel()))
    return dst.view(grid.n_x, grid.n_y).cpu().numpy()
