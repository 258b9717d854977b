from __future__ import annotations

from dataclasses import dataclass
import logging
import math
from typing import Any

import numpy as np
import torch

from scatter_simplify.adapters import normalize_points
from scatter_simplify.config import (
    DEFAULT_CHUNK_SIZE,
    AxisRange,
    Backend,
    GridSpec,
    SimplifyConfig,
)
from scatter_simplify.mask import disk_mask
from scatter_simplify.raster import extract_indices, filled_pixels, rasterize
from scatter_simplify.raster.torch_stamp import rasterize_torch


LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class SimplifyResult:
    indices: np.ndarray
    n_points: int

    @property
    def n_retained(self) -> int:
        return int(self.indices.size)

    @property
    def fraction(self) -> float:
        if self.n_points == 0:
            return 0.0
        return self.n_retained / self.n_points

    @property
    def factor(self) -> float:
        if self.n_retained == 0:
            return math.inf
        return self.n_points / self.n_retained

    def select(self, *arrays: Any) -> tuple[Any, ...]:
        """Index each per-point array (coordinates, colors, ...) by the retained points."""
        out = []
        for arr in arrays:
            if len(arr) != self.n_points:
                raise ValueError(f"array length {len(arr)} does not match point count {self.n_points}")
            if hasattr(arr, "iloc"):
                out.append(arr.iloc[self.indices])
            elif isinstance(arr, torch.Tensor):
                out.append(arr[torch.as_tensor(self.indices, device=arr.device)])
            elif isinstance(arr, (list, tuple)):
                out.append(np.asarray(arr)[self.indices])
            else:
                out.append(arr[self.indices])
        return tuple(out)

    def summary(self) -> str:
        return (
            f"n_all = {self.n_points}, n_simplify = {self.n_retained}, "
            f"fraction = {100.0 * self.fraction:.3f} %, factor = {self.factor:.3f} x"
        )


class ScatterSimplifier:
    """Reduces point sets to the points visible in a ``grid``-sized scatter plot.

    One instance holds the grid/marker/chunking settings and the precomputed
    disk mask; each call takes its own axis range and points.
    """

    def __init__(self, config: SimplifyConfig | None = None) -> None:
        self._config = config if config is not None else SimplifyConfig()
        self._mask = disk_mask(self._config.marker)

    @property
    def config(self) -> SimplifyConfig:
        return self._config

    def simplify(self, x: Any, y: Any = None, *, axis: Any = None, data: Any = None) -> SimplifyResult:
        axis_range = None if axis is None else AxisRange.coerce(axis)
        x_arr, y_arr = normalize_points(x, y, data=data)
        if axis_range is None and not np.any(np.isfinite(x_arr) & np.isfinite(y_arr)):
            indices = np.empty(0, dtype=np.int64)
        else:
            if axis_range is None:
                axis_range = AxisRange.from_data(x_arr, y_arr)
            indices = self._run(x_arr, y_arr, axis_range)
        result = SimplifyResult(indices=indices, n_points=int(x_arr.size))
        LOGGER.info("scatter simplified: %s", result.summary())
        return result

    __call__ = simplify

    def _run(self, x: np.ndarray, y: np.ndarray, axis: AxisRange) -> np.ndarray:
        cfg = self._config
        if cfg.backend == "torch":
            buffer = rasterize_torch(x, y, axis, cfg.grid, self._mask, cfg.chunk_size, device=cfg.device)
        else:
            buffer = rasterize(x, y, axis, cfg.grid, self._mask, cfg.chunk_size)
        if LOGGER.isEnabledFor(logging.DEBUG):
            LOGGER.debug("%d of %d pixels covered", filled_pixels(buffer), cfg.grid.n_pixels)
        return extract_indices(buffer)


def simplify_scatter(
    x: Any,
    y: Any = None,
    *,
    axis: Any,
    grid: Any,
    marker: float = 0.0,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    backend: Backend = "numpy",
    device: str | None = None,
    data: Any = None,
) -> np.ndarray:
    """Return the ascending 0-based indices of the points left visible in the pixel grid.

    ``axis`` is an :class:`AxisRange` or ``(x_min, x_max, y_min, y_max)``;
    ``grid`` a :class:`GridSpec` or ``(n_x, n_y)``. Later points draw over
    earlier ones; every point covers a disk of ``marker`` pixels radius.
    """
    config = SimplifyConfig(
        grid=GridSpec.coerce(grid),
        marker=marker,
        chunk_size=chunk_size,
        backend=backend,
        device=device,
    )
    axis_range = AxisRange.coerce(axis)
    return ScatterSimplifier(config).simplify(x, y, axis=axis_range, data=data).indices
