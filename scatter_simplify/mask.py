from __future__ import annotations

from dataclasses import dataclass
import math

import numpy as np

from scatter_simplify.config import validate_marker


@dataclass(frozen=True)
class DiskMask:
    """Integer pixel offsets covered by a marker of ``radius`` centred on its own pixel."""

    radius: float
    dx: np.ndarray
    dy: np.ndarray

    @property
    def size(self) -> int:
        return int(self.dx.size)

    @property
    def reach(self) -> int:
        # Largest |offset| along either axis.
        return int(math.ceil(self.radius))

    def offsets(self) -> list[tuple[int, int]]:
        return list(zip(self.dx.tolist(), self.dy.tolist(), strict=True))


def disk_mask(radius: float) -> DiskMask:
    radius = validate_marker(radius)
    reach = int(math.ceil(radius))
    steps = np.arange(-reach, reach + 1, dtype=np.int64)
    dx, dy = np.meshgrid(steps, steps, indexing="ij")
    inside = np.hypot(dx, dy) <= radius
    return DiskMask(radius=radius, dx=dx[inside], dy=dy[inside])
