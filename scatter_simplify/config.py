from __future__ import annotations

from dataclasses import dataclass, field
import math
import numbers
from typing import Any, Literal

import numpy as np
import torch

from scatter_simplify.errors import SimplifyConfigError


Backend = Literal["numpy", "torch"]

BACKENDS: tuple[str, ...] = ("numpy", "torch")
DEFAULT_MARKER = 4.5
DEFAULT_CHUNK_SIZE = 100_000


@dataclass(frozen=True)
class AxisRange:
    x_min: float
    x_max: float
    y_min: float
    y_max: float

    def __post_init__(self) -> None:
        values = (self.x_min, self.x_max, self.y_min, self.y_max)
        if not all(isinstance(v, numbers.Real) and math.isfinite(v) for v in values):
            raise SimplifyConfigError(f"axis limits must be finite numbers: {values!r}")
        if self.x_max <= self.x_min:
            raise SimplifyConfigError(f"x_max must be > x_min (got {self.x_min} .. {self.x_max})")
        if self.y_max <= self.y_min:
            raise SimplifyConfigError(f"y_max must be > y_min (got {self.y_min} .. {self.y_max})")
        for name in ("x_min", "x_max", "y_min", "y_max"):
            object.__setattr__(self, name, float(getattr(self, name)))

    @property
    def x_span(self) -> float:
        return float(self.x_max - self.x_min)

    @property
    def y_span(self) -> float:
        return float(self.y_max - self.y_min)

    @classmethod
    def from_limits(cls, x_lim: Any, y_lim: Any) -> AxisRange:
        x_pair = _pair(x_lim, label="x_lim")
        y_pair = _pair(y_lim, label="y_lim")
        return cls(x_min=x_pair[0], x_max=x_pair[1], y_min=y_pair[0], y_max=y_pair[1])

    @classmethod
    def coerce(cls, value: Any) -> AxisRange:
        if isinstance(value, AxisRange):
            return value
        if isinstance(value, dict):
            missing = [k for k in ("x_min", "x_max", "y_min", "y_max") if k not in value]
            if missing:
                raise SimplifyConfigError(f"axis mapping is missing {missing[0]!r}")
            value = (value["x_min"], value["x_max"], value["y_min"], value["y_max"])
        try:
            x_min, x_max, y_min, y_max = (float(v) for v in value)
        except (TypeError, ValueError) as exc:
            raise SimplifyConfigError(f"axis must be (x_min, x_max, y_min, y_max), got {value!r}") from exc
        return cls(x_min=x_min, x_max=x_max, y_min=y_min, y_max=y_max)

    @classmethod
    def from_data(cls, x: np.ndarray, y: np.ndarray) -> AxisRange:
        """Tight limits around the finite points; a zero span is widened by 1.0 each side."""
        x = np.asarray(x, dtype=np.float64)
        y = np.asarray(y, dtype=np.float64)
        finite = np.isfinite(x) & np.isfinite(y)
        if not np.any(finite):
            raise SimplifyConfigError("cannot derive axis limits: no finite points")
        vx = x[finite]
        vy = y[finite]
        xmin, xmax = float(np.min(vx)), float(np.max(vx))
        ymin, ymax = float(np.min(vy)), float(np.max(vy))
        if xmin == xmax:
            xmin -= 1.0
            xmax += 1.0
        if ymin == ymax:
            ymin -= 1.0
            ymax += 1.0
        return cls(x_min=xmin, x_max=xmax, y_min=ymin, y_max=ymax)


@dataclass(frozen=True)
class GridSpec:
    n_x: int
    n_y: int

    def __post_init__(self) -> None:
        for name in ("n_x", "n_y"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Integral):
                raise SimplifyConfigError(f"{name} must be an integer, got {value!r}")
            if value <= 0:
                raise SimplifyConfigError(f"{name} must be > 0")
            object.__setattr__(self, name, int(value))

    @property
    def n_pixels(self) -> int:
        return int(self.n_x) * int(self.n_y)

    @classmethod
    def coerce(cls, value: Any) -> GridSpec:
        if isinstance(value, GridSpec):
            return value
        if isinstance(value, dict):
            try:
                return cls(n_x=value["n_x"], n_y=value["n_y"])
            except KeyError as exc:
                raise SimplifyConfigError(f"grid mapping is missing {exc.args[0]!r}") from exc
        try:
            n_x, n_y = value
        except (TypeError, ValueError) as exc:
            raise SimplifyConfigError(f"grid must be (n_x, n_y), got {value!r}") from exc
        return cls(n_x=n_x, n_y=n_y)


DEFAULT_GRID = GridSpec(n_x=800, n_y=700)


@dataclass(frozen=True)
class SimplifyConfig:
    grid: GridSpec = DEFAULT_GRID
    marker: float = DEFAULT_MARKER
    chunk_size: int = DEFAULT_CHUNK_SIZE
    backend: Backend = "numpy"
    device: str | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "grid", GridSpec.coerce(self.grid))
        object.__setattr__(self, "marker", validate_marker(self.marker))
        object.__setattr__(self, "chunk_size", validate_chunk_size(self.chunk_size))
        if self.backend not in BACKENDS:
            raise SimplifyConfigError(f"unknown backend {self.backend!r}; expected one of {BACKENDS}")
        if self.device is not None:
            if self.backend != "torch":
                raise SimplifyConfigError("device is only supported by the torch backend")
            try:
                torch.device(self.device)
            except (RuntimeError, TypeError) as exc:
                raise SimplifyConfigError(f"invalid torch device {self.device!r}") from exc


def validate_marker(marker: Any) -> float:
    if isinstance(marker, bool) or not isinstance(marker, numbers.Real) or not math.isfinite(marker):
        raise SimplifyConfigError(f"marker radius must be a finite number, got {marker!r}")
    if marker < 0:
        raise SimplifyConfigError("marker radius must be >= 0")
    return float(marker)


def validate_chunk_size(chunk_size: Any) -> int:
    if isinstance(chunk_size, bool) or not isinstance(chunk_size, numbers.Integral):
        raise SimplifyConfigError(f"chunk_size must be an integer, got {chunk_size!r}")
    if chunk_size <= 0:
        raise SimplifyConfigError("chunk_size must be > 0")
    return int(chunk_size)


def _pair(value: Any, *, label: str) -> tuple[float, float]:
    try:
        lo, hi = (float(v) for v in value)
    except (TypeError, ValueError) as exc:
        raise SimplifyConfigError(f"{label} must be a (min, max) pair, got {value!r}") from exc
    return lo, hi
