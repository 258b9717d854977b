from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import numpy as np
import torch

from scatter_simplify.errors import PointDataError


try:
    import pandas as pd
except Exception:  # pragma: no cover - optional dependency
    pd = None  # type: ignore[assignment]


def normalize_points(x: Any, y: Any = None, *, data: Any = None) -> tuple[np.ndarray, np.ndarray]:
    """Coerce point coordinates into two equal-length float64 arrays.

    Accepts separate ``x``/``y`` columns, a single ``(n, 2)`` array or
    two-column DataFrame in ``x``, or column names looked up in ``data``.
    Non-finite values are kept; they simply never reach the pixel buffer.
    """
    if data is not None:
        x, y = _resolve_columns(x, y, data)

    if y is None:
        x_arr, y_arr = _split_pairs(x)
    else:
        x_arr = _coerce_1d_numeric(x, label="x")
        y_arr = _coerce_1d_numeric(y, label="y")

    if x_arr.shape != y_arr.shape:
        raise PointDataError(f"x and y length mismatch: {x_arr.size} != {y_arr.size}")
    return x_arr, y_arr


def _resolve_columns(x: Any, y: Any, data: Any) -> tuple[Any, Any]:
    if pd is None:
        raise PointDataError("pandas is required when using `data=`")
    if not isinstance(data, pd.DataFrame):
        raise PointDataError("`data` must be a pandas DataFrame")
    if not isinstance(x, str) or not isinstance(y, str):
        raise PointDataError("with `data=`, x and y must be column names")
    for name in (x, y):
        if name not in data.columns:
            raise PointDataError(f"column not found: {name}")
    return data[x], data[y]


def _split_pairs(value: Any) -> tuple[np.ndarray, np.ndarray]:
    if pd is not None and isinstance(value, pd.DataFrame):
        numeric_cols = [c for c in value.columns if _is_numeric_dtype(value[c])]
        if len(numeric_cols) != 2:
            raise PointDataError("DataFrame input must contain exactly two numeric columns (x, y)")
        return (
            _coerce_1d_numeric(value[numeric_cols[0]], label="x"),
            _coerce_1d_numeric(value[numeric_cols[1]], label="y"),
        )

    if isinstance(value, torch.Tensor):
        arr = value.detach().cpu().to(torch.float64).numpy()
    elif isinstance(value, np.ndarray):
        arr = value
    elif isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        arr = np.asarray(value, dtype=object) if len(value) else np.empty((0, 2), dtype=np.float64)
    else:
        raise PointDataError(f"unsupported points input type: {type(value)!r}")

    if arr.ndim != 2 or arr.shape[1] != 2:
        raise PointDataError(f"points must have shape (n, 2), got {arr.shape}")
    return _coerce_ndarray(arr[:, 0], label="x"), _coerce_ndarray(arr[:, 1], label="y")


def _is_numeric_dtype(series: Any) -> bool:
    if pd is None:
        return False
    return bool(pd.api.types.is_numeric_dtype(series))


def _coerce_1d_numeric(value: Any, *, label: str) -> np.ndarray:
    if isinstance(value, torch.Tensor):
        tensor = value.detach()
        if tensor.ndim != 1:
            raise PointDataError(f"{label} must be 1-D")
        if tensor.is_cuda:
            tensor = tensor.cpu()
        return tensor.to(torch.float64).numpy()

    if pd is not None and isinstance(value, pd.Series):
        return _coerce_ndarray(value.to_numpy(), label=label)

    if isinstance(value, np.ndarray):
        if value.ndim != 1:
            raise PointDataError(f"{label} must be 1-D")
        return _coerce_ndarray(value, label=label)

    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        arr = np.asarray(value, dtype=object)
        if arr.ndim != 1:
            raise PointDataError(f"{label} must be 1-D")
        return _coerce_ndarray(arr, label=label)

    raise PointDataError(f"unsupported {label} input type: {type(value)!r}")


def _coerce_ndarray(arr: np.ndarray, *, label: str) -> np.ndarray:
    if arr.dtype.kind in {"i", "u", "f", "b"}:
        return np.ascontiguousarray(arr, dtype=np.float64)

    out = np.empty(arr.shape[0], dtype=np.float64)
    for i, raw in enumerate(arr.tolist()):
        if raw is None:
            out[i] = np.nan
            continue
        try:
            out[i] = float(raw)
        except (TypeError, ValueError) as exc:
            raise PointDataError(f"{label} contains non-numeric value at index {i}: {raw!r}") from exc
    return out
