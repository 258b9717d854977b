from __future__ import annotations


class SimplifyError(ValueError):
    pass


class SimplifyConfigError(SimplifyError):
    """Invalid axis, grid, marker, chunk size, or backend settings."""


class PointDataError(SimplifyError):
    """Point coordinates that cannot be read as two equal-length numeric columns."""
