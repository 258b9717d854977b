from scatter_simplify.chunks import iter_chunks
from scatter_simplify.config import DEFAULT_GRID, AxisRange, GridSpec, SimplifyConfig
from scatter_simplify.errors import PointDataError, SimplifyConfigError, SimplifyError
from scatter_simplify.mask import DiskMask, disk_mask
from scatter_simplify.simplify import ScatterSimplifier, SimplifyResult, simplify_scatter

__all__ = [
    "AxisRange",
    "DEFAULT_GRID",
    "DiskMask",
    "GridSpec",
    "PointDataError",
    "ScatterSimplifier",
    "SimplifyConfig",
    "SimplifyConfigError",
    "SimplifyError",
    "SimplifyResult",
    "disk_mask",
    "iter_chunks",
    "simplify_scatter",
]
