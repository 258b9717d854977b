from .buffer import EMPTY, extract_indices, filled_pixels, new_buffer
from .project import axis_to_pixels, map_to_pixels, round_half_away
from .stamp import rasterize, stamp_points

__all__ = [
    "EMPTY",
    "axis_to_pixels",
    "extract_indices",
    "filled_pixels",
    "map_to_pixels",
    "new_buffer",
    "rasterize",
    "round_half_away",
    "stamp_points",
]
