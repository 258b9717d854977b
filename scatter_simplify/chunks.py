from __future__ import annotations

from collections.abc import Iterator
import numbers

from scatter_simplify.config import validate_chunk_size
from scatter_simplify.errors import SimplifyConfigError


def iter_chunks(n: int, chunk_size: int) -> Iterator[range]:
    """Yield ascending, non-overlapping ranges of at most ``chunk_size`` covering ``range(n)``."""
    chunk_size = validate_chunk_size(chunk_size)
    if isinstance(n, bool) or not isinstance(n, numbers.Integral) or n < 0:
        raise SimplifyConfigError(f"point count must be a non-negative integer, got {n!r}")
    return _ranges(int(n), chunk_size)


def _ranges(n: int, chunk_size: int) -> Iterator[range]:
    for start in range(0, n, chunk_size):
        yield range(start, min(start + chunk_size, n))


def chunk_count(n: int, chunk_size: int) -> int:
    chunk_size = validate_chunk_size(chunk_size)
    return -(-max(0, int(n)) // chunk_size)
