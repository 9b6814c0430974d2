"""Height grid validation shared by the loader step and the vertex field builder."""

from __future__ import annotations

import numpy as np

from hm2stl.core.contracts import MAX_INTENSITY
from hm2stl.core.errors import InvalidGrid

MIN_GRID_SIZE = 2


def validate_height_grid(grid) -> np.ndarray:
    """Return ``grid`` as a (rows, cols) uint8 array or raise InvalidGrid.

    Accepts any array-like of integral values in 0..255, including float
    arrays whose values happen to be whole numbers.
    """
    try:
        arr = np.asarray(grid)
    except (TypeError, ValueError) as e:
        raise InvalidGrid(f"Height grid is not a rectangular array: {e}") from e

    if arr.ndim != 2:
        raise InvalidGrid(f"Height grid must be 2-D, got shape {arr.shape}")
    rows, cols = arr.shape
    if rows < MIN_GRID_SIZE or cols < MIN_GRID_SIZE:
        raise InvalidGrid(
            f"Height grid needs at least {MIN_GRID_SIZE}x{MIN_GRID_SIZE} samples, got {rows}x{cols}"
        )
    if arr.dtype == np.uint8:
        return arr
    if arr.dtype.kind not in "iuf":
        raise InvalidGrid(f"Height grid must be numeric, got dtype {arr.dtype}")
    if arr.dtype.kind == "f":
        if not np.all(np.isfinite(arr)):
            raise InvalidGrid("Height grid contains non-finite values")
        if not np.all(arr == np.round(arr)):
            raise InvalidGrid("Height grid contains non-integral intensities")
    lo, hi = arr.min(), arr.max()
    if lo < 0 or hi > MAX_INTENSITY:
        raise InvalidGrid(f"Intensities must lie in 0..{MAX_INTENSITY}, got {lo}..{hi}")
    return arr.astype(np.uint8)
