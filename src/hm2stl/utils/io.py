"""I/O utilities: height grid readers for .npy and delimited text files."""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np

from hm2stl.core.errors import InvalidGrid

logger = logging.getLogger(__name__)

GRID_EXTENSIONS = {".npy", ".csv", ".txt"}


def read_height_grid(path: Path) -> np.ndarray:
    """Read a raw 2-D grid of intensities.

    ``.npy`` files are loaded with numpy; ``.csv`` files are comma separated
    and ``.txt`` files whitespace separated. The result is not validated.
    """
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix not in GRID_EXTENSIONS:
        raise InvalidGrid(f"Unsupported grid format '{suffix}', expected one of {sorted(GRID_EXTENSIONS)}")

    try:
        if suffix == ".npy":
            grid = np.load(str(path), allow_pickle=False)
        else:
            delimiter = "," if suffix == ".csv" else None
            grid = np.loadtxt(str(path), delimiter=delimiter, ndmin=2)
    except ValueError as e:
        raise InvalidGrid(f"Could not parse height grid {path.name}: {e}") from e

    logger.info(f"Read {grid.shape} grid ({grid.dtype}) from {path.name}")
    return grid
