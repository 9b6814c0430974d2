"""Vertex field builder: height grid -> doubled lattice of real and center vertices.

Real vertices sit on the sample grid. Center vertices sit in the middle of
every 2x2 block of real vertices, at the mean height of the four corners:

    o       o       o       o       line 0  (real row 0)
        +       +       +           line 1  (center row 0)
    o       o       o       o       line 2  (real row 1)

Even lattice lines hold real rows, odd lines hold center rows, which are one
entry shorter. Vertex values are created on access from two float arrays, so
the field costs O(rows * cols) memory.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

import numpy as np

from hm2stl.core.errors import InvalidParameter, MeshBoundsError
from hm2stl.utils.grid import validate_height_grid

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Vertex:
    """A point of the solid in physical units."""

    x: float
    y: float
    z: float

    def on_floor(self) -> Vertex:
        """Projection of this vertex onto the base plane z = 0."""
        return Vertex(self.x, self.y, 0.0)


class VertexField:
    """Bounds-checked accessor over the doubled lattice."""

    def __init__(self, real_z: np.ndarray, center_z: np.ndarray, pitch: float):
        self.real_z = real_z
        self.center_z = center_z
        self.pitch = pitch
        self.rows, self.cols = real_z.shape

    @property
    def lines(self) -> int:
        """Number of lattice lines (real and center rows interleaved)."""
        return 2 * self.rows - 1

    @property
    def last_line(self) -> int:
        return self.lines - 1

    def real(self, row: int, col: int) -> Vertex:
        if not (0 <= row < self.rows and 0 <= col < self.cols):
            raise MeshBoundsError(
                f"Real vertex ({row}, {col}) outside {self.rows}x{self.cols} grid"
            )
        return Vertex(col * self.pitch, row * self.pitch, float(self.real_z[row, col]))

    def center(self, row: int, col: int) -> Vertex:
        if not (0 <= row < self.rows - 1 and 0 <= col < self.cols - 1):
            raise MeshBoundsError(
                f"Center vertex ({row}, {col}) outside {self.rows - 1}x{self.cols - 1} center grid"
            )
        half = self.pitch / 2
        return Vertex(
            col * self.pitch + half,
            row * self.pitch + half,
            float(self.center_z[row, col]),
        )

    def at(self, line: int, col: int) -> Vertex:
        """Vertex at ``col`` of lattice ``line``; even lines are real, odd are center."""
        if not 0 <= line < self.lines:
            raise MeshBoundsError(f"Lattice line {line} outside 0..{self.last_line}")
        if line % 2 == 0:
            return self.real(line // 2, col)
        return self.center(line // 2, col)


def build_vertex_field(
    grid,
    pitch: float,
    z_scale: float,
    base_thickness: float,
) -> VertexField:
    """Convert a height grid into a VertexField.

    Heights are normalized against the lowest sample, so the lowest point of
    the surface sits exactly ``base_thickness`` above the floor.

    Raises:
        InvalidGrid: grid smaller than 2x2 or values outside 0..255.
        InvalidParameter: non-positive or non-finite pitch.
    """
    heights = validate_height_grid(grid)
    if not math.isfinite(pitch) or pitch <= 0:
        raise InvalidParameter(f"pitch must be positive, got {pitch}")

    lowest = int(heights.min())
    real_z = (heights.astype(np.float64) - lowest) * z_scale + base_thickness
    center_z = (real_z[:-1, :-1] + real_z[:-1, 1:] + real_z[1:, :-1] + real_z[1:, 1:]) / 4

    rows, cols = heights.shape
    logger.debug(
        f"Vertex field {rows}x{cols} (lowest={lowest}, pitch={pitch:g}, z_scale={z_scale:g})"
    )
    return VertexField(real_z, center_z, pitch)
