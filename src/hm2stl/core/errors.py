"""Error kinds raised by the heightmap-to-STL core.

Every failure carries a ``kind`` string so the export facade can report it
as a typed result without the caller matching on exception classes.
"""

from __future__ import annotations


class HeightmapError(Exception):
    """Base class for all hm2stl failures."""

    kind: str = "HeightmapError"


class InvalidGrid(HeightmapError):
    """Height grid is too small, not 2-D, or holds values outside 0..255."""

    kind = "InvalidGrid"


class InvalidParameter(HeightmapError):
    """A scaling parameter is non-finite or out of range."""

    kind = "InvalidParameter"


class MeshBoundsError(HeightmapError):
    """Lattice access outside the doubled vertex field."""

    kind = "MeshBoundsError"


class FacetCountMismatch(HeightmapError):
    """Number of streamed facets differs from the predicted count."""

    kind = "FacetCountMismatch"

    def __init__(self, expected: int, actual: int):
        super().__init__(f"Expected {expected} facets, streamed {actual}")
        self.expected = expected
        self.actual = actual


class IOFailure(HeightmapError):
    """Writing the output file failed."""

    kind = "IOFailure"


class ExportAborted(HeightmapError):
    """Export was cancelled through the abort callback."""

    kind = "ExportAborted"


ERROR_KINDS = (
    InvalidGrid.kind,
    InvalidParameter.kind,
    MeshBoundsError.kind,
    FacetCountMismatch.kind,
    IOFailure.kind,
    ExportAborted.kind,
)
