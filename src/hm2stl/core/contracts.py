"""Common Pydantic models shared across pipeline steps."""

from __future__ import annotations

import math
from pathlib import Path
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field

from .errors import InvalidParameter

# Largest raw intensity of an 8-bit sample; peak model height maps onto it.
MAX_INTENSITY = 255


def predict_facet_count(rows: int, cols: int) -> int:
    """Facets in the closed solid for a ``rows`` x ``cols`` grid (rows, cols >= 2)."""
    return 4 * rows * cols + 2 * (rows + cols) - 10


def predict_binary_size(rows: int, cols: int) -> int:
    """Exact byte size of the binary STL for a ``rows`` x ``cols`` grid."""
    return 84 + 50 * predict_facet_count(rows, cols)


class StepMeta(BaseModel):
    """Metadata attached to every step output for reproducibility."""

    step_name: str
    elapsed_seconds: float = 0.0
    params: dict[str, Any] = Field(default_factory=dict)


class ModelParameters(BaseModel):
    """Scalar parameters supplied alongside the height grid.

    Defaults mirror a typical AFM scan: 2500 nm across 1024 samples,
    a saturated pixel 5 mm tall and a 1 mm base.
    """

    model_name: str = Field("heightmap", description="Solid name written to the ASCII header/footer")
    scan_size: float = Field(2500.0, description="Physical width of the scan (before resampling)")
    samples_per_line: float = Field(1024.0, description="Samples per scan line (before resampling)")
    peak_model_height: float = Field(5.0, description="Model height of a saturated (255) sample")
    base_thickness: float = Field(1.0, description="Solid thickness below the lowest sample")
    binary: bool = Field(False, description="Write binary STL instead of ASCII")

    @property
    def pitch(self) -> float:
        """Physical distance between adjacent samples."""
        return self.scan_size / self.samples_per_line

    @property
    def z_scale(self) -> float:
        """Model height per intensity step."""
        return self.peak_model_height / MAX_INTENSITY

    def validate_scaling(self) -> None:
        """Raise InvalidParameter unless the parameters describe a printable solid."""
        for name in ("scan_size", "samples_per_line", "peak_model_height", "base_thickness"):
            value = getattr(self, name)
            if not math.isfinite(value):
                raise InvalidParameter(f"{name} must be finite, got {value}")
        if self.samples_per_line <= 0:
            raise InvalidParameter(f"samples_per_line must be positive, got {self.samples_per_line}")
        if self.pitch <= 0:
            raise InvalidParameter(f"pitch must be positive, got {self.pitch}")
        if self.z_scale <= 0:
            raise InvalidParameter(f"peak_model_height must be positive, got {self.peak_model_height}")
        if self.base_thickness < 0:
            raise InvalidParameter(f"base_thickness must not be negative, got {self.base_thickness}")
        if not self.model_name.strip():
            raise InvalidParameter("model_name must not be blank")
        if "\n" in self.model_name or "\r" in self.model_name:
            raise InvalidParameter(f"model_name must be a single line, got {self.model_name!r}")


class ExportResult(BaseModel):
    """Typed outcome of one heightmap export. Failures are values, not exceptions."""

    success: bool
    error_kind: Optional[
        Literal[
            "InvalidGrid",
            "InvalidParameter",
            "MeshBoundsError",
            "FacetCountMismatch",
            "IOFailure",
            "ExportAborted",
        ]
    ] = None
    message: str = ""
    output_path: Optional[Path] = None
    binary: bool = False
    rows: int = 0
    cols: int = 0
    expected_facets: int = 0
    facets_written: int = 0
    bytes_written: int = 0
    elapsed_seconds: float = 0.0


class PipelineConfig(BaseModel):
    """Top-level pipeline configuration loaded from pipeline.yaml."""

    project_name: str = "hm2stl_project"
    data_root: Path = Path("./data")
    steps: list[StepEntry] = Field(default_factory=list)


class StepEntry(BaseModel):
    """One entry in the pipeline step list."""

    name: str
    module: str
    config_file: str
    depends_on: list[str] = Field(default_factory=list)
    enabled: bool = True


# Fix forward reference
PipelineConfig.model_rebuild()
