"""I/O contracts for Step 01: STL export (grid -> closed solid -> STL)."""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field


class StlExportInput(BaseModel):
    grid_path: Optional[Path] = Field(
        None, description="Validated grid.npy from s00; defaults to <data_root>/interim/s00_grid/grid.npy"
    )


class StlExportOutput(BaseModel):
    stl_path: Path = Field(..., description="Path to the exported .stl file")
    stats_path: Path = Field(..., description="Path to the export statistics JSON")
    binary: bool = Field(..., description="True for binary STL, False for ASCII")
    rows: int = Field(..., description="Grid rows")
    cols: int = Field(..., description="Grid columns")
    expected_facets: int = Field(..., description="Predicted facet count")
    facets_written: int = Field(..., description="Facets actually written")
    bytes_written: int = Field(0, description="Size of the STL file in bytes")
