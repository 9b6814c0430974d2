"""I/O contracts for Step 00: Load height grid."""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field


class LoadGridInput(BaseModel):
    source_path: Optional[Path] = Field(
        None, description="Grid file (.npy/.csv/.txt); defaults to <data_root>/raw/heightmap.npy"
    )


class LoadGridOutput(BaseModel):
    grid_path: Path = Field(..., description="Path to validated uint8 grid.npy")
    metadata_path: Path = Field(..., description="Path to metadata.json")
    rows: int = Field(..., description="Number of grid rows")
    cols: int = Field(..., description="Number of grid columns")
    lowest: int = Field(..., description="Lowest intensity in the grid")
    highest: int = Field(..., description="Highest intensity in the grid")
