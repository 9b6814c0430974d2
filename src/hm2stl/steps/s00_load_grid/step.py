"""Step 00: Load a grayscale height grid from disk and validate it."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import ClassVar

import numpy as np

from hm2stl.core.step_base import BaseStep
from hm2stl.utils.grid import validate_height_grid
from hm2stl.utils.io import GRID_EXTENSIONS, read_height_grid
from .config import LoadGridConfig
from .contracts import LoadGridInput, LoadGridOutput

logger = logging.getLogger(__name__)


class LoadGridStep(BaseStep[LoadGridInput, LoadGridOutput, LoadGridConfig]):
    """Read a raw grid, check it is a valid 8-bit heightmap and store it as grid.npy."""

    name: ClassVar[str] = "load_grid"
    input_type: ClassVar = LoadGridInput
    output_type: ClassVar = LoadGridOutput
    config_type: ClassVar = LoadGridConfig

    def _source(self, inputs: LoadGridInput) -> Path:
        if inputs.source_path is not None:
            return inputs.source_path
        return self.raw_dir / "heightmap.npy"

    def validate_inputs(self, inputs: LoadGridInput) -> bool:
        source = self._source(inputs)
        if not source.exists():
            logger.error(f"Grid file not found: {source}")
            return False
        if source.suffix.lower() not in GRID_EXTENSIONS:
            logger.error(f"Expected one of {sorted(GRID_EXTENSIONS)}, got: {source.suffix}")
            return False
        return True

    def run(self, inputs: LoadGridInput) -> LoadGridOutput:
        source = self._source(inputs)
        output_dir = self.interim_dir("s00_grid")
        output_dir.mkdir(parents=True, exist_ok=True)

        grid = validate_height_grid(read_height_grid(source))
        if self.config.flip_rows:
            # Stored rows run top-down; model y runs front-to-back.
            grid = np.ascontiguousarray(grid[::-1])

        rows, cols = grid.shape
        lowest, highest = int(grid.min()), int(grid.max())
        logger.info(f"Grid {rows}x{cols}, intensities {lowest}..{highest}")

        grid_path = output_dir / "grid.npy"
        np.save(str(grid_path), grid)

        metadata = {
            "source": str(source),
            "rows": rows,
            "cols": cols,
            "lowest": lowest,
            "highest": highest,
            "flip_rows": self.config.flip_rows,
        }
        metadata_path = output_dir / "metadata.json"
        with open(metadata_path, "w") as f:
            json.dump(metadata, f, indent=2)

        return LoadGridOutput(
            grid_path=grid_path,
            metadata_path=metadata_path,
            rows=rows,
            cols=cols,
            lowest=lowest,
            highest=highest,
        )
