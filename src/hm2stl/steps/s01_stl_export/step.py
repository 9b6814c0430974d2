"""Step 01: STL export of a closed, printable solid from a height grid.

Builds the vertex field, streams floor, wall and surface facets and writes
them as ASCII or binary STL, then records the model statistics (expected vs
written facets) next to the model.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import ClassVar

import numpy as np

from hm2stl.core.step_base import BaseStep
from .config import StlExportConfig
from .contracts import StlExportInput, StlExportOutput

logger = logging.getLogger(__name__)


class StlExportStep(BaseStep[StlExportInput, StlExportOutput, StlExportConfig]):
    name: ClassVar[str] = "stl_export"
    input_type: ClassVar = StlExportInput
    output_type: ClassVar = StlExportOutput
    config_type: ClassVar = StlExportConfig

    def _grid_path(self, inputs: StlExportInput) -> Path:
        if inputs.grid_path is not None:
            return inputs.grid_path
        return self.interim_dir("s00_grid") / "grid.npy"

    def validate_inputs(self, inputs: StlExportInput) -> bool:
        grid_path = self._grid_path(inputs)
        if not grid_path.exists():
            logger.error(f"Grid file not found: {grid_path}")
            return False
        return True

    def run(self, inputs: StlExportInput) -> StlExportOutput:
        from ._export import export_heightmap

        output_dir = self.processed_dir
        output_dir.mkdir(parents=True, exist_ok=True)

        grid = np.load(str(self._grid_path(inputs)), allow_pickle=False)

        stem = self.config.output_name or self.config.model_name
        stl_path = output_dir / f"{stem}.stl"
        result = export_heightmap(grid, self.config, stl_path, header_text=self.config.binary_header)

        if not result.success:
            raise RuntimeError(f"STL export failed [{result.error_kind}]: {result.message}")

        logger.info(
            f"Model statistics: expected {result.expected_facets} facets, "
            f"model has {result.facets_written} facets"
        )

        stats_path = output_dir / f"{stem}.json"
        with open(stats_path, "w") as f:
            json.dump(result.model_dump(mode="json"), f, indent=2)

        return StlExportOutput(
            stl_path=stl_path,
            stats_path=stats_path,
            binary=result.binary,
            rows=result.rows,
            cols=result.cols,
            expected_facets=result.expected_facets,
            facets_written=result.facets_written,
            bytes_written=result.bytes_written,
        )
