"""hm2stl core: pipeline runner, base step, shared contracts and errors."""

from .step_base import BaseStep
from .contracts import (
    ExportResult,
    ModelParameters,
    PipelineConfig,
    StepEntry,
    StepMeta,
    predict_binary_size,
    predict_facet_count,
)
from .errors import (
    ExportAborted,
    FacetCountMismatch,
    HeightmapError,
    InvalidGrid,
    InvalidParameter,
    IOFailure,
    MeshBoundsError,
)
from .pipeline_runner import run_pipeline, load_pipeline_config
from .logging import setup_logging

__all__ = [
    "BaseStep",
    "ExportResult",
    "ModelParameters",
    "PipelineConfig",
    "StepEntry",
    "StepMeta",
    "predict_binary_size",
    "predict_facet_count",
    "HeightmapError",
    "InvalidGrid",
    "InvalidParameter",
    "MeshBoundsError",
    "FacetCountMismatch",
    "IOFailure",
    "ExportAborted",
    "run_pipeline",
    "load_pipeline_config",
    "setup_logging",
]
