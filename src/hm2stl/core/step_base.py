"""Base class for all pipeline steps.

A step declares typed Input, Output and Config pydantic models so the
runner can chain one step's output into the next step's input and the CLI
can print JSON schemas without running anything.
"""

from __future__ import annotations

import time
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Generic, TypeVar, ClassVar

from pydantic import BaseModel

InputT = TypeVar("InputT", bound=BaseModel)
OutputT = TypeVar("OutputT", bound=BaseModel)
ConfigT = TypeVar("ConfigT", bound=BaseModel)

logger = logging.getLogger(__name__)


class BaseStep(ABC, Generic[InputT, OutputT, ConfigT]):
    """Abstract base for pipeline steps.

    Subclasses set ``input_type``, ``output_type`` and ``config_type`` and
    implement ``run()`` and ``validate_inputs()``:

        class LoadGridStep(BaseStep[LoadGridInput, LoadGridOutput, LoadGridConfig]):
            input_type = LoadGridInput
            output_type = LoadGridOutput
            config_type = LoadGridConfig

            def run(self, inputs: LoadGridInput) -> LoadGridOutput: ...
            def validate_inputs(self, inputs: LoadGridInput) -> bool: ...
    """

    name: ClassVar[str] = ""
    input_type: ClassVar[type[BaseModel]]
    output_type: ClassVar[type[BaseModel]]
    config_type: ClassVar[type[BaseModel]]

    def __init__(self, config: ConfigT, data_root: Path):
        self.config = config
        self.data_root = Path(data_root)

    @property
    def raw_dir(self) -> Path:
        """Grids as delivered by the scanner or an image export."""
        return self.data_root / "raw"

    def interim_dir(self, stage: str) -> Path:
        """Per-step working directory, e.g. ``interim/s00_grid``."""
        return self.data_root / "interim" / stage

    @property
    def processed_dir(self) -> Path:
        """Final printable models."""
        return self.data_root / "processed"

    @abstractmethod
    def run(self, inputs: InputT) -> OutputT:
        """Execute this pipeline step. Returns output model."""
        ...

    @abstractmethod
    def validate_inputs(self, inputs: InputT) -> bool:
        """Check that all required input artifacts exist and are valid."""
        ...

    def execute(self, inputs: InputT) -> OutputT:
        """Run with logging, timing, and validation."""
        step_name = self.name or self.__class__.__name__
        logger.info(f"[{step_name}] Validating inputs...")

        if not self.validate_inputs(inputs):
            raise ValueError(f"[{step_name}] Input validation failed")

        logger.info(f"[{step_name}] Starting...")
        t0 = time.perf_counter()
        result = self.run(inputs)
        elapsed = time.perf_counter() - t0
        logger.info(f"[{step_name}] Done in {elapsed:.2f}s")
        return result

    @classmethod
    def get_input_schema(cls) -> dict:
        """Return JSON schema for inputs."""
        return cls.input_type.model_json_schema()
