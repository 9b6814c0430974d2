"""Configuration for Step 01: STL export."""

from typing import Optional

from pydantic import Field

from hm2stl.core.contracts import ModelParameters


class StlExportConfig(ModelParameters):
    output_name: Optional[str] = Field(
        None, description="Output file stem under processed/ (None = model_name)"
    )
    binary_header: Optional[str] = Field(
        None, description="Binary STL header text (None = generated from model_name)"
    )
