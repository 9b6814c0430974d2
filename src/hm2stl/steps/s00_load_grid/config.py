"""Configuration for Step 00: Load height grid."""

from pydantic import BaseModel, Field


class LoadGridConfig(BaseModel):
    flip_rows: bool = Field(
        True,
        description="Reverse row order so the first stored row becomes the back edge of the model",
    )
