"""Shared pytest fixtures for hm2stl tests."""

from pathlib import Path

import numpy as np
import pytest


@pytest.fixture
def data_root(tmp_path: Path) -> Path:
    """Create a temporary data root with standard directory structure."""
    for subdir in ["raw", "interim/s00_grid", "processed"]:
        (tmp_path / subdir).mkdir(parents=True, exist_ok=True)
    return tmp_path


@pytest.fixture
def checker_grid() -> np.ndarray:
    """2x2 grid with opposite corners at the extremes."""
    return np.array([[0, 255], [255, 0]], dtype=np.uint8)


@pytest.fixture
def random_grid() -> np.ndarray:
    """Reproducible 5x7 grid of random intensities."""
    rng = np.random.RandomState(42)
    return rng.randint(0, 256, (5, 7)).astype(np.uint8)


@pytest.fixture
def sample_grid_npy(data_root: Path, random_grid: np.ndarray) -> Path:
    """Random grid saved as the pipeline's default raw input."""
    grid_file = data_root / "raw" / "heightmap.npy"
    np.save(str(grid_file), random_grid)
    return grid_file
