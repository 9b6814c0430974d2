"""Tests for hm2stl.utils: grid validation and grid readers."""

from pathlib import Path

import numpy as np
import pytest

from hm2stl.core.errors import InvalidGrid
from hm2stl.utils.grid import validate_height_grid
from hm2stl.utils.io import read_height_grid


class TestValidateHeightGrid:
    def test_uint8_passthrough(self):
        grid = np.array([[0, 1], [2, 3]], dtype=np.uint8)
        out = validate_height_grid(grid)
        assert out.dtype == np.uint8
        np.testing.assert_array_equal(out, grid)

    def test_nested_lists(self):
        out = validate_height_grid([[0, 255], [255, 0]])
        assert out.dtype == np.uint8
        assert out.shape == (2, 2)

    def test_integral_floats_accepted(self):
        out = validate_height_grid(np.array([[0.0, 12.0], [200.0, 255.0]]))
        assert out[1, 0] == 200

    @pytest.mark.parametrize("grid", [
        [[1, 2, 3]],            # single row
        [[1], [2], [3]],        # single column
        [[7]],
        [1, 2, 3, 4],           # not 2-D
        np.zeros((2, 2, 2)),
    ])
    def test_too_small_or_wrong_rank(self, grid):
        with pytest.raises(InvalidGrid):
            validate_height_grid(grid)

    @pytest.mark.parametrize("grid", [
        [[0, 256], [1, 2]],
        [[-1, 0], [1, 2]],
        [[0.5, 1.0], [2.0, 3.0]],
        [[np.nan, 1.0], [2.0, 3.0]],
    ])
    def test_out_of_range_values(self, grid):
        with pytest.raises(InvalidGrid):
            validate_height_grid(np.array(grid))

    def test_ragged_rows(self):
        with pytest.raises(InvalidGrid):
            validate_height_grid([[1, 2, 3], [4, 5]])


class TestReadHeightGrid:
    def test_npy(self, tmp_path: Path):
        grid = np.arange(12, dtype=np.uint8).reshape(3, 4)
        path = tmp_path / "grid.npy"
        np.save(str(path), grid)
        np.testing.assert_array_equal(read_height_grid(path), grid)

    def test_csv(self, tmp_path: Path):
        path = tmp_path / "grid.csv"
        path.write_text("0,10,20\n30,40,50\n")
        out = read_height_grid(path)
        assert out.shape == (2, 3)
        assert out[1, 2] == 50

    def test_txt_whitespace(self, tmp_path: Path):
        path = tmp_path / "grid.txt"
        path.write_text("1 2\n3 4\n")
        np.testing.assert_array_equal(read_height_grid(path), [[1, 2], [3, 4]])

    def test_single_line_stays_2d(self, tmp_path: Path):
        path = tmp_path / "line.csv"
        path.write_text("1,2,3\n")
        out = read_height_grid(path)
        assert out.shape == (1, 3)
        with pytest.raises(InvalidGrid):
            validate_height_grid(out)

    def test_unsupported_extension(self, tmp_path: Path):
        path = tmp_path / "grid.png"
        path.write_bytes(b"\x89PNG")
        with pytest.raises(InvalidGrid):
            read_height_grid(path)

    def test_unparseable_text(self, tmp_path: Path):
        path = tmp_path / "grid.csv"
        path.write_text("a,b\nc,d\n")
        with pytest.raises(InvalidGrid):
            read_height_grid(path)
