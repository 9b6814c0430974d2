"""Tests for S01 vertex field builder (real/center lattice)."""

import dataclasses

import numpy as np
import pytest

from hm2stl.core.errors import InvalidGrid, InvalidParameter, MeshBoundsError
from hm2stl.steps.s01_stl_export._vertex_field import Vertex, build_vertex_field


@pytest.fixture
def small_field():
    grid = np.array([[10, 20], [30, 40]], dtype=np.uint8)
    return build_vertex_field(grid, pitch=2.0, z_scale=0.5, base_thickness=1.0)


class TestVertex:
    def test_on_floor_returns_new_value(self):
        v = Vertex(1.0, 2.0, 3.0)
        floor = v.on_floor()
        assert floor == Vertex(1.0, 2.0, 0.0)
        assert v.z == 3.0

    def test_frozen(self):
        v = Vertex(1.0, 2.0, 3.0)
        with pytest.raises(dataclasses.FrozenInstanceError):
            v.z = 0.0


class TestBuildVertexField:
    def test_dimensions(self, small_field):
        assert small_field.rows == 2
        assert small_field.cols == 2
        assert small_field.lines == 3
        assert small_field.last_line == 2

    def test_real_vertices_normalized_to_lowest(self, small_field):
        # (h - 10) * 0.5 + 1
        assert small_field.real(0, 0) == Vertex(0.0, 0.0, 1.0)
        assert small_field.real(0, 1) == Vertex(2.0, 0.0, 6.0)
        assert small_field.real(1, 0) == Vertex(0.0, 2.0, 11.0)
        assert small_field.real(1, 1) == Vertex(2.0, 2.0, 16.0)

    def test_center_vertex_is_cell_mean(self, small_field):
        assert small_field.center(0, 0) == Vertex(1.0, 1.0, 8.5)

    def test_lattice_parity(self, small_field):
        assert small_field.at(0, 1) == small_field.real(0, 1)
        assert small_field.at(1, 0) == small_field.center(0, 0)
        assert small_field.at(2, 1) == small_field.real(1, 1)

    def test_lowest_sample_sits_at_base(self):
        grid = np.full((3, 4), 77, dtype=np.uint8)
        field = build_vertex_field(grid, pitch=1.0, z_scale=0.02, base_thickness=1.5)
        assert np.all(field.real_z == 1.5)
        assert np.all(field.center_z == 1.5)

    def test_center_grid_shape(self, random_grid):
        field = build_vertex_field(random_grid, pitch=1.0, z_scale=1.0, base_thickness=0.0)
        assert field.center_z.shape == (4, 6)
        z = field.real_z
        assert field.center(3, 5).z == pytest.approx((z[3, 5] + z[3, 6] + z[4, 5] + z[4, 6]) / 4)


class TestBounds:
    def test_line_past_lattice(self, small_field):
        with pytest.raises(MeshBoundsError):
            small_field.at(3, 0)
        with pytest.raises(MeshBoundsError):
            small_field.at(-1, 0)

    def test_center_row_is_one_shorter(self, small_field):
        with pytest.raises(MeshBoundsError):
            small_field.at(1, 1)

    def test_real_out_of_range(self, small_field):
        with pytest.raises(MeshBoundsError):
            small_field.real(2, 0)
        with pytest.raises(MeshBoundsError):
            small_field.real(0, 2)

    def test_center_out_of_range(self, small_field):
        with pytest.raises(MeshBoundsError):
            small_field.center(1, 0)


class TestBuildErrors:
    def test_single_row(self):
        with pytest.raises(InvalidGrid):
            build_vertex_field([[1, 2, 3]], pitch=1.0, z_scale=1.0, base_thickness=0.0)

    def test_single_column(self):
        with pytest.raises(InvalidGrid):
            build_vertex_field([[1], [2]], pitch=1.0, z_scale=1.0, base_thickness=0.0)

    @pytest.mark.parametrize("pitch", [0.0, -1.0, float("nan")])
    def test_bad_pitch(self, checker_grid, pitch):
        with pytest.raises(InvalidParameter):
            build_vertex_field(checker_grid, pitch=pitch, z_scale=1.0, base_thickness=0.0)
