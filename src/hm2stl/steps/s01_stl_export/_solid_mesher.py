"""Solid mesher: stream the facets of a closed solid over a VertexField.

Three sweeps run in order, rows front-to-back and columns left-to-right:

1. floor:   flat base at z = 0 built from floor projections only
2. walls:   vertical quads joining the surface boundary to the floor
3. surface: four triangles per grid cell fanned around its center vertex

Facets wind counter-clockwise seen from outside the solid. Vertex order
inside a facet is part of the output format and must not be changed.
"""

from __future__ import annotations

from itertools import chain
from typing import Iterator, NamedTuple

from ._vertex_field import Vertex, VertexField

# Normals are not computed; STL readers recompute them from the winding.
FACET_NORMAL = (0.0, 0.0, 0.0)


class Facet(NamedTuple):
    a: Vertex
    b: Vertex
    c: Vertex


def floor_facets(field: VertexField) -> Iterator[Facet]:
    """Triangulate the rectangular base.

    The front row fans towards the second row's right corner, the back row
    fans towards the second-to-last row's left corner, and every interior
    row contributes two triangles spanning the full width.
    """
    last = field.last_line
    right = field.cols - 1
    for line in range(0, field.lines, 2):
        if line == 0:
            apex = field.at(line + 2, right).on_floor()
            for col in range(right):
                yield Facet(
                    field.at(line, col).on_floor(),
                    apex,
                    field.at(line, col + 1).on_floor(),
                )
        elif line == last:
            apex = field.at(line - 2, 0).on_floor()
            for col in range(right):
                yield Facet(
                    field.at(line, col).on_floor(),
                    field.at(line, col + 1).on_floor(),
                    apex,
                )
        else:
            left = field.at(line, 0).on_floor()
            far_right = field.at(line, right).on_floor()
            yield Facet(left, far_right, field.at(line - 2, 0).on_floor())
            yield Facet(left, field.at(line + 2, right).on_floor(), far_right)


def wall_facets(field: VertexField) -> Iterator[Facet]:
    """Close the four sides between the surface boundary and the floor."""
    last = field.last_line
    right = field.cols - 1
    for line in range(0, field.lines, 2):
        if line == 0:
            for col in range(right):
                near, far = field.at(line, col), field.at(line, col + 1)
                yield Facet(far, near.on_floor(), far.on_floor())
                yield Facet(far, near, near.on_floor())
        elif line == last:
            for col in range(right):
                near, far = field.at(line, col), field.at(line, col + 1)
                yield Facet(far, far.on_floor(), near.on_floor())
                yield Facet(far, near.on_floor(), near)

        if line != last:
            lower, upper = field.at(line, 0), field.at(line + 2, 0)
            yield Facet(upper, upper.on_floor(), lower.on_floor())
            yield Facet(upper, lower.on_floor(), lower)

            lower, upper = field.at(line, right), field.at(line + 2, right)
            yield Facet(upper, lower.on_floor(), upper.on_floor())
            yield Facet(upper, lower, lower.on_floor())


def surface_facets(field: VertexField) -> Iterator[Facet]:
    """West, north, east and south triangles of every cell, around its center."""
    for line in range(0, field.last_line, 2):
        for col in range(field.cols - 1):
            sw = field.at(line, col)
            nw = field.at(line + 2, col)
            ne = field.at(line + 2, col + 1)
            se = field.at(line, col + 1)
            center = field.at(line + 1, col)

            yield Facet(sw, center, nw)
            yield Facet(nw, center, ne)
            yield Facet(ne, center, se)
            yield Facet(se, center, sw)


def iter_facets(field: VertexField) -> Iterator[Facet]:
    """All facets of the solid in emission order: floor, walls, surface."""
    return chain(floor_facets(field), wall_facets(field), surface_facets(field))
