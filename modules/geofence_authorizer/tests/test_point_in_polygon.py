"""Unit tests for the ray-casting point-in-polygon primitive and coordinate coercion."""

import math

import pytest

from modules.geofence_authorizer.exceptions import GeometryError
from modules.geofence_authorizer.geometry import (
    boundary_ring,
    candidate_vertices,
    is_point_in_polygon,
    to_position,
    to_ring,
)

SQUARE = [[0, 0], [0, 10], [10, 10], [10, 0], [0, 0]]


class TestIsPointInPolygon:
    """Test the even-odd containment rule."""

    def test_point_inside_square(self):
        assert is_point_in_polygon([5, 5], SQUARE) is True

    def test_point_outside_square(self):
        assert is_point_in_polygon([15, 15], SQUARE) is False

    def test_point_left_of_square_at_same_latitude(self):
        assert is_point_in_polygon([-1, 5], SQUARE) is False

    def test_open_ring_is_closed_implicitly(self):
        """Test that the last-to-first edge is part of the ring."""
        open_square = SQUARE[:-1]

        assert is_point_in_polygon([5, 5], open_square) is True
        assert is_point_in_polygon([11, 5], open_square) is False

    def test_concave_polygon(self):
        """Test a U-shaped ring where the notch is outside."""
        u_shape = [[0, 0], [9, 0], [9, 9], [6, 9], [6, 3], [3, 3], [3, 9], [0, 9]]

        assert is_point_in_polygon([1, 5], u_shape) is True
        assert is_point_in_polygon([4.5, 5], u_shape) is False
        assert is_point_in_polygon([4.5, 1], u_shape) is True

    def test_self_intersecting_ring(self):
        """Test a bow-tie ring: a lobe is inside, the gap between lobes is outside."""
        bow_tie = [[0, 0], [10, 10], [10, 0], [0, 10]]

        assert is_point_in_polygon([8, 5], bow_tie) is True
        assert is_point_in_polygon([5, 8], bow_tie) is False

    def test_point_on_vertex_is_consistent_and_does_not_raise(self):
        first = is_point_in_polygon([0, 0], SQUARE)

        assert isinstance(first, bool)
        assert all(is_point_in_polygon([0, 0], SQUARE) is first for _ in range(5))

    def test_tuple_inputs(self):
        assert is_point_in_polygon((5, 5), tuple(tuple(v) for v in SQUARE)) is True

    def test_positions_with_altitude(self):
        ring = [[0, 0, 12.5], [0, 10, 12.5], [10, 10, 13.0], [10, 0, 11.0]]

        assert is_point_in_polygon([5, 5, 100.0], ring) is True

    def test_real_world_coordinates(self):
        """Test a small municipal block in lon/lat degrees."""
        block = [[77.5900, 12.9700], [77.6000, 12.9700], [77.6000, 12.9800], [77.5900, 12.9800]]

        assert is_point_in_polygon([77.5946, 12.9716], block) is True
        assert is_point_in_polygon([77.6100, 12.9716], block) is False

    def test_ring_with_two_points_returns_false(self):
        assert is_point_in_polygon([0.5, 0.5], [[0, 0], [1, 1]]) is False

    def test_empty_ring_returns_false(self):
        assert is_point_in_polygon([0, 0], []) is False

    def test_inputs_are_not_mutated(self):
        ring = [list(v) for v in SQUARE]
        point = [5, 5]

        is_point_in_polygon(point, ring)

        assert ring == SQUARE
        assert point == [5, 5]

    @pytest.mark.parametrize("point", [[1], [1, 2, 3, 4], "5,5", None, [1, "2"], [True, 1], [math.nan, 1]])
    def test_malformed_point_raises_geometry_error(self, point):
        with pytest.raises(GeometryError):
            is_point_in_polygon(point, SQUARE)

    def test_malformed_ring_raises_geometry_error(self):
        with pytest.raises(GeometryError):
            is_point_in_polygon([5, 5], [[0, 0], [0, 10], [10]])

        with pytest.raises(GeometryError):
            is_point_in_polygon([5, 5], None)


class TestCoordinateCoercion:
    """Test position, ring and vertex extraction helpers."""

    def test_to_position_returns_floats(self):
        assert to_position([1, 2]) == (1.0, 2.0)
        assert to_position([1.5, -2.5, 30]) == (1.5, -2.5)

    def test_to_position_rejects_infinity(self):
        with pytest.raises(GeometryError, match="finite"):
            to_position([math.inf, 0])

    def test_to_ring(self):
        assert to_ring([[0, 0], [1, 0], [1, 1]]) == [(0.0, 0.0), (1.0, 0.0), (1.0, 1.0)]
        assert to_ring([]) == []

    def test_boundary_ring_uses_outer_ring_only(self):
        outer = [[0, 0], [0, 10], [10, 10], [10, 0]]
        hole = [[4, 4], [4, 6], [6, 6], [6, 4]]

        assert boundary_ring([outer, hole]) == to_ring(outer)

    @pytest.mark.parametrize("coordinates", [[], None, "ring", 5])
    def test_boundary_ring_requires_a_ring(self, coordinates):
        with pytest.raises(GeometryError):
            boundary_ring(coordinates)

    def test_candidate_vertices_point(self):
        assert candidate_vertices("Point", [5, 5]) == [(5.0, 5.0)]

    def test_candidate_vertices_line_string(self):
        assert candidate_vertices("LineString", [[5, 5], [20, 20]]) == [(5.0, 5.0), (20.0, 20.0)]

    def test_candidate_vertices_polygon_outer_ring(self):
        rings = [[[1, 1], [1, 2], [2, 2], [1, 1]], [[9, 9], [9, 8], [8, 8]]]

        assert candidate_vertices("Polygon", rings) == [(1.0, 1.0), (1.0, 2.0), (2.0, 2.0), (1.0, 1.0)]

    @pytest.mark.parametrize("geometry_type,coordinates", [
        ("Point", None),
        ("Point", []),
        ("LineString", []),
        ("Polygon", [[]]),
        ("Polygon", []),
        ("MultiPoint", [[1, 1]]),
    ])
    def test_candidate_vertices_malformed(self, geometry_type, coordinates):
        with pytest.raises(GeometryError):
            candidate_vertices(geometry_type, coordinates)
