import math

import pytest

from streetfinder.core.errors import ContractViolation
from streetfinder.core.geometry import BoundingBox, ProjectedPoint, build_bounding_box
from streetfinder.streets.aggregate import nearest_point_on_polyline, nearest_point_on_segment


def test_point_distance_and_squared_distance():
    a = ProjectedPoint(0, 0)
    b = ProjectedPoint(3, 4)
    assert a.distance_sq(b) == 25
    assert a.distance(b) == 5


def test_segment_projection_lands_inside_segment():
    nearest = nearest_point_on_segment(ProjectedPoint(0, 0), ProjectedPoint(10, 0), ProjectedPoint(5, 5))
    assert nearest == ProjectedPoint(5, 0)
    assert nearest.distance(ProjectedPoint(5, 5)) == 5


def test_segment_projection_is_clamped_to_endpoints():
    here = ProjectedPoint(15, 5)
    nearest = nearest_point_on_segment(ProjectedPoint(0, 0), ProjectedPoint(10, 0), here)
    assert nearest == ProjectedPoint(10, 0)
    assert nearest.distance(here) == pytest.approx(math.sqrt(50))

    behind = nearest_point_on_segment(ProjectedPoint(0, 0), ProjectedPoint(10, 0), ProjectedPoint(-3, -1))
    assert behind == ProjectedPoint(0, 0)


def test_zero_length_segment_returns_shared_point():
    p = ProjectedPoint(7, 7)
    assert nearest_point_on_segment(p, ProjectedPoint(7, 7), ProjectedPoint(100, -100)) == p


def test_single_vertex_polyline_is_its_own_nearest_point():
    vertex = ProjectedPoint(3, 4)
    for here in (ProjectedPoint(0, 0), ProjectedPoint(-50, 12), ProjectedPoint(3, 4)):
        candidate = nearest_point_on_polyline([vertex], here)
        assert candidate.point == vertex
        assert candidate.distance == vertex.distance(here)


def test_polyline_picks_closest_segment():
    vertices = [ProjectedPoint(0, 0), ProjectedPoint(10, 0), ProjectedPoint(10, 10)]
    candidate = nearest_point_on_polyline(vertices, ProjectedPoint(12, 6))
    assert candidate.point == ProjectedPoint(10, 6)
    assert candidate.distance == pytest.approx(2)


def test_polyline_with_repeated_vertices():
    vertices = [ProjectedPoint(1, 1), ProjectedPoint(1, 1), ProjectedPoint(1, 1)]
    candidate = nearest_point_on_polyline(vertices, ProjectedPoint(4, 5))
    assert candidate.point == ProjectedPoint(1, 1)
    assert candidate.distance == pytest.approx(5)


def test_build_bounding_box_is_square_around_center():
    bbox = build_bounding_box(ProjectedPoint(155000, 463000), 100)
    assert bbox.lower_left == ProjectedPoint(154900, 462900)
    assert bbox.upper_right == ProjectedPoint(155100, 463100)
    assert bbox.as_bbox_param() == "154900.0,462900.0,155100.0,463100.0"


def test_bounding_box_rejects_non_positive_radius_and_inverted_corners():
    with pytest.raises(ContractViolation):
        build_bounding_box(ProjectedPoint(0, 0), 0)
    with pytest.raises(ContractViolation):
        build_bounding_box(ProjectedPoint(0, 0), -5)
    with pytest.raises(ContractViolation):
        BoundingBox(lower_left=ProjectedPoint(1, 0), upper_right=ProjectedPoint(0, 1))
