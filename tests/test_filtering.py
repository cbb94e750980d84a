import numpy as np
import pytest
from numpy.testing import assert_array_equal

from ransac_planes.filtering import close_point_mask, remove_close_points
from ransac_planes.ransac import PlaneModel

Z_PLANE = PlaneModel(anchor=np.zeros(3), normal=np.array([0.0, 0.0, 2.0]))


@pytest.fixture
def mixed_points():
    # Every third point lies on z = 0, the rest are at least 0.5 away
    gen = np.random.default_rng(11)
    points = gen.uniform(-1, 1, size=(30, 3))
    points[:, 2] = np.where(np.arange(30) % 3 == 0, 0.0, 0.5 + np.arange(30) / 10)
    return points


class TestRemoveClosePoints:
    def test_removes_exactly_close_points_in_order(self, mixed_points):
        remaining, normals = remove_close_points(mixed_points, None, Z_PLANE, 0.1)

        assert normals is None
        assert len(remaining) == 20
        assert not np.any(close_point_mask(remaining, Z_PLANE, 0.1))
        assert_array_equal(remaining, mixed_points[np.arange(30) % 3 != 0])

    def test_normals_follow_points(self, mixed_points):
        # Encode the original index in the normal so pairing can be checked
        normals = np.column_stack([np.arange(30), np.zeros(30), np.ones(30)]).astype(float)

        remaining, remaining_normals = remove_close_points(mixed_points, normals, Z_PLANE, 0.1)

        assert len(remaining_normals) == len(remaining)
        kept = remaining_normals[:, 0].astype(int)
        assert_array_equal(mixed_points[kept], remaining)

    def test_ignores_normal_direction(self, mixed_points):
        normals = np.tile([1.0, 0.0, 0.0], (30, 1))
        remaining, _ = remove_close_points(mixed_points, normals, Z_PLANE, 0.1)
        assert len(remaining) == 20

    def test_returns_new_arrays(self, mixed_points):
        before = mixed_points.copy()
        remaining, _ = remove_close_points(mixed_points, None, Z_PLANE, 1000.0)
        assert len(remaining) == 0
        assert_array_equal(mixed_points, before)

    def test_degenerate_plane_removes_nothing(self, mixed_points):
        flat = PlaneModel(anchor=np.zeros(3), normal=np.zeros(3))
        remaining, _ = remove_close_points(mixed_points, None, flat, 0.1)
        assert_array_equal(remaining, mixed_points)

    def test_empty_input(self):
        remaining, normals = remove_close_points(np.zeros((0, 3)), np.zeros((0, 3)), Z_PLANE, 0.1)
        assert remaining.shape == (0, 3)
        assert normals.shape == (0, 3)

    def test_mismatched_normals(self, mixed_points):
        with pytest.raises(ValueError):
            remove_close_points(mixed_points, np.zeros((3, 3)), Z_PLANE, 0.1)
