import logging
import numpy as np
from dataclasses import dataclass
from typing import Optional

from ransac_planes.geometry import angle_between_normals, point_plane_distance, unit_vector
from ransac_planes.sampling import SAMPLE_SIZE, select_random_points

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlaneModel:
    """
    Represents a 3D plane through anchor with the given normal.
    """
    anchor: np.ndarray
    # Not guaranteed to be unit length, see normalized()
    normal: np.ndarray

    def normalized(self) -> "PlaneModel":
        return PlaneModel(anchor=self.anchor, normal=unit_vector(self.normal))

    def distance_to_points(self, points: np.ndarray) -> np.ndarray:
        return point_plane_distance(np.atleast_2d(points)[:, :3], self.anchor, self.normal)

    @property
    def offset(self) -> float:
        """d in normal * point + d = 0, using the unit normal."""
        return float(-np.dot(unit_vector(self.normal), self.anchor))

    @property
    def equation_string(self) -> str:
        n = unit_vector(self.normal)
        return f"{n[0]:.4f}x + {n[1]:.4f}y + {n[2]:.4f}z + {self.offset:.4f} = 0"


@dataclass(frozen=True)
class RansacResult:
    plane: Optional[PlaneModel]
    inlier_count: int

    @property
    def found(self) -> bool:
        return self.plane is not None


def fit_plane_from_points(p0: np.ndarray, p1: np.ndarray, p2: np.ndarray) -> PlaneModel:
    """
    Fit a plane through three 3D points.
    The normal is left unnormalized; its length is twice the triangle area and it is zero
    for collinear points.
    """
    p0 = np.asarray(p0, dtype=np.float64)
    v1 = np.asarray(p1, dtype=np.float64) - p0
    v2 = np.asarray(p2, dtype=np.float64) - p0

    normal = np.cross(v1, v2)

    return PlaneModel(anchor=p0.copy(), normal=normal)


def count_inliers(
    points: np.ndarray,
    normals: Optional[np.ndarray],
    plane: PlaneModel,
    distance_threshold: float,
    angle_threshold: float,
    use_normals: bool,
) -> int:
    """
    Points closer than distance_threshold, and with use_normals also a normal within
    angle_threshold radians of the plane normal. NaN distances never count.
    """
    inlier_mask = plane.distance_to_points(points) < distance_threshold
    if use_normals:
        inlier_mask &= angle_between_normals(normals, plane.normal) < angle_threshold
    return int(np.sum(inlier_mask))


def ransac_plane(
    points: np.ndarray,
    normals: Optional[np.ndarray] = None,
    num_iterations: int = 100,
    distance_threshold: float = 0.1,
    angle_threshold: float = 10.0,
    use_normals: bool = False,
    rng: Optional[np.random.Generator] = None,
) -> RansacResult:
    """
    Detect the plane with the most inliers using RANSAC.
    Ties keep the plane found first. When no candidate has any inlier the result has
    plane=None.
    """
    points = np.asarray(points, dtype=np.float64)
    if use_normals:
        if normals is None or len(normals) != len(points):
            raise ValueError(
                f"Normal gating needs one normal per point, got {len(points)} points and "
                f"{0 if normals is None else len(normals)} normals"
            )
        normals = np.asarray(normals, dtype=np.float64)

    rng = rng if rng is not None else np.random.default_rng()

    if len(points) < SAMPLE_SIZE:
        logger.debug("Only %d points, no plane can be fitted", len(points))
        return RansacResult(plane=None, inlier_count=0)

    best_plane = None
    best_inlier_count = 0

    for i in range(num_iterations):
        p0, p1, p2 = select_random_points(points, rng)

        # Candidates and the returned best plane carry a unit normal
        plane = fit_plane_from_points(p0, p1, p2).normalized()

        inlier_count = count_inliers(points, normals, plane, distance_threshold, angle_threshold, use_normals)

        if inlier_count > best_inlier_count:
            logger.debug("Iteration %d: new best plane with %d inliers", i, inlier_count)
            best_inlier_count = inlier_count
            best_plane = plane

    return RansacResult(plane=best_plane, inlier_count=best_inlier_count)
