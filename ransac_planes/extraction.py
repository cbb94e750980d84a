import logging
from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np

from ransac_planes.data_loader import PointCloud
from ransac_planes.filtering import close_point_mask, remove_close_points
from ransac_planes.ransac import PlaneModel, ransac_plane

logger = logging.getLogger(__name__)

PLANE_COLORS = np.array([
    [1.0, 0.0, 0.0],  # Red
    [0.0, 1.0, 0.0],  # Green
    [0.0, 0.0, 1.0],  # Blue
    [1.0, 1.0, 0.0],  # Yellow
    [1.0, 0.0, 1.0],  # Magenta
    [0.0, 1.0, 1.0],  # Cyan
    [0.5, 0.0, 0.0],  # Dark red
    [0.5, 0.5, 0.5],  # Gray
    [1.0, 0.5, 0.0],  # Orange
    [0.0, 0.5, 0.5],  # Dark cyan
])


def plane_color(plane_index: int) -> np.ndarray:
    return PLANE_COLORS[plane_index % len(PLANE_COLORS)]


@dataclass
class ExtractionParams:
    """Parameters for multi-plane extraction."""
    plane_count: int = 1
    # RANSAC
    iterations: int = 100
    distance_threshold: float = 0.1
    # Radians, only used with use_normals
    angle_threshold: float = 10.0
    use_normals: bool = False


@dataclass
class PlaneAssignment:
    """Points of the original cloud labeled by one extraction round."""
    plane_index: int
    plane: PlaneModel
    # Inliers counted by RANSAC on the working set of this round
    inlier_count: int
    # Indices into the original cloud
    point_indices: np.ndarray
    color: np.ndarray


@dataclass
class ExtractionResult:
    cloud: PointCloud
    params: ExtractionParams
    assignments: List[PlaneAssignment] = field(default_factory=list)

    @property
    def num_planes(self) -> int:
        return len(self.assignments)

    def colored_points(self):
        """
        Labeled points and their colors, round after round. A point labeled in several
        rounds appears once per round.
        """
        if not self.assignments:
            return np.zeros((0, 3)), np.zeros((0, 3))
        points = np.concatenate([self.cloud.points[a.point_indices] for a in self.assignments])
        colors = np.concatenate([np.tile(a.color, (len(a.point_indices), 1)) for a in self.assignments])
        return points, colors

    def label_counts(self) -> np.ndarray:
        """Number of rounds that labeled each original point."""
        counts = np.zeros(len(self.cloud.points), dtype=int)
        for a in self.assignments:
            counts[a.point_indices] += 1
        return counts

    def unassigned_mask(self) -> np.ndarray:
        return self.label_counts() == 0


def validate_params(cloud: PointCloud, params: ExtractionParams) -> None:
    if params.plane_count <= 0:
        raise ValueError(f"plane_count must be positive, got {params.plane_count}")
    if params.iterations < 0:
        raise ValueError(f"iterations must not be negative, got {params.iterations}")
    if params.distance_threshold <= 0:
        raise ValueError(f"distance_threshold must be positive, got {params.distance_threshold}")
    if params.use_normals and not cloud.has_matching_normals:
        raise ValueError(
            f"Normal gating needs one normal per point, got {len(cloud.points)} points and "
            f"{0 if cloud.normals is None else len(cloud.normals)} normals"
        )


def extract_planes(
    cloud: PointCloud,
    params: ExtractionParams,
    rng: Optional[np.random.Generator] = None,
) -> ExtractionResult:
    """
    Extract up to params.plane_count planes.

    Each round fits a plane to the remaining points, labels every point of the original
    cloud within distance_threshold of it, then removes the matching points from the
    remaining set. Labels are never deduplicated: a point near two planes gets two.
    Stops early if a round finds no plane.
    """
    validate_params(cloud, params)
    rng = rng if rng is not None else np.random.default_rng()

    points = np.asarray(cloud.points, dtype=np.float64)
    remaining_points = points.copy()
    remaining_normals = np.array(cloud.normals, dtype=np.float64) if params.use_normals else None

    result = ExtractionResult(cloud=cloud, params=params)

    for plane_index in range(params.plane_count):
        logger.info("Currently on plane %d of %d (%d points left)",
                    plane_index + 1, params.plane_count, len(remaining_points))

        ransac_result = ransac_plane(
            remaining_points,
            remaining_normals,
            num_iterations=params.iterations,
            distance_threshold=params.distance_threshold,
            angle_threshold=params.angle_threshold,
            use_normals=params.use_normals,
            rng=rng,
        )

        if not ransac_result.found:
            logger.warning("No plane found in round %d, stopping after %d planes",
                           plane_index + 1, result.num_planes)
            break

        plane = ransac_result.plane
        # Label against the full input cloud, distance only
        point_indices = np.flatnonzero(close_point_mask(points, plane, params.distance_threshold))

        result.assignments.append(PlaneAssignment(
            plane_index=plane_index,
            plane=plane,
            inlier_count=ransac_result.inlier_count,
            point_indices=point_indices,
            color=plane_color(plane_index),
        ))
        logger.info("Plane %d: %s, %d inliers, %d points labeled",
                    plane_index + 1, plane.equation_string, ransac_result.inlier_count, len(point_indices))

        if plane_index + 1 >= params.plane_count:
            break

        remaining_points, remaining_normals = remove_close_points(
            remaining_points, remaining_normals, plane, params.distance_threshold,
        )

    return result
