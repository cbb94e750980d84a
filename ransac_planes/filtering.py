import numpy as np
from typing import Optional, Tuple

from ransac_planes.ransac import PlaneModel


def close_point_mask(points: np.ndarray, plane: PlaneModel, threshold: float) -> np.ndarray:
    """
    True for points closer than threshold to the plane. NaN distances are never close.
    """
    if len(points) == 0:
        return np.zeros(0, dtype=bool)
    return plane.distance_to_points(points) < threshold


def remove_close_points(
    points: np.ndarray,
    normals: Optional[np.ndarray],
    plane: PlaneModel,
    threshold: float,
) -> Tuple[np.ndarray, Optional[np.ndarray]]:
    """
    Drop points within threshold of the plane, together with their normals.
    Only distance is tested, never the normal angle. Order is preserved and new arrays are returned.
    """
    points = np.asarray(points, dtype=np.float64)

    if normals is not None and len(normals) != len(points):
        raise ValueError(f"Got {len(points)} points but {len(normals)} normals")

    keep_mask = ~close_point_mask(points, plane, threshold)

    if normals is None:
        return points[keep_mask], None
    return points[keep_mask], np.asarray(normals)[keep_mask]
