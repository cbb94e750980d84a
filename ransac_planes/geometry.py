import numpy as np


def unit_vector(v: np.ndarray) -> np.ndarray:
    """
    Normalize along the last axis. Zero-length rows become NaN.
    """
    v = np.asarray(v, dtype=np.float64)
    norm = np.linalg.norm(v, axis=-1, keepdims=True)
    with np.errstate(invalid="ignore", divide="ignore"):
        return v / norm


def point_plane_distance(points: np.ndarray, anchor: np.ndarray, normal: np.ndarray) -> np.ndarray:
    """
    Absolute perpendicular distance from points (N x 3, or a single point) to the plane
    through anchor with the given normal. A zero normal gives NaN for every point.
    """
    points = np.asarray(points, dtype=np.float64)
    n = unit_vector(normal)
    return np.abs((points - np.asarray(anchor, dtype=np.float64)) @ n)


def angle_between_normals(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """
    Angle in radians, in [0, pi], between normals. Broadcasts over leading axes.
    """
    dot = np.sum(unit_vector(a) * unit_vector(b), axis=-1)
    # clip keeps arccos in its domain when the dot product overshoots 1
    return np.arccos(np.clip(dot, -1.0, 1.0))
