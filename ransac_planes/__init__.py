"""
RANSAC Planes: multi-plane extraction from 3D point clouds.
"""

from .data_loader import PointCloud, load_point_cloud, save_colored_obj
from .geometry import point_plane_distance, angle_between_normals
from .sampling import reservoir_sample_indices, select_random_points
from .ransac import fit_plane_from_points, ransac_plane, PlaneModel, RansacResult
from .filtering import remove_close_points
from .extraction import extract_planes, ExtractionParams, ExtractionResult, PlaneAssignment, PLANE_COLORS

__version__ = "1.0.0"
