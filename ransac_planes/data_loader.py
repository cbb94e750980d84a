import logging
import numpy as np
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger(__name__)

TEXT_SUFFIXES = {".txt", ".xyz", ".pts"}


@dataclass
class PointCloud:
    """Points (N x 3) with optional normals (M x 3). M may differ from N if the file is inconsistent."""
    points: np.ndarray
    normals: Optional[np.ndarray] = None

    def __len__(self) -> int:
        return len(self.points)

    @property
    def has_normals(self) -> bool:
        return self.normals is not None and len(self.normals) > 0

    @property
    def has_matching_normals(self) -> bool:
        return self.has_normals and len(self.normals) == len(self.points)


def load_point_cloud(file_path: Union[str, Path]) -> PointCloud:
    """
    Load a point cloud from a .obj file or a whitespace separated text file
    """
    file_path = Path(file_path)

    if not file_path.exists():
        raise FileNotFoundError(f"Point cloud file not found: {file_path}")

    if file_path.suffix.lower() == ".obj":
        cloud = load_obj(file_path)
    elif file_path.suffix.lower() in TEXT_SUFFIXES:
        cloud = load_xyz(file_path)
    else:
        raise ValueError(f"Unsupported point cloud format: {file_path.suffix}")

    logger.info(
        "Loaded %d points and %d normals from %s",
        len(cloud.points), 0 if cloud.normals is None else len(cloud.normals), file_path,
    )
    return cloud


def load_obj(file_path: Union[str, Path]) -> PointCloud:
    """
    Read 'v' and 'vn' records of a Wavefront OBJ file. Everything else is ignored.
    """
    vertices = []
    normals = []

    with open(file_path, "r") as f:
        for line_no, line in enumerate(f, start=1):
            fields = line.split()
            if not fields or fields[0] not in ("v", "vn"):
                continue
            try:
                xyz = [float(value) for value in fields[1:4]]
            except ValueError:
                raise ValueError(f"{file_path}:{line_no}: could not parse '{line.strip()}'") from None
            if len(xyz) != 3:
                raise ValueError(f"{file_path}:{line_no}: expected 3 coordinates in '{line.strip()}'")
            if fields[0] == "v":
                vertices.append(xyz)
            else:
                normals.append(xyz)

    if not vertices:
        raise ValueError(f"No vertices found in {file_path}")

    return PointCloud(
        points=np.array(vertices, dtype=np.float64),
        normals=np.array(normals, dtype=np.float64) if normals else None,
    )


def load_xyz(file_path: Union[str, Path]) -> PointCloud:
    """
    Load rows of 'x y z' or 'x y z nx ny nz' from a text file
    """
    try:
        data = np.loadtxt(file_path, dtype=np.float64, ndmin=2)
    except ValueError as e:
        raise ValueError(f"Could not parse {file_path}: {e}") from e

    if data.shape[0] == 0:
        raise ValueError(f"No points found in {file_path}")
    if data.shape[1] < 3:
        raise ValueError(f"Expected at least 3 columns in {file_path}, got {data.shape[1]}")

    normals = data[:, 3:6] if data.shape[1] >= 6 else None
    return PointCloud(points=data[:, :3], normals=normals)


def save_colored_obj(
    file_path: Union[str, Path],
    points: np.ndarray,
    colors: np.ndarray,
    normals: Optional[np.ndarray] = None,
) -> Path:
    """
    Write points as 'v x y z r g b' lines, followed by 'vn' lines when normals are given.
    """
    file_path = Path(file_path)
    points = np.asarray(points, dtype=np.float64).reshape(-1, 3)
    colors = np.asarray(colors, dtype=np.float64).reshape(-1, 3)

    if len(colors) != len(points):
        raise ValueError(f"Got {len(points)} points but {len(colors)} colors")
    if normals is not None and len(normals) != len(points):
        raise ValueError(f"Got {len(points)} points but {len(normals)} normals")

    file_path.parent.mkdir(parents=True, exist_ok=True)

    with open(file_path, "w") as f:
        for p, c in zip(points, colors):
            f.write(f"v {p[0]:.6f} {p[1]:.6f} {p[2]:.6f} {c[0]:.6f} {c[1]:.6f} {c[2]:.6f}\n")
        if normals is not None:
            for n in np.asarray(normals, dtype=np.float64):
                f.write(f"vn {n[0]:.6f} {n[1]:.6f} {n[2]:.6f}\n")

    logger.info("Wrote %d colored points to %s", len(points), file_path)
    return file_path
