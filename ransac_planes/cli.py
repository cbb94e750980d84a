"""Command line entry point: ransac-planes <input-file> <plane-count> [normals]"""

import argparse
import logging
import sys
from typing import List, Optional

import numpy as np

from ransac_planes.data_loader import load_point_cloud, save_colored_obj
from ransac_planes.extraction import ExtractionParams, extract_planes

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT = "colored_planes.obj"


def build_parser() -> argparse.ArgumentParser:
    defaults = ExtractionParams()
    parser = argparse.ArgumentParser(
        prog="ransac-planes",
        description="Extract dominant planes from a point cloud with RANSAC and write them as a colored OBJ.",
    )
    parser.add_argument("input", nargs="?", help="Input point cloud (.obj, .xyz, .txt, .pts)")
    parser.add_argument("plane_count", nargs="?", type=int, help="Number of planes to extract")
    parser.add_argument("mode", nargs="?",
                        help="'normals' also requires point normals to agree with the plane normal")
    parser.add_argument("-o", "--output", default=DEFAULT_OUTPUT,
                        help=f"Output OBJ file (default: {DEFAULT_OUTPUT})")
    parser.add_argument("--iterations", type=int, default=defaults.iterations,
                        help=f"RANSAC iterations per plane (default: {defaults.iterations})")
    parser.add_argument("--distance-threshold", type=float, default=defaults.distance_threshold,
                        help=f"Inlier distance (default: {defaults.distance_threshold})")
    parser.add_argument("--angle-threshold", type=float, default=defaults.angle_threshold,
                        help=f"Inlier normal angle in radians (default: {defaults.angle_threshold})")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducible runs")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every new best RANSAC candidate")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.input is None or args.plane_count is None:
        print("Error: missing argument for number of planes")
        parser.print_usage()
        return 0

    use_normals = args.mode == "normals"

    try:
        cloud = load_point_cloud(args.input)
    except (OSError, ValueError) as e:
        print(f"Failed to open input file '{args.input}': {e}")
        return 1

    if use_normals and not cloud.has_matching_normals:
        print(
            f"Points and normals are not the same size "
            f"({len(cloud.points)} points, {0 if cloud.normals is None else len(cloud.normals)} normals)"
        )
        return 1

    params = ExtractionParams(
        plane_count=args.plane_count,
        iterations=args.iterations,
        distance_threshold=args.distance_threshold,
        angle_threshold=args.angle_threshold,
        use_normals=use_normals,
    )

    try:
        result = extract_planes(cloud, params, rng=np.random.default_rng(args.seed))
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    points, colors = result.colored_points()
    try:
        save_colored_obj(args.output, points, colors)
    except OSError as e:
        print(f"Failed to write output file '{args.output}': {e}")
        return 1

    for a in result.assignments:
        logger.info("Plane %d: %s (%d points)", a.plane_index + 1, a.plane.equation_string, len(a.point_indices))
    logger.info("%d of %d points unassigned", int(result.unassigned_mask().sum()), len(cloud))

    return 0


if __name__ == "__main__":
    sys.exit(main())
