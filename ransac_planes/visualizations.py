"""Plotly figures for extracted planes"""

import numpy as np
import plotly.graph_objects as go

from ransac_planes.extraction import ExtractionResult


def rgb_string(color) -> str:
    r, g, b = (int(round(255 * c)) for c in color)
    return f"rgb({r},{g},{b})"


def scatter_3d_planes(result: ExtractionResult, show_unassigned: bool = True):
    """Create a 3D scatter plot with one trace per plane."""
    fig = go.Figure()
    points = result.cloud.points

    if show_unassigned:
        rest = points[result.unassigned_mask()]
        if len(rest) > 0:
            fig.add_trace(go.Scatter3d(
                x=rest[:, 0], y=rest[:, 1], z=rest[:, 2],
                mode="markers",
                marker=dict(size=1, color="lightgray", opacity=0.3),
                name=f"Unassigned ({len(rest):,})",
            ))

    for a in result.assignments:
        pts = points[a.point_indices]
        fig.add_trace(go.Scatter3d(
            x=pts[:, 0], y=pts[:, 1], z=pts[:, 2],
            mode="markers",
            marker=dict(size=2, color=rgb_string(a.color), opacity=0.7),
            name=f"Plane {a.plane_index + 1} ({len(pts):,})",
        ))

    fig.update_layout(
        scene=dict(aspectmode="data"),
        height=600,
        margin=dict(l=0, r=0, t=30, b=0),
    )
    return fig


def inlier_bar_chart(result: ExtractionResult):
    """Bar chart of RANSAC inliers and labeled points per plane."""
    names = [f"Plane {a.plane_index + 1}" for a in result.assignments]
    colors = [rgb_string(a.color) for a in result.assignments]

    fig = go.Figure()
    fig.add_trace(go.Bar(
        x=names,
        y=[a.inlier_count for a in result.assignments],
        marker_color=colors,
        name="RANSAC inliers",
    ))
    fig.add_trace(go.Bar(
        x=names,
        y=[len(a.point_indices) for a in result.assignments],
        marker_color=colors,
        marker_pattern_shape="/",
        name="Labeled points",
    ))
    fig.update_layout(
        barmode="group",
        yaxis=dict(title="Points"),
        height=350,
        margin=dict(l=40, r=20, t=30, b=40),
    )
    return fig


def plane_table(result: ExtractionResult) -> list[dict]:
    rows = []
    for a in result.assignments:
        normal = a.plane.normal
        rows.append({
            "Plane": a.plane_index + 1,
            "Equation": a.plane.equation_string,
            "Normal": f"({normal[0]:.3f}, {normal[1]:.3f}, {normal[2]:.3f})",
            "Inliers": a.inlier_count,
            "Labeled": len(a.point_indices),
            "Color": rgb_string(a.color),
        })
    return rows


def labels_summary(result: ExtractionResult) -> dict:
    counts = result.label_counts()
    return {
        "total": len(counts),
        "unassigned": int(np.sum(counts == 0)),
        "single": int(np.sum(counts == 1)),
        "multiple": int(np.sum(counts > 1)),
    }
