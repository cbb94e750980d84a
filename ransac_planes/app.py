"""Streamlit UI for multi-plane extraction. Run with: streamlit run ransac_planes/app.py"""

from pathlib import Path

import numpy as np
import streamlit as st

from ransac_planes.data_loader import load_point_cloud
from ransac_planes.extraction import ExtractionParams, ExtractionResult, extract_planes
from ransac_planes.visualizations import (
    inlier_bar_chart,
    labels_summary,
    plane_table,
    scatter_3d_planes,
)


def get_params_from_sidebar(has_normals: bool) -> ExtractionParams:
    """Render parameter controls in sidebar and return ExtractionParams."""
    plane_count = st.number_input("Planes to extract", 1, 50, 4)

    with st.popover("RANSAC", use_container_width=True):
        iterations = st.slider(
            "Iterations (more = better fit, slower)",
            10, 1000, 100, 10,
        )
        distance_threshold = st.slider(
            "Distance threshold (larger = thicker planes)",
            0.001, 1.0, 0.1, 0.001,
        )

    with st.popover("Normals", use_container_width=True):
        use_normals = st.checkbox(
            "Require normals to agree with the plane",
            value=False,
            disabled=not has_normals,
        )
        angle_threshold = st.slider(
            "Angle threshold (radians)",
            0.01, 10.0, 10.0, 0.01,
        )

    return ExtractionParams(
        plane_count=int(plane_count),
        iterations=iterations,
        distance_threshold=distance_threshold,
        angle_threshold=angle_threshold,
        use_normals=use_normals,
    )


def render_result(r: ExtractionResult):
    summary = labels_summary(r)

    col1, col2, col3 = st.columns(3)
    col1.metric("Planes", r.num_planes)
    col2.metric("Unassigned points", f"{summary['unassigned']:,} / {summary['total']:,}")
    col3.metric("Points on several planes", f"{summary['multiple']:,}")

    tab_3d, tab_planes = st.tabs(["3D View", "Planes"])

    with tab_3d:
        show_unassigned = st.checkbox("Show unassigned points", value=True)
        st.plotly_chart(scatter_3d_planes(r, show_unassigned), use_container_width=True)

    with tab_planes:
        st.dataframe(plane_table(r), use_container_width=True, hide_index=True)
        st.plotly_chart(inlier_bar_chart(r), use_container_width=True)


def main():
    st.set_page_config(page_title="RANSAC Planes", layout="wide")
    st.title("RANSAC Plane Extraction")

    with st.sidebar:
        st.header("Input")
        input_file = st.text_input("Point cloud path", value="data/scene.obj")
        seed = st.number_input("Random seed, -1 = random", -1, 2**31 - 1, -1)

        path = Path(input_file)
        cloud = None
        if path.exists():
            try:
                cloud = load_point_cloud(path)
            except (OSError, ValueError) as e:
                st.error(str(e))

        st.header("Parameters")
        params = get_params_from_sidebar(cloud is not None and cloud.has_matching_normals)

        run_button = st.button("Extract Planes", type="primary", use_container_width=True)

    if run_button:
        if cloud is None:
            st.error(f"Could not load: {path}")
            return

        with st.spinner("Extracting planes..."):
            rng = np.random.default_rng(None if seed < 0 else int(seed))
            st.session_state["extraction_result"] = extract_planes(cloud, params, rng=rng)

    if "extraction_result" not in st.session_state:
        st.info("Choose a point cloud in the sidebar and click **Extract Planes** to begin.")
        return

    render_result(st.session_state["extraction_result"])


if __name__ == "__main__":
    main()
