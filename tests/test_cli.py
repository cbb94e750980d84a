import numpy as np
import pytest

from ransac_planes.cli import main
from ransac_planes.data_loader import load_point_cloud, save_colored_obj


@pytest.fixture
def cube_obj(tmp_path, cube_faces):
    path = tmp_path / "cube.obj"
    save_colored_obj(path, cube_faces, np.zeros_like(cube_faces))
    return path


class TestMain:
    def test_missing_plane_count_prints_usage(self, cube_obj, capsys):
        assert main([str(cube_obj)]) == 0
        out = capsys.readouterr().out
        assert "missing argument for number of planes" in out
        assert "usage:" in out

    def test_unreadable_input(self, tmp_path, capsys):
        assert main([str(tmp_path / "missing.obj"), "2"]) == 1
        assert "Failed to open input file" in capsys.readouterr().out

    def test_normals_mismatch(self, cube_obj, capsys):
        # The cube file has no normals at all
        assert main([str(cube_obj), "2", "normals"]) == 1
        assert "not the same size" in capsys.readouterr().out

    def test_no_arguments_prints_usage(self, capsys):
        assert main([]) == 0
        out = capsys.readouterr().out
        assert "missing argument for number of planes" in out
        assert "usage:" in out

    def test_unknown_mode_leaves_gating_off(self, cube_obj, tmp_path):
        # The cube file has no normals, so gating would fail with exit code 1
        out = tmp_path / "planes.obj"
        assert main([str(cube_obj), "2", "colors", "-o", str(out), "--seed", "0"]) == 0
        assert out.exists()

    def test_writes_colored_planes(self, cube_obj, tmp_path):
        out = tmp_path / "result" / "planes.obj"
        code = main([
            str(cube_obj), "6",
            "-o", str(out),
            "--iterations", "1000",
            "--distance-threshold", "0.01",
            "--seed", "0",
        ])
        assert code == 0

        written = load_point_cloud(out)
        # Every cube point is on a plane, some on two
        assert len(written) >= 300

    def test_invalid_plane_count(self, cube_obj, tmp_path, capsys):
        assert main([str(cube_obj), "0", "-o", str(tmp_path / "x.obj")]) == 1
        assert "plane_count must be positive" in capsys.readouterr().out
