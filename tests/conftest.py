"""Shared synthetic point clouds."""

import numpy as np
import pytest


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(42)


@pytest.fixture
def plane_with_outliers() -> np.ndarray:
    """400 points on z = 0 in [-1, 1]^2 followed by 50 outliers in [-5, 5]^3."""
    gen = np.random.default_rng(7)
    xy = gen.uniform(-1.0, 1.0, size=(400, 2))
    on_plane = np.column_stack([xy, np.zeros(400)])
    outliers = gen.uniform(-5.0, 5.0, size=(50, 3))
    return np.vstack([on_plane, outliers])


@pytest.fixture
def cube_faces() -> np.ndarray:
    """50 points on each face of the unit cube [0, 1]^3, face by face."""
    gen = np.random.default_rng(3)
    faces = []
    for axis in range(3):
        for value in (0.0, 1.0):
            face = gen.uniform(0.0, 1.0, size=(50, 3))
            face[:, axis] = value
            faces.append(face)
    return np.vstack(faces)
