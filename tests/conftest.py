"""Shared fixtures: small synthetic clouds and files on disk."""

import os

import numpy as np
import pytest

from pycloudconvert import ConvertLogger, PointCloud


@pytest.fixture
def rng():
    return np.random.default_rng(7)


@pytest.fixture
def quiet_logger():
    """Logger that only reports errors, without timestamps."""
    return ConvertLogger.from_verbosity(0, include_timestamp=False)


@pytest.fixture
def debug_logger():
    return ConvertLogger.from_verbosity(3, include_timestamp=False)


@pytest.fixture
def line_cloud():
    """Three points along x at -1, 0.5 and 2, with normals and colors."""
    points = [[-1.0, 0.0, 0.0], [0.5, 0.0, 0.0], [2.0, 0.0, 0.0]]
    normals = [[0.0, 0.0, 1.0], [0.0, 1.0, 0.0], [1.0, 0.0, 0.0]]
    colors = [[1.0, 0.0, 0.0], [0.0, 1.0, 0.0], [0.0, 0.0, 1.0]]
    return PointCloud.from_numpy(points, normals=normals, colors=colors)


@pytest.fixture
def source_dir(tmp_path, rng):
    """
    Directory with a.ply (10 points, no normals) and b.ply (5 points whose
    normals all point to +Z).
    """
    src = tmp_path / "in"
    src.mkdir()
    a_points = rng.uniform(0.0, 0.2, size=(10, 3))
    a_points[:, 2] = 0.0
    PointCloud.from_numpy(a_points).save(os.fspath(src / "a.ply"))

    b_points = rng.uniform(0.0, 0.2, size=(5, 3))
    b_points[:, 2] = 0.0
    b_normals = np.tile([0.0, 0.0, 1.0], (5, 1))
    PointCloud.from_numpy(b_points, normals=b_normals).save(os.fspath(src / "b.ply"))
    return src
