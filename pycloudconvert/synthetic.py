"""
Synthetic point cloud generators for examples and tests.
"""
import numpy as np

from .pointcloud import PointCloud


def generate_plane_point_cloud(center, normal, size, n_points=500, noise=0.0, with_normals=False, rng=None):
    """
    Generate points on a square patch of a plane.
    Args:
        center: (3,) center of the patch
        normal: (3,) plane normal (will be normalized)
        size: float, edge length of the patch
        n_points: int, number of points
        noise: float, stddev of Gaussian noise along the normal
        with_normals: attach `normal` to every point
        rng: optional numpy Generator
    Returns:
        PointCloud
    """
    rng = np.random.default_rng() if rng is None else rng
    normal = np.asarray(normal, dtype=np.float64)
    normal = normal / np.linalg.norm(normal)
    # Find orthogonal vectors
    if np.allclose(np.abs(normal), [1, 0, 0]):
        ortho1 = np.array([0.0, 1.0, 0.0])
    else:
        ortho1 = np.cross(normal, [1, 0, 0])
    ortho1 = ortho1 / np.linalg.norm(ortho1)
    ortho2 = np.cross(normal, ortho1)
    u = rng.uniform(-size / 2, size / 2, n_points)
    v = rng.uniform(-size / 2, size / 2, n_points)
    pts = np.asarray(center, dtype=np.float64) + np.outer(u, ortho1) + np.outer(v, ortho2)
    if noise > 0:
        pts += np.outer(rng.normal(scale=noise, size=n_points), normal)
    normals = np.tile(normal, (n_points, 1)) if with_normals else None
    return PointCloud.from_numpy(pts, normals=normals)


def generate_box_point_cloud(min_bound, max_bound, n_points=1000, with_colors=False, rng=None):
    """
    Generate points uniformly inside an axis-aligned box.
    Args:
        min_bound, max_bound: (3,) box corners
        n_points: int
        with_colors: attach random RGB colors in [0, 1]
        rng: optional numpy Generator
    Returns:
        PointCloud
    """
    rng = np.random.default_rng() if rng is None else rng
    pts = rng.uniform(min_bound, max_bound, size=(n_points, 3))
    colors = rng.uniform(0.0, 1.0, size=(n_points, 3)) if with_colors else None
    return PointCloud.from_numpy(pts, colors=colors)
