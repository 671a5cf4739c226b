"""
PointCloud class for loading, storing, and transforming point cloud data using Open3D.
"""
import os

import open3d as o3d
import numpy as np

# Default orientation for freshly estimated normals when the cloud had none.
DEFAULT_NORMAL_REFERENCE = (0.0, 0.0, -1.0)


class PointCloudIOError(IOError):
    """Raised when a point cloud cannot be read from or written to disk."""


class PointCloud:
    def __init__(self, o3d_pcd):
        """Initialize with an Open3D PointCloud object."""
        self.o3d_pcd = o3d_pcd

    @classmethod
    def from_file(cls, filename):
        """
        Load point cloud from file (PLY, PCD, XYZ, etc.).

        Open3D reports read failures as an empty cloud, so a file that yields
        no points is treated as unreadable.
        """
        if not os.path.isfile(filename):
            raise PointCloudIOError(f"No such file: {filename}")
        pcd = o3d.io.read_point_cloud(filename)
        if not pcd.has_points():
            raise PointCloudIOError(f"Failed to read point cloud from {filename}")
        return cls(pcd)

    @classmethod
    def from_numpy(cls, points, normals=None, colors=None):
        """Build a point cloud from Nx3 arrays."""
        pcd = o3d.geometry.PointCloud()
        pcd.points = o3d.utility.Vector3dVector(np.asarray(points, dtype=np.float64).reshape(-1, 3))
        if normals is not None:
            pcd.normals = o3d.utility.Vector3dVector(np.asarray(normals, dtype=np.float64).reshape(-1, 3))
        if colors is not None:
            pcd.colors = o3d.utility.Vector3dVector(np.asarray(colors, dtype=np.float64).reshape(-1, 3))
        return cls(pcd)

    def save(self, filename, write_ascii=False, compressed=True):
        """Write the point cloud to file; the format follows the extension."""
        ok = o3d.io.write_point_cloud(
            filename, self.o3d_pcd, write_ascii=write_ascii, compressed=compressed
        )
        if not ok:
            raise PointCloudIOError(f"Failed to write point cloud to {filename}")

    def __len__(self):
        return len(self.o3d_pcd.points)

    def has_normals(self):
        return self.o3d_pcd.has_normals()

    def has_colors(self):
        return self.o3d_pcd.has_colors()

    def to_numpy(self):
        """Return points as Nx3 numpy array."""
        return np.asarray(self.o3d_pcd.points)

    def normals_numpy(self):
        """Return normals as Nx3 numpy array, or None if the cloud has none."""
        if not self.has_normals():
            return None
        return np.asarray(self.o3d_pcd.normals)

    def colors_numpy(self):
        """Return colors as Nx3 numpy array, or None if the cloud has none."""
        if not self.has_colors():
            return None
        return np.asarray(self.o3d_pcd.colors)

    def crop(self, min_bound, max_bound):
        """
        Keep the points inside the axis-aligned box [min_bound, max_bound].

        Bounds are inclusive on every axis. Normals and colors are selected
        with the same indices so they stay parallel to the points.

        Returns:
            A new PointCloud.
        """
        points = self.to_numpy()
        lo = np.asarray(min_bound, dtype=np.float64)
        hi = np.asarray(max_bound, dtype=np.float64)
        inside = np.all((points >= lo) & (points <= hi), axis=1)
        indices = np.flatnonzero(inside).tolist()
        return PointCloud(self.o3d_pcd.select_by_index(indices))

    def voxel_down_sample(self, voxel_size):
        """Reduce each occupied voxel to the centroid of its points. Returns a new PointCloud."""
        return PointCloud(self.o3d_pcd.voxel_down_sample(voxel_size=float(voxel_size)))

    def estimate_normals(self, radius, reference=None):
        """
        Estimate normals from all neighbors within `radius`.

        If the cloud already has normals, each new normal is flipped to agree
        in sign with the normal it replaces. Otherwise every normal is aligned
        with `reference` (defaults to -Z).
        """
        previous = self.normals_numpy()
        if previous is not None:
            previous = previous.copy()
        self.o3d_pcd.estimate_normals(
            search_param=o3d.geometry.KDTreeSearchParamRadius(radius=float(radius))
        )
        if previous is not None:
            normals = np.asarray(self.o3d_pcd.normals).copy()
            flip = np.einsum('ij,ij->i', normals, previous) < 0.0
            normals[flip] *= -1.0
            self.o3d_pcd.normals = o3d.utility.Vector3dVector(normals)
        else:
            if reference is None:
                reference = DEFAULT_NORMAL_REFERENCE
            self.orient_normals(reference)

    def orient_normals(self, direction):
        """Negate every normal whose dot product with `direction` is negative."""
        normals = self.normals_numpy()
        if normals is None:
            return
        normals = normals.copy()
        direction = np.asarray(direction, dtype=np.float64)
        flip = normals @ direction < 0.0
        normals[flip] *= -1.0
        self.o3d_pcd.normals = o3d.utility.Vector3dVector(normals)
