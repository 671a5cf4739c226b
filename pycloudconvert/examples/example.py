"""
Example: convert a directory of synthetic point clouds with every stage enabled.
"""
import os
import tempfile

import numpy as np

from pycloudconvert import ConvertLogger, PointCloud, resolve_config, run
from pycloudconvert.synthetic import generate_box_point_cloud, generate_plane_point_cloud


def main():
    logger = ConvertLogger.from_verbosity(3)
    rng = np.random.default_rng(42)  # For reproducible synthetic data

    work_dir = tempfile.mkdtemp(prefix='pycloudconvert_')
    src_dir = os.path.join(work_dir, 'in')
    dst_dir = os.path.join(work_dir, 'out')
    os.makedirs(src_dir)

    # A flat patch carrying upward normals, and a noisy box without normals
    plane = generate_plane_point_cloud([0, 0, 0.5], [0, 0, 1], size=1.0, n_points=2000,
                                       noise=0.002, with_normals=True, rng=rng)
    box = generate_box_point_cloud([-1, -1, -1], [1, 1, 1], n_points=3000, rng=rng)
    plane.save(os.path.join(src_dir, 'plane.ply'))
    box.save(os.path.join(src_dir, 'box.ply'))
    logger(f"Wrote {len(plane)} + {len(box)} points to {src_dir}")

    config = resolve_config({
        'verbose': 3,
        'clip_z_min': 0.0,
        'voxel_sample': 0.05,
        'estimate_normals': 0.1,
        'orient_normals': '0,0,1',
    })
    result = run(src_dir, dst_dir, config, logger)
    logger(f"Converted {len(result.converted)} files, {len(result.failed)} failed.")

    for path in result.converted:
        cloud = PointCloud.from_file(path)
        normals = cloud.normals_numpy()
        up = np.mean(normals[:, 2] >= 0) if normals is not None else 0.0
        logger(f"  {os.path.basename(path)}: {len(cloud)} points, {up:.0%} normals facing +Z")


if __name__ == "__main__":
    main()
