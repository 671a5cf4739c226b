"""
Stage pipeline: clip -> voxel downsample -> estimate normals -> orient normals.
"""
from dataclasses import dataclass
from typing import Optional, Tuple

from .config import PipelineConfig
from .logger import ConvertLogger, get_logger
from .pointcloud import PointCloud


@dataclass(frozen=True)
class ChangeSummary:
    """
    Point counts before and after the pipeline.

    `processed` is set by clip, voxel downsample and normal estimation.
    Orienting normals alone leaves it False but is still listed in `stages`.
    """
    points_in: int
    points_out: int
    processed: bool
    stages: Tuple[str, ...] = ()


def clip_stage(cloud: PointCloud, config: PipelineConfig, logger: ConvertLogger) -> PointCloud:
    clip = config.clip
    logger.debug(f"Clip point cloud to [{_fmt(clip.min_bound)}] - [{_fmt(clip.max_bound)}].")
    return cloud.crop(clip.min_bound, clip.max_bound)


def voxel_stage(cloud: PointCloud, config: PipelineConfig, logger: ConvertLogger) -> PointCloud:
    logger.debug(f"Downsample point cloud with voxel size {config.voxel_size:.4f}.")
    return cloud.voxel_down_sample(config.voxel_size)


def normals_stage(cloud: PointCloud, config: PipelineConfig, logger: ConvertLogger) -> PointCloud:
    logger.debug(f"Estimate normals with search radius {config.normal_radius:.4f}.")
    cloud.estimate_normals(config.normal_radius)
    return cloud


def orient_stage(cloud: PointCloud, config: PipelineConfig, logger: ConvertLogger) -> PointCloud:
    d = config.orient_direction
    logger.debug(f"Orient normals to [{d[0]:.2f}, {d[1]:.2f}, {d[2]:.2f}].")
    cloud.orient_normals(d)
    return cloud


def run_pipeline(
    cloud: PointCloud,
    config: PipelineConfig,
    logger: Optional[ConvertLogger] = None
) -> Tuple[PointCloud, ChangeSummary]:
    """
    Apply every configured stage to one cloud in the fixed order.

    Stages that change the point set hand back a new PointCloud and the old
    one is dropped; normal stages work on the current cloud. Errors raised
    by Open3D are not caught here.

    Args:
        cloud: the loaded PointCloud
        config: resolved PipelineConfig
        logger: optional ConvertLogger; a console logger at the config's
            verbosity is used when omitted

    Returns:
        (cloud, ChangeSummary)
    """
    if logger is None:
        logger = get_logger(config.verbosity)

    points_in = len(cloud)
    processed = False
    stages = []

    if config.clip is not None:
        cloud = clip_stage(cloud, config, logger)
        processed = True
        stages.append('clip')

    if config.voxel_size is not None:
        cloud = voxel_stage(cloud, config, logger)
        processed = True
        stages.append('voxel_sample')

    if config.normal_radius is not None:
        cloud = normals_stage(cloud, config, logger)
        processed = True
        stages.append('estimate_normals')

    if config.orient_direction is not None and cloud.has_normals():
        cloud = orient_stage(cloud, config, logger)
        stages.append('orient_normals')

    summary = ChangeSummary(
        points_in=points_in,
        points_out=len(cloud),
        processed=processed,
        stages=tuple(stages),
    )
    return cloud, summary


def _fmt(vec) -> str:
    return ', '.join(f"{v:.4g}" for v in vec)
