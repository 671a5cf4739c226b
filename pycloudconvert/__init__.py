"""
pycloudconvert: batch point cloud conversion with optional clip, voxel downsample and normal stages
"""

# Make core modules available at package level
from .pointcloud import PointCloud, PointCloudIOError
from .config import ClipConfig, ConfigError, PipelineConfig, resolve_config
from .pipeline import ChangeSummary, run_pipeline
from .batch import BatchResult, convert_file, run
from .logger import ConvertLogger, LogLevel, get_logger

__all__ = [
    'PointCloud',
    'PointCloudIOError',
    'ClipConfig',
    'ConfigError',
    'PipelineConfig',
    'resolve_config',
    'ChangeSummary',
    'run_pipeline',
    'BatchResult',
    'convert_file',
    'run',
    'ConvertLogger',
    'LogLevel',
    'get_logger',
]
