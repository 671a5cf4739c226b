"""
Batch driver: convert a single file, or every file directly inside a directory.
"""
import os
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .config import PipelineConfig
from .logger import ConvertLogger, get_logger
from .pipeline import ChangeSummary, run_pipeline
from .pointcloud import PointCloud


@dataclass
class BatchResult:
    converted: List[str] = field(default_factory=list)
    failed: List[Tuple[str, str]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed


def convert_file(source: str, target: str, config: PipelineConfig,
                 logger: ConvertLogger) -> ChangeSummary:
    """Load one cloud, run the pipeline on it and write the result to `target`."""
    cloud = PointCloud.from_file(source)
    cloud, summary = run_pipeline(cloud, config, logger)
    if summary.processed:
        logger.info(f"Processed point cloud from {summary.points_in} points to {summary.points_out} points.")
    cloud.save(target, write_ascii=config.write_ascii, compressed=config.compressed)
    return summary


def list_files(directory: str) -> List[str]:
    """Regular files directly inside `directory`, sorted by name."""
    paths = (os.path.join(directory, name) for name in sorted(os.listdir(directory)))
    return [p for p in paths if os.path.isfile(p)]


def target_path_for(source_file: str, target_dir: str) -> str:
    """Output path for one batch entry: same file name, under `target_dir`."""
    return os.path.join(os.path.normpath(target_dir), os.path.basename(source_file))


def run(source: str, target: str, config: PipelineConfig,
        logger: Optional[ConvertLogger] = None) -> BatchResult:
    """
    Convert `source` into `target`.

    A file source is written straight to `target`. A directory source has
    every regular file it contains converted into the directory `target`,
    which is created if needed. Files are handled one after another; a file
    that fails is logged and recorded, and the remaining files still run.

    Args:
        source: input file or directory
        target: output file or directory
        config: resolved PipelineConfig, shared by all files
        logger: optional ConvertLogger

    Returns:
        BatchResult listing converted and failed inputs
    """
    if logger is None:
        logger = get_logger(config.verbosity)
    result = BatchResult()

    if os.path.isfile(source):
        jobs = [(source, target)]
    elif os.path.isdir(source):
        try:
            os.makedirs(target, exist_ok=True)
        except OSError as e:
            logger.error(f"Cannot create output directory {target}: {e}")
            result.failed.append((source, str(e)))
            return result
        jobs = [(fn, target_path_for(fn, target)) for fn in list_files(source)]
        logger.debug(f"Found {len(jobs)} files in {source}.")
    else:
        logger.error("File or directory does not exist.")
        result.failed.append((source, "File or directory does not exist."))
        return result

    for source_file, target_file in jobs:
        logger.debug(f"Converting {source_file} -> {target_file}")
        try:
            convert_file(source_file, target_file, config, logger)
        except Exception as e:
            logger.error(f"Failed to convert {source_file}: {e}")
            result.failed.append((source_file, str(e)))
            continue
        result.converted.append(target_file)

    return result
