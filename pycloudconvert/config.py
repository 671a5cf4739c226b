"""
Resolution of flat command-line style options into an immutable pipeline configuration.
"""
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple

import numpy as np

from .logger import DEFAULT_VERBOSITY

Vector3 = Tuple[float, float, float]

CLIP_MIN_KEYS = ('clip_x_min', 'clip_y_min', 'clip_z_min')
CLIP_MAX_KEYS = ('clip_x_max', 'clip_y_max', 'clip_z_max')

# Unconstrained sides of the clip box.
LOWEST = float(np.finfo(np.float64).min)
HIGHEST = float(np.finfo(np.float64).max)


class ConfigError(ValueError):
    """Raised when an option value cannot be interpreted."""


@dataclass(frozen=True)
class ClipConfig:
    min_bound: Vector3
    max_bound: Vector3


@dataclass(frozen=True)
class PipelineConfig:
    """
    Parameters for every optional stage, resolved once per invocation.

    A stage is skipped when its parameter is None. The same instance is
    shared by every file of a directory batch.
    """
    clip: Optional[ClipConfig] = None
    voxel_size: Optional[float] = None
    normal_radius: Optional[float] = None
    orient_direction: Optional[Vector3] = None
    verbosity: int = DEFAULT_VERBOSITY
    write_ascii: bool = False
    compressed: bool = True


def _supplied(options: Mapping[str, Any], key: str) -> bool:
    return options.get(key) is not None


def _as_float(options: Mapping[str, Any], key: str, default: float) -> float:
    value = options.get(key)
    if value is None:
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ConfigError(f"--{key} expects a number, got {value!r}") from None


def _as_int(options: Mapping[str, Any], key: str, default: int) -> int:
    value = options.get(key)
    if value is None:
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"--{key} expects an integer, got {value!r}") from None


def parse_vector(value: Any) -> Tuple[float, ...]:
    """
    Parse a vector option such as "0,0,1" or "[0, 0, 1]" into floats.

    Text that does not parse yields an empty tuple, which callers treat as
    "not given".
    """
    if value is None:
        return ()
    if isinstance(value, str):
        text = value.strip().strip('[]()')
        if not text:
            return ()
        parts = text.split(',')
    else:
        parts = list(value)
    try:
        return tuple(float(p) for p in parts)
    except (TypeError, ValueError):
        return ()


def resolve_clip(options: Mapping[str, Any]) -> Optional[ClipConfig]:
    """Build a ClipConfig if any of the six axis bounds is supplied."""
    if not any(_supplied(options, key) for key in CLIP_MIN_KEYS + CLIP_MAX_KEYS):
        return None
    min_bound = tuple(_as_float(options, key, LOWEST) for key in CLIP_MIN_KEYS)
    max_bound = tuple(_as_float(options, key, HIGHEST) for key in CLIP_MAX_KEYS)
    return ClipConfig(min_bound=min_bound, max_bound=max_bound)


def resolve_config(options: Mapping[str, Any]) -> PipelineConfig:
    """
    Translate a flat mapping of option name -> raw value into a PipelineConfig.

    Keys follow the command-line option names without dashes. Missing keys
    and None values mean the option was not given. Sizes of zero or below
    are indistinguishable from an absent option.

    Args:
        options: e.g. vars() of an argparse namespace, or a plain dict

    Returns:
        PipelineConfig

    Raises:
        ConfigError: if a numeric option cannot be converted
    """
    voxel_size = _as_float(options, 'voxel_sample', 0.0)
    normal_radius = _as_float(options, 'estimate_normals', 0.0)
    direction = parse_vector(options.get('orient_normals'))

    return PipelineConfig(
        clip=resolve_clip(options),
        voxel_size=voxel_size if voxel_size > 0.0 else None,
        normal_radius=normal_radius if normal_radius > 0.0 else None,
        orient_direction=direction if len(direction) == 3 else None,
        verbosity=_as_int(options, 'verbose', DEFAULT_VERBOSITY),
        write_ascii=bool(options.get('write_ascii', False)),
        compressed=bool(options.get('compressed', True)),
    )
