"""
Configuration management for the PersonLab decoder

Central configuration system supporting:
- Dataclass-based configs
- YAML file loading
- Environment variable overrides
"""

import math
import numbers
import os
import yaml
from dataclasses import dataclass, field, asdict, replace
from pathlib import Path
from typing import Optional, Dict, Any, Tuple

from .constants import (
    DEFAULT_OUTPUT_STRIDE,
    DEFAULT_INPUT_IMAGE_SIZE,
    DEFAULT_KEYPOINT_LOCAL_MAXIMUM_RADIUS,
    DEFAULT_KEYPOINT_SCORE_THRESHOLD,
    DEFAULT_NMS_RADIUS,
    DEFAULT_POSE_SCORE_THRESHOLD,
)
from .exceptions import ConfigurationError


def _is_int(value: Any) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


def _is_finite(value: Any) -> bool:
    return (isinstance(value, numbers.Real) and not isinstance(value, bool)
            and math.isfinite(value))


def _is_unit_interval(value: Any) -> bool:
    return _is_finite(value) and 0 <= value <= 1


@dataclass(frozen=True)
class DecoderConfig:
    """
    Configuration for the pose decoder

    Immutable once built, so one instance can be shared between decoders
    running on different threads.
    """
    output_stride: int = DEFAULT_OUTPUT_STRIDE
    input_image_size: Tuple[int, int] = DEFAULT_INPUT_IMAGE_SIZE  # (height, width)
    keypoint_local_maximum_radius: int = DEFAULT_KEYPOINT_LOCAL_MAXIMUM_RADIUS
    keypoint_score_threshold: float = DEFAULT_KEYPOINT_SCORE_THRESHOLD
    nms_radius: float = DEFAULT_NMS_RADIUS
    pose_score_threshold: float = DEFAULT_POSE_SCORE_THRESHOLD

    def __post_init__(self):
        """Validate configuration"""
        # YAML hands us lists
        object.__setattr__(self, 'input_image_size', tuple(self.input_image_size))

        if not _is_int(self.output_stride) or self.output_stride <= 0:
            raise ConfigurationError("output_stride must be an integer > 0")
        if (len(self.input_image_size) != 2
                or not all(_is_int(v) for v in self.input_image_size)
                or min(self.input_image_size) <= 0):
            raise ConfigurationError(
                "input_image_size must be a positive integer (height, width) pair"
            )
        if (not _is_int(self.keypoint_local_maximum_radius)
                or self.keypoint_local_maximum_radius < 0):
            raise ConfigurationError("keypoint_local_maximum_radius must be an integer >= 0")
        if not _is_unit_interval(self.keypoint_score_threshold):
            raise ConfigurationError("keypoint_score_threshold must be between 0 and 1")
        if not _is_unit_interval(self.pose_score_threshold):
            raise ConfigurationError("pose_score_threshold must be between 0 and 1")
        if not _is_finite(self.nms_radius) or self.nms_radius < 0:
            raise ConfigurationError("nms_radius must be a finite number >= 0")


@dataclass
class DrawConfig:
    """Configuration for pose overlay rendering"""
    keypoint_conf_threshold: float = 0.0
    line_thickness: int = 2
    point_radius: int = 4

    def __post_init__(self):
        """Validate configuration"""
        if self.line_thickness < 1:
            raise ConfigurationError("line_thickness must be >= 1")
        if self.point_radius < 1:
            raise ConfigurationError("point_radius must be >= 1")


@dataclass
class PersonLabConfig:
    """Master configuration class combining all subconfigs"""
    decoder: DecoderConfig = field(default_factory=DecoderConfig)
    draw: DrawConfig = field(default_factory=DrawConfig)

    @classmethod
    def from_yaml(cls, yaml_path: str) -> "PersonLabConfig":
        """
        Load configuration from YAML file

        Args:
            yaml_path: Path to YAML configuration file

        Returns:
            PersonLabConfig instance

        Raises:
            FileNotFoundError: If YAML file not found
            ConfigurationError: If YAML format or a value is invalid
        """
        yaml_path = Path(yaml_path)
        if not yaml_path.exists():
            raise FileNotFoundError(f"Config file not found: {yaml_path}")

        try:
            with open(yaml_path, 'r') as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML format in {yaml_path}: {e}")

        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Expected a mapping at the top of {yaml_path}, got {type(data).__name__}"
            )

        try:
            return cls(
                decoder=DecoderConfig(**data.get('decoder', {})),
                draw=DrawConfig(**data.get('draw', {})),
            )
        except TypeError as e:
            raise ConfigurationError(f"Unknown configuration key in {yaml_path}: {e}")

    @classmethod
    def from_env(cls, base_config: Optional["PersonLabConfig"] = None) -> "PersonLabConfig":
        """
        Create config from environment variables

        Supports environment variables like:
        - PERSONLAB_OUTPUT_STRIDE
        - PERSONLAB_NMS_RADIUS
        - PERSONLAB_KEYPOINT_SCORE_THRESHOLD
        - PERSONLAB_POSE_SCORE_THRESHOLD
        - PERSONLAB_LOCAL_MAXIMUM_RADIUS

        Args:
            base_config: Base configuration to override (default: new config)

        Returns:
            PersonLabConfig instance with environment overrides
        """
        if base_config is None:
            config = cls()
        else:
            config = base_config

        overrides = {}
        if 'PERSONLAB_OUTPUT_STRIDE' in os.environ:
            overrides['output_stride'] = int(os.environ['PERSONLAB_OUTPUT_STRIDE'])
        if 'PERSONLAB_NMS_RADIUS' in os.environ:
            overrides['nms_radius'] = float(os.environ['PERSONLAB_NMS_RADIUS'])
        if 'PERSONLAB_KEYPOINT_SCORE_THRESHOLD' in os.environ:
            overrides['keypoint_score_threshold'] = float(
                os.environ['PERSONLAB_KEYPOINT_SCORE_THRESHOLD']
            )
        if 'PERSONLAB_POSE_SCORE_THRESHOLD' in os.environ:
            overrides['pose_score_threshold'] = float(
                os.environ['PERSONLAB_POSE_SCORE_THRESHOLD']
            )
        if 'PERSONLAB_LOCAL_MAXIMUM_RADIUS' in os.environ:
            overrides['keypoint_local_maximum_radius'] = int(
                os.environ['PERSONLAB_LOCAL_MAXIMUM_RADIUS']
            )

        if overrides:
            config.decoder = replace(config.decoder, **overrides)

        return config

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary"""
        d = asdict(self)
        d['decoder']['input_image_size'] = list(self.decoder.input_image_size)
        return d

    def to_yaml(self, yaml_path: str) -> None:
        """
        Save configuration to YAML file

        Args:
            yaml_path: Path to save YAML configuration
        """
        yaml_path = Path(yaml_path)
        yaml_path.parent.mkdir(parents=True, exist_ok=True)

        with open(yaml_path, 'w') as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)

    def __str__(self) -> str:
        """String representation of config"""
        return yaml.dump(self.to_dict(), default_flow_style=False, sort_keys=False)
