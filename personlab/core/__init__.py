"""
Core module - Configuration, constants, and exceptions for the PersonLab decoder
"""

from .config import (
    DecoderConfig,
    DrawConfig,
    PersonLabConfig,
)
from .constants import (
    PERSONLAB_KEYPOINT_NAMES,
    PERSONLAB_DISPLACEMENT_EDGES,
    POSE_COLORS,
)
from .exceptions import (
    PersonLabException,
    ConfigurationError,
    ShapeMismatchError,
    ValidationError,
    DataLoadError,
    ImageLoadError,
)

__all__ = [
    "DecoderConfig",
    "DrawConfig",
    "PersonLabConfig",
    "PERSONLAB_KEYPOINT_NAMES",
    "PERSONLAB_DISPLACEMENT_EDGES",
    "POSE_COLORS",
    "PersonLabException",
    "ConfigurationError",
    "ShapeMismatchError",
    "ValidationError",
    "DataLoadError",
    "ImageLoadError",
]
