"""
PersonLab - Multi-person pose decoding from PersonLab network heads

A Python package for:
- Greedy multi-person pose decoding (heatmap, offsets, displacement fields)
- Head tensor and pose CSV I/O
- Pose overlay rendering
"""

__version__ = "0.1.0"
__author__ = "PersonLab Project Team"

# Core imports (no heavy dependencies)
from .core.config import DecoderConfig, DrawConfig, PersonLabConfig
from .core.constants import (
    PERSONLAB_KEYPOINT_NAMES,
    PERSONLAB_DISPLACEMENT_EDGES,
    POSE_COLORS,
)
from .core.exceptions import (
    PersonLabException,
    ConfigurationError,
    ShapeMismatchError,
    ValidationError,
    DataLoadError,
    ImageLoadError,
)


# Lazy imports for modules with external dependencies
def __getattr__(name):
    """Lazy loading for modules with external dependencies"""
    if name in ("PoseDecoder", "PersonLabHeads", "Keypoint", "Pose",
                "KeypointIndex", "Skeleton", "PERSONLAB_SKELETON"):
        from . import decoding
        return getattr(decoding, name)
    elif name in ("ImageLoader", "HeadsLoader", "CSVWriter", "CSVReader", "PoseRow"):
        from . import io
        return getattr(io, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    # Version
    "__version__",
    # Config
    "DecoderConfig",
    "DrawConfig",
    "PersonLabConfig",
    # Constants
    "PERSONLAB_KEYPOINT_NAMES",
    "PERSONLAB_DISPLACEMENT_EDGES",
    "POSE_COLORS",
    # Exceptions
    "PersonLabException",
    "ConfigurationError",
    "ShapeMismatchError",
    "ValidationError",
    "DataLoadError",
    "ImageLoadError",
    # Decoding
    "PoseDecoder",
    "PersonLabHeads",
    "Keypoint",
    "Pose",
    "KeypointIndex",
    "Skeleton",
    "PERSONLAB_SKELETON",
    # IO
    "ImageLoader",
    "HeadsLoader",
    "CSVWriter",
    "CSVReader",
    "PoseRow",
]
