"""
Custom exceptions for the PersonLab decoder

Provides specific exception types for:
- Configuration errors
- Tensor shape errors
- Pose/skeleton validation errors
- Data and image loading errors
"""


class PersonLabException(Exception):
    """
    Base exception class for all PersonLab decoder exceptions

    All custom exceptions should inherit from this class for easy
    exception catching and handling at the application level.
    """
    pass


class ConfigurationError(PersonLabException):
    """
    Raised when configuration is invalid

    Reasons:
    - Negative local maximum radius or NMS radius
    - Non-positive output stride or input image size
    - Score threshold outside [0, 1]
    - Invalid configuration file format

    Example:
        >>> from personlab.core.config import DecoderConfig
        >>> try:
        ...     config = DecoderConfig(output_stride=0)
        ... except ConfigurationError as e:
        ...     print(f"Configuration error: {e}")
    """
    pass


class ShapeMismatchError(PersonLabException):
    """
    Raised when decoder input tensors have inconsistent dimensions

    Reasons:
    - Tensor is not 3-D [height, width, channels]
    - Spatial dimensions differ between tensors
    - Channel count does not match the skeleton

    Example:
        >>> from personlab.decoding import PoseDecoder
        >>> try:
        ...     poses = PoseDecoder().decode(heatmap, offsets, fwd, bwd)
        ... except ShapeMismatchError as e:
        ...     print(f"Bad network output: {e}")
    """
    pass


class ValidationError(PersonLabException):
    """
    Raised when pose or skeleton data validation fails

    Applicable to:
    - Adding a keypoint to an already filled pose slot
    - Modifying a finalized pose
    - Skeleton edges referencing unknown keypoints
    - Head tensors containing NaN or infinite values
    """
    pass


class DataLoadError(PersonLabException):
    """
    Raised when data files fail to load

    Applicable to:
    - NPZ files holding network heads
    - CSV pose files
    """
    pass


class ImageLoadError(PersonLabException):
    """
    Raised when an image fails to load

    Reasons:
    - File does not exist
    - File format is corrupted or unsupported
    """
    pass


def handle_personlab_exception(e: PersonLabException, verbose: bool = True) -> str:
    """
    Handle PersonLab exceptions with formatted error message

    Args:
        e: The PersonLabException instance
        verbose: If True, print error message to console

    Returns:
        Formatted error message string
    """
    error_type = type(e).__name__
    error_msg = str(e)
    formatted_msg = f"[{error_type}] {error_msg}"

    if verbose:
        print(formatted_msg)

    return formatted_msg
