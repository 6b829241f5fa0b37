"""
Drawing utilities for decoded poses

Provides:
- Draw pose skeleton along the decoder's keypoint graph
- Draw keypoints with confidence-scaled radius
- Color management
"""

import numpy as np
from typing import Optional, Sequence, Tuple

from ..core.config import DrawConfig
from ..core.constants import POSE_COLORS
from ..decoding.pose import Pose
from ..decoding.skeleton import PERSONLAB_SKELETON, Skeleton


def generate_pose_color(pose_id: int) -> Tuple[int, int, int]:
    """
    Color for the pose at position pose_id in the decoder output

    Args:
        pose_id: Pose index

    Returns:
        (B, G, R) color tuple, cycling through POSE_COLORS
    """
    return POSE_COLORS[pose_id % len(POSE_COLORS)]


def draw_pose(
    image: np.ndarray,
    pose: Pose,
    color: Tuple[int, int, int],
    skeleton: Skeleton = PERSONLAB_SKELETON,
    conf_threshold: float = 0.0,
    line_thickness: int = 2,
    point_radius: int = 4
) -> np.ndarray:
    """
    Draw one pose's skeleton edges and keypoints on image

    Pose coordinates must already be in image pixels (see Pose.rescale).

    Args:
        image: Input image (H, W, 3) BGR
        pose: Decoded pose
        color: (B, G, R) color
        skeleton: Keypoint graph whose edges are drawn
        conf_threshold: Minimum keypoint confidence for drawing
        line_thickness: Skeleton line thickness
        point_radius: Keypoint circle radius at confidence 1

    Returns:
        Modified image with pose drawn
    """
    import cv2

    points = []
    for kp in pose.keypoints:
        if kp is not None and kp.score >= conf_threshold:
            points.append((int(round(kp.x)), int(round(kp.y)), kp.score))
        else:
            points.append(None)

    for parent, child in skeleton.edges:
        if points[parent] is not None and points[child] is not None:
            pt1 = points[parent][:2]
            pt2 = points[child][:2]
            cv2.line(image, pt1, pt2, color, line_thickness, cv2.LINE_AA)

    for point in points:
        if point is not None:
            x, y, conf = point
            # Radius scales with confidence
            radius = max(1, int(point_radius * (0.5 + min(conf, 1.0) * 0.5)))
            cv2.circle(image, (x, y), radius, color, -1)
            cv2.circle(image, (x, y), radius, (255, 255, 255), 1)

    return image


def draw_poses(
    image: np.ndarray,
    poses: Sequence[Pose],
    skeleton: Skeleton = PERSONLAB_SKELETON,
    draw_config: Optional[DrawConfig] = None
) -> np.ndarray:
    """
    Draw every pose, each in its own color

    Args:
        image: Input image
        poses: Decoded poses in image coordinates
        skeleton: Keypoint graph
        draw_config: Drawing parameters (default: DrawConfig())

    Returns:
        Modified image
    """
    if draw_config is None:
        draw_config = DrawConfig()

    for pose_id, pose in enumerate(poses):
        image = draw_pose(
            image,
            pose,
            generate_pose_color(pose_id),
            skeleton=skeleton,
            conf_threshold=draw_config.keypoint_conf_threshold,
            line_thickness=draw_config.line_thickness,
            point_radius=draw_config.point_radius,
        )

    return image


def add_text_label(
    image: np.ndarray,
    text: str,
    position: Tuple[int, int] = (10, 30),
    font_scale: float = 0.6,
    thickness: int = 1,
    color: Tuple[int, int, int] = (255, 255, 255),
    bg_color: Optional[Tuple[int, int, int]] = (0, 0, 0)
) -> np.ndarray:
    """
    Add text label to image

    Args:
        image: Input image
        text: Text to display
        position: (x, y) position
        font_scale: Font size
        thickness: Text thickness
        color: (B, G, R) text color
        bg_color: Background color (None for no background)

    Returns:
        Modified image
    """
    import cv2

    font = cv2.FONT_HERSHEY_SIMPLEX
    (text_w, text_h), baseline = cv2.getTextSize(text, font, font_scale, thickness)

    x, y = position

    if bg_color is not None:
        cv2.rectangle(
            image,
            (x - 2, y - text_h - baseline - 2),
            (x + text_w + 2, y + baseline + 2),
            bg_color,
            -1
        )

    cv2.putText(image, text, (x, y), font, font_scale, color, thickness, cv2.LINE_AA)

    return image
