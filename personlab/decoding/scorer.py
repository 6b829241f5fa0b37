"""
Pose scoring against already accepted poses
"""

from typing import Sequence

from ..core.config import DecoderConfig
from .pose import Pose


def score_pose(pose: Pose, accepted_poses: Sequence[Pose], config: DecoderConfig) -> float:
    """
    Mean keypoint score over all keypoint types, ignoring overlapped joints

    A filled keypoint contributes its score unless an accepted pose holds a
    same-type keypoint within nms_radius. Empty slots contribute zero.

    Args:
        pose: Candidate pose (must not be in accepted_poses)
        accepted_poses: Poses accepted so far
        config: Decoder configuration

    Returns:
        Score in the heatmap's value range
    """
    total = 0.0
    for keypoint in pose.keypoints:
        if keypoint is None:
            continue
        if not keypoint.is_within_radius_of_corresponding_keypoints(
            accepted_poses, config.nms_radius
        ):
            total += keypoint.score
    return total / pose.num_keypoints
