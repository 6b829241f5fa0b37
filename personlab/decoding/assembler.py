"""
Greedy multi-person pose assembly

Seeds a pose at every root candidate that is not already claimed by an
accepted pose, then grows it across the skeleton by following displacement
fields from joint to joint.
"""

import logging
import math
from typing import List, Sequence

import numpy as np

from ..core.config import DecoderConfig
from .pose import Keypoint, Pose
from .scorer import score_pose
from .skeleton import Direction, Edge, Skeleton

logger = logging.getLogger(__name__)


def _round_half_away_from_zero(value: float) -> float:
    return math.copysign(math.floor(abs(value) + 0.5), value)


class PoseAssembler:
    """
    Builds poses for one set of network heads

    One instance per decode call; the tensors are only read.

    Args:
        heatmap: (H, W, K) keypoint confidence
        offsets: (H, W, 2K) sub-pixel offsets
        displacements_fwd: (H, W, 2E) parent -> child displacements
        displacements_bwd: (H, W, 2E) child -> parent displacements
        config: Decoder configuration
        skeleton: Keypoint graph matching K and E
    """

    def __init__(
        self,
        heatmap: np.ndarray,
        offsets: np.ndarray,
        displacements_fwd: np.ndarray,
        displacements_bwd: np.ndarray,
        config: DecoderConfig,
        skeleton: Skeleton,
    ):
        self.heatmap = heatmap
        self.offsets = offsets
        self.displacements = {
            Direction.FORWARD: displacements_fwd,
            Direction.BACKWARD: displacements_bwd,
        }
        self.config = config
        self.skeleton = skeleton

        self.height, self.width = heatmap.shape[:2]
        self.suppressed_roots = 0
        self.rejected_poses: List[Pose] = []

    def assemble(self, candidates: Sequence[Keypoint]) -> List[Pose]:
        """
        Turn sorted root candidates into accepted poses

        Args:
            candidates: Keypoints sorted by descending score

        Returns:
            Accepted poses in acceptance order
        """
        poses: List[Pose] = []

        for root in candidates:
            if root.is_within_radius_of_corresponding_keypoints(poses, self.config.nms_radius):
                self.suppressed_roots += 1
                continue

            pose = Pose(self.skeleton.num_keypoints, self.config.input_image_size)
            pose.add(root)
            self._grow(pose, root)

            score = score_pose(pose, poses, self.config)
            if score > self.config.pose_score_threshold:
                pose.finalize(score)
                poses.append(pose)
            else:
                self.rejected_poses.append(pose)

        logger.debug(
            "Assembled %d poses (%d roots suppressed, %d poses below threshold)",
            len(poses), self.suppressed_roots, len(self.rejected_poses)
        )
        return poses

    def _grow(self, pose: Pose, root: Keypoint) -> None:
        """
        Depth-first fill of every slot reachable from root

        Each new joint is fully explored before the next edge of its parent,
        and a slot is checked at the moment its edge is reached, so cyclic
        skeletons keep the first path that arrives.
        """
        stack = [(root, iter(self.skeleton.neighbors(root.index)))]
        while stack:
            current, edges = stack[-1]
            edge = next(edges, None)
            if edge is None:
                stack.pop()
                continue
            if pose.has_keypoint(edge.target):
                continue
            next_keypoint = self.follow_displacement(current, edge)
            pose.add(next_keypoint)
            stack.append((next_keypoint, iter(self.skeleton.neighbors(next_keypoint.index))))

    def follow_displacement(self, previous: Keypoint, edge: Edge) -> Keypoint:
        """
        Hop from a placed keypoint to its neighbor along one skeleton edge

        The landing point is snapped to its heatmap cell and the target
        keypoint's offset is added from that cell, not from the continuous
        displaced location.
        """
        displacements = self.displacements[edge.direction]
        channel_y = edge.channel
        channel_x = edge.channel + self.skeleton.num_edges

        grid_y = self._to_grid(previous.y, self.height)
        grid_x = self._to_grid(previous.x, self.width)
        displaced_y = self._to_grid(
            previous.y + displacements[grid_y, grid_x, channel_y], self.height
        )
        displaced_x = self._to_grid(
            previous.x + displacements[grid_y, grid_x, channel_x], self.width
        )

        target = edge.target
        stride = self.config.output_stride
        return Keypoint(
            index=target,
            y=float(displaced_y * stride + self.offsets[displaced_y, displaced_x, target]),
            x=float(
                displaced_x * stride
                + self.offsets[displaced_y, displaced_x, target + self.skeleton.num_keypoints]
            ),
            score=float(self.heatmap[displaced_y, displaced_x, target]),
        )

    def _to_grid(self, coordinate: float, size: int) -> int:
        """Nearest heatmap cell for an image coordinate, clamped to [0, size-1]"""
        cell = _round_half_away_from_zero(coordinate / self.config.output_stride)
        return int(min(max(0.0, cell), size - 1))
