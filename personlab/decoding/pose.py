"""
Keypoint and Pose containers produced by the decoder

Provides:
- Keypoint: immutable joint location in image coordinates
- Pose: one slot per keypoint type, each filled at most once
"""

import math
from dataclasses import dataclass, replace
from typing import Dict, Iterable, List, Optional, Tuple

from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class Keypoint:
    """Joint location (image pixels) with its heatmap confidence"""
    index: int
    y: float
    x: float
    score: float

    def distance_to(self, other: "Keypoint") -> float:
        return math.hypot(self.y - other.y, self.x - other.x)

    def is_within_radius_of_corresponding_keypoints(
        self,
        poses: Iterable["Pose"],
        radius: float
    ) -> bool:
        """
        Check whether any pose already holds a same-type keypoint nearby

        Args:
            poses: Poses to check against
            radius: Suppression radius in image pixels (inclusive)

        Returns:
            True if some pose has a keypoint of this type within radius
        """
        squared_radius = radius * radius
        for pose in poses:
            corresponding = pose.get_keypoint(self.index)
            if corresponding is None:
                continue
            dy = corresponding.y - self.y
            dx = corresponding.x - self.x
            if dy * dy + dx * dx <= squared_radius:
                return True
        return False


class Pose:
    """
    A single person's skeleton

    Holds one optional Keypoint per keypoint type. Slots are filled once;
    after the decoder accepts a pose it is finalized and stays read-only.

    Args:
        num_keypoints: Number of keypoint types (slots)
        resolution: (height, width) of the coordinate space
    """

    def __init__(self, num_keypoints: int, resolution: Tuple[int, int]):
        self.keypoints: List[Optional[Keypoint]] = [None] * num_keypoints
        self.resolution = tuple(resolution)
        self.score: Optional[float] = None
        self._finalized = False

    def add(self, keypoint: Keypoint) -> None:
        """
        Fill the slot for keypoint.index

        Raises:
            ValidationError: If the slot is taken or the pose is finalized
        """
        if self._finalized:
            raise ValidationError("Cannot add keypoints to a finalized pose")
        if self.keypoints[keypoint.index] is not None:
            raise ValidationError(f"Keypoint slot {keypoint.index} is already filled")
        self.keypoints[keypoint.index] = keypoint

    def get_keypoint(self, index: int) -> Optional[Keypoint]:
        return self.keypoints[index]

    def has_keypoint(self, index: int) -> bool:
        return self.keypoints[index] is not None

    def filled_keypoints(self) -> Dict[int, Keypoint]:
        """Mapping of keypoint index to Keypoint for filled slots"""
        return {i: kp for i, kp in enumerate(self.keypoints) if kp is not None}

    @property
    def num_keypoints(self) -> int:
        return len(self.keypoints)

    @property
    def is_finalized(self) -> bool:
        return self._finalized

    def finalize(self, score: float) -> None:
        """Attach the acceptance score and freeze the pose"""
        self.score = score
        self._finalized = True

    def rescale(self, height: int, width: int) -> "Pose":
        """
        Scale keypoint coordinates into another resolution

        Args:
            height: Target height
            width: Target width

        Returns:
            New Pose in (height, width) coordinates, same score and state

        Example:
            >>> pose_img = pose.rescale(*image.shape[:2])
        """
        scale_y = height / self.resolution[0]
        scale_x = width / self.resolution[1]

        rescaled = Pose(self.num_keypoints, (height, width))
        for kp in self.keypoints:
            if kp is not None:
                rescaled.add(replace(kp, y=kp.y * scale_y, x=kp.x * scale_x))
        if self._finalized:
            rescaled.finalize(self.score)
        return rescaled

    def to_dict(self, keypoint_names: Iterable[str]) -> Dict[str, Tuple[float, float, float]]:
        """
        Convert filled slots to {name: (x, y, conf)}

        Uses the same (x, y, conf) layout as the CSV and drawing helpers.
        """
        result = {}
        for name, kp in zip(keypoint_names, self.keypoints):
            if kp is not None:
                result[name] = (kp.x, kp.y, kp.score)
        return result

    def __repr__(self) -> str:
        filled = sum(kp is not None for kp in self.keypoints)
        return f"Pose(filled={filled}/{self.num_keypoints}, score={self.score})"
