"""
PersonLab pose decoder

Provides:
- PoseDecoder: network heads -> list of multi-person poses
- PersonLabHeads: bundle of the four head tensors for one image
- Batch decoding with progress tracking

Example:
    >>> from personlab.decoding import PoseDecoder
    >>> from personlab.core.config import DecoderConfig
    >>> decoder = PoseDecoder(DecoderConfig(output_stride=16))
    >>> poses = decoder.decode(heatmap, offsets, displacements_fwd, displacements_bwd)
    >>> for pose in poses:
    ...     print(pose.score, len(pose.filled_keypoints()))
"""

import logging
from dataclasses import dataclass
from typing import Any, List, Optional

import numpy as np
from tqdm import tqdm

from ..core.config import DecoderConfig
from ..core.exceptions import ShapeMismatchError, ValidationError
from .assembler import PoseAssembler
from .extractor import extract_sorted_candidates
from .pose import Pose
from .skeleton import PERSONLAB_SKELETON, Skeleton

logger = logging.getLogger(__name__)


def to_numpy(tensor: Any) -> np.ndarray:
    """
    Host float64 array from a numpy array or framework tensor

    Tensors exposing detach()/cpu()/numpy() (torch) are copied to host first.
    """
    if hasattr(tensor, "detach"):
        tensor = tensor.detach().cpu().numpy()
    return np.asarray(tensor, dtype=np.float64)


@dataclass
class PersonLabHeads:
    """Network heads for a single image, each (H, W, C)"""
    heatmap: np.ndarray
    offsets: np.ndarray
    displacements_fwd: np.ndarray
    displacements_bwd: np.ndarray


class PoseDecoder:
    """
    Greedy PersonLab multi-person pose decoder

    Holds only the frozen config and the read-only skeleton, so one decoder
    may serve several threads; every decode call works on fresh local state.

    Args:
        config: Decoder configuration (default: DecoderConfig())
        skeleton: Keypoint graph (default: 17-joint PersonLab skeleton)
    """

    def __init__(
        self,
        config: Optional[DecoderConfig] = None,
        skeleton: Optional[Skeleton] = None
    ):
        self.config = config if config is not None else DecoderConfig()
        self.skeleton = skeleton if skeleton is not None else PERSONLAB_SKELETON

    def decode(
        self,
        heatmap: Any,
        offsets: Any,
        displacements_fwd: Any,
        displacements_bwd: Any
    ) -> List[Pose]:
        """
        Decode poses from one image's network heads

        A leading batch axis of size 1 is dropped.

        Args:
            heatmap: (H, W, K) keypoint confidence
            offsets: (H, W, 2K) sub-pixel offsets
            displacements_fwd: (H, W, 2E) forward displacements
            displacements_bwd: (H, W, 2E) backward displacements

        Returns:
            Accepted poses, in order of acceptance

        Raises:
            ShapeMismatchError: If tensor shapes disagree with each other or
                with the skeleton
        """
        heads = self._prepare(heatmap, offsets, displacements_fwd, displacements_bwd)

        candidates = extract_sorted_candidates(heads.heatmap, heads.offsets, self.config)
        assembler = PoseAssembler(
            heads.heatmap,
            heads.offsets,
            heads.displacements_fwd,
            heads.displacements_bwd,
            self.config,
            self.skeleton,
        )
        poses = assembler.assemble(candidates)

        logger.debug("Decoded %d poses from %d candidates", len(poses), len(candidates))
        return poses

    def decode_heads(self, heads: PersonLabHeads) -> List[Pose]:
        """Decode a PersonLabHeads bundle"""
        return self.decode(
            heads.heatmap, heads.offsets, heads.displacements_fwd, heads.displacements_bwd
        )

    def decode_batch(
        self,
        heatmaps: Any,
        offsets: Any,
        displacements_fwd: Any,
        displacements_bwd: Any,
        show_progress: bool = False
    ) -> List[List[Pose]]:
        """
        Decode a batch of heads with shape (B, H, W, C)

        Args:
            heatmaps: (B, H, W, K)
            offsets: (B, H, W, 2K)
            displacements_fwd: (B, H, W, 2E)
            displacements_bwd: (B, H, W, 2E)
            show_progress: Show progress bar

        Returns:
            One pose list per batch item
        """
        tensors = [to_numpy(t) for t in (heatmaps, offsets, displacements_fwd, displacements_bwd)]
        for name, tensor in zip(("heatmaps", "offsets", "displacements_fwd", "displacements_bwd"), tensors):
            if tensor.ndim != 4:
                raise ShapeMismatchError(
                    f"{name} must be 4-D (batch, height, width, channels), got shape {tensor.shape}"
                )
        batch_sizes = {t.shape[0] for t in tensors}
        if len(batch_sizes) != 1:
            raise ShapeMismatchError(f"Batch sizes differ: {[t.shape[0] for t in tensors]}")

        # Validate every item before decoding any of them
        items = [self._prepare(*(t[i] for t in tensors)) for i in range(tensors[0].shape[0])]

        iterator = tqdm(items, desc="Decoding poses") if show_progress else items
        return [self.decode_heads(item) for item in iterator]

    def _prepare(self, heatmap, offsets, displacements_fwd, displacements_bwd) -> PersonLabHeads:
        """Convert to host arrays and check shapes against the skeleton"""
        named = {
            "heatmap": to_numpy(heatmap),
            "offsets": to_numpy(offsets),
            "displacements_fwd": to_numpy(displacements_fwd),
            "displacements_bwd": to_numpy(displacements_bwd),
        }

        for name, tensor in named.items():
            if tensor.ndim == 4 and tensor.shape[0] == 1:
                tensor = tensor[0]
                named[name] = tensor
            if tensor.ndim != 3:
                raise ShapeMismatchError(
                    f"{name} must be 3-D (height, width, channels), got shape {tensor.shape}"
                )

        spatial = {name: tensor.shape[:2] for name, tensor in named.items()}
        if len(set(spatial.values())) != 1:
            raise ShapeMismatchError(f"Spatial dimensions differ: {spatial}")
        if min(spatial["heatmap"]) == 0:
            raise ShapeMismatchError(f"Heatmap is empty: {spatial['heatmap']}")

        num_keypoints = self.skeleton.num_keypoints
        num_edges = self.skeleton.num_edges
        expected_channels = {
            "heatmap": num_keypoints,
            "offsets": 2 * num_keypoints,
            "displacements_fwd": 2 * num_edges,
            "displacements_bwd": 2 * num_edges,
        }
        for name, expected in expected_channels.items():
            actual = named[name].shape[2]
            if actual != expected:
                raise ShapeMismatchError(
                    f"{name} has {actual} channels, skeleton needs {expected}"
                )

        for name, tensor in named.items():
            if not np.isfinite(tensor).all():
                raise ValidationError(f"{name} contains NaN or infinite values")

        return PersonLabHeads(**named)
