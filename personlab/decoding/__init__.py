"""
Decoding module - PersonLab heads to multi-person poses

Provides:
- Pose decoder and batch decoding
- Root candidate extraction
- Greedy pose assembly and scoring
- Keypoint skeleton definitions
"""

from .decoder import PoseDecoder, PersonLabHeads, to_numpy
from .extractor import extract_sorted_candidates, local_maximum_mask
from .assembler import PoseAssembler
from .scorer import score_pose
from .pose import Keypoint, Pose
from .skeleton import KeypointIndex, Direction, Edge, Skeleton, PERSONLAB_SKELETON

__all__ = [
    # Decoder
    "PoseDecoder",
    "PersonLabHeads",
    "to_numpy",
    # Pipeline stages
    "extract_sorted_candidates",
    "local_maximum_mask",
    "PoseAssembler",
    "score_pose",
    # Data types
    "Keypoint",
    "Pose",
    # Skeleton
    "KeypointIndex",
    "Direction",
    "Edge",
    "Skeleton",
    "PERSONLAB_SKELETON",
]
