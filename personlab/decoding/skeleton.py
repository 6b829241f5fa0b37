"""
Keypoint graph used to hop between joints while assembling a pose

Each skeleton edge owns one displacement channel (its position in the edge
list). Hopping from an edge's parent to its child reads the forward
displacement tensor; hopping child to parent reads the backward one.
"""

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import List, Sequence, Tuple

from ..core.constants import PERSONLAB_KEYPOINT_NAMES, PERSONLAB_DISPLACEMENT_EDGES
from ..core.exceptions import ValidationError


class KeypointIndex(IntEnum):
    """PersonLab joint types, numbered by heatmap channel"""
    NOSE = 0
    LEFT_EYE = 1
    RIGHT_EYE = 2
    LEFT_EAR = 3
    RIGHT_EAR = 4
    LEFT_SHOULDER = 5
    RIGHT_SHOULDER = 6
    LEFT_ELBOW = 7
    RIGHT_ELBOW = 8
    LEFT_WRIST = 9
    RIGHT_WRIST = 10
    LEFT_HIP = 11
    RIGHT_HIP = 12
    LEFT_KNEE = 13
    RIGHT_KNEE = 14
    LEFT_ANKLE = 15
    RIGHT_ANKLE = 16


class Direction(Enum):
    """Which displacement tensor a hop reads"""
    FORWARD = "fwd"
    BACKWARD = "bwd"


@dataclass(frozen=True)
class Edge:
    """One outgoing hop from a keypoint type"""
    target: int
    direction: Direction
    channel: int


class Skeleton:
    """
    Static adjacency table over keypoint types

    Args:
        keypoint_names: Keypoint names in heatmap channel order
        edges: (parent, child) index pairs in displacement channel order

    Raises:
        ValidationError: If an edge is a self-loop, repeats another edge,
            or references an unknown keypoint

    Example:
        >>> skeleton = Skeleton(['head', 'neck'], [(0, 1)])
        >>> skeleton.neighbors(1)
        (Edge(target=0, direction=<Direction.BACKWARD: 'bwd'>, channel=0),)
    """

    def __init__(self, keypoint_names: Sequence[str], edges: Sequence[Tuple[int, int]]):
        if not keypoint_names:
            raise ValidationError("Skeleton needs at least one keypoint")
        if len(set(keypoint_names)) != len(keypoint_names):
            raise ValidationError("Skeleton keypoint names must be unique")

        self.keypoint_names = tuple(keypoint_names)
        self.edges = tuple((int(p), int(c)) for p, c in edges)

        adjacency: List[List[Edge]] = [[] for _ in self.keypoint_names]
        seen = set()
        for channel, (parent, child) in enumerate(self.edges):
            for idx in (parent, child):
                if idx < 0 or idx >= self.num_keypoints:
                    raise ValidationError(
                        f"Edge {channel} references unknown keypoint {idx}"
                    )
            if parent == child:
                raise ValidationError(f"Edge {channel} is a self-loop on keypoint {parent}")
            pair = frozenset((parent, child))
            if pair in seen:
                raise ValidationError(f"Edge {channel} duplicates ({parent}, {child})")
            seen.add(pair)

            adjacency[parent].append(Edge(child, Direction.FORWARD, channel))
            adjacency[child].append(Edge(parent, Direction.BACKWARD, channel))

        self._adjacency = tuple(tuple(edges_out) for edges_out in adjacency)

    @property
    def num_keypoints(self) -> int:
        return len(self.keypoint_names)

    @property
    def num_edges(self) -> int:
        return len(self.edges)

    def neighbors(self, keypoint_index: int) -> Tuple[Edge, ...]:
        """Outgoing hops from a keypoint type"""
        return self._adjacency[keypoint_index]

    def name(self, keypoint_index: int) -> str:
        return self.keypoint_names[keypoint_index]

    def __repr__(self) -> str:
        return f"Skeleton(num_keypoints={self.num_keypoints}, num_edges={self.num_edges})"


PERSONLAB_SKELETON = Skeleton(PERSONLAB_KEYPOINT_NAMES, PERSONLAB_DISPLACEMENT_EDGES)
