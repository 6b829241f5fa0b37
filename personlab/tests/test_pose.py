"""
Tests for the skeleton table and the Keypoint/Pose containers
"""

import pytest


def test_personlab_skeleton_adjacency():
    """Default skeleton edges and directions"""
    from personlab.decoding.skeleton import PERSONLAB_SKELETON, Direction, KeypointIndex

    assert PERSONLAB_SKELETON.num_keypoints == 17
    assert PERSONLAB_SKELETON.num_edges == 16
    assert PERSONLAB_SKELETON.name(KeypointIndex.LEFT_KNEE) == "left_knee"

    nose_edges = PERSONLAB_SKELETON.neighbors(KeypointIndex.NOSE)
    assert {edge.target for edge in nose_edges} == {
        KeypointIndex.LEFT_EYE,
        KeypointIndex.RIGHT_EYE,
        KeypointIndex.LEFT_SHOULDER,
        KeypointIndex.RIGHT_SHOULDER,
    }
    assert all(edge.direction is Direction.FORWARD for edge in nose_edges)

    (ear_edge,) = PERSONLAB_SKELETON.neighbors(KeypointIndex.LEFT_EAR)
    assert ear_edge.target == KeypointIndex.LEFT_EYE
    assert ear_edge.direction is Direction.BACKWARD
    assert ear_edge.channel == 1

    shoulder_edges = {
        edge.target: edge for edge in PERSONLAB_SKELETON.neighbors(KeypointIndex.RIGHT_SHOULDER)
    }
    assert shoulder_edges[KeypointIndex.NOSE].direction is Direction.BACKWARD
    assert shoulder_edges[KeypointIndex.NOSE].channel == 10
    assert shoulder_edges[KeypointIndex.RIGHT_HIP].direction is Direction.FORWARD
    assert shoulder_edges[KeypointIndex.RIGHT_HIP].channel == 13


def test_personlab_skeleton_is_a_tree():
    """Every joint is reachable from the nose over exactly 16 edges"""
    from personlab.decoding.skeleton import PERSONLAB_SKELETON

    seen = {0}
    stack = [0]
    while stack:
        current = stack.pop()
        for edge in PERSONLAB_SKELETON.neighbors(current):
            if edge.target not in seen:
                seen.add(edge.target)
                stack.append(edge.target)

    assert seen == set(range(17))
    assert PERSONLAB_SKELETON.num_edges == PERSONLAB_SKELETON.num_keypoints - 1


@pytest.mark.parametrize("names, edges", [
    ([], []),
    (["a", "a"], []),
    (["a", "b"], [(0, 2)]),
    (["a", "b"], [(1, 1)]),
    (["a", "b"], [(0, 1), (1, 0)]),
])
def test_skeleton_rejects_invalid_definitions(names, edges):
    from personlab.core.exceptions import ValidationError
    from personlab.decoding.skeleton import Skeleton

    with pytest.raises(ValidationError):
        Skeleton(names, edges)


def test_pose_slots_fill_once():
    """A pose slot cannot be overwritten"""
    from personlab.core.exceptions import ValidationError
    from personlab.decoding.pose import Keypoint, Pose

    pose = Pose(3, (100, 100))
    pose.add(Keypoint(index=1, y=10.0, x=20.0, score=0.8))

    assert pose.has_keypoint(1)
    assert not pose.has_keypoint(0)
    assert list(pose.filled_keypoints()) == [1]

    with pytest.raises(ValidationError):
        pose.add(Keypoint(index=1, y=0.0, x=0.0, score=0.9))
    assert pose.get_keypoint(1).score == 0.8


def test_pose_finalize_freezes():
    from personlab.core.exceptions import ValidationError
    from personlab.decoding.pose import Keypoint, Pose

    pose = Pose(2, (100, 100))
    pose.add(Keypoint(index=0, y=1.0, x=1.0, score=0.5))
    pose.finalize(0.25)

    assert pose.is_finalized
    assert pose.score == 0.25
    with pytest.raises(ValidationError):
        pose.add(Keypoint(index=1, y=1.0, x=1.0, score=0.5))


def test_pose_rescale():
    """Rescaling maps coordinates into the new resolution"""
    from personlab.decoding.pose import Keypoint, Pose

    pose = Pose(2, (100, 200))
    pose.add(Keypoint(index=0, y=50.0, x=50.0, score=0.9))
    pose.finalize(0.45)

    rescaled = pose.rescale(200, 100)
    kp = rescaled.get_keypoint(0)
    assert (kp.y, kp.x, kp.score) == (100.0, 25.0, 0.9)
    assert rescaled.resolution == (200, 100)
    assert rescaled.score == 0.45
    assert rescaled.get_keypoint(1) is None
    # Original untouched
    assert pose.get_keypoint(0).y == 50.0


def test_pose_to_dict():
    from personlab.decoding.pose import Keypoint, Pose

    pose = Pose(2, (10, 10))
    pose.add(Keypoint(index=1, y=3.0, x=4.0, score=0.7))
    assert pose.to_dict(["head", "neck"]) == {"neck": (4.0, 3.0, 0.7)}


def test_keypoint_within_radius():
    """Radius check is inclusive and skips poses without that joint"""
    from personlab.decoding.pose import Keypoint, Pose

    other = Pose(2, (10, 10))
    other.add(Keypoint(index=0, y=0.0, x=0.0, score=0.9))
    empty = Pose(2, (10, 10))

    assert Keypoint(index=0, y=3.0, x=4.0, score=0.5).distance_to(other.get_keypoint(0)) == 5.0
    assert Keypoint(index=0, y=3.0, x=4.0, score=0.5).is_within_radius_of_corresponding_keypoints(
        [empty, other], radius=5.0
    )
    assert not Keypoint(index=0, y=3.0, x=4.0, score=0.5).is_within_radius_of_corresponding_keypoints(
        [other], radius=4.9
    )
    assert not Keypoint(index=1, y=0.0, x=0.0, score=0.5).is_within_radius_of_corresponding_keypoints(
        [other], radius=5.0
    )


def test_score_pose_ignores_overlapped_keypoints():
    """Overlapping and empty slots contribute zero"""
    from personlab.core.config import DecoderConfig
    from personlab.decoding.pose import Keypoint, Pose
    from personlab.decoding.scorer import score_pose

    config = DecoderConfig(nms_radius=2.0)

    accepted = Pose(4, (10, 10))
    accepted.add(Keypoint(index=0, y=0.0, x=0.0, score=0.9))

    pose = Pose(4, (10, 10))
    pose.add(Keypoint(index=0, y=1.0, x=1.0, score=0.8))   # overlapped
    pose.add(Keypoint(index=1, y=1.0, x=1.0, score=0.6))
    pose.add(Keypoint(index=2, y=5.0, x=5.0, score=0.2))

    assert score_pose(pose, [accepted], config) == pytest.approx((0.6 + 0.2) / 4)
    assert score_pose(pose, [], config) == pytest.approx((0.8 + 0.6 + 0.2) / 4)
