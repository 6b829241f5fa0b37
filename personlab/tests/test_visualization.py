"""
Tests for pose drawing
"""

import numpy as np


def test_generate_pose_color_cycles():
    from personlab.core.constants import POSE_COLORS
    from personlab.visualization import generate_pose_color

    assert generate_pose_color(0) == (0, 0, 255)
    assert generate_pose_color(1) == (255, 0, 0)
    assert generate_pose_color(len(POSE_COLORS)) == generate_pose_color(0)


def test_draw_pose_marks_joints_and_edges():
    from personlab.decoding import Keypoint, Pose, Skeleton
    from personlab.visualization import draw_pose

    skeleton = Skeleton(["a", "b", "c"], [(0, 1), (1, 2)])
    pose = Pose(3, (50, 50))
    pose.add(Keypoint(index=0, y=10.0, x=10.0, score=1.0))
    pose.add(Keypoint(index=1, y=10.0, x=40.0, score=1.0))
    pose.add(Keypoint(index=2, y=40.0, x=40.0, score=0.05))

    image = np.zeros((50, 50, 3), dtype=np.uint8)
    draw_pose(image, pose, (0, 255, 0), skeleton=skeleton, conf_threshold=0.1)

    # Edge a-b is drawn, edge b-c is skipped because c is below threshold
    assert image[10, 25].any()
    assert not image[25, 40].any()
    assert not image[40, 40].any()


def test_draw_poses_uses_config():
    from personlab.core.config import DrawConfig
    from personlab.decoding import Keypoint, Pose, Skeleton
    from personlab.visualization import add_text_label, draw_poses

    skeleton = Skeleton(["a"], [])
    poses = []
    for pose_id, x in enumerate((10.0, 30.0)):
        pose = Pose(1, (40, 40))
        pose.add(Keypoint(index=0, y=20.0, x=x, score=1.0))
        poses.append(pose)

    image = np.zeros((40, 40, 3), dtype=np.uint8)
    image = draw_poses(image, poses, skeleton, DrawConfig(point_radius=3))

    assert tuple(image[20, 10]) == (0, 0, 255)
    assert tuple(image[20, 30]) == (255, 0, 0)

    labeled = add_text_label(image.copy(), "2 poses")
    assert labeled.shape == image.shape
    assert (labeled != image).any()
