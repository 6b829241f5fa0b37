"""
Tests for heads NPZ storage, pose CSV files and image loading
"""

import numpy as np
import pytest


def make_pose(num_keypoints=17):
    from personlab.decoding.pose import Keypoint, Pose

    pose = Pose(num_keypoints, (241, 289))
    pose.add(Keypoint(index=0, y=10.0, x=20.0, score=0.9))
    pose.add(Keypoint(index=5, y=40.5, x=15.25, score=0.6))
    pose.finalize(0.3)
    return pose


def test_heads_save_and_load(tmp_path):
    from personlab.decoding import PersonLabHeads
    from personlab.io import HeadsLoader

    rng = np.random.default_rng(0)
    heads = PersonLabHeads(
        heatmap=rng.random((4, 5, 17)).astype(np.float32),
        offsets=rng.random((4, 5, 34)).astype(np.float32),
        displacements_fwd=rng.random((4, 5, 32)).astype(np.float32),
        displacements_bwd=rng.random((4, 5, 32)).astype(np.float32),
    )
    npz_path = tmp_path / "heads" / "frame_0001.npz"
    HeadsLoader.save(str(npz_path), heads)

    loaded = HeadsLoader.load(str(npz_path))
    assert loaded.heatmap.dtype == np.float64
    np.testing.assert_allclose(loaded.heatmap, heads.heatmap)
    np.testing.assert_allclose(loaded.displacements_bwd, heads.displacements_bwd)


def test_heads_load_batched(tmp_path):
    from personlab.core.exceptions import DataLoadError
    from personlab.io import HeadsLoader

    heatmap = np.zeros((2, 3, 3, 17))
    heatmap[1, 1, 1, 0] = 0.9
    npz_path = tmp_path / "batched.npz"
    np.savez(
        npz_path,
        heatmap=heatmap,
        offsets=np.zeros((2, 3, 3, 34)),
        displacements_fwd=np.zeros((2, 3, 3, 32)),
        displacements_bwd=np.zeros((2, 3, 3, 32)),
    )

    heads = HeadsLoader.load(str(npz_path), batch_index=1)
    assert heads.heatmap.shape == (3, 3, 17)
    assert heads.heatmap[1, 1, 0] == 0.9

    with pytest.raises(DataLoadError):
        HeadsLoader.load(str(npz_path), batch_index=2)


def test_heads_load_errors(tmp_path):
    from personlab.core.exceptions import DataLoadError
    from personlab.io import HeadsLoader

    with pytest.raises(DataLoadError):
        HeadsLoader.load(str(tmp_path / "missing.npz"))

    incomplete = tmp_path / "incomplete.npz"
    np.savez(incomplete, heatmap=np.zeros((3, 3, 17)))
    with pytest.raises(DataLoadError, match="missing arrays"):
        HeadsLoader.load(str(incomplete))


def test_pose_csv_write_and_read(tmp_path):
    from personlab.core.constants import PERSONLAB_KEYPOINT_NAMES
    from personlab.io import CSVReader, CSVWriter, PoseRow, pose_csv_columns

    rows = [
        PoseRow.from_pose("img1.jpg", 0, make_pose()),
        PoseRow.from_pose("img1.jpg", 1, make_pose()),
        PoseRow.from_pose("img2.jpg", 0, make_pose()),
    ]
    csv_path = tmp_path / "out" / "poses.csv"
    CSVWriter.write_poses(str(csv_path), rows)

    header = csv_path.read_text().splitlines()[0].split(",")
    assert header == pose_csv_columns()
    assert len(header) == 3 + 3 * len(PERSONLAB_KEYPOINT_NAMES)

    by_image = CSVReader.read_poses(str(csv_path))
    assert sorted(by_image) == ["img1.jpg", "img2.jpg"]
    assert [row.pose_id for row in by_image["img1.jpg"]] == [0, 1]

    row = by_image["img2.jpg"][0]
    assert row.score == pytest.approx(0.3)
    assert row.keypoints["nose"] == {"x": 20.0, "y": 10.0, "conf": 0.9}
    assert row.keypoints["left_shoulder"] == {"x": 15.25, "y": 40.5, "conf": 0.6}
    assert row.keypoints["right_ankle"] == {"x": 0.0, "y": 0.0, "conf": 0.0}


def test_pose_csv_empty_and_custom_names(tmp_path):
    from personlab.io import CSVReader, CSVWriter, PoseRow

    empty_path = tmp_path / "empty.csv"
    CSVWriter.write_poses(str(empty_path), [])
    assert CSVReader.read_poses(str(empty_path)) == {}

    names = ["head", "tail"]
    custom_path = tmp_path / "custom.csv"
    CSVWriter.write_poses(str(custom_path), [PoseRow.from_pose("a.png", 0, make_pose(6), names)], names)
    row = CSVReader.read_poses(str(custom_path), names)["a.png"][0]
    assert row.keypoints["head"]["conf"] == 0.9
    assert row.keypoints["tail"]["conf"] == 0.0


def test_pose_csv_read_errors(tmp_path):
    from personlab.core.exceptions import DataLoadError
    from personlab.io import CSVReader

    with pytest.raises(DataLoadError):
        CSVReader.read_poses(str(tmp_path / "missing.csv"))

    broken = tmp_path / "broken.csv"
    broken.write_text("image_name,pose_id,score\nimg.jpg,not_a_number,0.5\n")
    with pytest.raises(DataLoadError):
        CSVReader.read_poses(str(broken))


def test_image_loader(tmp_path):
    from personlab.core.exceptions import ImageLoadError
    from personlab.io import ImageLoader

    image = np.zeros((20, 30, 3), dtype=np.uint8)
    image[5, 7] = (255, 0, 0)
    image_path = tmp_path / "frames" / "frame.png"
    ImageLoader.save(str(image_path), image)

    loaded = ImageLoader.load(str(image_path))
    assert loaded.shape == (20, 30, 3)
    assert tuple(loaded[5, 7]) == (255, 0, 0)
    assert tuple(ImageLoader.load(str(image_path), color_space="rgb")[5, 7]) == (0, 0, 255)
    assert ImageLoader.get_size(str(image_path)) == (20, 30)

    with pytest.raises(ImageLoadError):
        ImageLoader.load(str(tmp_path / "missing.png"))

    not_an_image = tmp_path / "fake.png"
    not_an_image.write_text("dummy")
    with pytest.raises(ImageLoadError):
        ImageLoader.load(str(not_an_image))
