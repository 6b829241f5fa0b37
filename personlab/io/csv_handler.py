"""
CSV handling for decoded poses

Dataclass-based CSV I/O: one row per pose with
image_name, pose_id, score and <keypoint>_x/_y/_conf columns. Empty
keypoint slots are written as zeros.
"""

import csv
from pathlib import Path
from dataclasses import dataclass, field
from typing import Dict, List, Sequence
from collections import defaultdict

from ..core.constants import CSV_POSE_BASE_COLUMNS, PERSONLAB_KEYPOINT_NAMES
from ..core.exceptions import DataLoadError
from ..decoding.pose import Pose


def pose_csv_columns(keypoint_names: Sequence[str] = PERSONLAB_KEYPOINT_NAMES) -> List[str]:
    """Header row for a pose CSV"""
    return CSV_POSE_BASE_COLUMNS + [
        f'{kpt}_{coord}' for kpt in keypoint_names for coord in ['x', 'y', 'conf']
    ]


@dataclass
class PoseRow:
    """Dataclass for decoded pose rows"""
    image_name: str
    pose_id: int
    score: float
    keypoints: Dict[str, Dict[str, float]] = field(default_factory=dict)

    @classmethod
    def from_pose(
        cls,
        image_name: str,
        pose_id: int,
        pose: Pose,
        keypoint_names: Sequence[str] = PERSONLAB_KEYPOINT_NAMES
    ) -> "PoseRow":
        """Create row from a decoded pose"""
        row = cls(image_name=image_name, pose_id=pose_id, score=float(pose.score or 0.0))
        for name, (x, y, conf) in pose.to_dict(keypoint_names).items():
            row.keypoints[name] = {'x': x, 'y': y, 'conf': conf}
        return row

    @classmethod
    def from_dict(
        cls,
        d: Dict,
        keypoint_names: Sequence[str] = PERSONLAB_KEYPOINT_NAMES
    ) -> "PoseRow":
        """Create instance from dictionary"""
        row = cls(
            image_name=d['image_name'],
            pose_id=int(d['pose_id']),
            score=float(d['score']),
        )

        for kpt_name in keypoint_names:
            row.keypoints[kpt_name] = {
                'x': float(d.get(f'{kpt_name}_x', 0)),
                'y': float(d.get(f'{kpt_name}_y', 0)),
                'conf': float(d.get(f'{kpt_name}_conf', 0)),
            }

        return row

    def to_dict(self, keypoint_names: Sequence[str] = PERSONLAB_KEYPOINT_NAMES) -> Dict:
        """Convert to dictionary"""
        d = {
            'image_name': self.image_name,
            'pose_id': self.pose_id,
            'score': self.score,
        }

        for kpt_name in keypoint_names:
            kpt = self.keypoints.get(kpt_name, {'x': 0, 'y': 0, 'conf': 0})
            d[f'{kpt_name}_x'] = kpt['x']
            d[f'{kpt_name}_y'] = kpt['y']
            d[f'{kpt_name}_conf'] = kpt['conf']

        return d


class CSVWriter:
    """CSV writing for decoded poses"""

    @staticmethod
    def write_poses(
        output_path: str,
        poses: List[PoseRow],
        keypoint_names: Sequence[str] = PERSONLAB_KEYPOINT_NAMES
    ) -> None:
        """
        Write pose rows to CSV (header is always written)

        Args:
            output_path: Path to output CSV file
            poses: List of PoseRow instances
            keypoint_names: Keypoint column order

        Example:
            >>> from personlab.io import CSVWriter, PoseRow
            >>> rows = [PoseRow.from_pose('img1.jpg', i, p) for i, p in enumerate(poses)]
            >>> CSVWriter.write_poses('poses.csv', rows)
        """
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, 'w', newline='') as f:
            writer = csv.DictWriter(f, fieldnames=pose_csv_columns(keypoint_names))
            writer.writeheader()

            for pose in poses:
                writer.writerow(pose.to_dict(keypoint_names))


class CSVReader:
    """CSV reading for decoded poses"""

    @staticmethod
    def read_poses(
        csv_path: str,
        keypoint_names: Sequence[str] = PERSONLAB_KEYPOINT_NAMES
    ) -> Dict[str, List[PoseRow]]:
        """
        Read pose rows from CSV, grouped by image name

        Args:
            csv_path: Path to pose CSV file
            keypoint_names: Keypoint column order

        Returns:
            Dictionary mapping image_name to list of PoseRow

        Raises:
            DataLoadError: If CSV cannot be read
        """
        csv_path = Path(csv_path)

        if not csv_path.exists():
            raise DataLoadError(f"CSV file not found: {csv_path}")

        poses_by_image = defaultdict(list)

        try:
            with open(csv_path, 'r', newline='') as f:
                reader = csv.DictReader(f)

                for row in reader:
                    pose = PoseRow.from_dict(row, keypoint_names)
                    poses_by_image[pose.image_name].append(pose)

        except (KeyError, ValueError) as e:
            raise DataLoadError(f"Failed to read pose CSV {csv_path}: {e}")

        return dict(poses_by_image)
