"""
Data loading utilities for the PersonLab decoder

Unified interfaces for loading:
- Images (with OpenCV)
- Network head tensors stored as NPZ archives
- Error handling and validation
"""

import cv2
import numpy as np
from pathlib import Path
from typing import Tuple

from ..core.constants import HEADS_KEYS
from ..core.exceptions import ImageLoadError, DataLoadError
from ..decoding.decoder import PersonLabHeads


class ImageLoader:
    """Image loading with error handling"""

    @staticmethod
    def load(image_path: str, color_space: str = 'bgr') -> np.ndarray:
        """
        Load a single image with error handling

        Args:
            image_path: Path to image file
            color_space: 'bgr' (default, OpenCV) or 'rgb'

        Returns:
            Image array (H, W, 3)

        Raises:
            ImageLoadError: If image cannot be loaded
        """
        path = Path(image_path)

        if not path.exists():
            raise ImageLoadError(f"Image file not found: {image_path}")

        image = cv2.imread(str(path))

        if image is None:
            raise ImageLoadError(
                f"Failed to read image (corrupted or unsupported format): {image_path}"
            )

        if color_space.lower() == 'rgb':
            image = cv2.cvtColor(image, cv2.COLOR_BGR2RGB)

        return image

    @staticmethod
    def get_size(image_path: str) -> Tuple[int, int]:
        """
        Get image dimensions

        Returns:
            (height, width) tuple

        Raises:
            ImageLoadError: If image cannot be read
        """
        return ImageLoader.load(image_path).shape[:2]

    @staticmethod
    def save(image_path: str, image: np.ndarray) -> None:
        """
        Write an image, creating parent directories

        Raises:
            ImageLoadError: If OpenCV cannot encode the image
        """
        path = Path(image_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        if not cv2.imwrite(str(path), image):
            raise ImageLoadError(f"Failed to write image: {image_path}")


class HeadsLoader:
    """
    NPZ storage for PersonLab network heads

    Archives hold the arrays 'heatmap', 'offsets', 'displacements_fwd' and
    'displacements_bwd', either (H, W, C) or batched (B, H, W, C).
    """

    @staticmethod
    def load(npz_path: str, batch_index: int = 0) -> PersonLabHeads:
        """
        Load head tensors for one image

        Args:
            npz_path: Path to NPZ archive
            batch_index: Item to take when arrays carry a batch axis

        Returns:
            PersonLabHeads with (H, W, C) float64 arrays

        Raises:
            DataLoadError: If the archive is missing, unreadable or incomplete

        Example:
            >>> from personlab.io import HeadsLoader
            >>> heads = HeadsLoader.load("frame_0001.npz")
            >>> heads.heatmap.shape
            (16, 19, 17)
        """
        npz_path = Path(npz_path)

        if not npz_path.exists():
            raise DataLoadError(f"NPZ file not found: {npz_path}")

        try:
            with np.load(npz_path) as data:
                arrays = {key: data[key] for key in data.files}
        except (OSError, ValueError) as e:
            raise DataLoadError(f"Failed to load NPZ file {npz_path}: {e}")

        missing = [key for key in HEADS_KEYS if key not in arrays]
        if missing:
            raise DataLoadError(f"NPZ file {npz_path} is missing arrays: {missing}")

        heads = {}
        for key in HEADS_KEYS:
            array = arrays[key]
            if array.ndim == 4:
                if not 0 <= batch_index < array.shape[0]:
                    raise DataLoadError(
                        f"batch_index {batch_index} out of range for '{key}' "
                        f"with batch size {array.shape[0]}"
                    )
                array = array[batch_index]
            heads[key] = array.astype(np.float64)

        return PersonLabHeads(**heads)

    @staticmethod
    def save(npz_path: str, heads: PersonLabHeads) -> None:
        """
        Save head tensors as a compressed NPZ archive

        Args:
            npz_path: Output path
            heads: Heads to store
        """
        npz_path = Path(npz_path)
        npz_path.parent.mkdir(parents=True, exist_ok=True)
        np.savez_compressed(npz_path, **{key: getattr(heads, key) for key in HEADS_KEYS})
