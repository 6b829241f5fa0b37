"""
Root keypoint candidates from the heatmap

A pixel becomes a candidate when its score reaches the keypoint threshold and
no pixel of the same channel inside the (2r+1) x (2r+1) window is strictly
greater. Ties are kept, so flat plateaus yield several candidates.
"""

import logging
from typing import List

import numpy as np
from scipy.ndimage import maximum_filter

from ..core.config import DecoderConfig
from .pose import Keypoint

logger = logging.getLogger(__name__)


def local_maximum_mask(heatmap: np.ndarray, radius: int) -> np.ndarray:
    """
    Boolean mask of pixels with no strictly greater neighbor in their window

    The window is clamped to the heatmap bounds and never spans channels.

    Args:
        heatmap: (H, W, K) score array
        radius: Window radius in heatmap cells

    Returns:
        (H, W, K) boolean array
    """
    size = (2 * radius + 1, 2 * radius + 1, 1)
    window_max = maximum_filter(heatmap, size=size, mode='constant', cval=-np.inf)
    return heatmap >= window_max


def extract_sorted_candidates(
    heatmap: np.ndarray,
    offsets: np.ndarray,
    config: DecoderConfig
) -> List[Keypoint]:
    """
    Find locally maximal keypoints and sort them by descending score

    Args:
        heatmap: (H, W, K) keypoint confidence
        offsets: (H, W, 2K) sub-pixel offsets, y channels first then x
        config: Decoder configuration

    Returns:
        Keypoints in image coordinates, highest score first. Equal scores keep
        row-major (y, x, k) scan order.
    """
    num_keypoints = heatmap.shape[2]
    stride = config.output_stride

    mask = heatmap >= config.keypoint_score_threshold
    mask &= local_maximum_mask(heatmap, config.keypoint_local_maximum_radius)

    candidates = []
    for y, x, k in zip(*np.nonzero(mask)):
        candidates.append(Keypoint(
            index=int(k),
            y=float(y * stride + offsets[y, x, k]),
            x=float(x * stride + offsets[y, x, k + num_keypoints]),
            score=float(heatmap[y, x, k]),
        ))

    candidates.sort(key=lambda kp: kp.score, reverse=True)
    logger.debug("Extracted %d candidate keypoints", len(candidates))
    return candidates
