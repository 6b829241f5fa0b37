"""
IO module - Data loading and saving utilities

Provides unified interfaces for:
- Image loading with error handling
- NPZ storage of network heads
- CSV reading/writing of decoded poses
"""

from .data_loader import ImageLoader, HeadsLoader
from .csv_handler import (
    CSVWriter,
    CSVReader,
    PoseRow,
    pose_csv_columns,
)

__all__ = [
    "ImageLoader",
    "HeadsLoader",
    "CSVWriter",
    "CSVReader",
    "PoseRow",
    "pose_csv_columns",
]
