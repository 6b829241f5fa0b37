"""
Visualization module - Rendering decoded poses

Provides:
- Skeleton visualization
- Color management
- Text labels
"""

from .drawer import (
    generate_pose_color,
    draw_pose,
    draw_poses,
    add_text_label,
)

__all__ = [
    "generate_pose_color",
    "draw_pose",
    "draw_poses",
    "add_text_label",
]
