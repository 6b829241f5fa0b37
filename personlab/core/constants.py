"""
Global constants for the PersonLab decoder

Includes:
- PersonLab keypoint definitions (COCO order)
- Displacement edge table
- Config defaults
- Color palettes
"""

# ===== PersonLab Keypoints (17 points, COCO order) =====
PERSONLAB_KEYPOINT_NAMES = [
    'nose',             # 0
    'left_eye',         # 1
    'right_eye',        # 2
    'left_ear',         # 3
    'right_ear',        # 4
    'left_shoulder',    # 5
    'right_shoulder',   # 6
    'left_elbow',       # 7
    'right_elbow',      # 8
    'left_wrist',       # 9
    'right_wrist',      # 10
    'left_hip',         # 11
    'right_hip',        # 12
    'left_knee',        # 13
    'right_knee',       # 14
    'left_ankle',       # 15
    'right_ankle',      # 16
]

# Displacement edges as (parent, child). List position is the displacement
# channel; moving parent -> child reads the forward tensor.
PERSONLAB_DISPLACEMENT_EDGES = [
    (0, 1),    # 0: nose -> left_eye
    (1, 3),    # 1: left_eye -> left_ear
    (0, 2),    # 2: nose -> right_eye
    (2, 4),    # 3: right_eye -> right_ear
    (0, 5),    # 4: nose -> left_shoulder
    (5, 7),    # 5: left_shoulder -> left_elbow
    (7, 9),    # 6: left_elbow -> left_wrist
    (5, 11),   # 7: left_shoulder -> left_hip
    (11, 13),  # 8: left_hip -> left_knee
    (13, 15),  # 9: left_knee -> left_ankle
    (0, 6),    # 10: nose -> right_shoulder
    (6, 8),    # 11: right_shoulder -> right_elbow
    (8, 10),   # 12: right_elbow -> right_wrist
    (6, 12),   # 13: right_shoulder -> right_hip
    (12, 14),  # 14: right_hip -> right_knee
    (14, 16),  # 15: right_knee -> right_ankle
]

# ===== Decoder Defaults =====
DEFAULT_OUTPUT_STRIDE = 16
DEFAULT_INPUT_IMAGE_SIZE = (241, 289)  # (height, width)
DEFAULT_KEYPOINT_LOCAL_MAXIMUM_RADIUS = 1
DEFAULT_KEYPOINT_SCORE_THRESHOLD = 0.1
DEFAULT_NMS_RADIUS = 20.0
DEFAULT_POSE_SCORE_THRESHOLD = 0.15

# ===== Head tensor keys (NPZ archives) =====
HEADS_KEYS = ['heatmap', 'offsets', 'displacements_fwd', 'displacements_bwd']

# ===== Color Palettes =====
# BGR format for OpenCV
POSE_COLORS = [
    (0, 0, 255),         # Red
    (255, 0, 0),         # Blue
    (0, 255, 0),         # Green
    (255, 255, 0),       # Cyan
    (255, 0, 255),       # Magenta
    (0, 255, 255),       # Yellow
    (255, 128, 0),       # Orange
    (128, 0, 255),       # Violet
    (0, 128, 255),       # Sky Blue
    (128, 255, 0),       # Chartreuse
]

# ===== CSV =====
CSV_POSE_BASE_COLUMNS = ['image_name', 'pose_id', 'score']
