"""
Command line entry points

Usage:
  # Decode heads and write poses to CSV
  personlab-decode heads.npz --output poses.csv

  # Also render the poses over the source image
  personlab-decode heads.npz --config decoder.yaml \
    --image frame.jpg --overlay frame_poses.jpg
"""

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from .core.config import PersonLabConfig
from .core.exceptions import PersonLabException, handle_personlab_exception
from .decoding import PoseDecoder
from .io import CSVWriter, HeadsLoader, ImageLoader, PoseRow
from .visualization import add_text_label, draw_poses

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='personlab-decode',
        description='Decode multi-person poses from PersonLab network heads'
    )
    parser.add_argument('heads', type=str,
                        help='NPZ archive with heatmap, offsets, displacements_fwd, displacements_bwd')
    parser.add_argument('--config', type=str, default=None,
                        help='YAML config file (default: built-in defaults)')
    parser.add_argument('--batch_index', type=int, default=0,
                        help='Batch item to decode when the heads are batched')
    parser.add_argument('--output', type=str, default=None,
                        help='Output CSV path')
    parser.add_argument('--image', type=str, default=None,
                        help='Source image for the overlay')
    parser.add_argument('--overlay', type=str, default=None,
                        help='Output path for the pose overlay (requires --image)')
    parser.add_argument('--verbose', action='store_true',
                        help='Enable debug logging')
    return parser


def decode_main(argv: Optional[List[str]] = None) -> int:
    """Entry point for personlab-decode"""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s'
    )

    if args.overlay and not args.image:
        logger.error("--overlay requires --image")
        return 2

    try:
        config = PersonLabConfig.from_yaml(args.config) if args.config else PersonLabConfig()
        config = PersonLabConfig.from_env(config)
        logger.debug("Configuration:\n%s", config)

        heads = HeadsLoader.load(args.heads, batch_index=args.batch_index)
        decoder = PoseDecoder(config.decoder)
        poses = decoder.decode_heads(heads)
        logger.info(f"Decoded {len(poses)} poses from {args.heads}")

        image_name = Path(args.image).name if args.image else Path(args.heads).stem

        if args.output:
            rows = [
                PoseRow.from_pose(image_name, pose_id, pose, decoder.skeleton.keypoint_names)
                for pose_id, pose in enumerate(poses)
            ]
            CSVWriter.write_poses(args.output, rows, decoder.skeleton.keypoint_names)
            logger.info(f"Wrote {len(rows)} poses to {args.output}")

        if args.overlay:
            image = ImageLoader.load(args.image)
            height, width = image.shape[:2]
            rescaled = [pose.rescale(height, width) for pose in poses]
            image = draw_poses(image, rescaled, decoder.skeleton, config.draw)
            image = add_text_label(image, f"{len(poses)} poses")
            ImageLoader.save(args.overlay, image)
            logger.info(f"Saved overlay to {args.overlay}")

    except PersonLabException as e:
        logger.error(handle_personlab_exception(e, verbose=False))
        return 1
    except FileNotFoundError as e:
        logger.error(str(e))
        return 1

    return 0


if __name__ == '__main__':
    raise SystemExit(decode_main())
