from __future__ import annotations

import argparse
import logging
from typing import List, Optional

import cv2

from .canvas import decode_image
from .config import MaskConfig
from .detector import HandLandmarkSource
from .drawing import draw_hands, overlay_mask
from .errors import NailMaskError
from .pipeline import build_nail_mask
from .rasterizer import mask_coverage
from .types import ALL_FINGERTIPS, DEFAULT_FINGERTIPS
from .utils import parse_fingertips


logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="nailmask", description="Generate a nail inpainting mask from a hand photo.")
    ap.add_argument("--image", required=True, help="Path to input image")
    ap.add_argument("--out", required=True, help="Path to output mask (PNG)")
    ap.add_argument("--overlay", help="Optional path for an annotated canvas image")
    ap.add_argument("--canvas-size", type=int, default=512, help="Square canvas size in pixels (default: 512)")
    ap.add_argument("--radius", type=int, default=10, help="Nail disc radius in pixels (default: 10)")
    ap.add_argument(
        "--fingers",
        default=None,
        help="Comma-separated fingers or landmark indices (default: index,middle,ring,pinky)",
    )
    ap.add_argument("--include-thumb", action="store_true", help="Mask all five fingertips")
    ap.add_argument("--max-hands", type=int, default=2, help="Maximum number of hands to detect")
    ap.add_argument("--model-path", default="models/hand_landmarker.task", help="MediaPipe Tasks model path")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return ap


def config_from_args(args: argparse.Namespace) -> MaskConfig:
    if args.fingers:
        fingertips = parse_fingertips(args.fingers)
    else:
        fingertips = DEFAULT_FINGERTIPS
    if args.include_thumb:
        fingertips = parse_fingertips(list(fingertips) + list(ALL_FINGERTIPS))

    return MaskConfig(
        canvas_width=args.canvas_size,
        canvas_height=args.canvas_size,
        radius=args.radius,
        fingertips=fingertips,
        max_num_hands=args.max_hands,
        tasks_model_path=args.model_path,
    )


def main(argv: Optional[List[str]] = None) -> int:
    ap = build_parser()
    args = ap.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format="[%(levelname)s] %(message)s")

    try:
        config = config_from_args(args)
    except ValueError as e:
        ap.error(str(e))

    with open(args.image, "rb") as f:
        image_bytes = f.read()

    try:
        with HandLandmarkSource(
            max_num_hands=config.max_num_hands,
            min_detection_confidence=config.min_detection_confidence,
            tasks_model_path=config.tasks_model_path,
        ) as source:
            result = build_nail_mask(image_bytes, source, config)
    except NailMaskError as e:
        logger.error("%s: %s", type(e).__name__, e)
        return 1

    with open(args.out, "wb") as f:
        f.write(result.mask_png)

    if args.overlay:
        canvas = overlay_mask(decode_image(result.canvas_bytes), result.mask)
        canvas = draw_hands(canvas, result.hands, config.fingertips)
        if not cv2.imwrite(args.overlay, canvas):
            raise RuntimeError(f"Could not write overlay image: {args.overlay}")

    print(f"hands: {len(result.hands)}")
    for i, h in enumerate(result.hands):
        print(f"[{i}] {h.handedness_label} score={h.handedness_score}")
    print(f"mask: {args.out} ({mask_coverage(result.mask)} opaque px)")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
