from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

import numpy as np

from .canvas import resize_cover
from .config import MaskConfig
from .detector import HandLandmarkSource, LandmarkSource
from .encoder import encode_mask_png
from .rasterizer import MASK_CHANNELS, mask_coverage, rasterize_nail_mask
from .types import HandDetection


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NailMaskResult:
    """Everything produced while generating one nail mask."""

    canvas_bytes: bytes  # source image resized to the canvas
    hands: List[HandDetection]
    mask: np.ndarray  # (H, W, 4) uint8
    mask_png: bytes


def build_nail_mask(
    image_bytes: bytes,
    landmark_source: LandmarkSource,
    config: Optional[MaskConfig] = None,
) -> NailMaskResult:
    config = config or MaskConfig()
    w, h = config.canvas_width, config.canvas_height

    canvas_bytes = resize_cover(
        image_bytes, w, h, ext=config.canvas_ext, jpeg_quality=config.canvas_jpeg_quality
    )
    hands = list(landmark_source.detect_hands(canvas_bytes))
    if not hands:
        logger.warning("No hands detected, returning an empty mask")

    mask = rasterize_nail_mask(hands, w, h, fingertips=config.fingertips, radius=config.radius)
    logger.info("nail mask: %d hand(s), %d opaque px", len(hands), mask_coverage(mask))

    mask_png = encode_mask_png(mask, w, h, MASK_CHANNELS)
    return NailMaskResult(canvas_bytes=canvas_bytes, hands=hands, mask=mask, mask_png=mask_png)


def generate_nail_mask(
    image_bytes: bytes,
    landmark_source: Optional[LandmarkSource] = None,
    config: Optional[MaskConfig] = None,
) -> bytes:
    """
    Turn a hand photo into a PNG mask with the nails opaque white.

    When no landmark source is given, a MediaPipe one is created from
    `config` for this call and closed afterwards. Errors from decoding,
    detection and encoding propagate unchanged.
    """
    config = config or MaskConfig()
    if landmark_source is not None:
        return build_nail_mask(image_bytes, landmark_source, config).mask_png

    with HandLandmarkSource(
        max_num_hands=config.max_num_hands,
        min_detection_confidence=config.min_detection_confidence,
        tasks_model_path=config.tasks_model_path,
    ) as source:
        return build_nail_mask(image_bytes, source, config).mask_png
