from __future__ import annotations

import logging
from typing import Iterable, Sequence, Tuple

import numpy as np

from .types import DEFAULT_FINGERTIPS, NUM_HAND_LANDMARKS, HandDetection
from .utils import to_pixel_near_canvas


logger = logging.getLogger(__name__)

MASK_CHANNELS = 4
OPAQUE_WHITE = 255


def new_mask_buffer(width: int, height: int) -> np.ndarray:
    """
    Allocate a fully transparent RGBA mask.

    The array is C-contiguous with shape (height, width, 4), so the flat
    index of pixel (x, y) channel c is `(y * width + x) * 4 + c`.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Canvas size must be positive, got {width}x{height}")
    return np.zeros((height, width, MASK_CHANNELS), dtype=np.uint8)


def disc_offsets(radius: int) -> Tuple[np.ndarray, np.ndarray]:
    """Integer (dx, dy) offsets with dx, dy in [-r, r] and dx^2 + dy^2 <= r^2."""
    if radius < 0:
        raise ValueError(f"radius must be >= 0, got {radius}")
    r = np.arange(-radius, radius + 1)
    dy, dx = np.meshgrid(r, r, indexing="ij")
    keep = dx * dx + dy * dy <= radius * radius
    return dx[keep], dy[keep]


def paint_disc(mask: np.ndarray, cx: int, cy: int, radius: int) -> int:
    """
    Paint an opaque white disc centered at (cx, cy).

    Pixels falling outside the canvas are skipped. Returns the number of
    pixels written.
    """
    h, w = mask.shape[:2]
    dx, dy = disc_offsets(radius)
    xs = cx + dx
    ys = cy + dy
    inside = (xs >= 0) & (xs < w) & (ys >= 0) & (ys < h)
    mask[ys[inside], xs[inside]] = OPAQUE_WHITE
    return int(np.count_nonzero(inside))


def mask_coverage(mask: np.ndarray) -> int:
    """Number of fully opaque pixels in a mask."""
    return int(np.count_nonzero(mask[..., MASK_CHANNELS - 1] == OPAQUE_WHITE))


def _check_fingertips(fingertips: Iterable[int]) -> Tuple[int, ...]:
    tips = tuple(int(i) for i in fingertips)
    for i in tips:
        if not (0 <= i < NUM_HAND_LANDMARKS):
            raise ValueError(f"Fingertip index {i} out of range 0..{NUM_HAND_LANDMARKS - 1}")
    return tips


def rasterize_nail_mask(
    hands: Sequence[HandDetection],
    width: int = 512,
    height: int = 512,
    fingertips: Sequence[int] = DEFAULT_FINGERTIPS,
    radius: int = 10,
) -> np.ndarray:
    """
    Build an RGBA nail mask from detected hands.

    Every selected fingertip of every hand gets a filled disc of `radius`
    pixels; overlapping discs stay plain opaque white. No hands yields an
    all-transparent mask.
    """
    tips = _check_fingertips(fingertips)
    if radius < 0:
        raise ValueError(f"radius must be >= 0, got {radius}")

    mask = new_mask_buffer(width, height)
    for hand_idx, hand in enumerate(hands):
        for lm in hand.fingertips(tips):
            pt = to_pixel_near_canvas(lm.x, lm.y, width, height, margin=radius)
            if pt is None:
                logger.debug("hand %d: landmark %d cannot reach the canvas, skipped", hand_idx, lm.idx)
                continue
            px, py = pt
            written = paint_disc(mask, px, py, radius)
            logger.debug("hand %d: landmark %d at (%d, %d), %d px painted", hand_idx, lm.idx, px, py, written)

    return mask
