from __future__ import annotations

from typing import List, Sequence, Tuple

import cv2
import numpy as np

from .types import DEFAULT_FINGERTIPS, HandDetection
from .utils import to_pixel_near_canvas


HAND_CONNECTIONS: List[Tuple[int, int]] = [
    # thumb
    (0, 1),
    (1, 2),
    (2, 3),
    (3, 4),
    # index
    (0, 5),
    (5, 6),
    (6, 7),
    (7, 8),
    # middle
    (5, 9),
    (9, 10),
    (10, 11),
    (11, 12),
    # ring
    (9, 13),
    (13, 14),
    (14, 15),
    (15, 16),
    # pinky
    (13, 17),
    (17, 18),
    (18, 19),
    (19, 20),
    # palm base
    (0, 17),
]


def overlay_mask(image: np.ndarray, mask: np.ndarray, color=(255, 0, 255), alpha: float = 0.5) -> np.ndarray:
    """Return a copy of a BGR image with opaque mask pixels tinted by `color`."""
    if image.shape[:2] != mask.shape[:2]:
        raise ValueError(f"Image {image.shape[:2]} and mask {mask.shape[:2]} sizes differ")
    alpha = max(0.0, min(1.0, alpha))

    out = image.copy()
    sel = mask[..., 3] > 0
    tint = np.array(color, dtype=np.float32)
    out[sel] = ((1.0 - alpha) * out[sel].astype(np.float32) + alpha * tint).round().astype(np.uint8)
    return out


def draw_hands(image: np.ndarray, hands: Sequence[HandDetection], fingertips: Sequence[int] = DEFAULT_FINGERTIPS):
    h, w = image.shape[:2]
    for hand in hands:
        # Points that are not finite or far off the image are left out.
        pts = [to_pixel_near_canvas(lm.x, lm.y, w, h, margin=max(w, h)) for lm in hand.landmarks]
        for a, b in HAND_CONNECTIONS:
            if pts[a] is not None and pts[b] is not None:
                cv2.line(image, pts[a], pts[b], (0, 255, 255), 2, cv2.LINE_AA)
        for pt in pts:
            if pt is not None:
                cv2.circle(image, pt, 3, (40, 255, 120), -1, lineType=cv2.LINE_AA)
        for idx in fingertips:
            if pts[idx] is not None:
                cv2.circle(image, pts[idx], 6, (255, 0, 0), 2, lineType=cv2.LINE_AA)
    return image
