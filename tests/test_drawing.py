from __future__ import annotations

import numpy as np
import pytest

from nailmask.drawing import draw_hands, overlay_mask
from nailmask.rasterizer import rasterize_nail_mask

from .conftest import make_hand


def test_overlay_tints_only_masked_pixels(center_hand):
    image = np.full((512, 512, 3), 100, dtype=np.uint8)
    mask = rasterize_nail_mask([center_hand], fingertips=(8,))

    out = overlay_mask(image, mask, color=(200, 0, 100), alpha=0.5)
    assert list(out[256, 256]) == [150, 50, 100]
    assert list(out[0, 0]) == [100, 100, 100]
    assert list(image[256, 256]) == [100, 100, 100]


def test_overlay_size_mismatch():
    with pytest.raises(ValueError):
        overlay_mask(np.zeros((10, 10, 3), np.uint8), np.zeros((12, 10, 4), np.uint8))


def test_draw_hands_marks_image():
    hand = make_hand({i: (0.2 + 0.03 * i, 0.5) for i in range(21)})
    image = np.zeros((256, 256, 3), dtype=np.uint8)
    out = draw_hands(image, [hand])
    assert out is image
    assert image.sum() > 0


def test_draw_hands_skips_unusable_points():
    points = {i: (0.2 + 0.03 * i, 0.5) for i in range(21)}
    points[8] = (float("nan"), 0.5)
    points[12] = (1e308, 0.5)
    image = np.zeros((256, 256, 3), dtype=np.uint8)
    draw_hands(image, [make_hand(points)])
    assert image.sum() > 0
