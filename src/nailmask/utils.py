from __future__ import annotations

import math
import numbers
from typing import Iterable, Optional, Tuple, Union

from .types import FINGERTIP_INDICES, NUM_HAND_LANDMARKS


def to_pixel(x_norm: float, y_norm: float, width: int, height: int) -> Tuple[int, int]:
    """
    Denormalize a landmark to canvas pixels.

    Uses the built-in `round` (round-half-to-even) for both axes, so a
    coordinate that lands exactly on .5 goes to the even pixel.
    """
    return int(round(x_norm * width)), int(round(y_norm * height))


def to_pixel_near_canvas(
    x_norm: float, y_norm: float, width: int, height: int, margin: int = 0
) -> Optional[Tuple[int, int]]:
    """
    Like `to_pixel`, but None for points that cannot reach the canvas.

    A point is dropped when its scaled position is not finite or lies more
    than `margin` pixels outside `[0, width) x [0, height)`.
    """
    fx = x_norm * width
    fy = y_norm * height
    if not (math.isfinite(fx) and math.isfinite(fy)):
        return None
    if fx < -margin - 1 or fx > width + margin or fy < -margin - 1 or fy > height + margin:
        return None
    return int(round(fx)), int(round(fy))


def parse_fingertips(selection: Union[str, Iterable[Union[str, int]]]) -> Tuple[int, ...]:
    """
    Parse a fingertip selection given as names and/or landmark indices.

    Accepts "index,middle", "8,12" or an iterable such as ["thumb", 8].
    Order is preserved and duplicates are dropped.
    """
    if isinstance(selection, str):
        items = [s.strip() for s in selection.split(",") if s.strip()]
    else:
        items = list(selection)

    out = []
    for item in items:
        if isinstance(item, numbers.Integral):
            idx = int(item)
        elif item.lower() in FINGERTIP_INDICES:
            idx = FINGERTIP_INDICES[item.lower()]
        elif item.lstrip("-").isdigit():
            idx = int(item)
        else:
            raise ValueError(f"Unknown finger '{item}'. Available: {list(FINGERTIP_INDICES.keys())}")
        if not (0 <= idx < NUM_HAND_LANDMARKS):
            raise ValueError(f"Landmark index {idx} out of range 0..{NUM_HAND_LANDMARKS - 1}")
        if idx not in out:
            out.append(idx)
    if not out:
        raise ValueError("Fingertip selection is empty")
    return tuple(out)
