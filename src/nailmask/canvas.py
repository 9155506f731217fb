from __future__ import annotations

import logging
import math

import cv2
import numpy as np

from .errors import DecodeError, EncodeError


logger = logging.getLogger(__name__)


def decode_image(data: bytes) -> np.ndarray:
    """Decode encoded image bytes to a BGR array."""
    if not data:
        raise DecodeError("Empty image data")
    try:
        img = cv2.imdecode(np.frombuffer(data, dtype=np.uint8), cv2.IMREAD_COLOR)
    except cv2.error as e:
        raise DecodeError(f"Could not decode image: {e}") from e
    if img is None:
        raise DecodeError("Could not decode image: not a valid raster image")
    return img


def cover_resize(image: np.ndarray, width: int, height: int) -> np.ndarray:
    """
    Scale `image` to fill `width` x `height` and center-crop the overflow.

    Aspect ratio is preserved and nothing is letterboxed.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Target size must be positive, got {width}x{height}")

    h, w = image.shape[:2]
    scale = max(width / w, height / h)
    new_w = max(width, int(math.ceil(w * scale - 1e-6)))
    new_h = max(height, int(math.ceil(h * scale - 1e-6)))

    if (new_w, new_h) != (w, h):
        interp = cv2.INTER_AREA if scale < 1.0 else cv2.INTER_LINEAR
        image = cv2.resize(image, (new_w, new_h), interpolation=interp)

    x0 = (new_w - width) // 2
    y0 = (new_h - height) // 2
    logger.debug("cover resize %dx%d -> %dx%d, crop at (%d, %d)", w, h, new_w, new_h, x0, y0)
    return np.ascontiguousarray(image[y0 : y0 + height, x0 : x0 + width])


def resize_cover(data: bytes, width: int, height: int, *, ext: str = ".jpg", jpeg_quality: int = 80) -> bytes:
    """Decode, cover-resize to exactly `width` x `height` and re-encode."""
    resized = cover_resize(decode_image(data), width, height)

    params = []
    if ext.lower() in (".jpg", ".jpeg"):
        params = [int(cv2.IMWRITE_JPEG_QUALITY), int(jpeg_quality)]
    ok, enc = cv2.imencode(ext, resized, params)
    if not ok:
        raise EncodeError(f"Could not encode canvas image as {ext}")
    return enc.tobytes()
