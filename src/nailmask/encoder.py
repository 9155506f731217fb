from __future__ import annotations

from typing import Union

import cv2
import numpy as np

from .errors import DecodeError, EncodeError


BufferLike = Union[np.ndarray, bytes, bytearray, memoryview]


def encode_mask_png(buffer: BufferLike, width: int, height: int, channels: int = 4) -> bytes:
    """
    Encode a raw pixel buffer as PNG.

    `buffer` may be an (H, W, C) array or any flat buffer laid out row-major
    with interleaved RGB(A) channels (or a single grey channel).
    """
    if isinstance(buffer, np.ndarray):
        arr = buffer
    else:
        arr = np.frombuffer(bytes(buffer), dtype=np.uint8)

    expected = width * height * channels
    if width <= 0 or height <= 0 or channels not in (1, 3, 4):
        raise EncodeError(f"Invalid buffer geometry {width}x{height}x{channels}")
    if arr.dtype != np.uint8 or arr.size != expected:
        raise EncodeError(
            f"Buffer holds {arr.size} {arr.dtype} values, expected {expected} uint8 for {width}x{height}x{channels}"
        )

    arr = np.ascontiguousarray(arr).reshape((height, width, channels))
    # OpenCV writes BGR(A); the buffer is RGB(A).
    if channels == 4:
        arr = cv2.cvtColor(arr, cv2.COLOR_RGBA2BGRA)
    elif channels == 3:
        arr = cv2.cvtColor(arr, cv2.COLOR_RGB2BGR)
    ok, enc = cv2.imencode(".png", arr)
    if not ok:
        raise EncodeError("PNG encoder reported failure")
    return enc.tobytes()


def decode_mask_png(data: bytes) -> np.ndarray:
    """Decode mask PNG bytes to an (H, W, 4) RGBA array, alpha preserved."""
    if not data:
        raise DecodeError("Empty mask data")
    try:
        arr = cv2.imdecode(np.frombuffer(data, dtype=np.uint8), cv2.IMREAD_UNCHANGED)
    except cv2.error as e:
        raise DecodeError(f"Could not decode mask: {e}") from e
    if arr is None:
        raise DecodeError("Could not decode mask: not a valid image")
    if arr.ndim == 2:
        return cv2.cvtColor(arr, cv2.COLOR_GRAY2RGBA)
    if arr.shape[2] == 3:
        return cv2.cvtColor(arr, cv2.COLOR_BGR2RGBA)
    return cv2.cvtColor(arr, cv2.COLOR_BGRA2RGBA)
