from __future__ import annotations

from typing import Dict, List, Optional, Tuple

import cv2
import numpy as np
import pytest

from nailmask.types import NUM_HAND_LANDMARKS, HandDetection, Landmark


# Unlisted landmarks sit far off-canvas so they never paint anything.
OFF_CANVAS = (-5.0, -5.0)


def make_hand(points: Dict[int, Tuple[float, float]], label: Optional[str] = None) -> HandDetection:
    landmarks = tuple(
        Landmark(idx=i, x=points.get(i, OFF_CANVAS)[0], y=points.get(i, OFF_CANVAS)[1])
        for i in range(NUM_HAND_LANDMARKS)
    )
    return HandDetection(landmarks=landmarks, handedness_label=label)


def encode_image(img: np.ndarray, ext: str = ".png") -> bytes:
    ok, enc = cv2.imencode(ext, img)
    assert ok
    return enc.tobytes()


class FakeLandmarkSource:
    """Returns canned hands (or raises) and records what it was given."""

    def __init__(self, hands: Optional[List[HandDetection]] = None, error: Optional[Exception] = None) -> None:
        self.hands = hands or []
        self.error = error
        self.calls: List[bytes] = []
        self.closed = False

    def detect_hands(self, image_bytes: bytes) -> List[HandDetection]:
        self.calls.append(image_bytes)
        if self.error is not None:
            raise self.error
        return list(self.hands)

    def __enter__(self) -> "FakeLandmarkSource":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.closed = True


@pytest.fixture
def hand_photo_bytes() -> bytes:
    """A 640x480 gradient stand-in for a hand photo."""
    ramp = np.tile(np.linspace(0, 255, 640, dtype=np.uint8), (480, 1))
    return encode_image(np.dstack([ramp, ramp[::-1], np.full_like(ramp, 128)]))


@pytest.fixture
def center_hand() -> HandDetection:
    return make_hand({8: (0.5, 0.5)}, label="Right")
