from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

from .types import DEFAULT_FINGERTIPS
from .utils import parse_fingertips


_IMAGE_EXTS = (".jpg", ".jpeg", ".png")


@dataclass(frozen=True)
class MaskConfig:
    """
    Settings for one nail mask generation pipeline.

    Defaults reproduce the reference behavior: a 512x512 canvas, 10 px discs
    on the index/middle/ring/pinky tips (thumb excluded), and the resized
    canvas re-encoded as JPEG quality 80 before detection.
    """

    canvas_width: int = 512
    canvas_height: int = 512
    radius: int = 10
    fingertips: Tuple[int, ...] = DEFAULT_FINGERTIPS
    canvas_ext: str = ".jpg"
    canvas_jpeg_quality: int = 80
    max_num_hands: int = 2
    min_detection_confidence: float = 0.5
    tasks_model_path: str = "models/hand_landmarker.task"

    def __post_init__(self) -> None:
        if self.canvas_width <= 0 or self.canvas_height <= 0:
            raise ValueError(f"Canvas size must be positive, got {self.canvas_width}x{self.canvas_height}")
        if self.canvas_width != self.canvas_height:
            raise ValueError(f"Canvas must be square, got {self.canvas_width}x{self.canvas_height}")
        if self.radius < 0:
            raise ValueError(f"radius must be >= 0, got {self.radius}")
        # Normalizes lists and names to a tuple of indices; also validates them.
        object.__setattr__(self, "fingertips", parse_fingertips(self.fingertips))
        if self.canvas_ext.lower() not in _IMAGE_EXTS:
            raise ValueError(f"Unsupported canvas format '{self.canvas_ext}'. Available: {list(_IMAGE_EXTS)}")
        if not (0 <= self.canvas_jpeg_quality <= 100):
            raise ValueError(f"canvas_jpeg_quality must be in 0..100, got {self.canvas_jpeg_quality}")
        if self.max_num_hands < 1:
            raise ValueError(f"max_num_hands must be >= 1, got {self.max_num_hands}")
        if not (0.0 <= self.min_detection_confidence <= 1.0):
            raise ValueError(f"min_detection_confidence must be in [0, 1], got {self.min_detection_confidence}")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, prefix: str = "NAILMASK_") -> "MaskConfig":
        """
        Build a config from environment variables, falling back to defaults.

        Recognized: CANVAS_SIZE, RADIUS, FINGERTIPS (names or indices,
        comma-separated), MAX_HANDS, MIN_DETECTION_CONFIDENCE, MODEL_PATH.
        """
        env = os.environ if environ is None else environ
        kwargs = {}

        size = env.get(prefix + "CANVAS_SIZE")
        if size:
            kwargs["canvas_width"] = kwargs["canvas_height"] = int(size)
        if env.get(prefix + "RADIUS"):
            kwargs["radius"] = int(env[prefix + "RADIUS"])
        if env.get(prefix + "FINGERTIPS"):
            kwargs["fingertips"] = parse_fingertips(env[prefix + "FINGERTIPS"])
        if env.get(prefix + "MAX_HANDS"):
            kwargs["max_num_hands"] = int(env[prefix + "MAX_HANDS"])
        if env.get(prefix + "MIN_DETECTION_CONFIDENCE"):
            kwargs["min_detection_confidence"] = float(env[prefix + "MIN_DETECTION_CONFIDENCE"])
        if env.get(prefix + "MODEL_PATH"):
            kwargs["tasks_model_path"] = env[prefix + "MODEL_PATH"]

        return cls(**kwargs)
