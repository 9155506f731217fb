from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple


NUM_HAND_LANDMARKS = 21

# MediaPipe hand topology: fingertip landmark indices.
FINGERTIP_INDICES: Dict[str, int] = {
    "thumb": 4,
    "index": 8,
    "middle": 12,
    "ring": 16,
    "pinky": 20,
}

# Nail anchors used by default: four fingertips, thumb excluded.
DEFAULT_FINGERTIPS: Tuple[int, ...] = (8, 12, 16, 20)
ALL_FINGERTIPS: Tuple[int, ...] = (4, 8, 12, 16, 20)


@dataclass(frozen=True)
class Landmark:
    """A single hand landmark in normalized canvas coordinates."""

    idx: int
    x: float
    y: float
    z: float = 0.0


@dataclass(frozen=True)
class HandDetection:
    """Landmarks for a single detected hand."""

    landmarks: Tuple[Landmark, ...]  # length 21
    handedness_label: Optional[str] = None  # "Left" / "Right" (may be None)
    handedness_score: Optional[float] = None

    def __post_init__(self) -> None:
        if len(self.landmarks) != NUM_HAND_LANDMARKS:
            raise ValueError(
                f"A hand needs exactly {NUM_HAND_LANDMARKS} landmarks, got {len(self.landmarks)}"
            )

    def fingertips(self, indices: Tuple[int, ...] = DEFAULT_FINGERTIPS) -> Tuple[Landmark, ...]:
        return tuple(self.landmarks[i] for i in indices)
