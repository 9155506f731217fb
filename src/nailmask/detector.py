from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Protocol, Sequence, Tuple

import cv2

from .canvas import decode_image
from .errors import DecodeError, DetectionError
from .model_assets import ensure_hand_landmarker_task
from .types import HandDetection, Landmark


logger = logging.getLogger(__name__)


class LandmarkSource(Protocol):
    """Anything that can find hands in canvas-normalized image bytes."""

    def detect_hands(self, image_bytes: bytes) -> List[HandDetection]:
        ...


@dataclass(frozen=True)
class _SolutionsBackend:
    mp: object
    hands: object


@dataclass(frozen=True)
class _TasksBackend:
    mp: object
    landmarker: object


def _try_create_solutions_backend(
    max_num_hands: int,
    min_detection_confidence: float,
) -> Optional[_SolutionsBackend]:
    import mediapipe as mp  # type: ignore

    if not hasattr(mp, "solutions"):
        return None
    hands = mp.solutions.hands.Hands(
        static_image_mode=True,
        max_num_hands=max_num_hands,
        min_detection_confidence=min_detection_confidence,
    )
    return _SolutionsBackend(mp=mp, hands=hands)


def _try_create_tasks_backend(
    model_path: str,
    max_num_hands: int,
    min_detection_confidence: float,
) -> _TasksBackend:
    """
    Fallback for MediaPipe distributions that do not include `mp.solutions`.

    Uses the MediaPipe Tasks HandLandmarker in IMAGE mode, which requires a
    `.task` model asset on disk.
    """

    import mediapipe as mp  # type: ignore
    from mediapipe.tasks.python import BaseOptions  # type: ignore
    from mediapipe.tasks.python.vision import HandLandmarker, HandLandmarkerOptions, RunningMode  # type: ignore

    model_path = ensure_hand_landmarker_task(model_path)

    options = HandLandmarkerOptions(
        base_options=BaseOptions(model_asset_path=model_path),
        running_mode=RunningMode.IMAGE,
        num_hands=max_num_hands,
        min_hand_detection_confidence=min_detection_confidence,
    )
    return _TasksBackend(mp=mp, landmarker=HandLandmarker.create_from_options(options))


def hand_detections_from_landmarks(
    landmark_lists: Sequence[Sequence[object]],
    handedness: Optional[Sequence[Tuple[Optional[str], Optional[float]]]] = None,
) -> List[HandDetection]:
    """
    Convert backend landmark objects into HandDetections.

    Each landmark only needs `.x` and `.y` attributes (`.z` is optional).
    """
    handedness = handedness or []
    out: List[HandDetection] = []
    for i, landmarks in enumerate(landmark_lists):
        points = tuple(
            Landmark(idx=idx, x=float(lm.x), y=float(lm.y), z=float(getattr(lm, "z", 0.0)))
            for idx, lm in enumerate(landmarks)
        )
        label, score = handedness[i] if i < len(handedness) else (None, None)
        out.append(HandDetection(landmarks=points, handedness_label=label, handedness_score=score))
    return out


class HandLandmarkSource:
    """
    Hand landmark source backed by MediaPipe Hands.

    Input is encoded image bytes that have already been resized to the mask
    canvas; landmarks come back normalized to that canvas.
    """

    def __init__(
        self,
        max_num_hands: int = 2,
        min_detection_confidence: float = 0.5,
        tasks_model_path: str = "models/hand_landmarker.task",
    ) -> None:
        self._tasks: Optional[_TasksBackend] = None
        try:
            self._solutions: Optional[_SolutionsBackend] = _try_create_solutions_backend(
                max_num_hands=max_num_hands,
                min_detection_confidence=min_detection_confidence,
            )
            if self._solutions is None:
                logger.info("mediapipe has no `solutions`, using Tasks HandLandmarker")
                self._tasks = _try_create_tasks_backend(
                    model_path=tasks_model_path,
                    max_num_hands=max_num_hands,
                    min_detection_confidence=min_detection_confidence,
                )
        except Exception as e:
            raise DetectionError(f"Could not initialize MediaPipe hand landmarker: {e}") from e

    def close(self) -> None:
        if self._solutions is not None:
            self._solutions.hands.close()
            self._solutions = None
        if self._tasks is not None:
            self._tasks.landmarker.close()
            self._tasks = None

    def __enter__(self) -> "HandLandmarkSource":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def detect_hands(self, image_bytes: bytes) -> List[HandDetection]:
        try:
            frame_rgb = cv2.cvtColor(decode_image(image_bytes), cv2.COLOR_BGR2RGB)
        except DecodeError as e:
            raise DetectionError(f"Hand landmark input is not a valid image: {e}") from e
        try:
            hands = self._detect_rgb(frame_rgb)
        except DetectionError:
            raise
        except Exception as e:
            raise DetectionError(f"Hand landmark detection failed: {e}") from e
        logger.info("detected %d hand(s)", len(hands))
        return hands

    def _detect_rgb(self, frame_rgb) -> List[HandDetection]:
        if self._solutions is not None:
            results = self._solutions.hands.process(frame_rgb)
            if not results.multi_hand_landmarks:
                return []

            handedness = []
            for h in results.multi_handedness or []:
                c = h.classification[0] if h.classification else None
                handedness.append(
                    (getattr(c, "label", None), float(getattr(c, "score", 0.0))) if c is not None else (None, None)
                )
            return hand_detections_from_landmarks(
                [hl.landmark for hl in results.multi_hand_landmarks], handedness
            )

        if self._tasks is None:
            raise DetectionError("Hand landmark source is closed")

        mp = self._tasks.mp
        mp_image = mp.Image(image_format=mp.ImageFormat.SRGB, data=frame_rgb)
        result = self._tasks.landmarker.detect(mp_image)

        handedness = []
        for cats in getattr(result, "handedness", None) or []:
            cat0 = cats[0] if cats else None
            if cat0 is None:
                handedness.append((None, None))
            else:
                label = getattr(cat0, "category_name", None) or getattr(cat0, "display_name", None)
                handedness.append((label, float(getattr(cat0, "score", 0.0))))
        return hand_detections_from_landmarks(getattr(result, "hand_landmarks", None) or [], handedness)
