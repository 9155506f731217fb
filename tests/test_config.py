from __future__ import annotations

import numpy as np
import pytest

from nailmask.config import MaskConfig
from nailmask.types import DEFAULT_FINGERTIPS
from nailmask.utils import parse_fingertips


def test_defaults_match_reference():
    config = MaskConfig()
    assert (config.canvas_width, config.canvas_height) == (512, 512)
    assert config.radius == 10
    assert config.fingertips == DEFAULT_FINGERTIPS == (8, 12, 16, 20)
    assert config.canvas_ext == ".jpg"
    assert config.canvas_jpeg_quality == 80


def test_fingertip_names_are_normalized():
    config = MaskConfig(fingertips=["thumb", "index", 8])
    assert config.fingertips == (4, 8)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"canvas_width": 0, "canvas_height": 0},
        {"canvas_width": 512, "canvas_height": 256},
        {"radius": -1},
        {"fingertips": (25,)},
        {"canvas_ext": ".gif"},
        {"canvas_jpeg_quality": 101},
        {"max_num_hands": 0},
        {"min_detection_confidence": 1.5},
    ],
)
def test_invalid_config(kwargs):
    with pytest.raises(ValueError):
        MaskConfig(**kwargs)


def test_from_env():
    config = MaskConfig.from_env(
        {
            "NAILMASK_CANVAS_SIZE": "256",
            "NAILMASK_RADIUS": "6",
            "NAILMASK_FINGERTIPS": "thumb,index,middle,ring,pinky",
            "NAILMASK_MAX_HANDS": "1",
            "NAILMASK_MIN_DETECTION_CONFIDENCE": "0.7",
            "NAILMASK_MODEL_PATH": "/tmp/hand.task",
            "UNRELATED": "x",
        }
    )
    assert (config.canvas_width, config.canvas_height) == (256, 256)
    assert config.radius == 6
    assert config.fingertips == (4, 8, 12, 16, 20)
    assert config.max_num_hands == 1
    assert config.min_detection_confidence == pytest.approx(0.7)
    assert config.tasks_model_path == "/tmp/hand.task"


def test_from_env_empty_uses_defaults():
    assert MaskConfig.from_env({}) == MaskConfig()


def test_parse_fingertips():
    assert parse_fingertips("index, middle ,ring") == (8, 12, 16)
    assert parse_fingertips("8,12,8") == (8, 12)
    assert parse_fingertips(["Pinky", 4]) == (20, 4)
    with pytest.raises(ValueError):
        parse_fingertips("toe")
    with pytest.raises(ValueError):
        parse_fingertips("-1")


def test_parse_fingertips_accepts_numpy_ints():
    assert parse_fingertips(np.array([4, 20])) == (4, 20)
    assert MaskConfig(fingertips=(np.int64(8),)).fingertips == (8,)


def test_empty_fingertip_selection_is_rejected():
    with pytest.raises(ValueError):
        parse_fingertips("")
    with pytest.raises(ValueError):
        parse_fingertips([])
    with pytest.raises(ValueError):
        MaskConfig(fingertips=())
