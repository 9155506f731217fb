from .config import MaskConfig
from .detector import HandLandmarkSource, LandmarkSource
from .errors import DecodeError, DetectionError, EncodeError, NailMaskError
from .pipeline import NailMaskResult, build_nail_mask, generate_nail_mask
from .rasterizer import rasterize_nail_mask
from .types import ALL_FINGERTIPS, DEFAULT_FINGERTIPS, HandDetection, Landmark

__all__ = [
    "MaskConfig",
    "HandLandmarkSource",
    "LandmarkSource",
    "DecodeError",
    "DetectionError",
    "EncodeError",
    "NailMaskError",
    "NailMaskResult",
    "build_nail_mask",
    "generate_nail_mask",
    "rasterize_nail_mask",
    "ALL_FINGERTIPS",
    "DEFAULT_FINGERTIPS",
    "HandDetection",
    "Landmark",
]
