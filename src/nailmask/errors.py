from __future__ import annotations


class NailMaskError(Exception):
    """Base class for nail mask generation failures."""


class DecodeError(NailMaskError):
    """Input bytes are not a decodable raster image."""


class DetectionError(NailMaskError):
    """
    The hand landmark backend failed.

    Distinct from "no hands found", which is a valid empty result.
    """


class EncodeError(NailMaskError):
    """
    The mask buffer could not be encoded.

    Raised on a buffer/dimension mismatch; this indicates a bug in the caller
    and is not meant to be retried.
    """
