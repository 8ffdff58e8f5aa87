"""Enumerations for memloop."""

from enum import Enum


class SampleEncoding(str, Enum):
    """How individual samples are encoded in a buffer."""

    PCM = "pcm"  # Signed integer PCM
    IEEE_FLOAT = "ieee_float"  # 32- or 64-bit floating point


class ReaderState(str, Enum):
    """Effective state of a looping reader."""

    LINEAR = "linear"  # Looping disabled, or bounds not yet engaged
    LOOPING = "looping"  # Bounds validated, cursor confined to the loop region
