"""Data models for memloop."""

from .config import LoopConfig
from .enums import ReaderState, SampleEncoding
from .format import WaveFormat

__all__ = [
    # Models
    "LoopConfig",
    "WaveFormat",
    # Enums
    "ReaderState",
    "SampleEncoding",
]
