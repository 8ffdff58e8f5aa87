"""memloop: Loop-aware playback over in-memory audio buffers."""

__version__ = "0.1.0"

from .audio import (
    LoopSampleReader,
    LoopWaveReader,
    LoopingReader,
    MemorySampleBuffer,
    MemoryWaveBuffer,
)
from .exceptions import InvalidLoopBoundsError, MemLoopError
from .models import LoopConfig, ReaderState, WaveFormat

__all__ = [
    "InvalidLoopBoundsError",
    "LoopConfig",
    "LoopSampleReader",
    "LoopWaveReader",
    "LoopingReader",
    "MemLoopError",
    "MemorySampleBuffer",
    "MemoryWaveBuffer",
    "ReaderState",
    "WaveFormat",
]
