"""In-memory buffers and loop-aware readers."""

from .frames import byte_loop_range, frames_to_unit_range, sample_loop_range, unit_to_frame
from .looping import LoopingReader, LoopSampleReader, LoopWaveReader
from .memory import MemoryBuffer, MemorySampleBuffer, MemoryWaveBuffer

__all__ = [
    "LoopSampleReader",
    "LoopWaveReader",
    "LoopingReader",
    "MemoryBuffer",
    "MemorySampleBuffer",
    "MemoryWaveBuffer",
    "byte_loop_range",
    "frames_to_unit_range",
    "sample_loop_range",
    "unit_to_frame",
]
