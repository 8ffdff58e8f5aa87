"""Loop-aware readers over in-memory buffers.

A looping reader repeats an inclusive region [loop_start, loop_end] of its
source buffer for as long as it is read, wrapping the cursor back to
loop_start whenever it passes loop_end. The same algorithm serves both unit
domains:

- LoopSampleReader: float32 samples (MemorySampleBuffer)
- LoopWaveReader: encoded bytes (MemoryWaveBuffer)

Playback starting outside the loop either jumps straight to loop_start on
the first read, or with catch_up_mode plays through the lead-in until it
runs into the loop.
"""

import logging
from threading import Lock
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from memloop.audio.frames import frames_to_unit_range
from memloop.audio.memory import MemoryBuffer, MemorySampleBuffer, MemoryWaveBuffer
from memloop.exceptions import InvalidLoopBoundsError
from memloop.models import ReaderState, WaveFormat

if TYPE_CHECKING:
    from memloop.models import LoopConfig

logger = logging.getLogger(__name__)

B = TypeVar("B", bound=MemoryBuffer)


class LoopingReader(Generic[B]):
    """
    Pull-based reader that repeats a region of a memory buffer.

    Thread-safe: one lock serializes reads, cursor access and loop
    parameter changes. Two readers wrapping the same buffer are not
    coordinated with each other.

    Attributes:
        catch_up_mode: If True, a cursor before the loop is kept and plays
            into the loop. If False, the first read starts at loop_start.
    """

    def __init__(
        self,
        source: B,
        loop_start: int = 0,
        loop_end: int = 0,
        catch_up: bool = False
    ):
        """
        Initialize looping reader.

        Args:
            source: Buffer to read from
            loop_start: First unit of the loop
            loop_end: Last unit of the loop (inclusive)
            catch_up: Start from the current position and run into the loop
        """
        self._source = source
        self._lock = Lock()

        self._loop_start = loop_start
        self._loop_end = loop_end
        self._enable_looping = True
        self._engaged = False

        self.catch_up_mode = catch_up

    @classmethod
    def from_config(cls, source: B, config: "LoopConfig") -> "LoopingReader[B]":
        """
        Create a reader configured from a LoopConfig.

        Args:
            source: Buffer to read from
            config: Loop settings to apply
        """
        reader = cls(source)
        config.apply_to(reader)
        return reader

    # =================================================================
    # Properties
    # =================================================================

    @property
    def source(self) -> B:
        """The buffer this reader wraps."""
        return self._source

    @property
    def wave_format(self) -> WaveFormat:
        """Format metadata of the source."""
        return self._source.wave_format

    @property
    def units_per_frame(self) -> int:
        """Units in one frame of the source."""
        return self._source.units_per_frame

    @property
    def position(self) -> int:
        """Absolute playback position within the source."""
        with self._lock:
            return self._source.position

    @position.setter
    def position(self, value: int) -> None:
        with self._lock:
            self._source.position = value

    @property
    def loop_start(self) -> int:
        """Position of the first unit in the loop."""
        return self._loop_start

    @loop_start.setter
    def loop_start(self, value: int) -> None:
        with self._lock:
            self._loop_start = value

    @property
    def loop_end(self) -> int:
        """Position of the last unit in the loop."""
        return self._loop_end

    @loop_end.setter
    def loop_end(self, value: int) -> None:
        with self._lock:
            self._loop_end = value

    @property
    def enable_looping(self) -> bool:
        """
        Is looping enabled.

        Disabling it lets the reader play on until the source runs out.
        """
        return self._enable_looping

    @enable_looping.setter
    def enable_looping(self, value: bool) -> None:
        with self._lock:
            self._enable_looping = value
            if not value:
                self._engaged = False

    @property
    def loop_position(self) -> int:
        """Playback position relative to loop_start."""
        return self.position - self._loop_start

    @property
    def loop_length(self) -> int:
        """Total count of units in the loop."""
        return self._loop_end - self._loop_start + 1

    @property
    def state(self) -> ReaderState:
        """LOOPING once a looping read has validated the bounds, else LINEAR."""
        if self._enable_looping and self._engaged:
            return ReaderState.LOOPING
        return ReaderState.LINEAR

    # =================================================================
    # Loop configuration
    # =================================================================

    def set_loop_from_frames(self, first_frame: int, last_frame: int) -> None:
        """
        Set loop_start and loop_end from frame indices.

        The loop starts on the first unit of `first_frame` and ends on the
        last unit of `last_frame`.

        Args:
            first_frame: First frame of the loop
            last_frame: Last frame of the loop

        Raises:
            ValueError: If a frame index is negative
        """
        start, end = frames_to_unit_range(first_frame, last_frame, self.units_per_frame)
        with self._lock:
            self._loop_start = start
            self._loop_end = end
        logger.debug(
            f"Loop set from frames {first_frame}..{last_frame} -> units {start}..{end}"
        )

    # =================================================================
    # Reading
    # =================================================================

    def _validate_loop(self) -> None:
        """Raise InvalidLoopBoundsError unless 0 <= start < end < length."""
        length = self._source.length
        if (
            self._loop_end <= 0
            or self._loop_end >= length
            or self._loop_start < 0
            or self._loop_start >= length
            or self._loop_end <= self._loop_start
        ):
            raise InvalidLoopBoundsError(self._loop_start, self._loop_end, length)

    def read(self, destination: Any, offset: int, count: int) -> int:
        """
        Fill the destination from the source, repeating the loop region.

        Args:
            destination: Writable target with room for `count` units after `offset`
            offset: First destination slot to write
            count: Number of units requested

        Returns:
            Number of units written. Equal to `count` while looping, unless
            catch-up left the cursor past loop_end. Less than `count` only
            when looping is disabled and the source runs out.

        Raises:
            InvalidLoopBoundsError: If looping is enabled and the bounds
                do not fit the source
            BufferContractError: If the destination cannot take `count` units
        """
        with self._lock:
            source = self._source

            if not self._enable_looping:
                return source.read(destination, offset, count)

            self._validate_loop()
            source.validate_request(destination, offset, count)

            # Only the first out-of-range cursor is moved; catch-up keeps it
            position = source.position
            if not self.catch_up_mode and (position > self._loop_end or position < self._loop_start):
                logger.debug(f"Cursor {position} outside loop, moving to {self._loop_start}")
                source.position = self._loop_start
            self._engaged = True

            total = 0
            while total < count:
                remaining = self._loop_end - source.position + 1
                if remaining < 0:
                    remaining = 0

                chunk = min(count - total, remaining)
                read_count = source.read(destination, offset + total, chunk)
                if read_count == 0:
                    break

                total += read_count

                if source.position > self._loop_end:
                    source.position = self._loop_start

            return total


class LoopSampleReader(LoopingReader[MemorySampleBuffer]):
    """Looping reader over float32 samples; a frame is one sample per channel."""


class LoopWaveReader(LoopingReader[MemoryWaveBuffer]):
    """Looping reader over encoded bytes; a frame is one block_align run of bytes."""
