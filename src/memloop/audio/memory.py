"""In-memory audio buffers with a movable read cursor.

Two unit domains share one read contract:
- MemorySampleBuffer: interleaved float32 samples in a NumPy array
- MemoryWaveBuffer: raw encoded bytes in a bytearray (optionally writable
  and expandable, like an in-memory stream)

Buffers never clamp the cursor when it is set. A cursor at or past the end
simply makes the next read return 0 units.
"""

import logging
from abc import ABC, abstractmethod
from threading import Lock
from typing import Any, Optional

import numpy as np
import numpy.typing as npt

from memloop.exceptions import (
    BufferContractError,
    BufferNotExpandableError,
    BufferNotWritableError,
)
from memloop.models import SampleEncoding, WaveFormat
from memloop.utils import format_bytes

logger = logging.getLogger(__name__)


class MemoryBuffer(ABC):
    """
    Fixed-width unit store with a read cursor.

    Subclasses own the backing data and know how to copy a run of units
    into a caller-supplied destination. Everything else (cursor handling,
    argument checks, locking) lives here.
    """

    def __init__(self, wave_format: WaveFormat):
        """
        Initialize buffer state.

        Args:
            wave_format: Format metadata carried for downstream consumers
        """
        self._wave_format = wave_format
        self._position = 0
        self._lock = Lock()

    # =================================================================
    # Subclass hooks
    # =================================================================

    @property
    @abstractmethod
    def length(self) -> int:
        """Number of units in the buffer."""
        pass

    @property
    @abstractmethod
    def units_per_frame(self) -> int:
        """Number of units making up one frame."""
        pass

    @property
    @abstractmethod
    def nbytes(self) -> int:
        """Size of the backing store in bytes."""
        pass

    @abstractmethod
    def _capacity(self, destination: Any) -> int:
        """Number of units the destination can hold."""
        pass

    @abstractmethod
    def _copy_into(self, destination: Any, offset: int, start: int, count: int) -> None:
        """Copy `count` units from `start` into `destination[offset:]`."""
        pass

    # =================================================================
    # Cursor and metadata
    # =================================================================

    @property
    def wave_format(self) -> WaveFormat:
        """Format metadata for this buffer."""
        return self._wave_format

    @property
    def position(self) -> int:
        """Current cursor position in units."""
        with self._lock:
            return self._position

    @position.setter
    def position(self, value: int) -> None:
        if value < 0:
            raise BufferContractError("Position must be non-negative", context={"position": value})
        with self._lock:
            self._position = value

    @property
    def num_frames(self) -> int:
        """Number of whole frames in the buffer."""
        return self.length // self.units_per_frame

    @property
    def duration(self) -> float:
        """Duration in seconds."""
        return self.num_frames / self._wave_format.sample_rate

    def __len__(self) -> int:
        return self.length

    def get_info(self) -> dict:
        """
        Get buffer information.

        Returns:
            Dictionary with duration, sample rate, channels, length,
            frame count, size and format description
        """
        size_bytes = self.nbytes
        return {
            'duration': self.duration,
            'sample_rate': self._wave_format.sample_rate,
            'num_channels': self._wave_format.channels,
            'num_frames': self.num_frames,
            'length': self.length,
            'size_bytes': size_bytes,
            'size_str': format_bytes(size_bytes),
            'format': str(self._wave_format),
        }

    # =================================================================
    # Reading
    # =================================================================

    def validate_request(self, destination: Any, offset: int, count: int) -> None:
        """
        Check read arguments against the destination.

        Raises:
            BufferContractError: If offset/count are negative or the
                destination has fewer than `count` slots after `offset`
        """
        if offset < 0 or count < 0:
            raise BufferContractError(
                "Offset and count must be non-negative",
                context={"offset": offset, "count": count},
            )
        capacity = self._capacity(destination)
        if capacity - offset < count:
            raise BufferContractError(
                "Destination too small",
                context={"offset": offset, "count": count, "capacity": capacity},
            )

    def read(self, destination: Any, offset: int, count: int) -> int:
        """
        Copy up to `count` units from the cursor into the destination.

        Args:
            destination: Writable target with room for `count` units after `offset`
            offset: First destination slot to write
            count: Maximum number of units to copy

        Returns:
            Number of units copied, min(count, length - position);
            0 once the cursor is at or past the end

        Raises:
            BufferContractError: If offset/count are negative or the
                destination is too small
        """
        self.validate_request(destination, offset, count)

        with self._lock:
            available = max(0, min(count, self.length - self._position))
            if available:
                self._copy_into(destination, offset, self._position, available)
                self._position += available
            return available


class MemorySampleBuffer(MemoryBuffer):
    """
    Read-only, random-access store of interleaved float32 samples.

    One unit is one sample of one channel.
    """

    def __init__(self, data: npt.ArrayLike, wave_format: WaveFormat):
        """
        Initialize sample buffer.

        Args:
            data: Interleaved samples; copied into a read-only float32 array
            wave_format: Format of the samples. Must use IEEE float encoding.

        Raises:
            ValueError: If the format is not IEEE float
        """
        if wave_format.encoding != SampleEncoding.IEEE_FLOAT:
            raise ValueError(
                f"Sample buffers need an IEEE float format, got {wave_format.encoding.value}"
            )
        super().__init__(wave_format)

        samples = np.array(data, dtype=np.float32).reshape(-1)
        samples.setflags(write=False)
        self._data: npt.NDArray[np.float32] = samples

    @classmethod
    def from_samples(
        cls,
        data: npt.ArrayLike,
        sample_rate: int,
        num_channels: int
    ) -> "MemorySampleBuffer":
        """
        Create a buffer from interleaved samples, building the float format.

        Args:
            data: Interleaved samples
            sample_rate: Sample rate in Hz
            num_channels: Number of interleaved channels
        """
        return cls(data, WaveFormat.ieee_float(sample_rate, num_channels))

    @classmethod
    def from_array(
        cls,
        data: npt.NDArray[np.floating],
        sample_rate: int
    ) -> "MemorySampleBuffer":
        """
        Create a buffer from a NumPy array.

        Args:
            data: Audio data
                  Shape: (num_frames,) for mono or (num_frames, num_channels) for multi-channel
            sample_rate: Sample rate in Hz

        Returns:
            MemorySampleBuffer holding the frames interleaved

        Raises:
            ValueError: If the array is not 1D or 2D
        """
        if data.ndim == 1:
            num_channels = 1
        elif data.ndim == 2:
            num_channels = data.shape[1]
        else:
            raise ValueError(f"Audio data must be 1D or 2D, got {data.ndim}D")

        # C order flattens (frames, channels) into L R L R ...
        return cls.from_samples(np.ravel(data, order="C"), sample_rate, num_channels)

    @property
    def data(self) -> npt.NDArray[np.float32]:
        """Read-only view of the samples."""
        return self._data

    @property
    def length(self) -> int:
        return len(self._data)

    @property
    def units_per_frame(self) -> int:
        return self._wave_format.channels

    @property
    def nbytes(self) -> int:
        return self._data.nbytes

    def _capacity(self, destination: Any) -> int:
        return len(destination)

    def _copy_into(self, destination: Any, offset: int, start: int, count: int) -> None:
        destination[offset:offset + count] = self._data[start:start + count]


class MemoryWaveBuffer(MemoryBuffer):
    """
    Random-access store of encoded bytes.

    Created without data it is an empty, expandable, writable store that
    grows as it is written. Created from existing bytes it has a fixed size,
    and `writable` decides whether those bytes may be overwritten.
    """

    def __init__(
        self,
        wave_format: WaveFormat,
        data: Optional[bytes | bytearray | memoryview] = None,
        writable: bool = True
    ):
        """
        Initialize byte buffer.

        Args:
            wave_format: Format of the encoded bytes
            data: Initial contents (copied). None creates an expandable store.
            writable: Whether write() is allowed
        """
        super().__init__(wave_format)
        self._expandable = data is None
        self._writable = writable
        self._data = bytearray() if data is None else bytearray(data)

    @property
    def writable(self) -> bool:
        """Check if the buffer accepts writes."""
        return self._writable

    @property
    def expandable(self) -> bool:
        """Check if writes may grow the buffer."""
        return self._expandable

    @property
    def length(self) -> int:
        return len(self._data)

    @property
    def units_per_frame(self) -> int:
        return self._wave_format.block_align

    @property
    def nbytes(self) -> int:
        return len(self._data)

    def to_bytes(self) -> bytes:
        """Snapshot of the buffer contents."""
        with self._lock:
            return bytes(self._data)

    def write(self, data: bytes | bytearray | memoryview) -> int:
        """
        Write bytes at the cursor and advance it.

        Expandable buffers grow to fit, zero-filling any gap between the old
        end and the cursor.

        Args:
            data: Bytes-like object to write

        Returns:
            Number of bytes written

        Raises:
            BufferNotWritableError: If the buffer is read-only
            BufferNotExpandableError: If a fixed-size buffer would overflow
        """
        if not self._writable:
            raise BufferNotWritableError()

        payload = bytes(memoryview(data))
        if not payload:
            return 0

        with self._lock:
            end = self._position + len(payload)
            if end > len(self._data):
                if not self._expandable:
                    raise BufferNotExpandableError(self._position, len(payload), len(self._data))
                self._data.extend(bytes(end - len(self._data)))
                logger.debug(f"Expanded wave buffer to {len(self._data)} bytes")

            self._data[self._position:end] = payload
            self._position = end
            return len(payload)

    def _capacity(self, destination: Any) -> int:
        with memoryview(destination) as view:
            if view.readonly:
                raise BufferContractError(
                    f"Destination {type(destination).__name__} is read-only",
                    recovery_hint="Read into a bytearray or a writable uint8 array",
                )
            if view.itemsize != 1:
                raise BufferContractError(
                    f"Destination items are {view.itemsize} bytes wide, expected single bytes",
                    recovery_hint="Read into a bytearray or a writable uint8 array",
                )
            return view.nbytes

    def _copy_into(self, destination: Any, offset: int, start: int, count: int) -> None:
        with memoryview(destination) as view, view.cast("B") as target:
            target[offset:offset + count] = self._data[start:start + count]
