"""Buffer and loop-reader exceptions.

This module defines exceptions raised by memory buffers and looping readers:
- MemoryBufferError: Base class for buffer errors
- InvalidLoopBoundsError: Loop region does not fit the source buffer
- BufferContractError: Caller passed an invalid destination, offset or count
- BufferNotWritableError: Write attempted on a read-only buffer
- BufferNotExpandableError: Write would grow a fixed-size buffer
"""

from .base import MemLoopError


class MemoryBufferError(MemLoopError):
    """A memory buffer operation failed."""
    pass


class InvalidLoopBoundsError(MemoryBufferError):
    """Loop bounds are outside the source or not strictly ordered."""

    def __init__(self, loop_start: int, loop_end: int, length: int):
        """
        Initialize invalid loop bounds error.

        Args:
            loop_start: Configured first unit of the loop
            loop_end: Configured last unit of the loop (inclusive)
            length: Length of the source buffer in units
        """
        user_msg = "Invalid loop parameters."

        if length < 2:
            recovery = "The source buffer needs at least 2 units to hold a loop"
        else:
            recovery = (
                f"Use 0 <= loop_start < loop_end <= {length - 1}, "
                "or disable looping to play straight through"
            )

        super().__init__(
            user_message=user_msg,
            technical_message="Invalid loop bounds",
            recoverable=True,
            recovery_hint=recovery,
            context={"loop_start": loop_start, "loop_end": loop_end, "length": length},
        )
        self.loop_start = loop_start
        self.loop_end = loop_end
        self.length = length


class BufferContractError(MemoryBufferError):
    """Read or seek arguments violate the buffer's caller contract."""

    def __init__(self, user_message: str, **kwargs):
        """
        Initialize buffer contract error.

        Args:
            user_message: What was wrong with the arguments
        """
        kwargs.setdefault(
            "recovery_hint",
            "Pass a non-negative offset and count, and a destination with room "
            "for count units after offset",
        )
        super().__init__(user_message, **kwargs)


class BufferNotWritableError(MemoryBufferError):
    """Buffer was created read-only."""

    def __init__(self):
        """Initialize buffer-not-writable error."""
        super().__init__(
            user_message="Memory buffer does not support writing.",
            recovery_hint="Create the buffer with writable=True to allow writes",
        )


class BufferNotExpandableError(MemoryBufferError):
    """Write would run past the end of a fixed-size buffer."""

    def __init__(self, position: int, size: int, capacity: int):
        """
        Initialize buffer-not-expandable error.

        Args:
            position: Cursor position where the write started
            size: Number of bytes being written
            capacity: Fixed size of the buffer in bytes
        """
        super().__init__(
            user_message="Memory buffer is not expandable.",
            technical_message="Write exceeds the fixed buffer capacity",
            recovery_hint="Create the buffer without initial data to get an expandable store",
            context={"position": position, "size": size, "capacity": capacity},
        )
        self.position = position
        self.size = size
        self.capacity = capacity
