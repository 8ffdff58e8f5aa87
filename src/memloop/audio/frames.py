"""Frame-alignment helpers.

A frame is one sample for every channel. Loop bounds are inclusive, so the
end of a frame range is the *last* unit of the last frame, not one past it.
"""


def frames_to_unit_range(
    first_frame: int,
    last_frame: int,
    units_per_frame: int
) -> tuple[int, int]:
    """
    Convert an inclusive frame range into an inclusive unit range.

    Args:
        first_frame: Index of the first frame in the range
        last_frame: Index of the last frame in the range
        units_per_frame: Units (samples or bytes) in one frame

    Returns:
        (first_unit, last_unit), both inclusive

    Raises:
        ValueError: If a frame index is negative or units_per_frame < 1

    Example:
        >>> frames_to_unit_range(1, 2, 2)
        (2, 5)
    """
    if units_per_frame < 1:
        raise ValueError(f"units_per_frame must be at least 1, got {units_per_frame}")
    if first_frame < 0 or last_frame < 0:
        raise ValueError(f"Frame indices must be non-negative, got {first_frame}..{last_frame}")

    first_unit = first_frame * units_per_frame
    last_unit = last_frame * units_per_frame + (units_per_frame - 1)
    return first_unit, last_unit


def sample_loop_range(first_frame: int, last_frame: int, channels: int) -> tuple[int, int]:
    """Inclusive sample offsets of a frame range in interleaved float data."""
    return frames_to_unit_range(first_frame, last_frame, channels)


def byte_loop_range(
    first_frame: int,
    last_frame: int,
    channels: int,
    bytes_per_sample: int
) -> tuple[int, int]:
    """Inclusive byte offsets of a frame range in interleaved encoded data."""
    return frames_to_unit_range(first_frame, last_frame, channels * bytes_per_sample)


def unit_to_frame(unit: int, units_per_frame: int) -> int:
    """Index of the frame containing a unit offset."""
    if units_per_frame < 1:
        raise ValueError(f"units_per_frame must be at least 1, got {units_per_frame}")
    return unit // units_per_frame
