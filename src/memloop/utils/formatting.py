"""Formatting helpers for buffer metadata."""


def format_bytes(size_bytes: int) -> str:
    """Format a byte count as a short human-readable string.

    Args:
        size_bytes: Size in bytes

    Returns:
        Size with a binary unit suffix

    Examples:
        >>> format_bytes(512)
        '512 B'
        >>> format_bytes(1536)
        '1.5 KB'
    """
    if size_bytes < 1024:
        return f"{size_bytes} B"

    size = size_bytes / 1024
    for unit in ("KB", "MB"):
        if size < 1024:
            return f"{size:.1f} {unit}"
        size /= 1024

    return f"{size:.1f} GB"
