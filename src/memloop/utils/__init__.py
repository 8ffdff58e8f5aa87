"""Generic utility modules for memloop.

- formatting: Human-readable sizes for buffer metadata
- persistence: JSON load/save for Pydantic models
"""

from .formatting import format_bytes
from .persistence import PydanticPersistence

__all__ = ["PydanticPersistence", "format_bytes"]
