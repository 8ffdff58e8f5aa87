"""
Custom exception hierarchy for memloop.

## Exception Hierarchy

```
MemLoopError (base)
├── MemoryBufferError
│   ├── InvalidLoopBoundsError
│   ├── BufferContractError
│   ├── BufferNotWritableError
│   └── BufferNotExpandableError
└── ConfigurationError
    ├── ConfigFileInvalidError
    └── ConfigValidationError
```

## Usage

All custom exceptions inherit from `MemLoopError`, which provides:

- `user_message`: Human-friendly message for display to users
- `technical_message`: Detailed message for logging
- `recoverable`: Whether the error can be recovered from
- `recovery_hint`: Optional suggestion for how to fix the issue

### Example: Invalid loop bounds

```python
from memloop.exceptions import InvalidLoopBoundsError

try:
    reader.read(out, 0, 512)
except InvalidLoopBoundsError as e:
    logger.error(e.technical_message)
    # "Invalid loop bounds (loop_start=8, loop_end=4, length=10)"
    logger.debug(e.context)  # {'loop_start': 8, 'loop_end': 4, 'length': 10}
```

Loop errors are raised from every `read` while looping stays enabled and
the bounds stay wrong; the reader's state is not touched.
"""

from .base import MemLoopError
from .buffer import (
    BufferContractError,
    BufferNotExpandableError,
    BufferNotWritableError,
    InvalidLoopBoundsError,
    MemoryBufferError,
)
from .config import ConfigFileInvalidError, ConfigurationError, ConfigValidationError
from .handlers import ErrorContext, format_error_for_display, wrap_pydantic_error

__all__ = [
    # Buffer
    "BufferContractError",
    "BufferNotExpandableError",
    "BufferNotWritableError",
    "InvalidLoopBoundsError",
    "MemoryBufferError",
    # Config
    "ConfigFileInvalidError",
    "ConfigValidationError",
    "ConfigurationError",
    # Handlers
    "ErrorContext",
    "format_error_for_display",
    # Base
    "MemLoopError",
    "wrap_pydantic_error",
]
