"""Loop configuration model."""

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field, model_validator

from memloop.exceptions import ErrorContext
from memloop.utils.persistence import PydanticPersistence

if TYPE_CHECKING:
    from memloop.audio.looping import LoopingReader

logger = logging.getLogger(__name__)


class LoopConfig(BaseModel):
    """Persistable settings for a looping reader.

    Bounds are optional: when both are None, applying the config leaves the
    reader's loop region as it is and only updates the flags.
    """

    loop_start: int | None = Field(
        default=None, ge=0, description="First unit (or frame) of the loop"
    )
    loop_end: int | None = Field(
        default=None,
        ge=0,
        description="Last unit (or frame) of the loop, inclusive",
    )
    frames: bool = Field(
        default=False,
        description="Interpret loop_start/loop_end as frame indices instead of unit offsets",
    )
    catch_up: bool = Field(
        default=False,
        description=(
            "Start from the current position and run into the loop, "
            "instead of jumping to loop_start on the first read"
        ),
    )
    enable_looping: bool = Field(default=True, description="Repeat the loop region")

    @model_validator(mode="after")
    def validate_bounds(self) -> "LoopConfig":
        """Bounds come in pairs and must describe a non-empty region."""
        if (self.loop_start is None) != (self.loop_end is None):
            raise ValueError("loop_start and loop_end must be set together")

        if self.loop_start is not None and self.loop_end is not None:
            if self.frames:
                # A single frame still spans several units once aligned
                if self.loop_end < self.loop_start:
                    raise ValueError("loop_end frame must not precede loop_start frame")
            elif self.loop_end <= self.loop_start:
                raise ValueError("loop_end must be greater than loop_start")
        return self

    @property
    def has_bounds(self) -> bool:
        """Check if this config carries a loop region."""
        return self.loop_start is not None

    def apply_to(self, reader: "LoopingReader") -> None:
        """
        Push these settings into an existing reader.

        Args:
            reader: Sample- or byte-domain looping reader

        Raises:
            ValueError: If frame bounds cannot be aligned
        """
        with ErrorContext(f"apply loop config to {type(reader).__name__}", logger_instance=logger):
            if self.loop_start is not None and self.loop_end is not None:
                if self.frames:
                    reader.set_loop_from_frames(self.loop_start, self.loop_end)
                else:
                    reader.loop_start = self.loop_start
                    reader.loop_end = self.loop_end

            reader.catch_up_mode = self.catch_up
            reader.enable_looping = self.enable_looping

    @classmethod
    def load_or_default(cls, path: Path) -> "LoopConfig":
        """
        Load config from file or return the default.

        Args:
            path: Path to the JSON config file

        Raises:
            ConfigFileInvalidError: If config file has invalid JSON syntax
            ConfigValidationError: If config values fail validation
        """
        return PydanticPersistence.load_json_or_default(path, cls)

    def save(self, path: Path) -> None:
        """Save config to file (previous version kept as .bak)."""
        PydanticPersistence.save_json(self, path)
