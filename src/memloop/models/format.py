"""Audio format metadata model."""

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from memloop.models.enums import SampleEncoding


class WaveFormat(BaseModel):
    """Format descriptor carried alongside an in-memory buffer.

    The looping algorithm never looks at this except to align loop bounds
    to whole frames. It is frozen so buffers can share one instance.
    """

    model_config = ConfigDict(frozen=True)

    sample_rate: int = Field(gt=0, description="Sample rate in Hz")
    channels: int = Field(ge=1, description="Number of interleaved channels")
    bits_per_sample: int = Field(gt=0, description="Bits per sample (multiple of 8)")
    encoding: SampleEncoding = Field(
        default=SampleEncoding.PCM, description="Sample encoding"
    )

    @field_validator("bits_per_sample")
    @classmethod
    def validate_bits(cls, v: int) -> int:
        """Only whole-byte sample widths are supported."""
        if v % 8 != 0:
            raise ValueError("bits_per_sample must be a multiple of 8")
        return v

    @model_validator(mode="after")
    def validate_float_width(self) -> "WaveFormat":
        """IEEE float samples are either single or double precision."""
        if self.encoding == SampleEncoding.IEEE_FLOAT and self.bits_per_sample not in (32, 64):
            raise ValueError("IEEE float formats must use 32 or 64 bits per sample")
        return self

    @classmethod
    def ieee_float(cls, sample_rate: int, channels: int) -> "WaveFormat":
        """Create a 32-bit IEEE float format."""
        return cls(
            sample_rate=sample_rate,
            channels=channels,
            bits_per_sample=32,
            encoding=SampleEncoding.IEEE_FLOAT,
        )

    @classmethod
    def pcm(cls, sample_rate: int, channels: int, bits_per_sample: int = 16) -> "WaveFormat":
        """Create an integer PCM format."""
        return cls(
            sample_rate=sample_rate,
            channels=channels,
            bits_per_sample=bits_per_sample,
            encoding=SampleEncoding.PCM,
        )

    @property
    def bytes_per_sample(self) -> int:
        """Bytes used by one sample of one channel."""
        return self.bits_per_sample // 8

    @property
    def block_align(self) -> int:
        """Bytes used by one frame (one sample for every channel)."""
        return self.channels * self.bytes_per_sample

    @property
    def average_bytes_per_second(self) -> int:
        """Byte rate of the format."""
        return self.sample_rate * self.block_align

    def __str__(self) -> str:
        if self.encoding == SampleEncoding.IEEE_FLOAT:
            kind = "IeeeFloat"
        else:
            kind = f"{self.bits_per_sample} bit PCM"
        return f"{kind}: {self.sample_rate}Hz {self.channels} channels"
