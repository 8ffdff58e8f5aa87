"""Pytest fixtures for tests."""

import numpy as np
import pytest

from memloop.audio import MemorySampleBuffer, MemoryWaveBuffer
from memloop.models import WaveFormat


@pytest.fixture
def ramp_samples():
    """Ten mono samples whose values equal their indices."""
    return np.arange(10, dtype=np.float32)


@pytest.fixture
def ramp_buffer(ramp_samples):
    """Mono sample buffer holding 0.0 .. 9.0."""
    return MemorySampleBuffer.from_samples(ramp_samples, sample_rate=44100, num_channels=1)


@pytest.fixture
def stereo_buffer():
    """Stereo sample buffer, 8 frames, interleaved values 0..15."""
    return MemorySampleBuffer.from_samples(
        np.arange(16, dtype=np.float32), sample_rate=48000, num_channels=2
    )


@pytest.fixture
def pcm16_stereo():
    """16-bit stereo PCM format (4 bytes per frame)."""
    return WaveFormat.pcm(sample_rate=44100, channels=2, bits_per_sample=16)


@pytest.fixture
def wave_bytes():
    """Forty bytes whose values equal their indices."""
    return bytes(range(40))


@pytest.fixture
def wave_buffer(pcm16_stereo, wave_bytes):
    """Fixed-size, read-only byte buffer (10 frames of 16-bit stereo)."""
    return MemoryWaveBuffer(pcm16_stereo, wave_bytes, writable=False)


@pytest.fixture
def sample_out():
    """Zeroed float32 destination large enough for most tests."""
    return np.zeros(64, dtype=np.float32)
