"""Tests for utility functions."""

import pytest

from memloop.utils import format_bytes


class TestFormatBytes:
    """Test format_bytes."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "size,expected",
        [
            (0, "0 B"),
            (1023, "1023 B"),
            (1024, "1.0 KB"),
            (1536, "1.5 KB"),
            (5 * 1024 * 1024, "5.0 MB"),
            (3 * 1024 ** 3, "3.0 GB"),
            (4096 * 1024 ** 3, "4096.0 GB"),
        ],
    )
    def test_format(self, size, expected):
        """Test sizes pick the largest fitting unit."""
        assert format_bytes(size) == expected
