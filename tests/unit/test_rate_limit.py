"""Tests for rate limiting utilities."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from resource_provider.utils.rate_limit import RateLimiter


class TestRateLimiter:
    """Test cases for RateLimiter."""

    def test_rejects_non_positive_rate(self):
        """Test that the rate must be positive."""
        with pytest.raises(ValueError):
            RateLimiter(0)

    def test_min_interval(self):
        """Test the interval derived from the rate."""
        assert RateLimiter(4).min_interval == 0.25

    @patch("resource_provider.utils.rate_limit.time")
    def test_first_call_does_not_sleep(self, mock_time):
        """Test that the first call goes through immediately."""
        mock_time.monotonic.return_value = 100.0

        RateLimiter(10).wait()

        mock_time.sleep.assert_not_called()

    @patch("resource_provider.utils.rate_limit.time")
    def test_second_call_sleeps(self, mock_time):
        """Test that back-to-back calls are spaced out."""
        mock_time.monotonic.side_effect = [100.0, 100.0, 100.02, 100.1]
        limiter = RateLimiter(10)

        limiter.wait()
        limiter.wait()

        mock_time.sleep.assert_called_once()
        assert mock_time.sleep.call_args[0][0] == pytest.approx(0.08)

    def test_decorator(self):
        """Test that the limiter works as a decorator."""
        limiter = RateLimiter(1000)
        call_count = 0

        @limiter
        def test_func(value):
            nonlocal call_count
            call_count += 1
            return value

        assert test_func("success") == "success"
        assert test_func.__name__ == "test_func"
        assert call_count == 1
