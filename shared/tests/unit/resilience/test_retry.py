"""
Unit tests for Retry and the backoff schedule.

Usage:
    python shared/tests/unit/resilience/test_retry.py
    pytest shared/tests/unit/resilience/test_retry.py
"""

from unittest.mock import AsyncMock

from shared.resilience import (
    BackoffStrategy,
    Retry,
    RetryConfig,
    RetryError,
    compute_delay,
    with_retry,
)
from shared.tests import LaborantTest


class TestRetry(LaborantTest):
    """Unit tests for Retry."""

    component_name = "shared"
    test_category = "unit"

    # ================================================================
    # Helper Methods
    # ================================================================

    def _create_retry(self, max_attempts: int = 3, **kwargs):
        """Create retry handler with recorded sleeps."""
        sleeps = []

        async def fake_sleep(delay):
            sleeps.append(delay)

        config = RetryConfig(max_attempts=max_attempts, initial_delay=1.0, **kwargs)
        return Retry(config, name="test", sleep=fake_sleep), sleeps

    # ================================================================
    # Test Methods
    # ================================================================

    def test_exponential_delay_schedule(self):
        """Test exponential delays are initial_delay * multiplier^attempt."""
        config = RetryConfig(initial_delay=1.0, backoff_multiplier=2.0)
        assert [compute_delay(config, a) for a in range(4)] == [1.0, 2.0, 4.0, 8.0]

    def test_delay_capped_at_max_delay(self):
        """Test delay never exceeds max_delay."""
        config = RetryConfig(initial_delay=1.0, max_delay=5.0)
        assert compute_delay(config, 10) == 5.0

    def test_linear_and_constant_delays(self):
        """Test linear and constant backoff strategies."""
        linear = RetryConfig(
            initial_delay=1.0,
            backoff_strategy=BackoffStrategy.LINEAR,
            backoff_multiplier=0.5,
        )
        constant = RetryConfig(
            initial_delay=2.0, backoff_strategy=BackoffStrategy.CONSTANT
        )
        assert compute_delay(linear, 2) == 2.0
        assert compute_delay(constant, 5) == 2.0

    def test_jitter_stays_within_factor(self):
        """Test jittered delay stays within +/- jitter_factor."""
        config = RetryConfig(initial_delay=10.0, jitter=True, jitter_factor=0.1)
        for _ in range(50):
            assert 9.0 <= compute_delay(config, 0) <= 11.0

    def test_invalid_config_rejected(self):
        """Test max_attempts < 1 is rejected."""
        try:
            RetryConfig(max_attempts=0)
            assert False, "Expected ValueError"
        except ValueError:
            pass

    async def test_returns_first_success(self):
        """Test success on first attempt does not sleep."""
        retry, sleeps = self._create_retry()
        func = AsyncMock(return_value="ok")

        assert await retry.execute_async(func, 1, key="v") == "ok"
        func.assert_awaited_once_with(1, key="v")
        assert sleeps == []

    async def test_retries_then_succeeds(self):
        """Test transient failures are retried with backoff."""
        retry, sleeps = self._create_retry()
        func = AsyncMock(side_effect=[ConnectionError("a"), ConnectionError("b"), "ok"])

        assert await retry.execute_async(func) == "ok"
        assert func.await_count == 3
        assert sleeps == [1.0, 2.0]

    async def test_exhaustion_raises_retry_error(self):
        """Test RetryError carries attempts and last exception."""
        retry, sleeps = self._create_retry(max_attempts=2)
        error = ConnectionError("down")
        func = AsyncMock(side_effect=error)

        try:
            await retry.execute_async(func)
            assert False, "Expected RetryError"
        except RetryError as e:
            assert e.attempts == 2
            assert e.last_exception is error
            assert e.policy_name == "test"

        # No sleep after the final attempt
        assert sleeps == [1.0]

    async def test_non_retryable_exception_propagates(self):
        """Test exceptions outside retry_on are raised immediately."""
        retry, sleeps = self._create_retry(retry_on=(ConnectionError,))
        func = AsyncMock(side_effect=KeyError("bug"))

        try:
            await retry.execute_async(func)
            assert False, "Expected KeyError"
        except KeyError:
            pass

        assert func.await_count == 1
        assert sleeps == []

    async def test_with_retry_decorator(self):
        """Test decorator factory wraps async functions."""
        calls = []

        @with_retry(RetryConfig(max_attempts=2, initial_delay=0.0))
        async def flaky():
            calls.append(1)
            if len(calls) == 1:
                raise ConnectionError("first")
            return "done"

        assert await flaky() == "done"
        assert len(calls) == 2


if __name__ == "__main__":
    TestRetry.run_as_main()
