"""
Retry pattern with exponential backoff and optional jitter.

Provides automatic retry logic for transient failures with configurable
backoff strategies. The delay schedule is shared with the endpoint
fallback policy (see shared.resilience.fallback).
"""

import asyncio
import logging
import random
from dataclasses import dataclass
from enum import Enum
from functools import wraps
from typing import Any, Awaitable, Callable, Optional

from shared.resilience.exceptions import RetryError

logger = logging.getLogger(__name__)

SleepFunc = Callable[[float], Awaitable[Any]]


class BackoffStrategy(str, Enum):
    """Backoff strategy for retries."""

    EXPONENTIAL = "exponential"
    LINEAR = "linear"
    CONSTANT = "constant"


@dataclass
class RetryConfig:
    """Configuration for retry behavior."""

    max_attempts: int = 3
    """Maximum number of attempts (including the initial attempt)"""

    initial_delay: float = 1.0
    """Delay after the first failed attempt, in seconds"""

    max_delay: float = 60.0
    """Maximum delay between retries in seconds"""

    backoff_strategy: BackoffStrategy = BackoffStrategy.EXPONENTIAL
    """Backoff strategy: exponential, linear, or constant"""

    backoff_multiplier: float = 2.0
    """Multiplier for exponential/linear backoff"""

    jitter: bool = False
    """Add random jitter to spread out retries"""

    jitter_factor: float = 0.1
    """Jitter factor (0.0-1.0). 0.1 means +/-10% randomness"""

    retry_on: tuple = (Exception,)
    """Exception types to retry on"""

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        if self.initial_delay < 0 or self.max_delay < 0:
            raise ValueError("delays must be >= 0")


def compute_delay(config: RetryConfig, attempt: int) -> float:
    """
    Calculate delay after a failed attempt.

    Args:
        config: Retry configuration
        attempt: Failed attempt number (0-indexed)

    Returns:
        Delay in seconds
    """
    if config.backoff_strategy == BackoffStrategy.EXPONENTIAL:
        delay = config.initial_delay * (config.backoff_multiplier**attempt)
    elif config.backoff_strategy == BackoffStrategy.LINEAR:
        delay = config.initial_delay + (config.backoff_multiplier * attempt)
    else:  # CONSTANT
        delay = config.initial_delay

    delay = min(delay, config.max_delay)

    if config.jitter:
        jitter_range = delay * config.jitter_factor
        delay = max(0.0, delay + random.uniform(-jitter_range, jitter_range))

    return delay


class Retry:
    """
    Async retry handler with configurable backoff strategies.

    Example:
        retry = Retry(RetryConfig(max_attempts=5), name="targets")

        result = await retry.execute_async(fetch_targets, url)
    """

    def __init__(
        self,
        config: Optional[RetryConfig] = None,
        name: str = "default",
        sleep: Optional[SleepFunc] = None,
    ):
        """
        Initialize retry handler.

        Args:
            config: Retry configuration
            name: Policy name used in logs and errors
            sleep: Awaitable sleep function (default: asyncio.sleep)
        """
        self.config = config or RetryConfig()
        self.name = name
        self._sleep = sleep or asyncio.sleep

    def _should_retry_exception(self, exception: BaseException) -> bool:
        """Check if exception should trigger retry."""
        return isinstance(exception, self.config.retry_on)

    async def execute_async(self, func: Callable, *args, **kwargs) -> Any:
        """
        Execute async function with retry logic.

        Args:
            func: Async function to execute
            *args: Positional arguments for func
            **kwargs: Keyword arguments for func

        Returns:
            Function result

        Raises:
            RetryError: When all attempts exhausted
        """
        max_attempts = self.config.max_attempts

        for attempt in range(max_attempts):
            try:
                result = await func(*args, **kwargs)

                if attempt > 0:
                    logger.info(
                        f"[{self.name}] Succeeded on attempt "
                        f"{attempt + 1}/{max_attempts}"
                    )
                return result

            except Exception as e:
                if not self._should_retry_exception(e):
                    logger.error(
                        f"[{self.name}] Non-retryable exception: "
                        f"{type(e).__name__}: {e}"
                    )
                    raise

                if attempt >= max_attempts - 1:
                    raise RetryError(
                        f"All {max_attempts} attempts exhausted. "
                        f"Last error: {type(e).__name__}: {e}",
                        attempts=max_attempts,
                        last_exception=e,
                        policy_name=self.name,
                    ) from e

                delay = compute_delay(self.config, attempt)
                logger.warning(
                    f"[{self.name}] {type(e).__name__}: {e}. "
                    f"Attempt {attempt + 1}/{max_attempts}. "
                    f"Retrying in {delay:.2f}s..."
                )
                await self._sleep(delay)

        # max_attempts >= 1 guarantees a return or raise above
        raise RetryError(
            "Unexpected retry exhaustion",
            attempts=max_attempts,
            policy_name=self.name,
        )

    def decorator(self, func: Callable) -> Callable:
        """
        Decorator for async retry logic.

        Example:
            retry = Retry(RetryConfig(max_attempts=3))

            @retry.decorator
            async def my_function():
                return await api_call()
        """

        @wraps(func)
        async def async_wrapper(*args, **kwargs):
            return await self.execute_async(func, *args, **kwargs)

        return async_wrapper


def with_retry(config: Optional[RetryConfig] = None, name: str = "default"):
    """
    Decorator factory for async retry logic.

    Example:
        @with_retry(RetryConfig(max_attempts=5, initial_delay=0.5))
        async def fetch_data():
            ...
    """
    return Retry(config or RetryConfig(), name=name).decorator
