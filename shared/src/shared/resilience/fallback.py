"""
Endpoint fallback with retry rounds.

Tries an operation against an ordered list of endpoints (primary first).
The first endpoint that answers wins. When every endpoint has failed the
policy sleeps according to the retry backoff schedule and starts the next
round from the primary again.

Example:
    fallback = EndpointFallback(RetryConfig(max_attempts=3), name="eth")

    outcome = await fallback.execute_async(
        client.query_balance,
        ["https://primary", "https://backup"],
        address,
    )
    outcome.value     # first successful result
    outcome.endpoint  # endpoint that produced it
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional, Sequence

from shared.resilience.exceptions import FallbackExhaustedError
from shared.resilience.retry import RetryConfig, SleepFunc, compute_delay

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FallbackOutcome:
    """Successful result of a fallback execution."""

    value: Any
    endpoint: str
    attempt: int
    """Round (0-indexed) in which the value was obtained"""


class EndpointFallback:
    """
    Retry policy over an ordered endpoint list.

    Algorithm:
        for attempt in 0..max_attempts-1:
            for endpoint in endpoints:
                try the call; return on success
            if attempts remain: sleep compute_delay(attempt)
        raise FallbackExhaustedError

    Exceptions outside config.retry_on propagate immediately.
    """

    def __init__(
        self,
        config: Optional[RetryConfig] = None,
        name: str = "fallback",
        sleep: Optional[SleepFunc] = None,
    ):
        """
        Initialize fallback policy.

        Args:
            config: Retry configuration (max_attempts = rounds)
            name: Policy name used in logs and errors
            sleep: Awaitable sleep function (default: asyncio.sleep)
        """
        self.config = config or RetryConfig()
        self.name = name
        self._sleep = sleep or asyncio.sleep

    async def execute_async(
        self,
        func: Callable[..., Awaitable[Any]],
        endpoints: Sequence[str],
        *args,
        **kwargs,
    ) -> FallbackOutcome:
        """
        Run func(endpoint, *args, **kwargs) until one endpoint succeeds.

        Args:
            func: Async callable taking the endpoint as first argument
            endpoints: Ordered endpoints, primary first
            *args: Extra positional arguments for func
            **kwargs: Keyword arguments for func

        Returns:
            FallbackOutcome with the first successful value

        Raises:
            FallbackExhaustedError: When every endpoint failed on every
                attempt, or the endpoint list is empty
        """
        endpoints = list(endpoints)
        if not endpoints:
            raise FallbackExhaustedError(self.name, 0, endpoints)

        max_attempts = self.config.max_attempts
        last_exception: Optional[BaseException] = None

        for attempt in range(max_attempts):
            for endpoint in endpoints:
                try:
                    value = await func(endpoint, *args, **kwargs)
                except self.config.retry_on as e:
                    last_exception = e
                    logger.debug(
                        f"[{self.name}] Attempt {attempt + 1}/{max_attempts} "
                        f"failed at {endpoint}: {type(e).__name__}: {e}"
                    )
                    continue

                if attempt > 0 or endpoint != endpoints[0]:
                    logger.info(
                        f"[{self.name}] Succeeded at {endpoint} "
                        f"on attempt {attempt + 1}/{max_attempts}"
                    )
                return FallbackOutcome(value=value, endpoint=endpoint, attempt=attempt)

            if attempt < max_attempts - 1:
                delay = compute_delay(self.config, attempt)
                logger.warning(
                    f"[{self.name}] All {len(endpoints)} endpoint(s) failed on "
                    f"attempt {attempt + 1}/{max_attempts}. "
                    f"Retrying in {delay:.2f}s..."
                )
                await self._sleep(delay)

        logger.error(f"[{self.name}] All attempts failed")
        raise FallbackExhaustedError(
            self.name, max_attempts, endpoints, last_exception
        )
