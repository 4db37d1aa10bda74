"""
Resilience exceptions.

Raised by the retry and endpoint fallback policies when every attempt
has been used up.
"""

from typing import List, Optional


class ResilienceError(Exception):
    """Base exception for resilience policy errors."""

    def __init__(self, message: str, policy_name: str = "default"):
        """
        Initialize resilience error.

        Args:
            message: Error message
            policy_name: Name of the policy that raised
        """
        self.message = message
        self.policy_name = policy_name
        super().__init__(self.message)


class RetryError(ResilienceError):
    """Raised when all retry attempts are exhausted."""

    def __init__(
        self,
        message: str,
        attempts: int,
        last_exception: Optional[BaseException] = None,
        policy_name: str = "default",
    ):
        """
        Initialize retry error.

        Args:
            message: Error message
            attempts: Number of attempts made
            last_exception: Exception raised by the final attempt
            policy_name: Name of the retry policy
        """
        self.attempts = attempts
        self.last_exception = last_exception
        super().__init__(message, policy_name)


class FallbackExhaustedError(RetryError):
    """
    Raised when every endpoint failed on every attempt.

    Carries the endpoint list that was tried so callers can log it.
    """

    def __init__(
        self,
        policy_name: str,
        attempts: int,
        endpoints: List[str],
        last_exception: Optional[BaseException] = None,
    ):
        """
        Initialize fallback exhausted error.

        Args:
            policy_name: Name of the fallback policy
            attempts: Number of full passes over the endpoint list
            endpoints: Endpoints tried, in order
            last_exception: Exception raised by the final call
        """
        self.endpoints = list(endpoints)
        if not self.endpoints:
            message = f"Fallback '{policy_name}' has no endpoints to try"
        else:
            message = (
                f"Fallback '{policy_name}' exhausted {attempts} attempt(s) "
                f"across {len(self.endpoints)} endpoint(s)"
            )
            if last_exception is not None:
                message += (
                    f". Last error: {type(last_exception).__name__}: "
                    f"{last_exception}"
                )
        super().__init__(message, attempts, last_exception, policy_name)
