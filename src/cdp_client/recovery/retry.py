"""
Retry policies for transport-level failures.

Only the transport retries, and only on failures that never reached the
platform (connection errors, socket timeouts). API errors and every error
raised by the authentication or polling core propagate on first occurrence.
"""

import asyncio
import logging
import random
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, Optional, Tuple, Type


logger = logging.getLogger(__name__)


class RetryError(Exception):
    """Retry operation failed."""
    pass


class MaxRetriesExceeded(RetryError):
    """Maximum retry attempts exceeded."""
    def __init__(self, attempts: int, last_error: Exception):
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(f"Max retries ({attempts}) exceeded. Last error: {last_error}")


class RetryPolicy(ABC):
    """
    Abstract base class for retry policies.

    Subclasses decide the delay before each further attempt; the base class
    decides whether an exception is worth another attempt at all.
    """

    def __init__(
        self,
        max_attempts: int = 3,
        base_delay: float = 1.0,
        max_delay: float = 60.0,
        jitter: bool = True,
        jitter_factor: float = 0.1,
        retryable_exceptions: Tuple[Type[BaseException], ...] = (Exception,),
    ):
        """
        Initialize retry policy.

        Args:
            max_attempts: Maximum number of attempts, including the first
            base_delay: Base delay between attempts in seconds
            max_delay: Maximum delay between attempts in seconds
            jitter: Whether to add jitter to delays
            jitter_factor: Jitter factor (0.0 to 1.0)
            retryable_exceptions: Exception types that warrant another attempt
        """
        self.max_attempts = max(1, max_attempts)
        self.base_delay = base_delay
        self.max_delay = max_delay
        self.jitter = jitter
        self.jitter_factor = jitter_factor
        self.retryable_exceptions = retryable_exceptions

        self.total_attempts = 0
        self.total_retries = 0

    @abstractmethod
    def calculate_delay(self, attempt: int) -> float:
        """
        Calculate delay after the given attempt number (1-based).
        """
        pass

    def should_retry(self, attempt: int, exception: Exception) -> bool:
        if attempt >= self.max_attempts:
            return False
        return isinstance(exception, self.retryable_exceptions)

    def add_jitter(self, delay: float) -> float:
        if not self.jitter:
            return delay

        jitter_amount = delay * self.jitter_factor * (random.random() - 0.5)
        return max(0, delay + jitter_amount)

    async def execute(self, func: Callable[..., Awaitable[Any]], *args, **kwargs) -> Any:
        """
        Await ``func(*args, **kwargs)`` under this policy.

        Non-retryable exceptions propagate immediately. When the attempt
        budget is spent on retryable failures, MaxRetriesExceeded is raised
        with the last failure attached.
        """
        attempt = 0
        last_exception: Optional[Exception] = None

        while attempt < self.max_attempts:
            attempt += 1
            self.total_attempts += 1

            try:
                result = await func(*args, **kwargs)
                if attempt > 1:
                    logger.info(f"Operation succeeded on attempt {attempt}")
                return result

            except Exception as e:
                if not isinstance(e, self.retryable_exceptions):
                    raise

                last_exception = e
                if not self.should_retry(attempt, e):
                    break

                delay = self.add_jitter(min(self.calculate_delay(attempt), self.max_delay))
                self.total_retries += 1
                logger.warning(f"Attempt {attempt} failed: {e}. Retrying in {delay:.2f}s...")
                await asyncio.sleep(delay)

        raise MaxRetriesExceeded(attempt, last_exception)


class ExponentialBackoff(RetryPolicy):
    """
    Exponential backoff retry policy.

    Delay increases exponentially with each attempt: base_delay * (factor ^ (attempt - 1))
    """

    def __init__(
        self,
        max_attempts: int = 3,
        base_delay: float = 1.0,
        max_delay: float = 60.0,
        factor: float = 2.0,
        jitter: bool = True,
        jitter_factor: float = 0.1,
        retryable_exceptions: Tuple[Type[BaseException], ...] = (Exception,),
    ):
        super().__init__(max_attempts, base_delay, max_delay, jitter, jitter_factor, retryable_exceptions)
        self.factor = factor

    def calculate_delay(self, attempt: int) -> float:
        delay = self.base_delay * (self.factor ** (attempt - 1))
        return min(delay, self.max_delay)


class FixedBackoff(RetryPolicy):
    """Uses constant delay between all retry attempts."""

    def __init__(
        self,
        max_attempts: int = 3,
        delay: float = 1.0,
        jitter: bool = False,
        retryable_exceptions: Tuple[Type[BaseException], ...] = (Exception,),
    ):
        super().__init__(max_attempts, delay, delay, jitter, 0.1, retryable_exceptions)

    def calculate_delay(self, attempt: int) -> float:
        return self.base_delay


__all__ = [
    "RetryError",
    "MaxRetriesExceeded",
    "RetryPolicy",
    "ExponentialBackoff",
    "FixedBackoff",
]
