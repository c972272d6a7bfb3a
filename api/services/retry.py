"""
Bounded exponential-backoff retry for model overload (HTTP 503).
"""
import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

OVERLOADED_STATUS = 503


@dataclass(frozen=True)
class RetryPolicy:
    """How many times to retry, and the delay before the first retry"""

    max_retries: int = 3
    initial_delay_ms: int = 1000

    def __post_init__(self):
        if self.max_retries < 0:
            raise ValueError(f"max_retries must be >= 0, got {self.max_retries}")
        if self.initial_delay_ms <= 0:
            raise ValueError(f"initial_delay_ms must be > 0, got {self.initial_delay_ms}")

    def delay_seconds(self, retry_index: int) -> float:
        """Backoff before retry number retry_index (0 for the first retry)"""
        return self.initial_delay_ms * (2**retry_index) / 1000


def error_status(error: BaseException) -> Optional[int]:
    """Numeric status carried by an upstream error, if any.

    google-genai APIError exposes it as .code; HTTP client errors as .status_code.
    """
    for attr in ("code", "status_code"):
        status = getattr(error, attr, None)
        if isinstance(status, int):
            return status
    return None


def is_overloaded(error: BaseException) -> bool:
    """True only for the transient 'model overloaded' (503) signal"""
    return error_status(error) == OVERLOADED_STATUS


async def with_retry(operation: Callable[[], Awaitable[T]], policy: Optional[RetryPolicy] = None) -> T:
    """
    Run operation, retrying on 503 with exponential backoff.

    The operation runs at most policy.max_retries + 1 times. Any error other
    than 503 is raised immediately. When retries run out the last 503 error
    is raised.
    """
    policy = policy or RetryPolicy()

    for attempt in range(policy.max_retries + 1):
        try:
            return await operation()
        except Exception as e:
            if not is_overloaded(e):
                raise
            if attempt >= policy.max_retries:
                logger.error(f"Model still overloaded (503) after {policy.max_retries} retries")
                raise

            wait_time = policy.delay_seconds(attempt)
            logger.warning(
                f"Model overloaded (503), retrying in {wait_time:.2f}s... (attempt {attempt + 1}/{policy.max_retries + 1})"
            )
            await asyncio.sleep(wait_time)

    # Unreachable: the loop either returns or raises
    raise RuntimeError("with_retry exited without a result")
