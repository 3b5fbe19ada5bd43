"""Bounded polling built on tenacity."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    before_sleep_log,
    retry_if_result,
    stop_after_attempt,
    wait_fixed,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

Sleep = Callable[[float], Awaitable[None]]


@dataclass(frozen=True)
class PollOutcome(Generic[T]):
    """Result of a polling run: the first non-None value, or a timeout."""

    value: T | None
    attempts: int

    @property
    def succeeded(self) -> bool:
        return self.value is not None


async def poll(
    operation: Callable[[], Awaitable[T | None]],
    *,
    attempts: int,
    interval: float,
    sleep: Sleep = asyncio.sleep,
) -> PollOutcome[T]:
    """
    Call ``operation`` until it returns a value other than None.

    Waits ``interval`` seconds between calls and gives up after
    ``attempts`` calls. No wait follows the last call. Exceptions raised
    by ``operation`` are not retried.

    Args:
        operation: Coroutine function returning a value or None
        attempts: Maximum number of calls (>= 1)
        interval: Seconds to wait between calls (>= 0)
        sleep: Awaitable sleep, injectable for tests

    Returns:
        PollOutcome with the value (or None) and the number of calls made
    """
    if attempts < 1:
        raise ValueError(f"attempts must be >= 1, got {attempts}")
    if interval < 0:
        raise ValueError(f"interval must be >= 0, got {interval}")

    def on_exhausted(retry_state: RetryCallState) -> PollOutcome[T]:
        logger.debug("Polling gave up after %d attempts", retry_state.attempt_number)
        return PollOutcome(value=None, attempts=retry_state.attempt_number)

    retrying = AsyncRetrying(
        retry=retry_if_result(lambda value: value is None),
        stop=stop_after_attempt(attempts),
        wait=wait_fixed(interval),
        sleep=sleep,
        before_sleep=before_sleep_log(logger, logging.DEBUG),
        retry_error_callback=on_exhausted,
    )

    calls = 0

    async def attempt() -> PollOutcome[T] | None:
        nonlocal calls
        calls += 1
        value = await operation()
        if value is None:
            return None
        return PollOutcome(value=value, attempts=calls)

    return await retrying(attempt)
