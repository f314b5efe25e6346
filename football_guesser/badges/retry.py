# football_guesser/badges/retry.py
from dataclasses import dataclass
from typing import Awaitable, Callable

from loguru import logger
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    stop_any,
    wait_fixed,
)

from football_guesser.clients.base_client import RateLimitError
from football_guesser.config.settings import settings

Sleep = Callable[[float], Awaitable[None]]


@dataclass(frozen=True)
class RetryPolicy:
    """How the badge resolver reacts to rate limiting.

    Only 429 answers are retried, always on the same search term, after a
    fixed wait. ``max_backoffs_per_resolution`` caps the waits of one whole
    resolution so a rate limited upstream cannot stall a round indefinitely.
    """

    max_attempts_per_term: int = 2
    backoff_seconds: float = 1.0
    max_backoffs_per_resolution: int = 4

    @classmethod
    def from_settings(cls) -> "RetryPolicy":
        return cls(
            max_attempts_per_term=settings.max_attempts_per_term,
            backoff_seconds=settings.rate_limit_backoff_seconds,
            max_backoffs_per_resolution=settings.max_backoffs_per_resolution,
        )


class BackoffBudget:
    """Rate limit waits left for one resolution; doubles as a tenacity stop condition."""

    def __init__(self, limit: int):
        self.remaining = limit

    def __call__(self, retry_state: RetryCallState) -> bool:
        return self.remaining <= 0

    def spend(self, retry_state: RetryCallState) -> None:
        self.remaining -= 1
        logger.debug(
            f"Rate limited on attempt {retry_state.attempt_number}, "
            f"{self.remaining} backoff(s) left for this resolution"
        )


def rate_limit_retrying(
    policy: RetryPolicy, budget: BackoffBudget, sleep: Sleep
) -> AsyncRetrying:
    """Builds the retry controller for one search term."""
    return AsyncRetrying(
        stop=stop_any(stop_after_attempt(policy.max_attempts_per_term), budget),
        wait=wait_fixed(policy.backoff_seconds),
        retry=retry_if_exception_type(RateLimitError),
        before_sleep=budget.spend,
        sleep=sleep,
        reraise=True,
    )
