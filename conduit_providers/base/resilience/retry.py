"""Standardized retry policy for upstream API calls.

Only :class:`ProviderError` instances whose ``code`` is listed in
``RetryConfig.retryable_codes`` are retried; every other exception propagates
on the first attempt. Backoff is exponential (``delay_base ** attempt``),
capped by ``max_delay``.

The availability probe is never wrapped: it must answer quickly and map every
failure to ``False``.
"""
from __future__ import annotations

import functools
import time
from dataclasses import dataclass
from typing import Callable, Iterable, Protocol, TypeVar

from ..errors import RETRYABLE_CODES, ErrorCode, ProviderError

T = TypeVar("T")


class AttemptLogger(Protocol):  # pragma: no cover - structural protocol
    def __call__(
        self,
        *,
        attempt: int,
        max_attempts: int,
        delay: float | None,
        error: ProviderError | None,
    ) -> None: ...


@dataclass(frozen=True)
class RetryConfig:
    max_attempts: int = 3
    delay_base: float = 2.0  # exponential base (base**attempt)
    max_delay: float = 8.0
    retryable_codes: tuple[ErrorCode, ...] = RETRYABLE_CODES
    attempt_logger: AttemptLogger | None = None

    def delays(self) -> Iterable[float]:
        for attempt in range(self.max_attempts - 1):
            yield min(self.delay_base**attempt, self.max_delay)


DEFAULT_RETRY_CONFIG = RetryConfig()
NO_RETRY = RetryConfig(max_attempts=1)


def retry(config: RetryConfig = DEFAULT_RETRY_CONFIG):
    """Return a decorator applying the retry policy in ``config``."""

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> T:
            schedule = list(config.delays()) + [None]  # final attempt has no delay
            for attempt, delay in enumerate(schedule):
                try:
                    result = func(*args, **kwargs)
                except ProviderError as e:
                    if config.attempt_logger:
                        config.attempt_logger(
                            attempt=attempt,
                            max_attempts=config.max_attempts,
                            delay=delay,
                            error=e,
                        )
                    if e.code in config.retryable_codes and delay is not None:
                        time.sleep(delay)
                        continue
                    raise
                if config.attempt_logger:
                    config.attempt_logger(
                        attempt=attempt,
                        max_attempts=config.max_attempts,
                        delay=None,
                        error=None,
                    )
                return result
            raise RuntimeError("retry: exhausted schedule without result")  # pragma: no cover

        return wrapper

    return decorator


__all__ = ["RetryConfig", "DEFAULT_RETRY_CONFIG", "NO_RETRY", "retry"]
