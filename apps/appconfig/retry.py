from __future__ import annotations

import asyncio
import logging
import random
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TypeVar

from web3.exceptions import BadFunctionCallOutput, ContractLogicError

from .config import get_settings

LOGGER = logging.getLogger('appconfig.retry')

T = TypeVar('T')

# Reverts and empty call results are deterministic for a read at a given block.
NON_RETRYABLE: tuple[type[BaseException], ...] = (ContractLogicError, BadFunctionCallOutput)


@dataclass(frozen=True)
class RetryPolicy:
    max_attempts: int = 10
    base_delay_seconds: float = 0.1
    growth_factor: float = 2.0
    max_delay_seconds: float = 30.0
    jitter: bool = False

    def delay(self, attempt: int) -> float:
        """Delay before the attempt following ``attempt`` (0-indexed)."""
        delay = float(self.base_delay_seconds)
        for _ in range(attempt):
            if delay >= self.max_delay_seconds:
                break
            delay *= self.growth_factor
        delay = min(delay, self.max_delay_seconds)
        if self.jitter:
            delay += random.uniform(-delay * 0.25, delay * 0.25)
        return max(0.0, delay)


def policy_from_settings() -> RetryPolicy:
    settings = get_settings()
    return RetryPolicy(
        max_attempts=settings.retry_max_attempts,
        base_delay_seconds=settings.retry_base_delay_seconds,
        growth_factor=settings.retry_growth_factor,
        max_delay_seconds=settings.retry_max_delay_seconds,
        jitter=settings.retry_jitter
    )


async def with_backoff(
    operation: Callable[[], Awaitable[T]],
    *,
    policy: RetryPolicy | None = None,
    label: str = 'read'
) -> T:
    policy = policy or policy_from_settings()
    attempts = max(1, policy.max_attempts)
    attempt = 0

    while True:
        try:
            return await operation()
        except NON_RETRYABLE:
            raise
        except Exception as exc:
            attempt += 1
            if attempt >= attempts:
                LOGGER.error('giving up label=%s attempts=%s error=%s', label, attempts, exc)
                raise
            delay = policy.delay(attempt - 1)
            LOGGER.warning(
                'retrying label=%s attempt=%s/%s delay=%.3fs error=%s',
                label,
                attempt,
                attempts,
                delay,
                exc
            )
            await asyncio.sleep(delay)
