"""
Retry with exponential backoff for transient API failures.
"""

import logging
import time
from dataclasses import dataclass, fields
from typing import Any, Callable, Mapping, TypeVar

from tenacity import (
    RetryCallState,
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

T = TypeVar("T")

DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_INITIAL_DELAY = 1.0
DEFAULT_BACKOFF_MULTIPLIER = 2.0
DEFAULT_MAX_DELAY = 30.0


@dataclass(frozen=True)
class RetryConfig:
    """
    Backoff settings. Delays are in seconds.
    """

    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    initial_delay: float = DEFAULT_INITIAL_DELAY
    backoff_multiplier: float = DEFAULT_BACKOFF_MULTIPLIER
    max_delay: float = DEFAULT_MAX_DELAY

    @classmethod
    def from_mapping(cls, settings: Mapping[str, Any]) -> "RetryConfig":
        """Build from a config section, ignoring keys that are not settings."""
        known = {field.name for field in fields(cls)}
        unknown = sorted(set(settings) - known)
        if unknown:
            logging.warning(f"Ignoring unknown retry settings: {', '.join(unknown)}")
        return cls(**{key: value for key, value in settings.items() if key in known})


def _log_attempt(label: str) -> Callable[[RetryCallState], None]:
    def before_sleep(retry_state: RetryCallState) -> None:
        error = retry_state.outcome.exception()
        delay = retry_state.next_action.sleep
        logging.warning(
            f"[{label}] attempt {retry_state.attempt_number} failed: {error} - retrying in {delay:g}s"
        )
    return before_sleep


def with_retry(
    operation: Callable[[], T],
    label: str,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    initial_delay: float = DEFAULT_INITIAL_DELAY,
    backoff_multiplier: float = DEFAULT_BACKOFF_MULTIPLIER,
    max_delay: float = DEFAULT_MAX_DELAY,
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """
    Call ``operation`` until it succeeds or ``max_attempts`` is reached.

    The first wait is ``initial_delay``; each following wait is multiplied
    by ``backoff_multiplier`` and capped at ``max_delay``. There is no wait
    after the final attempt. Only ``Exception`` subclasses are retried.

    Args:
        operation: Zero-argument callable to execute
        label: Context for log lines (e.g. "upload art_123")
        max_attempts: Total number of calls, including the first
        initial_delay: Seconds to wait before the second attempt
        backoff_multiplier: Factor applied to the delay after each wait
        max_delay: Upper bound for a single wait, in seconds
        sleep: Sleep function, injectable for tests

    Returns:
        The return value of ``operation``

    Raises:
        Exception: The last error raised by ``operation`` once attempts are exhausted
    """
    if max_attempts < 1:
        raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")

    retrying = Retrying(
        retry=retry_if_exception_type(Exception),
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential(multiplier=initial_delay, exp_base=backoff_multiplier, max=max_delay),
        before_sleep=_log_attempt(label),
        sleep=sleep,
        reraise=True,
    )

    try:
        return retrying(operation)
    except Exception as e:
        logging.warning(f"[{label}] failed after {max_attempts} attempts: {e}")
        raise


def retry_call(operation: Callable[[], T], label: str, config: RetryConfig,
               sleep: Callable[[float], None] = time.sleep) -> T:
    """Run ``with_retry`` using the settings of a RetryConfig."""
    return with_retry(
        operation,
        label,
        max_attempts=config.max_attempts,
        initial_delay=config.initial_delay,
        backoff_multiplier=config.backoff_multiplier,
        max_delay=config.max_delay,
        sleep=sleep,
    )
