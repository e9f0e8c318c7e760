"""Shared helpers."""

from .retry import RetryConfig, retry_call, with_retry

__all__ = ["RetryConfig", "retry_call", "with_retry"]
