"""
Unit tests for the retry helper.
"""

import unittest
from unittest.mock import Mock

from docsie_connector.utils import RetryConfig, with_retry
from docsie_connector.utils.retry import retry_call


class TestWithRetry(unittest.TestCase):
    """Test exponential backoff retries."""

    def setUp(self):
        """Record sleeps instead of waiting."""
        self.sleeps = []

    def sleep(self, seconds):
        """Sleep replacement that records the requested delay."""
        self.sleeps.append(seconds)

    def test_returns_immediately_on_success(self):
        """Test a successful call runs once without sleeping."""
        operation = Mock(return_value="ok")

        result = with_retry(operation, "test", sleep=self.sleep)

        self.assertEqual(result, "ok")
        self.assertEqual(operation.call_count, 1)
        self.assertEqual(self.sleeps, [])

    def test_succeeds_on_third_attempt(self):
        """Test transient failures are retried with growing delays."""
        operation = Mock(side_effect=[RuntimeError("fail 1"), RuntimeError("fail 2"), "success"])

        result = with_retry(operation, "test", initial_delay=1.0, backoff_multiplier=2.0, sleep=self.sleep)

        self.assertEqual(result, "success")
        self.assertEqual(operation.call_count, 3)
        self.assertEqual(self.sleeps, [1.0, 2.0])
        self.assertGreaterEqual(sum(self.sleeps), 3.0)

    def test_raises_last_error_when_exhausted(self):
        """Test the last error is re-raised once attempts run out."""
        operation = Mock(side_effect=[RuntimeError("first"), RuntimeError("second"), RuntimeError("last")])

        with self.assertRaises(RuntimeError) as ctx:
            with_retry(operation, "test", max_attempts=3, sleep=self.sleep)

        self.assertEqual(str(ctx.exception), "last")
        self.assertEqual(operation.call_count, 3)
        # No wait after the final attempt
        self.assertEqual(len(self.sleeps), 2)

    def test_delay_is_capped(self):
        """Test the delay never exceeds max_delay."""
        operation = Mock(side_effect=RuntimeError("down"))

        with self.assertRaises(RuntimeError):
            with_retry(operation, "test", max_attempts=4, initial_delay=10.0,
                       backoff_multiplier=5.0, max_delay=20.0, sleep=self.sleep)

        self.assertEqual(self.sleeps, [10.0, 20.0, 20.0])

    def test_logs_each_failed_attempt_and_final_failure(self):
        """Test each failed attempt and the final failure are logged."""
        operation = Mock(side_effect=RuntimeError("boom"))

        with self.assertLogs(level="WARNING") as logs:
            with self.assertRaises(RuntimeError):
                with_retry(operation, "upload doc-1", max_attempts=3, sleep=self.sleep)

        self.assertEqual(len(logs.records), 3)
        self.assertIn("[upload doc-1] attempt 1 failed: boom", logs.output[0])
        self.assertIn("[upload doc-1] attempt 2 failed: boom", logs.output[1])
        self.assertIn("[upload doc-1] failed after 3 attempts: boom", logs.output[2])

    def test_single_attempt_does_not_sleep(self):
        """Test a single attempt fails without waiting."""
        operation = Mock(side_effect=RuntimeError("nope"))

        with self.assertRaises(RuntimeError):
            with_retry(operation, "test", max_attempts=1, sleep=self.sleep)

        self.assertEqual(operation.call_count, 1)
        self.assertEqual(self.sleeps, [])

    def test_keyboard_interrupt_is_not_retried(self):
        """Test interrupts propagate without retry."""
        operation = Mock(side_effect=KeyboardInterrupt)

        with self.assertRaises(KeyboardInterrupt):
            with_retry(operation, "test", sleep=self.sleep)

        self.assertEqual(operation.call_count, 1)

    def test_invalid_max_attempts(self):
        """Test max_attempts below one is rejected."""
        with self.assertRaises(ValueError):
            with_retry(lambda: None, "test", max_attempts=0)

    def test_retry_call_uses_config(self):
        """Test retry_call applies RetryConfig settings."""
        operation = Mock(side_effect=[RuntimeError("x"), "done"])
        config = RetryConfig(max_attempts=2, initial_delay=0.5)

        self.assertEqual(retry_call(operation, "test", config, sleep=self.sleep), "done")
        self.assertEqual(self.sleeps, [0.5])


class TestRetryConfig(unittest.TestCase):
    """Test building retry settings from configuration."""

    def test_from_mapping(self):
        """Test known settings are applied."""
        config = RetryConfig.from_mapping({"max_attempts": 5, "initial_delay": 0.5})

        self.assertEqual(config.max_attempts, 5)
        self.assertEqual(config.initial_delay, 0.5)
        self.assertEqual(config.backoff_multiplier, 2.0)

    def test_from_mapping_ignores_unknown_keys(self):
        """Test unknown keys are dropped with a warning instead of failing."""
        with self.assertLogs(level="WARNING") as logs:
            config = RetryConfig.from_mapping({"max_attempts": 2, "jitter": True})

        self.assertEqual(config, RetryConfig(max_attempts=2))
        self.assertIn("Ignoring unknown retry settings: jitter", logs.output[0])


if __name__ == '__main__':
    unittest.main()
