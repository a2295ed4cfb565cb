"""Tests for retry utilities."""

from __future__ import annotations

import logging

import httpx
import pytest

from bookscraper.utils.retry import NETWORK_EXCEPTIONS, retry_with_backoff


class TestRetryWithBackoff:
    """Tests for the tenacity-based retry_with_backoff decorator."""

    def test_retry_attempts(self) -> None:
        """Retries are counted after the first attempt."""
        calls = {"n": 0}

        @retry_with_backoff(
            max_retries=2, base_delay=0, max_delay=0, jitter=0, retry_exceptions=(RuntimeError,)
        )
        def flake() -> None:
            calls["n"] += 1
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            flake()

        assert calls["n"] == 3  # 1 initial + 2 retries

    def test_success_on_first_try(self) -> None:
        """Function should return immediately on success."""
        call_count = 0

        @retry_with_backoff(max_retries=3, base_delay=0)
        def success_func() -> str:
            nonlocal call_count
            call_count += 1
            return "success"

        assert success_func() == "success"
        assert call_count == 1

    def test_success_after_retry(self) -> None:
        """Function should succeed after retrying network errors."""
        call_count = 0

        @retry_with_backoff(max_retries=3, base_delay=0, jitter=0)
        def fail_then_succeed() -> str:
            nonlocal call_count
            call_count += 1
            if call_count < 3:
                raise httpx.ConnectError("Network error")
            return "success"

        assert fail_then_succeed() == "success"
        assert call_count == 3

    def test_zero_retries(self) -> None:
        """max_retries=0 makes a single attempt."""
        call_count = 0

        @retry_with_backoff(max_retries=0, base_delay=0, jitter=0)
        def always_fail() -> None:
            nonlocal call_count
            call_count += 1
            raise httpx.ReadTimeout("slow")

        with pytest.raises(httpx.ReadTimeout):
            always_fail()
        assert call_count == 1

    def test_only_catches_specified_exceptions(self) -> None:
        """Should not retry for non-specified exceptions."""
        call_count = 0

        @retry_with_backoff(max_retries=3, base_delay=0)
        def raise_value_error() -> str:
            nonlocal call_count
            call_count += 1
            raise ValueError("Not retryable")

        with pytest.raises(ValueError, match="Not retryable"):
            raise_value_error()

        assert call_count == 1  # No retry for ValueError

    def test_negative_retries_rejected(self) -> None:
        """Negative retry counts are invalid."""
        with pytest.raises(ValueError, match="max_retries"):
            retry_with_backoff(max_retries=-1)

    def test_logs_before_sleep(self, caplog: pytest.LogCaptureFixture) -> None:
        """Each retry is logged at WARNING on the given logger."""
        log = logging.getLogger("bookscraper.tests.retry")
        log.propagate = True
        call_count = 0

        @retry_with_backoff(max_retries=1, base_delay=0, jitter=0, logger_instance=log)
        def fail_once() -> str:
            nonlocal call_count
            call_count += 1
            if call_count == 1:
                raise httpx.ConnectError("refused")
            return "ok"

        with caplog.at_level(logging.WARNING, logger="bookscraper.tests.retry"):
            assert fail_once() == "ok"
        assert any("Retrying" in record.getMessage() for record in caplog.records)

    def test_preserves_function_metadata(self) -> None:
        """Decorator should preserve function name and docstring."""

        @retry_with_backoff(max_retries=3)
        def my_function() -> str:
            """My docstring."""
            return "result"

        assert my_function.__name__ == "my_function"
        assert my_function.__doc__ == "My docstring."


class TestNetworkExceptions:
    """Tests for NETWORK_EXCEPTIONS tuple."""

    def test_contains_transient_httpx_errors(self) -> None:
        """Transient transport errors are retryable."""
        assert httpx.ConnectError in NETWORK_EXCEPTIONS
        assert httpx.ReadError in NETWORK_EXCEPTIONS
        assert issubclass(httpx.ReadTimeout, NETWORK_EXCEPTIONS)

    def test_status_errors_not_retried(self) -> None:
        """HTTP status errors are terminal."""
        assert not issubclass(httpx.HTTPStatusError, NETWORK_EXCEPTIONS)
