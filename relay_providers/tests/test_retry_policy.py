from __future__ import annotations

import pytest

from relay_providers.base.errors import ErrorCode, ProviderError
from relay_providers.base.resilience.retry import RetryConfig, retry


def _err(code: ErrorCode) -> ProviderError:
    return ProviderError(code=code, message=code.value, provider="fake")


def test_retries_retryable_codes_with_exponential_delays():
    sleeps = []
    attempts = []

    @retry(RetryConfig(max_attempts=3, delay_base=2.0, sleep=sleeps.append))
    def flaky():
        attempts.append(1)
        if len(attempts) < 3:
            raise _err(ErrorCode.RATE_LIMIT)
        return "done"

    assert flaky() == "done"  # nosec B101
    assert sleeps == [1.0, 2.0]  # nosec B101


def test_non_retryable_code_raises_immediately():
    sleeps = []
    attempts = []

    @retry(RetryConfig(max_attempts=5, sleep=sleeps.append))
    def denied():
        attempts.append(1)
        raise _err(ErrorCode.AUTH)

    with pytest.raises(ProviderError):
        denied()
    assert len(attempts) == 1 and sleeps == []  # nosec B101


def test_last_attempt_error_propagates_and_is_logged():
    records = []

    def _log(**kw):
        records.append((kw["attempt"], kw["delay"], kw["error"].code if kw["error"] else None))

    @retry(RetryConfig(max_attempts=2, delay_base=3.0, attempt_logger=_log, sleep=lambda _s: None))
    def timing_out():
        raise _err(ErrorCode.TIMEOUT)

    with pytest.raises(ProviderError):
        timing_out()
    assert records == [(0, 1.0, ErrorCode.TIMEOUT), (1, None, ErrorCode.TIMEOUT)]  # nosec B101


def test_other_exceptions_are_not_retried():
    attempts = []

    @retry(RetryConfig(max_attempts=3, sleep=lambda _s: None))
    def broken():
        attempts.append(1)
        raise KeyError("x")

    with pytest.raises(KeyError):
        broken()
    assert len(attempts) == 1  # nosec B101
