"""Retry helper tests."""

from unittest.mock import AsyncMock, patch

import pytest

from chronoscope.utils.retry import compute_backoff, with_retries


def test_compute_backoff_grows_exponentially():
    assert 0.5 <= compute_backoff(0) <= 0.75
    assert 2.0 <= compute_backoff(2) <= 2.25


@pytest.mark.asyncio
async def test_with_retries_retries_only_accepted_errors():
    operation = AsyncMock(side_effect=[RuntimeError("flaky"), RuntimeError("flaky"), "ok"])
    with patch("chronoscope.utils.retry.schedule_retry", new=AsyncMock()) as sleeper:
        result = await with_retries(operation, 2, lambda e: isinstance(e, RuntimeError))
    assert result == "ok"
    assert operation.await_count == 3
    assert sleeper.await_count == 2


@pytest.mark.asyncio
async def test_with_retries_gives_up():
    operation = AsyncMock(side_effect=RuntimeError("down"))
    with patch("chronoscope.utils.retry.schedule_retry", new=AsyncMock()):
        with pytest.raises(RuntimeError):
            await with_retries(operation, 1, lambda e: True)
    assert operation.await_count == 2

    operation = AsyncMock(side_effect=KeyError("fatal"))
    with pytest.raises(KeyError):
        await with_retries(operation, 5, lambda e: isinstance(e, RuntimeError))
    assert operation.await_count == 1
