"""Tests for the polling helper."""

import pytest

from repoforge import poll


@pytest.mark.asyncio
async def test_poll_returns_first_value(sleep) -> None:
    values = iter([None, None, "ready"])

    async def operation():
        return next(values)

    outcome = await poll(operation, attempts=5, interval=1.5, sleep=sleep)

    assert outcome.succeeded
    assert outcome.value == "ready"
    assert outcome.attempts == 3
    assert sleep.delays == [1.5, 1.5]


@pytest.mark.asyncio
async def test_poll_times_out_without_trailing_wait(sleep) -> None:
    calls = 0

    async def operation():
        nonlocal calls
        calls += 1
        return None

    outcome = await poll(operation, attempts=4, interval=2.0, sleep=sleep)

    assert not outcome.succeeded
    assert outcome.value is None
    assert outcome.attempts == 4
    assert calls == 4
    assert sleep.elapsed == 6.0


@pytest.mark.asyncio
async def test_poll_does_not_retry_exceptions(sleep) -> None:
    async def operation():
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError):
        await poll(operation, attempts=3, interval=1.0, sleep=sleep)
    assert sleep.delays == []


@pytest.mark.asyncio
@pytest.mark.parametrize("attempts,interval", [(0, 1.0), (3, -1.0)])
async def test_poll_rejects_invalid_bounds(attempts, interval, sleep) -> None:
    async def operation():
        return "x"

    with pytest.raises(ValueError):
        await poll(operation, attempts=attempts, interval=interval, sleep=sleep)
