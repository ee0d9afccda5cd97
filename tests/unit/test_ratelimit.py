from __future__ import annotations

from moodjournal.app.services.ratelimit import RateLimiter


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def test_rate_limiter_allows_within_limit() -> None:
    limiter = RateLimiter()
    for _ in range(3):
        assert limiter.allow("journal:write", limit=3, window_seconds=1)


def test_rate_limiter_blocks_until_window_slides() -> None:
    clock = FakeClock()
    limiter = RateLimiter(clock=clock)

    assert limiter.allow("journal:write", limit=2, window_seconds=60)
    clock.now = 10.0
    assert limiter.allow("journal:write", limit=2, window_seconds=60)
    clock.now = 20.0
    assert limiter.allow("journal:write", limit=2, window_seconds=60) is False
    assert limiter.retry_after("journal:write", window_seconds=60) == 40

    clock.now = 60.5
    assert limiter.allow("journal:write", limit=2, window_seconds=60)
    assert limiter.allow("journal:write", limit=2, window_seconds=60) is False


def test_retry_after_is_zero_for_an_idle_key() -> None:
    assert RateLimiter().retry_after("reminders:write", window_seconds=60) == 0


def test_rate_limiter_reset() -> None:
    limiter = RateLimiter()
    assert limiter.allow("journal:write", limit=1, window_seconds=60)
    assert limiter.allow("reminders:write", limit=1, window_seconds=60)
    assert limiter.allow("journal:write", limit=1, window_seconds=60) is False

    limiter.reset("journal:write")
    assert limiter.allow("journal:write", limit=1, window_seconds=60)
    assert limiter.allow("reminders:write", limit=1, window_seconds=60) is False

    limiter.reset()
    assert limiter.allow("reminders:write", limit=1, window_seconds=60)
