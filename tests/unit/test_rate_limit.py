"""
Tests for the fixed-window rate limiter.
"""


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now


class TestRateLimiter:
    """Tests for RateLimiter.check."""

    def test_allows_up_to_minute_limit(self):
        from core.rate_limit import RateLimiter

        limiter = RateLimiter(per_minute=2, per_day=100, clock=FakeClock())

        assert limiter.check("1.2.3.4").allowed is True
        assert limiter.check("1.2.3.4").allowed is True

        decision = limiter.check("1.2.3.4")
        assert decision.allowed is False
        assert decision.reason == "Rate limit exceeded: too many requests per minute"
        assert decision.retry_after_seconds == 60

    def test_keys_are_independent(self):
        from core.rate_limit import RateLimiter

        limiter = RateLimiter(per_minute=1, per_day=100, clock=FakeClock())

        assert limiter.check("a").allowed is True
        assert limiter.check("b").allowed is True
        assert limiter.check("a").allowed is False

    def test_minute_window_resets(self):
        from core.rate_limit import RateLimiter

        clock = FakeClock()
        limiter = RateLimiter(per_minute=1, per_day=100, clock=clock)

        limiter.check("a")
        assert limiter.check("a").allowed is False

        clock.now += 61
        assert limiter.check("a").allowed is True

    def test_daily_limit(self):
        from core.rate_limit import RateLimiter

        clock = FakeClock()
        limiter = RateLimiter(per_minute=10, per_day=2, clock=clock)

        limiter.check("a")
        clock.now += 61
        limiter.check("a")
        clock.now += 61

        decision = limiter.check("a")
        assert decision.allowed is False
        assert decision.reason == "Rate limit exceeded: daily limit reached"
        assert decision.retry_after_seconds == 86400 - 122

        clock.now += 86401
        assert limiter.check("a").allowed is True

    def test_idle_clients_evicted(self):
        from core.rate_limit import RateLimiter

        clock = FakeClock()
        limiter = RateLimiter(per_minute=1, per_day=10, clock=clock)

        for i in range(500):
            limiter.check(f"10.0.{i // 256}.{i % 256}")
        assert len(limiter._windows) == 500

        clock.now += 3 * 86400
        limiter.check("198.51.100.1")

        assert list(limiter._windows) == ["198.51.100.1"]

    def test_active_clients_kept_between_cleanups(self):
        from core.rate_limit import RateLimiter

        clock = FakeClock()
        limiter = RateLimiter(per_minute=1, per_day=10, clock=clock, cleanup_interval=3600)

        limiter.check("a")
        clock.now += 3601
        limiter.check("b")

        assert set(limiter._windows) == {"a", "b"}
        clock.now += 61
        assert limiter.check("a").allowed is True

    def test_denied_requests_not_counted(self):
        from core.rate_limit import RateLimiter

        clock = FakeClock()
        limiter = RateLimiter(per_minute=1, per_day=2, clock=clock)

        limiter.check("a")
        limiter.check("a")  # denied by the minute window
        clock.now += 61

        assert limiter.check("a").allowed is True

    def test_reset(self):
        from core.rate_limit import RateLimiter

        limiter = RateLimiter(per_minute=1, per_day=1, clock=FakeClock())
        limiter.check("a")
        limiter.reset()

        assert limiter.check("a").allowed is True

    def test_singleton_uses_settings(self, monkeypatch):
        import core.rate_limit as rate_limit
        from config.settings import get_settings

        monkeypatch.setattr(rate_limit, "_parse_limiter", None)
        monkeypatch.setenv("PARSE_RATE_LIMIT_PER_MINUTE", "3")
        get_settings.cache_clear()

        limiter = rate_limit.get_parse_rate_limiter()

        assert limiter is rate_limit.get_parse_rate_limiter()
        assert [limiter.check("x").allowed for _ in range(4)] == [True, True, True, False]
