from hospital_api.infrastructure.rate_limit.memory_rate_limiter import InMemoryRateLimiter


class Clock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now


def test_memory_rate_limiter_allows_then_blocks():
    rl = InMemoryRateLimiter(clock=Clock())
    key = "k1"
    assert rl.allow(key, max_requests=2, window_seconds=60) is True
    assert rl.allow(key, max_requests=2, window_seconds=60) is True
    assert rl.allow(key, max_requests=2, window_seconds=60) is False
    assert rl.allow("k2", max_requests=2, window_seconds=60) is True


def test_window_slides():
    clock = Clock()
    rl = InMemoryRateLimiter(clock=clock)
    assert rl.allow("k", 1, 60)
    assert not rl.allow("k", 1, 60)
    assert rl.retry_after("k", 60) == 61

    clock.now += 30
    assert not rl.allow("k", 1, 60)
    clock.now += 31
    assert rl.allow("k", 1, 60)


def test_idle_clients_are_forgotten():
    clock = Clock()
    rl = InMemoryRateLimiter(clock=clock)
    assert rl.retry_after("never-seen", 60) == 0
    assert "never-seen" not in rl._store

    rl.allow("a", 5, 60)
    rl.allow("b", 5, 60)
    clock.now += 61
    assert rl.retry_after("a", 60) == 0
    assert "a" not in rl._store
    assert rl.allow("b", 5, 60)
    assert list(rl._store) == ["b"]
    assert len(rl._store["b"]) == 1
