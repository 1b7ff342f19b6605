from attendance_tracker.common.cache import TTLCache


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


def test_entries_expire_after_ttl():
    clock = FakeClock()
    cache = TTLCache(300, clock=clock)
    cache.put(1, "alice")

    clock.now += 299
    assert cache.get(1) == "alice"

    clock.now += 1
    assert cache.get(1) is None
    assert len(cache) == 0


def test_get_or_load_reads_through_once():
    calls = []

    def loader(key):
        calls.append(key)
        return f"user-{key}"

    cache = TTLCache(60, clock=FakeClock())
    assert cache.get_or_load(7, loader) == "user-7"
    assert cache.get_or_load(7, loader) == "user-7"
    assert calls == [7]


def test_missing_values_are_not_cached_and_invalidate_drops_entry():
    cache = TTLCache(60, clock=FakeClock())
    assert cache.get_or_load(1, lambda k: None) is None
    assert len(cache) == 0

    cache.put(2, "bob")
    cache.invalidate(2)
    assert cache.get(2) is None


def test_zero_ttl_disables_caching():
    calls = []
    cache = TTLCache(0)
    cache.get_or_load(1, lambda k: calls.append(k) or "x")
    cache.get_or_load(1, lambda k: calls.append(k) or "x")
    assert calls == [1, 1]


def test_load_overlapping_invalidate_is_not_stored():
    cache = TTLCache(60, clock=FakeClock())
    versions = iter(["stale", "fresh"])

    def loader(key):
        value = next(versions)
        if value == "stale":
            # A writer invalidates the key while this read is still in flight.
            cache.invalidate(key)
        return value

    assert cache.get_or_load(1, loader) == "stale"
    assert cache.get(1) is None
    assert cache.get_or_load(1, loader) == "fresh"
    assert cache.get(1) == "fresh"
