import threading
import unittest

from billing.credentials import ServiceTokenCache


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now


class ServiceTokenCacheTests(unittest.TestCase):
    def setUp(self):
        self.clock = FakeClock()
        self.calls = 0

    def fetch(self):
        self.calls += 1
        return f"token-{self.calls}", 3600

    def test_token_is_reused_until_margin(self):
        cache = ServiceTokenCache(self.fetch, clock=self.clock, margin=60)

        self.assertEqual(cache.get(), "token-1")
        self.clock.now += 3500
        self.assertEqual(cache.get(), "token-1")
        self.assertEqual(self.calls, 1)

        # inside the 60s early-expiry window
        self.clock.now += 41
        self.assertEqual(cache.get(), "token-2")
        self.assertEqual(self.calls, 2)

    def test_invalidate_forces_refresh(self):
        cache = ServiceTokenCache(self.fetch, clock=self.clock)
        cache.get()
        cache.invalidate()
        self.assertIsNone(cache.expires_at)
        self.assertEqual(cache.get(), "token-2")

    def test_concurrent_expiry_triggers_single_fetch(self):
        gate = threading.Event()

        def slow_fetch():
            gate.wait(timeout=2)
            return self.fetch()

        cache = ServiceTokenCache(slow_fetch, clock=self.clock)
        results = []
        threads = [threading.Thread(target=lambda: results.append(cache.get())) for _ in range(8)]
        for t in threads:
            t.start()
        gate.set()
        for t in threads:
            t.join(timeout=5)

        self.assertEqual(self.calls, 1)
        self.assertEqual(set(results), {"token-1"})

    def test_fetch_error_propagates_and_keeps_cache_empty(self):
        def broken():
            raise RuntimeError("down")

        cache = ServiceTokenCache(broken, clock=self.clock)
        with self.assertRaises(RuntimeError):
            cache.get()
        self.assertIsNone(cache.expires_at)
