"""
Tests for the sliding-window contact form rate limiter.
"""
from django.core.cache import cache
from django.test import RequestFactory

from contact.conftest import NOW_MS
from contact.rate_limiting import (
    CacheSubmissionStore,
    InMemorySubmissionStore,
    RateLimiter,
    get_client_ip,
)

MINUTE_MS = 60 * 1000


class TestRateLimiter:

    def test_empty_store_not_limited(self, limiter):
        assert limiter.is_limited() is False
        assert limiter.retry_after() == 0

    def test_five_recent_submissions_limit(self, store, limiter):
        store.write([NOW_MS - i * MINUTE_MS for i in range(5)])
        assert limiter.is_limited() is True

    def test_five_stale_submissions_do_not_limit(self, store, limiter):
        store.write([NOW_MS - (11 + i) * MINUTE_MS for i in range(5)])
        assert limiter.is_limited() is False

    def test_entry_exactly_at_window_start_has_expired(self, store, limiter):
        store.write([NOW_MS - 10 * MINUTE_MS] + [NOW_MS - MINUTE_MS] * 4)
        assert limiter.is_limited() is False

    def test_record_is_reflected(self, store, limiter):
        store.write([NOW_MS - i * MINUTE_MS for i in range(4)])
        assert limiter.is_limited() is False

        limiter.record()

        assert limiter.is_limited() is True
        assert store.read()[-1] == NOW_MS

    def test_record_never_prunes_expired_entries(self, store, limiter):
        stale = NOW_MS - 60 * MINUTE_MS
        store.write([stale])

        limiter.record()

        assert store.read() == [stale, NOW_MS]

    def test_retry_after_counts_down_to_oldest_blocking_entry(self, store, limiter):
        store.write([NOW_MS - 9 * MINUTE_MS] + [NOW_MS - MINUTE_MS] * 4)
        assert limiter.retry_after() == 60

    def test_limit_and_window_are_configurable(self, clock):
        store = InMemorySubmissionStore([NOW_MS - 30 * 1000])
        limiter = RateLimiter(store, max_submissions=1, window_seconds=60, clock=clock)

        assert limiter.is_limited() is True

        clock.now += 31 * 1000
        assert limiter.is_limited() is False


class TestCacheSubmissionStore:

    def test_missing_key_reads_empty(self):
        assert CacheSubmissionStore('contact_submissions:test').read() == []

    def test_write_then_read(self):
        store = CacheSubmissionStore('contact_submissions:test')
        store.write([1, 2, 3])

        assert store.read() == [1, 2, 3]
        assert cache.get('contact_submissions:test') == '[1, 2, 3]'

    def test_corrupt_value_reads_empty(self):
        cache.set('contact_submissions:test', 'not json')
        assert CacheSubmissionStore('contact_submissions:test').read() == []

    def test_keys_are_independent(self):
        CacheSubmissionStore('contact_submissions:a').write([1])
        assert CacheSubmissionStore('contact_submissions:b').read() == []

    def test_works_with_rate_limiter(self, clock):
        limiter = RateLimiter(CacheSubmissionStore('contact_submissions:rl'), clock=clock)
        for _ in range(5):
            limiter.record()

        assert limiter.is_limited() is True


class TestGetClientIp:

    def test_remote_addr(self):
        request = RequestFactory().get('/', REMOTE_ADDR='10.0.0.5')
        assert get_client_ip(request) == '10.0.0.5'

    def test_forwarded_for_ignored_without_trusted_proxy(self):
        request = RequestFactory().get(
            '/', REMOTE_ADDR='10.0.0.5', HTTP_X_FORWARDED_FOR='203.0.113.7'
        )
        assert get_client_ip(request) == '10.0.0.5'

    def test_trusted_proxy_hop_counted_from_the_right(self):
        request = RequestFactory().get(
            '/', REMOTE_ADDR='10.0.0.1', HTTP_X_FORWARDED_FOR='198.51.100.9, 203.0.113.7'
        )
        assert get_client_ip(request, trusted_proxy_count=1) == '203.0.113.7'

    def test_two_trusted_proxies(self):
        request = RequestFactory().get(
            '/', REMOTE_ADDR='10.0.0.1', HTTP_X_FORWARDED_FOR='198.51.100.9, 203.0.113.7, 10.0.0.2'
        )
        assert get_client_ip(request, trusted_proxy_count=2) == '203.0.113.7'

    def test_short_forwarded_for_falls_back_to_remote_addr(self):
        request = RequestFactory().get(
            '/', REMOTE_ADDR='10.0.0.1', HTTP_X_FORWARDED_FOR='203.0.113.7'
        )
        assert get_client_ip(request, trusted_proxy_count=2) == '10.0.0.1'
