"""
Rate Limiting Utilities for Contact Form

Prevents spam and abuse of the contact form with a sliding window over
past successful submissions.

Known limitations:
- The stored list is never compacted; expired entries are only filtered.
- Check and record are not atomic, so parallel submissions from the same
  client can race past the limit.
"""
import json
import logging

from django.core.cache import caches
from django.utils import timezone

logger = logging.getLogger(__name__)


def get_client_ip(request, trusted_proxy_count=0):
    """
    Get client IP address from request.

    X-Forwarded-For is client controlled, so it is only read when the app
    runs behind trusted_proxy_count reverse proxies. Each proxy appends the
    address it saw, so the client is that many entries from the right.
    """
    remote_addr = request.META.get('REMOTE_ADDR')
    if trusted_proxy_count <= 0:
        return remote_addr

    x_forwarded_for = request.META.get('HTTP_X_FORWARDED_FOR', '')
    hops = [hop.strip() for hop in x_forwarded_for.split(',') if hop.strip()]
    if len(hops) < trusted_proxy_count:
        return remote_addr
    return hops[-trusted_proxy_count]


def now_ms():
    """Current time as epoch milliseconds."""
    return int(timezone.now().timestamp() * 1000)


class SubmissionStore:
    """Persisted ordered list of successful-submission timestamps (epoch ms)."""

    def read(self):
        raise NotImplementedError

    def write(self, timestamps):
        raise NotImplementedError


class InMemorySubmissionStore(SubmissionStore):
    """Process-local store, mainly for tests."""

    def __init__(self, timestamps=None):
        self._timestamps = list(timestamps or [])

    def read(self):
        return list(self._timestamps)

    def write(self, timestamps):
        self._timestamps = list(timestamps)


class CacheSubmissionStore(SubmissionStore):
    """
    Store backed by a single Django cache key holding a JSON list.

    The key never expires; the whole list is rewritten on every write.
    """

    def __init__(self, key, alias='default'):
        self.key = key
        self.alias = alias

    @property
    def cache(self):
        return caches[self.alias]

    def read(self):
        raw = self.cache.get(self.key)
        if raw is None:
            return []
        try:
            values = json.loads(raw)
            return [int(value) for value in values]
        except (TypeError, ValueError) as e:
            logger.warning(f"Discarding unreadable rate limit entry {self.key}: {e}")
            return []

    def write(self, timestamps):
        self.cache.set(self.key, json.dumps([int(ts) for ts in timestamps]), timeout=None)


class RateLimiter:
    """
    Sliding-window limiter over successful submissions.

    Usage:
        limiter = RateLimiter(CacheSubmissionStore('contact_submissions:1.2.3.4'))
        if limiter.is_limited():
            ...
        limiter.record()  # only after the webhook confirmed success
    """

    def __init__(self, store, max_submissions=5, window_seconds=600, clock=now_ms):
        self.store = store
        self.max_submissions = max_submissions
        self.window_ms = int(window_seconds * 1000)
        self.clock = clock

    def _recent(self, now):
        window_start = now - self.window_ms
        return [ts for ts in self.store.read() if ts > window_start]

    def is_limited(self):
        """True if the window already holds max_submissions entries."""
        return len(self._recent(self.clock())) >= self.max_submissions

    def retry_after(self):
        """
        Seconds until a new submission would be allowed.

        Returns:
            int: 0 when not limited
        """
        now = self.clock()
        recent = sorted(self._recent(now))
        if len(recent) < self.max_submissions:
            return 0
        # Oldest entry that has to expire to drop below the limit
        blocking = recent[len(recent) - self.max_submissions]
        remaining_ms = blocking + self.window_ms - now
        return max(1, -(-remaining_ms // 1000))

    def record(self):
        """Append the current time to the stored list."""
        timestamps = self.store.read()
        timestamps.append(self.clock())
        self.store.write(timestamps)
