# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import threading
import time
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass
from functools import wraps

from flask import Request, request

from taxidesk.shared.errors import RateLimitedError
from taxidesk.shared.logging import logger


@dataclass
class Bucket:
    timestamps: deque[float]


class InMemoryRateLimiter:
    def __init__(
        self,
        limit: int,
        window_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._limit = max(1, int(limit))
        self._window = max(0.1, float(window_seconds))
        self._clock = clock
        self._lock = threading.Lock()
        self._buckets: dict[str, Bucket] = {}
        self._last_sweep = clock()

    def hit(self, key: str) -> float:
        """Record an attempt; return 0 if allowed, else seconds until the next slot."""
        now = self._clock()
        with self._lock:
            if now - self._last_sweep > self._window:
                self._sweep(now)

            bucket = self._buckets.get(key)
            if bucket is None:
                bucket = self._buckets[key] = Bucket(deque(maxlen=self._limit))
            self._expire(bucket, now)
            if len(bucket.timestamps) >= self._limit:
                return self._window - (now - bucket.timestamps[0])
            bucket.timestamps.append(now)
            return 0.0

    def __len__(self) -> int:
        with self._lock:
            return len(self._buckets)

    def _expire(self, bucket: Bucket, now: float) -> None:
        while bucket.timestamps and (now - bucket.timestamps[0]) > self._window:
            bucket.timestamps.popleft()

    def _sweep(self, now: float) -> None:
        for key in list(self._buckets):
            bucket = self._buckets[key]
            self._expire(bucket, now)
            if not bucket.timestamps:
                del self._buckets[key]
        self._last_sweep = now


def _client_key(req: Request) -> str:
    # X-Forwarded-For is only honoured through ProxyFix, see create_app.
    return req.remote_addr or "unknown"


def rate_limit(limiter: InMemoryRateLimiter | None):
    """Throttle a view per client address; ``None`` disables the check."""

    def decorator(f: Callable):
        if limiter is None:
            return f

        @wraps(f)
        def wrapper(*args, **kwargs):
            key = f"{request.path}:{_client_key(request)}"
            retry_after = limiter.hit(key)
            if retry_after > 0:
                logger.warning(f"rate_limit: throttled {key}")
                raise RateLimitedError(retry_after)
            return f(*args, **kwargs)

        return wrapper

    return decorator


__all__ = ["InMemoryRateLimiter", "rate_limit"]
