"""
Rate limiting for the quiz API

Login and registration are where passwords get guessed, so each client gets
a small per-minute budget on each of those paths, counted separately from
the general per-client budget that covers every other route.
"""
import time
from collections import defaultdict, deque
from fastapi import Request
from typing import Deque, Dict, Iterable, Tuple
import logging

from app.config import settings
from app.exceptions import RateLimitError

logger = logging.getLogger(__name__)

CREDENTIAL_PATHS = ("/api/auth/login", "/api/auth/register")

# Bucket for every path that is not a credential path
GENERAL = "*"

MINUTE = 60
HOUR = 3600


class RateLimiter:
    """
    In-memory sliding-window rate limiter, per process

    Buckets are keyed by (client IP, credential path) or (client IP, GENERAL)
    and hold the request timestamps of the last hour.
    """

    def __init__(
        self,
        requests_per_minute: int = 60,
        requests_per_hour: int = 1000,
        credential_requests_per_minute: int = 10,
        credential_paths: Iterable[str] = CREDENTIAL_PATHS
    ):
        self.requests_per_minute = requests_per_minute
        self.requests_per_hour = requests_per_hour
        self.credential_requests_per_minute = credential_requests_per_minute
        self.credential_paths = frozenset(credential_paths)

        self.buckets: Dict[Tuple[str, str], Deque[float]] = defaultdict(deque)
        self._last_sweep = 0.0

    def bucket_for(self, request: Request) -> Tuple[str, str]:
        """Client IP plus the credential path, or GENERAL for any other route"""
        client_ip = request.client.host if request.client else "unknown"
        path = request.url.path.rstrip("/")
        return client_ip, path if path in self.credential_paths else GENERAL

    def _sweep(self, now: float) -> None:
        """Forget clients that have been idle for an hour"""
        if now - self._last_sweep < MINUTE:
            return
        self._last_sweep = now

        for key in [k for k, hits in self.buckets.items() if not hits or hits[-1] <= now - HOUR]:
            del self.buckets[key]

    async def check_rate_limit(self, request: Request) -> None:
        """
        Record the request or reject it

        Raises:
            RateLimitError: the bucket's minute or hour budget is spent
        """
        now = time.time()
        self._sweep(now)

        client_ip, scope = key = self.bucket_for(request)
        hits = self.buckets[key]
        while hits and hits[0] <= now - HOUR:
            hits.popleft()
        last_minute = sum(1 for ts in hits if ts > now - MINUTE)

        if scope != GENERAL:
            if last_minute >= self.credential_requests_per_minute:
                logger.warning(f"Credential rate limit exceeded: {client_ip} on {scope}")
                raise RateLimitError(
                    f"Too many attempts. Limit: {self.credential_requests_per_minute} "
                    f"requests per minute to {scope}",
                    retry_after=MINUTE
                )
        elif last_minute >= self.requests_per_minute:
            logger.warning(f"Rate limit exceeded (minute): {client_ip}")
            raise RateLimitError(
                f"Too many requests. Limit: {self.requests_per_minute} requests per minute",
                retry_after=MINUTE
            )
        elif len(hits) >= self.requests_per_hour:
            logger.warning(f"Rate limit exceeded (hour): {client_ip}")
            raise RateLimitError(
                f"Too many requests. Limit: {self.requests_per_hour} requests per hour",
                retry_after=HOUR
            )

        hits.append(now)
        logger.debug(f"Rate limit check passed: {client_ip} {scope} (minute: {last_minute + 1})")


# Global instance
rate_limiter = RateLimiter(
    requests_per_minute=settings.RATE_LIMIT_PER_MINUTE,
    requests_per_hour=settings.RATE_LIMIT_PER_HOUR,
    credential_requests_per_minute=settings.CREDENTIAL_RATE_LIMIT_PER_MINUTE
)
