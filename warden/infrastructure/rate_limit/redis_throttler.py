"""Redis-backed request throttler (fixed windows).

Every request is counted against each configured tier, e.g.:

    short   3 calls / 1 second
    medium 20 calls / 10 seconds
    long  100 calls / 60 seconds

A tier's counter lives under ``throttle:<tier>:<key>`` and expires at the
end of its window (INCR, then PEXPIRE when the key has no TTL yet). The
first tier whose counter exceeds its limit rejects the call.

Fail-open policy:
    A Redis outage admits the request and logs a warning; admission
    control is never allowed to take the API down.
"""

from collections.abc import Iterable, Sequence

from redis.asyncio import Redis
from redis.exceptions import RedisError

from warden.core.enums import ErrorCode
from warden.core.errors import RateLimitError
from warden.core.result import Failure, Result, Success
from warden.domain.protocols.logger_protocol import LoggerProtocol
from warden.domain.value_objects import ThrottleDecision, ThrottleTier

KEY_PREFIX = "throttle"


class RedisThrottler:
    """Multi-tier fixed-window throttler implementing RateLimitProtocol.

    Args:
        redis_client: redis.asyncio client (fakeredis in tests).
        tiers: Tiers evaluated in order.
        logger: Logger for fail-open warnings.

    Example:
        >>> throttler = RedisThrottler(redis_client=redis, tiers=tiers, logger=logger)
        >>> match await throttler.hit("127.0.0.1:login"):
        ...     case Failure(error=error):
        ...         print(error.retry_after)
    """

    def __init__(
        self,
        *,
        redis_client: Redis,
        tiers: Sequence[ThrottleTier],
        logger: LoggerProtocol,
    ) -> None:
        self.redis = redis_client
        self._tiers = tuple(tiers)
        self._logger = logger

    @property
    def tiers(self) -> tuple[ThrottleTier, ...]:
        """Configured tiers in evaluation order."""
        return self._tiers

    async def hit(
        self, key: str, *, skip: Iterable[str] = ()
    ) -> Result[ThrottleDecision, RateLimitError]:
        """Count one call for ``key`` against every non-skipped tier.

        Args:
            key: Caller identity plus operation scope.
            skip: Tier names to leave out for this call.

        Returns:
            Success(ThrottleDecision) when admitted.
            Failure(RateLimitError) naming the first exceeded tier.
        """
        skipped = set(skip)
        checked: list[str] = []
        remaining: int | None = None

        for tier in self._tiers:
            if tier.name in skipped:
                continue
            try:
                count, ttl_ms = await self._increment(key, tier)
            except (RedisError, OSError) as exc:
                self._logger.warning(
                    "rate_limit_storage_unavailable",
                    key=key,
                    tier=tier.name,
                    error_type=type(exc).__name__,
                    error_message=str(exc),
                )
                return Success(value=ThrottleDecision(remaining=tier.limit))

            checked.append(tier.name)
            if count > tier.limit:
                retry_after = max(ttl_ms, 0) / 1000
                self._logger.info(
                    "rate_limit_exceeded",
                    key=key,
                    tier=tier.name,
                    limit=tier.limit,
                    retry_after=retry_after,
                )
                return Failure(
                    error=RateLimitError(
                        code=ErrorCode.RATE_LIMIT_EXCEEDED,
                        message="Too Many Requests",
                        retry_after=retry_after,
                        tier=tier.name,
                        details={"tier": tier.name, "limit": tier.limit},
                    )
                )

            left = tier.limit - count
            remaining = left if remaining is None else min(remaining, left)

        return Success(
            value=ThrottleDecision(
                remaining=remaining if remaining is not None else 0,
                checked_tiers=tuple(checked),
            )
        )

    async def reset(self, key: str) -> None:
        """Drop every tier counter for ``key``."""
        await self.redis.delete(
            *(f"{KEY_PREFIX}:{tier.name}:{key}" for tier in self._tiers)
        )

    async def _increment(self, key: str, tier: ThrottleTier) -> tuple[int, int]:
        redis_key = f"{KEY_PREFIX}:{tier.name}:{key}"
        window_ms = int(tier.window_seconds * 1000)

        async with self.redis.pipeline(transaction=True) as pipe:
            pipe.incr(redis_key)
            pipe.pttl(redis_key)
            count, ttl_ms = await pipe.execute()

        # -1: key has no expiry yet (first hit of the window).
        if ttl_ms < 0:
            await self.redis.pexpire(redis_key, window_ms)
            ttl_ms = window_ms

        return int(count), int(ttl_ms)


class NoopThrottler:
    """Admits everything. Used when rate limiting is disabled."""

    async def hit(
        self, key: str, *, skip: Iterable[str] = ()
    ) -> Result[ThrottleDecision, RateLimitError]:
        return Success(value=ThrottleDecision(remaining=0))
