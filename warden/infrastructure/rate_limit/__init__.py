"""Admission control adapters."""

from warden.infrastructure.rate_limit.redis_throttler import (
    NoopThrottler,
    RedisThrottler,
)

__all__ = ["NoopThrottler", "RedisThrottler"]
