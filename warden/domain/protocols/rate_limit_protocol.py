"""Admission control port."""

from collections.abc import Iterable
from typing import Protocol

from warden.core.errors import RateLimitError
from warden.core.result import Result
from warden.domain.value_objects import ThrottleDecision


class RateLimitProtocol(Protocol):
    """Count a request against every configured tier.

    Implementations must fail open: a storage outage admits the request.
    """

    async def hit(
        self, key: str, *, skip: Iterable[str] = ()
    ) -> Result[ThrottleDecision, RateLimitError]:
        """Record one call for ``key``.

        Args:
            key: Caller identity (client address or user id) plus scope.
            skip: Tier names not evaluated for this call.

        Returns:
            Success(ThrottleDecision) when admitted, Failure(RateLimitError)
            naming the first exceeded tier otherwise.
        """
        ...
