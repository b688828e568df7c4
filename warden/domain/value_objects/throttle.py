"""Rate limiting value objects."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True, kw_only=True)
class ThrottleTier:
    """Fixed window: at most ``limit`` calls per ``window_seconds``.

    Attributes:
        name: Tier name (``short``, ``medium``, ``long``).
        limit: Allowed calls per window.
        window_seconds: Window length.
    """

    name: str
    limit: int
    window_seconds: float


@dataclass(frozen=True, slots=True, kw_only=True)
class ThrottleDecision:
    """Outcome of an admitted request.

    Attributes:
        remaining: Calls left in the tightest evaluated window.
        checked_tiers: Names of the tiers that were evaluated.
    """

    remaining: int
    checked_tiers: tuple[str, ...] = ()
