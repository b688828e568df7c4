"""Domain value objects."""

from warden.domain.value_objects.throttle import ThrottleDecision, ThrottleTier
from warden.domain.value_objects.token_claims import TokenClaims

__all__ = ["ThrottleDecision", "ThrottleTier", "TokenClaims"]
