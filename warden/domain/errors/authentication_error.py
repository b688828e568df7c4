"""Token verification failure reasons.

Plain string constants returned inside ``Failure`` by the token service.
"""


class AuthenticationError:
    """Token validation failure reasons."""

    INVALID_TOKEN = "Invalid token"
    EXPIRED_TOKEN = "Token expired"
    MISSING_TOKEN = "Missing token"
