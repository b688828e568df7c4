"""User profile entity."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True, kw_only=True)
class Profile:
    """Optional personal details attached one-to-one to a user.

    Attributes:
        first_name: Given name.
        last_name: Family name.
        username: Display handle.
    """

    first_name: str | None = None
    last_name: str | None = None
    username: str | None = None
