"""GraphQL object, input and enum types.

Domain enums are exposed as GraphQL enums as-is. Object types are thin
views built from domain entities with ``from_domain``.
"""

from datetime import datetime
from typing import Any

import strawberry
from strawberry.scalars import JSON

from warden.application.dtos import AuthPayload
from warden.domain.entities import LogRecord, Profile, User
from warden.domain.enums import LogOrigin, LogType, UserRole, UserType

UserRoleEnum = strawberry.enum(UserRole, name="UserRole")
UserTypeEnum = strawberry.enum(UserType, name="UserType")
LogTypeEnum = strawberry.enum(LogType, name="LogType")
LogOriginEnum = strawberry.enum(LogOrigin, name="LogFrom")


@strawberry.type(name="Profile")
class ProfileNode:
    first_name: str | None
    last_name: str | None
    username: str | None

    @classmethod
    def from_domain(cls, profile: Profile) -> "ProfileNode":
        return cls(
            first_name=profile.first_name,
            last_name=profile.last_name,
            username=profile.username,
        )


@strawberry.type(name="User")
class UserNode:
    """User account (password never exposed)."""

    id: strawberry.ID
    email: str
    type: UserTypeEnum
    roles: list[UserRoleEnum]
    profile: ProfileNode | None
    created_at: datetime | None
    updated_at: datetime | None

    @classmethod
    def from_domain(cls, user: User) -> "UserNode":
        return cls(
            id=strawberry.ID(str(user.id)),
            email=user.email,
            type=user.user_type,
            roles=sorted(user.roles, key=lambda role: role.value),
            profile=ProfileNode.from_domain(user.profile) if user.profile else None,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


@strawberry.type(name="Log")
class LogNode:
    """Stored log record."""

    id: strawberry.ID
    type: LogTypeEnum
    origin: LogOriginEnum = strawberry.field(name="from")
    data: JSON
    created_at: datetime | None

    @classmethod
    def from_domain(cls, record: LogRecord) -> "LogNode":
        return cls(
            id=strawberry.ID(str(record.id)),
            type=record.type,
            origin=record.origin,
            data=record.data,
            created_at=record.created_at,
        )


@strawberry.type(name="Auth")
class AuthNode:
    access_token: str
    user: UserNode

    @classmethod
    def from_domain(cls, payload: AuthPayload) -> "AuthNode":
        return cls(
            access_token=payload.access_token,
            user=UserNode.from_domain(payload.user),
        )


@strawberry.input
class ProfileInput:
    first_name: str | None = None
    last_name: str | None = None
    username: str | None = None

    def to_domain(self) -> Profile:
        return Profile(
            first_name=self.first_name,
            last_name=self.last_name,
            username=self.username,
        )


@strawberry.input
class LoginInput:
    email: str
    password: str


@strawberry.input
class RegisterInput:
    email: str
    password: str
    profile: ProfileInput | None = None


@strawberry.input
class UserWhereUniqueInput:
    """Identify one user by id or email."""

    id: strawberry.ID | None = None
    email: str | None = None


@strawberry.input
class CreateUserInput:
    email: str
    password: str
    type: UserTypeEnum = UserType.USER
    roles: list[UserRoleEnum] | None = None
    profile: ProfileInput | None = None


@strawberry.input
class UpdateUserInput:
    email: str | None = None
    password: str | None = None
    type: UserTypeEnum | None = None
    roles: list[UserRoleEnum] | None = None
    profile: ProfileInput | None = None


@strawberry.input
class CreateLogInput:
    type: LogTypeEnum
    event_name: str
    service_name: str
    origin: LogOriginEnum = strawberry.field(name="from")
    description: str | None = None
    message: str | None = None
    error_code: str | None = None
    stack: str | None = None
    context: JSON | None = None

    def to_data(self) -> dict[str, Any]:
        """Raw log fields, validated by the create-log handler."""
        return {
            "type": self.type,
            "origin": self.origin,
            "event_name": self.event_name,
            "service_name": self.service_name,
            "description": self.description,
            "message": self.message,
            "error_code": self.error_code,
            "stack": self.stack,
            "context": self.context,
        }
