"""Unit tests for domain failure -> GraphQL error translation."""

import pytest
from graphql import GraphQLError

from warden.core.enums import ErrorCode
from warden.core.errors import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    DomainError,
    NotFoundError,
    RateLimitError,
    ValidationError,
)
from warden.core.result import Failure, Success
from warden.presentation.graphql.errors import (
    DATABASE_UNAVAILABLE_MESSAGE,
    database_unavailable_error,
    error_category,
    to_graphql_error,
    unwrap,
)


@pytest.mark.unit
class TestErrorCategory:
    """Each error family maps to one public code."""

    @pytest.mark.parametrize(
        ("error", "category"),
        [
            (
                AuthenticationError(code=ErrorCode.TOKEN_INVALID, message="Unauthorized"),
                "UNAUTHENTICATED",
            ),
            (
                AuthorizationError(code=ErrorCode.PERMISSION_DENIED, message="Forbidden"),
                "FORBIDDEN",
            ),
            (
                NotFoundError(
                    code=ErrorCode.USER_NOT_FOUND,
                    message="User not found",
                    resource_type="User",
                    resource_id="x",
                ),
                "NOT_FOUND",
            ),
            (
                ConflictError(
                    code=ErrorCode.USER_ALREADY_EXISTS,
                    message="User already exists",
                    resource_type="User",
                ),
                "CONFLICT",
            ),
            (
                ValidationError(code=ErrorCode.VALIDATION_FAILED, message="bad"),
                "BAD_USER_INPUT",
            ),
            (
                RateLimitError(
                    code=ErrorCode.RATE_LIMIT_EXCEEDED, message="Too Many Requests"
                ),
                "THROTTLED",
            ),
            (
                DomainError(code=ErrorCode.INVALID_INPUT, message="other"),
                "INTERNAL_SERVER_ERROR",
            ),
        ],
    )
    def test_category(self, error, category):
        assert error_category(error) == category


@pytest.mark.unit
class TestToGraphQLError:
    """Extensions carried to the client."""

    def test_validation_error_includes_field(self):
        error = to_graphql_error(
            ValidationError(
                code=ErrorCode.VALIDATION_FAILED, message="roles empty", field="roles"
            )
        )

        assert error.message == "roles empty"
        assert error.extensions == {
            "code": "BAD_USER_INPUT",
            "reason": "validation_failed",
            "field": "roles",
        }

    def test_rate_limit_error_includes_retry_after(self):
        error = to_graphql_error(
            RateLimitError(
                code=ErrorCode.RATE_LIMIT_EXCEEDED,
                message="Too Many Requests",
                retry_after=0.75,
                tier="short",
            )
        )

        assert error.extensions["code"] == "THROTTLED"
        assert error.extensions["retryAfter"] == 0.75

    def test_database_error_hides_driver_details(self):
        error = database_unavailable_error()

        assert error.message == DATABASE_UNAVAILABLE_MESSAGE
        assert error.extensions == {"code": "INTERNAL_SERVER_ERROR"}


@pytest.mark.unit
class TestUnwrap:
    """Result unwrapping."""

    def test_success_returns_value(self):
        assert unwrap(Success(value=3)) == 3

    def test_failure_raises_graphql_error(self):
        with pytest.raises(GraphQLError) as exc_info:
            unwrap(
                Failure(
                    error=AuthorizationError(
                        code=ErrorCode.PERMISSION_DENIED, message="Forbidden"
                    )
                )
            )

        assert exc_info.value.extensions["code"] == "FORBIDDEN"
