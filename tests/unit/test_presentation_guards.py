"""Unit tests for the authorization guard chain.

Tests cover:
- Transport normalization (headers + WebSocket connection params)
- Token extraction, verification and reduced-trust decoding
- Role checks (every role required, fail closed)
- Throttle step and chain short-circuiting
"""

from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock, Mock

import pytest
from uuid_extensions import uuid7

from warden.core.enums import ErrorCode
from warden.core.errors import AuthenticationError, AuthorizationError, RateLimitError
from warden.core.result import Failure, Success
from warden.domain.enums import UserRole, UserType
from warden.domain.errors import AuthenticationError as TokenFailure
from warden.domain.value_objects import ThrottleDecision, TokenClaims
from warden.presentation.graphql.guards import (
    GuardContext,
    GuardState,
    decode_connection_claims,
    extract_token,
    require_roles,
    run_guards,
    throttle,
    verify_claims,
)


def _claims(*roles: UserRole) -> TokenClaims:
    now = datetime.now(UTC)
    return TokenClaims(
        user_id=uuid7(),
        email="test@example.com",
        user_type=UserType.USER,
        roles=frozenset(roles),
        issued_at=now,
        expires_at=now + timedelta(minutes=5),
    )


def _ctx(headers=None, params=None) -> GuardContext:
    return GuardContext.from_transport(
        headers=headers,
        connection_params=params,
        client_host="127.0.0.1",
        operation="users",
    )


@pytest.mark.unit
class TestGuardContext:
    """Transport normalization."""

    def test_header_keys_are_lowercased(self):
        ctx = _ctx(headers={"Authorization": "Bearer abc"})

        assert ctx.headers["authorization"] == "Bearer abc"
        assert ctx.state == GuardState.UNAUTHENTICATED

    def test_connection_params_override_headers(self):
        ctx = _ctx(
            headers={"authorization": "Bearer from-header"},
            params={"Authorization": "Bearer from-params", "retries": 3},
        )

        assert ctx.headers["authorization"] == "Bearer from-params"
        assert "retries" not in ctx.headers

    def test_missing_client_host_defaults(self):
        ctx = GuardContext.from_transport(operation="me")

        assert ctx.client_host == "unknown"


@pytest.mark.unit
class TestExtractToken:
    """Bearer token extraction."""

    async def test_extracts_bearer_token(self):
        result = await extract_token(_ctx(headers={"authorization": "Bearer abc.def"}))

        assert isinstance(result, Success)
        assert result.value.token == "abc.def"
        assert result.value.state == GuardState.TOKEN_EXTRACTED

    async def test_accepts_raw_token_without_prefix(self):
        result = await extract_token(_ctx(headers={"authorization": "abc.def"}))

        assert isinstance(result, Success)
        assert result.value.token == "abc.def"

    async def test_missing_header_fails(self):
        result = await extract_token(_ctx())

        assert isinstance(result, Failure)
        assert isinstance(result.error, AuthenticationError)
        assert result.error.code == ErrorCode.TOKEN_MISSING

    async def test_empty_bearer_fails(self):
        result = await extract_token(_ctx(headers={"authorization": "Bearer  "}))

        assert isinstance(result, Failure)


@pytest.mark.unit
class TestVerifyClaims:
    """Signature and expiry verification."""

    async def test_verified_claims_attached(self):
        claims = _claims(UserRole.ROLE_USER)
        token_service = Mock()
        token_service.verify.return_value = Success(value=claims)
        ctx = (await extract_token(_ctx(headers={"authorization": "Bearer t"}))).value

        result = await verify_claims(token_service)(ctx)

        assert isinstance(result, Success)
        assert result.value.claims == claims
        assert result.value.state == GuardState.CLAIMS_VERIFIED
        token_service.verify.assert_called_once_with("t")

    async def test_expired_token_maps_to_token_expired(self):
        token_service = Mock()
        token_service.verify.return_value = Failure(error=TokenFailure.EXPIRED_TOKEN)
        ctx = (await extract_token(_ctx(headers={"authorization": "Bearer t"}))).value

        result = await verify_claims(token_service)(ctx)

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.TOKEN_EXPIRED

    async def test_invalid_token_maps_to_token_invalid(self):
        token_service = Mock()
        token_service.verify.return_value = Failure(error=TokenFailure.INVALID_TOKEN)
        ctx = (await extract_token(_ctx(headers={"authorization": "Bearer t"}))).value

        result = await verify_claims(token_service)(ctx)

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.TOKEN_INVALID

    async def test_without_token_fails(self):
        token_service = Mock()

        result = await verify_claims(token_service)(_ctx())

        assert isinstance(result, Failure)
        token_service.verify.assert_not_called()


@pytest.mark.unit
class TestDecodeConnectionClaims:
    """Reduced-trust decoding for subscriptions."""

    async def test_decodes_token_from_connection_params(self):
        claims = _claims(UserRole.ROLE_ADMIN)
        token_service = Mock()
        token_service.decode_unverified.return_value = claims

        result = await decode_connection_claims(token_service)(
            _ctx(params={"Authorization": "Bearer ws-token"})
        )

        assert isinstance(result, Success)
        assert result.value.claims == claims
        assert result.value.state == GuardState.CLAIMS_DECODED
        token_service.decode_unverified.assert_called_once_with("ws-token")
        token_service.verify.assert_not_called()

    async def test_undecodable_token_fails(self):
        token_service = Mock()
        token_service.decode_unverified.return_value = None

        result = await decode_connection_claims(token_service)(
            _ctx(params={"authorization": "garbage"})
        )

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.TOKEN_INVALID

    async def test_missing_token_fails(self):
        result = await decode_connection_claims(Mock())(_ctx())

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.TOKEN_MISSING


@pytest.mark.unit
class TestRequireRoles:
    """Role checks."""

    async def _with_claims(self, *roles: UserRole) -> GuardContext:
        token_service = Mock()
        token_service.decode_unverified.return_value = _claims(*roles)
        result = await decode_connection_claims(token_service)(
            _ctx(headers={"authorization": "Bearer t"})
        )
        return result.value

    async def test_all_roles_present(self):
        ctx = await self._with_claims(UserRole.ROLE_USER, UserRole.ROLE_ADMIN)

        result = await require_roles(UserRole.ROLE_ADMIN, UserRole.ROLE_USER)(ctx)

        assert isinstance(result, Success)
        assert result.value.state == GuardState.ROLE_CHECKED

    async def test_missing_role_is_forbidden(self):
        ctx = await self._with_claims(UserRole.ROLE_USER)

        result = await require_roles(UserRole.ROLE_ADMIN)(ctx)

        assert isinstance(result, Failure)
        assert isinstance(result.error, AuthorizationError)
        assert result.error.code == ErrorCode.PERMISSION_DENIED
        assert result.error.required_permission == "ROLE_ADMIN"

    async def test_no_roles_declared_fails_closed(self):
        ctx = await self._with_claims(UserRole.ROLE_ADMIN)

        result = await require_roles()(ctx)

        assert isinstance(result, Failure)

    async def test_no_claims_is_unauthenticated(self):
        result = await require_roles(UserRole.ROLE_USER)(_ctx())

        assert isinstance(result, Failure)
        assert isinstance(result.error, AuthenticationError)


@pytest.mark.unit
class TestThrottleAndChain:
    """Throttle step and chain evaluation."""

    async def test_throttle_keys_by_scope_and_client(self):
        throttler = AsyncMock()
        throttler.hit.return_value = Success(value=ThrottleDecision(remaining=2))

        result = await throttle(throttler, scope="me", skip=("short",))(_ctx())

        assert isinstance(result, Success)
        throttler.hit.assert_awaited_once_with("me:127.0.0.1", skip=("short",))

    async def test_throttle_rejection_is_returned(self):
        throttler = AsyncMock()
        rejection = Failure(
            error=RateLimitError(
                code=ErrorCode.RATE_LIMIT_EXCEEDED,
                message="Too Many Requests",
                retry_after=0.5,
                tier="short",
            )
        )
        throttler.hit.return_value = rejection

        result = await throttle(throttler, scope="login")(_ctx())

        assert result is rejection

    async def test_chain_allows_when_every_step_passes(self):
        token_service = Mock()
        token_service.verify.return_value = Success(value=_claims(UserRole.ROLE_USER))

        result = await run_guards(
            _ctx(headers={"authorization": "Bearer t"}),
            [extract_token, verify_claims(token_service), require_roles(UserRole.ROLE_USER)],
        )

        assert isinstance(result, Success)
        assert result.value.state == GuardState.ALLOWED

    async def test_chain_stops_at_first_failure(self):
        token_service = Mock()

        result = await run_guards(
            _ctx(),
            [extract_token, verify_claims(token_service)],
        )

        assert isinstance(result, Failure)
        token_service.verify.assert_not_called()

    async def test_empty_chain_allows(self):
        result = await run_guards(_ctx(), [])

        assert isinstance(result, Success)
        assert result.value.state == GuardState.ALLOWED
