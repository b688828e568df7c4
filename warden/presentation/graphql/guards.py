"""Authorization guard chain.

Each protected operation declares an ordered list of guard steps. The
chain runs before the resolver body; the first failing step stops it and
the resolver never executes.

A step is an async callable ``(GuardContext) -> Result[GuardContext, DomainError]``.
Steps never mutate the context, they return an advanced copy, so the
state a request has reached is always explicit:

    UNAUTHENTICATED -> TOKEN_EXTRACTED -> CLAIMS_VERIFIED -> ROLE_CHECKED -> ALLOWED
    UNAUTHENTICATED -> CLAIMS_DECODED -> ROLE_CHECKED -> ALLOWED   (decode-only chains)
    any failing step -> DENIED

``CLAIMS_DECODED`` is the reduced-trust path: the token from the WebSocket
connection parameters is decoded WITHOUT signature or expiry verification,
only to read its roles. It is never the final authorization decision: the
user-change subscriptions run ``verify_claims`` first, and the decode step
then keeps the verified claims.

Usage:
    chain = (
        throttle(throttler, scope="users"),
        extract_token,
        verify_claims(token_service),
        require_roles(UserRole.ROLE_USER),
    )
    result = await run_guards(GuardContext.from_transport(...), chain)
"""

from collections.abc import Awaitable, Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

from warden.core.enums import ErrorCode
from warden.core.errors import AuthenticationError, AuthorizationError, DomainError
from warden.core.result import Failure, Result, Success
from warden.domain.enums import UserRole
from warden.domain.errors import AuthenticationError as TokenFailure
from warden.domain.protocols import RateLimitProtocol, TokenServiceProtocol
from warden.domain.value_objects import TokenClaims

BEARER_SCHEME = "bearer"


class GuardState(Enum):
    """How far a call has progressed through its guard chain."""

    UNAUTHENTICATED = "unauthenticated"
    TOKEN_EXTRACTED = "token_extracted"
    CLAIMS_DECODED = "claims_decoded"
    CLAIMS_VERIFIED = "claims_verified"
    ROLE_CHECKED = "role_checked"
    ALLOWED = "allowed"
    DENIED = "denied"


@dataclass(frozen=True, kw_only=True)
class GuardContext:
    """Per-call authorization state.

    Attributes:
        headers: Lower-cased request headers. For WebSocket calls the
            connection-init parameters are merged in (lower-cased keys,
            taking precedence over upgrade-request headers).
        client_host: Remote address used as throttle identity.
        operation: GraphQL field being resolved.
        token: Bearer token once extracted.
        claims: Token claims once decoded or verified.
        state: Progress through the chain.
    """

    headers: Mapping[str, str] = field(default_factory=dict)
    client_host: str = "unknown"
    operation: str = ""
    token: str | None = None
    claims: TokenClaims | None = None
    state: GuardState = GuardState.UNAUTHENTICATED

    @classmethod
    def from_transport(
        cls,
        *,
        headers: Mapping[str, str] | None = None,
        connection_params: Mapping[str, Any] | None = None,
        client_host: str | None = None,
        operation: str = "",
    ) -> "GuardContext":
        """Normalize HTTP headers and WebSocket connection parameters.

        Connection parameter keys are lower-cased (``Authorization`` and
        ``authorization`` are equivalent) and non-string values ignored.
        """
        merged = {key.lower(): value for key, value in (headers or {}).items()}
        for key, value in (connection_params or {}).items():
            if isinstance(key, str) and isinstance(value, str):
                merged[key.lower()] = value
        return cls(
            headers=merged,
            client_host=client_host or "unknown",
            operation=operation,
        )


Guard = Callable[[GuardContext], Awaitable[Result[GuardContext, DomainError]]]


def _unauthenticated(code: ErrorCode, reason: str) -> Failure[AuthenticationError]:
    return Failure(
        error=AuthenticationError(
            code=code,
            message="Unauthorized",
            details={"reason": reason},
        )
    )


def _bearer_token(headers: Mapping[str, str]) -> str | None:
    parts = headers.get("authorization", "").split(None, 1)
    if parts and parts[0].lower() == BEARER_SCHEME:
        parts = parts[1:]
    return parts[0].strip() if parts else None


async def extract_token(ctx: GuardContext) -> Result[GuardContext, DomainError]:
    """Read the bearer token from the Authorization header.

    Returns:
        Context in TOKEN_EXTRACTED, or Failure(AuthenticationError) when no
        token is present.
    """
    token = _bearer_token(ctx.headers)
    if token is None:
        return _unauthenticated(ErrorCode.TOKEN_MISSING, TokenFailure.MISSING_TOKEN)
    return Success(value=replace(ctx, token=token, state=GuardState.TOKEN_EXTRACTED))


def verify_claims(token_service: TokenServiceProtocol) -> Guard:
    """Build a step that verifies signature and expiry of the token.

    Args:
        token_service: Token verifier.

    Returns:
        Guard leaving the context in CLAIMS_VERIFIED with claims attached.
    """

    async def verify(ctx: GuardContext) -> Result[GuardContext, DomainError]:
        if ctx.token is None:
            return _unauthenticated(ErrorCode.TOKEN_MISSING, TokenFailure.MISSING_TOKEN)

        match token_service.verify(ctx.token):
            case Success(value=claims):
                return Success(
                    value=replace(ctx, claims=claims, state=GuardState.CLAIMS_VERIFIED)
                )
            case Failure(error=reason):
                code = (
                    ErrorCode.TOKEN_EXPIRED
                    if reason == TokenFailure.EXPIRED_TOKEN
                    else ErrorCode.TOKEN_INVALID
                )
                return _unauthenticated(code, reason)
        return _unauthenticated(ErrorCode.TOKEN_INVALID, TokenFailure.INVALID_TOKEN)

    return verify


def decode_connection_claims(token_service: TokenServiceProtocol) -> Guard:
    """Build the reduced-trust step used by user-change subscriptions.

    Reads the token from the (merged) connection headers and decodes it
    without verification. Claims already verified earlier in the chain are
    kept as they are, so placed after ``verify_claims`` it never weakens
    the chain.

    Returns:
        Guard leaving the context in CLAIMS_DECODED.
    """

    async def decode(ctx: GuardContext) -> Result[GuardContext, DomainError]:
        if ctx.claims is not None:
            return Success(value=ctx)

        token = ctx.token or _bearer_token(ctx.headers)
        if token is None:
            return _unauthenticated(ErrorCode.TOKEN_MISSING, TokenFailure.MISSING_TOKEN)

        claims = token_service.decode_unverified(token)
        if claims is None:
            return _unauthenticated(ErrorCode.TOKEN_INVALID, TokenFailure.INVALID_TOKEN)
        return Success(
            value=replace(
                ctx, token=token, claims=claims, state=GuardState.CLAIMS_DECODED
            )
        )

    return decode


def require_roles(*roles: UserRole) -> Guard:
    """Build a step requiring EVERY listed role.

    Fails closed: a chain with no claims or a step declared with no roles
    denies access.

    Returns:
        Guard leaving the context in ROLE_CHECKED.
    """
    required = tuple(roles)

    async def check(ctx: GuardContext) -> Result[GuardContext, DomainError]:
        if ctx.claims is None:
            return _unauthenticated(ErrorCode.TOKEN_MISSING, TokenFailure.MISSING_TOKEN)

        if not ctx.claims.has_roles(*required):
            return Failure(
                error=AuthorizationError(
                    code=ErrorCode.PERMISSION_DENIED,
                    message="Forbidden",
                    required_permission=",".join(role.value for role in required),
                )
            )
        return Success(value=replace(ctx, state=GuardState.ROLE_CHECKED))

    return check


def throttle(
    throttler: RateLimitProtocol,
    *,
    scope: str,
    skip: Iterable[str] = (),
) -> Guard:
    """Build an admission-control step.

    Args:
        throttler: Rate limiter.
        scope: Counter namespace, usually the operation name.
        skip: Tier names this operation is exempt from.
    """
    skipped = tuple(skip)

    async def admit(ctx: GuardContext) -> Result[GuardContext, DomainError]:
        result = await throttler.hit(f"{scope}:{ctx.client_host}", skip=skipped)
        if isinstance(result, Failure):
            return result
        return Success(value=ctx)

    return admit


async def run_guards(
    ctx: GuardContext, guards: Sequence[Guard]
) -> Result[GuardContext, DomainError]:
    """Evaluate guard steps in order, stopping at the first failure.

    Args:
        ctx: Initial context.
        guards: Steps to run.

    Returns:
        Success(context in ALLOWED) or the first Failure.
    """
    for guard in guards:
        result = await guard(ctx)
        if isinstance(result, Failure):
            return result
        ctx = result.value
    return Success(value=replace(ctx, state=GuardState.ALLOWED))
