"""GraphQL request context.

One GraphQLContext is created per HTTP request and per WebSocket
connection. It exposes the process-wide Container plus the transport
details guards need (headers, connection parameters, client address).
"""

from collections.abc import AsyncIterator, Mapping, Sequence
from contextlib import asynccontextmanager
from typing import Any

from fastapi.requests import HTTPConnection
from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncSession
from strawberry.fastapi import BaseContext

from warden.core.container import Container
from warden.core.enums import ErrorCode
from warden.core.errors import AuthenticationError
from warden.core.result import Failure
from warden.domain.errors import AuthenticationError as TokenFailure
from warden.domain.value_objects import TokenClaims
from warden.presentation.graphql.errors import (
    database_unavailable_error,
    to_graphql_error,
)
from warden.presentation.graphql.guards import (
    Guard,
    GuardContext,
    GuardState,
    run_guards,
)


class GraphQLContext(BaseContext):
    """Context object available as ``info.context`` in resolvers."""

    def __init__(self, container: Container) -> None:
        super().__init__()
        self.container = container

    @property
    def headers(self) -> Mapping[str, str]:
        """Request headers (WebSocket: upgrade request headers)."""
        if self.request is None:
            return {}
        return self.request.headers

    @property
    def client_host(self) -> str:
        """Remote address of the caller."""
        if self.request is None or self.request.client is None:
            return "unknown"
        return self.request.client.host

    @property
    def transport_params(self) -> Mapping[str, Any] | None:
        """WebSocket connection-init parameters, if any."""
        params = getattr(self, "connection_params", None)
        return params if isinstance(params, Mapping) else None

    async def authorize(self, operation: str, guards: Sequence[Guard]) -> GuardContext:
        """Run a guard chain for ``operation``.

        Returns:
            The allowed GuardContext (claims attached when verified).

        Raises:
            GraphQLError: When a step denies the call.
        """
        ctx = GuardContext.from_transport(
            headers=self.headers,
            connection_params=self.transport_params,
            client_host=self.client_host,
            operation=operation,
        )
        result = await run_guards(ctx, guards)
        if isinstance(result, Failure):
            self.container.logger.info(
                "guard_denied",
                operation=operation,
                state=GuardState.DENIED.value,
                reason=result.error.code.value,
                client_host=ctx.client_host,
            )
            raise to_graphql_error(result.error)
        return result.value

    async def authenticate(
        self, operation: str, guards: Sequence[Guard]
    ) -> TokenClaims:
        """Run a guard chain and return the caller's claims.

        Raises:
            GraphQLError: When a step denies the call, or UNAUTHENTICATED
                when the chain allowed it without attaching claims.
        """
        guard = await self.authorize(operation, guards)
        if guard.claims is None:
            raise to_graphql_error(
                AuthenticationError(
                    code=ErrorCode.TOKEN_MISSING,
                    message="Unauthorized",
                    details={"reason": TokenFailure.MISSING_TOKEN},
                )
            )
        return guard.claims

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Operation-scoped database session.

        Driver and connection faults are logged and replaced by a generic
        INTERNAL_SERVER_ERROR; their messages never reach the client.
        """
        try:
            async with self.container.database.get_session() as session:
                yield session
        except DBAPIError as exc:
            self.container.logger.error("database_error", error=exc)
            raise database_unavailable_error() from exc


async def get_context(connection: HTTPConnection) -> GraphQLContext:
    """FastAPI dependency used as the GraphQL router's context getter."""
    return GraphQLContext(container=connection.app.state.container)
