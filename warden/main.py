"""
Main FastAPI application entry point.

Mounts the GraphQL API (HTTP and WebSocket subscriptions) at ``/graphql``
plus two plain REST endpoints (``/`` and ``/health``).

The lifespan owns the Container: it is built on startup (unless one was
injected through ``create_app``) and closed on shutdown.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from strawberry.fastapi import GraphQLRouter
from strawberry.subscriptions import GRAPHQL_TRANSPORT_WS_PROTOCOL, GRAPHQL_WS_PROTOCOL

from warden import __version__
from warden.core.config import Settings, get_settings
from warden.core.container import Container, build_container
from warden.presentation.graphql import get_context, schema


def create_app(
    settings: Settings | None = None,
    container: Container | None = None,
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        settings: Settings to use (defaults to ``get_settings()``).
        container: Pre-built container. When given it is attached
            immediately and the caller stays responsible for closing it.

    Returns:
        Configured FastAPI application.
    """
    settings = settings or (container.settings if container else get_settings())

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Application lifespan context manager.

        Handles startup and shutdown events:
        - Startup: build the container when none was injected
        - Shutdown: close database and Redis connections we own
        """
        owned = getattr(app.state, "container", None) is None
        if owned:
            app.state.container = build_container(settings)

        app.state.container.logger.info(
            "application_started",
            environment=settings.environment.value,
            version=__version__,
        )

        yield

        app.state.container.logger.info("application_stopping")
        if owned:
            await app.state.container.aclose()

    app = FastAPI(
        title=settings.app_name,
        description="User management and authentication GraphQL API",
        version=settings.app_version,
        debug=settings.debug,
        lifespan=lifespan,
    )
    if container is not None:
        app.state.container = container

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    graphql_router: GraphQLRouter = GraphQLRouter(
        schema,
        context_getter=get_context,
        graphql_ide="graphiql" if settings.debug else None,
        subscription_protocols=[GRAPHQL_TRANSPORT_WS_PROTOCOL, GRAPHQL_WS_PROTOCOL],
    )
    app.include_router(graphql_router, prefix="/graphql")

    @app.get("/")
    async def root() -> dict[str, str]:
        """
        Root endpoint - basic status.

        Returns:
            dict: Service name, status and version.
        """
        return {
            "message": settings.app_name,
            "status": "operational",
            "version": __version__,
        }

    @app.get("/health")
    async def health(request: Request) -> JSONResponse:
        """
        Health check endpoint for monitoring and load balancers.

        Returns:
            JSONResponse: 200 when the database answers, 503 otherwise.
        """
        database = request.app.state.container.database
        if await database.check_connection():
            return JSONResponse(content={"status": "healthy", "database": "up"})
        return JSONResponse(
            status_code=503,
            content={"status": "unhealthy", "database": "down"},
        )

    return app


app = create_app()
