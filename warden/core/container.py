"""Composition root.

``build_container()`` creates every process-wide collaborator exactly once
and wires the log listener onto the event bus. The FastAPI lifespan owns
the resulting Container (``app.state.container``) and closes it on
shutdown; nothing here is a module-level global.

Request-scoped objects (repositories, handlers) are built per operation
from a database session through the ``*_handler`` factory methods.

Usage:
    container = build_container(get_settings())
    async with container.database.get_session() as session:
        handler = container.login_handler(session)
        result = await handler.handle(LoginUser(email=..., password=...))
    await container.aclose()
"""

from dataclasses import dataclass

from redis.asyncio import Redis
from sqlalchemy.ext.asyncio import AsyncSession

from warden.application.commands.handlers import (
    CreateLogHandler,
    CreateUserHandler,
    DeleteUserHandler,
    LoginUserHandler,
    LogoutUserHandler,
    RegisterUserHandler,
    UpdateUserHandler,
)
from warden.application.queries.handlers import (
    GetLogHandler,
    GetUserHandler,
    ListLogsHandler,
    ListUsersHandler,
)
from warden.core.config import Settings, get_settings
from warden.domain.events import CreateLogEvent
from warden.domain.protocols import LoggerProtocol, RateLimitProtocol
from warden.domain.value_objects import ThrottleTier
from warden.infrastructure.events import InMemoryEventBus
from warden.infrastructure.events.handlers import LogEventHandler
from warden.infrastructure.logging import ConsoleAdapter
from warden.infrastructure.persistence import Database
from warden.infrastructure.persistence.repositories import (
    LogRepository,
    UserRepository,
)
from warden.infrastructure.pubsub import InMemorySubscriptionBroker
from warden.infrastructure.rate_limit import NoopThrottler, RedisThrottler
from warden.infrastructure.security import BcryptPasswordService, JWTService


@dataclass(kw_only=True)
class Container:
    """Long-lived collaborators shared by every request.

    Attributes:
        settings: Application settings.
        logger: Structured logger.
        database: Engine and session factory.
        event_bus: Domain event bus (log events).
        broker: Subscription broker (GraphQL subscriptions).
        password_service: Password hashing.
        token_service: Access token issuer/verifier.
        throttler: Admission control.
        log_listener: Handler wired to ``create.log``.
        redis: Redis client backing the throttler, if any.
    """

    settings: Settings
    logger: LoggerProtocol
    database: Database
    event_bus: InMemoryEventBus
    broker: InMemorySubscriptionBroker
    password_service: BcryptPasswordService
    token_service: JWTService
    throttler: RateLimitProtocol
    log_listener: LogEventHandler
    redis: Redis | None = None

    # Command handlers

    def login_handler(self, session: AsyncSession) -> LoginUserHandler:
        return LoginUserHandler(
            user_repo=UserRepository(session),
            password_service=self.password_service,
            token_service=self.token_service,
            event_bus=self.event_bus,
        )

    def register_handler(self, session: AsyncSession) -> RegisterUserHandler:
        return RegisterUserHandler(
            user_repo=UserRepository(session),
            password_service=self.password_service,
            token_service=self.token_service,
            event_bus=self.event_bus,
        )

    def logout_handler(self, session: AsyncSession) -> LogoutUserHandler:
        return LogoutUserHandler(user_repo=UserRepository(session))

    def create_user_handler(self, session: AsyncSession) -> CreateUserHandler:
        return CreateUserHandler(
            user_repo=UserRepository(session),
            password_service=self.password_service,
            event_bus=self.event_bus,
        )

    def update_user_handler(self, session: AsyncSession) -> UpdateUserHandler:
        return UpdateUserHandler(
            user_repo=UserRepository(session),
            password_service=self.password_service,
            event_bus=self.event_bus,
        )

    def delete_user_handler(self, session: AsyncSession) -> DeleteUserHandler:
        return DeleteUserHandler(user_repo=UserRepository(session))

    def create_log_handler(self, session: AsyncSession) -> CreateLogHandler:
        return CreateLogHandler(log_repo=LogRepository(session))

    # Query handlers

    def get_user_handler(self, session: AsyncSession) -> GetUserHandler:
        return GetUserHandler(user_repo=UserRepository(session))

    def list_users_handler(self, session: AsyncSession) -> ListUsersHandler:
        return ListUsersHandler(user_repo=UserRepository(session))

    def get_log_handler(self, session: AsyncSession) -> GetLogHandler:
        return GetLogHandler(log_repo=LogRepository(session))

    def list_logs_handler(self, session: AsyncSession) -> ListLogsHandler:
        return ListLogsHandler(log_repo=LogRepository(session))

    async def aclose(self) -> None:
        """Release connections held by the container."""
        await self.database.close()
        if self.redis is not None:
            await self.redis.aclose()


def build_container(
    settings: Settings | None = None,
    *,
    database: Database | None = None,
    redis_client: Redis | None = None,
    logger: LoggerProtocol | None = None,
) -> Container:
    """Create and wire all process-wide collaborators.

    Args:
        settings: Settings to use (defaults to ``get_settings()``).
        database: Pre-built Database (tests pass a SQLite one).
        redis_client: Pre-built Redis client (tests pass fakeredis).
        logger: Pre-built logger.

    Returns:
        Container with the log listener subscribed to ``create.log``.
    """
    settings = settings or get_settings()

    logger = logger or ConsoleAdapter(
        use_json=settings.use_json_logs, level=settings.log_level
    )
    database = database or Database(settings.database_url, echo=settings.db_echo)
    event_bus = InMemoryEventBus(logger=logger, strict=settings.events_strict_mode)
    broker = InMemorySubscriptionBroker(logger=logger)

    throttler: RateLimitProtocol
    redis = None
    if settings.rate_limit_enabled:
        redis = redis_client or Redis.from_url(settings.redis_url)
        throttler = RedisThrottler(
            redis_client=redis,
            tiers=[
                ThrottleTier(name=name, limit=limit, window_seconds=window)
                for name, limit, window in settings.throttle_tiers
            ],
            logger=logger,
        )
    else:
        throttler = NoopThrottler()

    log_listener = LogEventHandler(logger=logger, database=database, broker=broker)
    event_bus.subscribe(CreateLogEvent.channel, log_listener.handle_create_log)

    logger.info(
        "container_built",
        environment=settings.environment.value,
        rate_limit_enabled=settings.rate_limit_enabled,
        events_strict_mode=settings.events_strict_mode,
    )

    return Container(
        settings=settings,
        logger=logger,
        database=database,
        event_bus=event_bus,
        broker=broker,
        password_service=BcryptPasswordService(cost_factor=settings.bcrypt_rounds),
        token_service=JWTService(
            secret_key=settings.secret_key,
            expiration_minutes=settings.access_token_expire_minutes,
            algorithm=settings.algorithm,
        ),
        throttler=throttler,
        log_listener=log_listener,
        redis=redis,
    )
