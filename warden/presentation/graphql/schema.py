"""GraphQL schema: queries, mutations and subscriptions.

Every resolver follows the same shape:

1. ``authorize`` with the operation's guard chain (throttle first)
2. open an operation-scoped session and build the handler
3. ``unwrap`` the handler Result (failures become GraphQL errors)
4. publish the entity on the subscription broker where applicable
"""

from collections.abc import AsyncGenerator
from uuid import UUID

import strawberry
from graphql import GraphQLError
from strawberry.types import Info

from warden.application.commands import (
    CreateLog,
    CreateUser,
    DeleteUser,
    LoginUser,
    LogoutUser,
    RegisterUser,
    UpdateUser,
)
from warden.application.queries import GetLog, GetUser, ListLogs, ListUsers
from warden.domain.enums import LogType, PublishTopic, UserRole, UserType
from warden.presentation.graphql.context import GraphQLContext
from warden.presentation.graphql.errors import unwrap
from warden.presentation.graphql.guards import (
    decode_connection_claims,
    extract_token,
    require_roles,
    throttle,
    verify_claims,
)
from warden.presentation.graphql.types import (
    AuthNode,
    CreateLogInput,
    CreateUserInput,
    LogNode,
    LoginInput,
    LogTypeEnum,
    RegisterInput,
    UpdateUserInput,
    UserNode,
    UserTypeEnum,
    UserWhereUniqueInput,
)

# User management endpoints are exempt from the 1-second burst tier.
USER_OPS_SKIP = ("short",)


def _context(info: Info) -> GraphQLContext:
    return info.context


def _parse_id(value: strawberry.ID | str, field: str = "id") -> UUID:
    try:
        return UUID(str(value))
    except ValueError:
        raise GraphQLError(
            f"{field} must be a UUID",
            extensions={"code": "BAD_USER_INPUT", "field": field},
        ) from None


def _authenticated(ctx: GraphQLContext, scope: str, skip: tuple[str, ...] = ()):
    container = ctx.container
    return [
        throttle(container.throttler, scope=scope, skip=skip),
        extract_token,
        verify_claims(container.token_service),
    ]


def _where_to_query(where: UserWhereUniqueInput) -> GetUser:
    if where.id is not None:
        return GetUser(user_id=_parse_id(where.id))
    return GetUser(email=where.email)


@strawberry.type
class Query:
    @strawberry.field(description="The caller's own account.")
    async def me(self, info: Info) -> UserNode:
        ctx = _context(info)
        claims = await ctx.authenticate("me", _authenticated(ctx, "me", USER_OPS_SKIP))

        async with ctx.session() as session:
            handler = ctx.container.get_user_handler(session)
            user = unwrap(await handler.handle(GetUser(user_id=claims.user_id)))
        return UserNode.from_domain(user)

    @strawberry.field(description="One user by id or email. Requires ROLE_ADMIN.")
    async def user(self, info: Info, where: UserWhereUniqueInput) -> UserNode:
        ctx = _context(info)
        await ctx.authorize(
            "user",
            [
                *_authenticated(ctx, "user", USER_OPS_SKIP),
                require_roles(UserRole.ROLE_ADMIN),
            ],
        )
        async with ctx.session() as session:
            handler = ctx.container.get_user_handler(session)
            user = unwrap(await handler.handle(_where_to_query(where)))
        return UserNode.from_domain(user)

    @strawberry.field(description="Paginated user list. Requires ROLE_USER.")
    async def users(
        self,
        info: Info,
        skip: int = 0,
        take: int | None = None,
        type: UserTypeEnum | None = None,
    ) -> list[UserNode]:
        ctx = _context(info)
        await ctx.authorize(
            "users",
            [
                *_authenticated(ctx, "users", USER_OPS_SKIP),
                require_roles(UserRole.ROLE_USER),
            ],
        )
        async with ctx.session() as session:
            handler = ctx.container.list_users_handler(session)
            users = unwrap(
                await handler.handle(
                    ListUsers(
                        skip=skip,
                        take=take,
                        user_type=UserType(type) if type is not None else None,
                    )
                )
            )
        return [UserNode.from_domain(user) for user in users]

    @strawberry.field(description="Stored log records, newest first.")
    async def logs(
        self,
        info: Info,
        skip: int = 0,
        take: int | None = None,
        type: LogTypeEnum | None = None,
    ) -> list[LogNode]:
        ctx = _context(info)
        await ctx.authorize("logs", _authenticated(ctx, "logs"))
        async with ctx.session() as session:
            handler = ctx.container.list_logs_handler(session)
            records = unwrap(
                await handler.handle(
                    ListLogs(
                        skip=skip,
                        take=take,
                        log_type=LogType(type) if type is not None else None,
                    )
                )
            )
        return [LogNode.from_domain(record) for record in records]

    @strawberry.field(description="One stored log record.")
    async def log(self, info: Info, id: strawberry.ID) -> LogNode:
        ctx = _context(info)
        await ctx.authorize("log", _authenticated(ctx, "log"))
        async with ctx.session() as session:
            handler = ctx.container.get_log_handler(session)
            record = unwrap(await handler.handle(GetLog(log_id=_parse_id(id))))
        return LogNode.from_domain(record)


@strawberry.type
class Mutation:
    @strawberry.mutation
    async def login(self, info: Info, login_input: LoginInput) -> AuthNode:
        ctx = _context(info)
        await ctx.authorize("login", [throttle(ctx.container.throttler, scope="login")])
        async with ctx.session() as session:
            handler = ctx.container.login_handler(session)
            payload = unwrap(
                await handler.handle(
                    LoginUser(email=login_input.email, password=login_input.password)
                )
            )
        return AuthNode.from_domain(payload)

    @strawberry.mutation
    async def register(self, info: Info, register_input: RegisterInput) -> AuthNode:
        ctx = _context(info)
        await ctx.authorize(
            "register", [throttle(ctx.container.throttler, scope="register")]
        )
        async with ctx.session() as session:
            handler = ctx.container.register_handler(session)
            payload = unwrap(
                await handler.handle(
                    RegisterUser(
                        email=register_input.email,
                        password=register_input.password,
                        profile=register_input.profile.to_domain()
                        if register_input.profile
                        else None,
                    )
                )
            )
        return AuthNode.from_domain(payload)

    @strawberry.mutation
    async def logout(self, info: Info) -> UserNode:
        ctx = _context(info)
        claims = await ctx.authenticate("logout", _authenticated(ctx, "logout"))

        async with ctx.session() as session:
            handler = ctx.container.logout_handler(session)
            user = unwrap(
                await handler.handle(
                    LogoutUser(user_id=claims.user_id, email=claims.email)
                )
            )
        await ctx.container.broker.publish(PublishTopic.USER_LOGOUT, user)
        return UserNode.from_domain(user)

    @strawberry.mutation(description="Requires ROLE_ADMIN.")
    async def create_user(self, info: Info, data: CreateUserInput) -> UserNode:
        ctx = _context(info)
        await ctx.authorize(
            "createUser",
            [
                *_authenticated(ctx, "createUser", USER_OPS_SKIP),
                require_roles(UserRole.ROLE_ADMIN),
            ],
        )
        async with ctx.session() as session:
            handler = ctx.container.create_user_handler(session)
            user = unwrap(
                await handler.handle(
                    CreateUser(
                        email=data.email,
                        password=data.password,
                        user_type=UserType(data.type),
                        roles=frozenset(UserRole(r) for r in data.roles)
                        if data.roles is not None
                        else None,
                        profile=data.profile.to_domain() if data.profile else None,
                    )
                )
            )
        await ctx.container.broker.publish(PublishTopic.USER_CREATED, user)
        return UserNode.from_domain(user)

    @strawberry.mutation(description="Requires ROLE_ADMIN.")
    async def update_user(
        self, info: Info, where: UserWhereUniqueInput, data: UpdateUserInput
    ) -> UserNode:
        ctx = _context(info)
        await ctx.authorize(
            "updateUser",
            [
                *_authenticated(ctx, "updateUser", USER_OPS_SKIP),
                require_roles(UserRole.ROLE_ADMIN),
            ],
        )
        async with ctx.session() as session:
            target = unwrap(
                await ctx.container.get_user_handler(session).handle(
                    _where_to_query(where)
                )
            )
            handler = ctx.container.update_user_handler(session)
            user = unwrap(
                await handler.handle(
                    UpdateUser(
                        user_id=target.id,
                        email=data.email,
                        password=data.password,
                        user_type=UserType(data.type) if data.type is not None else None,
                        roles=frozenset(UserRole(r) for r in data.roles)
                        if data.roles is not None
                        else None,
                        profile=data.profile.to_domain() if data.profile else None,
                    )
                )
            )
        await ctx.container.broker.publish(PublishTopic.USER_UPDATED, user)
        return UserNode.from_domain(user)

    @strawberry.mutation(description="Requires ROLE_ADMIN.")
    async def delete_user(self, info: Info, where: UserWhereUniqueInput) -> UserNode:
        ctx = _context(info)
        await ctx.authorize(
            "deleteUser",
            [
                *_authenticated(ctx, "deleteUser", USER_OPS_SKIP),
                require_roles(UserRole.ROLE_ADMIN),
            ],
        )
        async with ctx.session() as session:
            target = unwrap(
                await ctx.container.get_user_handler(session).handle(
                    _where_to_query(where)
                )
            )
            handler = ctx.container.delete_user_handler(session)
            user = unwrap(await handler.handle(DeleteUser(user_id=target.id)))
        await ctx.container.broker.publish(PublishTopic.USER_DELETED, user)
        return UserNode.from_domain(user)

    @strawberry.mutation
    async def create_log(self, info: Info, data: CreateLogInput) -> LogNode:
        ctx = _context(info)
        await ctx.authorize("createLog", _authenticated(ctx, "createLog"))
        async with ctx.session() as session:
            handler = ctx.container.create_log_handler(session)
            record = unwrap(await handler.handle(CreateLog(data=data.to_data())))
        await ctx.container.broker.publish(PublishTopic.LOG_CREATED, record)
        return LogNode.from_domain(record)


async def _user_stream(
    ctx: GraphQLContext, topic: PublishTopic
) -> AsyncGenerator[UserNode, None]:
    async with ctx.container.broker.subscribe(topic) as stream:
        async for user in stream:
            yield UserNode.from_domain(user)


def _admin_subscription_guards(ctx: GraphQLContext):
    # Verified claims pass through decode_connection_claims unchanged.
    return [
        extract_token,
        verify_claims(ctx.container.token_service),
        decode_connection_claims(ctx.container.token_service),
        require_roles(UserRole.ROLE_ADMIN),
    ]


@strawberry.type
class Subscription:
    @strawberry.subscription(description="Users created by administrators.")
    async def user_created(self, info: Info) -> AsyncGenerator[UserNode, None]:
        ctx = _context(info)
        await ctx.authorize("userCreated", _admin_subscription_guards(ctx))
        async for user in _user_stream(ctx, PublishTopic.USER_CREATED):
            yield user

    @strawberry.subscription(description="Users updated by administrators.")
    async def user_updated(self, info: Info) -> AsyncGenerator[UserNode, None]:
        ctx = _context(info)
        await ctx.authorize("userUpdated", _admin_subscription_guards(ctx))
        async for user in _user_stream(ctx, PublishTopic.USER_UPDATED):
            yield user

    @strawberry.subscription(description="Users deleted by administrators.")
    async def user_deleted(self, info: Info) -> AsyncGenerator[UserNode, None]:
        ctx = _context(info)
        await ctx.authorize("userDeleted", _admin_subscription_guards(ctx))
        async for user in _user_stream(ctx, PublishTopic.USER_DELETED):
            yield user

    @strawberry.subscription(description="Users that logged out.")
    async def user_logout(self, info: Info) -> AsyncGenerator[UserNode, None]:
        ctx = _context(info)
        await ctx.authorize(
            "userLogout",
            [extract_token, verify_claims(ctx.container.token_service)],
        )
        async for user in _user_stream(ctx, PublishTopic.USER_LOGOUT):
            yield user

    @strawberry.subscription(description="Log records as they are stored.")
    async def log_created(self, info: Info) -> AsyncGenerator[LogNode, None]:
        ctx = _context(info)
        async with ctx.container.broker.subscribe(PublishTopic.LOG_CREATED) as stream:
            async for record in stream:
                yield LogNode.from_domain(record)


schema = strawberry.Schema(query=Query, mutation=Mutation, subscription=Subscription)
